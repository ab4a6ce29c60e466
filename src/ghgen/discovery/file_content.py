from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from ghgen.core.interfaces.fs import GitRepositoryProtocol
from ghgen.core.models import FileContent
from ghgen.exceptions import ConfigurationError
from ghgen.logging.helpers import get_logger, trace_io


class FileContentLoader:
    """Build `FileContent` records for files referenced by a prompt."""

    def __init__(self, git: GitRepositoryProtocol, *, logger: Optional[logging.Logger] = None) -> None:
        self._git = git
        self._log = logger or get_logger('files')

    def load(self, name: str, *, base: Path) -> FileContent:
        path = Path(name)
        if not path.is_absolute():
            path = base / path

        contents: Optional[str] = None
        if path.is_file():
            try:
                contents = path.read_text(encoding='utf-8')
            except (OSError, UnicodeDecodeError) as exc:
                raise ConfigurationError(f'cannot read included file {name}: {exc}') from exc
            trace_io(self._log, 'read included file', path=str(path))

        previous = self._git.show_head(path) if self._git.is_committed(path) else None
        return FileContent(name=name, contents=contents, previous_contents=previous)

    def load_many(
        self,
        names: Iterable[str],
        *,
        base: Path,
        exclude: Sequence[str] = (),
    ) -> List[FileContent]:
        """Load de-duplicated *names* minus *exclude*, dropping files that exist nowhere."""
        records: List[FileContent] = []
        for name in unique(names):
            if name in exclude:
                continue
            record = self.load(name, base=base)
            if record.meaningful:
                records.append(record)
            else:
                self._log.warning('⚠  %s not found on disk or in git – skipped', name)
        return records


def unique(items: Iterable[str]) -> List[str]:
    seen: set[str] = set()
    out: List[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            out.append(item)
    return out
