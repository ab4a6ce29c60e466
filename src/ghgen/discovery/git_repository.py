from __future__ import annotations
"""Git lookups used while preparing a prompt.

The manager shells out to the `git` binary for three questions only:
- where is the repository root for a directory (root-relative includes);
- is a file committed at HEAD;
- what was its committed text.

A missing `git` binary or a directory outside any repository answers "no"
rather than raising; callers decide whether that is fatal.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional

from ghgen.core.interfaces.fs import GitRepositoryProtocol
from ghgen.logging.helpers import get_logger


class GitRepository(GitRepositoryProtocol):
    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        self._log = logger or get_logger('git')

    def _run(self, args: List[str], cwd: Path) -> Optional[str]:
        try:
            proc = subprocess.run(
                ['git', *args],
                cwd=str(cwd),
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except OSError as exc:
            self._log.debug('git unavailable (%s)', exc)
            return None
        if proc.returncode != 0:
            return None
        return proc.stdout.decode('utf-8', errors='replace')

    def find_root(self, start: Path) -> Optional[Path]:
        """Return the top-level directory of the repository containing *start*."""
        start = Path(start)
        cwd = start if start.is_dir() else start.parent
        if not cwd.exists():
            return None
        out = self._run(['rev-parse', '--show-toplevel'], cwd)
        if not out or not out.strip():
            return None
        return Path(out.strip()).resolve()

    def is_committed(self, path: Path) -> bool:
        path = Path(path).resolve()
        if not path.parent.exists():
            return False
        return self._run(['cat-file', '-e', f'HEAD:./{path.name}'], path.parent) is not None

    def show_head(self, path: Path) -> Optional[str]:
        """Return the HEAD version of *path*, or None when it is not committed."""
        path = Path(path).resolve()
        if not path.parent.exists():
            return None
        return self._run(['show', f'HEAD:./{path.name}'], path.parent)
