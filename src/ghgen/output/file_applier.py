from __future__ import annotations

"""Write extracted files under a base directory.

Policy:
    - Every target is resolved and checked before anything is written; a
      name escaping the base directory raises PathEscapeError and no file
      is touched.
    - Existing targets are never overwritten; they are reported with
      `generated=False`.
    - Missing parent directories are created.
    - An optional post-write command runs once in the base directory. A
      non-zero exit status is logged as a warning only.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from ghgen.core.models import ApplyResult, ExtractedFile
from ghgen.exceptions import PathEscapeError
from ghgen.logging.helpers import get_logger, trace_io
from ghgen.utils.paths import is_within_dir


class FileApplier:
    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        self._log = logger or get_logger("apply")

    def apply(
        self,
        base_dir: str | Path,
        files: Sequence[ExtractedFile],
        exec_command: Optional[str] = None,
    ) -> List[ApplyResult]:
        base = Path(base_dir).resolve()
        targets = [self._target(base, f.name) for f in files]

        results: List[ApplyResult] = []
        for extracted, target in zip(files, targets):
            if target.exists():
                results.append(ApplyResult(file=extracted.name, generated=False))
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(extracted.contents, encoding="utf-8")
            trace_io(self._log, "wrote file", path=str(target), chars=len(extracted.contents))
            results.append(ApplyResult(file=extracted.name, generated=True))

        if exec_command:
            self._run_command(exec_command, base)
        return results

    @staticmethod
    def _target(base: Path, name: str) -> Path:
        target = (base / name).resolve()
        if target == base or not is_within_dir(target, base):
            raise PathEscapeError(name, base)
        return target

    def _run_command(self, command: str, cwd: Path) -> Optional[int]:
        """Run *command* through the shell; return its exit status (None if it could not start)."""
        self._log.info("running %s", command)
        try:
            proc = subprocess.run(command, shell=True, cwd=str(cwd), check=False)
        except OSError as exc:
            self._log.warning("⚠  could not run %r: %s", command, exc)
            return None
        if proc.returncode != 0:
            self._log.warning("⚠  %r exited with status %d", command, proc.returncode)
        return proc.returncode
