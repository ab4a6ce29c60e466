from __future__ import annotations

"""
include_expander – Recursive `include:<path>` directive expansion.

Each directive occurrence is replaced in place with the referenced file's
fully expanded text. Resolution rules:

  • relative paths resolve against the directory of the including file, or
    against the caller's working directory for top-level text;
  • paths starting with '/' resolve against the git project root, and a
    missing root is a ConfigurationError;
  • an unreadable file aborts the whole expansion (IncludeResolutionError);
  • a file that includes itself, directly or transitively, raises
    CyclicIncludeError. Including the same file from sibling branches is
    fine; only the active chain is tracked.
"""

import logging
import re
from pathlib import Path
from typing import Optional, Pattern, Tuple

from ghgen.constants import INCLUDE_TOKEN
from ghgen.core.interfaces.fs import GitRepositoryProtocol
from ghgen.discovery.git_repository import GitRepository
from ghgen.exceptions import ConfigurationError, CyclicIncludeError, IncludeResolutionError
from ghgen.logging.helpers import get_logger, trace_io

MISSING_GIT_ROOT = (
    "The include directive referred to a path relative to the project root "
    "(starting with a '/'). This is supported only in projects under git."
)


def build_directive_pattern(token: str = INCLUDE_TOKEN) -> Pattern[str]:
    """Compile the directive regex; the path runs until whitespace or a quote."""
    return re.compile(r"(?<![\w-])" + re.escape(token) + r"""([^\s"'`]+)""")


class IncludeExpander:
    """Inline `include:<path>` directives recursively."""

    def __init__(
        self,
        *,
        git: Optional[GitRepositoryProtocol] = None,
        token: str = INCLUDE_TOKEN,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._git = git or GitRepository()
        self._pattern = build_directive_pattern(token)
        self._log = logger or get_logger("include")

    def expand(self, text: str, origin_path: Optional[str | Path] = None, base_dir: Optional[str | Path] = None) -> str:
        """Return *text* with every directive replaced by its expanded file.

        Args:
            text: Text possibly containing directives.
            origin_path: File *text* was read from, if any.
            base_dir: Working directory used when there is no origin
                (defaults to the process working directory).
        """
        chain: Tuple[Path, ...] = ()
        if origin_path is not None:
            chain = (Path(origin_path).resolve(),)
        return self._expand(text, chain, Path(base_dir) if base_dir else Path.cwd())

    def _expand(self, text: str, chain: Tuple[Path, ...], base_dir: Path) -> str:
        out: list[str] = []
        pos = 0
        for match in self._pattern.finditer(text):
            out.append(text[pos:match.start()])
            out.append(self._include(match.group(1), chain, base_dir))
            pos = match.end()
        if pos == 0:
            return text
        out.append(text[pos:])
        return "".join(out)

    def _include(self, ref: str, chain: Tuple[Path, ...], base_dir: Path) -> str:
        origin_dir = chain[-1].parent if chain else base_dir
        full_path = self._resolve(ref, origin_dir)

        if full_path in chain:
            raise CyclicIncludeError([*chain, full_path])

        try:
            content = full_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise IncludeResolutionError(full_path, exc) from exc
        trace_io(self._log, "included file", path=str(full_path), depth=len(chain))

        return self._expand(content, (*chain, full_path), base_dir)

    def _resolve(self, ref: str, origin_dir: Path) -> Path:
        if ref.startswith("/"):
            root = self._git.find_root(origin_dir)
            if root is None:
                raise ConfigurationError(MISSING_GIT_ROOT)
            return (root / ref.lstrip("/")).resolve()
        return (origin_dir / ref).resolve()
