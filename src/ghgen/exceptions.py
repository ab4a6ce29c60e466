from __future__ import annotations

"""Error taxonomy for ghgen.

Every fatal condition raised by the pipeline derives from `GhgenError` so the
CLI can report it as a single line. Expected completion failures are *not*
raised by the client; they travel as `Err` values and only become a
`TransportError` at the orchestrator boundary.
"""

from pathlib import Path
from typing import Sequence


class GhgenError(Exception):
    """Base class for all ghgen errors."""


class ConfigurationError(GhgenError):
    """Missing credential, prompt, template, git root or invalid settings."""


class IncludeResolutionError(GhgenError):
    """An include directive referenced a file that could not be read."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f'failed to include file from path: {path}. Error: {cause}')


class CyclicIncludeError(GhgenError):
    """A file transitively includes itself."""

    def __init__(self, chain: Sequence[Path]) -> None:
        self.chain = tuple(chain)
        super().__init__('cyclic include: ' + ' -> '.join(str(p) for p in self.chain))


class MalformedResponseError(GhgenError):
    """The model response opened a file block that was never closed."""


class PathEscapeError(GhgenError):
    """An extracted file name resolves outside the base directory."""

    def __init__(self, name: str, base_dir: Path) -> None:
        self.name = name
        self.base_dir = base_dir
        super().__init__(f'refusing to write {name!r}: resolves outside {base_dir}')


class TransportError(GhgenError):
    """A completion came back as an `Err` value."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f'{code}: {message}')
