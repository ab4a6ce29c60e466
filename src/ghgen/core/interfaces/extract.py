from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class MarkerConventionProtocol(Protocol):
    """Recognizer for the filename-marker + fenced-block convention.

    The extractor's state machine only asks these questions; the lexemes
    themselves live in the implementation.
    """

    def match_marker(self, line: str) -> Optional[str]:
        """Return the file name if `line` is a marker line, else None."""
        ...

    def match_fence_open(self, line: str) -> Optional[str]:
        """Return the opening fence token if `line` opens a block, else None."""
        ...

    def is_fence_close(self, line: str, fence: str) -> bool:
        """Return True if `line` closes a block opened with `fence`."""
        ...

    def instructions(self) -> str:
        """Describe the convention to the model (rendered into templates)."""
        ...
