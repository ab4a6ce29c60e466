"""
conventions – Concrete marker/fence recognizers for the response extractor.

`MarkdownFileConvention` (the default) recognises:

    FILE: path/to/file.ext
    ```python
    ...contents...
    ```

Marker lexeme
    A line whose stripped text starts with the configured prefix (default
    ``FILE:``) followed by a non-empty path. Markdown emphasis around the
    line (``**FILE: x**``, ``### FILE: x``) and backticks or quotes around
    the path are tolerated.

Fence lexemes
    An opening fence is three or more backticks or tildes, optionally
    followed by an info string. A closing fence uses the same character, is
    at least as long as the opener and carries nothing else.
"""

from __future__ import annotations

import re
from typing import Optional

from ghgen.constants import FILE_MARKER
from ghgen.core.interfaces.extract import MarkerConventionProtocol

_FENCE_OPEN_RX = re.compile(r"^\s{0,3}(?P<fence>`{3,}|~{3,})(?P<info>[^`]*)$")
_DECORATION = "*#> \t"
_PATH_QUOTES = "`'\""


class MarkdownFileConvention(MarkerConventionProtocol):
    """Filename marker line followed by a Markdown fenced block."""

    def __init__(self, *, marker: str = FILE_MARKER) -> None:
        if not marker.strip():
            raise ValueError("marker must be non-empty")
        self._marker = marker.strip()

    @property
    def marker(self) -> str:
        return self._marker

    def match_marker(self, line: str) -> Optional[str]:
        s = line.strip().strip(_DECORATION)
        if not s.startswith(self._marker):
            return None
        name = s[len(self._marker):].strip().strip("*").strip(_PATH_QUOTES).strip()
        return name or None

    def match_fence_open(self, line: str) -> Optional[str]:
        m = _FENCE_OPEN_RX.match(line.rstrip("\r\n"))
        return m.group("fence") if m else None

    def is_fence_close(self, line: str, fence: str) -> bool:
        s = line.strip()
        return len(s) >= len(fence) and set(s) == {fence[0]}

    def instructions(self) -> str:
        return (
            "Respond with the complete contents of every file you create or change. "
            f"Put each file on its own, preceded by a line of the form `{self._marker} path/to/file` "
            "(path relative to the project root) and wrapped in a fenced code block:\n\n"
            f"{self._marker} src/example.py\n"
            "```python\n"
            "print('hello')\n"
            "```\n\n"
            "Do not abbreviate file contents."
        )
