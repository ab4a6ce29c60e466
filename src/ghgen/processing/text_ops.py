"""
text_ops – Pure string transforms applied to prompt documents.

Every helper returns a new string; nothing is mutated in place.
"""

from __future__ import annotations

import difflib
import re

_FRONT_MATTER_RX = re.compile(r"\A---[ \t]*\r?\n(.*?\r?\n)?---[ \t]*(?:\r?\n|\Z)", re.S)


def split_front_matter(text: str) -> tuple[str, str]:
    """Return (front_matter, body). front_matter is '' when absent."""
    m = _FRONT_MATTER_RX.match(text)
    if not m:
        return "", text
    return m.group(1) or "", text[m.end():]


def remove_front_matter(text: str) -> str:
    return split_front_matter(text)[1]


def add_line_numbers(text: str) -> str:
    """Prefix each line with its 1-based number, e.g. '3: foo'."""
    return "\n".join(f"{i}: {line}" for i, line in enumerate(text.split("\n"), start=1))


def unified_diff(new: str, old: str, path: str) -> str:
    """Unified diff from *old* to *new*, labelled with *path*."""
    lines = difflib.unified_diff(
        old.splitlines(keepends=True),
        new.splitlines(keepends=True),
        fromfile=f"a/{path}",
        tofile=f"b/{path}",
    )
    return "".join(line if line.endswith("\n") else line + "\n" for line in lines)
