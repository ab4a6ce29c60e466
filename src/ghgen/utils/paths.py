# src/ghgen/utils/paths.py
"""
paths – Small, centralized path helpers for ghgen.

Provides:
  • is_within_dir(path, parent)   – containment check after resolution
  • display_path(path, base)      – relative form for console messages
"""

from __future__ import annotations

import os
from pathlib import Path


def is_within_dir(path: Path, parent: Path) -> bool:
    """Return True if *path* is *parent* or contained inside it."""
    try:
        Path(path).resolve().relative_to(Path(parent).resolve())
        return True
    except ValueError:
        return False


def display_path(path: Path, base: Path) -> str:
    """Return *path* relative to *base* when possible, else as given."""
    try:
        return os.path.relpath(path, base)
    except ValueError:
        return str(path)
