from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class GitRepositoryProtocol(Protocol):
    """Minimal git surface used to locate roots and committed file versions."""

    def find_root(self, start: Path) -> Optional[Path]:
        ...

    def is_committed(self, path: Path) -> bool:
        ...

    def show_head(self, path: Path) -> Optional[str]:
        ...
