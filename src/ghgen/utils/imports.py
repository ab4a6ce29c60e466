from __future__ import annotations

"""
Utilities for dynamic imports.

Loads objects from string references formatted as "module.path:AttrName" or
"path/to/file.py:AttrName". Python templates are resolved through here.

Public API:
    - load_object_from_ref(ref, base=None): object
"""

import importlib
import importlib.util
from pathlib import Path
from typing import Any, Optional


def _load_module_from_file(path: Path):
    name = f"ghgen_dynamic_{path.stem}_{abs(hash(str(path)))}"
    spec = importlib.util.spec_from_file_location(name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load module from '{path}'.")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def load_object_from_ref(ref: str, base: Optional[Path] = None) -> Any:
    """Load an attribute from a module or a Python file.

    Args:
        ref: 'module.path:AttrName' or 'relative/or/absolute/file.py:AttrName'.
        base: Directory used to resolve relative file references.

    Returns:
        The attribute resolved from the given module.

    Raises:
        ImportError: If the reference is malformed or cannot be resolved.
    """
    module_name, sep, obj_name = (ref or '').rpartition(':')
    if not module_name or not sep or (not obj_name):
        raise ImportError(f"Invalid reference '{ref}'. Expected 'module.path:AttrName'.")

    try:
        if module_name.endswith('.py'):
            path = Path(module_name).expanduser()
            if not path.is_absolute() and base is not None:
                path = base / path
            module = _load_module_from_file(path)
        else:
            module = importlib.import_module(module_name)
    except Exception as exc:
        raise ImportError(f"Failed to import module '{module_name}': {exc}") from exc
    try:
        return getattr(module, obj_name)
    except AttributeError as exc:
        raise ImportError(f"Module '{module_name}' has no attribute '{obj_name}': {exc}") from exc
