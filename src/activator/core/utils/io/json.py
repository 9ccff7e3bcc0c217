"""JSON read helper with advisory locks."""
from __future__ import annotations

import fcntl
import json
from pathlib import Path
from typing import Any

_MISSING = object()  # Sentinel for unset default


def read_json(file_path: Path | str, *, default: Any = _MISSING) -> Any:
    """Read JSON with a shared lock.

    Args:
        file_path: Path to JSON file
        default: Value to return if file doesn't exist (optional).
                 If not provided, FileNotFoundError is raised.

    Returns:
        Parsed JSON data, or ``default`` if file doesn't exist

    Raises:
        FileNotFoundError: If the file does not exist and no default is provided
        json.JSONDecodeError: If the file is not valid JSON
    """
    path = Path(file_path)
    if not path.exists():
        if default is not _MISSING:
            return default
        raise FileNotFoundError(f"JSON file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        fcntl.flock(f.fileno(), fcntl.LOCK_SH)
        try:
            return json.load(f)
        finally:
            fcntl.flock(f.fileno(), fcntl.LOCK_UN)


__all__ = ["read_json"]
