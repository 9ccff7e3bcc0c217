"""Read helpers for configuration documents.

- JSON: read with a shared advisory lock
- YAML: read with optional error propagation
"""
from __future__ import annotations

from .json import read_json
from .yaml import read_yaml

__all__ = [
    "read_json",
    "read_yaml",
]
