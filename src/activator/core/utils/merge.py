"""Deep merge utilities for layered settings.

Features:
- Recursive dictionary merging
- Array merging with override semantics:
  - Default: replace array entirely
  - Prefix with "+": append to existing array
  - Prefix with "=": explicit replace (same as default)
"""
from __future__ import annotations

from typing import Any, Dict, List


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge dictionaries without mutating inputs.

    Args:
        base: Base dictionary (lower priority)
        override: Override dictionary (higher priority)

    Returns:
        New merged dictionary

    Example:
        >>> base = {"a": 1, "b": {"c": 2}}
        >>> override = {"b": {"d": 3}}
        >>> deep_merge(base, override)
        {'a': 1, 'b': {'c': 2, 'd': 3}}
    """
    result: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        if key in result:
            if isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = deep_merge(result[key], value)
            elif isinstance(result[key], list) and isinstance(value, list):
                result[key] = merge_arrays(result[key], value)
            else:
                result[key] = value
        else:
            result[key] = value
    return result


def merge_arrays(base: List[Any], override: List[Any]) -> List[Any]:
    """Merge arrays with override semantics.

    Supports special prefixes in the first element:
    - "+" : Append override items (excluding prefix) to base
    - "=" : Replace base with override items (excluding prefix)
    - No prefix: Replace base entirely with override
    """
    if not override:
        return list(override)

    head = override[0]
    if head == "+":
        return list(base) + list(override[1:])
    if head == "=":
        return list(override[1:])
    return list(override)


__all__ = ["deep_merge", "merge_arrays"]
