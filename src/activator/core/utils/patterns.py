"""Identifier shape matching.

All glob matching for item identifiers goes through this module so the
Direct and Environment collectors agree on what a usable identifier looks like.

Example:
    from activator.core.utils.patterns import matches_any_pattern

    if matches_any_pattern("akismet/akismet.php", ["*.php"]):
        print("plugin file")
"""
from __future__ import annotations

import fnmatch
from pathlib import PurePosixPath
from typing import Optional


def matches_any_pattern(identifier: str, patterns: list[str]) -> bool:
    """Check if ``identifier`` matches any pattern.

    Args:
        identifier: Identifier to check (a registry-relative path)
        patterns: List of glob patterns

    Returns:
        True if the identifier matches at least one pattern
    """
    return find_matching_pattern(identifier, patterns) is not None


def find_matching_pattern(identifier: str, patterns: list[str]) -> Optional[str]:
    """Find the first pattern matching ``identifier``.

    Returns:
        First matching pattern, or None if no match
    """
    if not patterns:
        return None

    # "*" accepts every identifier
    if "*" in patterns:
        return "*"

    for pattern in patterns:
        if _matches_pattern(identifier, pattern):
            return pattern
    return None


def _matches_pattern(identifier: str, pattern: str) -> bool:
    """Match one identifier against one pattern.

    Handles:
    - Direct fnmatch: "*.php" matches "hello.php"
    - Path prefix: "woo*/*.php" matches "woocommerce/woocommerce.php"
    - Filename only: "*.php" matches "akismet/akismet.php" via the file name
    - Brace groups: "*.{php,inc}"
    """
    path = PurePosixPath(identifier)
    for pat in _expand_braces(str(PurePosixPath(pattern))):
        if pat.startswith("/"):
            pat = pat[1:]

        if fnmatch.fnmatchcase(str(path), pat):
            return True
        if "/" not in pat and fnmatch.fnmatchcase(path.name, pat):
            return True

    return False


def _expand_braces(pattern: str) -> list[str]:
    """Expand a single-level brace group like 'foo.{a,b}' into ['foo.a', 'foo.b'].

    Supports multiple brace groups via recursion.
    If no braces are present, returns [pattern].
    """
    start = pattern.find("{")
    if start == -1:
        return [pattern]
    end = pattern.find("}", start + 1)
    if end == -1:
        return [pattern]

    before = pattern[:start]
    inside = pattern[start + 1 : end]
    after = pattern[end + 1 :]

    parts = [p.strip() for p in inside.split(",") if p.strip()]
    if len(parts) <= 1:
        return [pattern]

    out: list[str] = []
    for part in parts:
        out.extend(_expand_braces(f"{before}{part}{after}"))
    return out


__all__ = [
    "matches_any_pattern",
    "find_matching_pattern",
]
