"""Version constraint evaluation.

A constraint is ``[operator]version`` where operator is one of
``>=``, ``<=``, ``>``, ``<``, ``=``, ``==`` or ``!=`` and defaults to ``>=``.
Bounds with suffixes ("2.0.0-rc1") compare on their numeric components;
nothing in this module raises on bad input.
"""
from __future__ import annotations

import operator as _op
import re
from typing import Callable, Optional, Tuple

from .defaults import DEFAULTS

_CONSTRAINT_RE = re.compile(r"^\s*(>=|<=|==|!=|>|<|=)?\s*(\d+(?:\.\d+)*)\s*$")
_LOOSE_CONSTRAINT_RE = re.compile(r"^\s*(>=|<=|==|!=|>|<|=)?\s*(.+?)\s*$")
_LEADING_DIGITS_RE = re.compile(r"^\d+")

_COMPARATORS: dict[str, Callable[[int, int], bool]] = {
    ">=": _op.ge,
    "<=": _op.le,
    ">": _op.gt,
    "<": _op.lt,
    "=": _op.eq,
    "==": _op.eq,
    "!=": _op.ne,
}


def parse_version(version: str) -> Tuple[int, ...]:
    """Split a dotted version into integer components.

    Each component contributes its leading digits; components without digits
    count as 0 ("1.2-beta" -> (1, 2)).
    """
    parts = []
    for chunk in str(version).strip().split("."):
        match = _LEADING_DIGITS_RE.match(chunk.strip())
        parts.append(int(match.group(0)) if match else 0)
    return tuple(parts)


def compare_versions(left: str, right: str) -> int:
    """Return -1, 0 or 1; missing trailing components are treated as 0."""
    a = parse_version(left)
    b = parse_version(right)
    width = max(len(a), len(b))
    a = a + (0,) * (width - len(a))
    b = b + (0,) * (width - len(b))
    return (a > b) - (a < b)


def parse_constraint(constraint: str) -> Tuple[str, str]:
    """Return ``(operator, bound)`` for a constraint expression.

    A bound that is not purely numeric ("1.2.0-beta") keeps its operator and
    is passed through whole; ``parse_version`` later reads its leading digits.
    """
    match = _CONSTRAINT_RE.match(constraint) or _LOOSE_CONSTRAINT_RE.match(constraint)
    if match is None:
        return DEFAULTS.version_operator, constraint.strip()
    return match.group(1) or DEFAULTS.version_operator, match.group(2)


def satisfies(current: str, constraint: Optional[str]) -> bool:
    """Check ``current`` against ``constraint``; an empty constraint always passes."""
    if constraint is None or str(constraint).strip() == "":
        return True

    op, bound = parse_constraint(str(constraint))
    return _COMPARATORS[op](compare_versions(current, bound), 0)


__all__ = ["satisfies", "parse_constraint", "parse_version", "compare_versions"]
