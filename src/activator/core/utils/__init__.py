"""Shared helpers for the activator core (I/O, merging, patterns, profiling)."""
from __future__ import annotations

from .merge import deep_merge, merge_arrays
from .patterns import matches_any_pattern, find_matching_pattern
from .profiling import Profiler, enable_profiler, span

__all__ = [
    "deep_merge",
    "merge_arrays",
    "matches_any_pattern",
    "find_matching_pattern",
    "Profiler",
    "enable_profiler",
    "span",
]
