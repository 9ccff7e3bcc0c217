"""Phase timing for planning runs.

Spans are no-ops unless a ``Profiler`` has been enabled for the current
context, so the planner can be instrumented freely.

Example:
    profiler = Profiler()
    with enable_profiler(profiler):
        controller.run()
    print(profiler.summary_ms())
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any, Dict, Iterator, List, Optional


_ACTIVE_PROFILER: ContextVar["Profiler | None"] = ContextVar("_ACTIVE_PROFILER", default=None)


@dataclass(frozen=True)
class PhaseSpan:
    name: str
    duration_ms: float
    depth: int
    meta: Dict[str, Any] = field(default_factory=dict)


class Profiler:
    """Records nested phase spans in completion order."""

    def __init__(self) -> None:
        self._spans: List[PhaseSpan] = []
        self._depth = 0

    @property
    def spans(self) -> List[PhaseSpan]:
        return list(self._spans)

    def names(self) -> List[str]:
        return [s.name for s in self._spans]

    @contextmanager
    def span(self, name: str, **meta: Any) -> Iterator[None]:
        started = perf_counter()
        depth = self._depth
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1
            elapsed = (perf_counter() - started) * 1000.0
            self._spans.append(PhaseSpan(name=name, duration_ms=elapsed, depth=depth, meta=dict(meta)))

    def summary_ms(self) -> Dict[str, float]:
        totals: Dict[str, float] = {}
        for s in self._spans:
            totals[s.name] = totals.get(s.name, 0.0) + s.duration_ms
        return totals


@contextmanager
def enable_profiler(profiler: Profiler) -> Iterator[Profiler]:
    token = _ACTIVE_PROFILER.set(profiler)
    try:
        yield profiler
    finally:
        _ACTIVE_PROFILER.reset(token)


@contextmanager
def span(name: str, **meta: Any) -> Iterator[None]:
    profiler = _ACTIVE_PROFILER.get()
    if profiler is None:
        yield
        return
    with profiler.span(name, **meta):
        yield


def get_active_profiler() -> Optional[Profiler]:
    return _ACTIVE_PROFILER.get()


__all__ = ["Profiler", "PhaseSpan", "enable_profiler", "span", "get_active_profiler"]
