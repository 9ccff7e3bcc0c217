"""Common collector machinery."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List

from ..defaults import DEFAULTS
from ..diagnostics import DiagnosticsSink, LoggingDiagnostics, WARNING, safe_record
from ..models import CollectedItem, CollectorKind


class BaseCollector(ABC):
    """A strategy that turns one configuration slice into plan candidates.

    Subclasses parse their slice once in ``__init__`` and produce fresh
    ``CollectedItem`` values on every ``collect()`` call. Anything that does
    not fit the expected shape is dropped with a diagnostic.
    """

    kind: CollectorKind

    def __init__(self, diagnostics: DiagnosticsSink | None = None) -> None:
        self.diagnostics: DiagnosticsSink = diagnostics or LoggingDiagnostics()

    @abstractmethod
    def collect(self) -> List[CollectedItem]:
        """Return plan candidates in configuration order."""
        ...

    def _diagnose(self, message: str, *, severity: str = WARNING) -> None:
        safe_record(self.diagnostics, f"[{type(self).__name__}] {message}", severity=severity)

    def _order_of(self, entry: Any, *, name: str) -> int:
        raw = entry.get("order", DEFAULTS.collected_order) if isinstance(entry, dict) else DEFAULTS.collected_order
        try:
            return int(raw)
        except (TypeError, ValueError):
            self._diagnose(f"{name}: invalid order {raw!r}, using {DEFAULTS.collected_order}.")
            return DEFAULTS.collected_order

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value})"


def entry_name(entry: Any) -> str:
    """Best-effort display name of an item entry for diagnostics."""
    if isinstance(entry, str) and entry.strip():
        return entry.strip()
    if isinstance(entry, dict):
        for key in ("file", "identifier"):
            value = entry.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return "(undefined)"


def as_list(value: Any) -> List[Any]:
    """Return ``value`` when it is a list, otherwise an empty list."""
    return list(value) if isinstance(value, (list, tuple)) else []


__all__ = ["BaseCollector", "as_list", "entry_name"]
