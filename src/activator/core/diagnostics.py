"""Diagnostics sinks.

Every recoverable problem the planner meets (malformed entries, missing
items, version mismatches, pruned items) is reported through a sink.
Sinks are fire-and-forget: ``record`` never raises into the planner.
"""
from __future__ import annotations

import logging
from typing import List, Protocol, Tuple

logger = logging.getLogger(__name__)

LOG_PREFIX = "[PluginActivator]"

INFO = "info"
WARNING = "warning"
ERROR = "error"

_LEVELS = {
    INFO: logging.INFO,
    WARNING: logging.WARNING,
    ERROR: logging.ERROR,
}


class DiagnosticsSink(Protocol):
    """Receives human-readable diagnostics from a planning run."""

    def record(self, message: str, *, severity: str = INFO) -> None:
        ...


class LoggingDiagnostics:
    """Forward diagnostics to the ``activator.diagnostics`` logger."""

    def __init__(self, logger_name: str = "activator.diagnostics") -> None:
        self._logger = logging.getLogger(logger_name)

    def record(self, message: str, *, severity: str = INFO) -> None:
        try:
            self._logger.log(_LEVELS.get(severity, logging.INFO), f"{LOG_PREFIX} {message}")
        except Exception as exc:  # noqa: BLE001 - a sink must never fail its caller
            logger.debug(f"Diagnostics sink failed: {exc}")


class RecordingDiagnostics(LoggingDiagnostics):
    """Keep diagnostics in memory (and still forward them to logging).

    Used by host integrations that surface messages in an admin screen and
    by tests.
    """

    def __init__(self, logger_name: str = "activator.diagnostics") -> None:
        super().__init__(logger_name)
        self.entries: List[Tuple[str, str]] = []

    def record(self, message: str, *, severity: str = INFO) -> None:
        self.entries.append((severity, message))
        super().record(message, severity=severity)

    @property
    def messages(self) -> List[str]:
        return [m for _, m in self.entries]

    def by_severity(self, severity: str) -> List[str]:
        return [m for s, m in self.entries if s == severity]

    def clear(self) -> None:
        self.entries.clear()


def safe_record(sink: DiagnosticsSink, message: str, *, severity: str = INFO) -> None:
    """Record through ``sink`` without letting a misbehaving sink escape."""
    try:
        sink.record(message, severity=severity)
    except Exception as exc:  # noqa: BLE001 - a sink must never fail its caller
        logger.warning(f"Diagnostics sink {type(sink).__name__} raised: {exc}")


__all__ = [
    "DiagnosticsSink",
    "LoggingDiagnostics",
    "RecordingDiagnostics",
    "safe_record",
    "LOG_PREFIX",
    "INFO",
    "WARNING",
    "ERROR",
]
