from __future__ import annotations

import logging

from activator.core.diagnostics import LoggingDiagnostics, RecordingDiagnostics, safe_record


def test_logging_sink_prefixes_messages(caplog) -> None:
    with caplog.at_level(logging.INFO, logger="activator.diagnostics"):
        LoggingDiagnostics().record("Item not found: a/a.php")

    assert caplog.records[-1].getMessage() == "[PluginActivator] Item not found: a/a.php"
    assert caplog.records[-1].levelno == logging.INFO


def test_severity_maps_to_log_level(caplog) -> None:
    with caplog.at_level(logging.INFO, logger="activator.diagnostics"):
        LoggingDiagnostics().record("boom", severity="error")

    assert caplog.records[-1].levelno == logging.ERROR


def test_recording_sink_keeps_entries() -> None:
    sink = RecordingDiagnostics()
    sink.record("one")
    sink.record("two", severity="warning")

    assert sink.messages == ["one", "two"]
    assert sink.by_severity("warning") == ["two"]

    sink.clear()
    assert sink.entries == []


def test_safe_record_swallows_sink_failures(caplog) -> None:
    class Broken:
        def record(self, message, *, severity="info"):
            raise RuntimeError("sink down")

    with caplog.at_level(logging.WARNING):
        safe_record(Broken(), "hello")

    assert any("sink down" in r.getMessage() for r in caplog.records)
