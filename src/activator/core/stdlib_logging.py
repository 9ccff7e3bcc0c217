"""Stdlib logging setup for host processes that want a dedicated log file."""
from __future__ import annotations

import logging
from pathlib import Path

_CONFIGURED_LOG_PATH: str | None = None
_ACTIVATOR_FILE_HANDLER: logging.Handler | None = None


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_stdlib_logging(*, log_path: Path, level: str = "INFO") -> None:
    """Send ``activator`` logs to ``log_path``.

    Idempotent per-process: if already configured for the same file, no-op.
    Switching to another path replaces the previously installed handler.
    """
    global _CONFIGURED_LOG_PATH, _ACTIVATOR_FILE_HANDLER

    resolved = str(Path(log_path).resolve())
    if _CONFIGURED_LOG_PATH == resolved and _ACTIVATOR_FILE_HANDLER is not None:
        return

    Path(resolved).parent.mkdir(parents=True, exist_ok=True)

    package_logger = logging.getLogger("activator")
    package_logger.setLevel(_level_from_name(level))

    if _ACTIVATOR_FILE_HANDLER is not None:
        package_logger.removeHandler(_ACTIVATOR_FILE_HANDLER)
        _ACTIVATOR_FILE_HANDLER.close()
        _ACTIVATOR_FILE_HANDLER = None

    fh = logging.FileHandler(resolved, encoding="utf-8")
    fh.setLevel(_level_from_name(level))
    fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    package_logger.addHandler(fh)

    _ACTIVATOR_FILE_HANDLER = fh
    _CONFIGURED_LOG_PATH = resolved


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove the installed file handler."""
    global _CONFIGURED_LOG_PATH, _ACTIVATOR_FILE_HANDLER
    if _ACTIVATOR_FILE_HANDLER is not None:
        logging.getLogger("activator").removeHandler(_ACTIVATOR_FILE_HANDLER)
        _ACTIVATOR_FILE_HANDLER.close()
    logging.getLogger("activator").setLevel(logging.NOTSET)
    _CONFIGURED_LOG_PATH = None
    _ACTIVATOR_FILE_HANDLER = None


__all__ = ["configure_stdlib_logging", "reset_stdlib_logging_for_tests"]
