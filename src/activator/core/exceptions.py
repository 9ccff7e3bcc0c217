from __future__ import annotations

from typing import Any, Dict, Mapping


class ActivatorError(Exception):
    """Base exception for the activation planner."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ConfigError(ActivatorError, ValueError):
    """Raised when an activation document cannot be read or has the wrong shape."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        key: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if path:
            ctx["path"] = path
        if key:
            ctx["key"] = key
        ActivatorError.__init__(self, message, context=ctx)
        ValueError.__init__(self, message)


class SettingsError(ActivatorError, ValueError):
    """Raised when engine settings are invalid (bad file, malformed override)."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ActivatorError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "ActivatorError",
    "ConfigError",
    "SettingsError",
]
