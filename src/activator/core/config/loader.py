"""File-backed activation documents.

Each tenant has one document at ``<config_dir>/<tenant>.json`` (a ``.yaml``
or ``.yml`` file is accepted when no JSON file exists). Loading never
raises: a missing, unreadable or malformed document is reported through the
diagnostics sink and treated as ``{}``.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from ..defaults import DEFAULTS
from ..diagnostics import DiagnosticsSink, LoggingDiagnostics, WARNING, safe_record
from ..exceptions import ConfigError
from ..schemas.validation import validate_payload_safe
from ..utils.io import read_json, read_yaml

logger = logging.getLogger(__name__)

# Legacy document keys and the canonical key they map to.
KEY_ALIASES = {
    "filtered": "triggers",
    "settings": "predicates",
}


class ConfigSource(Protocol):
    def load(self, key: str) -> Dict[str, Any]:
        ...


def canonicalize_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``config`` with legacy keys renamed to canonical ones."""
    out = dict(config)
    for alias, canonical in KEY_ALIASES.items():
        if alias in out and canonical not in out:
            out[canonical] = out.pop(alias)
    return out


def normalize_plugin_entry(entry: Any) -> Optional[Dict[str, Any]]:
    """Fill plugin-style defaults into a direct list entry.

    Strings become ``{"file": entry, ...defaults}``; mappings keep their own
    values over the defaults; anything else yields ``None``.
    """
    defaults: Dict[str, Any] = {
        "required": DEFAULTS.required,
        "version": None,
        "order": DEFAULTS.spec_order,
    }
    if isinstance(entry, str):
        return {"file": entry, **defaults}
    if isinstance(entry, dict):
        return {**defaults, **entry}
    return None


class FileConfigSource:
    """Load per-tenant activation documents from a directory.

    Example:
        source = FileConfigSource(Path("/srv/site/private/plugin-config"))
        config = source.load("twentytwentyfive")
    """

    def __init__(
        self,
        config_dir: Path,
        *,
        diagnostics: DiagnosticsSink | None = None,
        validate_schema: bool = True,
    ) -> None:
        self.config_dir = Path(config_dir)
        self.diagnostics: DiagnosticsSink = diagnostics or LoggingDiagnostics()
        self.validate_schema = validate_schema

    def path_for(self, key: str) -> Path:
        """Return the document path for ``key`` (JSON preferred)."""
        if not key or "/" in key or "\\" in key or key in {".", ".."}:
            raise ConfigError(f"Invalid config key: {key!r}", key=key)

        json_path = self.config_dir / f"{key}.json"
        if json_path.exists():
            return json_path
        for ext in (".yaml", ".yml"):
            candidate = self.config_dir / f"{key}{ext}"
            if candidate.exists():
                return candidate
        return json_path

    def _read(self, key: str) -> Dict[str, Any]:
        path = self.path_for(key)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}", path=str(path), key=key)

        try:
            if path.suffix == ".json":
                data = read_json(path)
            else:
                data = read_yaml(path, default={}, raise_on_error=True)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"JSON decode error in {path}: {exc.msg}", path=str(path), key=key) from exc
        except OSError as exc:
            raise ConfigError(f"Failed to read config file: {path}", path=str(path), key=key) from exc
        except Exception as exc:  # yaml.YAMLError and friends
            raise ConfigError(f"Decode error in {path}: {exc}", path=str(path), key=key) from exc

        if not isinstance(data, dict):
            raise ConfigError(
                f"Config document must be a mapping, got {type(data).__name__}: {path}",
                path=str(path),
                key=key,
            )
        return data

    def _normalize(self, config: Dict[str, Any]) -> Dict[str, Any]:
        config = canonicalize_config(config)
        plugins = config.get("plugins")
        if not isinstance(plugins, list) or not plugins:
            return config

        normalized: List[Dict[str, Any]] = []
        for entry in plugins:
            item = normalize_plugin_entry(entry)
            if item is None:
                safe_record(
                    self.diagnostics,
                    f"Invalid plugin entry in config: {json.dumps(entry, default=str)}",
                    severity=WARNING,
                )
                continue
            normalized.append(item)
        config["plugins"] = normalized
        return config

    def load(self, key: str) -> Dict[str, Any]:
        try:
            raw = self._read(key)
        except ConfigError as exc:
            logger.debug(f"Config load failed: {exc.to_json_error()}")
            safe_record(self.diagnostics, str(exc), severity=WARNING)
            return {}

        config = self._normalize(raw)

        if self.validate_schema:
            for error in validate_payload_safe(config):
                safe_record(self.diagnostics, f"Config schema ({key}): {error}", severity=WARNING)

        return config


__all__ = [
    "ConfigSource",
    "FileConfigSource",
    "canonicalize_config",
    "normalize_plugin_entry",
    "KEY_ALIASES",
]
