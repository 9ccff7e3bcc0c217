"""Engine settings.

Settings sources (highest to lowest priority):
1. Environment variables: ACTIVATOR_* (``ACTIVATOR_disabled=true``,
   ``ACTIVATOR_logging__level=DEBUG``)
2. Host settings file passed as ``settings_path`` (YAML)
3. Bundled defaults: activator.data/config/defaults.yaml
"""
from __future__ import annotations

import json
import os
import re
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from activator.data import read_yaml as read_data_yaml

from ..exceptions import SettingsError
from ..utils.io import read_yaml
from ..utils.merge import deep_merge

ENV_PREFIX = "ACTIVATOR_"
SECTION = "activator"


def _as_bool(v: str) -> Optional[bool]:
    low = v.strip().lower()
    if low in {"true", "false"}:
        return low == "true"
    return None


def _as_int(v: str) -> Optional[int]:
    if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
        return int(v)
    return None


def _as_float(v: str) -> Optional[float]:
    s = v.strip()
    if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
        return float(s)
    return None


def _as_json(v: str) -> Optional[Any]:
    s = v.strip()
    if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
        try:
            return json.loads(s)
        except ValueError:
            return None
    return None


def coerce_env_value(value: str) -> Any:
    """Coerce an environment string to bool, int, float or JSON, else keep the text."""
    for caster in (_as_bool, _as_int, _as_float, _as_json):
        result = caster(value)
        if result is not None:
            return result
    return value.strip()


def env_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    """Build a nested override mapping from ACTIVATOR_* variables.

    Nested keys are separated by ``__``. Keys are matched case-insensitively
    against the bundled defaults, so ``ACTIVATOR_CONFIGDIR`` sets ``configDir``.

    Raises:
        SettingsError: For a key with an empty segment (``ACTIVATOR_a____b``).
    """
    known = _known_keys(read_data_yaml("config", "defaults.yaml").get(SECTION) or {})
    overrides: Dict[str, Any] = {}
    for key in sorted(environ.keys()):
        if not key.startswith(ENV_PREFIX):
            continue
        raw = key[len(ENV_PREFIX):]
        if not raw:
            continue
        segments = raw.split("__")
        if any(seg == "" for seg in segments):
            raise SettingsError(f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.", context={"key": key})

        cursor = overrides
        scope = known
        for i, seg in enumerate(segments):
            canonical = scope.get(seg.lower(), (seg, {}))
            name, children = canonical
            if i == len(segments) - 1:
                cursor[name] = coerce_env_value(environ[key])
            else:
                cursor = cursor.setdefault(name, {})
                scope = children
    return overrides


def _known_keys(section: Mapping[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for name, value in section.items():
        children = _known_keys(value) if isinstance(value, dict) else {}
        out[str(name).lower()] = (str(name), children)
    return out


class ActivatorSettings:
    """Typed access to the ``activator`` settings section.

    Usage:
        settings = ActivatorSettings(settings_path=Path("/etc/activator.yaml"))
        if not settings.disabled:
            print(settings.config_dir, settings.identifier_patterns)
    """

    def __init__(
        self,
        settings_path: Optional[Path] = None,
        *,
        base_dir: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Initialize settings.

        Args:
            settings_path: Optional host settings YAML file.
            base_dir: Directory that relative ``configDir`` values resolve against
                (defaults to the current working directory).
            environ: Environment mapping (defaults to ``os.environ``).
            overrides: Explicit values applied last (host code and tests).
        """
        self._settings_path = settings_path
        self._base_dir = Path(base_dir) if base_dir else Path.cwd()
        self._environ = os.environ if environ is None else environ
        self._overrides = dict(overrides or {})

    def _load_file(self) -> Dict[str, Any]:
        if self._settings_path is None:
            return {}
        try:
            data = read_yaml(self._settings_path, default={}, raise_on_error=True)
        except FileNotFoundError as exc:
            raise SettingsError(f"Settings file not found: {self._settings_path}") from exc
        except Exception as exc:
            raise SettingsError(f"Invalid settings file {self._settings_path}: {exc}") from exc
        if not isinstance(data, dict):
            raise SettingsError(f"Settings file must be a mapping: {self._settings_path}")
        return data.get(SECTION, data) or {}

    @cached_property
    def section(self) -> Dict[str, Any]:
        """The merged ``activator`` section."""
        bundled = read_data_yaml("config", "defaults.yaml").get(SECTION) or {}
        merged = deep_merge(bundled, self._load_file())
        merged = deep_merge(merged, env_overrides(self._environ))
        return deep_merge(merged, self._overrides)

    @cached_property
    def disabled(self) -> bool:
        return bool(self.section.get("disabled", False))

    @cached_property
    def config_dir(self) -> Path:
        raw = Path(str(self.section.get("configDir") or "."))
        return raw if raw.is_absolute() else (self._base_dir / raw)

    @cached_property
    def tenant(self) -> str:
        return str(self.section.get("tenant") or "default")

    @cached_property
    def identifier_patterns(self) -> List[str]:
        patterns = self.section.get("identifierPatterns") or []
        if isinstance(patterns, str):
            patterns = [patterns]
        return [str(p) for p in patterns if str(p).strip()]

    @cached_property
    def validate_schema(self) -> bool:
        return bool(self.section.get("validateSchema", True))

    @cached_property
    def log_level(self) -> str:
        logging_cfg = self.section.get("logging") or {}
        return str(logging_cfg.get("level") or "INFO")

    @cached_property
    def log_path(self) -> Optional[Path]:
        logging_cfg = self.section.get("logging") or {}
        raw = logging_cfg.get("path")
        if not raw:
            return None
        path = Path(str(raw))
        return path if path.is_absolute() else (self._base_dir / path)


__all__ = ["ActivatorSettings", "env_overrides", "coerce_env_value", "ENV_PREFIX"]
