"""Activator configuration.

Usage:
    from activator.core.config import ActivatorSettings, ConfigCache, FileConfigSource

    settings = ActivatorSettings()
    source = FileConfigSource(settings.config_dir)
    cache = ConfigCache()
    config = cache.get_or_populate(settings.tenant, lambda: source.load(settings.tenant))
"""
from __future__ import annotations

from .cache import ConfigCache
from .loader import ConfigSource, FileConfigSource, canonicalize_config, normalize_plugin_entry
from .settings import ActivatorSettings, env_overrides

__all__ = [
    "ActivatorSettings",
    "ConfigCache",
    "ConfigSource",
    "FileConfigSource",
    "canonicalize_config",
    "normalize_plugin_entry",
    "env_overrides",
]
