"""Host-facing lookups consumed by the collectors.

- ``EnvironmentIdentity`` tells the Environment collector where it runs.
- ``FieldLookup`` feeds settings values to the Predicate collector and
  returns ``ABSENT`` for fields that have no value.
"""
from __future__ import annotations

import os
from typing import Any, Mapping, Optional, Protocol


class _Absent:
    """Sentinel for a field without a value. Stringifies to ""."""

    _instance: Optional["_Absent"] = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __str__(self) -> str:
        return ""

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()


class EnvironmentIdentity(Protocol):
    def current(self) -> str:
        ...


class FieldLookup(Protocol):
    def get(self, field: str) -> Any:
        ...


class StaticEnvironment:
    """Environment identity fixed at construction (e.g. the canonical site URL)."""

    def __init__(self, identity: str) -> None:
        self._identity = identity

    def current(self) -> str:
        return self._identity


class EnvVarEnvironment:
    """Environment identity read from an environment variable on each call."""

    def __init__(self, variable: str = "ACTIVATOR_SITE_URL", default: str = "") -> None:
        self.variable = variable
        self.default = default

    def current(self) -> str:
        return os.environ.get(self.variable, self.default)


class MappingFieldLookup:
    """Field lookup over a live mapping of option values.

    The mapping is consulted on every ``get`` so rule evaluation always sees
    current values.
    """

    def __init__(self, values: Mapping[str, Any]) -> None:
        self._values = values

    def get(self, field: str) -> Any:
        if field not in self._values:
            return ABSENT
        value = self._values[field]
        return ABSENT if value is None else value


__all__ = [
    "ABSENT",
    "EnvironmentIdentity",
    "FieldLookup",
    "StaticEnvironment",
    "EnvVarEnvironment",
    "MappingFieldLookup",
]
