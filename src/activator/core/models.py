"""
Data models for the activation planner.

This module defines the value types that flow through one planning run:
- ItemSpec: a single item the configuration asks for
- CollectedItem: a plan candidate produced by one collector
- EnvironmentGroup / TriggerRule / PredicateRule: typed rule sources
- Decision / ReconcileResult: the outcome of reconciliation

All of them are built fresh for each run and never mutated afterwards.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .defaults import DEFAULTS


@dataclass(frozen=True)
class ItemSpec:
    """A single item requested by configuration.

    Attributes:
        identifier: Registry key of the item (e.g. "akismet/akismet.php")
        required: Only raises diagnostic severity when the item is missing
        version: Optional version constraint such as ">=1.2.0"
        order: Sort key used when the spec itself is a plan entry
        defer: Activate in the deferred pass instead of the immediate one
    """

    identifier: str
    required: bool = DEFAULTS.required
    version: Optional[str] = None
    order: int = DEFAULTS.spec_order
    defer: bool = DEFAULTS.defer

    def __post_init__(self) -> None:
        if not self.identifier:
            raise ValueError("ItemSpec identifier must not be empty")


class CollectorKind(str, Enum):
    DIRECT = "direct"
    ENVIRONMENT = "environment"
    TRIGGER = "trigger"
    PREDICATE = "predicate"


@dataclass(frozen=True)
class CollectedItem:
    """A plan candidate.

    ``kind`` is informational only; ordering uses ``order`` alone. ``meta``
    carries collector-specific fields (trigger name and priority, group
    name, predicate field).
    """

    kind: CollectorKind
    order: int
    specs: Tuple[ItemSpec, ...]
    meta: Mapping[str, Any] = field(default_factory=dict)

    @property
    def identifiers(self) -> List[str]:
        return [s.identifier for s in self.specs]


@dataclass(frozen=True)
class EnvironmentGroup:
    name: str
    match_value: str
    items: Tuple[Any, ...] = ()


@dataclass(frozen=True)
class TriggerRule:
    name: str
    items: Tuple[Any, ...]
    priority: int = DEFAULTS.trigger_priority
    order: int = DEFAULTS.collected_order


@dataclass(frozen=True)
class PredicateRule:
    field: str
    expected: Any
    items: Tuple[Any, ...]
    operator: str = DEFAULTS.operator
    order: int = DEFAULTS.collected_order


class Action(str, Enum):
    ACTIVATE = "activate"
    DEACTIVATE = "deactivate"
    SKIP = "skip"


class Reason(str, Enum):
    OK = "ok"
    MISSING_FILE = "missingFile"
    VERSION_MISMATCH = "versionMismatch"
    DUPLICATE_NOOP = "duplicateNoop"


@dataclass(frozen=True)
class Decision:
    identifier: str
    action: Action
    reason: Reason
    required: bool = False
    defer: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "identifier": self.identifier,
            "action": self.action.value,
            "reason": self.reason.value,
        }


@dataclass
class ReconcileResult:
    """Buckets produced by one reconciliation pass, each in plan order."""

    decisions: List[Decision] = field(default_factory=list)
    to_activate: List[str] = field(default_factory=list)
    to_deactivate: List[str] = field(default_factory=list)

    @property
    def immediate(self) -> List[str]:
        return self._activations(defer=False)

    @property
    def deferred(self) -> List[str]:
        return self._activations(defer=True)

    def _activations(self, *, defer: bool) -> List[str]:
        return [
            d.identifier
            for d in self.decisions
            if d.action is Action.ACTIVATE and d.defer is defer
        ]


__all__ = [
    "ItemSpec",
    "CollectorKind",
    "CollectedItem",
    "EnvironmentGroup",
    "TriggerRule",
    "PredicateRule",
    "Action",
    "Reason",
    "Decision",
    "ReconcileResult",
]
