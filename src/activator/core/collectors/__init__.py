"""Rule collectors.

Four variants share one operation, ``collect()``. ``Collector`` is the closed
union of them; the plan builder runs a fixed-order list of this union.
"""
from __future__ import annotations

from typing import Any, Mapping, Sequence, List, Union

from ..diagnostics import DiagnosticsSink
from ..sources import EnvironmentIdentity, FieldLookup
from .base import BaseCollector
from .direct import DirectCollector
from .environment import EnvironmentCollector
from .predicate import PredicateCollector
from .trigger import TriggerCollector

Collector = Union[DirectCollector, TriggerCollector, PredicateCollector, EnvironmentCollector]


def _slice(config: Mapping[str, Any], key: str, alias: str) -> Any:
    return config.get(key) if key in config else config.get(alias)


def build_collectors(
    config: Mapping[str, Any],
    *,
    environment: EnvironmentIdentity,
    fields: FieldLookup,
    patterns: Sequence[str],
    diagnostics: DiagnosticsSink | None = None,
) -> List[Collector]:
    """Build every collector from one activation document, in plan order.

    The order (Direct, Trigger, Predicate, Environment) only affects the
    sequence of diagnostics; the plan itself is sorted by ``order``.
    """
    return [
        DirectCollector(config.get("plugins"), patterns=patterns, diagnostics=diagnostics),
        TriggerCollector(_slice(config, "triggers", "filtered"), diagnostics=diagnostics),
        PredicateCollector(_slice(config, "predicates", "settings"), fields=fields, diagnostics=diagnostics),
        EnvironmentCollector(
            config.get("groups"),
            environment=environment,
            patterns=patterns,
            diagnostics=diagnostics,
        ),
    ]


__all__ = [
    "BaseCollector",
    "Collector",
    "DirectCollector",
    "EnvironmentCollector",
    "PredicateCollector",
    "TriggerCollector",
    "build_collectors",
]
