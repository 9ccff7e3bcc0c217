"""Activation planning engine.

Public surface:
- ``ActivationController`` / ``RunReport``: one full run
- ``PlanBuilder`` and the four collectors: building the ordered plan
- ``ReconciliationEngine``: comparing a plan with the registry
- ``satisfies`` / ``normalize_specs``: leaf helpers
"""
from __future__ import annotations

from . import exceptions  # noqa: F401
from .collectors import (
    Collector,
    DirectCollector,
    EnvironmentCollector,
    PredicateCollector,
    TriggerCollector,
    build_collectors,
)
from .config import ActivatorSettings, ConfigCache, FileConfigSource
from .controller import ActivationController, RunReport
from .diagnostics import LoggingDiagnostics, RecordingDiagnostics
from .models import (
    Action,
    CollectedItem,
    CollectorKind,
    Decision,
    ItemSpec,
    Reason,
    ReconcileResult,
)
from .normalize import normalize_specs
from .plan import PlanBuilder, build_plan
from .reconcile import ReconciliationEngine, prune_unlisted, reconcile
from .registry import InMemoryRegistry, RegistryView
from .sources import ABSENT, MappingFieldLookup, StaticEnvironment
from .version import satisfies

__all__ = [
    "ABSENT",
    "Action",
    "ActivationController",
    "ActivatorSettings",
    "CollectedItem",
    "Collector",
    "CollectorKind",
    "ConfigCache",
    "Decision",
    "DirectCollector",
    "EnvironmentCollector",
    "FileConfigSource",
    "InMemoryRegistry",
    "ItemSpec",
    "LoggingDiagnostics",
    "MappingFieldLookup",
    "PlanBuilder",
    "PredicateCollector",
    "Reason",
    "ReconcileResult",
    "ReconciliationEngine",
    "RecordingDiagnostics",
    "RegistryView",
    "RunReport",
    "StaticEnvironment",
    "TriggerCollector",
    "build_collectors",
    "build_plan",
    "normalize_specs",
    "prune_unlisted",
    "reconcile",
    "satisfies",
]
