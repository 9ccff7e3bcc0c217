"""
Activation controller: one planning run from configuration to registry.

The controller wires the pieces together:
configuration (cached per tenant) -> collectors -> plan -> reconciliation.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .collectors import Collector, build_collectors
from .config.cache import ConfigCache
from .config.loader import ConfigSource, FileConfigSource
from .config.settings import ActivatorSettings
from .diagnostics import DiagnosticsSink, INFO, LoggingDiagnostics, safe_record
from .models import CollectedItem, Decision
from .plan import PlanBuilder
from .reconcile import ReconciliationEngine
from .registry import RegistryView
from .sources import EnvironmentIdentity, FieldLookup
from .stdlib_logging import configure_stdlib_logging
from .utils.profiling import span

logger = logging.getLogger(__name__)


@dataclass
class RunReport:
    """What one run planned and did."""

    tenant: str
    skipped: bool = False
    plan: List[CollectedItem] = field(default_factory=list)
    pruned: List[str] = field(default_factory=list)
    version_mismatches: List[str] = field(default_factory=list)
    decisions: List[Decision] = field(default_factory=list)
    to_activate: List[str] = field(default_factory=list)
    to_deactivate: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tenant": self.tenant,
            "skipped": self.skipped,
            "plan": [
                {"kind": item.kind.value, "order": item.order, "identifiers": item.identifiers}
                for item in self.plan
            ],
            "pruned": list(self.pruned),
            "versionMismatches": list(self.version_mismatches),
            "decisions": [d.to_dict() for d in self.decisions],
            "toActivate": list(self.to_activate),
            "toDeactivate": list(self.to_deactivate),
        }


class ActivationController:
    """Run the activation workflow for a tenant.

    Example:
        controller = ActivationController(
            settings=ActivatorSettings(),
            registry=my_registry,
            environment=StaticEnvironment("https://example.com"),
            fields=MappingFieldLookup(options),
        )
        report = controller.run()
    """

    def __init__(
        self,
        *,
        settings: ActivatorSettings,
        registry: RegistryView,
        environment: EnvironmentIdentity,
        fields: FieldLookup,
        source: Optional[ConfigSource] = None,
        cache: Optional[ConfigCache] = None,
        diagnostics: Optional[DiagnosticsSink] = None,
    ) -> None:
        self.settings = settings
        self.registry = registry
        self.environment = environment
        self.fields = fields
        self.diagnostics: DiagnosticsSink = diagnostics or LoggingDiagnostics()
        self.source: ConfigSource = source or FileConfigSource(
            settings.config_dir,
            diagnostics=self.diagnostics,
            validate_schema=settings.validate_schema,
        )
        self.cache = cache or ConfigCache()

        if settings.log_path is not None:
            configure_stdlib_logging(log_path=settings.log_path, level=settings.log_level)

    def load_config(self, tenant: str) -> Dict[str, Any]:
        with span("controller.config", tenant=tenant):
            return self.cache.get_or_populate(tenant, lambda: self.source.load(tenant))

    def collectors(self, config: Dict[str, Any]) -> List[Collector]:
        return build_collectors(
            config,
            environment=self.environment,
            fields=self.fields,
            patterns=self.settings.identifier_patterns,
            diagnostics=self.diagnostics,
        )

    def plan(self, tenant: Optional[str] = None) -> List[CollectedItem]:
        """Build the ordered plan for ``tenant`` without touching the registry."""
        config = self.load_config(tenant or self.settings.tenant)
        with span("controller.plan"):
            return PlanBuilder(self.collectors(config)).build()

    def run(self, tenant: Optional[str] = None) -> RunReport:
        """Plan and reconcile. Skipped when the kill switch is on or the plan is empty."""
        key = tenant or self.settings.tenant
        report = RunReport(tenant=key)

        if self.settings.disabled:
            safe_record(self.diagnostics, "Activator is disabled; skipping run.", severity=INFO)
            report.skipped = True
            return report

        with span("controller.run", tenant=key):
            report.plan = self.plan(key)
            if not report.plan:
                logger.debug(f"Empty plan for {key!r}; nothing to reconcile")
                return report

            steps = ReconciliationEngine(self.registry, self.diagnostics).run(report.plan)

        report.pruned = steps.pruned
        report.version_mismatches = steps.mismatched
        report.decisions = list(steps.result.decisions)
        report.to_activate = list(steps.result.to_activate)
        report.to_deactivate = list(steps.result.to_deactivate)
        logger.info(
            f"Run for {key!r}: {len(report.to_activate)} to activate, "
            f"{len(report.to_deactivate)} to deactivate, {len(report.pruned)} pruned"
        )
        return report

    def invalidate(self, tenant: Optional[str] = None) -> None:
        """Forget cached configuration for one tenant, or for all when ``tenant`` is None."""
        if tenant is None:
            self.cache.invalidate_all()
        else:
            self.cache.invalidate(tenant)


__all__ = ["ActivationController", "RunReport"]
