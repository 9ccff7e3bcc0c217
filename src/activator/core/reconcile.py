"""
Reconciliation of an ordered plan against the item registry.

A run has three independent steps, always executed in this order:
1. ``prune_unlisted``: deactivate active items the plan does not mention
2. ``check_versions``: report version mismatches (no state change)
3. ``reconcile``: decide activate/deactivate per plan entry and apply it

Per-entry precedence (first failing check wins):
- empty identifier  -> ignored entirely
- not in registry   -> deactivate (missingFile)
- version mismatch  -> deactivate (versionMismatch)
- otherwise         -> activate (ok)

Side effects are idempotent: only active items are deactivated and only
inactive items are activated.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Set

from .diagnostics import DiagnosticsSink, ERROR, INFO, LoggingDiagnostics, WARNING, safe_record
from .models import Action, CollectedItem, Decision, ItemSpec, Reason, ReconcileResult
from .plan import iter_plan_specs, plan_identifiers
from .registry import RegistryView
from .utils.profiling import span
from .version import satisfies

logger = logging.getLogger(__name__)


@dataclass
class RunSteps:
    """Outputs of the three reconciliation steps of one run."""

    pruned: List[str] = field(default_factory=list)
    mismatched: List[str] = field(default_factory=list)
    result: ReconcileResult = field(default_factory=ReconcileResult)


class ReconciliationEngine:
    """Compare a plan with registry state and drive the registry towards it.

    Example:
        engine = ReconciliationEngine(registry, diagnostics)
        result = engine.run(plan)
        result.to_activate   # ["b/b.php", "a/a.php"]
    """

    def __init__(self, registry: RegistryView, diagnostics: DiagnosticsSink | None = None) -> None:
        self.registry = registry
        self.diagnostics: DiagnosticsSink = diagnostics or LoggingDiagnostics()

    def _record(self, message: str, *, severity: str = INFO) -> None:
        safe_record(self.diagnostics, message, severity=severity)

    # =========================================================================
    # Step 1: unlisted pruning
    # =========================================================================

    def prune_unlisted(self, plan: Sequence[CollectedItem]) -> List[str]:
        """Deactivate every active item whose identifier appears nowhere in the plan."""
        allowed = set(plan_identifiers(plan))
        pruned = sorted(i for i in self.registry.list_active() if i not in allowed)
        if not pruned:
            return []

        self.registry.deactivate(set(pruned))
        self._record(f"Deactivated unlisted items: {', '.join(pruned)}", severity=WARNING)
        return pruned

    # =========================================================================
    # Step 2: version report
    # =========================================================================

    def check_versions(self, plan: Sequence[CollectedItem]) -> List[str]:
        """Report specs whose constraint fails against a known registry version."""
        mismatched: List[str] = []
        for spec in iter_plan_specs(plan):
            if not spec.version:
                continue
            current = self.registry.current_version(spec.identifier)
            if not current:
                continue
            if not satisfies(current, spec.version):
                mismatched.append(spec.identifier)
                self._record(
                    f"Version mismatch: {spec.identifier} requires {spec.version}, found {current}.",
                    severity=WARNING,
                )
        return mismatched

    # =========================================================================
    # Step 3: per-entry decisions
    # =========================================================================

    def _decide(self, spec: ItemSpec) -> Optional[Decision]:
        if not spec.identifier:
            return None

        if not self.registry.exists(spec.identifier):
            if spec.required:
                self._record(f"REQUIRED item missing: {spec.identifier}", severity=ERROR)
            else:
                self._record(f"Item not found: {spec.identifier}")
            return Decision(spec.identifier, Action.DEACTIVATE, Reason.MISSING_FILE, spec.required, spec.defer)

        if spec.version:
            current = self.registry.current_version(spec.identifier)
            if not current or not satisfies(current, spec.version):
                self._record(
                    f"Version mismatch for {spec.identifier}. Required {spec.version}, found {current or 'unknown'}.",
                    severity=WARNING,
                )
                return Decision(
                    spec.identifier, Action.DEACTIVATE, Reason.VERSION_MISMATCH, spec.required, spec.defer
                )

        return Decision(spec.identifier, Action.ACTIVATE, Reason.OK, spec.required, spec.defer)

    def evaluate(self, plan: Sequence[CollectedItem]) -> ReconcileResult:
        """Compute decisions and buckets without touching the registry.

        Each plan entry is evaluated on its own. A repeated identifier that
        reaches the same action as an earlier entry is recorded as a
        ``skip``/``duplicateNoop`` decision and is not added to a bucket
        twice.
        """
        result = ReconcileResult()
        seen: Dict[str, Set[Action]] = {}

        for spec in iter_plan_specs(plan):
            decision = self._decide(spec)
            if decision is None:
                continue

            actions = seen.setdefault(decision.identifier, set())
            if decision.action in actions:
                result.decisions.append(
                    Decision(decision.identifier, Action.SKIP, Reason.DUPLICATE_NOOP, spec.required, spec.defer)
                )
                continue
            actions.add(decision.action)

            result.decisions.append(decision)
            if decision.action is Action.ACTIVATE:
                result.to_activate.append(decision.identifier)
            else:
                result.to_deactivate.append(decision.identifier)

        return result

    def apply(self, result: ReconcileResult) -> None:
        """Issue registry calls for ``result``; already-satisfied items are left alone.

        Deactivations go first, then immediate activations, then deferred ones.
        One failing item never stops the others.
        """
        stale = {i for i in result.to_deactivate if self.registry.is_active(i)}
        if stale:
            self.registry.deactivate(stale)
            logger.info(f"Deactivated {len(stale)} item(s): {', '.join(sorted(stale))}")

        for identifier in result.immediate + result.deferred:
            if self.registry.is_active(identifier):
                continue
            try:
                self.registry.activate(identifier)
            except Exception as exc:  # noqa: BLE001 - keep going with the remaining items
                self._record(f"Activation failed for {identifier}: {exc}", severity=ERROR)

    def reconcile(self, plan: Sequence[CollectedItem]) -> ReconcileResult:
        result = self.evaluate(plan)
        self.apply(result)
        return result

    # =========================================================================
    # Full run
    # =========================================================================

    def run(self, plan: Sequence[CollectedItem]) -> RunSteps:
        """Run prune, version check and reconcile in that fixed order.

        An empty plan does nothing. A step that raises is reported and the
        next step still runs.
        """
        steps = RunSteps()
        if not plan:
            return steps

        with span("reconcile.prune"):
            steps.pruned = self._guard("prune unlisted", self.prune_unlisted, plan, default=[])
        with span("reconcile.versions"):
            steps.mismatched = self._guard("check versions", self.check_versions, plan, default=[])
        with span("reconcile.apply"):
            steps.result = self._guard("reconcile", self.reconcile, plan, default=ReconcileResult())
        return steps

    def _guard(
        self,
        step: str,
        fn: Callable[[Sequence[CollectedItem]], Any],
        plan: Sequence[CollectedItem],
        *,
        default: Any,
    ) -> Any:
        try:
            return fn(plan)
        except Exception as exc:  # noqa: BLE001 - steps are independent by contract
            logger.exception(f"Step '{step}' failed")
            self._record(f"Step '{step}' failed: {exc}", severity=ERROR)
            return default


def reconcile(
    plan: Sequence[CollectedItem],
    registry: RegistryView,
    diagnostics: DiagnosticsSink | None = None,
) -> ReconcileResult:
    """Decide and apply activation for ``plan`` (step 3 only)."""
    return ReconciliationEngine(registry, diagnostics).reconcile(plan)


def prune_unlisted(
    plan: Sequence[CollectedItem],
    registry: RegistryView,
    diagnostics: DiagnosticsSink | None = None,
) -> List[str]:
    """Deactivate active items absent from ``plan`` (step 1 only)."""
    return ReconciliationEngine(registry, diagnostics).prune_unlisted(plan)


__all__ = ["ReconciliationEngine", "RunSteps", "reconcile", "prune_unlisted"]
