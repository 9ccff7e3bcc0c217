"""Whole-run behaviour: plan building followed by the three reconciliation steps."""
from __future__ import annotations

from activator.core.collectors import DirectCollector
from activator.core.plan import build_plan, plan_identifiers
from activator.core.reconcile import ReconciliationEngine
from activator.core.registry import InMemoryRegistry
from helpers.plans import plan_item


def test_active_item_with_too_old_version_is_deactivated(diagnostics) -> None:
    registry = InMemoryRegistry.from_items({"x": "0.9.0"}, active=["x"])
    plan = [plan_item("x", 5, required=True, version=">=1.0.0")]

    steps = ReconciliationEngine(registry, diagnostics).run(plan)

    assert steps.result.to_deactivate == ["x"]
    assert steps.mismatched == ["x"]
    assert not registry.is_active("x")
    assert any("Version mismatch" in m and "x" in m for m in diagnostics.messages)


def test_plan_order_drives_activation_order(diagnostics) -> None:
    registry = InMemoryRegistry.from_items({"x/x.php": "1.0", "y/y.php": "1.0"})
    collector = DirectCollector(
        [{"file": "x/x.php", "order": 2}, {"file": "y/y.php", "order": 1}],
        patterns=["*.php"],
        diagnostics=diagnostics,
    )

    plan = build_plan([collector])
    steps = ReconciliationEngine(registry, diagnostics).run(plan)

    assert plan_identifiers(plan) == ["y/y.php", "x/x.php"]
    assert steps.result.to_activate == ["y/y.php", "x/x.php"]
    assert [i for _, i in registry.history] == ["y/y.php", "x/x.php"]


def test_items_missing_from_the_plan_are_pruned(diagnostics) -> None:
    registry = InMemoryRegistry.from_items({"a": None, "b": None}, active=["a", "b"])

    steps = ReconciliationEngine(registry, diagnostics).run([plan_item("a")])

    assert "b" in steps.pruned
    assert registry.list_active() == {"a"}
