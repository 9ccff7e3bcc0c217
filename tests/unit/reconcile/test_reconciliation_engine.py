from __future__ import annotations

from activator.core.models import Action, Reason
from activator.core.reconcile import ReconciliationEngine, prune_unlisted, reconcile
from activator.core.registry import InMemoryRegistry
from helpers.plans import plan_item


def test_missing_item_short_circuits_before_version_check(diagnostics) -> None:
    registry = InMemoryRegistry.from_items({})
    result = ReconciliationEngine(registry, diagnostics).evaluate(
        [plan_item("gone/gone.php", version=">=1.0", required=True)]
    )

    assert result.to_deactivate == ["gone/gone.php"]
    assert result.decisions[0].reason is Reason.MISSING_FILE
    assert diagnostics.by_severity("error") == ["REQUIRED item missing: gone/gone.php"]
    assert not any("Version mismatch" in m for m in diagnostics.messages)


def test_optional_missing_item_is_informational(diagnostics) -> None:
    ReconciliationEngine(InMemoryRegistry(), diagnostics).evaluate([plan_item("gone/gone.php")])

    assert diagnostics.entries == [("info", "Item not found: gone/gone.php")]


def test_version_constraint_without_reported_version_is_a_mismatch(registry, diagnostics) -> None:
    result = ReconciliationEngine(registry, diagnostics).evaluate([plan_item("hello-dolly/hello.php", version=">=1")])

    assert result.to_deactivate == ["hello-dolly/hello.php"]
    assert result.decisions[0].reason is Reason.VERSION_MISMATCH
    assert "found unknown" in diagnostics.by_severity("warning")[0]


def test_satisfied_items_are_activated_in_plan_order(registry, diagnostics) -> None:
    plan = [plan_item("woocommerce/woocommerce.php", version=">=8.0"), plan_item("akismet/akismet.php")]

    result = reconcile(plan, registry, diagnostics)

    assert result.to_activate == ["woocommerce/woocommerce.php", "akismet/akismet.php"]
    assert registry.history == [
        ("activate", "woocommerce/woocommerce.php"),
        ("activate", "akismet/akismet.php"),
    ]


def test_deferred_items_activate_after_immediate_ones(registry, diagnostics) -> None:
    plan = [plan_item("akismet/akismet.php", defer=True), plan_item("woocommerce/woocommerce.php")]

    result = reconcile(plan, registry, diagnostics)

    assert result.immediate == ["woocommerce/woocommerce.php"]
    assert result.deferred == ["akismet/akismet.php"]
    assert [i for _, i in registry.history] == ["woocommerce/woocommerce.php", "akismet/akismet.php"]


def test_repeated_identifier_is_a_duplicate_noop(registry, diagnostics) -> None:
    plan = [plan_item("akismet/akismet.php"), plan_item("akismet/akismet.php", order=3)]

    result = ReconciliationEngine(registry, diagnostics).evaluate(plan)

    assert result.to_activate == ["akismet/akismet.php"]
    assert [(d.action, d.reason) for d in result.decisions] == [
        (Action.ACTIVATE, Reason.OK),
        (Action.SKIP, Reason.DUPLICATE_NOOP),
    ]


def test_conflicting_duplicate_lands_in_both_buckets_and_deactivates_first(registry, diagnostics) -> None:
    plan = [plan_item("akismet/akismet.php", version=">=9"), plan_item("akismet/akismet.php")]

    result = reconcile(plan, registry, diagnostics)

    assert result.to_deactivate == ["akismet/akismet.php"]
    assert result.to_activate == ["akismet/akismet.php"]
    assert registry.is_active("akismet/akismet.php")


def test_reconcile_is_idempotent(registry, diagnostics) -> None:
    plan = [
        plan_item("akismet/akismet.php"),
        plan_item("woocommerce/woocommerce.php", version=">=9"),
        plan_item("missing/missing.php"),
    ]
    engine = ReconciliationEngine(registry, diagnostics)

    first = engine.reconcile(plan)
    history_after_first = list(registry.history)
    second = engine.reconcile(plan)

    assert (first.to_activate, first.to_deactivate) == (second.to_activate, second.to_deactivate)
    assert registry.history == history_after_first


def test_prune_unlisted_deactivates_items_outside_the_plan(registry, diagnostics) -> None:
    registry.active.add("akismet/akismet.php")

    pruned = prune_unlisted([plan_item("akismet/akismet.php")], registry, diagnostics)

    assert pruned == ["hello-dolly/hello.php"]
    assert registry.list_active() == {"akismet/akismet.php"}
    assert diagnostics.by_severity("warning") == ["Deactivated unlisted items: hello-dolly/hello.php"]


def test_check_versions_reports_without_changing_state(registry, diagnostics) -> None:
    registry.active.add("woocommerce/woocommerce.php")
    engine = ReconciliationEngine(registry, diagnostics)

    mismatched = engine.check_versions([plan_item("woocommerce/woocommerce.php", version=">=9.0")])

    assert mismatched == ["woocommerce/woocommerce.php"]
    assert registry.history == []
    assert diagnostics.messages == ["Version mismatch: woocommerce/woocommerce.php requires >=9.0, found 8.2.1."]


def test_activation_failure_does_not_stop_other_items(diagnostics) -> None:
    class FlakyRegistry(InMemoryRegistry):
        def activate(self, identifier: str) -> None:
            if identifier == "bad/bad.php":
                raise RuntimeError("fatal error on include")
            super().activate(identifier)

    registry = FlakyRegistry.from_items({"bad/bad.php": "1.0", "good/good.php": "1.0"})

    reconcile([plan_item("bad/bad.php"), plan_item("good/good.php")], registry, diagnostics)

    assert registry.list_active() == {"good/good.php"}
    assert diagnostics.by_severity("error") == ["Activation failed for bad/bad.php: fatal error on include"]


def test_failing_step_does_not_stop_later_steps(registry, diagnostics) -> None:
    class BrokenListing(InMemoryRegistry):
        def list_active(self):
            raise RuntimeError("registry offline")

    broken = BrokenListing.from_items(registry.versions)

    steps = ReconciliationEngine(broken, diagnostics).run([plan_item("akismet/akismet.php")])

    assert steps.pruned == []
    assert steps.result.to_activate == ["akismet/akismet.php"]
    assert broken.is_active("akismet/akismet.php")
    assert any("Step 'prune unlisted' failed" in m for m in diagnostics.by_severity("error"))


def test_empty_plan_does_nothing(registry, diagnostics) -> None:
    steps = ReconciliationEngine(registry, diagnostics).run([])

    assert steps.pruned == []
    assert registry.list_active() == {"hello-dolly/hello.php"}
    assert diagnostics.entries == []
