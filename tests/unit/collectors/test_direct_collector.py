from __future__ import annotations

from activator.core.collectors import DirectCollector
from activator.core.models import CollectorKind


def test_collects_each_valid_entry_in_order(diagnostics) -> None:
    collector = DirectCollector(
        ["a/a.php", {"file": "b/b.php", "order": 4, "required": True}],
        patterns=["*.php"],
        diagnostics=diagnostics,
    )

    items = collector.collect()

    assert [i.identifiers for i in items] == [["a/a.php"], ["b/b.php"]]
    assert [i.order for i in items] == [0, 4]
    assert all(i.kind is CollectorKind.DIRECT for i in items)
    assert items[1].specs[0].required is True
    assert diagnostics.entries == []


def test_entry_order_is_copied_onto_spec(diagnostics) -> None:
    items = DirectCollector([{"file": "a/a.php", "order": 7}], patterns=["*.php"], diagnostics=diagnostics).collect()

    assert items[0].specs[0].order == 7


def test_identifier_must_match_patterns(diagnostics) -> None:
    items = DirectCollector(
        ["readme.txt", "ok/ok.php"], patterns=["*.php"], diagnostics=diagnostics
    ).collect()

    assert [i.identifiers[0] for i in items] == ["ok/ok.php"]
    assert any('invalid item file "readme.txt"' in m for m in diagnostics.messages)


def test_entries_without_identifier_are_skipped(diagnostics) -> None:
    items = DirectCollector([{"required": True}, 12], patterns=["*.php"], diagnostics=diagnostics).collect()

    assert items == []
    assert len(diagnostics.by_severity("warning")) == 2
    assert all(m.startswith("[DirectCollector]") for m in diagnostics.messages)


def test_bad_order_is_diagnosed_and_defaults_to_zero(diagnostics) -> None:
    items = DirectCollector([{"file": "a/a.php", "order": "x"}], patterns=["*.php"], diagnostics=diagnostics).collect()

    assert items[0].order == 0
    assert any("invalid order" in m for m in diagnostics.messages)


def test_non_list_input_yields_nothing(diagnostics) -> None:
    assert DirectCollector({"file": "a/a.php"}, patterns=["*.php"], diagnostics=diagnostics).collect() == []
    assert DirectCollector(None, patterns=["*.php"], diagnostics=diagnostics).collect() == []
