from __future__ import annotations

from activator.core.collectors import EnvironmentCollector
from activator.core.collectors.environment import normalize_identity
from activator.core.sources import EnvVarEnvironment, StaticEnvironment

GROUPS = {
    "production": {"url": "https://example.com", "plugins": ["cache/cache.php"]},
    "staging": {"url": "https://staging.example.com", "plugins": ["debug/debug.php", "query/query.php"]},
    "staging-copy": {"url": "https://staging.example.com/", "plugins": ["never/never.php"]},
}


def _collector(identity: str, diagnostics, groups=GROUPS) -> EnvironmentCollector:
    return EnvironmentCollector(
        groups,
        environment=StaticEnvironment(identity),
        patterns=["*.php"],
        diagnostics=diagnostics,
    )


def test_first_matching_group_wins(diagnostics) -> None:
    items = _collector("https://staging.example.com/", diagnostics).collect()

    assert [i.identifiers[0] for i in items] == ["debug/debug.php", "query/query.php"]
    assert all(i.meta == {"group": "staging"} for i in items)


def test_no_prefix_matching(diagnostics) -> None:
    assert _collector("https://example.com/shop", diagnostics).collect() == []


def test_no_match_yields_empty(diagnostics) -> None:
    assert _collector("https://other.test", diagnostics).collect() == []


def test_group_without_url_never_matches(diagnostics) -> None:
    groups = {"blank": {"url": "", "plugins": ["a/a.php"]}}

    assert _collector("", diagnostics, groups).collect() == []


def test_invalid_items_in_group_are_skipped(diagnostics) -> None:
    groups = {"prod": {"url": "https://example.com", "items": ["notes.txt", {"file": "a/a.php", "order": 2}]}}

    items = _collector("https://example.com", diagnostics, groups).collect()

    assert [(i.identifiers[0], i.order) for i in items] == [("a/a.php", 2)]
    assert any("prod: skipping item" in m for m in diagnostics.messages)


def test_non_mapping_groups_are_diagnosed(diagnostics) -> None:
    assert _collector("https://example.com", diagnostics, ["nope"]).collect() == []
    assert _collector("https://example.com", diagnostics, {"bad": "x"}).collect() == []
    assert len(diagnostics.messages) == 2


def test_environment_is_read_on_each_collect(diagnostics, monkeypatch) -> None:
    monkeypatch.setenv("ACTIVATOR_SITE_URL", "https://example.com")
    env = EnvVarEnvironment()
    collector = EnvironmentCollector(GROUPS, environment=env, patterns=["*.php"], diagnostics=diagnostics)
    assert collector.collect()[0].identifiers == ["cache/cache.php"]

    monkeypatch.setenv("ACTIVATOR_SITE_URL", "https://nowhere.test")
    assert collector.collect() == []


def test_normalize_identity() -> None:
    assert normalize_identity(" https://a.test// ") == "https://a.test"
    assert normalize_identity(None) == ""
