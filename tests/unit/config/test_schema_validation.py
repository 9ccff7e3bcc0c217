from __future__ import annotations

from activator.core.schemas import load_schema, validate_payload_safe


def test_bundled_schema_loads_without_extension() -> None:
    assert load_schema("activation-config")["type"] == "object"


def test_valid_document_has_no_errors() -> None:
    document = {
        "plugins": ["a/a.php", {"file": "b/b.php", "version": ">=1.0", "order": 2, "defer": True}],
        "groups": {"prod": {"url": "https://example.com", "plugins": ["c/c.php"]}},
        "triggers": [{"hook": "init", "priority": 5, "plugins": ["d/d.php"]}],
        "predicates": [{"field": "template", "value": "x", "operator": "in", "items": ["e/e.php"]}],
    }

    assert validate_payload_safe(document) == []


def test_errors_carry_their_path() -> None:
    errors = validate_payload_safe({"triggers": [{"hook": "init", "priority": "high"}]})

    assert errors == ["triggers.0.priority: 'high' is not of type 'integer'"]


def test_trigger_rule_may_name_its_event_with_trigger_key() -> None:
    assert validate_payload_safe({"triggers": [{"trigger": "init", "plugins": ["a/a.php"]}]}) == []


def test_trigger_rule_without_event_name_is_reported() -> None:
    errors = validate_payload_safe({"triggers": [{"plugins": ["a/a.php"]}]})

    assert len(errors) == 1
    assert errors[0].startswith("triggers.0: ")


def test_wrong_item_list_type_is_reported() -> None:
    errors = validate_payload_safe({"plugins": "a/a.php"})

    assert errors == ["plugins: 'a/a.php' is not of type 'array'"]


def test_missing_schema_is_reported_not_raised() -> None:
    errors = validate_payload_safe({}, "does-not-exist")

    assert len(errors) == 1
    assert errors[0].startswith("Schema loading failed")
