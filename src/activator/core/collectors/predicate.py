"""Predicate collector: items gated by a field/operator/value condition.

Conditions are evaluated against the host's field lookup on every
``collect()`` call, never cached, since the underlying values can change
between runs.

Operators:
- ``equals``: field has a value and both sides compare equal as text
- ``not_equals``: both sides differ as text. Unlike ``equals`` this does
  not special-case an absent field, so an absent field is "not equal" to
  any non-empty expected value.
- ``contains``: both sides are strings and the expected text is a substring
- ``in``: expected is a list containing the actual value (type-strict)

Unknown operators are reported and evaluated as ``equals``.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List

from ..defaults import DEFAULTS
from ..diagnostics import DiagnosticsSink
from ..models import CollectedItem, CollectorKind, PredicateRule
from ..normalize import item_list_of, normalize_specs
from ..sources import ABSENT, FieldLookup
from .base import BaseCollector, as_list


def _as_text(value: Any) -> str:
    """Render a scalar the way stored option values are written.

    Booleans become "1" and "", and integral floats drop their ".0".
    """
    if value is None or value is ABSENT or value is False:
        return ""
    if value is True:
        return "1"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def compare_equals(actual: Any, expected: Any) -> bool:
    return actual is not ABSENT and _as_text(actual) == _as_text(expected)


def compare_not_equals(actual: Any, expected: Any) -> bool:
    # Absent fields are not special-cased here (see module docstring).
    return _as_text(actual) != _as_text(expected)


def compare_contains(actual: Any, expected: Any) -> bool:
    return isinstance(actual, str) and isinstance(expected, str) and expected in actual


def compare_in(actual: Any, expected: Any) -> bool:
    if not isinstance(expected, list):
        return False
    return any(type(candidate) is type(actual) and candidate == actual for candidate in expected)


OPERATORS: Dict[str, Callable[[Any, Any], bool]] = {
    "equals": compare_equals,
    "not_equals": compare_not_equals,
    "contains": compare_contains,
    "in": compare_in,
}


class PredicateCollector(BaseCollector):
    kind = CollectorKind.PREDICATE

    def __init__(
        self,
        rules: Any,
        *,
        fields: FieldLookup,
        diagnostics: DiagnosticsSink | None = None,
    ) -> None:
        super().__init__(diagnostics)
        self.fields = fields
        self.rules: List[PredicateRule] = []

        for rule in as_list(rules):
            if not isinstance(rule, dict):
                self._diagnose(f"Invalid settings entry type: expected mapping, got {type(rule).__name__}.")
                continue

            field = rule.get("field")
            items = item_list_of(rule)
            if not isinstance(field, str) or not field.strip() or "value" not in rule or not items:
                shown = field if isinstance(field, str) and field else "(undefined)"
                self._diagnose(f'Invalid settings entry (need field, value, plugins[]). Field: "{shown}".')
                continue

            operator = rule.get("operator") or DEFAULTS.operator
            self.rules.append(
                PredicateRule(
                    field=field.strip(),
                    expected=rule["value"],
                    items=tuple(items),
                    operator=str(operator),
                    order=self._order_of(rule, name=field),
                )
            )

    def evaluate(self, rule: PredicateRule) -> bool:
        actual = self.fields.get(rule.field)
        compare = OPERATORS.get(rule.operator)
        if compare is None:
            self._diagnose(f'Unknown operator "{rule.operator}". Defaulting to "equals".')
            compare = compare_equals
        return compare(actual, rule.expected)

    def collect(self) -> List[CollectedItem]:
        collected: List[CollectedItem] = []
        for rule in self.rules:
            if not self.evaluate(rule):
                continue
            specs = normalize_specs(list(rule.items))
            if not specs:
                self._diagnose(f'{rule.field}: no usable items.')
                continue
            collected.append(
                CollectedItem(
                    kind=self.kind,
                    order=rule.order,
                    specs=tuple(specs),
                    meta={"field": rule.field, "operator": rule.operator},
                )
            )
        return collected


__all__ = [
    "PredicateCollector",
    "OPERATORS",
    "compare_equals",
    "compare_not_equals",
    "compare_contains",
    "compare_in",
]
