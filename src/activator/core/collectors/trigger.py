"""Trigger collector: items tied to an external event name.

This collector only records intent. Whether the event ever fires is the
host's business; every valid rule becomes a plan candidate.
"""
from __future__ import annotations

from typing import Any, List

from ..defaults import DEFAULTS
from ..diagnostics import DiagnosticsSink
from ..models import CollectedItem, CollectorKind, TriggerRule
from ..normalize import item_list_of, normalize_specs
from .base import BaseCollector, as_list


class TriggerCollector(BaseCollector):
    kind = CollectorKind.TRIGGER

    def __init__(self, rules: Any, *, diagnostics: DiagnosticsSink | None = None) -> None:
        super().__init__(diagnostics)
        self.rules: List[TriggerRule] = []

        for rule in as_list(rules):
            if not isinstance(rule, dict):
                self._diagnose(f"Invalid trigger entry type: expected mapping, got {type(rule).__name__}.")
                continue

            name = rule.get("hook", rule.get("trigger"))
            items = item_list_of(rule)
            if not isinstance(name, str) or not name.strip() or not items:
                shown = name if isinstance(name, str) and name else "(undefined)"
                self._diagnose(f'Invalid trigger entry (missing hook/plugins). Hook: "{shown}".')
                continue

            try:
                priority = int(rule.get("priority", DEFAULTS.trigger_priority))
            except (TypeError, ValueError):
                self._diagnose(f'{name}: invalid priority {rule.get("priority")!r}, using {DEFAULTS.trigger_priority}.')
                priority = DEFAULTS.trigger_priority

            self.rules.append(
                TriggerRule(
                    name=name.strip(),
                    items=tuple(items),
                    priority=priority,
                    order=self._order_of(rule, name=name),
                )
            )

    def collect(self) -> List[CollectedItem]:
        collected: List[CollectedItem] = []
        for rule in self.rules:
            specs = normalize_specs(list(rule.items))
            if not specs:
                self._diagnose(f'{rule.name}: no usable items.')
                continue
            collected.append(
                CollectedItem(
                    kind=self.kind,
                    order=rule.order,
                    specs=tuple(specs),
                    meta={"trigger": rule.name, "priority": rule.priority},
                )
            )
        return collected


__all__ = ["TriggerCollector"]
