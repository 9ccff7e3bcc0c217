"""Single table of default values for item specs and rules.

The Source Normalizer, the configuration loader and every collector read
their fallbacks from ``DEFAULTS`` so the collector types cannot drift apart.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Defaults:
    # Order given to plugin-style specs (direct list entries, normalized specs).
    spec_order: int = 10
    # Order given to a collected item whose rule does not set one.
    collected_order: int = 0
    required: bool = False
    defer: bool = False
    operator: str = "equals"
    version_operator: str = ">="
    trigger_priority: int = 10


DEFAULTS = Defaults()

# Keys accepted for an item identifier, in lookup order.
IDENTIFIER_KEYS = ("file", "identifier")
# Keys accepted for a nested list of items, in lookup order.
ITEM_LIST_KEYS = ("plugins", "items")


__all__ = ["Defaults", "DEFAULTS", "IDENTIFIER_KEYS", "ITEM_LIST_KEYS"]
