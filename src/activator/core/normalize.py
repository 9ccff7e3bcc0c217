"""Source normalization.

Turns heterogeneous configuration input (bare strings, spec mappings,
``data`` wrappers, nested ``plugins``/``items`` lists) into a flat sequence
of ``ItemSpec`` values.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .defaults import DEFAULTS, IDENTIFIER_KEYS, ITEM_LIST_KEYS
from .models import ItemSpec

logger = logging.getLogger(__name__)


def identifier_of(entry: Mapping[str, Any]) -> str:
    """Return the identifier of a spec mapping, or "" when it has none."""
    for key in IDENTIFIER_KEYS:
        value = entry.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def item_list_of(entry: Mapping[str, Any]) -> Optional[List[Any]]:
    """Return the first nested item list of ``entry`` (``plugins`` then ``items``)."""
    for key in ITEM_LIST_KEYS:
        value = entry.get(key)
        if isinstance(value, list) and value:
            return value
    return None


def spec_from_mapping(entry: Mapping[str, Any], *, identifier: str = "") -> Optional[ItemSpec]:
    """Build an ``ItemSpec`` from a mapping, filling gaps from ``DEFAULTS``."""
    ident = identifier or identifier_of(entry)
    if not ident:
        return None

    version = entry.get("version")
    if version is not None:
        version = str(version).strip() or None

    try:
        order = int(entry.get("order", DEFAULTS.spec_order))
    except (TypeError, ValueError):
        logger.warning(f"Invalid order {entry.get('order')!r} for {ident}; using {DEFAULTS.spec_order}")
        order = DEFAULTS.spec_order

    return ItemSpec(
        identifier=ident,
        required=bool(entry.get("required", DEFAULTS.required)),
        version=version,
        order=order,
        defer=bool(entry.get("defer", DEFAULTS.defer)),
    )


class _SpecSet:
    """Working set keyed by identifier: first-seen position, last-written value."""

    def __init__(self) -> None:
        self._specs: Dict[str, ItemSpec] = {}

    def add(self, candidate: Any) -> None:
        if isinstance(candidate, str):
            candidate = {"file": candidate}
        if not isinstance(candidate, Mapping):
            logger.debug(f"Skipping non-mapping item entry: {type(candidate).__name__}")
            return
        spec = spec_from_mapping(candidate)
        if spec is None:
            logger.debug("Skipping item entry without identifier")
            return
        # dict assignment keeps the original insertion slot for known keys
        self._specs[spec.identifier] = spec

    def add_all(self, entries: Iterable[Any]) -> None:
        for entry in entries:
            self.add(entry)

    def values(self) -> List[ItemSpec]:
        return list(self._specs.values())


def normalize_specs(raw: Any) -> List[ItemSpec]:
    """Normalize any supported input into a flat list of item specs.

    Accepted element shapes:
    - ``"dir/item.php"`` -> spec with defaults
    - ``{"file": ..., ...}`` or ``{"identifier": ..., ...}``
    - ``{"data": {...spec...}}`` or ``{"data": {"plugins": [...]}}``
    - ``{"plugins": [...]}`` / ``{"items": [...]}``

    Later occurrences of an identifier overwrite earlier ones; output keeps
    the position where an identifier was first seen. Unusable elements are
    skipped.
    """
    if isinstance(raw, (str, Mapping)):
        raw = [raw]
    if not isinstance(raw, list) and not isinstance(raw, tuple):
        return []

    specs = _SpecSet()
    for element in raw:
        if isinstance(element, str):
            specs.add(element)
            continue

        if not isinstance(element, Mapping):
            logger.debug(f"Skipping unsupported item entry: {type(element).__name__}")
            continue

        if identifier_of(element):
            specs.add(element)
            continue

        data = element.get("data")
        if isinstance(data, Mapping):
            if identifier_of(data):
                specs.add(data)
            else:
                nested = item_list_of(data)
                if nested:
                    specs.add_all(nested)

        nested = item_list_of(element)
        if nested:
            specs.add_all(nested)

    return specs.values()


__all__ = ["normalize_specs", "spec_from_mapping", "identifier_of", "item_list_of"]
