"""Direct collector: an explicit list of items to keep active."""
from __future__ import annotations

import dataclasses
from typing import Any, List, Sequence

from ..diagnostics import DiagnosticsSink
from ..models import CollectedItem, CollectorKind, ItemSpec
from ..normalize import identifier_of, spec_from_mapping
from ..utils.patterns import matches_any_pattern
from .base import BaseCollector, as_list, entry_name


def shaped_spec(
    entry: Any,
    patterns: Sequence[str],
    order: int,
) -> tuple[ItemSpec | None, str]:
    """Validate an item entry's identifier shape and build its spec.

    Returns ``(spec, "")`` on success or ``(None, reason)`` when the entry has
    no identifier or the identifier does not match ``patterns``.
    """
    if isinstance(entry, str):
        entry = {"file": entry}
    if not isinstance(entry, dict):
        return None, f"expected string or mapping, got {type(entry).__name__}"

    ident = identifier_of(entry)
    if not ident:
        return None, 'missing "file"'
    if not matches_any_pattern(ident, list(patterns)):
        return None, f'invalid item file "{ident}"'

    spec = spec_from_mapping(entry, identifier=ident)
    if spec is None:
        return None, "unusable entry"
    return dataclasses.replace(spec, order=order), ""


class DirectCollector(BaseCollector):
    """Emit one candidate per configured item whose identifier has a valid shape."""

    kind = CollectorKind.DIRECT

    def __init__(
        self,
        entries: Any,
        *,
        patterns: Sequence[str],
        diagnostics: DiagnosticsSink | None = None,
    ) -> None:
        super().__init__(diagnostics)
        self.patterns = list(patterns)
        self.items: List[CollectedItem] = []

        for entry in as_list(entries):
            name = entry_name(entry)
            order = self._order_of(entry, name=name)
            spec, reason = shaped_spec(entry, self.patterns, order)
            if spec is None:
                self._diagnose(f'Skipping invalid item entry ({reason}): "{name}".')
                continue
            self.items.append(CollectedItem(kind=self.kind, order=order, specs=(spec,)))

    def collect(self) -> List[CollectedItem]:
        return list(self.items)


__all__ = ["DirectCollector", "shaped_spec"]
