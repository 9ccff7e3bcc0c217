"""Environment collector: items of the group matching the current environment."""
from __future__ import annotations

import hmac
from typing import Any, List, Optional, Sequence

from ..diagnostics import DiagnosticsSink
from ..models import CollectedItem, CollectorKind, EnvironmentGroup
from ..normalize import item_list_of
from ..sources import EnvironmentIdentity
from .base import BaseCollector, entry_name
from .direct import shaped_spec


def normalize_identity(value: Any) -> str:
    """Canonical form used on both sides of a match: trailing slashes removed."""
    if not isinstance(value, str):
        return ""
    return value.strip().rstrip("/")


class EnvironmentCollector(BaseCollector):
    """Pick the first configured group whose URL equals the current environment.

    Groups are tried in configuration order and matched by exact string
    equality after normalization (no prefix or substring matching). At most
    one group contributes items.
    """

    kind = CollectorKind.ENVIRONMENT

    def __init__(
        self,
        groups: Any,
        *,
        environment: EnvironmentIdentity,
        patterns: Sequence[str],
        diagnostics: DiagnosticsSink | None = None,
    ) -> None:
        super().__init__(diagnostics)
        self.environment = environment
        self.patterns = list(patterns)
        self.groups: List[EnvironmentGroup] = []

        if not isinstance(groups, dict):
            if groups:
                self._diagnose(f"Expected a mapping of groups, got {type(groups).__name__}.")
            return

        for name, cfg in groups.items():
            if not isinstance(cfg, dict):
                self._diagnose(f"{name}: group must be a mapping, got {type(cfg).__name__}.")
                continue
            self.groups.append(
                EnvironmentGroup(
                    name=str(name),
                    match_value=normalize_identity(cfg.get("url")),
                    items=tuple(item_list_of(cfg) or ()),
                )
            )

    def match(self, identity: str) -> Optional[EnvironmentGroup]:
        current = normalize_identity(identity).encode("utf-8")
        for group in self.groups:
            if not group.match_value:
                continue
            if hmac.compare_digest(group.match_value.encode("utf-8"), current):
                return group
        return None

    def collect(self) -> List[CollectedItem]:
        if not self.groups:
            return []

        group = self.match(self.environment.current())
        if group is None:
            return []

        items: List[CollectedItem] = []
        for entry in group.items:
            order = self._order_of(entry, name=f"{group.name}: {entry_name(entry)}")
            spec, reason = shaped_spec(entry, self.patterns, order)
            if spec is None:
                self._diagnose(f'{group.name}: skipping item ({reason}): "{entry_name(entry)}".')
                continue
            items.append(
                CollectedItem(kind=self.kind, order=order, specs=(spec,), meta={"group": group.name})
            )
        return items


__all__ = ["EnvironmentCollector", "normalize_identity"]
