"""Item registry contract and an in-memory implementation.

The registry is the system of record for which items exist, which version
they report and whether they are active. The planner only reads it and
issues ``activate`` / ``deactivate`` calls.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Protocol, Set

logger = logging.getLogger(__name__)


class RegistryView(Protocol):
    def exists(self, identifier: str) -> bool:
        ...

    def current_version(self, identifier: str) -> Optional[str]:
        ...

    def is_active(self, identifier: str) -> bool:
        ...

    def activate(self, identifier: str) -> None:
        ...

    def deactivate(self, identifiers: Set[str]) -> None:
        ...

    def list_active(self) -> Set[str]:
        ...


@dataclass
class InMemoryRegistry:
    """Dictionary-backed registry.

    ``versions`` maps every installed identifier to its reported version
    (``None`` when the item reports none). Every state change is appended to
    ``history`` as ``("activate", id)`` / ``("deactivate", id)``.

    Example:
        registry = InMemoryRegistry.from_items({"a/a.php": "1.2.0"}, active=["a/a.php"])
    """

    versions: Dict[str, Optional[str]] = field(default_factory=dict)
    active: Set[str] = field(default_factory=set)
    history: List[tuple[str, str]] = field(default_factory=list)

    @classmethod
    def from_items(
        cls,
        items: Mapping[str, Optional[str]],
        *,
        active: Iterable[str] = (),
    ) -> "InMemoryRegistry":
        return cls(versions=dict(items), active=set(active))

    def exists(self, identifier: str) -> bool:
        return identifier in self.versions

    def current_version(self, identifier: str) -> Optional[str]:
        version = self.versions.get(identifier)
        return version or None

    def is_active(self, identifier: str) -> bool:
        return identifier in self.active

    def activate(self, identifier: str) -> None:
        if identifier in self.active:
            return
        if identifier not in self.versions:
            logger.warning(f"Refusing to activate unknown item {identifier}")
            return
        self.active.add(identifier)
        self.history.append(("activate", identifier))

    def deactivate(self, identifiers: Set[str]) -> None:
        for identifier in sorted(identifiers):
            if identifier in self.active:
                self.active.discard(identifier)
                self.history.append(("deactivate", identifier))

    def list_active(self) -> Set[str]:
        return set(self.active)


__all__ = ["RegistryView", "InMemoryRegistry"]
