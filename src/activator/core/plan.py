"""Plan building: run every collector and merge the results into one order."""
from __future__ import annotations

import logging
from typing import Iterator, List, Sequence

from .collectors import Collector
from .models import CollectedItem, ItemSpec
from .utils.profiling import span

logger = logging.getLogger(__name__)


class PlanBuilder:
    """Merge collector output into one plan sorted by ``order``.

    Collectors run in the order given. Their results are concatenated and
    then stable-sorted, so entries with equal ``order`` keep the sequence in
    which they were collected. Duplicate identifiers are kept.
    """

    def __init__(self, collectors: Sequence[Collector]) -> None:
        self.collectors = list(collectors)

    def build(self) -> List[CollectedItem]:
        collected: List[CollectedItem] = []
        for collector in self.collectors:
            with span("plan.collect", kind=collector.kind.value):
                items = collector.collect()
            logger.debug(f"{type(collector).__name__} collected {len(items)} item(s)")
            collected.extend(items)

        # sorted() is guaranteed stable
        return sorted(collected, key=lambda item: item.order)


def build_plan(collectors: Sequence[Collector]) -> List[CollectedItem]:
    return PlanBuilder(collectors).build()


def iter_plan_specs(plan: Sequence[CollectedItem]) -> Iterator[ItemSpec]:
    """Yield every spec of the plan in plan order, duplicates included."""
    for item in plan:
        yield from item.specs


def plan_identifiers(plan: Sequence[CollectedItem]) -> List[str]:
    return [spec.identifier for spec in iter_plan_specs(plan)]


__all__ = ["PlanBuilder", "build_plan", "iter_plan_specs", "plan_identifiers"]
