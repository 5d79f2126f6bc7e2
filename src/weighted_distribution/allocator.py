"""Budget-constrained allocation built on weighted sampling.

Each round draws one affordable candidate with probability proportional to
its rank and deducts its cost from the remaining budget. Candidates are
sorted by cost once, so unaffordable ones are always at the tail of the
working list and can be pruned without re-sorting.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Generic, Iterable, Iterator, List, Optional, TypeVar

from .config import AllocatorConfig
from .random_source import resolve_random
from .sampler import draw_index
from .sequences import SinglePassSequence
from .telemetry import TelemetryPublisher
from .types import AllocationStep, RandomFn, WeightFn

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

FINISH_EXHAUSTED = "exhausted"
FINISH_MAX_ROLL = "max_roll"


@dataclass
class _Candidate(Generic[T]):
    item: T
    cost: float
    rank: float


class BudgetedAllocator:
    """Spend a budget on candidates drawn by rank."""

    def __init__(
        self,
        config: Optional[AllocatorConfig] = None,
        *,
        random_fn: Optional[RandomFn] = None,
        telemetry: Optional[TelemetryPublisher] = None,
    ) -> None:
        self.config = config or AllocatorConfig()
        self._random = resolve_random(random_fn)
        self._telemetry = telemetry

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def steps(
        self,
        items: Iterable[T],
        cost_fn: WeightFn,
        rank_fn: Optional[WeightFn] = None,
        *,
        budget: Optional[float] = None,
        no_duplicate: Optional[bool] = None,
        max_roll: Optional[int] = None,
    ) -> SinglePassSequence[AllocationStep[T]]:
        """Lazily allocate, yielding a record for every chosen candidate.

        Unset keyword arguments fall back to the allocator config and
        ``rank_fn`` defaults to ``cost_fn``. Costs and ranks are computed
        once, when the first element is pulled.
        """

        run = _AllocationRun(
            items=items,
            cost_fn=cost_fn,
            rank_fn=rank_fn or cost_fn,
            budget=self.config.budget if budget is None else budget,
            no_duplicate=self.config.no_duplicate if no_duplicate is None else no_duplicate,
            max_roll=self.config.max_roll if max_roll is None else max_roll,
            random_fn=self._random,
            telemetry=self._telemetry,
        )
        return SinglePassSequence(iter(run))

    def allocate(
        self,
        items: Iterable[T],
        cost_fn: WeightFn,
        rank_fn: Optional[WeightFn] = None,
        *,
        budget: Optional[float] = None,
        no_duplicate: Optional[bool] = None,
        max_roll: Optional[int] = None,
    ) -> SinglePassSequence[T]:
        """Lazily allocate, yielding the chosen items only."""

        steps = self.steps(
            items,
            cost_fn,
            rank_fn,
            budget=budget,
            no_duplicate=no_duplicate,
            max_roll=max_roll,
        )
        return SinglePassSequence(step.item for step in steps)

    def attach_telemetry(self, telemetry: Optional[TelemetryPublisher]) -> None:
        self._telemetry = telemetry


class _AllocationRun(Generic[T]):
    """State owned by a single allocation; never shared between calls.

    Costs are not validated. A negative cost is always affordable and raises
    the budget by its magnitude when chosen, so the budget only stays
    non-increasing for non-negative costs.
    """

    def __init__(
        self,
        *,
        items: Iterable[T],
        cost_fn: WeightFn,
        rank_fn: WeightFn,
        budget: float,
        no_duplicate: bool,
        max_roll: int,
        random_fn: RandomFn,
        telemetry: Optional[TelemetryPublisher],
    ) -> None:
        self._items = items
        self._cost_fn = cost_fn
        self._rank_fn = rank_fn
        self.budget = budget
        self._no_duplicate = no_duplicate
        self._max_roll = max_roll
        self._random = random_fn
        self._telemetry = telemetry
        self._candidates: List[_Candidate[T]] = []

    def __iter__(self) -> Iterator[AllocationStep[T]]:
        self._candidates = self._materialize()
        rounds = 0
        while rounds < self._max_roll:
            self._prune_unaffordable()
            index = draw_index([candidate.rank for candidate in self._candidates], self._random)
            if index is None:
                self._finish(FINISH_EXHAUSTED, rounds)
                return
            chosen = self._candidates[index]
            before = self.budget
            self.budget -= chosen.cost
            rounds += 1
            step = AllocationStep(
                round=rounds,
                item=chosen.item,
                cost=chosen.cost,
                rank=chosen.rank,
                budget_before=before,
                budget_after=self.budget,
            )
            LOGGER.debug(
                "Round %d chose %r (cost=%s, rank=%s), budget %s -> %s",
                rounds,
                chosen.item,
                chosen.cost,
                chosen.rank,
                before,
                self.budget,
            )
            if self._no_duplicate:
                self._discard(chosen.item)
            self._emit(
                "allocation.step",
                round=rounds,
                cost=chosen.cost,
                rank=chosen.rank,
                budget=self.budget,
            )
            yield step
        self._finish(FINISH_MAX_ROLL, rounds)

    def _materialize(self) -> List[_Candidate[T]]:
        candidates = [
            _Candidate(item=item, cost=self._cost_fn(item), rank=self._rank_fn(item))
            for item in self._items
        ]
        candidates.sort(key=lambda candidate: candidate.cost)
        return candidates

    def _prune_unaffordable(self) -> None:
        candidates = self._candidates
        while candidates and candidates[-1].cost > self.budget:
            candidates.pop()

    def _discard(self, item: T) -> None:
        self._candidates = [candidate for candidate in self._candidates if candidate.item != item]

    def _finish(self, reason: str, rounds: int) -> None:
        LOGGER.debug("Allocation finished after %d rounds (%s), budget left %s", rounds, reason, self.budget)
        self._emit("allocation.finished", reason=reason, rounds=rounds, budget=self.budget)

    def _emit(self, event: str, **payload: object) -> None:
        if self._telemetry is None:
            return
        self._telemetry.publish(event, **payload)


def distribute_points(
    items: Iterable[T],
    cost_fn: WeightFn,
    rank_fn: Optional[WeightFn] = None,
    budget: float = 0.0,
    *,
    no_duplicate: bool = False,
    max_roll: int = 100,
    random_fn: Optional[RandomFn] = None,
) -> SinglePassSequence[T]:
    """Functional form of :meth:`BudgetedAllocator.allocate`."""

    allocator = BudgetedAllocator(random_fn=random_fn)
    return allocator.allocate(
        items,
        cost_fn,
        rank_fn,
        budget=budget,
        no_duplicate=no_duplicate,
        max_roll=max_roll,
    )


__all__ = ["BudgetedAllocator", "FINISH_EXHAUSTED", "FINISH_MAX_ROLL", "distribute_points"]
