"""High level facade sharing one random source across the algorithms."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, TypeVar

from .allocator import BudgetedAllocator
from .clustering import ProximityClusterer
from .config import DistributionConfig
from .random_source import resolve_random, seeded_random
from .sampler import WeightedSampler
from .sequences import SinglePassSequence
from .telemetry import TelemetryPublisher
from .types import Cluster, Draw, RandomFn, WeightFn

T = TypeVar("T")


class DistributionEngine:
    """Bundle sampler, allocator, and clusterer behind a simple facade."""

    def __init__(
        self,
        *,
        config: Optional[DistributionConfig] = None,
        random_fn: Optional[RandomFn] = None,
        telemetry: Optional[TelemetryPublisher] = None,
    ) -> None:
        self.config = config or DistributionConfig()
        self.random_fn = resolve_random(random_fn)
        if telemetry is None and self.config.telemetry.enabled:
            telemetry = TelemetryPublisher(self.config.telemetry, random_fn=self.random_fn)
        self.telemetry = telemetry
        self.sampler = WeightedSampler(self.config.sampler, random_fn=self.random_fn)
        self.allocator = BudgetedAllocator(
            self.config.allocator,
            random_fn=self.random_fn,
            telemetry=self.telemetry,
        )
        self.clusterer = ProximityClusterer(self.config.clustering, telemetry=self.telemetry)

    @classmethod
    def seeded(cls, seed: int, *, config: Optional[DistributionConfig] = None) -> "DistributionEngine":
        return cls(config=config, random_fn=seeded_random(seed))

    def draw(self, items: Iterable[T], weight_fn: WeightFn) -> Optional[Draw[T]]:
        return self.sampler.draw(items, weight_fn)

    def draws(
        self,
        items: Iterable[T],
        weight_fn: WeightFn,
        max_roll: Optional[int] = None,
    ) -> SinglePassSequence[Draw[T]]:
        return self.sampler.draws(items, weight_fn, max_roll)

    def allocate(
        self,
        items: Iterable[T],
        cost_fn: WeightFn,
        rank_fn: Optional[WeightFn] = None,
        **kwargs,
    ) -> SinglePassSequence[T]:
        """Allocate the configured budget; keyword overrides go to the allocator."""

        return self.allocator.allocate(items, cost_fn, rank_fn, **kwargs)

    def cluster(
        self,
        points: Sequence[Sequence[float]],
        max_distance: Optional[float] = None,
    ) -> List[Cluster]:
        return self.clusterer.cluster(points, max_distance)


__all__ = ["DistributionEngine"]
