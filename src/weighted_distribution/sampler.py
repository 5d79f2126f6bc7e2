"""Weighted sampling over arbitrary item sequences.

Items and weights are always paired positionally. Nothing is keyed by item
value, so value-equal items remain separate entries of the population.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional, Sequence, TypeVar

from .config import SamplerConfig
from .random_source import resolve_random
from .sequences import SinglePassSequence
from .types import Draw, RandomFn, WeightFn

T = TypeVar("T")


def draw_index(weights: Sequence[float], random_fn: RandomFn) -> Optional[int]:
    """Pick a position with probability proportional to its weight.

    Returns ``None`` when the weights are empty or do not sum to a positive
    total. The scan runs in input order and the first position whose
    cumulative weight reaches the threshold wins, so earlier positions win
    ties. Negative weights are not rejected: a positive prefix can then
    exceed the total and win early. If no prefix reaches the threshold, which
    requires a source returning values outside ``[0, 1)``, ``None`` is
    returned.
    """

    total = 0.0
    for weight in weights:
        total += weight
    if total <= 0:
        return None
    threshold = random_fn() * total
    cumulative = 0.0
    for index, weight in enumerate(weights):
        cumulative += weight
        if cumulative >= threshold:
            return index
    return None


def weighted_draw(
    items: Iterable[T],
    weight_fn: WeightFn,
    *,
    random_fn: Optional[RandomFn] = None,
) -> Optional[Draw[T]]:
    """Draw one item with probability proportional to ``weight_fn(item)``."""

    population = list(items)
    return _draw(population, weight_fn, resolve_random(random_fn))


def weighted_draws(
    items: Iterable[T],
    weight_fn: WeightFn,
    max_roll: int,
    *,
    random_fn: Optional[RandomFn] = None,
) -> SinglePassSequence[Draw[T]]:
    """Lazily produce up to ``max_roll`` independent draws.

    Every draw recomputes the weights and rescans the population. The
    sequence stops early at the first draw that yields no result.
    """

    population = list(items)
    return SinglePassSequence(_roll(population, weight_fn, max_roll, resolve_random(random_fn)))


def _draw(population: Sequence[T], weight_fn: WeightFn, random_fn: RandomFn) -> Optional[Draw[T]]:
    weights = [weight_fn(item) for item in population]
    index = draw_index(weights, random_fn)
    if index is None:
        return None
    return Draw(item=population[index], index=index, weight=weights[index])


def _roll(
    population: Sequence[T],
    weight_fn: WeightFn,
    max_roll: int,
    random_fn: RandomFn,
) -> Iterator[Draw[T]]:
    for _ in range(max_roll):
        result = _draw(population, weight_fn, random_fn)
        if result is None:
            return
        yield result


class WeightedSampler:
    """Weighted selection bound to one random source."""

    def __init__(
        self,
        config: Optional[SamplerConfig] = None,
        *,
        random_fn: Optional[RandomFn] = None,
    ) -> None:
        self.config = config or SamplerConfig()
        self._random = resolve_random(random_fn)

    def draw(self, items: Iterable[T], weight_fn: WeightFn) -> Optional[Draw[T]]:
        return weighted_draw(items, weight_fn, random_fn=self._random)

    def choice(self, items: Iterable[T], weight_fn: WeightFn, default: Optional[T] = None) -> Optional[T]:
        """Return the drawn item itself, or ``default`` when nothing can be drawn."""

        result = self.draw(items, weight_fn)
        if result is None:
            return default
        return result.item

    def draws(
        self,
        items: Iterable[T],
        weight_fn: WeightFn,
        max_roll: Optional[int] = None,
    ) -> SinglePassSequence[Draw[T]]:
        rolls = self.config.max_roll if max_roll is None else max_roll
        return weighted_draws(items, weight_fn, rolls, random_fn=self._random)


__all__ = ["WeightedSampler", "draw_index", "weighted_draw", "weighted_draws"]
