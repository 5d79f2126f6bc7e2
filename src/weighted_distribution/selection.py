"""Uniform random selection helpers."""

from __future__ import annotations

from typing import MutableSequence, Optional, Sequence, TypeVar

from .random_source import resolve_random
from .types import RandomFn

T = TypeVar("T")


def random_index(length: int, random_fn: RandomFn) -> int:
    """Map a ``[0, 1)`` sample onto ``range(length)``."""

    return min(int(random_fn() * length), length - 1)


def random_item(items: Sequence[T], *, random_fn: Optional[RandomFn] = None) -> Optional[T]:
    """Choose a single item uniformly, or ``None`` when there is nothing to choose."""

    if not items:
        return None
    return items[random_index(len(items), resolve_random(random_fn))]


def random_pop(items: MutableSequence[T], *, random_fn: Optional[RandomFn] = None) -> Optional[T]:
    """Remove a uniformly chosen item from ``items`` and return it."""

    if not items:
        return None
    return items.pop(random_index(len(items), resolve_random(random_fn)))


def random_int(*ranges: tuple[int, int], random_fn: Optional[RandomFn] = None) -> int:
    """Pick one ``(start, end)`` range uniformly, then an integer inside it.

    Both bounds are inclusive. Returns ``0`` when no ranges are given.
    """

    if not ranges:
        return 0
    source = resolve_random(random_fn)
    if len(ranges) > 1:
        start, end = ranges[random_index(len(ranges), source)]
    else:
        start, end = ranges[0]
    low, high = min(start, end), max(start, end)
    return low + random_index(high - low + 1, source)


__all__ = ["random_index", "random_int", "random_item", "random_pop"]
