"""Common data types used across the weighted distribution package."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Generic, Iterator, Protocol, Sequence, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

Point3 = tuple[float, float, float]
WeightFn = Callable[[T], float]


class RandomFn(Protocol):
    """Callable returning a float uniformly distributed in ``[0, 1)``."""

    def __call__(self) -> float:  # pragma: no cover - protocol definition
        ...


@dataclass(frozen=True)
class Draw(Generic[T]):
    """A single successful weighted draw."""

    item: T
    index: int
    weight: float


@dataclass(frozen=True)
class AllocationStep(Generic[T]):
    """One round of a budgeted allocation."""

    round: int
    item: T
    cost: float
    rank: float
    budget_before: float
    budget_after: float


class Cluster:
    """Indices of a cluster bound to the point array they were computed from.

    Iterating a cluster lazily yields the original point values in the order
    they joined the cluster.
    """

    __slots__ = ("_indices", "_points")

    def __init__(self, indices: Sequence[int], points: Sequence[Sequence[float]]) -> None:
        self._indices = tuple(indices)
        self._points = points

    @property
    def indices(self) -> tuple[int, ...]:
        return self._indices

    def points(self) -> list[Sequence[float]]:
        return list(self)

    def __iter__(self) -> Iterator[Sequence[float]]:
        for index in self._indices:
            yield self._points[index]

    def __len__(self) -> int:
        return len(self._indices)

    def __contains__(self, index: object) -> bool:
        return index in self._indices

    def __repr__(self) -> str:
        return f"Cluster(indices={list(self._indices)!r})"


class TelemetryEvent(BaseModel):
    """Structured event emitted by the allocator and clusterer."""

    event: str
    payload: dict[str, object] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


__all__ = [
    "AllocationStep",
    "Cluster",
    "Draw",
    "Point3",
    "RandomFn",
    "TelemetryEvent",
    "WeightFn",
]
