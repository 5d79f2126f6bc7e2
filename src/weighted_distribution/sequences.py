"""Lazy single-pass sequences returned by the sampler and allocator."""

from __future__ import annotations

from typing import Generic, Iterator, TypeVar

T = TypeVar("T")


class SinglePassSequence(Generic[T]):
    """Wrap a generator so that a second pass over it is rejected.

    Elements are computed only as they are pulled. Abandoning the sequence
    stops the remaining computation; nothing needs to be released. Pulling
    with ``next()`` before the first ``iter()`` is allowed and continues the
    same pass.
    """

    def __init__(self, source: Iterator[T]) -> None:
        self._source = source
        self._iterated = False
        self._started = False
        self._exhausted = False

    @property
    def consumed(self) -> bool:
        return self._started or self._iterated

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def __iter__(self) -> "SinglePassSequence[T]":
        if self._iterated or self._exhausted:
            raise RuntimeError("sequence has already been consumed")
        self._iterated = True
        return self

    def __next__(self) -> T:
        self._started = True
        try:
            return next(self._source)
        except StopIteration:
            self._exhausted = True
            raise


__all__ = ["SinglePassSequence"]
