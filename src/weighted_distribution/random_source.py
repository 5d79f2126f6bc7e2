"""Uniform random sources injected into the sampling algorithms."""

from __future__ import annotations

import random
from typing import Optional

from .types import RandomFn


def seeded_random(seed: int | float | str | bytes | None) -> RandomFn:
    """Return a deterministic ``[0, 1)`` source backed by a private generator."""

    return random.Random(seed).random


def resolve_random(random_fn: Optional[RandomFn] = None) -> RandomFn:
    """Use the supplied source or create an unseeded private one."""

    if random_fn is not None:
        return random_fn
    return random.Random().random


__all__ = ["resolve_random", "seeded_random"]
