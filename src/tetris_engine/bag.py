"""Draw-without-replacement randomizer."""

from __future__ import annotations

import random
from typing import Generic, List, Optional, Sequence, TypeVar

T = TypeVar("T")


class Bag(Generic[T]):
    """Hand out ``values`` in random order, one full set at a time.

    Every value appears exactly once per traversal of the set.  The pool is
    refilled lazily, right after the draw that empties it, so a new bag never
    starts before the previous one is exhausted.
    """

    def __init__(self, values: Sequence[T], rng: Optional[random.Random] = None) -> None:
        if not values:
            raise ValueError("A bag needs at least one value")
        self._values = tuple(values)
        self._rng = rng or random.Random()
        self._pool: List[T] = list(self._values)

    @property
    def values(self) -> tuple:
        return self._values

    @property
    def remaining(self) -> List[T]:
        """Values still waiting in the current bag."""

        return list(self._pool)

    def draw(self) -> T:
        index = self._rng.randrange(len(self._pool))
        value = self._pool.pop(index)
        if not self._pool:
            self._pool = list(self._values)
        return value
