from __future__ import annotations

import random
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")


class Shuffler:
    """Uniform random permutations drawn from an injectable random source."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def shuffle(self, items: Sequence[T]) -> List[T]:
        """Return a Fisher-Yates shuffled copy of ``items``; the input is left untouched."""
        cloned = list(items)
        for i in range(len(cloned) - 1, 0, -1):
            j = self.rng.randint(0, i)
            cloned[i], cloned[j] = cloned[j], cloned[i]
        return cloned


def shuffle(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    return Shuffler(rng).shuffle(items)
