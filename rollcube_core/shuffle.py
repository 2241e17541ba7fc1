from __future__ import annotations

import random
from typing import List, Optional, Sequence, TypeVar

T = TypeVar('T')


def fisher_yates(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """Returns a shuffled copy of items using an in-place Fisher-Yates pass on the copy."""
    rng = rng or random.Random()
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = rng.randint(0, i)
        out[i], out[j] = out[j], out[i]
    return out


def draw_interval(rng: random.Random, low: int, high: int) -> int:
    """Draws an integer in [low, high] inclusive."""
    return rng.randint(low, high)
