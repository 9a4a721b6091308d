import random
import time
from typing import MutableSequence, Optional, TypeVar

T = TypeVar("T")


def shuffle_pairs(
    items: MutableSequence[T], seed: Optional[int] = None
) -> int:
    """Shuffle ``items`` in place and return the seed that was used.

    ``random.Random.shuffle`` is a Fisher-Yates shuffle. Without an explicit
    seed one is taken from the clock so orderings differ between runs.
    """
    if seed is None:
        seed = time.time_ns()
    random.Random(seed).shuffle(items)
    return seed
