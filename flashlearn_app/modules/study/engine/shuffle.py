# File: flashlearn_app/modules/study/engine/shuffle.py
import random


def fisher_yates_shuffle(items, rng=None):
    """
    Return a uniformly random permutation of ``items`` as a new list.

    Walks from the last index down to 1, swapping position ``i`` with a
    uniformly drawn ``j`` in ``[0, i]``. ``rng`` is any object with
    ``randint`` (a ``random.Random`` in tests); defaults to the module RNG.
    """
    rng = rng or random
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled
