import random
from collections import Counter

import pytest

from flashlearn_app.modules.study.engine.shuffle import fisher_yates_shuffle


@pytest.mark.parametrize('size', [1, 2, 5, 40])
def test_shuffle_is_a_permutation(size):
    items = list(range(size))
    shuffled = fisher_yates_shuffle(items, random.Random(size))

    assert len(shuffled) == size
    assert Counter(shuffled) == Counter(items)


def test_shuffle_returns_new_list():
    items = ['a', 'b', 'c', 'd']
    shuffled = fisher_yates_shuffle(items, random.Random(3))

    assert items == ['a', 'b', 'c', 'd']
    assert shuffled is not items


def test_shuffle_handles_empty_input():
    assert fisher_yates_shuffle([]) == []


def test_shuffle_is_deterministic_with_seed():
    items = list('abcdefgh')
    assert fisher_yates_shuffle(items, random.Random(42)) == fisher_yates_shuffle(items, random.Random(42))


def test_shuffle_draws_j_from_zero_to_i():
    calls = []

    class RecordingRng:
        def randint(self, low, high):
            calls.append((low, high))
            return low

    fisher_yates_shuffle(list(range(5)), RecordingRng())
    assert calls == [(0, 4), (0, 3), (0, 2), (0, 1)]


def test_every_ordering_is_reachable():
    rng = random.Random(7)
    seen = Counter(tuple(fisher_yates_shuffle('abc', rng)) for _ in range(3000))

    assert len(seen) == 6
    # Roughly uniform: each of the 6 orderings lands near 500
    assert min(seen.values()) > 350
