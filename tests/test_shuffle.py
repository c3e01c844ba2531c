"""Tests for the permutation primitive."""

from __future__ import annotations

import random
from collections import Counter

import pytest

from quiz_engine.quiz import Shuffler, shuffle


@pytest.mark.parametrize("items", [[], [1], [1, 2], list(range(50)), ["a", "a", "b", "c", "c"]])
def test_shuffle_is_permutation(items):
    result = shuffle(items)
    assert Counter(result) == Counter(items)
    assert len(result) == len(items)


def test_shuffle_does_not_mutate_input():
    items = [1, 2, 3, 4, 5]
    Shuffler(random.Random(7)).shuffle(items)
    assert items == [1, 2, 3, 4, 5]


def test_injected_source_is_reproducible():
    first = Shuffler(random.Random(42)).shuffle(range(20))
    second = Shuffler(random.Random(42)).shuffle(range(20))
    assert first == second


def test_calls_are_independent_draws():
    shuffler = Shuffler(random.Random(3))
    draws = {tuple(shuffler.shuffle(range(10))) for _ in range(20)}
    assert len(draws) > 1


def test_every_position_is_reachable():
    shuffler = Shuffler(random.Random(0))
    firsts = Counter(shuffler.shuffle([0, 1, 2])[0] for _ in range(600))
    assert set(firsts) == {0, 1, 2}
    assert min(firsts.values()) > 100
