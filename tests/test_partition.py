"""Tests for deriving fixed tests from a bank size."""

from __future__ import annotations

import pytest

from quiz_engine.data_models import TestKind
from quiz_engine.quiz import partition


def _main(tests):
    return [test for test in tests if test.kind is TestKind.MAIN]


@pytest.mark.parametrize("count", [0, 1, 29, 30, 31, 35, 269, 270, 271, 299, 300, 301, 450])
def test_main_tests_are_disjoint_prefix(count):
    """Main slices concatenate to exactly [0, count) and never start out of range."""
    tests = partition(count)
    covered = []
    for test in _main(tests):
        assert test.question_indexes, "no empty main test"
        assert test.question_indexes[0] < count
        assert list(test.question_indexes) == list(
            range(test.question_indexes[0], test.question_indexes[-1] + 1)
        )
        covered.extend(test.question_indexes)
    assert covered == list(range(count))
    assert len(set(covered)) == len(covered)


def test_full_bank_yields_ten_main_tests_and_random():
    tests = partition(300)
    assert [test.id for test in tests] == list(range(1, 12))
    assert all(len(test.question_indexes) == 30 for test in _main(tests))
    random_test = tests[-1]
    assert random_test.kind is TestKind.RANDOM
    assert random_test.question_indexes == tuple(range(300))


def test_tenth_test_absorbs_overflow():
    tests = partition(345)
    tenth = [test for test in tests if test.id == 10][0]
    assert tenth.question_indexes == tuple(range(270, 345))
    assert tests[-1].question_indexes == tuple(range(300))


def test_bank_of_35_questions():
    """Test 10 would start at 270, past the bank, so it is omitted."""
    tests = partition(35)
    assert [test.id for test in tests] == [1, 2, 11]
    assert tests[0].question_indexes == tuple(range(30))
    assert tests[1].question_indexes == tuple(range(30, 35))
    assert tests[2].question_indexes == tuple(range(35))
    assert all(test.question_indexes[0] < 35 for test in tests)


def test_small_bank_yields_single_truncated_test():
    tests = partition(12)
    assert [test.id for test in tests] == [1, 11]
    assert tests[0].question_indexes == tuple(range(12))
    assert tests[0].attempt_size == 12
    assert tests[1].attempt_size == 12


def test_empty_bank_has_no_tests():
    assert partition(0) == []
    assert partition(-5) == []


def test_partition_is_deterministic():
    assert partition(123) == partition(123)


def test_titles():
    tests = partition(60)
    assert tests[0].title == "Test 1"
    assert tests[-1].title == "Test 11 - Random"


def test_custom_shape():
    tests = partition(10, questions_per_test=4, main_tests_count=2, random_test_id=3, random_pool_limit=6)
    assert [(test.id, test.question_indexes) for test in tests] == [
        (1, (0, 1, 2, 3)),
        (2, tuple(range(4, 10))),
        (3, tuple(range(6))),
    ]
    assert tests[-1].attempt_size == 4
