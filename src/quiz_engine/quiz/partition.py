from __future__ import annotations

from typing import List

from quiz_engine.data_models import TestDefinition, TestKind

QUESTIONS_PER_TEST = 30
MAIN_TESTS_COUNT = 10
RANDOM_TEST_ID = 11
RANDOM_POOL_LIMIT = 300


def partition(
    question_count: int,
    *,
    questions_per_test: int = QUESTIONS_PER_TEST,
    main_tests_count: int = MAIN_TESTS_COUNT,
    random_test_id: int = RANDOM_TEST_ID,
    random_pool_limit: int = RANDOM_POOL_LIMIT,
) -> List[TestDefinition]:
    """
    Derive the fixed tests of a subject from the size of its question bank.

    Main tests take consecutive slices of ``questions_per_test`` questions. The last
    main test starts where it normally would but runs to the end of the bank, so any
    overflow past ``main_tests_count * questions_per_test`` lands there. Slices that
    would start beyond the bank, or be empty, are skipped. A random test over the first
    ``random_pool_limit`` questions follows whenever the bank is not empty.

    Examples
    --------
    >>> [t.id for t in partition(35)]
    [1, 2, 11]
    >>> partition(35)[1].question_indexes
    (30, 31, 32, 33, 34)
    """
    question_count = max(0, question_count)
    tests: List[TestDefinition] = []

    for i in range(main_tests_count):
        last = i == main_tests_count - 1
        start = i * questions_per_test
        end = question_count if last else min((i + 1) * questions_per_test, question_count)
        if start >= question_count or end <= start:
            continue
        tests.append(
            TestDefinition(
                id=i + 1,
                title=f"Test {i + 1}",
                kind=TestKind.MAIN,
                question_indexes=tuple(range(start, end)),
                draw_size=questions_per_test,
            )
        )

    pool_size = min(random_pool_limit, question_count)
    if pool_size > 0:
        tests.append(
            TestDefinition(
                id=random_test_id,
                title=f"Test {random_test_id} - Random",
                kind=TestKind.RANDOM,
                question_indexes=tuple(range(pool_size)),
                draw_size=questions_per_test,
            )
        )

    return tests
