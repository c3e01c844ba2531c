from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from quiz_engine.data_models import PreparedQuestion, Question, TestDefinition

from .shuffle import Shuffler

logger = logging.getLogger(__name__)


def _prepare_one(index: int, source: Question, shuffler: Shuffler) -> PreparedQuestion:
    return PreparedQuestion(
        original_index=index,
        question=source.question,
        correct_answer=source.correct_answer,
        options=tuple(shuffler.shuffle(source.options)),
    )


def prepare(
    subject_questions: Sequence[Question],
    test: TestDefinition,
    shuffler: Optional[Shuffler] = None,
) -> List[PreparedQuestion]:
    """
    Build the ordered, answer-randomized question sequence for one attempt.

    Random tests draw ``test.attempt_size`` distinct indexes from their pool; main
    tests use their slice as is. Each question gets its own shuffled copy of the
    options and the whole sequence is shuffled before it is returned.
    """
    shuffler = shuffler or Shuffler()
    indexes: Sequence[int] = test.question_indexes
    if test.is_random:
        indexes = shuffler.shuffle(test.question_indexes)[: test.attempt_size]

    ordered: List[PreparedQuestion] = []
    for index in indexes:
        if not 0 <= index < len(subject_questions):
            raise ValueError(
                f"Test {test.id} refers to question {index} outside a bank of {len(subject_questions)}"
            )
        ordered.append(_prepare_one(index, subject_questions[index], shuffler))

    logger.debug("Prepared %d questions for test %s", len(ordered), test.id)
    return shuffler.shuffle(ordered)


def prepare_retry(
    mistakes: Sequence[PreparedQuestion],
    shuffler: Optional[Shuffler] = None,
) -> List[PreparedQuestion]:
    """Reorder missed questions for a mistakes retry, reshuffling each one's options."""
    shuffler = shuffler or Shuffler()
    return [
        question.model_copy(update={"options": tuple(shuffler.shuffle(question.options))})
        for question in shuffler.shuffle(mistakes)
    ]
