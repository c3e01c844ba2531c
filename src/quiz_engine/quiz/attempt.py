"""
Question-by-question state machine for one pass over a prepared sequence.

States are immutable ``AttemptState`` values; every transition is a pure function
returning a new state. A transition requested in the wrong phase is rejected: the
state comes back unchanged and a warning is logged, so a misbehaving front end can
never corrupt an attempt.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Sequence, Tuple, Union

from quiz_engine.data_models import PreparedQuestion, ReviewEntry
from quiz_engine.errors import InvalidTransition

logger = logging.getLogger(__name__)


class AttemptKind(str, Enum):
    MAIN = "main"
    MISTAKES_RETRY = "mistakes"


class Phase(str, Enum):
    AWAITING_SELECTION = "awaiting_selection"
    REVEALED = "revealed"
    COMPLETE = "complete"


@dataclass(frozen=True)
class AttemptState:
    """Snapshot of an in-flight attempt."""

    kind: AttemptKind
    random_test: bool
    questions: Tuple[PreparedQuestion, ...]
    cursor: int = 0
    phase: Phase = Phase.AWAITING_SELECTION
    selected: Optional[str] = None
    correct_count: int = 0
    mistakes: Tuple[PreparedQuestion, ...] = ()
    review_log: Tuple[ReviewEntry, ...] = ()
    last_correct: Optional[bool] = None

    @property
    def current_question(self) -> Optional[PreparedQuestion]:
        if self.phase is Phase.COMPLETE or not self.questions:
            return None
        return self.questions[self.cursor]

    @property
    def is_last(self) -> bool:
        return self.cursor >= len(self.questions) - 1

    @property
    def is_complete(self) -> bool:
        return self.phase is Phase.COMPLETE

    @property
    def revealed(self) -> bool:
        return self.phase is Phase.REVEALED

    @property
    def total(self) -> int:
        return len(self.questions)


@dataclass(frozen=True)
class SelectOption:
    option: str


@dataclass(frozen=True)
class SubmitAnswer:
    pass


@dataclass(frozen=True)
class Advance:
    pass


AttemptEvent = Union[SelectOption, SubmitAnswer, Advance]


def start_attempt(
    questions: Sequence[PreparedQuestion],
    kind: AttemptKind = AttemptKind.MAIN,
    random_test: bool = False,
) -> AttemptState:
    """Create the initial state; an empty sequence is complete from the start."""
    phase = Phase.AWAITING_SELECTION if questions else Phase.COMPLETE
    return AttemptState(
        kind=kind,
        random_test=random_test,
        questions=tuple(questions),
        phase=phase,
    )


def _require(state: AttemptState, event: str, phase: Phase) -> None:
    if state.phase is not phase:
        raise InvalidTransition(event, state.phase.value)


def _rejected(state: AttemptState, exc: InvalidTransition) -> AttemptState:
    logger.warning("Rejected attempt transition: %s", exc)
    return state


def select_option(state: AttemptState, option: str) -> AttemptState:
    """Record the learner's choice for the current question without scoring it."""
    try:
        _require(state, "select_option", Phase.AWAITING_SELECTION)
        if option not in state.questions[state.cursor].options:
            raise InvalidTransition(f"select_option({option!r})", "not an option of the question")
    except InvalidTransition as exc:
        return _rejected(state, exc)
    return replace(state, selected=option)


def submit(state: AttemptState) -> AttemptState:
    """Score the selected option and reveal the correct answer."""
    try:
        _require(state, "submit", Phase.AWAITING_SELECTION)
        if state.selected is None:
            raise InvalidTransition("submit", "no option is selected")
    except InvalidTransition as exc:
        return _rejected(state, exc)

    question = state.questions[state.cursor]
    is_correct = question.is_correct(state.selected)
    correct_count = state.correct_count + (1 if is_correct else 0)
    mistakes = state.mistakes
    review_log = state.review_log

    if state.kind is AttemptKind.MAIN:
        if state.random_test:
            review_log = review_log + (
                ReviewEntry(question=question, chosen_option=state.selected, is_correct=is_correct),
            )
        elif not is_correct:
            mistakes = mistakes + (question,)

    return replace(
        state,
        phase=Phase.REVEALED,
        correct_count=correct_count,
        mistakes=mistakes,
        review_log=review_log,
        last_correct=is_correct,
    )


def advance(state: AttemptState) -> AttemptState:
    """Move past a revealed question, completing the attempt after the last one."""
    try:
        _require(state, "advance", Phase.REVEALED)
    except InvalidTransition as exc:
        return _rejected(state, exc)

    if state.is_last:
        logger.info(
            "Attempt complete: kind=%s correct=%d/%d",
            state.kind.value,
            state.correct_count,
            state.total,
        )
        return replace(state, phase=Phase.COMPLETE)
    return replace(
        state,
        cursor=state.cursor + 1,
        selected=None,
        phase=Phase.AWAITING_SELECTION,
        last_correct=None,
    )


def reduce(state: AttemptState, event: AttemptEvent) -> AttemptState:
    """Apply a single event to the attempt."""
    if isinstance(event, SelectOption):
        return select_option(state, event.option)
    if isinstance(event, SubmitAnswer):
        return submit(state)
    if isinstance(event, Advance):
        return advance(state)
    logger.warning("Ignoring unknown attempt event: %r", event)
    return state
