from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Mapping, Optional, Tuple

from quiz_engine.config import QuizConfig
from quiz_engine.data_models import (
    PreparedQuestion,
    ProgressRecord,
    ResultSummary,
    ReviewEntry,
    Subject,
    TestDefinition,
)

from . import attempt as machine
from .attempt import AttemptKind, AttemptState
from .builder import prepare, prepare_retry
from .partition import partition
from .progress import ProgressStore
from .shuffle import Shuffler

logger = logging.getLogger(__name__)


class Screen(str, Enum):
    SUBJECTS = "subjects"
    TESTS = "tests"
    QUIZ = "quiz"
    RESULT = "result"


@dataclass(frozen=True)
class SessionState:
    """Everything the presentation layer needs to render the current screen."""

    screen: Screen = Screen.SUBJECTS
    subject: Optional[Subject] = None
    tests: Tuple[TestDefinition, ...] = ()
    test: Optional[TestDefinition] = None
    attempt: Optional[AttemptState] = None
    main_correct: int = 0
    mistake_correct: int = 0
    mistakes: Tuple[PreparedQuestion, ...] = ()
    review_log: Tuple[ReviewEntry, ...] = ()
    retried: bool = False
    recorded: bool = False

    @property
    def current_question(self) -> Optional[PreparedQuestion]:
        if self.screen is not Screen.QUIZ or self.attempt is None:
            return None
        return self.attempt.current_question

    @property
    def final_correct(self) -> int:
        if self.test is not None and self.test.is_random:
            return self.main_correct
        return self.main_correct + self.mistake_correct


class QuizSession:
    """
    Drives one learner through subjects, tests, attempts and results.

    Each inbound UI event replaces the immutable `SessionState`. Events that do not
    apply to the current screen are ignored with a warning. A main attempt's outcome
    is recorded in the `ProgressStore` at most once: as soon as a mistakes retry
    finishes, or when the learner leaves the result screen with `finish_session`.
    Leaving through `exit_attempt` or `back_to_subjects` records nothing new.
    """

    def __init__(
        self,
        subjects: Mapping[str, Subject],
        progress: ProgressStore,
        shuffler: Optional[Shuffler] = None,
        quiz_config: Optional[QuizConfig] = None,
    ):
        self.subjects: Dict[str, Subject] = dict(subjects)
        self.progress = progress
        self.shuffler = shuffler or Shuffler()
        self.quiz_config = quiz_config or QuizConfig()
        self.state = SessionState()

    # -- outbound state -------------------------------------------------

    @property
    def screen(self) -> Screen:
        return self.state.screen

    @property
    def current_question(self) -> Optional[PreparedQuestion]:
        return self.state.current_question

    def tests_for(self, subject: Subject) -> List[TestDefinition]:
        cfg = self.quiz_config
        return partition(
            subject.question_count,
            questions_per_test=cfg.questions_per_test,
            main_tests_count=cfg.main_tests_count,
            random_test_id=cfg.random_test_id,
            random_pool_limit=cfg.random_pool_limit,
        )

    def progress_summaries(self) -> Dict[int, ProgressRecord]:
        """Best results for every test of the chosen subject."""
        subject = self.state.subject
        if subject is None:
            return {}
        return {test.id: self.progress.summary_for(subject.id, test) for test in self.state.tests}

    def result(self) -> Optional[ResultSummary]:
        state = self.state
        if state.test is None or state.screen is not Screen.RESULT:
            return None
        return ResultSummary(
            final_correct=state.final_correct,
            total=state.test.attempt_size,
            main_correct=state.main_correct,
            mistake_correct=state.mistake_correct,
            mistakes=list(state.mistakes),
            review_log=list(state.review_log),
            retried=state.retried,
        )

    # -- inbound events -------------------------------------------------

    def _ignored(self, event: str) -> SessionState:
        logger.warning("Ignoring %s on the %s screen", event, self.state.screen.value)
        return self.state

    def choose_subject(self, subject_id: str) -> SessionState:
        if self.state.screen not in (Screen.SUBJECTS, Screen.TESTS):
            return self._ignored("choose_subject")
        subject = self.subjects.get(subject_id)
        if subject is None:
            logger.warning("Unknown subject %r", subject_id)
            return self.state
        self.state = SessionState(
            screen=Screen.TESTS, subject=subject, tests=tuple(self.tests_for(subject))
        )
        return self.state

    def back_to_subjects(self) -> SessionState:
        if self.state.screen not in (Screen.TESTS, Screen.RESULT):
            return self._ignored("back_to_subjects")
        self.state = SessionState()
        return self.state

    def choose_test(self, test: TestDefinition | int) -> SessionState:
        state = self.state
        if state.screen is not Screen.TESTS or state.subject is None:
            return self._ignored("choose_test")
        test_id = test if isinstance(test, int) else test.id
        chosen = next((item for item in state.tests if item.id == test_id), None)
        if chosen is None:
            logger.warning("Subject %s has no test %r", state.subject.id, test_id)
            return state

        questions = prepare(state.subject.questions, chosen, self.shuffler)
        logger.info(
            "Starting main attempt: subject=%s test=%s questions=%d",
            state.subject.id,
            chosen.id,
            len(questions),
        )
        self.state = SessionState(
            screen=Screen.QUIZ,
            subject=state.subject,
            tests=state.tests,
            test=chosen,
            attempt=machine.start_attempt(
                questions, kind=AttemptKind.MAIN, random_test=chosen.is_random
            ),
        )
        return self._settle()

    def select_option(self, option: str) -> SessionState:
        return self._step("select_option", machine.SelectOption(option))

    def submit_answer(self) -> SessionState:
        return self._step("submit_answer", machine.SubmitAnswer())

    def advance(self) -> SessionState:
        return self._step("advance", machine.Advance())

    def exit_attempt(self) -> SessionState:
        """Abandon the running attempt; nothing from it is kept."""
        state = self.state
        if state.screen is not Screen.QUIZ:
            return self._ignored("exit_attempt")
        logger.info("Attempt abandoned: test=%s", state.test.id if state.test else None)
        self.state = SessionState(screen=Screen.TESTS, subject=state.subject, tests=state.tests)
        return self.state

    def start_mistakes_retry(self) -> SessionState:
        state = self.state
        summary = self.result()
        if summary is None or state.test is None or state.test.is_random:
            return self._ignored("start_mistakes_retry")
        if not summary.can_retry_mistakes:
            logger.warning("No mistakes retry available for test %s", state.test.id)
            return state

        questions = prepare_retry(state.mistakes, self.shuffler)
        logger.info("Starting mistakes retry: test=%s questions=%d", state.test.id, len(questions))
        self.state = replace(
            state,
            screen=Screen.QUIZ,
            attempt=machine.start_attempt(questions, kind=AttemptKind.MISTAKES_RETRY),
        )
        return self._settle()

    def finish_session(self) -> SessionState:
        """Leave the result screen for the test list, recording the outcome if still pending."""
        state = self.state
        if state.screen is not Screen.RESULT:
            return self._ignored("finish_session")
        self._record()
        self.state = SessionState(screen=Screen.TESTS, subject=state.subject, tests=state.tests)
        return self.state

    # -- internals ------------------------------------------------------

    def _step(self, event: str, attempt_event: machine.AttemptEvent) -> SessionState:
        if self.state.screen is not Screen.QUIZ or self.state.attempt is None:
            return self._ignored(event)
        self.state = replace(self.state, attempt=machine.reduce(self.state.attempt, attempt_event))
        return self._settle()

    def _settle(self) -> SessionState:
        """Fold a completed attempt into the session and show the result screen."""
        state = self.state
        current = state.attempt
        if current is None or not current.is_complete:
            return state

        if current.kind is AttemptKind.MAIN:
            self.state = replace(
                state,
                screen=Screen.RESULT,
                attempt=None,
                main_correct=current.correct_count,
                mistake_correct=0,
                mistakes=current.mistakes,
                review_log=current.review_log,
                retried=False,
                recorded=False,
            )
        else:
            self.state = replace(
                state,
                screen=Screen.RESULT,
                attempt=None,
                mistake_correct=current.correct_count,
                retried=True,
            )
            self._record()
        return self.state

    def _record(self) -> None:
        state = self.state
        if state.recorded or state.subject is None or state.test is None:
            return
        self.progress.record_outcome(
            state.subject.id, state.test, state.final_correct, state.test.attempt_size
        )
        self.state = replace(state, recorded=True)
