from .attempt import AttemptKind, AttemptState, Phase, advance, reduce, select_option, start_attempt, submit
from .builder import prepare, prepare_retry
from .partition import MAIN_TESTS_COUNT, QUESTIONS_PER_TEST, RANDOM_TEST_ID, partition
from .progress import ProgressStore
from .session import QuizSession, Screen, SessionState
from .shuffle import Shuffler, shuffle

__all__ = [
    "AttemptKind",
    "AttemptState",
    "Phase",
    "advance",
    "reduce",
    "select_option",
    "start_attempt",
    "submit",
    "prepare",
    "prepare_retry",
    "MAIN_TESTS_COUNT",
    "QUESTIONS_PER_TEST",
    "RANDOM_TEST_ID",
    "partition",
    "ProgressStore",
    "QuizSession",
    "Screen",
    "SessionState",
    "Shuffler",
    "shuffle",
]
