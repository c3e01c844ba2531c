"""Shared fixtures for quiz engine tests."""

from __future__ import annotations

import logging
import random
from typing import Callable, Tuple

import pytest

from quiz_engine.data_models import Question, Subject
from quiz_engine.quiz import ProgressStore, QuizSession, Shuffler
from quiz_engine.storage import InMemoryStore


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Drop the handler `configure_logging` installs so it never outlives a test's streams."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in [h for h in root.handlers if h.get_name() == "quiz_engine"]:
        root.removeHandler(handler)
    root.setLevel(level)


def build_bank(size: int) -> Tuple[Question, ...]:
    """Bank whose question i has options A{i}, B{i}, C{i} with A{i} correct."""
    return tuple(
        Question(
            question=f"Question {i}",
            correct_answer=f"A{i}",
            options=[f"A{i}", f"B{i}", f"C{i}"],
        )
        for i in range(size)
    )


@pytest.fixture
def make_bank() -> Callable[[int], Tuple[Question, ...]]:
    return build_bank


@pytest.fixture
def shuffler() -> Shuffler:
    """Deterministic shuffler so failures can be reproduced."""
    return Shuffler(random.Random(1234))


@pytest.fixture
def memory_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def progress_store(memory_store) -> ProgressStore:
    store = ProgressStore(memory_store)
    store.load()
    return store


@pytest.fixture
def make_session(progress_store, shuffler) -> Callable[..., QuizSession]:
    """Build a session over a single subject ``demo`` with the requested bank size."""

    def _make(size: int, subject_id: str = "demo") -> QuizSession:
        subject = Subject(id=subject_id, title="Demo", questions=build_bank(size))
        return QuizSession({subject_id: subject}, progress_store, shuffler=shuffler)

    return _make
