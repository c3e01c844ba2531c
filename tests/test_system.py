"""Tests for the system facade wiring."""

from __future__ import annotations

import json
import random

import pytest
import yaml

from quiz_engine.quiz import Screen
from quiz_engine.storage import InMemoryStore
from quiz_engine.system import QuizSystem


@pytest.fixture
def system(tmp_path):
    (tmp_path / "config").mkdir()
    bank = [
        {"question": f"Question {i}", "correctAnswer": f"A{i}", "options": [f"A{i}", f"B{i}", f"C{i}"]}
        for i in range(45)
    ]
    (tmp_path / "bank.json").write_text(json.dumps(bank), encoding="utf-8")
    config = tmp_path / "config" / "default.yaml"
    config.write_text(
        yaml.safe_dump({"subjects": [{"id": "demo", "title": "Demo", "path": "bank.json"}]}),
        encoding="utf-8",
    )
    return QuizSystem.from_config(config)


def test_from_config_loads_subjects(system):
    assert system.subject("demo").question_count == 45
    assert [test.id for test in system.tests_for("demo")] == [1, 2, 11]


def test_unknown_subject(system):
    with pytest.raises(KeyError):
        system.subject("nope")


def test_sessions_share_progress(system):
    first = system.new_session()
    first.choose_subject("demo")
    first.choose_test(2)
    while first.screen is Screen.QUIZ:
        first.select_option(first.current_question.correct_answer)
        first.submit_answer()
        first.advance()
    first.finish_session()

    second = system.new_session()
    second.choose_subject("demo")
    assert second.progress_summaries()[2].passed


def test_injected_storage_and_rng(system):
    storage = InMemoryStore(
        {"quiz-progress-v1": json.dumps({"demo": {"1": {"bestScore": 12, "total": 30, "passed": False}}})}
    )
    wired = QuizSystem(system.settings, storage=storage, rng=random.Random(5))
    assert wired.progress.get("demo", 1).best_score == 12
    session = wired.new_session()
    session.choose_subject("demo")
    session.choose_test(1)
    order = [q.original_index for q in session.state.attempt.questions]

    again = QuizSystem(system.settings, storage=InMemoryStore(), rng=random.Random(5)).new_session()
    again.choose_subject("demo")
    again.choose_test(1)
    assert [q.original_index for q in again.state.attempt.questions] == order
