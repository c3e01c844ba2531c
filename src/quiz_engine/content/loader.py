from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, Tuple

from pydantic import TypeAdapter, ValidationError

from quiz_engine.config import SubjectConfig
from quiz_engine.data_models import Question, Subject

logger = logging.getLogger(__name__)

_BANK_ADAPTER = TypeAdapter(Tuple[Question, ...])


def load_question_bank(path: Path) -> Tuple[Question, ...]:
    """Read a JSON array of ``{question, correctAnswer, options}`` records in bank order."""
    with path.open("r", encoding="utf-8") as handle:
        try:
            payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Question bank {path} is not valid JSON.") from exc
    try:
        return _BANK_ADAPTER.validate_python(payload)
    except ValidationError as exc:
        raise ValueError(f"Invalid question bank {path}: {exc}") from exc


def load_subject(config: SubjectConfig) -> Subject:
    """Load one configured subject; a missing bank file yields a subject without questions."""
    if not config.path.exists():
        logger.warning("Question bank for %s not found at %s", config.id, config.path)
        return Subject(id=config.id, title=config.title)
    questions = load_question_bank(config.path)
    logger.info("Loaded %d questions for %s", len(questions), config.id)
    return Subject(id=config.id, title=config.title, questions=questions)


def load_subjects(configs: Iterable[SubjectConfig]) -> Dict[str, Subject]:
    """Load every configured subject, keyed by id in configuration order."""
    return {config.id: load_subject(config) for config in configs}
