from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import Dict, List, Optional

from quiz_engine.config import Settings, load_settings
from quiz_engine.content import load_subjects
from quiz_engine.data_models import Subject, TestDefinition
from quiz_engine.quiz import ProgressStore, QuizSession, Shuffler
from quiz_engine.storage import JsonFileStore, KeyValueStore
from quiz_engine.utils.logging import configure_logging

logger = logging.getLogger(__name__)


class QuizSystem:
    """
    Facade wiring content, persistence and sessions together.

    Subject banks are loaded once, stored progress is read once, and every
    `new_session` shares the same `ProgressStore` so results recorded in one
    session are visible to the next.

    Attributes
    ----------
    settings : Settings
        Validated configuration, usually from config/default.yaml.
    subjects : Dict[str, Subject]
        Read-only question banks keyed by subject id.
    progress : ProgressStore
        Best-score records backed by the configured key-value store.
    """

    def __init__(
        self,
        settings: Settings,
        storage: Optional[KeyValueStore] = None,
        subjects: Optional[Dict[str, Subject]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings
        configure_logging(settings.logging.level, settings.logging.use_json)

        self.subjects = subjects if subjects is not None else load_subjects(settings.subjects)
        self.storage = storage or JsonFileStore(settings.paths.progress_file)
        self.progress = ProgressStore(self.storage, key=settings.storage_key)
        self.progress.load()
        self.rng = rng

    @classmethod
    def from_config(cls, config_path: Optional[Path] = None) -> "QuizSystem":
        """Instantiate the system from a YAML configuration file."""
        return cls(load_settings(config_path))

    def new_session(self) -> QuizSession:
        return QuizSession(
            self.subjects,
            self.progress,
            shuffler=Shuffler(self.rng),
            quiz_config=self.settings.quiz,
        )

    def subject(self, subject_id: str) -> Subject:
        try:
            return self.subjects[subject_id]
        except KeyError as exc:
            raise KeyError(f"Unknown subject: {subject_id}") from exc

    def tests_for(self, subject_id: str) -> List[TestDefinition]:
        return self.new_session().tests_for(self.subject(subject_id))
