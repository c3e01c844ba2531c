from __future__ import annotations

import copy
import json
import logging
from typing import Dict, Optional

from pydantic import ValidationError

from quiz_engine.data_models import ProgressRecord, TestDefinition
from quiz_engine.errors import PersistenceReadFailure
from quiz_engine.storage import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "quiz-progress-v1"

ProgressMapping = Dict[str, Dict[str, Dict[str, object]]]


def _parse_mapping(raw: str) -> ProgressMapping:
    """Decode and validate a stored progress blob, raising on any malformed entry."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise PersistenceReadFailure(f"Stored progress is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise PersistenceReadFailure("Stored progress is not a mapping of subjects")

    mapping: ProgressMapping = {}
    for subject_id, tests in data.items():
        if not isinstance(tests, dict):
            raise PersistenceReadFailure(f"Progress for {subject_id!r} is not a mapping of tests")
        mapping[subject_id] = {}
        for test_id, record in tests.items():
            try:
                parsed = ProgressRecord.model_validate(record)
            except ValidationError as exc:
                raise PersistenceReadFailure(
                    f"Invalid progress record for {subject_id}/{test_id}: {exc}"
                ) from exc
            mapping[subject_id][str(test_id)] = parsed.model_dump(by_alias=True)
    return mapping


class ProgressStore:
    """
    Best-score bookkeeping for every (subject, test) pair.

    The whole mapping ``{subject_id: {test_id: {bestScore, total, passed}}}`` lives
    under a single storage key. It is read once by `load`, and every recorded outcome
    merges into the in-memory copy and writes the entire mapping back. Storage
    failures never escape: a failed read starts from empty progress and a failed
    write keeps the in-memory mapping as the source of truth for the session.
    """

    def __init__(self, storage: KeyValueStore, key: str = DEFAULT_STORAGE_KEY):
        self.storage = storage
        self.key = key
        self._progress: ProgressMapping = {}

    def load(self) -> ProgressMapping:
        """Read the stored mapping, falling back to empty progress when it is missing or broken."""
        try:
            raw = self.storage.get(self.key)
            self._progress = _parse_mapping(raw) if raw else {}
        except Exception as exc:
            # Any backend failure, not only malformed data, degrades to empty progress.
            logger.warning("Failed to load progress from %r: %s", self.key, exc)
            self._progress = {}
        return self.snapshot()

    def save(self) -> bool:
        """Write the whole mapping back; returns False when the backend refused it."""
        try:
            self.storage.set(self.key, json.dumps(self._progress, ensure_ascii=False))
        except Exception as exc:
            logger.warning("Failed to save progress to %r: %s", self.key, exc)
            return False
        return True

    def snapshot(self) -> ProgressMapping:
        return copy.deepcopy(self._progress)

    def get(self, subject_id: str, test_id: int) -> Optional[ProgressRecord]:
        record = self._progress.get(subject_id, {}).get(str(test_id))
        if record is None:
            return None
        return ProgressRecord.model_validate(record)

    def summary_for(self, subject_id: str, test: TestDefinition) -> ProgressRecord:
        """Stored record for a test, or an untouched one sized to the test."""
        return self.get(subject_id, test.id) or ProgressRecord(
            best_score=0, total=test.attempt_size, passed=False
        )

    def record_outcome(
        self,
        subject_id: str,
        test: TestDefinition,
        final_correct: int,
        total: int,
    ) -> ProgressRecord:
        """Merge a finished attempt into the best-score record and persist the full mapping."""
        existing = self.get(subject_id, test.id)
        best_score = max(existing.best_score if existing else 0, final_correct)
        record = ProgressRecord(best_score=best_score, total=total, passed=best_score == total)

        subject_progress = dict(self._progress.get(subject_id, {}))
        subject_progress[str(test.id)] = record.model_dump(by_alias=True)
        self._progress = {**self._progress, subject_id: subject_progress}

        logger.info(
            "Recorded outcome: subject=%s test=%s correct=%d best=%d/%d",
            subject_id,
            test.id,
            final_correct,
            best_score,
            total,
        )
        self.save()
        return record

    def clear(self) -> bool:
        """Forget all stored progress."""
        self._progress = {}
        return self.save()
