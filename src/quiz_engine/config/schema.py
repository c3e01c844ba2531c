from __future__ import annotations

from pathlib import Path
from typing import List

from pydantic import BaseModel, Field, field_validator


class QuizConfig(BaseModel):
    """Shape of the fixed tests derived from each subject's question bank."""

    questions_per_test: int = Field(30, ge=1)
    main_tests_count: int = Field(10, ge=1)
    random_test_id: int = Field(11, ge=1)
    random_pool_limit: int = Field(300, ge=1)

    @field_validator("random_test_id")
    @classmethod
    def random_id_after_main_tests(cls, value: int, info) -> int:
        """Keep the random test id clear of the main test ids."""
        main_count = info.data.get("main_tests_count", 10)
        if value <= main_count:
            raise ValueError("random_test_id must be greater than main_tests_count")
        return value


class SubjectConfig(BaseModel):
    """A named question bank and where to load it from."""

    id: str = Field(..., min_length=1)
    title: str
    path: Path


class PathsConfig(BaseModel):
    """Filesystem layout for content and stored progress."""

    progress_file: Path = Field(Path("data/progress.json"))


class LoggingConfig(BaseModel):
    """Controls for logging output and format."""

    level: str = Field("INFO")
    use_json: bool = False


class Settings(BaseModel):
    """Top-level project configuration aggregating all sub-settings."""

    project_name: str = Field("Quiz Engine")
    quiz: QuizConfig = Field(default_factory=QuizConfig)
    subjects: List[SubjectConfig] = Field(default_factory=list)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    storage_key: str = Field("quiz-progress-v1", min_length=1)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("subjects")
    @classmethod
    def unique_subject_ids(cls, value: List[SubjectConfig]) -> List[SubjectConfig]:
        """Reject configurations that reuse a subject id."""
        seen = set()
        for subject in value:
            if subject.id in seen:
                raise ValueError(f"duplicate subject id: {subject.id}")
            seen.add(subject.id)
        return value
