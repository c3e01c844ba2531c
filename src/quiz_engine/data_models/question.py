from __future__ import annotations

from enum import Enum
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Question(BaseModel):
    """Single multiple-choice item as it appears in a subject bank."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    question: str
    correct_answer: str = Field(alias="correctAnswer")
    options: Tuple[str, ...]

    @field_validator("options")
    @classmethod
    def validate_options(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        if len(value) < 2:
            raise ValueError("options must contain at least two choices")
        if len(set(value)) != len(value):
            raise ValueError("options must not repeat")
        return value

    @model_validator(mode="after")
    def correct_answer_is_an_option(self) -> "Question":
        if self.correct_answer not in self.options:
            raise ValueError("correctAnswer must be one of the options")
        return self


class Subject(BaseModel):
    """A named, read-only question bank."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    questions: Tuple[Question, ...] = ()

    @property
    def question_count(self) -> int:
        return len(self.questions)


class TestKind(str, Enum):
    __test__ = False

    MAIN = "main"
    RANDOM = "random"


class TestDefinition(BaseModel):
    """One of the fixed tests carved out of a subject bank."""

    __test__ = False

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    title: str
    kind: TestKind
    question_indexes: Tuple[int, ...] = Field(alias="questionIndexes")
    draw_size: int = Field(30, ge=1, description="Questions drawn per attempt from a random pool.")

    @property
    def is_random(self) -> bool:
        return self.kind is TestKind.RANDOM

    @property
    def attempt_size(self) -> int:
        """Number of questions one attempt of this test contains."""
        if self.is_random:
            return min(self.draw_size, len(self.question_indexes))
        return len(self.question_indexes)


class PreparedQuestion(BaseModel):
    """Attempt-scoped copy of a bank question with its options pre-shuffled."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    original_index: int = Field(alias="originalIndex")
    question: str
    correct_answer: str = Field(alias="correctAnswer")
    options: Tuple[str, ...]

    def is_correct(self, option: str | None) -> bool:
        return option is not None and option == self.correct_answer


class ReviewEntry(BaseModel):
    """Answer given to one question of a random test."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    question: PreparedQuestion
    chosen_option: str = Field(alias="chosenOption")
    is_correct: bool = Field(alias="isCorrect")


class ProgressRecord(BaseModel):
    """Best-ever outcome for one (subject, test) pair."""

    model_config = ConfigDict(populate_by_name=True)

    best_score: int = Field(0, ge=0, alias="bestScore")
    total: int = Field(0, ge=0)
    passed: bool = False


class ResultSummary(BaseModel):
    """Outcome of a finished main attempt, optionally including its mistakes retry."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    final_correct: int = Field(alias="finalCorrect")
    total: int
    main_correct: int = Field(alias="mainCorrect")
    mistake_correct: int = Field(0, alias="mistakeCorrect")
    mistakes: List[PreparedQuestion] = Field(default_factory=list)
    review_log: List[ReviewEntry] = Field(default_factory=list, alias="reviewLog")
    retried: bool = False

    @property
    def passed(self) -> bool:
        return self.final_correct == self.total

    @property
    def can_retry_mistakes(self) -> bool:
        return not self.retried and bool(self.mistakes) and self.final_correct < self.total
