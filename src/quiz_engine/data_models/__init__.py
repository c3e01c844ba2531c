from .question import (
    PreparedQuestion,
    ProgressRecord,
    Question,
    ResultSummary,
    ReviewEntry,
    Subject,
    TestDefinition,
    TestKind,
)

__all__ = [
    "PreparedQuestion",
    "ProgressRecord",
    "Question",
    "ResultSummary",
    "ReviewEntry",
    "Subject",
    "TestDefinition",
    "TestKind",
]
