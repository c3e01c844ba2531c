from __future__ import annotations


class QuizEngineError(Exception):
    """Base class for failures raised inside the quiz engine."""


class PersistenceReadFailure(QuizEngineError):
    """Stored progress could not be read or did not have the expected shape."""


class PersistenceWriteFailure(QuizEngineError):
    """Progress could not be written back to the storage backend."""


class InvalidTransition(QuizEngineError):
    """An attempt event arrived in a phase that does not accept it."""

    def __init__(self, event: str, phase: str):
        super().__init__(f"{event} is not valid while {phase}")
        self.event = event
        self.phase = phase
