from .loader import load_settings
from .schema import LoggingConfig, PathsConfig, QuizConfig, Settings, SubjectConfig

__all__ = [
    "load_settings",
    "LoggingConfig",
    "PathsConfig",
    "QuizConfig",
    "Settings",
    "SubjectConfig",
]
