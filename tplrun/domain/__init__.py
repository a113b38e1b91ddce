"""Domain layer: errors, constants and schemas."""

from .errors import (
    ConfigError,
    ErrorCodes,
    ScriptExecutionError,
    TemplateError,
    TplrunError,
    UnknownActionError,
)
from .schemas import (
    ExpandChoice,
    Question,
    QuestionType,
    TemplateAction,
)

__all__ = [
    "TplrunError",
    "TemplateError",
    "ConfigError",
    "ScriptExecutionError",
    "UnknownActionError",
    "ErrorCodes",
    "Question",
    "QuestionType",
    "ExpandChoice",
    "TemplateAction",
]
