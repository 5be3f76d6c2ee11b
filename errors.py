from enum import Enum
from typing import Optional


class ResumeScorerError(Exception):
    """Base class for every failure raised by the scoring pipeline."""


class ConfigurationError(ResumeScorerError):
    pass


class ExtractionError(ResumeScorerError):
    pass


class EvaluationErrorKind(str, Enum):
    TIMEOUT = "timeout"
    MALFORMED_OUTPUT = "malformed_model_output"
    MISSING_FIELDS = "missing_fields"
    PROVIDER_FAILURE = "provider_failure"


class EvaluationError(ResumeScorerError):
    def __init__(self, kind: EvaluationErrorKind, message: str, raw_output: Optional[str] = None):
        super().__init__(message)
        self.kind = kind
        self.raw_output = raw_output

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.args[0]}"
