import logging
from enum import Enum
from typing import Dict, List, Optional, Type, Union

from pydantic import BaseModel, Field, FiniteFloat, field_validator

logger = logging.getLogger(__name__)


class SchemaVariant(str, Enum):
    BASIC = "basic"
    EXTENDED = "extended"


class EvaluationResult(BaseModel):
    name: str
    age: Optional[Union[int, FiniteFloat]]  # key is required, value may be null
    skills: List[str] = Field(default_factory=list)
    score: FiniteFloat  # 0–1, NaN and inf rejected

    @field_validator("skills", mode="before")
    @classmethod
    def _null_list_to_empty(cls, value):
        return [] if value is None else value

    @field_validator("score")
    @classmethod
    def _clamp_score(cls, value: float) -> float:
        if value < 0.0 or value > 1.0:
            clamped = min(max(value, 0.0), 1.0)
            logger.warning("Model returned out-of-range score %s, clamped to %s", value, clamped)
            return clamped
        return value


class ExtendedEvaluationResult(EvaluationResult):
    education: List[str] = Field(default_factory=list)
    experience_summary: Optional[str] = None
    links: List[str] = Field(default_factory=list)
    certifications: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    tier: Optional[str] = None

    @field_validator("education", "links", "certifications", "tags", mode="before")
    @classmethod
    def _null_extended_list_to_empty(cls, value):
        return [] if value is None else value


class ErrorResponse(BaseModel):
    error: str


RESULT_MODELS: Dict[SchemaVariant, Type[EvaluationResult]] = {
    SchemaVariant.BASIC: EvaluationResult,
    SchemaVariant.EXTENDED: ExtendedEvaluationResult,
}
