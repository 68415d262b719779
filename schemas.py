# schemas.py
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

Goal = Literal["energy", "focus", "fitness"]

MAX_SELECTED = 100
MESSAGE_MAX_CHARS = 120
MAX_TIPS = 5
EXPLANATION_MAX_CHARS = 600
TIP_MIN_CHARS = 4
TIP_MAX_CHARS = 280


class HabitDefinition(BaseModel):
    """One tracked lifestyle habit. Defined once at import, never mutated."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    tip: str


# ---------- Requests ----------


class ScoreRequest(BaseModel):
    selected: List[str] = Field(..., max_length=MAX_SELECTED)


class AnalyzeRequest(BaseModel):
    """
    Body of POST /api/analyze.

    - selected: habit ids the user checked (unknown ids are passed through)
    - input: optional free text from the user
    - goal: optional focus area

    Only `selected` is enforced. A malformed goal or input is dropped,
    not rejected.
    """

    selected: List[str] = Field(..., max_length=MAX_SELECTED)
    input: Optional[str] = None
    goal: Optional[Goal] = None

    @field_validator("input", "goal", mode="wrap")
    @classmethod
    def _drop_if_invalid(cls, value: Any, handler):
        try:
            return handler(value)
        except PydanticValidationError:
            return None


class ExplainRequest(BaseModel):
    tip: str = Field(..., min_length=TIP_MIN_CHARS, max_length=TIP_MAX_CHARS)
    selected: List[str] = Field(..., max_length=MAX_SELECTED)
    goal: Optional[Goal] = None


# ---------- Responses ----------


class ScoreResult(BaseModel):
    score: int = Field(..., ge=0, le=100)
    message: str = Field(..., max_length=MESSAGE_MAX_CHARS)
    tips: List[str] = Field(default_factory=list, max_length=MAX_TIPS)


class ExplanationResult(BaseModel):
    explanation: str = Field(..., max_length=EXPLANATION_MAX_CHARS)


class ScoreResponse(ScoreResult):
    """Local score plus the ready-made share line shown by the client."""

    share_text: str


class ErrorResponse(BaseModel):
    error: str
    detail: Optional[str] = None
