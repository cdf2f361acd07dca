"""Schema for responses returned by the external scoring collaborator."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

from .candidate import FitCategory, RecommendedAction


class ScoringResult(BaseModel):
    """Validated scoring payload.

    Field aliases follow the collaborator's camelCase wire format.
    """

    fit_score: int = Field(alias="fitScore", ge=0, le=100)
    fit_category: FitCategory = Field(alias="fitCategory")
    screening_summary: StrictStr = Field(alias="screeningSummary")
    strengths: tuple[StrictStr, ...] = Field(alias="strengths")
    gaps: tuple[StrictStr, ...] = Field(alias="gaps")
    recommended_action: RecommendedAction = Field(alias="recommendedAction")

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    @field_validator("fit_score", mode="before")
    @classmethod
    def _integral_score(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("fitScore must be an integer, not a boolean")
        if isinstance(value, float):
            if not value.is_integer():
                raise ValueError("fitScore must be a whole number")
            return int(value)
        if not isinstance(value, int):
            raise ValueError("fitScore must be an integer")
        return value

    @field_validator("strengths", "gaps", mode="before")
    @classmethod
    def _list_only(cls, value: Any) -> Any:
        if not isinstance(value, (list, tuple)):
            raise ValueError("must be a list of strings")
        return value
