"\"\"\"Pydantic schema definitions for tracker records.\"\"\""

from __future__ import annotations

from .candidate import (
    ActionItem,
    ActionItemType,
    ActionType,
    Candidate,
    CandidateAction,
    CandidateStatus,
    FitCategory,
    Priority,
    RecommendedAction,
    Submission,
)
from .scoring import ScoringResult

__all__ = [
    "ActionItem",
    "ActionItemType",
    "ActionType",
    "Candidate",
    "CandidateAction",
    "CandidateStatus",
    "FitCategory",
    "Priority",
    "RecommendedAction",
    "ScoringResult",
    "Submission",
]
