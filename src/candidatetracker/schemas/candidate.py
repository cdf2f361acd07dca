from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CandidateStatus(str, Enum):
    """Position of a candidate in the review workflow."""

    PENDING = "Pending"
    REVIEW = "Review"
    INVITED = "Invited"
    REJECTED = "Rejected"

    @property
    def is_terminal(self) -> bool:
        return self in (CandidateStatus.INVITED, CandidateStatus.REJECTED)


class FitCategory(str, Enum):
    """Qualitative bucket derived from the fit score."""

    STRONG = "Strong"
    MEDIUM = "Medium"
    LOW = "Low"


class RecommendedAction(str, Enum):
    """Action recommended by the scoring collaborator."""

    INTERVIEW = "Interview"
    REVIEW = "Review"
    REJECT = "Reject"


class ActionType(str, Enum):
    """Kind of audit trail entry."""

    SCREENED = "screened"
    INVITED = "invited"
    REJECTED = "rejected"
    REVIEWED = "reviewed"
    STATUS_CHANGED = "status_changed"
    DELETED = "deleted"


class ActionItemType(str, Enum):
    REVIEW = "review"
    DUPLICATE = "duplicate"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Submission(BaseModel):
    """Applicant data entering the screening flow."""

    name: str
    email: str
    role: str
    resume_text: str | None = None
    job_description: str | None = None

    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)


class Candidate(BaseModel):
    """Screened applicant record.

    Instances are immutable snapshots; a status change yields a new
    snapshot through ``model_copy``.
    """

    id: str
    name: str
    email: str
    role: str
    fit_score: int = Field(ge=0, le=100)
    fit_category: FitCategory
    status: CandidateStatus
    screened_at: datetime
    action_comment: str | None = None
    is_duplicate: bool = False
    duplicate_info: str | None = None
    resume_text: str | None = None
    job_description: str | None = None
    screening_summary: str | None = None
    strengths: tuple[str, ...] = ()
    gaps: tuple[str, ...] = ()
    recommended_action: RecommendedAction | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal


class CandidateAction(BaseModel):
    """Append-only audit trail entry."""

    id: str
    candidate_id: str
    action_type: ActionType
    comment: str | None = None
    previous_status: CandidateStatus | None = None
    new_status: CandidateStatus | None = None
    created_at: datetime

    model_config = ConfigDict(extra="forbid", frozen=True)


class ActionItem(BaseModel):
    """Queue entry for a candidate awaiting human resolution."""

    candidate_id: str
    candidate_name: str
    email: str
    role: str
    fit_score: int
    type: ActionItemType
    priority: Priority
    message: str
    created_at: datetime

    model_config = ConfigDict(extra="forbid", frozen=True)
