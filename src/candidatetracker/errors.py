"""Error taxonomy for the candidate tracker."""

from __future__ import annotations

from typing import Any


class TrackerError(Exception):
    """Base class for every error raised by the tracker core."""


class ValidationError(TrackerError, ValueError):
    """Raised when input to the classifier, detector or pipeline is malformed."""


class InvalidScoringResponse(ValidationError):
    """Raised when the scoring collaborator returns a malformed payload."""

    def __init__(self, errors: list[str]):
        super().__init__("Invalid scoring response")
        self.errors = errors

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Invalid scoring response: {self.errors}"


class InvalidTransition(TrackerError):
    """Raised when a status transition is not allowed from the current state."""

    def __init__(
        self,
        candidate_id: str,
        current_status: Any,
        target_status: Any,
        reason: str | None = None,
    ):
        self.candidate_id = candidate_id
        self.current_status = current_status
        self.target_status = target_status
        self.reason = reason
        message = (
            f"Cannot move candidate {candidate_id!r} "
            f"from {_label(current_status)} to {_label(target_status)}"
        )
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class CandidateNotFound(TrackerError, LookupError):
    """Raised when no candidate exists for the requested id."""

    def __init__(self, candidate_id: str):
        super().__init__(f"Candidate not found: {candidate_id!r}")
        self.candidate_id = candidate_id


class NotificationFailure(TrackerError):
    """Raised by notification transports when delivery fails."""


class PersistenceError(TrackerError):
    """Raised when the candidate store is unavailable."""


class ScoringServiceError(TrackerError):
    """Raised when the scoring collaborator cannot be reached."""


def _label(status: Any) -> str:
    return getattr(status, "value", None) or str(status)


__all__ = [
    "TrackerError",
    "ValidationError",
    "InvalidScoringResponse",
    "InvalidTransition",
    "CandidateNotFound",
    "NotificationFailure",
    "PersistenceError",
    "ScoringServiceError",
]
