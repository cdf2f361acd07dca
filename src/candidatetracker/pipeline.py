"""Screening pipeline assembly and execution."""

from __future__ import annotations

from collections import Counter
from typing import Any

import structlog
from pydantic import ValidationError as PydanticValidationError

from .core import CandidateLifecycle, TransitionResult
from .errors import ValidationError
from .schemas import CandidateStatus, FitCategory, Submission
from .scoring import ScoringClient, parse_scoring_response

MIN_JOB_DESCRIPTION_LENGTH = 100
MIN_RESUME_LENGTH = 50


class ScreeningPipeline:
    """End-to-end screening orchestrator.

    Validates the submission, obtains a fit score from the scoring
    collaborator and hands the validated result to the lifecycle.
    """

    def __init__(
        self,
        *,
        lifecycle: CandidateLifecycle,
        scoring_client: ScoringClient | None,
    ) -> None:
        self._lifecycle = lifecycle
        self._scoring_client = scoring_client
        self._logger = structlog.get_logger(__name__)

    def screen(self, submission: Submission | dict[str, Any]) -> TransitionResult:
        validated = validate_submission(submission)
        if self._scoring_client is None:
            raise ValidationError("No scoring client configured")

        raw = self._scoring_client.score(validated.job_description, validated.resume_text)
        scoring = parse_scoring_response(raw)

        result = self._lifecycle.create(validated, scoring)
        derived = result.candidate.fit_category
        if scoring.fit_category != derived:
            self._logger.warning(
                "screening.category_mismatch",
                candidate_id=result.candidate.id,
                fit_score=scoring.fit_score,
                reported_category=scoring.fit_category.value,
                derived_category=derived.value,
            )
        self._logger.info(
            "screening.result",
            candidate_id=result.candidate.id,
            fit_score=scoring.fit_score,
            status=result.candidate.status.value,
            recommended_action=scoring.recommended_action.value,
            notification_confirmed=result.notification_confirmed,
        )
        return result

    def summarize(self) -> dict[str, Any]:
        candidates = self._lifecycle.list_candidates()
        categories = Counter(c.fit_category for c in candidates)
        statuses = Counter(c.status for c in candidates)
        return {
            "total": len(candidates),
            "by_category": {category.value: categories.get(category, 0) for category in FitCategory},
            "by_status": {status.value: statuses.get(status, 0) for status in CandidateStatus},
            "duplicates": sum(1 for c in candidates if c.is_duplicate),
        }


def validate_submission(submission: Submission | dict[str, Any]) -> Submission:
    """Check a submission before anything is scored or stored."""
    if not isinstance(submission, Submission):
        try:
            submission = Submission.model_validate(submission)
        except PydanticValidationError as exc:
            raise ValidationError(f"Invalid submission: {exc}") from exc

    errors: list[str] = []
    for field_name in ("name", "email", "role"):
        if not getattr(submission, field_name):
            errors.append(f"{field_name} is required")
    local, _, domain = submission.email.partition("@")
    if submission.email and (not local or "." not in domain):
        errors.append(f"email is not valid: {submission.email!r}")
    if len(submission.job_description or "") < MIN_JOB_DESCRIPTION_LENGTH:
        errors.append(
            f"job_description must be at least {MIN_JOB_DESCRIPTION_LENGTH} characters"
        )
    if len(submission.resume_text or "") < MIN_RESUME_LENGTH:
        errors.append(f"resume_text must be at least {MIN_RESUME_LENGTH} characters")
    if errors:
        raise ValidationError("; ".join(errors))
    return submission
