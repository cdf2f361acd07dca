"""Candidate status state machine and audit trail."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Callable

import pendulum
import structlog

from ..errors import CandidateNotFound, InvalidTransition, PersistenceError, ValidationError
from ..notifications import (
    NotificationAction,
    NotificationCandidate,
    NotificationDispatcher,
    NotificationResult,
)
from ..schemas import (
    ActionItem,
    ActionType,
    Candidate,
    CandidateAction,
    CandidateStatus,
    FitCategory,
    ScoringResult,
    Submission,
)
from ..storage import CandidateRepository
from .action_items import build_action_items
from .classifier import ScoreClassifier
from .duplicates import NOT_DUPLICATE, DuplicateCheck, DuplicateDetector


@dataclass
class LifecycleConfig:
    """Lifecycle policy switches."""

    # Reopening Invited/Rejected candidates is an administrative capability.
    allow_terminal_override: bool = False


@dataclass(slots=True)
class TransitionResult:
    """Committed lifecycle event plus the outcome of its notification."""

    candidate: Candidate
    action: CandidateAction
    notification: NotificationResult | None = None

    @property
    def notification_confirmed(self) -> bool:
        return self.notification is None or self.notification.success

    @property
    def message(self) -> str:
        name = self.candidate.name
        if self.action.action_type == ActionType.DELETED:
            return f"{name} deleted."
        outcome = f"{name} marked as {self.candidate.status.value.lower()}"
        if self.notification is None:
            return f"{outcome}."
        if self.notification.success:
            return f"{outcome}; notification sent."
        return f"{outcome}; notification not confirmed ({self.notification.error})."


class CandidateLifecycle:
    """Own every candidate state change.

    Each operation commits the candidate change and exactly one audit row
    through the repository as a single unit, then dispatches the matching
    notification with no lock held. Transitions use the status read at the
    start of the call as the expected status, so a concurrent writer makes
    the slower call fail with ``InvalidTransition`` instead of overwriting.
    """

    def __init__(
        self,
        *,
        repository: CandidateRepository,
        classifier: ScoreClassifier,
        detector: DuplicateDetector,
        dispatcher: NotificationDispatcher,
        config: LifecycleConfig | None = None,
        clock: Callable[[], Any] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._repository = repository
        self._classifier = classifier
        self._detector = detector
        self._dispatcher = dispatcher
        self._config = config or LifecycleConfig()
        self._clock = clock or (lambda: pendulum.now("UTC"))
        self._id_factory = id_factory or (lambda: uuid.uuid4().hex)
        self._logger = structlog.get_logger(__name__)

    def create(self, submission: Submission, scoring: ScoringResult) -> TransitionResult:
        for field_name in ("name", "email", "role"):
            if not getattr(submission, field_name).strip():
                raise ValidationError(f"{field_name} is required")

        classification = self._classifier.classify(scoring.fit_score)
        duplicate = self._check_duplicate(submission)
        screened_at = self._clock()

        candidate = Candidate(
            id=self._id_factory(),
            name=submission.name,
            email=submission.email,
            role=submission.role,
            fit_score=scoring.fit_score,
            fit_category=classification.fit_category,
            status=classification.initial_status,
            screened_at=screened_at,
            is_duplicate=duplicate.is_duplicate,
            duplicate_info=duplicate.duplicate_info,
            resume_text=submission.resume_text,
            job_description=submission.job_description,
            screening_summary=scoring.screening_summary,
            strengths=scoring.strengths,
            gaps=scoring.gaps,
            recommended_action=scoring.recommended_action,
        )
        action = self._audit_record(
            candidate.id,
            ActionType.SCREENED,
            previous_status=None,
            new_status=candidate.status,
            created_at=screened_at,
        )
        self._repository.add(candidate, action)
        self._logger.info(
            "candidate.created",
            candidate_id=candidate.id,
            role=candidate.role,
            fit_score=candidate.fit_score,
            fit_category=candidate.fit_category.value,
            status=candidate.status.value,
            is_duplicate=candidate.is_duplicate,
        )
        return TransitionResult(candidate=candidate, action=action, notification=self._notify(candidate))

    def invite(self, candidate_id: str, comment: str | None = None) -> TransitionResult:
        return self._resolve(candidate_id, CandidateStatus.INVITED, ActionType.INVITED, comment)

    def reject(self, candidate_id: str, comment: str | None = None) -> TransitionResult:
        return self._resolve(candidate_id, CandidateStatus.REJECTED, ActionType.REJECTED, comment)

    def mark_reviewed(self, candidate_id: str, comment: str | None = None) -> TransitionResult:
        current = self._require(candidate_id)
        if current.status != CandidateStatus.PENDING:
            raise InvalidTransition(
                candidate_id,
                current.status,
                CandidateStatus.REVIEW,
                reason="only pending candidates can be moved to review",
            )
        return self._commit(current, CandidateStatus.REVIEW, ActionType.REVIEWED, comment)

    def override_status(
        self,
        candidate_id: str,
        status: CandidateStatus | str,
        *,
        comment: str,
        actor: str,
    ) -> TransitionResult:
        """Administratively move a resolved candidate to another status."""
        target = CandidateStatus(status)
        if not self._config.allow_terminal_override:
            raise InvalidTransition(
                candidate_id,
                None,
                target,
                reason="terminal status overrides are disabled",
            )
        if not (actor or "").strip() or not (comment or "").strip():
            raise ValidationError("status overrides require an actor and a comment")
        current = self._require(candidate_id)
        if not current.is_terminal:
            raise InvalidTransition(
                candidate_id,
                current.status,
                target,
                reason="candidate is unresolved; use invite or reject",
            )
        if current.status == target:
            raise InvalidTransition(candidate_id, current.status, target, reason="status unchanged")
        self._logger.warning(
            "candidate.override",
            candidate_id=candidate_id,
            actor=actor,
            previous_status=current.status.value,
            new_status=target.value,
        )
        return self._commit(
            current,
            target,
            ActionType.STATUS_CHANGED,
            f"[override by {actor.strip()}] {comment.strip()}",
        )

    def delete(self, candidate_id: str, comment: str | None = None) -> TransitionResult:
        current = self._require(candidate_id)
        action = self._audit_record(
            candidate_id,
            ActionType.DELETED,
            comment=comment,
            previous_status=current.status,
            new_status=None,
        )
        removed = self._repository.delete(candidate_id, action, expected_status=current.status)
        self._logger.info("candidate.deleted", candidate_id=candidate_id, status=removed.status.value)
        return TransitionResult(candidate=removed, action=action)

    def get(self, candidate_id: str) -> Candidate:
        return self._require(candidate_id)

    def list_candidates(
        self,
        *,
        search: str | None = None,
        fit_category: FitCategory | str | None = None,
        status: CandidateStatus | str | None = None,
    ) -> list[Candidate]:
        """List candidates, optionally filtered by name/role search, fit category and status."""
        return self._repository.list_candidates(
            search=search,
            fit_category=FitCategory(fit_category) if fit_category is not None else None,
            status=CandidateStatus(status) if status is not None else None,
        )

    def history(self, candidate_id: str) -> list[CandidateAction]:
        return self._repository.actions(candidate_id)

    def action_items(self) -> list[ActionItem]:
        return build_action_items(self._repository.list_candidates())

    def _resolve(
        self,
        candidate_id: str,
        target: CandidateStatus,
        action_type: ActionType,
        comment: str | None,
    ) -> TransitionResult:
        current = self._require(candidate_id)
        if current.is_terminal:
            raise InvalidTransition(
                candidate_id,
                current.status,
                target,
                reason="candidate is already resolved",
            )
        return self._commit(current, target, action_type, comment)

    def _commit(
        self,
        current: Candidate,
        target: CandidateStatus,
        action_type: ActionType,
        comment: str | None,
    ) -> TransitionResult:
        action = self._audit_record(
            current.id,
            action_type,
            comment=comment,
            previous_status=current.status,
            new_status=target,
        )
        updated = self._repository.apply_transition(
            current.id,
            expected_status=current.status,
            new_status=target,
            comment=comment,
            action=action,
        )
        self._logger.info(
            "candidate.transitioned",
            candidate_id=current.id,
            action_type=action_type.value,
            previous_status=current.status.value,
            new_status=target.value,
        )
        return TransitionResult(candidate=updated, action=action, notification=self._notify(updated))

    def _notify(self, candidate: Candidate) -> NotificationResult | None:
        action = NotificationAction.for_status(candidate.status)
        if action is None:
            return None
        return self._dispatcher.dispatch(NotificationCandidate.from_candidate(candidate), action)

    def _check_duplicate(self, submission: Submission) -> DuplicateCheck:
        try:
            existing = self._repository.find_by_email(submission.email)
        except PersistenceError as exc:
            self._logger.warning(
                "duplicates.lookup_failed",
                email=submission.email,
                error=str(exc),
            )
            return NOT_DUPLICATE
        return self._detector.check(
            email=submission.email,
            role=submission.role,
            existing=existing,
            resume_text=submission.resume_text,
        )

    def _require(self, candidate_id: str) -> Candidate:
        candidate = self._repository.get(candidate_id)
        if candidate is None:
            raise CandidateNotFound(candidate_id)
        return candidate

    def _audit_record(
        self,
        candidate_id: str,
        action_type: ActionType,
        *,
        previous_status: CandidateStatus | None,
        new_status: CandidateStatus | None,
        comment: str | None = None,
        created_at: Any | None = None,
    ) -> CandidateAction:
        return CandidateAction(
            id=self._id_factory(),
            candidate_id=candidate_id,
            action_type=action_type,
            comment=comment,
            previous_status=previous_status,
            new_status=new_status,
            created_at=created_at or self._clock(),
        )
