"""Apply one action to many candidates with per-item isolation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

import structlog

from ..errors import TrackerError
from .lifecycle import CandidateLifecycle, TransitionResult


class BulkAction(str, Enum):
    INVITE = "invite"
    REJECT = "reject"
    DELETE = "delete"


@dataclass(slots=True)
class BulkResult:
    """Outcome of a bulk run. A partial batch is a normal result."""

    action: BulkAction
    succeeded: list[str] = field(default_factory=list)
    failures: dict[str, str] = field(default_factory=dict)
    results: dict[str, TransitionResult] = field(default_factory=dict)

    @property
    def success_count(self) -> int:
        return len(self.succeeded)

    @property
    def failure_count(self) -> int:
        return len(self.failures)

    @property
    def unconfirmed_notifications(self) -> list[str]:
        return [
            candidate_id
            for candidate_id, result in self.results.items()
            if not result.notification_confirmed
        ]


class BulkActionCoordinator:
    """Run invite/reject/delete over a snapshot of candidate ids."""

    def __init__(self, *, lifecycle: CandidateLifecycle) -> None:
        self._lifecycle = lifecycle
        self._logger = structlog.get_logger(__name__)

    def apply(
        self,
        candidate_ids: Iterable[str],
        action: BulkAction | str,
        comment: str | None = None,
    ) -> BulkResult:
        action = BulkAction(action)
        # Snapshot before the first mutation; the caller's collection may change.
        snapshot = list(dict.fromkeys(candidate_ids))
        outcome = BulkResult(action=action)

        for candidate_id in snapshot:
            try:
                result = self._run(candidate_id, action, comment)
            except TrackerError as exc:
                outcome.failures[candidate_id] = str(exc)
                self._logger.warning(
                    "bulk.item_failed",
                    candidate_id=candidate_id,
                    action=action.value,
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
                continue
            outcome.succeeded.append(candidate_id)
            outcome.results[candidate_id] = result

        self._logger.info(
            "bulk.completed",
            action=action.value,
            requested=len(snapshot),
            success_count=outcome.success_count,
            failure_count=outcome.failure_count,
            unconfirmed_notifications=len(outcome.unconfirmed_notifications),
        )
        return outcome

    def _run(self, candidate_id: str, action: BulkAction, comment: str | None) -> TransitionResult:
        if action is BulkAction.INVITE:
            return self._lifecycle.invite(candidate_id, comment)
        if action is BulkAction.REJECT:
            return self._lifecycle.reject(candidate_id, comment)
        return self._lifecycle.delete(candidate_id, comment)
