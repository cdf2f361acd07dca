"""In-process candidate repository."""

from __future__ import annotations

import threading

from ..errors import CandidateNotFound, InvalidTransition, PersistenceError
from ..schemas import Candidate, CandidateAction, CandidateStatus, FitCategory


class InMemoryCandidateRepository:
    """Thread-safe repository holding immutable candidate snapshots."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._candidates: dict[str, Candidate] = {}
        self._actions: list[CandidateAction] = []

    def add(self, candidate: Candidate, action: CandidateAction) -> Candidate:
        with self._lock:
            if candidate.id in self._candidates:
                raise PersistenceError(f"Candidate id already exists: {candidate.id!r}")
            self._candidates[candidate.id] = candidate
            self._actions.append(action)
        return candidate

    def get(self, candidate_id: str) -> Candidate | None:
        with self._lock:
            return self._candidates.get(candidate_id)

    def list_candidates(
        self,
        *,
        search: str | None = None,
        fit_category: FitCategory | None = None,
        status: CandidateStatus | None = None,
    ) -> list[Candidate]:
        with self._lock:
            snapshot = list(self._candidates.values())
        term = (search or "").strip().casefold()
        if term:
            snapshot = [
                c for c in snapshot if term in c.name.casefold() or term in c.role.casefold()
            ]
        if fit_category is not None:
            snapshot = [c for c in snapshot if c.fit_category == FitCategory(fit_category)]
        if status is not None:
            snapshot = [c for c in snapshot if c.status == CandidateStatus(status)]
        return sorted(snapshot, key=lambda c: c.screened_at, reverse=True)

    def find_by_email(self, email: str) -> list[Candidate]:
        key = email.strip().casefold()
        with self._lock:
            return [c for c in self._candidates.values() if c.email.strip().casefold() == key]

    def apply_transition(
        self,
        candidate_id: str,
        *,
        expected_status: CandidateStatus,
        new_status: CandidateStatus,
        comment: str | None,
        action: CandidateAction,
    ) -> Candidate:
        with self._lock:
            current = self._candidates.get(candidate_id)
            if current is None:
                raise CandidateNotFound(candidate_id)
            if current.status != expected_status:
                raise InvalidTransition(
                    candidate_id,
                    current.status,
                    new_status,
                    reason="status changed concurrently",
                )
            changes: dict[str, object] = {"status": new_status}
            if comment is not None:
                changes["action_comment"] = comment
            updated = current.model_copy(update=changes)
            self._candidates[candidate_id] = updated
            self._actions.append(action)
        return updated

    def delete(
        self,
        candidate_id: str,
        action: CandidateAction,
        *,
        expected_status: CandidateStatus,
    ) -> Candidate:
        with self._lock:
            current = self._candidates.get(candidate_id)
            if current is None:
                raise CandidateNotFound(candidate_id)
            if current.status != expected_status:
                raise InvalidTransition(
                    candidate_id,
                    current.status,
                    "deleted",
                    reason="status changed concurrently",
                )
            removed = self._candidates.pop(candidate_id)
            self._actions.append(action)
        return removed

    def actions(self, candidate_id: str) -> list[CandidateAction]:
        with self._lock:
            return [a for a in self._actions if a.candidate_id == candidate_id]
