"\"\"\"Candidate persistence backends.\"\"\""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..schemas import Candidate, CandidateAction, CandidateStatus, FitCategory
from .memory import InMemoryCandidateRepository
from .sql import SQLAlchemyCandidateRepository, create_sql_repository


@runtime_checkable
class CandidateRepository(Protocol):
    """Persistence contract for candidates and their audit trail.

    ``add``, ``apply_transition`` and ``delete`` each commit the record
    change together with its audit row, or nothing at all.
    """

    def add(self, candidate: Candidate, action: CandidateAction) -> Candidate:
        """Insert a new candidate along with its first audit row."""

    def get(self, candidate_id: str) -> Candidate | None:
        """Return the current snapshot for ``candidate_id``."""

    def list_candidates(
        self,
        *,
        search: str | None = None,
        fit_category: FitCategory | None = None,
        status: CandidateStatus | None = None,
    ) -> list[Candidate]:
        """Return matching candidates, most recently screened first.

        ``search`` is a case-insensitive substring of the name or the role.
        """

    def find_by_email(self, email: str) -> list[Candidate]:
        """Return candidates whose email matches case-insensitively."""

    def apply_transition(
        self,
        candidate_id: str,
        *,
        expected_status: CandidateStatus,
        new_status: CandidateStatus,
        comment: str | None,
        action: CandidateAction,
    ) -> Candidate:
        """Set ``new_status`` only if the stored status is still ``expected_status``."""

    def delete(
        self,
        candidate_id: str,
        action: CandidateAction,
        *,
        expected_status: CandidateStatus,
    ) -> Candidate:
        """Remove the candidate only if its stored status is still ``expected_status``."""

    def actions(self, candidate_id: str) -> list[CandidateAction]:
        """Return audit rows for ``candidate_id``, oldest first."""


__all__ = [
    "CandidateRepository",
    "InMemoryCandidateRepository",
    "SQLAlchemyCandidateRepository",
    "create_sql_repository",
]
