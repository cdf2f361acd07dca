"""Duplicate submission detection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import pendulum
from rapidfuzz import fuzz

from ..errors import ValidationError
from ..schemas import Candidate


@dataclass
class DuplicateDetectorConfig:
    """Configuration for duplicate detection."""

    resume_similarity_threshold: float = 95.0
    date_format: str = "MMM D, YYYY"


@dataclass(frozen=True, slots=True)
class DuplicateCheck:
    is_duplicate: bool
    duplicate_info: str | None = None
    matched_candidate_id: str | None = None


NOT_DUPLICATE = DuplicateCheck(is_duplicate=False)


class DuplicateDetector:
    """Flag submissions whose email was already screened.

    Matching is case-insensitive on email and role. A same-role match
    references the most recent prior screening; otherwise every prior role
    for the email is listed.
    """

    def __init__(self, *, config: DuplicateDetectorConfig | None = None) -> None:
        self._config = config or DuplicateDetectorConfig()

    def check(
        self,
        *,
        email: str,
        role: str,
        existing: Iterable[Candidate],
        resume_text: str | None = None,
    ) -> DuplicateCheck:
        email_key = _normalize(email)
        role_key = _normalize(role)
        if not email_key:
            raise ValidationError("email is required for duplicate detection")
        if not role_key:
            raise ValidationError("role is required for duplicate detection")

        matches = sorted(
            (c for c in existing if _normalize(c.email) == email_key),
            key=lambda c: c.screened_at,
        )
        if not matches:
            return NOT_DUPLICATE

        same_role = [c for c in matches if _normalize(c.role) == role_key]
        if same_role:
            latest = same_role[-1]
            screened_on = pendulum.instance(latest.screened_at).format(self._config.date_format)
            return DuplicateCheck(
                is_duplicate=True,
                duplicate_info=(
                    f'Already screened for "{latest.role}" on {screened_on} '
                    f"(Score: {latest.fit_score}%)"
                ),
                matched_candidate_id=latest.id,
            )

        resume_match = self._find_resume_match(matches, resume_text)
        if resume_match is not None:
            return DuplicateCheck(
                is_duplicate=True,
                duplicate_info=(
                    f"Duplicate resume detected. Previously applied for {resume_match.role}"
                ),
                matched_candidate_id=resume_match.id,
            )

        return DuplicateCheck(
            is_duplicate=True,
            duplicate_info=f"Previously screened for: {', '.join(_distinct_roles(matches))}",
            matched_candidate_id=matches[-1].id,
        )

    def _find_resume_match(
        self,
        matches: list[Candidate],
        resume_text: str | None,
    ) -> Candidate | None:
        incoming = _normalize(resume_text)
        if not incoming:
            return None
        best: Candidate | None = None
        best_score = 0.0
        for candidate in reversed(matches):
            previous = _normalize(candidate.resume_text)
            if not previous:
                continue
            score = fuzz.ratio(incoming, previous)
            if score >= self._config.resume_similarity_threshold and score > best_score:
                best, best_score = candidate, score
        return best


def _normalize(value: str | None) -> str:
    return " ".join((value or "").split()).casefold()


def _distinct_roles(candidates: Iterable[Candidate]) -> list[str]:
    seen: set[str] = set()
    roles: list[str] = []
    for candidate in candidates:
        key = _normalize(candidate.role)
        if key in seen:
            continue
        seen.add(key)
        roles.append(candidate.role)
    return roles
