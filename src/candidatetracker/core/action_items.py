"""Derived queue of candidates awaiting a human decision."""

from __future__ import annotations

from typing import Iterable

from ..schemas import (
    ActionItem,
    ActionItemType,
    Candidate,
    CandidateStatus,
    Priority,
    RecommendedAction,
)

HIGH_PRIORITY_SCORE = 70
HIGH_PRIORITY_INTERVIEW_SCORE = 90

# Used only when a candidate carries no recommendation from the scorer.
DERIVED_INTERVIEW_SCORE = 90
DERIVED_REJECT_SCORE = 40

_PRIORITY_ORDER = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}
_UNRESOLVED = (CandidateStatus.PENDING, CandidateStatus.REVIEW)


def build_action_items(candidates: Iterable[Candidate]) -> list[ActionItem]:
    """Project unresolved candidates into action items.

    Items are computed from candidate status on every call and are never
    stored, so a resolved candidate can never linger in the queue.
    """
    items: list[ActionItem] = []
    for candidate in candidates:
        if candidate.status not in _UNRESOLVED:
            continue
        items.append(
            _item(
                candidate,
                ActionItemType.REVIEW,
                item_priority(candidate),
                review_message(candidate),
            )
        )
        if candidate.is_duplicate:
            items.append(
                _item(
                    candidate,
                    ActionItemType.DUPLICATE,
                    Priority.MEDIUM,
                    candidate.duplicate_info or "Potential duplicate submission",
                )
            )
    items.sort(key=lambda item: item.created_at, reverse=True)
    items.sort(key=lambda item: _PRIORITY_ORDER[item.priority])
    return items


def effective_recommendation(candidate: Candidate) -> RecommendedAction:
    if candidate.recommended_action is not None:
        return candidate.recommended_action
    if candidate.fit_score >= DERIVED_INTERVIEW_SCORE:
        return RecommendedAction.INTERVIEW
    if candidate.fit_score < DERIVED_REJECT_SCORE:
        return RecommendedAction.REJECT
    return RecommendedAction.REVIEW


def item_priority(candidate: Candidate) -> Priority:
    """Review items are never low priority; reject recommendations stay medium."""
    recommended = effective_recommendation(candidate)
    if recommended == RecommendedAction.INTERVIEW:
        threshold = HIGH_PRIORITY_INTERVIEW_SCORE
    elif recommended == RecommendedAction.REJECT:
        return Priority.MEDIUM
    else:
        threshold = HIGH_PRIORITY_SCORE
    return Priority.HIGH if candidate.fit_score >= threshold else Priority.MEDIUM


def review_message(candidate: Candidate) -> str:
    recommended = effective_recommendation(candidate)
    if recommended in (RecommendedAction.INTERVIEW, RecommendedAction.REJECT):
        return f"AI recommends {recommended.value} - {candidate.fit_score}% fit score"
    return f"Candidate with {candidate.fit_score}% fit score requires manual review"


def _item(
    candidate: Candidate,
    item_type: ActionItemType,
    priority: Priority,
    message: str,
) -> ActionItem:
    return ActionItem(
        candidate_id=candidate.id,
        candidate_name=candidate.name,
        email=candidate.email,
        role=candidate.role,
        fit_score=candidate.fit_score,
        type=item_type,
        priority=priority,
        message=message,
        created_at=candidate.screened_at,
    )
