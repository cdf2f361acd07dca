from __future__ import annotations

from typing import Any

import pendulum
import pytest

from candidatetracker.core import build_action_items
from candidatetracker.schemas import (
    ActionItemType,
    Candidate,
    CandidateStatus,
    FitCategory,
    Priority,
    RecommendedAction,
)


def build_candidate(**kwargs: Any) -> Candidate:
    defaults: dict[str, Any] = {
        "id": "C-001",
        "name": "Sam Chen",
        "email": "sam.chen@example.com",
        "role": "Senior Backend Engineer",
        "fit_score": 62,
        "fit_category": FitCategory.MEDIUM,
        "status": CandidateStatus.REVIEW,
        "screened_at": pendulum.datetime(2026, 2, 1, tz="UTC"),
    }
    defaults.update(kwargs)
    return Candidate(**defaults)


def test_only_unresolved_candidates_produce_items():
    candidates = [
        build_candidate(id="review", status=CandidateStatus.REVIEW),
        build_candidate(id="pending", status=CandidateStatus.PENDING),
        build_candidate(id="invited", status=CandidateStatus.INVITED),
        build_candidate(id="rejected", status=CandidateStatus.REJECTED),
    ]

    items = build_action_items(candidates)

    assert {item.candidate_id for item in items} == {"review", "pending"}


def test_review_priority_is_high_from_seventy_and_never_low():
    items = build_action_items(
        [
            build_candidate(
                id="low",
                fit_score=35,
                fit_category=FitCategory.LOW,
                recommended_action=RecommendedAction.REVIEW,
            ),
            build_candidate(id="high", fit_score=70, recommended_action=RecommendedAction.REVIEW),
            build_candidate(id="medium", fit_score=55, recommended_action=RecommendedAction.REVIEW),
        ]
    )

    assert {item.candidate_id: item.priority for item in items} == {
        "high": Priority.HIGH,
        "medium": Priority.MEDIUM,
        "low": Priority.MEDIUM,
    }
    assert items[0].candidate_id == "high"


@pytest.mark.parametrize(
    ("score", "recommended", "priority", "message"),
    [
        (92, RecommendedAction.INTERVIEW, Priority.HIGH, "AI recommends Interview - 92% fit score"),
        (80, RecommendedAction.INTERVIEW, Priority.MEDIUM, "AI recommends Interview - 80% fit score"),
        (85, RecommendedAction.REJECT, Priority.MEDIUM, "AI recommends Reject - 85% fit score"),
        (45, RecommendedAction.REVIEW, Priority.MEDIUM, "Candidate with 45% fit score requires manual review"),
        (95, None, Priority.HIGH, "AI recommends Interview - 95% fit score"),
        (30, None, Priority.MEDIUM, "AI recommends Reject - 30% fit score"),
        (72, None, Priority.HIGH, "Candidate with 72% fit score requires manual review"),
    ],
)
def test_priority_and_message_follow_recommendation(score, recommended, priority, message):
    (item,) = build_action_items([build_candidate(fit_score=score, recommended_action=recommended)])

    assert item.priority == priority
    assert item.message == message


def test_same_priority_orders_newest_first():
    items = build_action_items(
        [
            build_candidate(id="older", screened_at=pendulum.datetime(2026, 1, 1, tz="UTC")),
            build_candidate(id="newer", screened_at=pendulum.datetime(2026, 1, 9, tz="UTC")),
        ]
    )

    assert [item.candidate_id for item in items] == ["newer", "older"]


def test_duplicate_candidate_gets_extra_duplicate_item():
    items = build_action_items(
        [
            build_candidate(
                is_duplicate=True,
                duplicate_info="Previously screened for: Data Engineer",
            )
        ]
    )

    assert sorted(item.type for item in items) == [ActionItemType.DUPLICATE, ActionItemType.REVIEW]
    duplicate = next(item for item in items if item.type == ActionItemType.DUPLICATE)
    assert duplicate.message == "Previously screened for: Data Engineer"
    assert duplicate.priority == Priority.MEDIUM


def test_messages_reflect_recommended_action():
    plain, recommended = build_action_items(
        [
            build_candidate(id="plain", fit_score=71, fit_category=FitCategory.MEDIUM),
            build_candidate(
                id="recommended",
                fit_score=71,
                fit_category=FitCategory.MEDIUM,
                recommended_action=RecommendedAction.INTERVIEW,
                screened_at=pendulum.datetime(2026, 1, 1, tz="UTC"),
            ),
        ]
    )

    assert plain.message == "Candidate with 71% fit score requires manual review"
    assert recommended.message == "AI recommends Interview - 71% fit score"
