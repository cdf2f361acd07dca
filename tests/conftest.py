"""
Pytest configuration and shared fixtures.
"""

from __future__ import annotations

import itertools
from typing import Any, Callable

import pendulum
import pytest

from candidatetracker.core import (
    CandidateLifecycle,
    ClassifierConfig,
    DuplicateDetector,
    LifecycleConfig,
    ScoreClassifier,
)
from candidatetracker.errors import NotificationFailure
from candidatetracker.notifications import NotificationDispatcher
from candidatetracker.schemas import FitCategory, RecommendedAction, ScoringResult, Submission
from candidatetracker.storage import InMemoryCandidateRepository

INVITE_URL = "https://hooks.example.test/invite"
REJECT_URL = "https://hooks.example.test/reject"


class SteppingClock:
    """Deterministic clock advancing one minute per reading."""

    def __init__(self, start: pendulum.DateTime | None = None):
        self._current = start or pendulum.datetime(2026, 3, 2, 9, 0, tz="UTC")

    def __call__(self) -> pendulum.DateTime:
        value = self._current
        self._current = self._current.add(minutes=1)
        return value


class RecordingTransport:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def send(self, url: str, payload: dict[str, Any]) -> None:
        self.calls.append((url, payload))
        if self.error is not None:
            raise self.error


def build_scoring(
    score: int,
    *,
    recommended: RecommendedAction = RecommendedAction.REVIEW,
    category: FitCategory | None = None,
) -> ScoringResult:
    if category is None:
        category = (
            FitCategory.STRONG if score >= 75 else FitCategory.MEDIUM if score >= 50 else FitCategory.LOW
        )
    return ScoringResult(
        fit_score=score,
        fit_category=category,
        screening_summary="Solid backend background.",
        strengths=["Python", "PostgreSQL"],
        gaps=["Kubernetes"],
        recommended_action=recommended,
    )


def build_submission(**kwargs: Any) -> Submission:
    defaults: dict[str, Any] = {
        "name": "Alex Thompson",
        "email": "alex.t@example.com",
        "role": "Senior Backend Engineer",
        "resume_text": "Backend engineer with eight years of Python and PostgreSQL experience.",
        "job_description": "We are hiring a senior backend engineer.",
    }
    defaults.update(kwargs)
    return Submission(**defaults)


@pytest.fixture
def clock() -> SteppingClock:
    return SteppingClock()


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def repository() -> InMemoryCandidateRepository:
    return InMemoryCandidateRepository()


@pytest.fixture
def make_lifecycle(
    repository: InMemoryCandidateRepository,
    transport: RecordingTransport,
    clock: SteppingClock,
) -> Callable[..., CandidateLifecycle]:
    counter = itertools.count(1)

    def factory(
        *,
        classifier_config: ClassifierConfig | None = None,
        lifecycle_config: LifecycleConfig | None = None,
        repo: Any = None,
        dispatcher: NotificationDispatcher | None = None,
    ) -> CandidateLifecycle:
        return CandidateLifecycle(
            repository=repo if repo is not None else repository,
            classifier=ScoreClassifier(config=classifier_config),
            detector=DuplicateDetector(),
            dispatcher=dispatcher
            or NotificationDispatcher(
                transport=transport,
                invite_url=INVITE_URL,
                reject_url=REJECT_URL,
                clock=clock,
            ),
            config=lifecycle_config,
            clock=clock,
            id_factory=lambda: f"id-{next(counter):04d}",
        )

    return factory


@pytest.fixture
def lifecycle(make_lifecycle: Callable[..., CandidateLifecycle]) -> CandidateLifecycle:
    return make_lifecycle()


@pytest.fixture
def failing_transport() -> RecordingTransport:
    return RecordingTransport(error=NotificationFailure("Webhook returned 502"))


@pytest.fixture
def scoring() -> Callable[..., ScoringResult]:
    return build_scoring


@pytest.fixture
def submission() -> Callable[..., Submission]:
    return build_submission
