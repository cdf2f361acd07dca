from __future__ import annotations

import pytest

from candidatetracker.core import ClassifierConfig, ScoreClassifier
from candidatetracker.errors import ValidationError
from candidatetracker.schemas import CandidateStatus, FitCategory

_RANK = {FitCategory.LOW: 0, FitCategory.MEDIUM: 1, FitCategory.STRONG: 2}


def test_category_boundaries_use_default_thresholds():
    classifier = ScoreClassifier()

    assert classifier.classify(75).fit_category == FitCategory.STRONG
    assert classifier.classify(74).fit_category == FitCategory.MEDIUM
    assert classifier.classify(50).fit_category == FitCategory.MEDIUM
    assert classifier.classify(49).fit_category == FitCategory.LOW
    assert classifier.classify(0).fit_category == FitCategory.LOW
    assert classifier.classify(100).fit_category == FitCategory.STRONG


def test_category_is_monotonic_across_full_range():
    classifier = ScoreClassifier(config=ClassifierConfig(strong_threshold=80, medium_threshold=40))

    ranks = [_RANK[classifier.classify(score).fit_category] for score in range(101)]

    assert ranks == sorted(ranks)
    assert set(ranks) == {0, 1, 2}


def test_initial_status_auto_invite_and_auto_reject():
    classifier = ScoreClassifier()

    assert classifier.classify(95).initial_status == CandidateStatus.INVITED
    assert classifier.classify(90).initial_status == CandidateStatus.INVITED
    assert classifier.classify(89).initial_status == CandidateStatus.REVIEW
    assert classifier.classify(40).initial_status == CandidateStatus.REVIEW
    assert classifier.classify(39).initial_status == CandidateStatus.REJECTED
    assert classifier.classify(30).initial_status == CandidateStatus.REJECTED


def test_disabled_toggles_fall_through_to_review():
    classifier = ScoreClassifier(
        config=ClassifierConfig(auto_invite_enabled=False, auto_reject_enabled=False)
    )

    for score in (0, 30, 39, 90, 95, 100):
        assert classifier.classify(score).initial_status == CandidateStatus.REVIEW


def test_auto_reject_disabled_keeps_low_score_in_review():
    classifier = ScoreClassifier(config=ClassifierConfig(auto_reject_enabled=False))

    outcome = classifier.classify(30)

    assert outcome.fit_category == FitCategory.LOW
    assert outcome.initial_status == CandidateStatus.REVIEW


def test_every_score_at_or_above_invite_threshold_is_invited_when_enabled():
    classifier = ScoreClassifier(config=ClassifierConfig(auto_invite_threshold=85))

    assert all(
        classifier.classify(score).initial_status == CandidateStatus.INVITED
        for score in range(85, 101)
    )


def test_classification_is_idempotent():
    classifier = ScoreClassifier()

    assert classifier.classify(62) == classifier.classify(62)


@pytest.mark.parametrize("score", [-1, 101, 50.5, "80", None, True])
def test_invalid_scores_raise_validation_error(score):
    with pytest.raises(ValidationError):
        ScoreClassifier().classify(score)


@pytest.mark.parametrize(
    "overrides",
    [
        {"medium_threshold": 80, "strong_threshold": 70},
        {"auto_reject_threshold": 90, "auto_invite_threshold": 90},
        {"strong_threshold": 120},
        {"auto_invite_threshold": -5},
    ],
)
def test_config_rejects_non_monotonic_or_out_of_range_thresholds(overrides):
    with pytest.raises(ValidationError):
        ClassifierConfig(**overrides)
