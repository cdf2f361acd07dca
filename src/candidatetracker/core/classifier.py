"""Fit score classification."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..errors import ValidationError
from ..schemas import CandidateStatus, FitCategory


@dataclass(frozen=True)
class ClassifierConfig:
    """Thresholds and automation toggles for score classification.

    ``auto_reject_threshold`` is inclusive: a score equal to it is rejected.
    """

    strong_threshold: int = 75
    medium_threshold: int = 50
    auto_invite_threshold: int = 90
    auto_reject_threshold: int = 39
    auto_invite_enabled: bool = True
    auto_reject_enabled: bool = True

    def __post_init__(self) -> None:
        for name in (
            "strong_threshold",
            "medium_threshold",
            "auto_invite_threshold",
            "auto_reject_threshold",
        ):
            value = getattr(self, name)
            if not _is_int(value) or not 0 <= value <= 100:
                raise ValidationError(f"{name} must be an integer between 0 and 100, got {value!r}")
        if self.medium_threshold > self.strong_threshold:
            raise ValidationError("medium_threshold must not exceed strong_threshold")
        if self.auto_reject_threshold >= self.auto_invite_threshold:
            raise ValidationError("auto_reject_threshold must be below auto_invite_threshold")


@dataclass(frozen=True, slots=True)
class Classification:
    fit_category: FitCategory
    initial_status: CandidateStatus


class ScoreClassifier:
    """Map a fit score to a fit category and an initial workflow status."""

    def __init__(self, *, config: ClassifierConfig | None = None) -> None:
        self._config = config or ClassifierConfig()

    @property
    def config(self) -> ClassifierConfig:
        return self._config

    def classify(self, fit_score: Any) -> Classification:
        score = validate_score(fit_score)
        return Classification(
            fit_category=self.categorize(score),
            initial_status=self._initial_status(score),
        )

    def categorize(self, fit_score: Any) -> FitCategory:
        score = validate_score(fit_score)
        if score >= self._config.strong_threshold:
            return FitCategory.STRONG
        if score >= self._config.medium_threshold:
            return FitCategory.MEDIUM
        return FitCategory.LOW

    def _initial_status(self, score: int) -> CandidateStatus:
        config = self._config
        if config.auto_invite_enabled and score >= config.auto_invite_threshold:
            return CandidateStatus.INVITED
        if config.auto_reject_enabled and score <= config.auto_reject_threshold:
            return CandidateStatus.REJECTED
        # Toggles off: extreme scores still need a human decision.
        return CandidateStatus.REVIEW


def validate_score(value: Any) -> int:
    if not _is_int(value):
        raise ValidationError(f"fit score must be an integer, got {value!r}")
    if not 0 <= value <= 100:
        raise ValidationError(f"fit score must be between 0 and 100, got {value}")
    return value


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
