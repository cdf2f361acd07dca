"\"\"\"Core lifecycle and classification engine.\"\"\""

from __future__ import annotations

# NOTE: keep imports explicit for export clarity.
from .action_items import build_action_items
from .bulk import BulkAction, BulkActionCoordinator, BulkResult
from .classifier import Classification, ClassifierConfig, ScoreClassifier
from .duplicates import DuplicateCheck, DuplicateDetector, DuplicateDetectorConfig
from .lifecycle import CandidateLifecycle, LifecycleConfig, TransitionResult

__all__ = [
    "BulkAction",
    "BulkActionCoordinator",
    "BulkResult",
    "CandidateLifecycle",
    "Classification",
    "ClassifierConfig",
    "DuplicateCheck",
    "DuplicateDetector",
    "DuplicateDetectorConfig",
    "LifecycleConfig",
    "ScoreClassifier",
    "TransitionResult",
    "build_action_items",
]
