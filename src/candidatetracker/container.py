"\"\"\"Dependency injection container for the candidate tracker.\"\"\""

from __future__ import annotations

from dependency_injector import containers, providers

from .core import (
    BulkActionCoordinator,
    CandidateLifecycle,
    ClassifierConfig,
    DuplicateDetector,
    DuplicateDetectorConfig,
    LifecycleConfig,
    ScoreClassifier,
)
from .errors import ValidationError
from .logging import configure_logging
from .notifications import NotificationDispatcher, WebhookTransport
from .pipeline import ScreeningPipeline
from .scoring import HTTPScoringClient
from .storage import InMemoryCandidateRepository, create_sql_repository


class TrackerContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    classifier = providers.Singleton(ScoreClassifier)
    duplicate_detector = providers.Singleton(DuplicateDetector)
    lifecycle_config = providers.Singleton(LifecycleConfig)

    repository = providers.Singleton(InMemoryCandidateRepository)

    notification_transport = providers.Singleton(WebhookTransport)
    dispatcher = providers.Singleton(
        NotificationDispatcher,
        transport=notification_transport,
    )

    lifecycle = providers.Singleton(
        CandidateLifecycle,
        repository=repository,
        classifier=classifier,
        detector=duplicate_detector,
        dispatcher=dispatcher,
        config=lifecycle_config,
    )

    bulk = providers.Factory(BulkActionCoordinator, lifecycle=lifecycle)

    scoring_client = providers.Object(None)

    pipeline = providers.Factory(
        ScreeningPipeline,
        lifecycle=lifecycle,
        scoring_client=scoring_client,
    )


def create_container(*, settings: dict | None = None) -> TrackerContainer:
    """Instantiate container with optional overrides."""

    container = TrackerContainer()

    if not settings or not isinstance(settings, dict):
        return container

    logging_settings = settings.get("logging", {})
    if logging_settings:
        configure_logging(logging_settings.get("level", "INFO"))

    if "classifier" in settings:
        classifier_config = _section_config(ClassifierConfig, settings, "classifier")
        container.classifier.override(
            providers.Singleton(ScoreClassifier, config=classifier_config)
        )

    if "duplicates" in settings:
        duplicate_config = _section_config(DuplicateDetectorConfig, settings, "duplicates")
        container.duplicate_detector.override(
            providers.Singleton(DuplicateDetector, config=duplicate_config)
        )

    if "lifecycle" in settings:
        container.lifecycle_config.override(
            providers.Object(_section_config(LifecycleConfig, settings, "lifecycle"))
        )

    notification_settings = settings.get("notifications", {})
    if notification_settings:
        if "timeout_seconds" in notification_settings:
            container.notification_transport.override(
                providers.Singleton(
                    WebhookTransport,
                    timeout=notification_settings["timeout_seconds"],
                )
            )
        container.dispatcher.override(
            providers.Singleton(
                NotificationDispatcher,
                transport=container.notification_transport,
                invite_url=notification_settings.get("invite_webhook_url"),
                reject_url=notification_settings.get("reject_webhook_url"),
            )
        )

    scoring_settings = settings.get("scoring", {})
    if scoring_settings.get("endpoint"):
        container.scoring_client.override(
            providers.Singleton(
                HTTPScoringClient,
                scoring_settings["endpoint"],
                scoring_settings.get("api_key"),
                timeout=scoring_settings.get("timeout_seconds", 60.0),
            )
        )

    storage_settings = settings.get("storage", {})
    if storage_settings.get("url"):
        container.repository.override(
            providers.Singleton(create_sql_repository, storage_settings["url"])
        )

    return container


def _section_config(config_cls: type, settings: dict, section: str):
    try:
        return config_cls(**settings[section])
    except TypeError as exc:
        raise ValidationError(f"Invalid {section} settings: {exc}") from exc
