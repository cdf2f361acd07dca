"""Invite/reject notification dispatch over outbound webhooks."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Protocol, runtime_checkable
from urllib import error, request

import pendulum
import structlog

from .errors import NotificationFailure
from .schemas import Candidate, CandidateStatus

WEBHOOK_NOT_CONFIGURED = "Webhook URL not configured"


class NotificationAction(str, Enum):
    INVITE = "invite"
    REJECT = "reject"

    @classmethod
    def for_status(cls, status: CandidateStatus) -> "NotificationAction | None":
        if status == CandidateStatus.INVITED:
            return cls.INVITE
        if status == CandidateStatus.REJECTED:
            return cls.REJECT
        return None


@dataclass(frozen=True, slots=True)
class NotificationCandidate:
    name: str
    email: str
    role: str
    fit_score: int

    @classmethod
    def from_candidate(cls, candidate: Candidate) -> "NotificationCandidate":
        return cls(
            name=candidate.name,
            email=candidate.email,
            role=candidate.role,
            fit_score=candidate.fit_score,
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "fitScore": self.fit_score,
        }


@dataclass(frozen=True, slots=True)
class NotificationResult:
    success: bool
    error: str | None = None


@runtime_checkable
class NotificationTransport(Protocol):
    """Delivers a single notification payload to ``url``."""

    def send(self, url: str, payload: dict[str, Any]) -> None:
        """Deliver the payload or raise ``NotificationFailure``."""


class WebhookTransport:
    """POST JSON payloads to a webhook endpoint."""

    def __init__(self, *, timeout: float = 10.0):
        self._timeout = timeout

    def send(self, url: str, payload: dict[str, Any]) -> None:
        data = json.dumps(payload, ensure_ascii=False).encode("utf-8")
        headers = {"Content-Type": "application/json"}
        req = request.Request(url, data=data, headers=headers, method="POST")
        try:
            with request.urlopen(req, timeout=self._timeout) as resp:
                status = resp.status
        except error.HTTPError as exc:
            raise NotificationFailure(f"Webhook returned {exc.code}") from exc
        except (error.URLError, TimeoutError, OSError) as exc:
            reason = getattr(exc, "reason", exc)
            raise NotificationFailure(f"Webhook request failed: {reason}") from exc
        if not 200 <= status < 300:
            raise NotificationFailure(f"Webhook returned {status}")


class NotificationDispatcher:
    """Translate invite/reject decisions into outbound notifications.

    ``dispatch`` never raises. Every failure, including an unconfigured
    webhook or a timed out request, is returned as ``success=False`` so that
    an already committed status change is never unwound.
    """

    def __init__(
        self,
        *,
        transport: NotificationTransport,
        invite_url: str | None = None,
        reject_url: str | None = None,
        clock: Callable[[], Any] | None = None,
    ) -> None:
        self._transport = transport
        self._urls = {
            NotificationAction.INVITE: invite_url,
            NotificationAction.REJECT: reject_url,
        }
        self._clock = clock or (lambda: pendulum.now("UTC"))
        self._logger = structlog.get_logger(__name__)

    def dispatch(
        self,
        candidate: NotificationCandidate,
        action: NotificationAction,
    ) -> NotificationResult:
        action = NotificationAction(action)
        url = self._urls.get(action)
        if not url:
            self._logger.warning(
                "notification.not_configured",
                action=action.value,
                email=candidate.email,
            )
            return NotificationResult(success=False, error=WEBHOOK_NOT_CONFIGURED)

        payload = {
            "action": action.value,
            "timestamp": self._clock().isoformat(),
            "candidate": candidate.to_payload(),
        }
        try:
            self._transport.send(url, payload)
        except NotificationFailure as exc:
            return self._failed(candidate, action, str(exc))
        except Exception as exc:  # noqa: BLE001
            return self._failed(candidate, action, f"{type(exc).__name__}: {exc}")

        self._logger.info("notification.sent", action=action.value, email=candidate.email)
        return NotificationResult(success=True)

    def _failed(
        self,
        candidate: NotificationCandidate,
        action: NotificationAction,
        reason: str,
    ) -> NotificationResult:
        self._logger.warning(
            "notification.failed",
            action=action.value,
            email=candidate.email,
            error=reason,
        )
        return NotificationResult(success=False, error=reason)
