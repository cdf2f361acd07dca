"""Client and response validation for the external scoring service."""

from __future__ import annotations

import json
from typing import Any, Protocol, runtime_checkable
from urllib import error, request

import structlog
from pydantic import ValidationError as PydanticValidationError

from .errors import InvalidScoringResponse, ScoringServiceError
from .schemas import ScoringResult


@runtime_checkable
class ScoringClient(Protocol):
    """Scoring collaborator contract."""

    def score(self, job_description: str, resume_text: str) -> Any:
        """Return the raw scoring payload for a job description and resume."""


class HTTPScoringClient:
    """Simple HTTP client for the scoring API."""

    def __init__(self, endpoint: str, api_key: str | None = None, *, timeout: float = 60.0):
        self._endpoint = endpoint
        self._api_key = api_key
        self._timeout = timeout
        self._logger = structlog.get_logger(__name__)

    def score(self, job_description: str, resume_text: str) -> Any:
        payload = {"jobDescription": job_description, "resumeText": resume_text}
        data = json.dumps(payload, ensure_ascii=False).encode("utf-8")
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"

        self._logger.info(
            "scoring.request",
            job_description_length=len(job_description),
            resume_text_length=len(resume_text),
        )
        req = request.Request(self._endpoint, data=data, headers=headers, method="POST")
        try:
            with request.urlopen(req, timeout=self._timeout) as resp:
                body = resp.read().decode("utf-8")
        except error.HTTPError as exc:
            raise ScoringServiceError(f"Scoring service returned {exc.code}") from exc
        except (error.URLError, TimeoutError, OSError) as exc:
            self._logger.warning("scoring.request_failed", error=str(exc))
            raise ScoringServiceError(f"Scoring service unreachable: {exc}") from exc

        try:
            return json.loads(body) if body else None
        except json.JSONDecodeError as exc:
            raise InvalidScoringResponse([f"body: invalid JSON ({exc})"]) from exc


def parse_scoring_response(raw: Any) -> ScoringResult:
    """Validate a raw scoring payload, raising ``InvalidScoringResponse``."""
    if not isinstance(raw, dict):
        raise InvalidScoringResponse([f"response: expected an object, got {type(raw).__name__}"])
    try:
        return ScoringResult.model_validate(raw)
    except PydanticValidationError as exc:
        errors = [
            f"{'.'.join(str(part) for part in item['loc']) or 'response'}: {item['msg']}"
            for item in exc.errors()
        ]
        raise InvalidScoringResponse(errors) from exc
