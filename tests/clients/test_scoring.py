from __future__ import annotations

from typing import Any

import pytest

from candidatetracker.errors import InvalidScoringResponse, ScoringServiceError
from candidatetracker.schemas import FitCategory, RecommendedAction
from candidatetracker.scoring import HTTPScoringClient, parse_scoring_response


def valid_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "fitScore": 82,
        "fitCategory": "Strong",
        "screeningSummary": "Strong alignment with backend requirements.",
        "strengths": ["Python", "AWS"],
        "gaps": ["GraphQL"],
        "recommendedAction": "Interview",
    }
    payload.update(overrides)
    return payload


def test_parse_valid_response():
    result = parse_scoring_response(valid_payload())

    assert result.fit_score == 82
    assert result.fit_category == FitCategory.STRONG
    assert result.recommended_action == RecommendedAction.INTERVIEW
    assert result.strengths == ("Python", "AWS")


def test_integral_float_score_is_accepted():
    assert parse_scoring_response(valid_payload(fitScore=64.0)).fit_score == 64


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"fitScore": 101}, "fitScore"),
        ({"fitScore": 72.5}, "fitScore"),
        ({"fitScore": True}, "fitScore"),
        ({"fitScore": "80"}, "fitScore"),
        ({"fitCategory": "Excellent"}, "fitCategory"),
        ({"recommendedAction": "Hire"}, "recommendedAction"),
        ({"strengths": "Python"}, "strengths"),
        ({"gaps": [1, 2]}, "gaps"),
        ({"screeningSummary": None}, "screeningSummary"),
    ],
)
def test_malformed_fields_raise_typed_error(overrides, field):
    with pytest.raises(InvalidScoringResponse) as exc:
        parse_scoring_response(valid_payload(**overrides))

    assert any(error.startswith(field) for error in exc.value.errors)


def test_missing_field_is_reported():
    payload = valid_payload()
    del payload["recommendedAction"]

    with pytest.raises(InvalidScoringResponse) as exc:
        parse_scoring_response(payload)

    assert any("recommendedAction" in error for error in exc.value.errors)


def test_non_object_response_is_rejected():
    with pytest.raises(InvalidScoringResponse):
        parse_scoring_response(["not", "an", "object"])


def test_http_client_posts_job_and_resume(endpoint):
    endpoint.body = valid_payload()
    client = HTTPScoringClient(f"{endpoint.url}/screen", "secret-token", timeout=2.0)

    raw = client.score("Job description text", "Resume text")

    assert raw == valid_payload()
    request = endpoint.requests[0]
    assert request["json"] == {"jobDescription": "Job description text", "resumeText": "Resume text"}
    assert request["headers"]["Authorization"] == "Bearer secret-token"


def test_http_client_error_status_raises_service_error(endpoint):
    endpoint.status = 503
    client = HTTPScoringClient(f"{endpoint.url}/screen", timeout=2.0)

    with pytest.raises(ScoringServiceError):
        client.score("jd", "resume")


def test_http_client_invalid_json_raises_invalid_response(endpoint):
    endpoint.body = "<html>oops</html>"
    client = HTTPScoringClient(f"{endpoint.url}/screen", timeout=2.0)

    with pytest.raises(InvalidScoringResponse):
        client.score("jd", "resume")
