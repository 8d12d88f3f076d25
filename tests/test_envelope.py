"""Tests for the response envelope."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from grading_api.models import ApiResponse, FieldError


class TestApiResponse:
    def test_success_cannot_carry_error(self):
        with pytest.raises(PydanticValidationError):
            ApiResponse(success=True, data={}, error="boom")

    def test_success_cannot_carry_details(self):
        with pytest.raises(PydanticValidationError):
            ApiResponse(success=True, details="boom")

    def test_failure_needs_error(self):
        with pytest.raises(PydanticValidationError):
            ApiResponse(success=False)

    def test_failure_cannot_carry_data(self):
        with pytest.raises(PydanticValidationError):
            ApiResponse(success=False, error="boom", data={"id": 1})

    def test_absent_fields_are_omitted(self):
        envelope = ApiResponse(success=False, error="Datos de entrada inválidos", details=[FieldError(field="q", message="Field required")])
        assert envelope.to_content() == {
            "success": False,
            "error": "Datos de entrada inválidos",
            "details": [{"field": "q", "message": "Field required"}],
        }

    def test_message_only_success(self):
        assert ApiResponse(success=True, message="done").to_content() == {"success": True, "message": "done"}


def test_success_has_no_null_fields(client, auth_headers):
    body = client.get("/api/orders/abc123", headers=auth_headers).json()

    assert set(body) == {"success", "data"}
    assert None not in body["data"]["order"].values()


def test_responses_are_not_cached(client, auth_headers):
    ok = client.get("/api/analytics/dashboard", headers=auth_headers)
    denied = client.get("/api/analytics/dashboard")

    for response in (ok, denied):
        assert "no-store" in response.headers["cache-control"]


def test_unknown_route_is_enveloped(client, auth_headers):
    response = client.get("/api/unknown", headers=auth_headers)

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Not Found"}


def test_wrong_method_is_enveloped(client, auth_headers):
    response = client.patch("/api/orders/abc123", headers=auth_headers)

    assert response.status_code == 405
    assert response.json()["success"] is False


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "version": "1.0.0"}
