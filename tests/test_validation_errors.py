"""Tests for input validation in the grading API."""

import pytest
from pydantic import BaseModel, Field

from grading_api import ValidationError, validate
from grading_api.schemas import AdminAnalyticsQuery, CardIdsPayload, CreateCustomerPayload


def test_invalid_period_returns_400(client, auth_headers, services):
    """Test that a period outside the fixed set is rejected before the service runs."""
    response = client.get("/api/analytics/admin", params={"period": "decade"}, headers=auth_headers)

    assert response.status_code == 400
    data = response.json()
    assert data["success"] is False
    assert data["error"] == "Datos de entrada inválidos"
    assert [d["field"] for d in data["details"]] == ["period"]
    assert "data" not in data
    assert services.analytics.calls == []


@pytest.mark.parametrize("period", ["week", "month", "quarter", "year"])
def test_valid_periods_are_accepted(client, auth_headers, period):
    response = client.get("/api/analytics/admin", params={"period": period}, headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["data"]["period"] == period


def test_missing_card_ids_returns_400(client, auth_headers, services):
    response = client.post("/api/orders/abc123/assign-cards", json={}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["details"] == [{"field": "cardIds", "message": "Field required"}]
    assert services.orders.calls == []


def test_card_ids_must_be_an_array(client, auth_headers, services):
    response = client.post("/api/orders/abc123/assign-cards", json={"cardIds": "c1"}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "cardIds"
    assert services.orders.calls == []


def test_body_is_not_coerced(client, auth_headers):
    """A number where a string is declared fails instead of being converted."""
    response = client.post("/api/customers", json={"name": 42, "phone": "5551234"}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "name"


def test_all_field_errors_reported_in_one_response(client, auth_headers):
    response = client.post(
        "/api/customers",
        json={"name": "", "phone": "1" * 21, "email": "not-an-email"},
        headers=auth_headers,
    )

    assert response.status_code == 400
    fields = [d["field"] for d in response.json()["details"]]
    assert fields == ["name", "phone", "email"]


def test_nested_errors_use_dotted_locations(client, auth_headers):
    response = client.post(
        "/api/orders",
        json={"customerName": "Ana", "items": [{"productType": "grading", "quantity": 0, "unitPrice": 350, "subtotal": 0}]},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "items.0.quantity"


def test_malformed_json_returns_400(client, auth_headers, services):
    response = client.post(
        "/api/orders/abc123/assign-cards",
        content=b"{not json",
        headers={**auth_headers, "Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["details"] == [{"field": "body", "message": "Malformed JSON body"}]
    assert services.orders.calls == []


def test_query_limit_out_of_range(client, auth_headers):
    response = client.get("/api/customers", params={"limit": "500"}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "limit"


def test_search_requires_query(client, auth_headers, services):
    response = client.get("/api/customers/search", headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "q"
    assert services.customers.calls == []


def test_repeated_failure_gives_identical_body(client, auth_headers):
    first = client.post("/api/customers", json={"email": "x"}, headers=auth_headers)
    second = client.post("/api/customers", json={"email": "x"}, headers=auth_headers)

    assert first.status_code == second.status_code == 400
    assert first.json() == second.json()


def test_validate_returns_typed_model():
    query = validate(AdminAnalyticsQuery, {"period": "week", "storeId": "store-1"})

    assert query.period == "week"
    assert query.store_id == "store-1"


def test_validate_collects_every_violation():
    with pytest.raises(ValidationError) as exc_info:
        validate(CreateCustomerPayload, {"name": "x" * 101, "email": "nope"}, strict=True)

    fields = [error.field for error in exc_info.value.errors]
    assert fields == ["name", "phone", "email"]
    assert exc_info.value.status_code == 400


def test_validate_with_custom_schema():
    class Payload(BaseModel):
        count: int = Field(..., gt=0)

    with pytest.raises(ValidationError):
        validate(Payload, {"count": 0})
    assert validate(Payload, {"count": 3}).count == 3


def test_validate_strict_rejects_non_object_body():
    with pytest.raises(ValidationError) as exc_info:
        validate(CardIdsPayload, ["c1"], strict=True)

    assert exc_info.value.errors[0].field == "body"
