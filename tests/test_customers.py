"""Tests for the customer routes."""


def test_create_customer(client, auth_headers, store):
    response = client.post(
        "/api/customers",
        json={"name": "Luis Gómez", "phone": "5559999", "email": "luis@example.com"},
        headers=auth_headers,
    )

    assert response.status_code == 201
    customer = response.json()["data"]["customer"]
    assert customer["name"] == "Luis Gómez"
    assert customer["totalOrders"] == 0
    assert customer["documentId"] in store.customers


def test_duplicate_phone_is_409(client, auth_headers):
    response = client.post("/api/customers", json={"name": "Otra Ana", "phone": "5550001"}, headers=auth_headers)

    assert response.status_code == 409
    assert response.json() == {"success": False, "error": "Ya existe un cliente con el teléfono 5550001"}


def test_get_customer(client, auth_headers):
    response = client.get("/api/customers/cust-1", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["data"]["customer"]["email"] == "ana@example.com"


def test_get_missing_customer(client, auth_headers):
    response = client.get("/api/customers/ghost", headers=auth_headers)

    assert response.status_code == 404
    assert response.json()["error"] == "Cliente con ID ghost no encontrado"


def test_update_customer(client, auth_headers, store):
    response = client.put(
        "/api/customers/cust-1",
        json={"name": "Ana P.", "phone": "5550002"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["data"]["customer"]["phone"] == "5550002"
    assert store.customers["cust-1"].name == "Ana P."
    assert store.customers["cust-1"].email == "ana@example.com"


def test_update_customer_requires_name_and_phone(client, auth_headers, services):
    response = client.put("/api/customers/cust-1", json={"email": "a@b.co"}, headers=auth_headers)

    assert response.status_code == 400
    assert [d["field"] for d in response.json()["details"]] == ["name", "phone"]
    assert services.customers.calls == []


def test_delete_customer_with_orders_is_400(client, auth_headers, store):
    response = client.delete("/api/customers/cust-1", headers=auth_headers)

    assert response.status_code == 400
    assert "cust-1" in store.customers


def test_delete_customer(client, auth_headers, store):
    created = client.post("/api/customers", json={"name": "Temp", "phone": "123"}, headers=auth_headers)
    customer_id = created.json()["data"]["customer"]["documentId"]

    response = client.delete(f"/api/customers/{customer_id}", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["message"] == "Cliente eliminado exitosamente"
    assert customer_id not in store.customers


def test_list_customers_pagination(client, auth_headers):
    for i in range(3):
        client.post("/api/customers", json={"name": f"C{i}", "phone": f"77{i}"}, headers=auth_headers)

    response = client.get("/api/customers", params={"limit": "2", "offset": "0"}, headers=auth_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data["customers"]) == 2
    assert data["pagination"] == {"total": 4, "limit": 2, "offset": 0, "hasNext": True}


def test_search_customers(client, auth_headers):
    client.post("/api/customers", json={"name": "Bruno", "phone": "8881234"}, headers=auth_headers)

    by_name = client.get("/api/customers/search", params={"q": "ana"}, headers=auth_headers).json()["data"]
    by_phone = client.get("/api/customers/search", params={"q": "888"}, headers=auth_headers).json()["data"]

    assert by_name["total"] == 1
    assert by_name["query"] == "ana"
    assert by_name["customers"][0]["documentId"] == "cust-1"
    assert [c["name"] for c in by_phone["customers"]] == ["Bruno"]


def test_create_customer_reports_every_bad_field(client, auth_headers, services):
    response = client.post(
        "/api/customers",
        json={"name": "", "phone": "5551111", "email": "not-an-email"},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert sorted(d["field"] for d in response.json()["details"]) == ["email", "name"]
    assert services.customers.calls == []
