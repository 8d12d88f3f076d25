"""Shared fixtures for the grading API tests."""

import pytest
from fastapi.testclient import TestClient

from grading_api import InMemoryStore, Services, Settings, create_app, create_memory_services
from grading_api.models import Card, Customer, Order, OrderItem

API_KEY = "test-secret"


class CallRecorder:
    """Wraps a service and records which coroutine methods were awaited."""

    def __init__(self, target):
        self._target = target
        self.calls = []

    def __getattr__(self, name):
        attr = getattr(self._target, name)
        if not callable(attr):
            return attr

        async def wrapper(*args, **kwargs):
            self.calls.append(name)
            return await attr(*args, **kwargs)

        return wrapper


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings():
    return Settings(environment="test", api_secret_key=API_KEY)


@pytest.fixture
def store():
    store = InMemoryStore()
    store.add_store("store-1", "Tienda Centro")
    store.customers["cust-1"] = Customer(document_id="cust-1", name="Ana Pérez", phone="5550001", email="ana@example.com")
    store.orders["abc123"] = Order(
        document_id="abc123",
        uuid="AB12CD34",
        customer_id="cust-1",
        customer_name="Ana Pérez",
        store_id="store-1",
        store_name="Tienda Centro",
        items=[OrderItem(product_type="grading", quantity=2, unit_price=350, subtotal=700)],
        total=700,
    )
    store.add_card(Card(document_id="c1", name="Charizard", certification_number=1001))
    store.add_card(Card(document_id="c2", name="Blastoise", certification_number=1002))
    return store


@pytest.fixture
def services(store):
    memory = create_memory_services(store)
    return Services(
        orders=CallRecorder(memory.orders),
        customers=CallRecorder(memory.customers),
        analytics=CallRecorder(memory.analytics),
    )


@pytest.fixture
def app(services, settings):
    return create_app(services=services, settings=settings)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth_headers():
    return {"x-api-key": API_KEY}
