"""
Interfaces of the domain services called by the routes.

Implementations signal failure by raising ``APIError`` subclasses
(``NotFoundError``, ``ConflictError``, ``BadRequestError``) so the response
layer can pick a status without parsing messages.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..models import (
    AdminStats,
    BulkUpdateResult,
    Card,
    Customer,
    CustomerPage,
    CustomerSearchResult,
    DashboardStats,
    Order,
    OrderPage,
    OrderStatusOptions,
    Period,
    PublicOrder,
)
from ..schemas import (
    BulkUpdatePayload,
    CreateCustomerPayload,
    CreateOrderPayload,
    OrderListQuery,
    UpdateCustomerPayload,
    UpdateOrderPayload,
)


class OrderService(ABC):
    @abstractmethod
    async def list_orders(self, filters: OrderListQuery) -> OrderPage: ...

    @abstractmethod
    async def create_order(self, payload: CreateOrderPayload) -> Order: ...

    @abstractmethod
    async def get_order(self, order_id: str) -> Order:
        """Return the order or raise NotFoundError."""

    @abstractmethod
    async def update_order(self, order_id: str, payload: UpdateOrderPayload) -> Order: ...

    @abstractmethod
    async def delete_order(self, order_id: str) -> None: ...

    @abstractmethod
    async def assign_cards(self, order_id: str, card_ids: list[str]) -> Order:
        """Merge ``card_ids`` into the order, skipping ones already assigned."""

    @abstractmethod
    async def remove_cards(self, order_id: str, card_ids: list[str]) -> Order: ...

    @abstractmethod
    async def get_order_cards(self, order_id: str) -> list[Card]: ...

    @abstractmethod
    async def bulk_update_orders(self, payload: BulkUpdatePayload) -> BulkUpdateResult: ...

    @abstractmethod
    async def get_order_status(self, order_id: str) -> OrderStatusOptions:
        """Current status, the statuses it can be set to, and the timeline."""

    @abstractmethod
    async def track_order(self, uuid: str) -> PublicOrder:
        """Public view of the order with this UUID, or NotFoundError."""


class CustomerService(ABC):
    @abstractmethod
    async def list_customers(self, limit: int, offset: int) -> CustomerPage: ...

    @abstractmethod
    async def create_customer(self, payload: CreateCustomerPayload) -> Customer: ...

    @abstractmethod
    async def get_customer(self, customer_id: str) -> Customer: ...

    @abstractmethod
    async def update_customer(self, customer_id: str, payload: UpdateCustomerPayload) -> Customer: ...

    @abstractmethod
    async def delete_customer(self, customer_id: str) -> None: ...

    @abstractmethod
    async def search_customers(self, q: str, limit: int, offset: int) -> CustomerSearchResult: ...


class AnalyticsService(ABC):
    @abstractmethod
    async def get_dashboard_stats(self) -> DashboardStats: ...

    @abstractmethod
    async def get_admin_stats(self, period: Period, store_id: str | None = None) -> AdminStats: ...


@dataclass(frozen=True)
class Services:
    """The domain services injected into ``create_app``."""

    orders: OrderService
    customers: CustomerService
    analytics: AnalyticsService
