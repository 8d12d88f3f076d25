"""
In-memory domain services.

Backs the API when no external store is wired in, and in tests. State lives
in one ``InMemoryStore`` shared by the three services; everything runs on the
event loop so no locking is needed.
"""

import logging
import math
import uuid
from datetime import datetime, timezone

from ..errors import BadRequestError, ConflictError, NotFoundError
from ..models import (
    AdminStats,
    BulkUpdateFailure,
    BulkUpdateResult,
    Card,
    Customer,
    CustomerPage,
    CustomerPagination,
    CustomerSearchResult,
    DashboardStats,
    Order,
    OrderItem,
    OrderPage,
    ORDER_STATUS_METADATA,
    OrderPagination,
    OrderStatusOptions,
    Period,
    PublicOrder,
    TimelineEntry,
    TopStore,
    utcnow_iso,
)
from ..schemas import (
    BulkUpdatePayload,
    CreateCustomerPayload,
    CreateOrderPayload,
    OrderListQuery,
    UpdateCustomerPayload,
    UpdateOrderPayload,
)
from .base import AnalyticsService, CustomerService, OrderService, Services

logger = logging.getLogger(__name__)

SORT_FIELDS = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "total": "total",
    "customerName": "customer_name",
}
PENDING_STATUSES = {"pending", "received"}
COMPLETED_STATUSES = {"completed", "shipped", "delivered"}
DEFAULT_PROCESSING_DAYS = 12


def _new_document_id() -> str:
    return uuid.uuid4().hex[:20]


def _new_order_uuid() -> str:
    return uuid.uuid4().hex[:8].upper()


def _parse_iso(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class InMemoryStore:
    """Process-local collections keyed by document ID."""

    def __init__(self):
        self.orders: dict[str, Order] = {}
        self.customers: dict[str, Customer] = {}
        self.cards: dict[str, Card] = {}
        self.stores: dict[str, str] = {}

    def add_store(self, store_id: str, name: str) -> None:
        self.stores[store_id] = name

    def add_card(self, card: Card) -> Card:
        self.cards[card.document_id] = card
        return card


class InMemoryOrderService(OrderService):
    def __init__(self, store: InMemoryStore):
        self.store = store

    def _require(self, order_id: str) -> Order:
        order = self.store.orders.get(order_id)
        if order is None:
            raise NotFoundError(f"Orden con ID {order_id} no encontrada")
        return order

    def _save(self, order: Order) -> Order:
        self.store.orders[order.document_id] = order
        return order

    def _link_cards(self, card_ids: list[str], order: Order | None) -> None:
        for card_id in card_ids:
            card = self.store.cards.get(card_id)
            if card is None:
                continue
            self.store.cards[card_id] = card.model_copy(update={
                "order_id": order.document_id if order else None,
                "customer_id": (order.customer_id or order.customer_name) if order else card.customer_id,
            })

    async def list_orders(self, filters: OrderListQuery) -> OrderPage:
        orders = list(self.store.orders.values())
        if filters.status:
            orders = [o for o in orders if o.status == filters.status]
        if filters.store_id:
            orders = [o for o in orders if o.store_id == filters.store_id]
        if filters.customer_id:
            orders = [o for o in orders if o.customer_id == filters.customer_id]

        total = len(orders)
        orders.sort(key=lambda o: getattr(o, SORT_FIELDS[filters.sort_by]), reverse=filters.sort_order == "desc")

        offset = (filters.page - 1) * filters.limit
        page = orders[offset:offset + filters.limit]
        has_next = offset + len(page) < total

        # search only narrows the current page
        if filters.search:
            needle = filters.search.lower()
            page = [
                o for o in page
                if needle in o.customer_name.lower()
                or needle in o.uuid.lower()
                or needle in (o.store_name or "").lower()
                or needle in o.document_id.lower()
            ]
            total = len(page)

        return OrderPage(
            orders=page,
            total=total,
            has_next=has_next,
            pagination=OrderPagination(page=filters.page, limit=filters.limit, total=total),
        )

    async def create_order(self, payload: CreateOrderPayload) -> Order:
        customer_name = payload.customer_name
        customer = None
        if payload.customer_id:
            customer = self.store.customers.get(payload.customer_id)
            if customer is None:
                raise NotFoundError(f"Cliente con ID {payload.customer_id} no encontrado")
            customer_name = customer.name

        store_name = None
        if payload.store_id:
            store_name = self.store.stores.get(payload.store_id)
            if store_name is None:
                raise NotFoundError(f"Tienda con ID {payload.store_id} no encontrada")

        items = [OrderItem.model_validate(item.model_dump()) for item in payload.items]
        order = Order(
            document_id=_new_document_id(),
            uuid=_new_order_uuid(),
            customer_id=payload.customer_id,
            customer_name=customer_name,
            store_id=payload.store_id,
            store_name=store_name,
            items=items,
            card_ids=list(dict.fromkeys(payload.card_ids or [])),
            total=sum(item.subtotal for item in items),
            timeline=[TimelineEntry(status="pending")],
        )
        self._save(order)
        self._link_cards(order.card_ids, order)

        if customer is not None:
            self.store.customers[customer.document_id] = customer.model_copy(update={
                "total_orders": customer.total_orders + 1,
                "total_spent": customer.total_spent + order.total,
                "updated_at": utcnow_iso(),
            })

        logger.info("Created order %s (%s) for %s", order.document_id, order.uuid, customer_name)
        return order

    async def get_order(self, order_id: str) -> Order:
        return self._require(order_id)

    async def update_order(self, order_id: str, payload: UpdateOrderPayload) -> Order:
        existing = self._require(order_id)
        updates = payload.model_dump(exclude_unset=True, exclude={"performed_by", "items"})
        if payload.items is not None:
            items = [OrderItem.model_validate(item.model_dump()) for item in payload.items]
            updates["items"] = items
            updates["total"] = sum(item.subtotal for item in items)
        if payload.status and payload.status != existing.status:
            logger.info(
                "Order %s status %s -> %s (by %s)",
                order_id, existing.status, payload.status, payload.performed_by or "unknown",
            )
            updates["timeline"] = [
                *existing.timeline,
                TimelineEntry(status=payload.status, performed_by=payload.performed_by),
            ]
        updates["updated_at"] = utcnow_iso()
        # Rebuilt through validation: required fields stay non-null.
        return self._save(Order.model_validate({**dict(existing), **updates}))

    async def delete_order(self, order_id: str) -> None:
        order = self._require(order_id)
        if order.status != "pending":
            raise BadRequestError("Solo se pueden eliminar órdenes pendientes")
        self._link_cards(order.card_ids, None)
        del self.store.orders[order_id]
        logger.info("Deleted order %s", order_id)

    async def assign_cards(self, order_id: str, card_ids: list[str]) -> Order:
        existing = self._require(order_id)
        merged = list(dict.fromkeys([*existing.card_ids, *card_ids]))
        order = self._save(existing.model_copy(update={"card_ids": merged, "updated_at": utcnow_iso()}))
        self._link_cards(card_ids, order)
        logger.info("Cards assigned to order %s. Total cards: %d", order_id, len(merged))
        return order

    async def remove_cards(self, order_id: str, card_ids: list[str]) -> Order:
        existing = self._require(order_id)
        to_remove = set(card_ids)
        remaining = [card_id for card_id in existing.card_ids if card_id not in to_remove]
        order = self._save(existing.model_copy(update={"card_ids": remaining, "updated_at": utcnow_iso()}))
        self._link_cards([card_id for card_id in existing.card_ids if card_id in to_remove], None)
        logger.info("Cards removed from order %s. Remaining cards: %d", order_id, len(remaining))
        return order

    async def get_order_cards(self, order_id: str) -> list[Card]:
        order = self._require(order_id)
        return [self.store.cards[card_id] for card_id in order.card_ids if card_id in self.store.cards]

    async def bulk_update_orders(self, payload: BulkUpdatePayload) -> BulkUpdateResult:
        update = UpdateOrderPayload.model_validate(
            payload.model_dump(include={"status", "assigned_to", "performed_by"}, exclude_none=True)
        )
        results: list[Order] = []
        errors: list[BulkUpdateFailure] = []
        for order_id in payload.order_ids:
            try:
                results.append(await self.update_order(order_id, update))
            except NotFoundError as exc:
                errors.append(BulkUpdateFailure(order_id=order_id, error=exc.message))
        return BulkUpdateResult(
            updated=len(results),
            total=len(payload.order_ids),
            errors=errors,
            results=results,
        )

    async def get_order_status(self, order_id: str) -> OrderStatusOptions:
        order = self._require(order_id)
        return OrderStatusOptions(
            current_status=ORDER_STATUS_METADATA[order.status],
            status_options=[info for value, info in ORDER_STATUS_METADATA.items() if value != order.status],
            timeline=order.timeline,
        )

    async def track_order(self, uuid: str) -> PublicOrder:
        order = next((o for o in self.store.orders.values() if o.uuid == uuid), None)
        if order is None:
            raise NotFoundError("Orden no encontrada")
        customer = self.store.customers.get(order.customer_id) if order.customer_id else None
        return PublicOrder(
            uuid=order.uuid,
            status=order.status,
            customer_name=order.customer_name,
            customer_email=customer.email if customer else None,
            total=order.total,
            estimated_delivery=order.estimated_delivery,
            created_at=order.created_at,
            store_name=order.store_name,
            timeline=order.timeline,
        )


class InMemoryCustomerService(CustomerService):
    def __init__(self, store: InMemoryStore):
        self.store = store

    def _require(self, customer_id: str) -> Customer:
        customer = self.store.customers.get(customer_id)
        if customer is None:
            raise NotFoundError(f"Cliente con ID {customer_id} no encontrado")
        return customer

    def _check_phone(self, phone: str, exclude_id: str | None = None) -> None:
        for customer in self.store.customers.values():
            if customer.phone == phone and customer.document_id != exclude_id:
                raise ConflictError(f"Ya existe un cliente con el teléfono {phone}")

    def _newest_first(self) -> list[Customer]:
        return sorted(self.store.customers.values(), key=lambda c: c.created_at, reverse=True)

    async def list_customers(self, limit: int, offset: int) -> CustomerPage:
        customers = self._newest_first()
        total = len(customers)
        return CustomerPage(
            customers=customers[offset:offset + limit],
            pagination=CustomerPagination(
                total=total,
                limit=limit,
                offset=offset,
                has_next=offset + limit < total,
            ),
        )

    async def create_customer(self, payload: CreateCustomerPayload) -> Customer:
        self._check_phone(payload.phone)
        customer = Customer(
            document_id=_new_document_id(),
            name=payload.name,
            phone=payload.phone,
            email=payload.email,
        )
        self.store.customers[customer.document_id] = customer
        logger.info("Created customer %s", customer.document_id)
        return customer

    async def get_customer(self, customer_id: str) -> Customer:
        return self._require(customer_id)

    async def update_customer(self, customer_id: str, payload: UpdateCustomerPayload) -> Customer:
        existing = self._require(customer_id)
        self._check_phone(payload.phone, exclude_id=customer_id)
        updates = payload.model_dump(exclude_unset=True)
        updates["updated_at"] = utcnow_iso()
        customer = existing.model_copy(update=updates)
        self.store.customers[customer_id] = customer
        return customer

    async def delete_customer(self, customer_id: str) -> None:
        self._require(customer_id)
        if any(order.customer_id == customer_id for order in self.store.orders.values()):
            raise BadRequestError("No se puede eliminar un cliente con órdenes asociadas")
        del self.store.customers[customer_id]
        logger.info("Deleted customer %s", customer_id)

    async def search_customers(self, q: str, limit: int, offset: int) -> CustomerSearchResult:
        needle = q.lower()
        matches = [
            c for c in self._newest_first()
            if needle in c.name.lower()
            or q in c.phone
            or needle in (c.email or "").lower()
        ]
        return CustomerSearchResult(customers=matches[offset:offset + limit], total=len(matches), query=q)


class InMemoryAnalyticsService(AnalyticsService):
    def __init__(self, store: InMemoryStore):
        self.store = store

    def _orders(self, store_id: str | None = None) -> list[Order]:
        orders = list(self.store.orders.values())
        if store_id:
            orders = [o for o in orders if o.store_id == store_id]
        return orders

    @staticmethod
    def _month_start(now: datetime, months_back: int = 0) -> datetime:
        month_index = now.year * 12 + (now.month - 1) - months_back
        return datetime(month_index // 12, month_index % 12 + 1, 1, tzinfo=timezone.utc)

    def _dashboard(self, orders: list[Order]) -> dict:
        now = datetime.now(timezone.utc)
        this_month = self._month_start(now)
        last_month = self._month_start(now, 1)

        created = [_parse_iso(o.created_at) for o in orders]
        this_month_count = sum(1 for d in created if d >= this_month)
        last_month_count = sum(1 for d in created if last_month <= d < this_month)
        if last_month_count:
            growth = round((this_month_count - last_month_count) / last_month_count * 100, 1)
        else:
            growth = 100.0 if this_month_count else 0.0

        durations = [
            math.ceil((_parse_iso(o.updated_at) - _parse_iso(o.created_at)).total_seconds() / 86400)
            for o in orders
            if o.status == "completed"
        ]
        avg_days = round(sum(durations) / len(durations)) if durations else DEFAULT_PROCESSING_DAYS

        return {
            "total_orders": len(orders),
            "pending_orders": sum(1 for o in orders if o.status in PENDING_STATUSES),
            "processing_orders": sum(1 for o in orders if o.status == "processing"),
            "completed_orders": sum(1 for o in orders if o.status in COMPLETED_STATUSES),
            "total_revenue": sum(o.total for o in orders),
            "active_stores": len({o.store_id for o in orders if o.store_id}),
            "avg_processing_time": avg_days,
            "monthly_growth": growth,
        }

    async def get_dashboard_stats(self) -> DashboardStats:
        return DashboardStats(**self._dashboard(self._orders()))

    async def get_admin_stats(self, period: Period, store_id: str | None = None) -> AdminStats:
        orders = self._orders(store_id)
        this_month = self._month_start(datetime.now(timezone.utc))

        by_store: dict[str, TopStore] = {}
        for order in orders:
            if not order.store_id:
                continue
            entry = by_store.setdefault(order.store_id, TopStore(
                store_id=order.store_id,
                store_name=order.store_name or order.store_id,
                total_orders=0,
                total_revenue=0.0,
            ))
            entry.total_orders += 1
            entry.total_revenue += order.total

        orders_by_status: dict[str, int] = {}
        for order in orders:
            orders_by_status[order.status] = orders_by_status.get(order.status, 0) + 1

        customers = list(self.store.customers.values())
        return AdminStats(
            **self._dashboard(orders),
            total_customers=len(customers),
            new_customers_this_month=sum(1 for c in customers if _parse_iso(c.created_at) >= this_month),
            top_stores=sorted(by_store.values(), key=lambda s: s.total_revenue, reverse=True)[:5],
            orders_by_status=orders_by_status,
            period=period,
            store_id=store_id,
        )


def create_memory_services(store: InMemoryStore | None = None) -> Services:
    """Wire the three in-memory services around one store."""
    store = store or InMemoryStore()
    return Services(
        orders=InMemoryOrderService(store),
        customers=InMemoryCustomerService(store),
        analytics=InMemoryAnalyticsService(store),
    )
