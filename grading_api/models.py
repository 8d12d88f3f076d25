"""Envelope and domain models shared by the grading API."""

from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

OrderStatus = Literal[
    "pending",
    "received",
    "processing",
    "encapsulated",
    "completed",
    "shipped",
    "delivered",
]
ProductType = Literal["grading", "mysterypack"]
Period = Literal["week", "month", "quarter", "year"]


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys, as the frontend expects."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================
# Envelope Models
# ============================================

class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="healthy")
    version: str = Field(default="1.0.0")


class FieldError(BaseModel):
    """A single violated constraint."""

    field: str = Field(..., description="Dotted location of the offending field")
    message: str = Field(..., description="What is wrong with it")


class ApiResponse(BaseModel):
    """
    Uniform response envelope.

    ``success=True`` never carries ``error``/``details``; ``success=False``
    never carries ``data``.
    """

    success: bool
    data: Any | None = None
    error: str | None = None
    message: str | None = None
    details: str | list[FieldError] | None = None

    @model_validator(mode="after")
    def _check_shape(self) -> "ApiResponse":
        if self.success and (self.error is not None or self.details is not None):
            raise ValueError("successful envelope cannot carry an error")
        if not self.success and (self.data is not None or not self.error):
            raise ValueError("failed envelope needs an error and no data")
        return self

    def to_content(self) -> dict[str, Any]:
        """JSON-ready dict with absent fields omitted."""
        content = self.model_dump(mode="json")
        return {key: value for key, value in content.items() if value is not None}


# ============================================
# Domain Models
# ============================================

class OrderItem(CamelModel):
    product_type: ProductType
    quantity: int
    unit_price: float
    subtotal: float


class StatusInfo(CamelModel):
    value: OrderStatus
    label: str
    description: str


ORDER_STATUS_METADATA: dict[str, StatusInfo] = {
    info.value: info
    for info in (
        StatusInfo(value="pending", label="Orden Creada",
                   description="Esperando que las cartas lleguen a nuestras instalaciones"),
        StatusInfo(value="received", label="Cartas Recibidas",
                   description="Las cartas han llegado y están siendo catalogadas"),
        StatusInfo(value="processing", label="En Proceso de Gradeo",
                   description="Las cartas están siendo evaluadas por nuestros expertos"),
        StatusInfo(value="encapsulated", label="Cartas Encapsuladas",
                   description="Las cartas han sido encapsuladas con su calificación"),
        StatusInfo(value="completed", label="Gradeo Completado",
                   description="El proceso de gradeo ha sido completado exitosamente"),
        StatusInfo(value="shipped", label="Enviado",
                   description="Las cartas han sido enviadas de regreso"),
        StatusInfo(value="delivered", label="Entregado",
                   description="Las cartas han sido entregadas al cliente"),
    )
}


class TimelineEntry(CamelModel):
    """One recorded status change."""

    status: OrderStatus
    date: str = Field(default_factory=utcnow_iso)
    performed_by: str | None = None


class Order(CamelModel):
    document_id: str
    uuid: str
    customer_id: str | None = None
    customer_name: str
    store_id: str | None = None
    store_name: str | None = None
    items: list[OrderItem] = Field(default_factory=list)
    card_ids: list[str] = Field(default_factory=list)
    status: OrderStatus = "pending"
    total: float = 0.0
    created_at: str = Field(default_factory=utcnow_iso)
    updated_at: str = Field(default_factory=utcnow_iso)
    assigned_to: str | None = None
    estimated_delivery: str | None = None
    timeline: list[TimelineEntry] = Field(default_factory=list)


class OrderStatusOptions(CamelModel):
    current_status: StatusInfo
    status_options: list[StatusInfo]
    timeline: list[TimelineEntry]


class PublicOrder(CamelModel):
    """The part of an order shown on the public tracking page."""

    uuid: str
    status: OrderStatus
    customer_name: str
    customer_email: str | None = None
    total: float
    estimated_delivery: str | None = None
    created_at: str
    store_name: str | None = None
    timeline: list[TimelineEntry] = Field(default_factory=list)


class Card(CamelModel):
    document_id: str
    name: str
    certification_number: int | None = None
    order_id: str | None = None
    customer_id: str | None = None


class Customer(CamelModel):
    document_id: str
    name: str
    phone: str
    email: str | None = None
    total_orders: int = 0
    total_spent: float = 0.0
    created_at: str = Field(default_factory=utcnow_iso)
    updated_at: str = Field(default_factory=utcnow_iso)


class OrderPagination(CamelModel):
    page: int
    limit: int
    total: int


class OrderPage(CamelModel):
    orders: list[Order]
    total: int
    has_next: bool
    pagination: OrderPagination


class CustomerPagination(CamelModel):
    total: int
    limit: int
    offset: int
    has_next: bool


class CustomerPage(CamelModel):
    customers: list[Customer]
    pagination: CustomerPagination


class CustomerSearchResult(CamelModel):
    customers: list[Customer]
    total: int
    query: str


class BulkUpdateFailure(CamelModel):
    order_id: str
    error: str


class BulkUpdateResult(CamelModel):
    updated: int
    total: int
    errors: list[BulkUpdateFailure] = Field(default_factory=list)
    results: list[Order] = Field(default_factory=list)


class DashboardStats(CamelModel):
    total_orders: int
    pending_orders: int
    processing_orders: int
    completed_orders: int
    total_revenue: float
    active_stores: int
    avg_processing_time: int = Field(..., description="Days")
    monthly_growth: float = Field(..., description="Percent")


class TopStore(CamelModel):
    store_id: str
    store_name: str
    total_orders: int
    total_revenue: float


class AdminStats(DashboardStats):
    total_customers: int
    new_customers_this_month: int
    top_stores: list[TopStore] = Field(default_factory=list)
    orders_by_status: dict[str, int] = Field(default_factory=dict)
    period: Period = "month"
    store_id: str | None = None
