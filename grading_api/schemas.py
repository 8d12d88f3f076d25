"""Input schemas validated at the route boundary."""

from typing import Literal

from pydantic import ConfigDict, EmailStr, Field, NonNegativeInt, PositiveInt, field_validator

from .models import CamelModel, OrderStatus, Period, ProductType


class Schema(CamelModel):
    """Base for request schemas: camelCase aliases, unknown keys dropped."""

    model_config = ConfigDict(extra="ignore")


# ============================================
# Path Models
# ============================================

class OrderPath(Schema):
    id: str = Field(..., min_length=1, description="Order document ID")


class OrderUuidPath(Schema):
    uuid: str = Field(..., min_length=5, description="Public order UUID")


class CustomerPath(Schema):
    id: str = Field(..., min_length=1, description="Customer document ID")


# ============================================
# Query Models
# ============================================

class OrderListQuery(Schema):
    page: PositiveInt = 1
    limit: int = Field(20, ge=1, le=100)
    status: OrderStatus | None = None
    store_id: str | None = None
    customer_id: str | None = None
    search: str | None = None
    sort_by: Literal["createdAt", "updatedAt", "total", "customerName"] = "createdAt"
    sort_order: Literal["asc", "desc"] = "desc"


class CustomerListQuery(Schema):
    limit: int = Field(20, ge=1, le=100)
    offset: NonNegativeInt = 0


class CustomerSearchQuery(Schema):
    q: str = Field(..., min_length=1, description="Text matched against name, phone and email")
    limit: PositiveInt | None = 20
    offset: NonNegativeInt = 0


class AdminAnalyticsQuery(Schema):
    period: Period = "month"
    store_id: str | None = None


# ============================================
# Body Models
# ============================================

class CardIdsPayload(Schema):
    card_ids: list[str] = Field(..., description="Card document IDs")


class OrderItemInput(Schema):
    product_type: ProductType
    quantity: int = Field(..., ge=1)
    unit_price: float = Field(..., ge=0)
    subtotal: float = Field(..., ge=0)


class CreateOrderPayload(Schema):
    customer_id: str | None = None
    customer_name: str = Field(..., min_length=1)
    store_id: str | None = None
    items: list[OrderItemInput] = Field(..., min_length=1)
    card_ids: list[str] | None = None


class UpdateOrderPayload(Schema):
    customer_name: str | None = Field(None, min_length=1)
    store_id: str | None = None
    store_name: str | None = None
    status: OrderStatus | None = None
    items: list[OrderItemInput] | None = None
    assigned_to: str | None = None
    estimated_delivery: str | None = None
    performed_by: str | None = None

    @field_validator("customer_name", "status", "items", mode="before")
    @classmethod
    def _reject_null(cls, value):
        # Omit these to leave them unchanged; they cannot be cleared.
        if value is None:
            raise ValueError("must not be null")
        return value


class UpdateStatusPayload(Schema):
    status: OrderStatus
    performed_by: str | None = None


class BulkUpdatePayload(Schema):
    order_ids: list[str] = Field(..., min_length=1)
    status: OrderStatus | None = None
    assigned_to: str | None = None
    performed_by: str | None = None


class CreateCustomerPayload(Schema):
    name: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., min_length=1, max_length=20)
    email: EmailStr | None = None


class UpdateCustomerPayload(Schema):
    name: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., min_length=1, max_length=20)
    email: EmailStr | None = None
