"""Domain service interfaces and the in-memory implementation."""

from .base import AnalyticsService, CustomerService, OrderService, Services
from .memory import (
    InMemoryAnalyticsService,
    InMemoryCustomerService,
    InMemoryOrderService,
    InMemoryStore,
    create_memory_services,
)

__all__ = [
    "AnalyticsService",
    "CustomerService",
    "OrderService",
    "Services",
    "InMemoryAnalyticsService",
    "InMemoryCustomerService",
    "InMemoryOrderService",
    "InMemoryStore",
    "create_memory_services",
]
