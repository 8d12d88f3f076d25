"""Routers for each API resource."""

from ..services.base import Services
from .analytics import AnalyticsRouter
from .customers import CustomersRouter
from .orders import OrdersRouter


def build_routers(services: Services) -> list:
    return [
        AnalyticsRouter(services.analytics),
        OrdersRouter(services.orders),
        CustomersRouter(services.customers),
    ]


__all__ = ["AnalyticsRouter", "CustomersRouter", "OrdersRouter", "build_routers"]
