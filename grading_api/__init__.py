"""REST API for a card grading business: orders, customers and analytics."""

from .api import create_app
from .auth import APIKeyAuthenticator
from .client import APIClientError, GradingAPIClient
from .config import Settings
from .cors import CORSPolicy, CORSPreflightMiddleware
from .errors import (
    APIError,
    AuthenticationError,
    BadRequestError,
    ConflictError,
    ErrorKind,
    InternalError,
    NotFoundError,
    ValidationError,
)
from .processor import ActionResult, BaseRouter, RouteAction
from .services.base import AnalyticsService, CustomerService, OrderService, Services
from .services.memory import InMemoryStore, create_memory_services
from .validation import validate

__version__ = "1.0.0"


__all__ = [
    "create_app",
    "Settings",
    "APIKeyAuthenticator",
    "CORSPolicy",
    "CORSPreflightMiddleware",
    "APIError",
    "AuthenticationError",
    "BadRequestError",
    "ConflictError",
    "ErrorKind",
    "InternalError",
    "NotFoundError",
    "ValidationError",
    "ActionResult",
    "BaseRouter",
    "RouteAction",
    "AnalyticsService",
    "CustomerService",
    "OrderService",
    "Services",
    "InMemoryStore",
    "create_memory_services",
    "validate",
    "GradingAPIClient",
    "APIClientError",
]
