"""Route action definitions and the router interface that groups them."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List

from pydantic import BaseModel


@dataclass
class ActionResult:
    """Handler return value carrying an optional human-readable message."""

    data: Any = None
    message: str | None = None


@dataclass
class RouteAction:
    """
    Definition of an API route backed by a router method.

    Attributes:
        name: Short identifier used for logging and OpenAPI docs.
        path: Route path relative to the API prefix (e.g., "/orders/{id}").
        handler: Callable invoked with the validated models as keyword
            arguments ``path``, ``query`` and ``body`` (only those declared).
        path_model: Pydantic model for path parameters.
        query_model: Pydantic model for query parameters.
        body_model: Pydantic model for the JSON body (validated strictly).
        methods: HTTP methods to expose (defaults to GET).
        requires_auth: Whether the API key is required.
        status_code: Status used for the success envelope.
        summary: Optional OpenAPI summary.
        description: Optional longer description.
        tags: Optional OpenAPI tags.
    """

    name: str
    path: str
    handler: Callable[..., Awaitable[Any] | Any]
    path_model: type[BaseModel] | None = None
    query_model: type[BaseModel] | None = None
    body_model: type[BaseModel] | None = None
    methods: tuple[str, ...] = ("GET",)
    requires_auth: bool = True
    status_code: int = 200
    summary: str | None = None
    description: str | None = None
    tags: tuple[str, ...] | None = None


class BaseRouter(ABC):
    """Groups the route actions of one resource."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Router name used for logging and OpenAPI tags."""

    def get_actions(self) -> List[RouteAction]:
        """
        Return the route actions exposed by this router.

        Override in subclasses.
        """
        return []
