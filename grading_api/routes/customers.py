"""Customer routes."""

from typing import List

from ..processor import ActionResult, BaseRouter, RouteAction
from ..schemas import (
    CreateCustomerPayload,
    CustomerListQuery,
    CustomerPath,
    CustomerSearchQuery,
    UpdateCustomerPayload,
)
from ..services.base import CustomerService


class CustomersRouter(BaseRouter):
    def __init__(self, service: CustomerService):
        self.service = service

    @property
    def name(self) -> str:
        return "customers"

    def get_actions(self) -> List[RouteAction]:
        tags = ("customers",)
        return [
            RouteAction(
                name="list_customers",
                path="/customers",
                handler=self.list_customers,
                query_model=CustomerListQuery,
                summary="List customers, newest first",
                tags=tags,
            ),
            RouteAction(
                name="create_customer",
                path="/customers",
                handler=self.create_customer,
                body_model=CreateCustomerPayload,
                methods=("POST",),
                status_code=201,
                summary="Create a customer",
                tags=tags,
            ),
            RouteAction(
                name="search_customers",
                path="/customers/search",
                handler=self.search_customers,
                query_model=CustomerSearchQuery,
                summary="Search customers by name, phone or email",
                tags=tags,
            ),
            RouteAction(
                name="get_customer",
                path="/customers/{id}",
                handler=self.get_customer,
                path_model=CustomerPath,
                summary="Fetch one customer",
                tags=tags,
            ),
            RouteAction(
                name="update_customer",
                path="/customers/{id}",
                handler=self.update_customer,
                path_model=CustomerPath,
                body_model=UpdateCustomerPayload,
                methods=("PUT",),
                summary="Update a customer",
                tags=tags,
            ),
            RouteAction(
                name="delete_customer",
                path="/customers/{id}",
                handler=self.delete_customer,
                path_model=CustomerPath,
                methods=("DELETE",),
                summary="Delete a customer without orders",
                tags=tags,
            ),
        ]

    async def list_customers(self, query: CustomerListQuery):
        return await self.service.list_customers(query.limit, query.offset)

    async def create_customer(self, body: CreateCustomerPayload):
        return {"customer": await self.service.create_customer(body)}

    async def search_customers(self, query: CustomerSearchQuery):
        return await self.service.search_customers(query.q, query.limit or 20, query.offset)

    async def get_customer(self, path: CustomerPath):
        return {"customer": await self.service.get_customer(path.id)}

    async def update_customer(self, path: CustomerPath, body: UpdateCustomerPayload):
        return {"customer": await self.service.update_customer(path.id, body)}

    async def delete_customer(self, path: CustomerPath) -> ActionResult:
        await self.service.delete_customer(path.id)
        return ActionResult(message="Cliente eliminado exitosamente")
