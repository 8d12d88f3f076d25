"""Order routes."""

from typing import List

from ..models import ORDER_STATUS_METADATA
from ..processor import ActionResult, BaseRouter, RouteAction
from ..schemas import (
    BulkUpdatePayload,
    CardIdsPayload,
    CreateOrderPayload,
    OrderListQuery,
    OrderPath,
    OrderUuidPath,
    UpdateOrderPayload,
    UpdateStatusPayload,
)
from ..services.base import OrderService


class OrdersRouter(BaseRouter):
    """Order management: CRUD, card assignment and bulk status updates."""

    def __init__(self, service: OrderService):
        self.service = service

    @property
    def name(self) -> str:
        return "orders"

    def get_actions(self) -> List[RouteAction]:
        tags = ("orders",)
        return [
            RouteAction(
                name="list_orders",
                path="/orders",
                handler=self.list_orders,
                query_model=OrderListQuery,
                summary="List orders with filters and pagination",
                tags=tags,
            ),
            RouteAction(
                name="create_order",
                path="/orders",
                handler=self.create_order,
                body_model=CreateOrderPayload,
                methods=("POST",),
                status_code=201,
                summary="Create an order",
                tags=tags,
            ),
            # Registered before /orders/{id} so "bulk-update" is not taken for an ID.
            RouteAction(
                name="bulk_update_orders",
                path="/orders/bulk-update",
                handler=self.bulk_update,
                body_model=BulkUpdatePayload,
                methods=("POST",),
                summary="Update status or assignee of several orders",
                tags=tags,
            ),
            RouteAction(
                name="track_order",
                path="/orders/by-uuid/{uuid}",
                handler=self.track_order,
                path_model=OrderUuidPath,
                requires_auth=False,
                summary="Public order tracking by UUID",
                tags=tags,
            ),
            RouteAction(
                name="get_order",
                path="/orders/{id}",
                handler=self.get_order,
                path_model=OrderPath,
                summary="Fetch one order",
                tags=tags,
            ),
            RouteAction(
                name="update_order",
                path="/orders/{id}",
                handler=self.update_order,
                path_model=OrderPath,
                body_model=UpdateOrderPayload,
                methods=("PUT",),
                summary="Update an order",
                tags=tags,
            ),
            RouteAction(
                name="delete_order",
                path="/orders/{id}",
                handler=self.delete_order,
                path_model=OrderPath,
                methods=("DELETE",),
                summary="Delete a pending order",
                tags=tags,
            ),
            RouteAction(
                name="assign_cards",
                path="/orders/{id}/assign-cards",
                handler=self.assign_cards,
                path_model=OrderPath,
                body_model=CardIdsPayload,
                methods=("POST",),
                summary="Assign cards to an order",
                tags=tags,
            ),
            RouteAction(
                name="remove_cards",
                path="/orders/{id}/remove-cards",
                handler=self.remove_cards,
                path_model=OrderPath,
                body_model=CardIdsPayload,
                methods=("POST",),
                summary="Remove cards from an order",
                tags=tags,
            ),
            RouteAction(
                name="order_cards",
                path="/orders/{id}/cards",
                handler=self.order_cards,
                path_model=OrderPath,
                summary="List the cards of an order",
                tags=tags,
            ),
            RouteAction(
                name="get_order_status",
                path="/orders/{id}/status",
                handler=self.get_status,
                path_model=OrderPath,
                summary="Current status, status options and timeline",
                tags=tags,
            ),
            RouteAction(
                name="update_order_status",
                path="/orders/{id}/status",
                handler=self.update_status,
                path_model=OrderPath,
                body_model=UpdateStatusPayload,
                methods=("PUT",),
                summary="Change only the status of an order",
                tags=tags,
            ),
        ]

    async def list_orders(self, query: OrderListQuery):
        return await self.service.list_orders(query)

    async def create_order(self, body: CreateOrderPayload):
        order = await self.service.create_order(body)
        return {"order": order, "uuid": order.uuid}

    async def bulk_update(self, body: BulkUpdatePayload) -> ActionResult:
        result = await self.service.bulk_update_orders(body)
        return ActionResult(
            data=result,
            message=f"{result.updated} de {result.total} órdenes actualizadas exitosamente",
        )

    async def get_order(self, path: OrderPath):
        return {"order": await self.service.get_order(path.id)}

    async def update_order(self, path: OrderPath, body: UpdateOrderPayload):
        return {"order": await self.service.update_order(path.id, body)}

    async def delete_order(self, path: OrderPath) -> ActionResult:
        await self.service.delete_order(path.id)
        return ActionResult(message="Orden eliminada exitosamente")

    async def assign_cards(self, path: OrderPath, body: CardIdsPayload) -> ActionResult:
        order = await self.service.assign_cards(path.id, body.card_ids)
        return ActionResult(
            data=order,
            message=f"{len(body.card_ids)} cartas asignadas exitosamente a la orden {order.uuid}",
        )

    async def remove_cards(self, path: OrderPath, body: CardIdsPayload) -> ActionResult:
        order = await self.service.remove_cards(path.id, body.card_ids)
        return ActionResult(
            data=order,
            message=f"{len(body.card_ids)} cartas removidas exitosamente de la orden {order.uuid}",
        )

    async def order_cards(self, path: OrderPath) -> ActionResult:
        cards = await self.service.get_order_cards(path.id)
        return ActionResult(data=cards, message=f"Found {len(cards)} cards for order {path.id}")

    async def get_status(self, path: OrderPath):
        return await self.service.get_order_status(path.id)

    async def update_status(self, path: OrderPath, body: UpdateStatusPayload) -> ActionResult:
        update = UpdateOrderPayload(status=body.status, performed_by=body.performed_by)
        order = await self.service.update_order(path.id, update)
        label = ORDER_STATUS_METADATA[order.status].label
        return ActionResult(data={"order": order}, message=f"Estado actualizado a: {label}")

    async def track_order(self, path: OrderUuidPath):
        return {"order": await self.service.track_order(path.uuid)}
