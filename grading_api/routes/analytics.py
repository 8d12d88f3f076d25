"""Analytics routes."""

from typing import List

from ..processor import BaseRouter, RouteAction
from ..schemas import AdminAnalyticsQuery
from ..services.base import AnalyticsService


class AnalyticsRouter(BaseRouter):
    def __init__(self, service: AnalyticsService):
        self.service = service

    @property
    def name(self) -> str:
        return "analytics"

    def get_actions(self) -> List[RouteAction]:
        return [
            RouteAction(
                name="dashboard_stats",
                path="/analytics/dashboard",
                handler=self.dashboard,
                summary="Headline order and revenue figures",
                tags=("analytics",),
            ),
            RouteAction(
                name="admin_stats",
                path="/analytics/admin",
                handler=self.admin,
                query_model=AdminAnalyticsQuery,
                summary="Admin statistics for a period, optionally for one store",
                tags=("analytics",),
            ),
        ]

    async def dashboard(self):
        return await self.service.get_dashboard_stats()

    async def admin(self, query: AdminAnalyticsQuery):
        return await self.service.get_admin_stats(query.period, query.store_id)
