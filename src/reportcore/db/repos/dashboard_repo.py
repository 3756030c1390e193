import uuid
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from reportcore.db.models.dashboard import AnalyticsDashboard


class DashboardRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, dashboard_id: uuid.UUID, tenant_id: str) -> Optional[AnalyticsDashboard]:
        result = await self._session.execute(
            select(AnalyticsDashboard).where(
                AnalyticsDashboard.id == dashboard_id,
                AnalyticsDashboard.tenant_id == tenant_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_for_tenant(self, tenant_id: str) -> list[AnalyticsDashboard]:
        """Most recently viewed first; never-viewed dashboards last."""
        result = await self._session.execute(
            select(AnalyticsDashboard)
            .where(AnalyticsDashboard.tenant_id == tenant_id)
            .order_by(AnalyticsDashboard.last_viewed_at.desc().nulls_last(), AnalyticsDashboard.name)
        )
        return list(result.scalars().all())

    async def create(self, tenant_id: str, created_by: str, **fields: Any) -> AnalyticsDashboard:
        dashboard = AnalyticsDashboard(tenant_id=tenant_id, created_by=created_by, **fields)
        self._session.add(dashboard)
        await self._session.flush()
        return dashboard

    async def record_view(self, dashboard_id: uuid.UUID, load_time_ms: float, viewed_at: datetime) -> None:
        """Bump view_count and fold load_time_ms into the running average, in one UPDATE.

        The SET expressions read the pre-update row, so concurrent viewers
        never lose an increment.
        """
        count = AnalyticsDashboard.view_count
        previous = func.coalesce(AnalyticsDashboard.average_load_time, 0.0)
        await self._session.execute(
            update(AnalyticsDashboard)
            .where(AnalyticsDashboard.id == dashboard_id)
            .values(
                view_count=count + 1,
                average_load_time=(previous * count + float(load_time_ms)) / (count + 1),
                last_viewed_at=viewed_at,
            )
            .execution_options(synchronize_session=False)
        )
