import uuid
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from reportcore.db.models.metric import AnalyticsMetric


class MetricRepo:
    """Insert and read only; metric rows are immutable."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, **fields: Any) -> AnalyticsMetric:
        metric = AnalyticsMetric(**fields)
        self._session.add(metric)
        await self._session.flush()
        return metric

    async def get_by_id(self, metric_id: uuid.UUID, tenant_id: str) -> Optional[AnalyticsMetric]:
        result = await self._session.execute(
            select(AnalyticsMetric).where(
                AnalyticsMetric.id == metric_id,
                AnalyticsMetric.tenant_id == tenant_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_in_window(
        self,
        tenant_id: str,
        start: datetime,
        end: datetime,
        categories: Optional[list[str]] = None,
        metric_name: Optional[str] = None,
    ) -> list[AnalyticsMetric]:
        """Metrics whose period starts inside [start, end], oldest first."""
        stmt = select(AnalyticsMetric).where(
            AnalyticsMetric.tenant_id == tenant_id,
            AnalyticsMetric.period_start >= start,
            AnalyticsMetric.period_start <= end,
        )
        if categories:
            stmt = stmt.where(AnalyticsMetric.category.in_(categories))
        if metric_name is not None:
            stmt = stmt.where(AnalyticsMetric.metric_name == metric_name)
        stmt = stmt.order_by(AnalyticsMetric.period_start.asc(), AnalyticsMetric.created_at.asc())
        result = await self._session.execute(stmt)
        return list(result.scalars().all())
