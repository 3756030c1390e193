"""DashboardOrchestrator — assemble every widget of a dashboard."""

import asyncio
import logging
import time
import uuid
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from reportcore.clock import Clock, SystemClock
from reportcore.dashboard.widget_cache import DashboardWidgetCache
from reportcore.db.repos.dashboard_repo import DashboardRepo
from reportcore.domain.errors import DashboardNotFound
from reportcore.domain.models.dashboard import DashboardData, DashboardMetadata, WidgetDefinition, WidgetResult

logger = logging.getLogger(__name__)


class DashboardOrchestrator:
    """Loads widgets concurrently (bounded), returns them in dashboard order."""

    def __init__(
        self,
        session: AsyncSession,
        widget_cache: DashboardWidgetCache,
        clock: Optional[Clock] = None,
        concurrency: int = 4,
    ) -> None:
        self._dashboards = DashboardRepo(session)
        self._widget_cache = widget_cache
        self._clock = clock or SystemClock()
        self._concurrency = max(1, concurrency)

    async def get_dashboard_data(self, dashboard_id: uuid.UUID, tenant_id: str) -> DashboardData:
        dashboard = await self._dashboards.get_by_id(dashboard_id, tenant_id)
        if dashboard is None:
            raise DashboardNotFound(dashboard_id)

        widgets = [WidgetDefinition.model_validate(w) for w in dashboard.widgets or []]
        semaphore = asyncio.Semaphore(self._concurrency)

        async def load(widget: WidgetDefinition) -> WidgetResult:
            async with semaphore:
                return await self._widget_cache.load(widget, dashboard.refresh_interval, tenant_id, str(dashboard.id))

        started = time.perf_counter()
        results = await asyncio.gather(*(load(w) for w in widgets))
        elapsed = (time.perf_counter() - started) * 1000

        now = self._clock.now()
        await self._dashboards.record_view(dashboard.id, load_time_ms=elapsed, viewed_at=now)

        failed = sum(1 for r in results if r.failed)
        if failed:
            logger.warning("Dashboard %s: %d of %d widgets failed", dashboard_id, failed, len(results))

        return DashboardData(
            dashboard_id=str(dashboard.id),
            widgets=list(results),
            metadata=DashboardMetadata(
                total_load_time=sum(r.load_time_ms for r in results),
                cache_hit=any(r.cache_hit for r in results),
                data_freshness=now,
            ),
        )
