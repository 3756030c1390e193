"""AnalyticsOverviewService — tenant-wide summary across metrics, reports and dashboards."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from reportcore.clock import Clock, SystemClock
from reportcore.db.models.dashboard import AnalyticsDashboard
from reportcore.db.models.report import GeneratedReport
from reportcore.db.repos.dashboard_repo import DashboardRepo
from reportcore.db.repos.metric_repo import MetricRepo
from reportcore.db.repos.report_repo import ReportRepo
from reportcore.domain.models.metric import TrendPoint


@dataclass
class AnalyticsOverview:
    date_from: datetime
    date_to: datetime
    key_metrics: dict[str, str]
    trends: list[TrendPoint] = field(default_factory=list)
    recent_reports: list[GeneratedReport] = field(default_factory=list)
    dashboards: list[AnalyticsDashboard] = field(default_factory=list)


class AnalyticsOverviewService:
    def __init__(
        self,
        session: AsyncSession,
        clock: Optional[Clock] = None,
        window_days: int = 30,
        recent_limit: int = 10,
    ) -> None:
        self._metrics = MetricRepo(session)
        self._reports = ReportRepo(session)
        self._dashboards = DashboardRepo(session)
        self._clock = clock or SystemClock()
        self._window = timedelta(days=window_days)
        self._recent_limit = recent_limit

    async def get_overview(
        self,
        tenant_id: str,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        categories: Optional[list[str]] = None,
    ) -> AnalyticsOverview:
        date_to = date_to or self._clock.now()
        date_from = date_from or date_to - self._window

        rows = await self._metrics.list_in_window(tenant_id, date_from, date_to, categories=categories)
        key_metrics: dict[str, str] = {}
        for row in rows:
            key_metrics[row.metric_name] = row.value  # rows are oldest first, so the last one wins

        return AnalyticsOverview(
            date_from=date_from,
            date_to=date_to,
            key_metrics=key_metrics,
            trends=[TrendPoint(metric_name=r.metric_name, period_start=r.period_start, value=r.value) for r in rows],
            recent_reports=await self._reports.list_recent(tenant_id, limit=self._recent_limit),
            dashboards=await self._dashboards.list_for_tenant(tenant_id),
        )
