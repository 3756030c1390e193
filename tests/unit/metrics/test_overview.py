"""Tests for AnalyticsOverviewService."""

from datetime import datetime, timedelta

from reportcore.db.repos.dashboard_repo import DashboardRepo
from reportcore.db.repos.metric_repo import MetricRepo
from reportcore.domain.models.report import ReportRequest
from reportcore.metrics.overview import AnalyticsOverviewService
from reportcore.report.service import ReportService


async def _metric(session, tenant_id: str, name: str, value: str, period_start: datetime, category: str = "financial"):
    return await MetricRepo(session).create(
        tenant_id=tenant_id,
        metric_name=name,
        metric_type="revenue",
        category=category,
        period_type="daily",
        period_start=period_start,
        period_end=period_start + timedelta(days=1),
        value=value,
    )


class TestOverview:
    async def test_latest_value_per_metric_in_window(self, session, clock, caller):
        now = clock.now()
        await _metric(session, caller.tenant_id, "revenue", "100", now - timedelta(days=10))
        await _metric(session, caller.tenant_id, "revenue", "175", now - timedelta(days=2))
        await _metric(session, caller.tenant_id, "orders", "12", now - timedelta(days=5))
        await _metric(session, caller.tenant_id, "revenue", "1", now - timedelta(days=45))
        await _metric(session, "tenant-b", "revenue", "999", now - timedelta(days=1))

        overview = await AnalyticsOverviewService(session, clock=clock).get_overview(caller.tenant_id)

        assert overview.date_to == now
        assert overview.date_from == now - timedelta(days=30)
        assert overview.key_metrics == {"revenue": "175", "orders": "12"}
        assert [p.value for p in overview.trends] == ["100", "12", "175"]

    async def test_category_filter(self, session, clock, caller):
        now = clock.now()
        await _metric(session, caller.tenant_id, "revenue", "100", now - timedelta(days=1))
        await _metric(session, caller.tenant_id, "audits", "3", now - timedelta(days=1), category="audit")

        overview = await AnalyticsOverviewService(session, clock=clock).get_overview(
            caller.tenant_id, categories=["audit"]
        )

        assert overview.key_metrics == {"audits": "3"}

    async def test_recent_reports_and_dashboards(self, session, clock, caller):
        reports = ReportService(session, clock=clock)
        for i in range(3):
            await reports.generate(
                ReportRequest.model_validate({
                    "title": f"Report {i}",
                    "report_type": "cash_flow",
                    "parameters": {"date_from": "2024-01-01", "date_to": "2024-01-02"},
                }),
                caller,
            )
        await DashboardRepo(session).create(caller.tenant_id, "u", name="Main", category="financial", widgets=[])

        overview = await AnalyticsOverviewService(session, clock=clock, recent_limit=2).get_overview(caller.tenant_id)

        assert len(overview.recent_reports) == 2
        assert [d.name for d in overview.dashboards] == ["Main"]

    async def test_explicit_window(self, session, clock, caller):
        await _metric(session, caller.tenant_id, "revenue", "50", datetime(2023, 6, 1))

        overview = await AnalyticsOverviewService(session, clock=clock).get_overview(
            caller.tenant_id, date_from=datetime(2023, 5, 1), date_to=datetime(2023, 7, 1)
        )

        assert overview.key_metrics == {"revenue": "50"}
