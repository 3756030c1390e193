"""Seed a demo tenant with a template, a dashboard and a month of metrics.

Usage:
    PYTHONPATH=src python scripts/seed_demo.py [tenant_id]

Idempotent: safe to run multiple times. Skips the template and dashboard
when one with the same name already exists for the tenant; metrics are
append-only, so each run adds one more data point per metric.

After seeding, load the dashboard via:
    GET /api/dashboards/{id}/data  (header X-Tenant-ID: <tenant_id>)
"""

import asyncio
import logging
import sys
from datetime import timedelta

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
logger = logging.getLogger("seed_demo")
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

DEFAULT_TENANT = "demo-tenant"

TEMPLATE = {
    "name": "Monthly Executive Summary",
    "description": "Revenue, volume and ratio KPIs for the leadership team",
    "report_type": "financial_summary",
    "category": "business_intelligence",
    "output_formats": ["pdf", "excel"],
}

DASHBOARD = {
    "name": "Operations Overview",
    "description": "Live operational KPIs",
    "category": "operational",
    "refresh_interval": 300,
    "widgets": [
        {"id": "revenue", "type": "kpi", "title": "Revenue", "data_source": {"type": "metric", "refresh_interval": 60}},
        {"id": "volume", "type": "chart", "title": "Volume", "data_source": {"type": "metric"}},
        {"id": "recent", "type": "table", "title": "Recent activity", "data_source": {"type": "query"}},
    ],
}

METRICS = [
    ("total_revenue", "revenue"),
    ("transaction_count", "count"),
    ("average_order_value", "average"),
    ("conversion_ratio", "ratio"),
]


def separator(title: str) -> None:
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}\n")


async def main(tenant_id: str) -> None:
    from reportcore.config import settings
    from reportcore.db.session import build_engine, build_session_factory

    separator(f"Seed: demo tenant '{tenant_id}'")
    print(f"Database: {settings.db_host}:{settings.db_port}/{settings.db_name}\n")

    engine = build_engine(settings.database_url, echo=False)
    session_factory = build_session_factory(engine)

    async with session_factory() as session:
        try:
            await seed(session, tenant_id)
            await session.commit()
        except Exception:
            await session.rollback()
            logger.exception("Seeding failed")
            sys.exit(1)

    await engine.dispose()
    separator("Seeding Complete")


async def seed(session, tenant_id: str) -> None:
    from reportcore.clock import SystemClock
    from reportcore.db.repos.dashboard_repo import DashboardRepo
    from reportcore.db.repos.template_repo import TemplateRepo
    from reportcore.domain.models.caller import Caller
    from reportcore.domain.models.dashboard import WidgetDefinition
    from reportcore.domain.models.metric import MetricRequest
    from reportcore.domain.models.report import TemplateSpec
    from reportcore.metrics.engine import MetricEngine

    caller = Caller(tenant_id=tenant_id, user_id="seed")
    now = SystemClock().now()

    # --- get or create template ---
    template_repo = TemplateRepo(session)
    existing = [t for t in await template_repo.list_for_tenant(tenant_id) if t.name == TEMPLATE["name"]]
    if existing:
        template, status = existing[0], "existing"
    else:
        template = await template_repo.create(tenant_id, TemplateSpec(**TEMPLATE), created_by="seed")
        status = "created"
    print(f"Template: {template.name}  [{status}]  id={template.id}")

    # --- get or create dashboard ---
    dashboard_repo = DashboardRepo(session)
    existing = [d for d in await dashboard_repo.list_for_tenant(tenant_id) if d.name == DASHBOARD["name"]]
    if existing:
        dashboard, status = existing[0], "existing"
    else:
        widgets = [WidgetDefinition(**w).model_dump(mode="json") for w in DASHBOARD["widgets"]]
        dashboard = await dashboard_repo.create(tenant_id, "seed", **{**DASHBOARD, "widgets": widgets})
        status = "created"
    print(f"Dashboard: {dashboard.name}  [{status}]  id={dashboard.id}")

    # --- append metrics ---
    engine = MetricEngine(session)
    period_end = now.replace(hour=0, minute=0, second=0, microsecond=0)
    for name, metric_type in METRICS:
        metric_id = await engine.calculate(
            MetricRequest(
                metric_name=name,
                metric_type=metric_type,
                category="operational",
                period_type="monthly",
                period_start=period_end - timedelta(days=30),
                period_end=period_end,
            ),
            caller,
        )
        print(f"  [appended] {name:<24s}  id={metric_id}")

    print(f"\nDone. Tenant '{tenant_id}' ready.")


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else DEFAULT_TENANT))
