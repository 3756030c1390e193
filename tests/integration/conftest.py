import uuid
from unittest.mock import MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker

from reportcore.api.deps import (
    get_clock,
    get_db,
    get_metric_computation,
    get_renderer,
    get_settings,
    get_widget_executor,
    get_widget_store,
)
from reportcore.api.main import app
from reportcore.config import Settings
from reportcore.dashboard.cache import InMemoryWidgetCache
from reportcore.dashboard.executor import SampleWidgetExecutor
from reportcore.metrics.computation import SampleMetricComputation
from reportcore.report.aggregator import MetricSnapshotAggregator
from reportcore.report.renderer import ExcelRenderer
from reportcore.report.service import ReportService

TENANT_HEADERS = {"X-Tenant-ID": "tenant-a", "X-User-ID": "user-1"}


@pytest.fixture()
def generate_task():
    mock_task = MagicMock()
    with patch("reportcore.workers.tasks.generate_report_task", mock_task):
        yield mock_task


@pytest.fixture()
def run_worker(engine, clock, tmp_path):
    """Generate a queued report the way the Celery worker does."""
    factory = async_sessionmaker(engine, expire_on_commit=False)

    async def run(report_id: str, tenant_id: str = "tenant-a"):
        async with factory() as session:
            service = ReportService(
                session,
                aggregator=MetricSnapshotAggregator(session),
                renderer=ExcelRenderer(output_dir=tmp_path),
                clock=clock,
            )
            report = await service.pipeline.run(uuid.UUID(report_id), tenant_id)
            await session.commit()
            return report

    return run


@pytest.fixture()
async def client(engine, clock, tmp_path, generate_task):
    factory = async_sessionmaker(engine, expire_on_commit=False)

    async def override_get_db():
        async with factory() as session:
            yield session

    settings = Settings(reports_dir=str(tmp_path), widget_cache_backend="memory")
    store = InMemoryWidgetCache(clock)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_renderer] = lambda: ExcelRenderer(output_dir=tmp_path)
    app.dependency_overrides[get_widget_store] = lambda: store
    app.dependency_overrides[get_widget_executor] = lambda: SampleWidgetExecutor()
    app.dependency_overrides[get_metric_computation] = lambda: SampleMetricComputation()

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test", headers=TENANT_HEADERS) as ac:
        yield ac
    app.dependency_overrides.clear()
