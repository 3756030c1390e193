import uuid
from typing import AsyncGenerator

from dependency_injector.wiring import Provide, inject
from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from reportcore.clock import Clock
from reportcore.config import Settings
from reportcore.container import Container
from reportcore.dashboard.cache import WidgetCacheStore
from reportcore.dashboard.executor import WidgetQueryExecutor
from reportcore.dashboard.orchestrator import DashboardOrchestrator
from reportcore.dashboard.widget_cache import DashboardWidgetCache
from reportcore.domain.models.caller import Caller
from reportcore.metrics.computation import MetricComputation
from reportcore.metrics.engine import MetricEngine
from reportcore.metrics.overview import AnalyticsOverviewService
from reportcore.report.aggregator import MetricSnapshotAggregator
from reportcore.report.renderer import OutputRenderer
from reportcore.report.service import ReportService
from reportcore.schedule.service import ScheduleService


@inject
async def get_db(
    session_factory: async_sessionmaker[AsyncSession] = Depends(Provide[Container.session_factory]),
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


async def get_caller(
    x_tenant_id: str = Header(..., description="Tenant that owns the request"),
    x_user_id: str = Header("", description="User stamped on created records"),
) -> Caller:
    """Identity is resolved upstream; the engine only reads it."""
    return Caller(tenant_id=x_tenant_id, user_id=x_user_id)


def parse_id(value: str, label: str) -> uuid.UUID:
    try:
        return uuid.UUID(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {label} ID")


@inject
def get_settings(settings: Settings = Depends(Provide[Container.settings])) -> Settings:
    return settings


@inject
def get_clock(clock: Clock = Depends(Provide[Container.clock])) -> Clock:
    return clock


@inject
def get_renderer(renderer: OutputRenderer = Depends(Provide[Container.renderer])) -> OutputRenderer:
    return renderer


@inject
def get_widget_store(store: WidgetCacheStore = Depends(Provide[Container.widget_cache_store])) -> WidgetCacheStore:
    return store


@inject
def get_widget_executor(
    executor: WidgetQueryExecutor = Depends(Provide[Container.widget_executor]),
) -> WidgetQueryExecutor:
    return executor


@inject
def get_metric_computation(
    computation: MetricComputation = Depends(Provide[Container.metric_computation]),
) -> MetricComputation:
    return computation


def build_report_service(
    db: AsyncSession = Depends(get_db),
    renderer: OutputRenderer = Depends(get_renderer),
    clock: Clock = Depends(get_clock),
) -> ReportService:
    return ReportService(db, aggregator=MetricSnapshotAggregator(db), renderer=renderer, clock=clock, generate_inline=False)


def build_dashboard_orchestrator(
    db: AsyncSession = Depends(get_db),
    store: WidgetCacheStore = Depends(get_widget_store),
    executor: WidgetQueryExecutor = Depends(get_widget_executor),
    settings: Settings = Depends(get_settings),
    clock: Clock = Depends(get_clock),
) -> DashboardOrchestrator:
    widget_cache = DashboardWidgetCache(store, executor, clock=clock, namespace=settings.cache_namespace)
    return DashboardOrchestrator(db, widget_cache, clock=clock, concurrency=settings.widget_concurrency)


def build_metric_engine(
    db: AsyncSession = Depends(get_db),
    computation: MetricComputation = Depends(get_metric_computation),
    clock: Clock = Depends(get_clock),
) -> MetricEngine:
    return MetricEngine(db, computation=computation, clock=clock)


def build_overview_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    clock: Clock = Depends(get_clock),
) -> AnalyticsOverviewService:
    return AnalyticsOverviewService(
        db, clock=clock, window_days=settings.overview_window_days, recent_limit=settings.recent_reports_limit
    )


def build_schedule_service(
    db: AsyncSession = Depends(get_db),
    reports: ReportService = Depends(build_report_service),
    clock: Clock = Depends(get_clock),
) -> ScheduleService:
    return ScheduleService(db, intake=reports.intake, clock=clock)
