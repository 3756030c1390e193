"""Metrics API — calculate metrics, read series and the analytics overview."""

from datetime import datetime
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from reportcore.api.dashboards import to_dashboard_response
from reportcore.api.deps import build_metric_engine, build_overview_service, get_caller, get_clock, get_db
from reportcore.api.schemas.metrics import MetricCreatedResponse, MetricResponse, OverviewResponse
from reportcore.api.schemas.reports import ReportResponse
from reportcore.clock import Clock
from reportcore.db.repos.metric_repo import MetricRepo
from reportcore.domain.models.caller import Caller
from reportcore.domain.models.metric import MetricRequest
from reportcore.metrics.engine import MetricEngine
from reportcore.metrics.overview import AnalyticsOverviewService

router = APIRouter(prefix="/api", tags=["metrics"])

DbDep = Annotated[AsyncSession, Depends(get_db)]
CallerDep = Annotated[Caller, Depends(get_caller)]


@router.post("/metrics", response_model=MetricCreatedResponse, status_code=201)
async def calculate_metric(
    body: MetricRequest,
    db: DbDep,
    caller: CallerDep,
    engine: MetricEngine = Depends(build_metric_engine),
) -> MetricCreatedResponse:
    metric_id = await engine.calculate(body, caller)
    await db.commit()
    return MetricCreatedResponse(id=metric_id)


@router.get("/metrics", response_model=list[MetricResponse])
async def list_metrics(
    db: DbDep,
    caller: CallerDep,
    clock: Clock = Depends(get_clock),
    metric_name: Optional[str] = Query(None),
    date_from: Optional[datetime] = Query(None),
    date_to: Optional[datetime] = Query(None),
) -> list[MetricResponse]:
    """Metric series ordered by period start; defaults to everything up to now."""
    repo = MetricRepo(db)
    rows = await repo.list_in_window(
        caller.tenant_id,
        date_from or datetime.min,
        date_to or clock.now(),
        metric_name=metric_name,
    )
    return [
        MetricResponse(
            id=m.id,
            metric_name=m.metric_name,
            metric_type=m.metric_type,
            category=m.category,
            dimension=m.dimension,
            period_type=m.period_type,
            period_start=m.period_start,
            period_end=m.period_end,
            value=m.value,
            count=m.count,
            metadata=m.metric_metadata,
            computation_time=m.computation_time,
        )
        for m in rows
    ]


@router.get("/analytics/overview", response_model=OverviewResponse)
async def analytics_overview(
    caller: CallerDep,
    service: AnalyticsOverviewService = Depends(build_overview_service),
    date_from: Optional[datetime] = Query(None),
    date_to: Optional[datetime] = Query(None),
    categories: Optional[list[str]] = Query(None),
) -> OverviewResponse:
    overview = await service.get_overview(caller.tenant_id, date_from, date_to, categories)
    return OverviewResponse(
        date_from=overview.date_from,
        date_to=overview.date_to,
        key_metrics=overview.key_metrics,
        trends=overview.trends,
        recent_reports=[ReportResponse.model_validate(r) for r in overview.recent_reports],
        dashboards=[to_dashboard_response(d) for d in overview.dashboards],
    )
