"""Dashboards API — create, list and load dashboards."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from reportcore.api.deps import build_dashboard_orchestrator, get_caller, get_db, get_settings, parse_id
from reportcore.api.schemas.dashboards import DashboardCreateRequest, DashboardResponse
from reportcore.config import Settings
from reportcore.dashboard.orchestrator import DashboardOrchestrator
from reportcore.db.models.dashboard import AnalyticsDashboard
from reportcore.db.repos.dashboard_repo import DashboardRepo
from reportcore.domain.errors import NotFoundError
from reportcore.domain.models.caller import Caller
from reportcore.domain.models.dashboard import DashboardData

router = APIRouter(prefix="/api/dashboards", tags=["dashboards"])

DbDep = Annotated[AsyncSession, Depends(get_db)]
CallerDep = Annotated[Caller, Depends(get_caller)]


def to_dashboard_response(d: AnalyticsDashboard) -> DashboardResponse:
    return DashboardResponse(
        id=d.id,
        name=d.name,
        description=d.description,
        category=d.category,
        refresh_interval=d.refresh_interval,
        widget_count=len(d.widgets or []),
        view_count=d.view_count,
        average_load_time=d.average_load_time,
        last_viewed_at=d.last_viewed_at,
    )


@router.post("", response_model=DashboardResponse, status_code=201)
async def create_dashboard(
    body: DashboardCreateRequest,
    db: DbDep,
    caller: CallerDep,
    settings: Settings = Depends(get_settings),
) -> DashboardResponse:
    repo = DashboardRepo(db)
    dashboard = await repo.create(
        caller.tenant_id,
        caller.user_id,
        name=body.name,
        description=body.description,
        category=body.category.value,
        layout=body.layout,
        widgets=[w.model_dump(mode="json") for w in body.widgets],
        refresh_interval=body.refresh_interval or settings.default_refresh_interval,
        access_level=body.access_level,
    )
    await db.commit()
    return to_dashboard_response(dashboard)


@router.get("", response_model=list[DashboardResponse])
async def list_dashboards(db: DbDep, caller: CallerDep) -> list[DashboardResponse]:
    repo = DashboardRepo(db)
    return [to_dashboard_response(d) for d in await repo.list_for_tenant(caller.tenant_id)]


@router.get("/{dashboard_id}/data", response_model=DashboardData)
async def get_dashboard_data(
    dashboard_id: str,
    db: DbDep,
    caller: CallerDep,
    orchestrator: DashboardOrchestrator = Depends(build_dashboard_orchestrator),
) -> DashboardData:
    """Load every widget. Failing widgets carry an error payload instead of failing the call."""
    try:
        data = await orchestrator.get_dashboard_data(parse_id(dashboard_id, "dashboard"), caller.tenant_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    await db.commit()
    return data
