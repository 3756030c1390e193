"""Schedules API — recurring report schedules."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from reportcore.api.deps import build_schedule_service, get_caller, get_db
from reportcore.api.schemas.schedules import ScheduleResponse
from reportcore.db.repos.schedule_repo import ScheduleRepo
from reportcore.domain.errors import NotFoundError
from reportcore.domain.models.caller import Caller
from reportcore.domain.models.schedule import ScheduleSpec
from reportcore.schedule.service import ScheduleService

router = APIRouter(prefix="/api/schedules", tags=["schedules"])

DbDep = Annotated[AsyncSession, Depends(get_db)]
CallerDep = Annotated[Caller, Depends(get_caller)]


@router.post("", response_model=ScheduleResponse, status_code=201)
async def create_schedule(
    body: ScheduleSpec,
    db: DbDep,
    caller: CallerDep,
    service: ScheduleService = Depends(build_schedule_service),
) -> ScheduleResponse:
    try:
        schedule = await service.create_schedule(body, caller)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    await db.commit()
    return ScheduleResponse.model_validate(schedule)


@router.get("", response_model=list[ScheduleResponse])
async def list_schedules(db: DbDep, caller: CallerDep) -> list[ScheduleResponse]:
    repo = ScheduleRepo(db)
    return [ScheduleResponse.model_validate(s) for s in await repo.list_for_tenant(caller.tenant_id)]
