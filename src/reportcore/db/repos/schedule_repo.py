import uuid
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from reportcore.db.models.schedule import ReportSchedule


class ScheduleRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, **fields: Any) -> ReportSchedule:
        schedule = ReportSchedule(**fields)
        self._session.add(schedule)
        await self._session.flush()
        return schedule

    async def get_by_id(self, schedule_id: uuid.UUID, tenant_id: str) -> Optional[ReportSchedule]:
        result = await self._session.execute(
            select(ReportSchedule).where(
                ReportSchedule.id == schedule_id,
                ReportSchedule.tenant_id == tenant_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_for_tenant(self, tenant_id: str) -> list[ReportSchedule]:
        result = await self._session.execute(
            select(ReportSchedule)
            .where(ReportSchedule.tenant_id == tenant_id)
            .order_by(ReportSchedule.next_run_at.asc())
        )
        return list(result.scalars().all())

    async def list_due(self, now: datetime) -> list[ReportSchedule]:
        result = await self._session.execute(
            select(ReportSchedule)
            .where(
                ReportSchedule.is_active.is_(True),
                ReportSchedule.next_run_at.is_not(None),
                ReportSchedule.next_run_at <= now,
            )
            .order_by(ReportSchedule.next_run_at.asc())
        )
        return list(result.scalars().all())

    async def record_run(
        self,
        schedule_id: uuid.UUID,
        ran_at: datetime,
        next_run_at: datetime,
        error: Optional[str] = None,
    ) -> None:
        values: dict[str, Any] = {"last_run_at": ran_at, "next_run_at": next_run_at, "last_error": error}
        if error is None:
            values["successful_runs"] = ReportSchedule.successful_runs + 1
        else:
            values["failed_runs"] = ReportSchedule.failed_runs + 1
        await self._session.execute(
            update(ReportSchedule)
            .where(ReportSchedule.id == schedule_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
