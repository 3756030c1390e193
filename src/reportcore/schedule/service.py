"""ScheduleService — create recurring schedules and dispatch the due ones."""

import logging
from datetime import datetime
from typing import Optional

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from reportcore.clock import Clock, SystemClock
from reportcore.db.models.report import GeneratedReport
from reportcore.db.models.schedule import ReportSchedule
from reportcore.db.repos.report_repo import ReportRepo
from reportcore.db.repos.schedule_repo import ScheduleRepo
from reportcore.db.repos.template_repo import TemplateRepo
from reportcore.domain.enums import ReportStatus, ReportType
from reportcore.domain.errors import NotFoundError, TemplateNotFound
from reportcore.domain.models.caller import Caller
from reportcore.domain.models.report import ReportParameters, ReportRequest
from reportcore.domain.models.schedule import ScheduleSpec
from reportcore.report.intake import ReportRequestIntake
from reportcore.schedule.calculator import next_run_at, reporting_window

logger = logging.getLogger(__name__)


class ScheduleService:
    def __init__(
        self,
        session: AsyncSession,
        intake: Optional[ReportRequestIntake] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self._clock = clock or SystemClock()
        self._schedules = ScheduleRepo(session)
        self._templates = TemplateRepo(session)
        self._reports = ReportRepo(session)
        self._intake = intake or ReportRequestIntake(session, clock=self._clock)

    async def create_schedule(self, spec: ScheduleSpec, caller: Caller) -> ReportSchedule:
        template = await self._templates.get_by_id(spec.template_id, caller.tenant_id)
        if template is None:
            raise TemplateNotFound(spec.template_id)

        schedule = await self._schedules.create(
            tenant_id=caller.tenant_id,
            name=spec.name,
            description=spec.description,
            template_id=template.id,
            frequency=spec.frequency,
            schedule_config=spec.schedule_config.model_dump(),
            default_parameters=spec.default_parameters,
            distribution_config=spec.distribution_config,
            next_run_at=next_run_at(spec.frequency, spec.schedule_config, self._clock.now()),
            created_by=caller.user_id,
        )
        logger.info("Schedule %s created, next run at %s", schedule.id, schedule.next_run_at)
        return schedule

    async def dispatch_due(self, now: Optional[datetime] = None) -> int:
        """Submit one report per due schedule and advance each schedule. Returns the count dispatched."""
        now = now or self._clock.now()
        dispatched = 0
        for schedule in await self._schedules.list_due(now):
            error = await self._dispatch(schedule, now)
            await self._schedules.record_run(
                schedule.id,
                ran_at=now,
                next_run_at=next_run_at(schedule.frequency, schedule.schedule_config, now),
                error=error,
            )
            dispatched += 1
        return dispatched

    async def _dispatch(self, schedule: ReportSchedule, now: datetime) -> Optional[str]:
        """Run one schedule. Returns an error message, or None on success."""
        template = await self._templates.get_by_id(schedule.template_id, schedule.tenant_id)
        if template is None:
            return str(TemplateNotFound(schedule.template_id))

        start, end = reporting_window(schedule.frequency, now, schedule.last_run_at)
        try:
            request = ReportRequest(
                title=f"{schedule.name} {end:%Y-%m-%d}",
                report_type=ReportType(template.report_type),
                template_id=template.id,
                parameters=ReportParameters.model_validate(
                    {**schedule.default_parameters, "date_from": start.date(), "date_to": end.date()}
                ),
            )
            report_id = await self._intake.submit(request, Caller(schedule.tenant_id, schedule.created_by))
        except (ValidationError, NotFoundError) as exc:
            logger.warning("Schedule %s could not be dispatched: %s", schedule.id, exc)
            return str(exc)

        report: Optional[GeneratedReport] = await self._reports.get_by_id(report_id, schedule.tenant_id, fresh=True)
        if report is not None and report.status == ReportStatus.FAILED.value:
            return report.error_message
        logger.info("Schedule %s dispatched report %s", schedule.id, report_id)
        return None
