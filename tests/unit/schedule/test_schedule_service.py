"""Tests for ScheduleService — creating schedules and dispatching due ones."""

import uuid
from datetime import datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from reportcore.db.repos.report_repo import ReportRepo
from reportcore.db.repos.schedule_repo import ScheduleRepo
from reportcore.domain.errors import TemplateNotFound
from reportcore.domain.models.report import TemplateSpec
from reportcore.domain.models.schedule import ScheduleSpec
from reportcore.report.aggregator import EmptyAggregator
from reportcore.report.service import ReportService
from reportcore.schedule.service import ScheduleService


@pytest.fixture()
async def template(session, clock, caller):
    service = ReportService(session, clock=clock)
    return await service.create_template(
        TemplateSpec(name="Daily Ops", report_type="service_performance", category="operational"),
        caller,
    )


def _spec(template_id, **overrides) -> ScheduleSpec:
    fields = {
        "name": "Ops digest",
        "template_id": str(template_id),
        "frequency": "daily",
        "schedule_config": {"hour": 7},
    }
    fields.update(overrides)
    return ScheduleSpec.model_validate(fields)


class TestCreateSchedule:
    async def test_next_run_computed(self, session, clock, caller, template):
        service = ScheduleService(session, clock=clock)

        schedule = await service.create_schedule(_spec(template.id), caller)

        assert schedule.next_run_at == datetime(2024, 1, 16, 7, 0)
        assert schedule.is_active is True
        assert schedule.schedule_config["hour"] == 7
        assert schedule.tenant_id == caller.tenant_id

    async def test_unknown_template(self, session, clock, caller):
        service = ScheduleService(session, clock=clock)
        with pytest.raises(TemplateNotFound):
            await service.create_schedule(_spec(uuid.uuid4()), caller)


class TestDispatchDue:
    async def test_due_schedule_creates_report_and_advances(self, session, clock, caller, template):
        reports = ReportService(session, aggregator=EmptyAggregator(), clock=clock)
        service = ScheduleService(session, intake=reports.intake, clock=clock)
        schedule = await service.create_schedule(_spec(template.id), caller)

        clock.current = schedule.next_run_at + timedelta(minutes=1)
        assert await service.dispatch_due() == 1

        await session.refresh(schedule)
        assert schedule.successful_runs == 1
        assert schedule.failed_runs == 0
        assert schedule.last_run_at == clock.now()
        assert schedule.next_run_at == datetime(2024, 1, 17, 7, 0)

        created = await ReportRepo(session).list_recent(caller.tenant_id)
        assert len(created) == 1
        assert created[0].status == "completed"
        assert created[0].template_id == template.id
        assert created[0].parameters["date_from"] == "2024-01-15"
        assert created[0].parameters["date_to"] == "2024-01-16"

    async def test_not_yet_due_is_skipped(self, session, clock, caller, template):
        service = ScheduleService(session, clock=clock)
        await service.create_schedule(_spec(template.id), caller)

        assert await service.dispatch_due() == 0

    async def test_failed_generation_counts_as_failed_run(self, session, clock, caller, template):
        aggregator = AsyncMock()
        aggregator.aggregate.side_effect = RuntimeError("warehouse offline")
        reports = ReportService(session, aggregator=aggregator, clock=clock)
        service = ScheduleService(session, intake=reports.intake, clock=clock)
        schedule = await service.create_schedule(_spec(template.id), caller)

        clock.current = schedule.next_run_at
        await service.dispatch_due()

        await session.refresh(schedule)
        assert schedule.failed_runs == 1
        assert schedule.successful_runs == 0
        assert schedule.last_error == "warehouse offline"

    async def test_invalid_default_parameters_recorded(self, session, clock, caller, template):
        service = ScheduleService(session, clock=clock)
        schedule = await service.create_schedule(
            _spec(template.id, default_parameters={"output_format": "docx"}), caller
        )

        clock.current = schedule.next_run_at
        assert await service.dispatch_due() == 1

        await session.refresh(schedule)
        assert schedule.failed_runs == 1
        assert "output_format" in schedule.last_error
        assert await ReportRepo(session).list_recent(caller.tenant_id) == []

    async def test_inactive_schedule_is_not_dispatched(self, session, clock, caller, template):
        service = ScheduleService(session, clock=clock)
        schedule = await service.create_schedule(_spec(template.id), caller)
        schedule.is_active = False
        await session.flush()

        clock.current = schedule.next_run_at + timedelta(hours=1)
        assert await service.dispatch_due() == 0
        assert await ScheduleRepo(session).list_due(clock.now()) == []
