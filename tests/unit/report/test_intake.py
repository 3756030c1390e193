"""Tests for ReportRequestIntake — request validation and initial status."""

import uuid
from datetime import date, datetime, timedelta
from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError

from reportcore.db.repos.report_repo import ReportRepo
from reportcore.db.repos.template_repo import TemplateRepo
from reportcore.domain.errors import TemplateNotFound
from reportcore.domain.models.report import ReportParameters, ReportRequest, TemplateSpec
from reportcore.report.intake import ReportRequestIntake


def _request(**overrides) -> ReportRequest:
    fields = {
        "title": "Q1 Summary",
        "report_type": "financial_summary",
        "parameters": {"date_from": "2024-01-01", "date_to": "2024-03-31"},
    }
    fields.update(overrides)
    return ReportRequest.model_validate(fields)


class TestIntakeStatus:
    async def test_future_schedule_is_scheduled(self, session, clock, caller):
        intake = ReportRequestIntake(session, clock=clock)
        when = clock.now() + timedelta(hours=2)

        report_id = await intake.submit(_request(scheduled_for=when), caller)

        report = await ReportRepo(session).get_by_id(report_id, caller.tenant_id)
        assert report.status == "scheduled"
        assert report.scheduled_for == when

    async def test_no_schedule_is_pending(self, session, clock, caller):
        intake = ReportRequestIntake(session, clock=clock)
        report_id = await intake.submit(_request(), caller)

        report = await ReportRepo(session).get_by_id(report_id, caller.tenant_id)
        assert report.status == "pending"
        assert report.scheduled_for is None
        assert report.requested_by == "user-1"
        assert report.category == "operational"

    async def test_past_schedule_is_pending(self, session, clock, caller):
        intake = ReportRequestIntake(session, clock=clock)
        report_id = await intake.submit(_request(scheduled_for=clock.now() - timedelta(minutes=1)), caller)

        report = await ReportRepo(session).get_by_id(report_id, caller.tenant_id)
        assert report.status == "pending"
        assert report.scheduled_for is None

    async def test_parameters_persisted_as_json(self, session, clock, caller):
        intake = ReportRequestIntake(session, clock=clock)
        report_id = await intake.submit(_request(), caller)

        report = await ReportRepo(session).get_by_id(report_id, caller.tenant_id)
        assert report.parameters["date_from"] == "2024-01-01"
        assert report.parameters["output_format"] == "pdf"

    async def test_aware_schedule_stored_as_naive_utc(self, session, clock, caller):
        intake = ReportRequestIntake(session, clock=clock)
        report_id = await intake.submit(_request(scheduled_for="2024-01-15T14:00:00+02:00"), caller)

        report = await ReportRepo(session).get_by_id(report_id, caller.tenant_id)
        assert report.status == "scheduled"
        assert report.scheduled_for == datetime(2024, 1, 15, 12, 0)


class TestIntakeTemplate:
    async def test_unknown_template_raises_before_write(self, session, clock, caller):
        intake = ReportRequestIntake(session, clock=clock)

        with pytest.raises(TemplateNotFound):
            await intake.submit(_request(template_id=uuid.uuid4()), caller)

        assert await ReportRepo(session).list_recent(caller.tenant_id) == []

    async def test_template_of_other_tenant_not_found(self, session, clock, caller):
        template = await TemplateRepo(session).create(
            "tenant-b",
            TemplateSpec(name="Other", report_type="cash_flow", category="financial"),
            created_by="someone",
        )
        intake = ReportRequestIntake(session, clock=clock)

        with pytest.raises(TemplateNotFound):
            await intake.submit(_request(template_id=template.id), caller)

    async def test_category_copied_from_template(self, session, clock, caller):
        template = await TemplateRepo(session).create(
            caller.tenant_id,
            TemplateSpec(name="Tax", report_type="tax_compliance", category="compliance"),
            created_by=caller.user_id,
        )
        intake = ReportRequestIntake(session, clock=clock)
        report_id = await intake.submit(_request(template_id=template.id), caller)

        report = await ReportRepo(session).get_by_id(report_id, caller.tenant_id)
        assert report.category == "compliance"
        assert report.template_id == template.id


class TestIntakeTriggersPipeline:
    async def test_pending_report_is_generated(self, session, clock, caller):
        pipeline = AsyncMock()
        intake = ReportRequestIntake(session, pipeline=pipeline, clock=clock)

        report_id = await intake.submit(_request(), caller)

        pipeline.run.assert_awaited_once_with(report_id, caller.tenant_id)

    async def test_scheduled_report_is_not_generated(self, session, clock, caller):
        pipeline = AsyncMock()
        intake = ReportRequestIntake(session, pipeline=pipeline, clock=clock)

        await intake.submit(_request(scheduled_for=clock.now() + timedelta(days=1)), caller)

        pipeline.run.assert_not_awaited()


class TestRequestValidation:
    def test_inverted_date_range_rejected(self):
        with pytest.raises(ValidationError):
            ReportParameters(date_from=date(2024, 2, 1), date_to=date(2024, 1, 1))

    def test_unknown_report_type_rejected(self):
        with pytest.raises(ValidationError):
            _request(report_type="horoscope")

    @pytest.mark.parametrize(
        "output_format, expected",
        [
            ("pdf", ["pdf"]),
            ("excel", ["pdf", "excel"]),
            ("csv", ["pdf", "csv"]),
            ("all", ["pdf", "excel", "csv"]),
        ],
    )
    def test_requested_formats(self, output_format, expected):
        params = ReportParameters(date_from=date(2024, 1, 1), date_to=date(2024, 1, 31), output_format=output_format)
        assert params.requested_formats() == expected

