"""ReportService — façade over intake, pipeline and report reads."""

import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from reportcore.clock import Clock, SystemClock
from reportcore.db.models.report import GeneratedReport
from reportcore.db.models.template import ReportTemplate
from reportcore.db.repos.report_repo import ReportRepo
from reportcore.db.repos.template_repo import TemplateRepo
from reportcore.domain.enums import OutputFormat, ReportStatus
from reportcore.domain.errors import ReportNotClaimable, ReportNotFound
from reportcore.domain.models.caller import Caller
from reportcore.domain.models.report import OutputFile, ReportRequest, ReportStatusView, TemplateSpec
from reportcore.report.aggregator import ReportAggregator
from reportcore.report.intake import ReportRequestIntake
from reportcore.report.pipeline import ReportGenerationPipeline
from reportcore.report.renderer import OutputRenderer

logger = logging.getLogger(__name__)


class ReportService:
    """Orchestrates template management, report submission and status reads.

    With `generate_inline=False` submitted reports stay `pending` and the
    caller hands them to a worker.
    """

    def __init__(
        self,
        session: AsyncSession,
        aggregator: Optional[ReportAggregator] = None,
        renderer: Optional[OutputRenderer] = None,
        clock: Optional[Clock] = None,
        generate_inline: bool = True,
    ) -> None:
        self._session = session
        self._clock = clock or SystemClock()
        self._reports = ReportRepo(session)
        self._templates = TemplateRepo(session)
        self.pipeline = ReportGenerationPipeline(session, aggregator=aggregator, renderer=renderer, clock=self._clock)
        self.intake = ReportRequestIntake(session, pipeline=self.pipeline if generate_inline else None, clock=self._clock)

    async def create_template(self, spec: TemplateSpec, caller: Caller) -> ReportTemplate:
        return await self._templates.create(caller.tenant_id, spec, created_by=caller.user_id)

    async def list_templates(self, caller: Caller) -> list[ReportTemplate]:
        return await self._templates.list_for_tenant(caller.tenant_id)

    async def generate(self, request: ReportRequest, caller: Caller) -> uuid.UUID:
        return await self.intake.submit(request, caller)

    async def get_report(self, report_id: uuid.UUID, caller: Caller) -> GeneratedReport:
        report = await self._reports.get_by_id(report_id, caller.tenant_id, fresh=True)
        if report is None:
            raise ReportNotFound(report_id)
        return report

    async def get_status(self, report_id: uuid.UUID, caller: Caller) -> ReportStatusView:
        report = await self.get_report(report_id, caller)
        return ReportStatusView(
            status=ReportStatus(report.status),
            report_data=report.report_data,
            output_files=[OutputFile.model_validate(f) for f in report.output_files or []],
            error_message=report.error_message,
        )

    async def list_reports(self, caller: Caller, limit: int = 10) -> list[GeneratedReport]:
        return await self._reports.list_recent(caller.tenant_id, limit=limit)

    async def release_due(self, now: Optional[datetime] = None) -> list[uuid.UUID]:
        """Move due scheduled reports to pending and generate each one.

        Returns the ids this call released. A report released by a concurrent
        dispatcher is skipped.
        """
        now = now or self._clock.now()
        released = []
        for report_id, tenant_id in await self._reports.list_due_scheduled(now):
            if not await self._reports.release(report_id):
                continue
            try:
                await self.pipeline.run(report_id, tenant_id)
            except ReportNotClaimable:
                continue
            released.append(report_id)
        if released:
            logger.info("Released %d scheduled reports", len(released))
        return released

    def get_file_path(self, report: GeneratedReport) -> Optional[Path]:
        """Path of the rendered workbook for a completed report, if it exists on disk."""
        if report.status != ReportStatus.COMPLETED.value:
            return None
        for entry in report.output_files or []:
            if entry.get("format") == OutputFormat.EXCEL.value and entry.get("path"):
                path = Path(entry["path"])
                return path if path.exists() else None
        return None
