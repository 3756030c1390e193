"""ReportRequestIntake — validates a request and creates the initial report row."""

import logging
import uuid
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from reportcore.clock import Clock, SystemClock, to_naive_utc
from reportcore.db.repos.report_repo import ReportRepo
from reportcore.db.repos.template_repo import TemplateRepo
from reportcore.domain.enums import ReportCategory, ReportStatus
from reportcore.domain.errors import TemplateNotFound
from reportcore.domain.models.caller import Caller
from reportcore.domain.models.report import ReportRequest
from reportcore.report.pipeline import ReportGenerationPipeline

logger = logging.getLogger(__name__)


class ReportRequestIntake:
    def __init__(
        self,
        session: AsyncSession,
        pipeline: Optional[ReportGenerationPipeline] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self._reports = ReportRepo(session)
        self._templates = TemplateRepo(session)
        self._pipeline = pipeline
        self._clock = clock or SystemClock()

    async def submit(self, request: ReportRequest, caller: Caller) -> uuid.UUID:
        """Create the report and, unless it is scheduled for later, generate it now.

        Raises TemplateNotFound before anything is written. Generation failures
        do not propagate: the returned report id then resolves to `failed`.
        """
        template = None
        if request.template_id is not None:
            template = await self._templates.get_by_id(request.template_id, caller.tenant_id)
            if template is None:
                raise TemplateNotFound(request.template_id)

        scheduled_for = to_naive_utc(request.scheduled_for) if request.scheduled_for else None
        is_scheduled = scheduled_for is not None and scheduled_for > self._clock.now()

        report = await self._reports.create(
            tenant_id=caller.tenant_id,
            template_id=request.template_id,
            title=request.title,
            report_type=request.report_type.value,
            category=template.category if template else ReportCategory.OPERATIONAL.value,
            parameters=request.parameters.model_dump(mode="json"),
            status=(ReportStatus.SCHEDULED if is_scheduled else ReportStatus.PENDING).value,
            scheduled_for=scheduled_for if is_scheduled else None,
            generated_by=caller.user_id,
            requested_by=caller.user_id,
        )
        logger.info("Report %s created for tenant %s (status=%s)", report.id, caller.tenant_id, report.status)

        if not is_scheduled and self._pipeline is not None:
            await self._pipeline.run(report.id, caller.tenant_id)
        return report.id
