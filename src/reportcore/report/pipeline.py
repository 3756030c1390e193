"""ReportGenerationPipeline — drives a report from pending to a terminal state."""

import hashlib
import json
import logging
import traceback
import uuid
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from reportcore.clock import Clock, SystemClock, elapsed_ms
from reportcore.db.models.report import GeneratedReport
from reportcore.db.repos.report_repo import ReportRepo
from reportcore.db.repos.template_repo import TemplateRepo
from reportcore.domain.errors import ReportNotClaimable, ReportNotFound
from reportcore.domain.models.report import AggregatedData, ReportParameters
from reportcore.report.aggregator import EmptyAggregator, ReportAggregator
from reportcore.report.renderer import OutputRenderer, PlaceholderRenderer, remove_artifacts

logger = logging.getLogger(__name__)


def content_hash(data: AggregatedData) -> str:
    """SHA-256 over canonical JSON, stable across runs with identical data."""
    payload = json.dumps(data.model_dump(mode="json"), sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(payload.encode()).hexdigest()


def describe_error(exc: BaseException, timestamp: str) -> tuple[str, dict[str, Any]]:
    message = str(exc) or type(exc).__name__
    details = {
        "error": repr(exc),
        "type": type(exc).__name__,
        "traceback": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        "timestamp": timestamp,
    }
    return message, details


class ReportGenerationPipeline:
    """pending → generating → completed | failed.

    The pending → generating step is a claim: a conditional UPDATE that only
    one concurrent caller can win. Once claimed, every exception raised while
    aggregating, rendering or writing the result ends in a persisted `failed`
    state; `run` itself never leaves a report in `generating`.
    """

    def __init__(
        self,
        session: AsyncSession,
        aggregator: Optional[ReportAggregator] = None,
        renderer: Optional[OutputRenderer] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self._session = session
        self._reports = ReportRepo(session)
        self._templates = TemplateRepo(session)
        self._aggregator = aggregator or EmptyAggregator()
        self._renderer = renderer or PlaceholderRenderer()
        self._clock = clock or SystemClock()

    async def run(self, report_id: uuid.UUID, tenant_id: str) -> GeneratedReport:
        started_at = self._clock.now()
        if not await self._reports.claim(report_id, tenant_id, started_at):
            existing = await self._reports.get_by_id(report_id, tenant_id, fresh=True)
            if existing is None:
                raise ReportNotFound(report_id)
            logger.warning("Report %s not claimable (status=%s)", report_id, existing.status)
            raise ReportNotClaimable(report_id, existing.status)

        report = await self._reports.get_by_id(report_id, tenant_id, fresh=True)
        logger.info("Report %s generating", report_id)

        try:
            async with self._session.begin_nested():
                await self._complete(report, tenant_id)
        except Exception as exc:
            # The savepoint rolled back any partial success write; reload before marking failed.
            await self._session.refresh(report)
            message, details = describe_error(exc, self._clock.now().isoformat())
            await self._reports.mark_failed(report, message, details)
            logger.exception("Report %s failed", report_id)
            return report

        logger.info("Report %s completed in %d ms", report_id, report.generation_time)
        return report

    async def _complete(self, report: GeneratedReport, tenant_id: str) -> None:
        template = None
        if report.template_id is not None:
            template = await self._templates.get_by_id(report.template_id, tenant_id)

        data = await self._aggregator.aggregate(report, template)
        formats = ReportParameters.model_validate(report.parameters).requested_formats()
        files = await self._renderer.render(report, data, formats)

        completed_at = self._clock.now()
        try:
            await self._reports.mark_completed(
                report,
                completed_at=completed_at,
                report_data=data.model_dump(mode="json"),
                total_records=data.total_records,
                output_files=[f.model_dump(mode="json") for f in files],
                data_hash=content_hash(data),
                generation_time=elapsed_ms(report.started_at, completed_at),
            )
            if template is not None:
                await self._templates.record_usage(template.id, used_at=completed_at)
        except Exception:
            # A failed report keeps no artifacts.
            remove_artifacts(files)
            raise
