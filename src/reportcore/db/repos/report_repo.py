import uuid
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from reportcore.db.models.report import GeneratedReport
from reportcore.domain.enums import ReportStatus


class ReportRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, **fields: Any) -> GeneratedReport:
        report = GeneratedReport(**fields)
        self._session.add(report)
        await self._session.flush()
        return report

    async def get_by_id(self, report_id: uuid.UUID, tenant_id: str, fresh: bool = False) -> Optional[GeneratedReport]:
        """Tenant-scoped lookup. `fresh` reloads a row already held in the identity map."""
        stmt = select(GeneratedReport).where(
            GeneratedReport.id == report_id,
            GeneratedReport.tenant_id == tenant_id,
        )
        if fresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_recent(self, tenant_id: str, limit: int = 10) -> list[GeneratedReport]:
        result = await self._session.execute(
            select(GeneratedReport)
            .where(GeneratedReport.tenant_id == tenant_id)
            .order_by(GeneratedReport.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def claim(self, report_id: uuid.UUID, tenant_id: str, started_at: datetime) -> bool:
        """Atomically move a report from pending to generating.

        Only one caller can win: the UPDATE matches zero rows once the status
        has changed.

        The repo does not commit. Through the pipeline the claim commits
        together with the terminal write, so other sessions never observe
        `generating`; a rival claimer waits on the row lock and then matches
        zero rows.
        """
        result = await self._session.execute(
            update(GeneratedReport)
            .where(
                GeneratedReport.id == report_id,
                GeneratedReport.tenant_id == tenant_id,
                GeneratedReport.status == ReportStatus.PENDING.value,
            )
            .values(status=ReportStatus.GENERATING.value, started_at=started_at)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def release(self, report_id: uuid.UUID) -> bool:
        """Move a scheduled report back to pending so it can be claimed."""
        result = await self._session.execute(
            update(GeneratedReport)
            .where(
                GeneratedReport.id == report_id,
                GeneratedReport.status == ReportStatus.SCHEDULED.value,
            )
            .values(status=ReportStatus.PENDING.value)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def list_due_scheduled(self, now: datetime) -> list[tuple[uuid.UUID, str]]:
        """(id, tenant_id) of scheduled reports whose time has come, oldest first."""
        result = await self._session.execute(
            select(GeneratedReport.id, GeneratedReport.tenant_id)
            .where(
                GeneratedReport.status == ReportStatus.SCHEDULED.value,
                GeneratedReport.scheduled_for <= now,
            )
            .order_by(GeneratedReport.scheduled_for.asc())
        )
        return [(row.id, row.tenant_id) for row in result.all()]

    async def mark_completed(
        self,
        report: GeneratedReport,
        *,
        completed_at: datetime,
        report_data: dict[str, Any],
        total_records: int,
        output_files: list[dict[str, Any]],
        data_hash: str,
        generation_time: int,
    ) -> None:
        report.status = ReportStatus.COMPLETED.value
        report.completed_at = completed_at
        report.report_data = report_data
        report.total_records = total_records
        report.output_files = output_files
        report.data_hash = data_hash
        report.generation_time = generation_time
        await self._session.flush()

    async def mark_failed(self, report: GeneratedReport, error_message: str, error_details: dict[str, Any]) -> None:
        report.status = ReportStatus.FAILED.value
        report.error_message = error_message
        report.error_details = error_details
        await self._session.flush()
