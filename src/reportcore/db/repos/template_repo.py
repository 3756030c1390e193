import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from reportcore.db.models.template import ReportTemplate
from reportcore.domain.models.report import TemplateSpec


class TemplateRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, template_id: uuid.UUID, tenant_id: str) -> Optional[ReportTemplate]:
        result = await self._session.execute(
            select(ReportTemplate).where(
                ReportTemplate.id == template_id,
                ReportTemplate.tenant_id == tenant_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_for_tenant(self, tenant_id: str) -> list[ReportTemplate]:
        result = await self._session.execute(
            select(ReportTemplate)
            .where(ReportTemplate.tenant_id == tenant_id, ReportTemplate.is_active.is_(True))
            .order_by(ReportTemplate.name)
        )
        return list(result.scalars().all())

    async def create(self, tenant_id: str, spec: TemplateSpec, created_by: str) -> ReportTemplate:
        template = ReportTemplate(
            tenant_id=tenant_id,
            name=spec.name,
            description=spec.description,
            report_type=spec.report_type.value,
            category=spec.category.value,
            data_source_config=spec.data_source_config,
            report_structure=spec.report_structure,
            output_formats=[f.value for f in spec.output_formats],
            access_level=spec.access_level,
            created_by=created_by,
        )
        self._session.add(template)
        await self._session.flush()
        return template

    async def record_usage(self, template_id: uuid.UUID, used_at: datetime) -> None:
        """Increment usage_count in the store and stamp last_used_at."""
        await self._session.execute(
            update(ReportTemplate)
            .where(ReportTemplate.id == template_id)
            .values(usage_count=ReportTemplate.usage_count + 1, last_used_at=used_at)
            .execution_options(synchronize_session=False)
        )
