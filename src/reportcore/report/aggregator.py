"""Aggregation strategies — turn a report request into a data snapshot."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import defaultdict
from datetime import datetime, time
from decimal import Decimal
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from reportcore.db.models.report import GeneratedReport
from reportcore.db.models.template import ReportTemplate
from reportcore.db.repos.metric_repo import MetricRepo
from reportcore.domain.models.report import AggregatedData, ReportParameters

PLACEHOLDER_MESSAGE = "No aggregation configured. Data will appear here once analytics are configured."


class ReportAggregator(ABC):
    @abstractmethod
    async def aggregate(self, report: GeneratedReport, template: Optional[ReportTemplate]) -> AggregatedData:
        """Build the data snapshot for `report`. Any exception fails the report."""


class EmptyAggregator(ReportAggregator):
    """No-op default: a fixed, empty snapshot with zero records."""

    async def aggregate(self, report: GeneratedReport, template: Optional[ReportTemplate]) -> AggregatedData:
        return AggregatedData(
            summary={
                "total_revenue": 0,
                "total_expenses": 0,
                "net_profit": 0,
                "client_count": 0,
                "message": PLACEHOLDER_MESSAGE,
            },
            details=[],
            total_records=0,
        )


class MetricSnapshotAggregator(ReportAggregator):
    """Builds the report from stored analytics metrics in the report's date range.

    summary: latest value per metric name plus the number of data points.
    details: one row per metric, oldest first.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._metrics = MetricRepo(session)

    async def aggregate(self, report: GeneratedReport, template: Optional[ReportTemplate]) -> AggregatedData:
        params = ReportParameters.model_validate(report.parameters)
        start = datetime.combine(params.date_from, time.min)
        end = datetime.combine(params.date_to, time.max)
        categories = params.filters.get("categories") or None

        rows = await self._metrics.list_in_window(report.tenant_id, start, end, categories=categories)

        latest: dict[str, str] = {}
        totals: dict[str, Decimal] = defaultdict(Decimal)
        points: dict[str, int] = defaultdict(int)
        details = []
        for row in rows:
            latest[row.metric_name] = row.value
            totals[row.metric_name] += Decimal(row.value)
            points[row.metric_name] += 1
            details.append({
                "metric_name": row.metric_name,
                "metric_type": row.metric_type,
                "category": row.category,
                "dimension": row.dimension,
                "period_start": row.period_start.isoformat(),
                "period_end": row.period_end.isoformat(),
                "value": row.value,
                "count": row.count,
            })

        summary = {
            name: {"latest": latest[name], "total": str(totals[name]), "points": points[name]}
            for name in sorted(latest)
        }
        if template is not None:
            summary["template"] = template.name
        return AggregatedData(summary=summary, details=details, total_records=len(details))
