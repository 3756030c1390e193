"""Schemas for /api/metrics and /api/analytics endpoints."""

import uuid
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel

from reportcore.api.schemas.dashboards import DashboardResponse
from reportcore.api.schemas.reports import ReportResponse
from reportcore.domain.models.metric import TrendPoint


class MetricCreatedResponse(BaseModel):
    id: uuid.UUID


class MetricResponse(BaseModel):
    id: uuid.UUID
    metric_name: str
    metric_type: str
    category: str
    dimension: Optional[str] = None
    period_type: str
    period_start: datetime
    period_end: datetime
    value: str
    count: int
    metadata: Optional[dict[str, Any]] = None
    computation_time: int


class OverviewResponse(BaseModel):
    date_from: datetime
    date_to: datetime
    key_metrics: dict[str, str]
    trends: list[TrendPoint]
    recent_reports: list[ReportResponse]
    dashboards: list[DashboardResponse]
