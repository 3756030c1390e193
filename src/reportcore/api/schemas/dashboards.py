"""Schemas for /api/dashboards endpoints."""

import uuid
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from reportcore.domain.enums import ReportCategory
from reportcore.domain.models.dashboard import WidgetDefinition


class DashboardCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    category: ReportCategory
    layout: Optional[dict[str, Any]] = None
    widgets: list[WidgetDefinition] = []
    refresh_interval: Optional[int] = Field(default=None, gt=0)  # seconds; falls back to the configured default
    access_level: str = "organization"

    @field_validator("widgets")
    @classmethod
    def check_unique_widget_ids(cls, widgets: list[WidgetDefinition]) -> list[WidgetDefinition]:
        ids = [w.id for w in widgets]
        if len(ids) != len(set(ids)):
            raise ValueError("widget ids must be unique within a dashboard")
        return widgets


class DashboardResponse(BaseModel):
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    category: str
    refresh_interval: int
    widget_count: int
    view_count: int
    average_load_time: Optional[float] = None
    last_viewed_at: Optional[datetime] = None
