"""Domain types for dashboard widgets and assembled dashboard payloads."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

WIDGET_ERROR_PAYLOAD = {"error": "Failed to load widget data"}


class WidgetDataSource(BaseModel):
    type: str = "query"
    query: str = ""
    parameters: dict[str, Any] = {}
    refresh_interval: Optional[int] = Field(default=None, gt=0)  # seconds, overrides the dashboard default


class WidgetDefinition(BaseModel):
    id: str = Field(min_length=1)
    type: str
    title: str = ""
    description: Optional[str] = None
    data_source: WidgetDataSource = WidgetDataSource()
    visualization: dict[str, Any] = {}


class CachedWidget(BaseModel):
    data: Any
    cached_at: datetime


class WidgetResult(BaseModel):
    id: str
    data: Any
    last_updated: datetime
    load_time_ms: float
    cache_hit: bool = False
    failed: bool = False


class DashboardMetadata(BaseModel):
    total_load_time: float
    cache_hit: bool
    data_freshness: datetime


class DashboardData(BaseModel):
    dashboard_id: str
    widgets: list[WidgetResult]
    metadata: DashboardMetadata
