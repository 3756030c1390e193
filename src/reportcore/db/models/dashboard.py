"""Analytics dashboards with their embedded widget definitions."""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from reportcore.db.session import Base, TenantScoped, TimestampMixin, UUIDPrimaryKey


class AnalyticsDashboard(UUIDPrimaryKey, TimestampMixin, TenantScoped, Base):
    __tablename__ = "analytics_dashboards"

    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text, default=None)
    category: Mapped[str] = mapped_column(String(50))
    layout: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, default=None)
    widgets: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)  # ordered WidgetDefinition dumps
    refresh_interval: Mapped[int] = mapped_column(default=300)  # seconds
    access_level: Mapped[str] = mapped_column(String(30), default="organization")
    view_count: Mapped[int] = mapped_column(default=0)
    average_load_time: Mapped[Optional[float]] = mapped_column(Float, default=None)  # milliseconds, running average
    last_viewed_at: Mapped[Optional[datetime]] = mapped_column(default=None)
    created_by: Mapped[str] = mapped_column(String(64), default="")
