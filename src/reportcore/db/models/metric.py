"""Analytics metrics — append-only time series of computed values."""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from reportcore.db.session import Base, TenantScoped, TimestampMixin, UUIDPrimaryKey


class AnalyticsMetric(UUIDPrimaryKey, TimestampMixin, TenantScoped, Base):
    """One computed metric value. Rows are never updated or deleted."""

    __tablename__ = "analytics_metrics"

    metric_name: Mapped[str] = mapped_column(String(100), index=True)
    metric_type: Mapped[str] = mapped_column(String(50))
    category: Mapped[str] = mapped_column(String(50))
    dimension: Mapped[Optional[str]] = mapped_column(String(100), default=None)
    period_type: Mapped[str] = mapped_column(String(30))
    period_start: Mapped[datetime] = mapped_column(index=True)
    period_end: Mapped[datetime]
    value: Mapped[str] = mapped_column(String(64))  # normalized decimal string
    count: Mapped[int] = mapped_column(default=0)
    # "metadata" is reserved on declarative classes
    metric_metadata: Mapped[Optional[dict[str, Any]]] = mapped_column("metadata", JSON, default=None)
    computation_time: Mapped[int] = mapped_column(default=0)  # milliseconds
    source_data_timestamp: Mapped[Optional[datetime]] = mapped_column(default=None)
