"""Recurring report schedules."""

import uuid
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from reportcore.db.session import Base, TenantScoped, TimestampMixin, UUIDPrimaryKey


class ReportSchedule(UUIDPrimaryKey, TimestampMixin, TenantScoped, Base):
    __tablename__ = "report_schedules"

    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text, default=None)
    template_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("report_templates.id"))
    frequency: Mapped[str] = mapped_column(String(20))
    schedule_config: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    default_parameters: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    distribution_config: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, default=None)
    is_active: Mapped[bool] = mapped_column(default=True)
    last_run_at: Mapped[Optional[datetime]] = mapped_column(default=None)
    next_run_at: Mapped[Optional[datetime]] = mapped_column(default=None, index=True)
    successful_runs: Mapped[int] = mapped_column(default=0)
    failed_runs: Mapped[int] = mapped_column(default=0)
    last_error: Mapped[Optional[str]] = mapped_column(Text, default=None)
    created_by: Mapped[str] = mapped_column(String(64), default="")
