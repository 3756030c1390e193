"""Generated reports — one row per generation request."""

import uuid
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from reportcore.db.session import Base, TenantScoped, TimestampMixin, UUIDPrimaryKey
from reportcore.domain.enums import ReportStatus


class GeneratedReport(UUIDPrimaryKey, TimestampMixin, TenantScoped, Base):
    """A report request and, once terminal, its results.

    status: pending / scheduled / generating / completed / failed
    """

    __tablename__ = "generated_reports"

    template_id: Mapped[Optional[uuid.UUID]] = mapped_column(ForeignKey("report_templates.id"), default=None)
    title: Mapped[str] = mapped_column(String(255))
    report_type: Mapped[str] = mapped_column(String(50))
    category: Mapped[str] = mapped_column(String(50))
    parameters: Mapped[dict[str, Any]] = mapped_column(JSON)
    status: Mapped[str] = mapped_column(String(20), default=ReportStatus.PENDING.value, index=True)
    scheduled_for: Mapped[Optional[datetime]] = mapped_column(default=None)
    started_at: Mapped[Optional[datetime]] = mapped_column(default=None)
    completed_at: Mapped[Optional[datetime]] = mapped_column(default=None)
    generation_time: Mapped[Optional[int]] = mapped_column(default=None)  # milliseconds
    report_data: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, default=None)
    total_records: Mapped[Optional[int]] = mapped_column(default=None)
    output_files: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    data_hash: Mapped[Optional[str]] = mapped_column(String(64), default=None)
    error_message: Mapped[Optional[str]] = mapped_column(Text, default=None)
    error_details: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, default=None)
    generated_by: Mapped[str] = mapped_column(String(64), default="")
    requested_by: Mapped[Optional[str]] = mapped_column(String(64), default=None)
