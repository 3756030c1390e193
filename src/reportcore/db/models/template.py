"""Report templates — reusable data source + layout configuration."""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from reportcore.db.session import Base, TenantScoped, TimestampMixin, UUIDPrimaryKey


class ReportTemplate(UUIDPrimaryKey, TimestampMixin, TenantScoped, Base):
    """Usage fields are only touched by the generation pipeline."""

    __tablename__ = "report_templates"

    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text, default=None)
    report_type: Mapped[str] = mapped_column(String(50))
    category: Mapped[str] = mapped_column(String(50))
    data_source_config: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    report_structure: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    output_formats: Mapped[list[str]] = mapped_column(JSON, default=list)
    access_level: Mapped[str] = mapped_column(String(30), default="organization")
    is_active: Mapped[bool] = mapped_column(default=True)
    usage_count: Mapped[int] = mapped_column(default=0)
    last_used_at: Mapped[Optional[datetime]] = mapped_column(default=None)
    created_by: Mapped[str] = mapped_column(String(64), default="")
