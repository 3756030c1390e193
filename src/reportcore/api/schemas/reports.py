"""Schemas for /api/templates and /api/reports endpoints."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class TemplateResponse(BaseModel):
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    report_type: str
    category: str
    output_formats: list[str] = []
    access_level: str
    usage_count: int
    last_used_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ReportCreatedResponse(BaseModel):
    id: uuid.UUID
    status: str


class ReportResponse(BaseModel):
    id: uuid.UUID
    template_id: Optional[uuid.UUID] = None
    title: str
    report_type: str
    category: str
    status: str
    scheduled_for: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    generation_time: Optional[int] = None
    total_records: Optional[int] = None
    data_hash: Optional[str] = None
    error_message: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}
