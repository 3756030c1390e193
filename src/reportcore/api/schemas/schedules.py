"""Schemas for /api/schedules endpoints."""

import uuid
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel


class ScheduleResponse(BaseModel):
    id: uuid.UUID
    name: str
    template_id: uuid.UUID
    frequency: str
    schedule_config: dict[str, Any]
    is_active: bool
    next_run_at: Optional[datetime] = None
    last_run_at: Optional[datetime] = None
    successful_runs: int
    failed_runs: int
    last_error: Optional[str] = None

    model_config = {"from_attributes": True}
