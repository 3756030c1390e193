import uuid
from typing import Any, Optional

from pydantic import BaseModel, Field


class ScheduleConfig(BaseModel):
    """Time-of-run settings. day_of_week uses Sunday = 0."""

    hour: Optional[int] = Field(default=None, ge=0, le=23)
    minute: Optional[int] = Field(default=None, ge=0, le=59)
    day_of_week: Optional[int] = Field(default=None, ge=0, le=6)
    day_of_month: Optional[int] = Field(default=None, ge=1, le=31)


class ScheduleSpec(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    template_id: uuid.UUID
    frequency: str
    schedule_config: ScheduleConfig = ScheduleConfig()
    default_parameters: dict[str, Any] = {}
    distribution_config: Optional[dict[str, Any]] = None
