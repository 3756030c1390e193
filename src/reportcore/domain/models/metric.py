from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator


class MetricRequest(BaseModel):
    metric_name: str = Field(min_length=1)
    metric_type: str
    category: str
    dimension: Optional[str] = None
    period_type: str
    period_start: datetime
    period_end: datetime
    filters: Optional[dict[str, Any]] = None

    @model_validator(mode="after")
    def _check_period(self) -> "MetricRequest":
        if self.period_start > self.period_end:
            raise ValueError("period_start must not be after period_end")
        return self


class MetricResult(BaseModel):
    value: Decimal | float | int
    count: int = 0
    metadata: dict[str, Any] = {}


class TrendPoint(BaseModel):
    metric_name: str
    period_start: datetime
    value: str
