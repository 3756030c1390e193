"""MetricEngine — compute a metric and append it to the time series."""

import logging
import time
import uuid
from decimal import Decimal
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from reportcore.clock import Clock, SystemClock, to_naive_utc
from reportcore.db.repos.metric_repo import MetricRepo
from reportcore.domain.models.caller import Caller
from reportcore.domain.models.metric import MetricRequest
from reportcore.metrics.computation import MetricComputation, SampleMetricComputation

logger = logging.getLogger(__name__)


def normalize_value(value: Decimal | float | int) -> str:
    """Plain decimal string without exponent or trailing zeros: 125000.0 -> '125000'."""
    number = Decimal(str(value))
    if not number.is_finite():
        raise ValueError(f"Metric value must be finite, got {value!r}")
    text = format(number.normalize(), "f")
    return "0" if text in ("-0", "") else text


class MetricEngine:
    def __init__(
        self,
        session: AsyncSession,
        computation: Optional[MetricComputation] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self._metrics = MetricRepo(session)
        self._computation = computation or SampleMetricComputation()
        self._clock = clock or SystemClock()

    async def calculate(self, request: MetricRequest, caller: Caller) -> uuid.UUID:
        """Compute and persist one metric row; every call appends a new row."""
        started = time.perf_counter()
        result = await self._computation.compute(request)
        computation_time = int((time.perf_counter() - started) * 1000)

        value = normalize_value(result.value)
        computed_at = self._clock.now()
        metadata = {
            **result.metadata,
            "filters": request.filters,
            "computed_at": computed_at.isoformat(),
        }

        metric = await self._metrics.create(
            tenant_id=caller.tenant_id,
            metric_name=request.metric_name,
            metric_type=request.metric_type,
            category=request.category,
            dimension=request.dimension,
            period_type=request.period_type,
            period_start=to_naive_utc(request.period_start),
            period_end=to_naive_utc(request.period_end),
            value=value,
            count=result.count,
            metric_metadata=metadata,
            computation_time=computation_time,
            source_data_timestamp=computed_at,
        )
        logger.info("Metric %s=%s stored (%d ms)", request.metric_name, value, computation_time)
        return metric.id
