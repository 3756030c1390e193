"""Metric computation strategies."""

from abc import ABC, abstractmethod

from reportcore.domain.enums import MetricType
from reportcore.domain.models.metric import MetricRequest, MetricResult

SAMPLE_RESULTS: dict[str, tuple[float, int]] = {
    MetricType.REVENUE.value: (125_000, 45),
    MetricType.COUNT.value: (150, 150),
    MetricType.AVERAGE.value: (2500, 45),
    MetricType.RATIO.value: (0.67, 100),
}


class MetricComputation(ABC):
    @abstractmethod
    async def compute(self, request: MetricRequest) -> MetricResult:
        """Compute one value for the request's period. Errors reach the caller unchanged."""


class SampleMetricComputation(MetricComputation):
    """Fixed sample values keyed by metric type; unknown types yield zero."""

    async def compute(self, request: MetricRequest) -> MetricResult:
        value, count = SAMPLE_RESULTS.get(request.metric_type, (0, 0))
        return MetricResult(
            value=value,
            count=count,
            metadata={
                "data_range": {
                    "start": request.period_start.isoformat(),
                    "end": request.period_end.isoformat(),
                },
            },
        )
