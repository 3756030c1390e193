"""Widget query executors."""

from abc import ABC, abstractmethod
from typing import Any

from reportcore.domain.enums import WidgetType
from reportcore.domain.models.dashboard import WidgetDefinition

SAMPLE_WIDGET_DATA: dict[str, Any] = {
    WidgetType.KPI.value: {"value": 0, "change": 0, "trend": "flat"},
    WidgetType.CHART.value: {
        "labels": ["Jan", "Feb", "Mar", "Apr", "May"],
        "datasets": [{"label": "Revenue", "data": [12_000, 15_000, 18_000, 14_000, 22_000]}],
    },
    WidgetType.TABLE.value: {
        "headers": ["Date", "Amount", "Type"],
        "rows": [["2024-01-01", "5,000", "Revenue"], ["2024-01-02", "3,000", "Expense"]],
    },
    WidgetType.METRIC.value: {"value": 0, "unit": None},
}


class WidgetQueryExecutor(ABC):
    @abstractmethod
    async def execute(self, widget: WidgetDefinition) -> Any:
        """Compute fresh data for one widget. May raise; no timeout is imposed here."""


class SampleWidgetExecutor(WidgetQueryExecutor):
    """Deterministic sample payloads keyed by widget type."""

    async def execute(self, widget: WidgetDefinition) -> Any:
        return SAMPLE_WIDGET_DATA.get(widget.type, {"data": "No data available"})
