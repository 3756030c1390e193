from enum import Enum


class WidgetType(str, Enum):
    KPI = "kpi"
    CHART = "chart"
    TABLE = "table"
    METRIC = "metric"


class MetricType(str, Enum):
    REVENUE = "revenue"
    COUNT = "count"
    AVERAGE = "average"
    RATIO = "ratio"
