from reportcore.domain.enums.report import AccessLevel, OutputFormat, ReportCategory, ReportStatus, ReportType
from reportcore.domain.enums.schedule import ScheduleFrequency
from reportcore.domain.enums.widget import MetricType, WidgetType

__all__ = [
    "AccessLevel",
    "MetricType",
    "OutputFormat",
    "ReportCategory",
    "ReportStatus",
    "ReportType",
    "ScheduleFrequency",
    "WidgetType",
]
