from reportcore.db.models.dashboard import AnalyticsDashboard
from reportcore.db.models.metric import AnalyticsMetric
from reportcore.db.models.report import GeneratedReport
from reportcore.db.models.schedule import ReportSchedule
from reportcore.db.models.template import ReportTemplate

__all__ = [
    "AnalyticsDashboard",
    "AnalyticsMetric",
    "GeneratedReport",
    "ReportSchedule",
    "ReportTemplate",
]
