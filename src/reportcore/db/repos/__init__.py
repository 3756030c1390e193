from reportcore.db.repos.dashboard_repo import DashboardRepo
from reportcore.db.repos.metric_repo import MetricRepo
from reportcore.db.repos.report_repo import ReportRepo
from reportcore.db.repos.schedule_repo import ScheduleRepo
from reportcore.db.repos.template_repo import TemplateRepo

__all__ = ["DashboardRepo", "MetricRepo", "ReportRepo", "ScheduleRepo", "TemplateRepo"]
