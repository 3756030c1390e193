"""Engine error taxonomy.

NotFound errors surface before any state transition. Generation failures are
never raised out of the pipeline; they are persisted on the report instead.
"""

import uuid


class ReportingError(Exception):
    """Base class for every error raised by the engine."""


class NotFoundError(ReportingError):
    resource = "Resource"

    def __init__(self, resource_id: uuid.UUID | str) -> None:
        self.resource_id = resource_id
        super().__init__(f"{self.resource} not found: {resource_id}")


class TemplateNotFound(NotFoundError):
    resource = "Report template"


class ReportNotFound(NotFoundError):
    resource = "Report"


class DashboardNotFound(NotFoundError):
    resource = "Dashboard"


class ScheduleNotFound(NotFoundError):
    resource = "Report schedule"


class ReportNotClaimable(ReportingError):
    """Another worker already moved the report out of `pending`."""

    def __init__(self, report_id: uuid.UUID, status: str) -> None:
        self.report_id = report_id
        self.status = status
        super().__init__(f"Report {report_id} cannot be claimed from status '{status}'")
