from enum import Enum


class ReportStatus(str, Enum):
    """Lifecycle of a generated report. COMPLETED and FAILED are terminal."""

    PENDING = "pending"
    SCHEDULED = "scheduled"
    GENERATING = "generating"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ReportStatus.COMPLETED, ReportStatus.FAILED)


class ReportType(str, Enum):
    FINANCIAL_SUMMARY = "financial_summary"
    TAX_COMPLIANCE = "tax_compliance"
    CLIENT_ACTIVITY = "client_activity"
    REVENUE_ANALYSIS = "revenue_analysis"
    EXPENSE_TRACKING = "expense_tracking"
    PROFIT_LOSS = "profit_loss"
    CASH_FLOW = "cash_flow"
    BALANCE_SHEET = "balance_sheet"
    TAX_LIABILITY = "tax_liability"
    CLIENT_PROFITABILITY = "client_profitability"
    SERVICE_PERFORMANCE = "service_performance"
    COMPLIANCE_STATUS = "compliance_status"
    AUDIT_TRAIL = "audit_trail"
    CUSTOM_ANALYTICS = "custom_analytics"


class ReportCategory(str, Enum):
    FINANCIAL = "financial"
    COMPLIANCE = "compliance"
    OPERATIONAL = "operational"
    CLIENT_MANAGEMENT = "client_management"
    BUSINESS_INTELLIGENCE = "business_intelligence"
    REGULATORY = "regulatory"
    AUDIT = "audit"
    PERFORMANCE = "performance"


class OutputFormat(str, Enum):
    """Requested output format. PDF is the primary artifact and is always rendered."""

    PDF = "pdf"
    EXCEL = "excel"
    CSV = "csv"
    ALL = "all"


class AccessLevel(str, Enum):
    ORGANIZATION = "organization"
    CLIENT_SPECIFIC = "client_specific"
    USER_SPECIFIC = "user_specific"
