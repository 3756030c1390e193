"""Domain types for report requests, rendered artifacts and status reads."""

import uuid
from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator

from reportcore.domain.enums.report import OutputFormat, ReportCategory, ReportStatus, ReportType

PRIMARY_FORMAT = OutputFormat.PDF.value


class ReportParameters(BaseModel):
    """Parameters stored on every generated report."""

    date_from: date
    date_to: date
    filters: dict[str, Any] = {}
    output_format: OutputFormat = OutputFormat.PDF
    client_ids: Optional[list[str]] = None
    include_charts: bool = True
    include_raw_data: bool = False

    @model_validator(mode="after")
    def _check_range(self) -> "ReportParameters":
        if self.date_from > self.date_to:
            raise ValueError("date_from must not be after date_to")
        return self

    def requested_formats(self) -> list[str]:
        """Primary format first, then one entry per extra requested format."""
        formats = [PRIMARY_FORMAT]
        if self.output_format in (OutputFormat.EXCEL, OutputFormat.ALL):
            formats.append(OutputFormat.EXCEL.value)
        if self.output_format in (OutputFormat.CSV, OutputFormat.ALL):
            formats.append(OutputFormat.CSV.value)
        return formats


class ReportRequest(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    report_type: ReportType
    template_id: Optional[uuid.UUID] = None
    parameters: ReportParameters
    scheduled_for: Optional[datetime] = None


class TemplateSpec(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    report_type: ReportType
    category: ReportCategory
    data_source_config: dict[str, Any] = {}
    report_structure: dict[str, Any] = {}
    output_formats: list[OutputFormat] = [OutputFormat.PDF]
    access_level: str = "organization"


class AggregatedData(BaseModel):
    """Snapshot produced by an aggregator; hashed for change detection."""

    summary: dict[str, Any] = {}
    details: list[dict[str, Any]] = []
    total_records: int = 0


class OutputFile(BaseModel):
    format: str
    filename: str
    size_bytes: int
    download_count: int = 0
    path: Optional[str] = None  # set only when the renderer wrote bytes to disk


class ReportStatusView(BaseModel):
    status: ReportStatus
    report_data: Optional[dict[str, Any]] = None
    output_files: list[OutputFile] = []
    error_message: Optional[str] = None
