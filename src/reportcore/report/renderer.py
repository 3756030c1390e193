"""Output renderers — one OutputFile per requested format."""

import json
import re
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from reportcore.db.models.report import GeneratedReport
from reportcore.domain.enums import OutputFormat
from reportcore.domain.models.report import AggregatedData, OutputFile

FILE_EXTENSIONS = {
    OutputFormat.PDF.value: "pdf",
    OutputFormat.EXCEL.value: "xlsx",
    OutputFormat.CSV.value: "csv",
}

HEADER_FONT = Font(bold=True)


def build_filename(report: GeneratedReport, fmt: str) -> str:
    """`<Title_With_Underscores>_<YYYYmmddHHMMSS>.<ext>` stamped with the generation start."""
    stem = re.sub(r"\s+", "_", report.title.strip())
    stamp = (report.started_at or datetime.min).strftime("%Y%m%d%H%M%S")
    return f"{stem}_{stamp}.{FILE_EXTENSIONS.get(fmt, fmt)}"


def remove_artifacts(files: list[OutputFile]) -> None:
    """Delete whatever `files` wrote to disk."""
    for f in files:
        if f.path:
            Path(f.path).unlink(missing_ok=True)


class OutputRenderer(ABC):
    @abstractmethod
    async def render(self, report: GeneratedReport, data: AggregatedData, formats: list[str]) -> list[OutputFile]:
        """Return one descriptor per entry in `formats`, in the same order."""


class PlaceholderRenderer(OutputRenderer):
    """Descriptor-only renderer. size_bytes is the length of the JSON payload."""

    async def render(self, report: GeneratedReport, data: AggregatedData, formats: list[str]) -> list[OutputFile]:
        size = len(json.dumps(data.model_dump(mode="json"), sort_keys=True).encode())
        return [OutputFile(format=fmt, filename=build_filename(report, fmt), size_bytes=size) for fmt in formats]


class ExcelRenderer(OutputRenderer):
    """Writes a real .xlsx workbook for the excel format; other formats go to `fallback`."""

    def __init__(self, output_dir: str | Path, fallback: Optional[OutputRenderer] = None) -> None:
        self._output_dir = Path(output_dir)
        self._fallback = fallback or PlaceholderRenderer()

    async def render(self, report: GeneratedReport, data: AggregatedData, formats: list[str]) -> list[OutputFile]:
        others = [fmt for fmt in formats if fmt != OutputFormat.EXCEL.value]
        rendered = {f.format: f for f in await self._fallback.render(report, data, others)} if others else {}

        files = []
        for fmt in formats:
            if fmt == OutputFormat.EXCEL.value:
                files.append(self._write_workbook(report, data))
            else:
                files.append(rendered[fmt])
        return files

    def _write_workbook(self, report: GeneratedReport, data: AggregatedData) -> OutputFile:
        filename = build_filename(report, OutputFormat.EXCEL.value)
        self._output_dir.mkdir(parents=True, exist_ok=True)
        path = self._output_dir / f"{report.id}_{filename}"

        wb = build_workbook(report, data)
        wb.save(path)
        return OutputFile(
            format=OutputFormat.EXCEL.value,
            filename=filename,
            size_bytes=path.stat().st_size,
            path=str(path),
        )


def build_workbook(report: GeneratedReport, data: AggregatedData) -> Workbook:
    """Three sheets: summary, details, parameters."""
    wb = Workbook()

    ws = wb.active
    ws.title = "summary"
    _write_rows(ws, ["Metric", "Value"], [(k, _cell(v)) for k, v in data.summary.items()])

    columns: list[str] = []
    for row in data.details:
        for key in row:
            if key not in columns:
                columns.append(key)
    ws = wb.create_sheet(title="details")
    _write_rows(ws, columns, [tuple(_cell(row.get(c)) for c in columns) for row in data.details])

    ws = wb.create_sheet(title="parameters")
    params = [("title", report.title), ("report_type", report.report_type), ("total_records", data.total_records)]
    params += [(k, _cell(v)) for k, v in (report.parameters or {}).items()]
    _write_rows(ws, ["Parameter", "Value"], params)

    return wb


def _cell(value):
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return json.dumps(value, sort_keys=True, default=str)


def _write_rows(ws, headers: list[str], rows: list[tuple]) -> None:
    for col_idx, header in enumerate(headers, start=1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = HEADER_FONT
    for row_idx, row in enumerate(rows, start=2):
        for col_idx, value in enumerate(row, start=1):
            ws.cell(row=row_idx, column=col_idx, value=value)
    _auto_fit_columns(ws)


def _auto_fit_columns(ws) -> None:
    """Set column widths based on content (approximate)."""
    for col_cells in ws.columns:
        max_len = 0
        col_letter = get_column_letter(col_cells[0].column)
        for cell in col_cells:
            if cell.value is not None:
                max_len = max(max_len, len(str(cell.value)))
        ws.column_dimensions[col_letter].width = min(max_len + 3, 50)
