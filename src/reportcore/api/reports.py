"""Reports API — templates, report generation, status and download."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession

from reportcore.api.deps import build_report_service, get_caller, get_db, parse_id
from reportcore.api.schemas.reports import ReportCreatedResponse, ReportResponse, TemplateResponse
from reportcore.domain.enums import ReportStatus
from reportcore.domain.errors import NotFoundError
from reportcore.domain.models.caller import Caller
from reportcore.domain.models.report import ReportRequest, ReportStatusView, TemplateSpec
from reportcore.report.service import ReportService

router = APIRouter(prefix="/api", tags=["reports"])

DbDep = Annotated[AsyncSession, Depends(get_db)]
CallerDep = Annotated[Caller, Depends(get_caller)]
ServiceDep = Annotated[ReportService, Depends(build_report_service)]

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.post("/templates", response_model=TemplateResponse, status_code=201)
async def create_template(body: TemplateSpec, db: DbDep, caller: CallerDep, service: ServiceDep) -> TemplateResponse:
    template = await service.create_template(body, caller)
    await db.commit()
    return TemplateResponse.model_validate(template)


@router.get("/templates", response_model=list[TemplateResponse])
async def list_templates(caller: CallerDep, service: ServiceDep) -> list[TemplateResponse]:
    return [TemplateResponse.model_validate(t) for t in await service.list_templates(caller)]


@router.post("/reports/generate", response_model=ReportCreatedResponse, status_code=202)
async def generate_report(body: ReportRequest, db: DbDep, caller: CallerDep, service: ServiceDep) -> ReportCreatedResponse:
    """Create a report and queue it for background generation. Poll the status endpoint for the result."""
    from reportcore.workers.tasks import generate_report_task

    try:
        report_id = await service.generate(body, caller)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    await db.commit()

    report = await service.get_report(report_id, caller)
    if report.status == ReportStatus.PENDING.value:
        generate_report_task.delay(str(report.id), caller.tenant_id)
    return ReportCreatedResponse(id=report.id, status=report.status)


@router.get("/reports", response_model=list[ReportResponse])
async def list_reports(
    caller: CallerDep,
    service: ServiceDep,
    limit: int = Query(10, ge=1, le=100),
) -> list[ReportResponse]:
    records = await service.list_reports(caller, limit=limit)
    return [ReportResponse.model_validate(r) for r in records]


@router.get("/reports/{report_id}/status", response_model=ReportStatusView)
async def get_report_status(report_id: str, caller: CallerDep, service: ServiceDep) -> ReportStatusView:
    try:
        return await service.get_status(parse_id(report_id, "report"), caller)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/reports/{report_id}/run", response_model=ReportCreatedResponse, status_code=202)
async def run_report(report_id: str, caller: CallerDep, service: ServiceDep) -> ReportCreatedResponse:
    """Queue a pending report for generation again. Fails with 409 unless the report is pending."""
    from reportcore.workers.tasks import generate_report_task

    try:
        report = await service.get_report(parse_id(report_id, "report"), caller)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    if report.status != ReportStatus.PENDING.value:
        raise HTTPException(status_code=409, detail=f"Report status is '{report.status}', not pending")

    generate_report_task.delay(str(report.id), caller.tenant_id)
    return ReportCreatedResponse(id=report.id, status=report.status)


@router.get("/reports/{report_id}/download")
async def download_report(report_id: str, caller: CallerDep, service: ServiceDep):
    """Download the rendered workbook of a completed report."""
    try:
        record = await service.get_report(parse_id(report_id, "report"), caller)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    if record.status != "completed":
        raise HTTPException(status_code=400, detail=f"Report status is '{record.status}', not downloadable")

    file_path = service.get_file_path(record)
    if file_path is None:
        raise HTTPException(status_code=404, detail="Report file not found on disk")

    return FileResponse(file_path, media_type=XLSX_CONTENT_TYPE, filename=file_path.name.split("_", 1)[-1])
