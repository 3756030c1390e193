"""Celery tasks for background report generation and schedule dispatch."""

import asyncio
import logging

from reportcore.workers.celery_app import celery_app

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, name="generate_report", max_retries=2, default_retry_delay=30)
def generate_report_task(self, report_id: str, tenant_id: str) -> dict:
    """Generate one pending report.

    Bridges to async code via asyncio.run(); each invocation creates its own
    engine + session (no shared state with FastAPI).
    """
    return asyncio.run(_generate_report_async(report_id, tenant_id))


@celery_app.task(name="release_scheduled_reports")
def release_scheduled_reports_task() -> dict:
    """Release scheduled reports whose time has come and generate them."""
    return asyncio.run(_release_scheduled_async())


@celery_app.task(name="dispatch_due_schedules")
def dispatch_due_schedules_task() -> dict:
    """Create reports for every active schedule that is due."""
    return asyncio.run(_dispatch_schedules_async())


def _build_report_service(session):
    from reportcore.config import settings
    from reportcore.report.aggregator import MetricSnapshotAggregator
    from reportcore.report.renderer import ExcelRenderer
    from reportcore.report.service import ReportService

    return ReportService(
        session,
        aggregator=MetricSnapshotAggregator(session),
        renderer=ExcelRenderer(output_dir=settings.reports_dir),
    )


async def _generate_report_async(report_id: str, tenant_id: str) -> dict:
    import uuid

    from reportcore.config import settings
    from reportcore.db.session import build_engine, build_session_factory
    from reportcore.domain.errors import NotFoundError, ReportNotClaimable

    engine = build_engine(settings.database_url, echo=False)
    session_factory = build_session_factory(engine)

    try:
        async with session_factory() as session:
            try:
                service = _build_report_service(session)
                report = await service.pipeline.run(uuid.UUID(report_id), tenant_id)
                await session.commit()
                logger.info("Report %s finished with status %s", report_id, report.status)
                return {"status": report.status, "report_id": report_id}
            except (NotFoundError, ReportNotClaimable) as e:
                await session.rollback()
                logger.warning("Skipped report %s: %s", report_id, e)
                return {"status": "skipped", "message": str(e)}
            except Exception as e:
                await session.rollback()
                logger.exception("Failed to generate report %s", report_id)
                return {"status": "error", "message": str(e)}
    finally:
        await engine.dispose()


async def _release_scheduled_async() -> dict:
    from reportcore.config import settings
    from reportcore.db.session import build_engine, build_session_factory

    engine = build_engine(settings.database_url, echo=False)
    session_factory = build_session_factory(engine)

    try:
        async with session_factory() as session:
            try:
                service = _build_report_service(session)
                released = await service.release_due()
                await session.commit()
                return {"status": "ok", "released": len(released)}
            except Exception as e:
                await session.rollback()
                logger.exception("Failed to release scheduled reports")
                return {"status": "error", "message": str(e)}
    finally:
        await engine.dispose()


async def _dispatch_schedules_async() -> dict:
    from reportcore.config import settings
    from reportcore.db.session import build_engine, build_session_factory
    from reportcore.schedule.service import ScheduleService

    engine = build_engine(settings.database_url, echo=False)
    session_factory = build_session_factory(engine)

    try:
        async with session_factory() as session:
            try:
                reports = _build_report_service(session)
                dispatched = await ScheduleService(session, intake=reports.intake).dispatch_due()
                await session.commit()
                return {"status": "ok", "dispatched": dispatched}
            except Exception as e:
                await session.rollback()
                logger.exception("Failed to dispatch due schedules")
                return {"status": "error", "message": str(e)}
    finally:
        await engine.dispose()
