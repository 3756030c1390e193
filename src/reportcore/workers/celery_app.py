from celery import Celery

from reportcore.config import settings

celery_app = Celery("reportcore")

celery_app.conf.update(
    broker_url=settings.redis_url,
    result_backend=settings.redis_url,
    task_track_started=True,
    timezone="UTC",
    enable_utc=True,
    beat_schedule={
        "release-scheduled-reports": {
            "task": "release_scheduled_reports",
            "schedule": float(settings.schedule_dispatch_interval),
        },
        "dispatch-due-schedules": {
            "task": "dispatch_due_schedules",
            "schedule": float(settings.schedule_dispatch_interval),
        },
    },
)

# Load tasks so Celery can register them
import reportcore.workers.tasks  # noqa: E402,F401
