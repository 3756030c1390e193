"""Next-run arithmetic for recurring report schedules.

Pure functions: the result depends only on the arguments, so callers pass
`now` explicitly.

Policies:
  * weekly — advance by ``7 - dow(now) + day_of_week`` days (Sunday = 0).
    The result is always 1 to 13 days ahead; when today is already the
    target weekday the run lands one week later.
  * monthly — month arithmetic on (year, month), then the day of month is
    clamped to the last day of the target month (31 in April -> 30 April).
"""

import calendar
from datetime import datetime, timedelta
from typing import Any, Mapping, Optional

from reportcore.domain.enums import ScheduleFrequency
from reportcore.domain.models.schedule import ScheduleConfig

DEFAULT_HOUR = 9
DEFAULT_MINUTE = 0
DEFAULT_DAY_OF_WEEK = 1  # Monday
DEFAULT_DAY_OF_MONTH = 1


def _sunday_based_weekday(moment: datetime) -> int:
    return (moment.weekday() + 1) % 7


def _at_time(moment: datetime, config: ScheduleConfig) -> datetime:
    hour = DEFAULT_HOUR if config.hour is None else config.hour
    minute = DEFAULT_MINUTE if config.minute is None else config.minute
    return moment.replace(hour=hour, minute=minute, second=0, microsecond=0)


def _add_month(moment: datetime, day_of_month: int) -> datetime:
    year, month = (moment.year + 1, 1) if moment.month == 12 else (moment.year, moment.month + 1)
    last_day = calendar.monthrange(year, month)[1]
    return moment.replace(year=year, month=month, day=min(day_of_month, last_day))


def next_run_at(
    frequency: ScheduleFrequency | str,
    config: ScheduleConfig | Mapping[str, Any] | None,
    now: datetime,
) -> datetime:
    """Compute when a schedule should fire next, strictly after `now`."""
    if not isinstance(config, ScheduleConfig):
        config = ScheduleConfig.model_validate(config or {})
    freq = frequency.value if isinstance(frequency, ScheduleFrequency) else str(frequency)

    if freq == ScheduleFrequency.DAILY.value:
        return _at_time(now + timedelta(days=1), config)

    if freq == ScheduleFrequency.WEEKLY.value:
        target = DEFAULT_DAY_OF_WEEK if config.day_of_week is None else config.day_of_week
        days = 7 - _sunday_based_weekday(now) + target
        return _at_time(now + timedelta(days=days), config)

    if freq == ScheduleFrequency.MONTHLY.value:
        day = config.day_of_month or DEFAULT_DAY_OF_MONTH
        return _at_time(_add_month(now, day), config)

    return now.replace(minute=0, second=0, microsecond=0) + timedelta(hours=1)


def reporting_window(frequency: str, now: datetime, last_run_at: Optional[datetime] = None) -> tuple[datetime, datetime]:
    """Date range a scheduled run should cover: since the last run, else one period back."""
    if last_run_at is not None and last_run_at < now:
        return last_run_at, now
    if frequency == ScheduleFrequency.DAILY.value:
        return now - timedelta(days=1), now
    if frequency == ScheduleFrequency.WEEKLY.value:
        return now - timedelta(days=7), now
    if frequency == ScheduleFrequency.MONTHLY.value:
        return now - timedelta(days=30), now
    return now - timedelta(hours=1), now
