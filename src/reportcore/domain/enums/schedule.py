from enum import Enum


class ScheduleFrequency(str, Enum):
    """Recurrence of a report schedule.

    Only DAILY, WEEKLY and MONTHLY have dedicated arithmetic; every other
    value falls back to the next top of the hour.
    """

    ON_DEMAND = "on_demand"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUALLY = "annually"
