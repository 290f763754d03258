# easyguide/scheduler/decorators.py
from dataclasses import dataclass
from typing import Optional

from croniter import croniter

CRON_ATTR = "__cron__"


class CronExpression:
    EVERY_MINUTE = "* * * * *"
    EVERY_5_MINUTES = "*/5 * * * *"
    EVERY_30_MINUTES = "*/30 * * * *"
    EVERY_HOUR = "0 * * * *"
    EVERY_DAY_AT_MIDNIGHT = "0 0 * * *"
    EVERY_DAY_AT_NOON = "0 12 * * *"
    EVERY_WEEK = "0 0 * * 0"
    EVERY_1ST_DAY_OF_MONTH_AT_MIDNIGHT = "0 0 1 * *"


@dataclass(frozen=True)
class CronMetadata:
    expression: str
    name: Optional[str] = None


def cron(expression: str, name: Optional[str] = None):
    """Mark a service method to be run by the scheduler on a cron expression."""
    if not croniter.is_valid(expression) or len(expression.split()) != 5:
        raise ValueError(f"Invalid cron expression: {expression}")

    def decorator(func):
        setattr(func, CRON_ATTR, CronMetadata(expression, name))
        return func

    return decorator
