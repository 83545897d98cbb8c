import calendar
from datetime import datetime, timedelta
from typing import Optional

from src.domain.entities import NotificationFrequency


def _add_month(value: datetime) -> datetime:
    year = value.year + value.month // 12
    month = value.month % 12 + 1
    # Jan 31 -> Feb 28/29: clamp to the last day of the target month
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def calculate_next_execution(
    last: datetime, frequency: NotificationFrequency
) -> Optional[datetime]:
    """
    Next fire time of a recurring schedule, preserving the time of day.

    Returns:
        last + 1 day / 7 days / 1 calendar month, None for one-shot schedules
    """
    if frequency == NotificationFrequency.daily:
        return last + timedelta(days=1)
    if frequency == NotificationFrequency.weekly:
        return last + timedelta(weeks=1)
    if frequency == NotificationFrequency.monthly:
        return _add_month(last)
    return None
