"""Login activity figures: weekday streaks and weekly presence.

All functions take "today" or "now" explicitly so results do not depend
on the machine clock.  Weeks start on Monday and only Monday-Friday count
as working days.
"""

from datetime import date, datetime, time, timedelta
from typing import Iterable

STREAK_LOOKBACK_DAYS = 365
WORK_WEEK_DAYS = 5


def _is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def login_days(timestamps: Iterable[datetime]) -> set[date]:
    return {ts.date() for ts in timestamps}


def weekday_streak(timestamps: Iterable[datetime], today: date) -> int:
    """Count consecutive working days, ending today, with at least one login.

    Saturdays and Sundays are skipped without breaking the streak; the
    first working day without a login ends it.
    """
    days = login_days(timestamps)
    streak = 0
    for offset in range(STREAK_LOOKBACK_DAYS):
        day = today - timedelta(days=offset)
        if _is_weekend(day):
            continue
        if day not in days:
            break
        streak += 1
    return streak


def week_start(today: date) -> datetime:
    """Midnight of the Monday of ``today``'s week (Sunday is day 6)."""
    monday = today - timedelta(days=today.weekday())
    return datetime.combine(monday, time.min)


def work_week_presence(timestamps: Iterable[datetime], today: date) -> list[bool]:
    """Monday-Friday flags for the current week, True where the user logged in."""
    monday = week_start(today).date()
    days = login_days(timestamps)
    return [monday + timedelta(days=i) in days for i in range(WORK_WEEK_DAYS)]


def count_since(timestamps: Iterable[datetime], since: datetime) -> int:
    return sum(1 for ts in timestamps if ts >= since)
