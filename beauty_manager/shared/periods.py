"""Named date windows used by the appointment, finance and insight queries.

All bounds are naive datetimes in server local time and inclusive on both
ends unless noted otherwise.
"""

from datetime import datetime, time, timedelta
from enum import Enum
from typing import Optional

from dateutil.relativedelta import relativedelta


class ViewMode(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class FinancePeriod(str, Enum):
    MONTH = "month"
    THREE_MONTHS = "3months"
    SIX_MONTHS = "6months"
    YEAR = "year"
    CUSTOM = "custom"


class InsightPeriod(str, Enum):
    MONTH = "month"
    SEMESTER = "semester"
    YEAR = "year"


def start_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.min)


def end_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.max)


def start_of_month(value: datetime, months_back: int = 0) -> datetime:
    """First day (00:00) of the month ``months_back`` months before ``value``"""
    first = datetime(value.year, value.month, 1)
    return first - relativedelta(months=months_back)


def day_range(value: datetime) -> tuple[datetime, datetime]:
    return start_of_day(value), end_of_day(value)


def week_range(value: datetime) -> tuple[datetime, datetime]:
    """Sunday 00:00 to Saturday 23:59:59.999999 of the week holding ``value``"""
    # weekday(): Monday=0 .. Sunday=6, so days since Sunday is (weekday + 1) % 7
    sunday = start_of_day(value) - timedelta(days=(value.weekday() + 1) % 7)
    saturday = sunday + timedelta(days=6)
    return sunday, end_of_day(saturday)


def month_range(value: datetime) -> tuple[datetime, datetime]:
    first = start_of_month(value)
    last = first + relativedelta(months=1) - timedelta(days=1)
    return first, end_of_day(last)


def view_range(view: ViewMode, reference: datetime) -> tuple[datetime, datetime]:
    """Calendar window for the appointment day/week/month views"""
    if view == ViewMode.DAY:
        return day_range(reference)
    if view == ViewMode.WEEK:
        return week_range(reference)
    if view == ViewMode.MONTH:
        return month_range(reference)
    raise ValueError(f"Unknown view mode: {view}")


def finance_period_range(
    period: FinancePeriod,
    now: datetime,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> tuple[Optional[datetime], Optional[datetime]]:
    """
    Bounds for a finance listing.

    Rolling periods start on the first day of a month and end at ``now``.
    ``custom`` passes the explicit bounds through, each one optional.
    """
    if period == FinancePeriod.CUSTOM:
        return start_date, end_date
    if period == FinancePeriod.MONTH:
        return start_of_month(now), now
    if period == FinancePeriod.THREE_MONTHS:
        return start_of_month(now, 2), now
    if period == FinancePeriod.SIX_MONTHS:
        return start_of_month(now, 5), now
    if period == FinancePeriod.YEAR:
        return datetime(now.year, 1, 1), now
    raise ValueError(f"Unknown finance period: {period}")


def insight_period_start(period: InsightPeriod, now: datetime) -> datetime:
    """Open-ended lower bound for the ranking insights"""
    if period == InsightPeriod.MONTH:
        return start_of_month(now)
    if period == InsightPeriod.SEMESTER:
        return start_of_month(now, 5)
    if period == InsightPeriod.YEAR:
        return datetime(now.year, 1, 1)
    raise ValueError(f"Unknown insight period: {period}")
