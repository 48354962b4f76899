"""Calendar arithmetic for loan durations and interest period dates."""

import calendar
from dataclasses import dataclass
from datetime import date, datetime

from dateutil.relativedelta import relativedelta

from pawnbook.config import get_config


def as_date(value: date | datetime) -> date:
    """Drop the time part of a datetime (midnight normalization)."""
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(frozen=True)
class LoanDuration:
    """Interval decomposed into calendar months, weeks and days."""

    months: int = 0
    weeks: int = 0
    days: int = 0

    def __str__(self) -> str:
        parts = []
        for count, unit in ((self.months, "Month"), (self.weeks, "Week"), (self.days, "Day")):
            if count > 0:
                parts.append(f"{count} {unit if count == 1 else unit + 's'}")
        return ", ".join(parts) if parts else "0 Days"


def loan_duration(due_date: date | datetime, start: date | datetime | None = None) -> LoanDuration:
    """Time between ``start`` (default today) and ``due_date``.

    Months follow the calendar (Jan 31 -> Feb 28 is one month), the remainder
    is split into weeks and days. Direction does not matter.
    """
    begin = as_date(start) if start is not None else date.today()
    end = as_date(due_date)
    if end < begin:
        begin, end = end, begin

    delta = relativedelta(end, begin)
    weeks, days = divmod(delta.days, 7)
    return LoanDuration(months=delta.years * 12 + delta.months, weeks=weeks, days=days)


def months_between(start: date | datetime, end: date | datetime) -> int:
    """Number of full calendar months from ``start`` to ``end`` (never negative)."""
    start, end = as_date(start), as_date(end)
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day < start.day:
        months -= 1
    return max(0, months)


def add_months(value: date | datetime, months: int) -> date:
    """Shift by whole months, clamping to the last day of shorter months."""
    return as_date(value) + relativedelta(months=months)


def needs_multiple_periods(
    sent_date: date | datetime,
    due_date: date | datetime,
    min_days: int | None = None,
) -> bool:
    """Whether a loan is long enough to be split into interest periods."""
    if min_days is None:
        min_days = get_config().calendar.multiple_period_min_days
    return (as_date(due_date) - as_date(sent_date)).days > min_days


@dataclass(frozen=True)
class PeriodDate:
    """Suggested due date of one interest period."""

    due_date: date
    month_number: int


def _period_day(sent_date: date, year: int, month: int) -> int:
    last_day = calendar.monthrange(year, month)[1]
    # Disbursements on the 1st settle at month end
    if sent_date.day == 1:
        return last_day
    return min(sent_date.day, last_day)


def generate_default_interest_periods(
    sent_date: date | datetime,
    due_date: date | datetime,
    max_months: int | None = None,
) -> list[PeriodDate]:
    """Monthly interest checkpoints between disbursement and due date.

    Checkpoints fall on the sent date's day of month (month end when sent on
    the 1st), strictly after the sent date and strictly before the due date.
    The due date itself is always the final period.
    """
    if max_months is None:
        max_months = get_config().calendar.max_period_months

    start, end = as_date(sent_date), as_date(due_date)
    if months_between(start, end) == 0:
        return [PeriodDate(due_date=end, month_number=1)]

    periods: list[PeriodDate] = []
    first_of_month = start.replace(day=1)
    for offset in range(max_months + 1):
        target = first_of_month + relativedelta(months=offset)
        checkpoint = target.replace(day=_period_day(start, target.year, target.month))
        if checkpoint >= end:
            break
        if checkpoint > start:
            periods.append(PeriodDate(due_date=checkpoint, month_number=len(periods) + 1))

    periods.append(PeriodDate(due_date=end, month_number=len(periods) + 1))
    return periods
