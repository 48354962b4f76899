"""Status- and date-sensitive subsets of a loan's totals.

These answer narrower questions than ``totals``: what is paid out on the
closing date, what is past due right now, and how far along a multi-period
schedule the investors are.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from pawnbook.engine.grouping import group_by_investor
from pawnbook.engine.interest import resolve_interest
from pawnbook.engine.totals import ZERO, single_interest
from pawnbook.models.enums import PeriodStatus
from pawnbook.models.funding import FundingRecord
from pawnbook.models.interest import Multiple


@dataclass(frozen=True)
class PaymentProgress:
    """Completion of multi-period schedules across a loan's investors."""

    has_multiple_due_dates: bool = False
    total_periods: int = 0
    completed_periods: int = 0
    pending_periods: int = 0
    paid_amount: Decimal = ZERO
    pending_amount: Decimal = ZERO


def amount_due_on_date(records: Iterable[FundingRecord], *, strict: bool | None = None) -> Decimal:
    """Amount paid back on the loan's final due date.

    Multi-period groups owe principal plus the final period's interest only;
    earlier periods are settled on their own dates. Single-interest groups
    owe principal plus all their interest.
    """
    total = ZERO
    for group in group_by_investor(records, strict=strict).values():
        principal = group.principal
        schedule = group.schedule
        if schedule is not None:
            total += principal + resolve_interest(principal, schedule.final.interest)
        else:
            total += principal + single_interest(group)
    return total


def overdue_amount(records: Iterable[FundingRecord], *, strict: bool | None = None) -> Decimal:
    """Amount currently past due.

    Multi-period groups contribute the interest of their Overdue periods, plus
    principal when the final period is itself Overdue. Single-interest groups
    have one due date, so the whole amount counts.
    """
    total = ZERO
    for group in group_by_investor(records, strict=strict).values():
        principal = group.principal
        schedule = group.schedule
        if schedule is None:
            total += principal + single_interest(group)
            continue

        overdue = [p for p in schedule.periods if p.status == PeriodStatus.OVERDUE]
        if not overdue:
            continue

        total += sum((resolve_interest(principal, p.interest) for p in overdue), ZERO)
        if schedule.final.status == PeriodStatus.OVERDUE:
            total += principal
    return total


def _has_multiple_due_dates(records: Iterable[FundingRecord]) -> bool:
    for record in records:
        schedule = record.schedule
        if isinstance(schedule, Multiple) and len(schedule.periods) >= 2:
            return True
    return False


def multiple_interest_payment_status(
    records: Iterable[FundingRecord],
    *,
    strict: bool | None = None,
) -> PaymentProgress:
    """Paid vs. pending breakdown of every multi-period schedule in a loan.

    A period is paid only when Completed; Pending and Overdue both count as
    pending. Principal is attributed to the final period's bucket.
    """
    records = tuple(records)
    if not _has_multiple_due_dates(records):
        return PaymentProgress()

    total_periods = completed = pending = 0
    paid_amount = pending_amount = ZERO

    for group in group_by_investor(records, strict=strict).values():
        schedule = group.schedule
        if schedule is None:
            continue

        principal = group.principal
        last = len(schedule.periods) - 1
        for index, period in enumerate(schedule.periods):
            amount = resolve_interest(principal, period.interest)
            if index == last:
                amount += principal

            total_periods += 1
            if period.status == PeriodStatus.COMPLETED:
                completed += 1
                paid_amount += amount
            else:
                pending += 1
                pending_amount += amount

    return PaymentProgress(
        has_multiple_due_dates=True,
        total_periods=total_periods,
        completed_periods=completed,
        pending_periods=pending,
        paid_amount=paid_amount,
        pending_amount=pending_amount,
    )
