"""Loan and interest period status derivation.

``derive_loan_status`` is what the loan form stores on every save. The sweep
helpers reproduce the periodic overdue check as pure functions: they return
updated copies and leave persisting the changes to the caller.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import date, datetime

from pawnbook.engine.dates import as_date
from pawnbook.models.enums import LoanStatus, PeriodStatus
from pawnbook.models.interest import InterestPeriod
from pawnbook.models.loan import Loan

logger = logging.getLogger(__name__)


def derive_loan_status(
    due_date: date | datetime,
    has_any_unpaid_record: bool,
    today: date | datetime | None = None,
) -> LoanStatus:
    """Automatic status of a loan being saved.

    A due date on or before today wins over the funding state.
    """
    current = as_date(today) if today is not None else date.today()
    if current >= as_date(due_date):
        return LoanStatus.OVERDUE
    if has_any_unpaid_record:
        return LoanStatus.PARTIALLY_FUNDED
    return LoanStatus.FULLY_FUNDED


def sweep_period_statuses(
    periods: Iterable[InterestPeriod],
    today: date | datetime | None = None,
) -> tuple[list[InterestPeriod], list[InterestPeriod]]:
    """Mark Pending periods whose due date has arrived as Overdue.

    Returns
    -------
    tuple[list[InterestPeriod], list[InterestPeriod]]
        All periods (updated where needed) and the subset that changed.
    """
    current = as_date(today) if today is not None else date.today()
    swept: list[InterestPeriod] = []
    changed: list[InterestPeriod] = []
    for period in periods:
        if period.status == PeriodStatus.PENDING and current >= period.due_date:
            period = replace(period, status=PeriodStatus.OVERDUE)
            changed.append(period)
        swept.append(period)
    return swept, changed


def reconcile_loan_status(loan: Loan, today: date | datetime | None = None) -> LoanStatus:
    """Status a loan should have given its (already swept) interest periods."""
    current = as_date(today) if today is not None else date.today()

    statuses = {p.status for r in loan.funding if r.has_multiple_periods for p in r.periods}
    has_overdue = PeriodStatus.OVERDUE in statuses
    has_pending = PeriodStatus.PENDING in statuses

    if has_overdue and loan.status not in (LoanStatus.OVERDUE, LoanStatus.COMPLETED):
        return LoanStatus.OVERDUE
    if loan.status == LoanStatus.FULLY_FUNDED and current >= loan.due_date and not has_pending:
        return LoanStatus.OVERDUE
    if loan.status == LoanStatus.OVERDUE and not has_overdue and not has_pending and current < loan.due_date:
        return LoanStatus.FULLY_FUNDED
    return loan.status


@dataclass(frozen=True)
class SweepResult:
    """Outcome of sweeping one loan."""

    loan: Loan
    changed_periods: tuple[InterestPeriod, ...]
    status_changed: bool


def sweep_loan(loan: Loan, today: date | datetime | None = None) -> SweepResult:
    """Sweep a loan's periods, then reconcile its status."""
    funding = []
    changed: list[InterestPeriod] = []
    for record in loan.funding:
        if record.has_multiple_periods and record.periods:
            periods, record_changed = sweep_period_statuses(record.periods, today)
            if record_changed:
                record = replace(record, periods=tuple(periods))
                changed.extend(record_changed)
        funding.append(record)

    swept = replace(loan, funding=tuple(funding))
    status = reconcile_loan_status(swept, today)
    if status != loan.status:
        logger.debug(
            "Loan %s status %s -> %s",
            loan.loan_id,
            loan.status.value,
            status.value,
            extra={"loan_id": loan.loan_id},
        )
        swept = replace(swept, status=status)

    return SweepResult(loan=swept, changed_periods=tuple(changed), status_changed=status != loan.status)


def sweep_loans(loans: Iterable[Loan], today: date | datetime | None = None) -> list[SweepResult]:
    """Sweep many loans; logs a summary of what changed."""
    results = [sweep_loan(loan, today) for loan in loans]
    loans_updated = sum(1 for r in results if r.status_changed)
    periods_updated = sum(len(r.changed_periods) for r in results)
    logger.info(
        "Overdue sweep updated %d loan(s) and %d period(s)",
        loans_updated,
        periods_updated,
        extra={"loans_updated": loans_updated, "periods_updated": periods_updated},
    )
    return results
