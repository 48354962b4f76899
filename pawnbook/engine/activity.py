"""Per-investor activity buckets: what is late, unfunded, or due soon."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal

from pawnbook.config import get_config
from pawnbook.engine.dates import as_date
from pawnbook.engine.rollups import ACTIVE_STATUSES
from pawnbook.engine.schedule import amount_due_on_date
from pawnbook.engine.totals import ZERO
from pawnbook.models.enums import LoanStatus
from pawnbook.models.loan import Loan


@dataclass(frozen=True)
class PendingDisbursement:
    """A funding record the investor has not sent yet."""

    loan_id: int
    loan_name: str
    record_id: int | None
    amount: Decimal
    sent_date: date


@dataclass(frozen=True)
class InvestorActivity:
    """Loans needing attention for one investor, each sorted by date."""

    overdue_loans: tuple[Loan, ...]
    pending_disbursements: tuple[PendingDisbursement, ...]
    maturing_loans: tuple[Loan, ...]


def is_past_due(loan: Loan, today: date) -> bool:
    """Overdue by status, or still open with its due date reached."""
    return loan.status == LoanStatus.OVERDUE or (loan.status != LoanStatus.COMPLETED and loan.due_date <= today)


def investor_activity(
    loans: Iterable[Loan],
    investor_id: int,
    today: date | datetime | None = None,
    horizon_days: int | None = None,
) -> InvestorActivity:
    """Overdue loans, pending disbursements and loans maturing soon.

    Only loans the investor takes part in are considered. Maturing loans are
    active loans due after today and within ``horizon_days``.
    """
    current = as_date(today) if today is not None else date.today()
    if horizon_days is None:
        horizon_days = get_config().calendar.maturing_horizon_days
    horizon = current + timedelta(days=horizon_days)

    involved = [loan for loan in loans if loan.records_for(investor_id)]

    overdue = sorted((loan for loan in involved if is_past_due(loan, current)), key=lambda loan: loan.due_date)

    pending = sorted(
        (
            PendingDisbursement(
                loan_id=loan.loan_id,
                loan_name=loan.name,
                record_id=record.record_id,
                amount=record.amount,
                sent_date=record.sent_date,
            )
            for loan in involved
            for record in loan.records_for(investor_id)
            if not record.is_paid
        ),
        key=lambda d: d.sent_date,
    )

    maturing = sorted(
        (loan for loan in involved if loan.status in ACTIVE_STATUSES and current < loan.due_date <= horizon),
        key=lambda loan: loan.due_date,
    )

    return InvestorActivity(
        overdue_loans=tuple(overdue),
        pending_disbursements=tuple(pending),
        maturing_loans=tuple(maturing),
    )


def total_amount_due(
    loans: Iterable[Loan],
    investor_id: int | None = None,
    *,
    strict: bool | None = None,
) -> Decimal:
    """Closing-date amount across loans, optionally for one investor only."""
    total = ZERO
    for loan in loans:
        records = loan.records_for(investor_id) if investor_id is not None else loan.funding
        total += amount_due_on_date(records, strict=strict)
    return total
