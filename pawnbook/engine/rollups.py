"""Loan-level and investor-level summary statistics."""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from pawnbook.config import BalanceThresholds, get_config
from pawnbook.engine.totals import ZERO, calculate_transaction_stats, total_interest, total_principal
from pawnbook.models.enums import BalanceStatus, LoanStatus
from pawnbook.models.funding import FundingRecord
from pawnbook.models.loan import Investor, Loan

ACTIVE_STATUSES = (LoanStatus.FULLY_FUNDED, LoanStatus.PARTIALLY_FUNDED)


@dataclass(frozen=True)
class LoanStats:
    """Headline figures of one loan."""

    total_principal: Decimal
    total_interest: Decimal
    avg_rate: Decimal
    total_amount: Decimal
    unique_investors: int


@dataclass(frozen=True)
class InvestorStats:
    """Headline figures of one investor across all their loans."""

    total_capital: Decimal
    total_interest: Decimal
    active_loans: int
    completed_loans: int
    overdue_loans: int
    total_loans: int
    current_balance: Decimal
    total_gain: Decimal


def count_unique_investors(records: Iterable[FundingRecord]) -> int:
    """Number of distinct investors funding a loan."""
    return len({r.investor_id for r in records if r.investor_id is not None})


def loan_stats(loan: Loan, *, strict: bool | None = None) -> LoanStats:
    """Totals, weighted rate and investor count of a loan."""
    stats = calculate_transaction_stats(loan.funding, strict=strict)
    return LoanStats(
        total_principal=stats.total_principal,
        total_interest=stats.total_interest,
        avg_rate=stats.average_rate,
        total_amount=stats.total,
        unique_investors=count_unique_investors(loan.funding),
    )


def investor_stats(investor: Investor, *, strict: bool | None = None) -> InvestorStats:
    """Capital, interest, loan counts and balance of an investor.

    Interest is computed loan by loan so that a multi-period schedule only
    ever applies to the capital placed in its own loan. Loan counts follow
    each loan's stored status and count funding records, so a loan funded in
    two disbursements counts twice.
    """
    by_loan: dict[int, list[FundingRecord]] = {}
    for funding in investor.funding:
        by_loan.setdefault(funding.loan_id, []).append(funding.record)

    capital = total_principal(f.record for f in investor.funding)
    interest = sum((total_interest(records, strict=strict) for records in by_loan.values()), ZERO)

    statuses = [f.loan_status for f in investor.funding]
    return InvestorStats(
        total_capital=capital,
        total_interest=interest,
        active_loans=sum(1 for s in statuses if s in ACTIVE_STATUSES),
        completed_loans=statuses.count(LoanStatus.COMPLETED),
        overdue_loans=statuses.count(LoanStatus.OVERDUE),
        total_loans=len(statuses),
        current_balance=current_balance(investor),
        total_gain=capital + interest,
    )


def current_balance(investor: Investor) -> Decimal:
    """Balance of the latest ledger entry (by date, then entry id)."""
    if not investor.entries:
        return ZERO
    latest = max(investor.entries, key=lambda e: (e.date, e.entry_id or 0))
    return latest.balance


def balance_status(balance: Decimal, thresholds: BalanceThresholds | None = None) -> BalanceStatus:
    """Label an investor's available cash (an unreadable balance has no funds)."""
    if balance.is_nan():
        return BalanceStatus.NO_FUNDS
    if thresholds is None:
        thresholds = get_config().balance
    if balance > thresholds.invest_threshold:
        return BalanceStatus.CAN_INVEST
    if balance > thresholds.low_funds_threshold:
        return BalanceStatus.LOW_FUNDS
    return BalanceStatus.NO_FUNDS
