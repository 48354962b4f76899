"""Principal, interest and rate totals for a set of funding records."""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from pawnbook.engine.grouping import InvestorGroup, group_by_investor
from pawnbook.engine.interest import HUNDRED, resolve_interest
from pawnbook.models.funding import FundingRecord

ZERO = Decimal(0)


@dataclass(frozen=True)
class TransactionStats:
    """Bundled totals for a loan, or for one investor within a loan."""

    total_principal: Decimal
    total_interest: Decimal
    average_rate: Decimal
    total: Decimal


def total_principal(records: Iterable[FundingRecord]) -> Decimal:
    """Sum of all disbursed amounts."""
    return sum((r.amount for r in records), ZERO)


def single_interest(group: InvestorGroup) -> Decimal:
    """Interest of a group whose records each carry their own terms."""
    return sum((resolve_interest(r.amount, r.interest) for r in group.records), ZERO)


def group_interest(group: InvestorGroup) -> Decimal:
    """Full-life interest of one investor group.

    Multi-period groups apply every period to the investor's total principal;
    other groups add up each record's own interest.
    """
    schedule = group.schedule
    if schedule is None:
        return single_interest(group)

    principal = group.principal
    return sum((resolve_interest(principal, p.interest) for p in schedule.periods), ZERO)


def total_interest(records: Iterable[FundingRecord], *, strict: bool | None = None) -> Decimal:
    """Interest over the whole life of the loan, across all investors."""
    groups = group_by_investor(records, strict=strict)
    return sum((group_interest(g) for g in groups.values()), ZERO)


def total_amount(records: Iterable[FundingRecord], *, strict: bool | None = None) -> Decimal:
    """Principal plus full-life interest."""
    records = tuple(records)
    return total_principal(records) + total_interest(records, strict=strict)


def _weighted_rate(interest: Decimal, principal: Decimal) -> Decimal:
    if principal.is_nan() or principal <= ZERO:
        return ZERO
    return interest / principal * HUNDRED


def average_rate(records: Iterable[FundingRecord], *, strict: bool | None = None) -> Decimal:
    """Total interest as a percentage of total principal (0 without principal)."""
    records = tuple(records)
    return _weighted_rate(total_interest(records, strict=strict), total_principal(records))


def calculate_transaction_stats(
    records: Iterable[FundingRecord],
    *,
    strict: bool | None = None,
) -> TransactionStats:
    """Principal, interest, weighted rate and total in one pass."""
    records = tuple(records)
    principal = total_principal(records)
    interest = total_interest(records, strict=strict)
    return TransactionStats(
        total_principal=principal,
        total_interest=interest,
        average_rate=_weighted_rate(interest, principal),
        total=principal + interest,
    )


def loan_balance(records: Iterable[FundingRecord]) -> Decimal:
    """Principal still waiting to be disbursed (records not yet paid)."""
    return sum((r.amount for r in records if not r.is_paid), ZERO)


def has_unpaid_records(records: Iterable[FundingRecord]) -> bool:
    """Whether any disbursement is still pending."""
    return any(not r.is_paid for r in records)
