"""Ledger entries implied by a loan's funding, and running balances.

For each investor a loan produces one Out entry per disbursement (principal
leaves the investor on the sent date) and In entries for every due date
(interest, plus principal on the final one). Entries are drafts: balances are
stamped afterwards by ``running_balances`` over the investor's full ledger.
"""

import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import replace
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from pawnbook.engine.grouping import group_by_investor
from pawnbook.engine.interest import resolve_interest
from pawnbook.engine.totals import ZERO
from pawnbook.models.enums import Direction, EntryType
from pawnbook.models.funding import FundingRecord
from pawnbook.models.ledger import LedgerEntry
from pawnbook.models.loan import Loan

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def _cents(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def _entry_name(loan_name: str, label: str, index: int, total: int) -> str:
    if total > 1:
        return f"{loan_name} - {label} ({index}/{total})"
    return f"{loan_name} - {label}"


def build_loan_cash_flows(
    loan_name: str,
    due_date: date,
    records: Iterable[FundingRecord],
    *,
    loan_id: int | None = None,
    strict: bool | None = None,
) -> list[LedgerEntry]:
    """Draft ledger entries (balance 0) for every investor of a loan.

    Multi-period investors get one In entry per period, computed on their
    total principal, with principal returned on the final period. The others
    get one In entry per disbursement on the loan due date.
    """
    entries: list[LedgerEntry] = []

    for investor_id, group in group_by_investor(records, strict=strict).items():
        schedule = group.schedule

        def draft(when: date, direction: Direction, label: str, amount: Decimal, index: int, total: int) -> LedgerEntry:
            return LedgerEntry(
                investor_id=investor_id,
                date=when,
                entry_type=EntryType.LOAN,
                direction=direction,
                name=_entry_name(loan_name, label, index, total),
                amount=_cents(amount),
                balance=ZERO,
                loan_id=loan_id,
                sequence_index=index if total > 1 else None,
                sequence_total=total if total > 1 else None,
            )

        principal_count = len(group.records)
        for index, record in enumerate(group.records, start=1):
            entries.append(
                draft(record.sent_date, Direction.OUT, "Principal Payment", record.amount, index, principal_count)
            )

        if schedule is not None:
            principal = group.principal
            due_count = len(schedule.periods)
            for index, period in enumerate(schedule.periods, start=1):
                amount = resolve_interest(principal, period.interest)
                if index == due_count:
                    amount += principal
                entries.append(draft(period.due_date, Direction.IN, "Due Payment", amount, index, due_count))
        else:
            due_count = len(group.records)
            for index, record in enumerate(group.records, start=1):
                amount = record.amount + resolve_interest(record.amount, record.interest)
                entries.append(draft(due_date, Direction.IN, "Due Payment", amount, index, due_count))

    logger.debug("Built %d ledger entries for loan %r", len(entries), loan_name)
    return entries


def loan_cash_flows(loan: Loan, *, strict: bool | None = None) -> list[LedgerEntry]:
    """``build_loan_cash_flows`` for a loan model."""
    return build_loan_cash_flows(loan.name, loan.due_date, loan.funding, loan_id=loan.loan_id, strict=strict)


def running_balances(entries: Iterable[LedgerEntry]) -> list[LedgerEntry]:
    """Re-stamp balances in ledger order, separately for each investor.

    Entries are ordered by date, then entry id (drafts without an id come
    after stored entries of the same day, in input order). Out entries
    subtract and In entries add.
    """
    ordered = sorted(
        enumerate(entries),
        key=lambda pair: (pair[1].date, pair[1].entry_id is None, pair[1].entry_id or 0, pair[0]),
    )

    balances: dict[int, Decimal] = {}
    result: list[LedgerEntry] = []
    for _, entry in ordered:
        balance = balances.get(entry.investor_id, ZERO)
        if entry.direction == Direction.OUT:
            balance -= entry.amount
        else:
            balance += entry.amount
        balances[entry.investor_id] = balance

        stamped = _cents(balance)
        if stamped != entry.balance:
            entry = replace(entry, balance=stamped)
        result.append(entry)
    return result


def _fingerprint(record: FundingRecord) -> tuple:
    periods = tuple((p.due_date, p.interest) for p in sorted(record.periods, key=lambda p: p.due_date))
    return (
        record.investor_id,
        record.amount,
        record.interest,
        record.sent_date,
        record.has_multiple_periods,
        periods,
    )


def requires_cash_flow_regeneration(existing: Loan, updated: Loan) -> bool:
    """Whether an edit changes any figure the loan's ledger entries depend on.

    Name, notes, status and lot size are cosmetic; loan type, due date and
    every computational field of the funding records are not.
    """
    if existing.loan_type != updated.loan_type or existing.due_date != updated.due_date:
        logger.debug("Loan %s: type or due date changed", existing.loan_id)
        return True

    if len(existing.funding) != len(updated.funding):
        logger.debug("Loan %s: number of funding records changed", existing.loan_id)
        return True

    old_investors = {r.investor_id for r in existing.funding}
    new_investors = {r.investor_id for r in updated.funding}
    if old_investors != new_investors:
        logger.debug(
            "Loan %s: investors added %s, removed %s",
            existing.loan_id,
            sorted(new_investors - old_investors, key=str),
            sorted(old_investors - new_investors, key=str),
        )
        return True

    if Counter(map(_fingerprint, existing.funding)) != Counter(map(_fingerprint, updated.funding)):
        logger.debug("Loan %s: funding terms changed", existing.loan_id)
        return True

    logger.debug("Loan %s: no computational changes", existing.loan_id)
    return False
