"""Turn persistence rows into typed records.

Rows come from the persistence layer as mappings with camelCase keys and
decimal amounts encoded as strings. Every value is parsed exactly once here;
the engine only ever sees ``Decimal`` amounts and ``date`` values.

Snake_case keys are accepted as well, so rows built by hand in scripts or
tests do not need to mimic the wire format.
"""

import logging
from collections.abc import Mapping
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from dateutil.parser import isoparse

from pawnbook.exceptions import InvalidRecordError
from pawnbook.models.enums import Direction, EntryType, InterestType, LoanStatus, LoanType, PeriodStatus
from pawnbook.models.funding import FundingRecord
from pawnbook.models.interest import Fixed, InterestPeriod, InterestSpec, Rate
from pawnbook.models.ledger import LedgerEntry
from pawnbook.models.loan import Loan

logger = logging.getLogger(__name__)

NAN = Decimal("NaN")


def parse_decimal(value: Any) -> Decimal:
    """Parse a wire amount into a Decimal.

    Unparseable input becomes ``Decimal("NaN")`` instead of raising, so a
    malformed amount poisons the totals it flows into rather than failing
    the whole computation.
    """
    if isinstance(value, bool) or value is None:
        return NAN
    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, int):
        parsed = Decimal(value)
    elif isinstance(value, float):
        parsed = Decimal(str(value))
    else:
        try:
            parsed = Decimal(str(value).strip())
        except InvalidOperation:
            logger.debug("Unparseable decimal %r, using NaN", value)
            return NAN
    # "sNaN" would raise on first use; every NaN becomes the quiet one
    if parsed.is_nan():
        return NAN
    return parsed


def parse_date(value: Any) -> date:
    """Parse a date, datetime or ISO 8601 string into a ``date``."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return isoparse(value).date()
        except ValueError as exc:
            raise InvalidRecordError(f"Invalid date {value!r}") from exc
    raise InvalidRecordError(f"Invalid date {value!r}")


def parse_interest_spec(value: Any, interest_type: str | InterestType | None = None) -> InterestSpec:
    """Build ``Rate``/``Fixed`` from the stored rate value and interest type.

    A missing type is the column default, ``rate``.
    """
    kind = InterestType.RATE if interest_type is None else interest_type
    try:
        kind = InterestType(kind)
    except ValueError as exc:
        raise InvalidRecordError(f"Unknown interest type {interest_type!r}") from exc

    amount = parse_decimal(value)
    if kind is InterestType.FIXED:
        return Fixed(amount)
    return Rate(amount)


def _get(row: Mapping[str, Any], camel: str, snake: str, default: Any = None) -> Any:
    if camel in row:
        return row[camel]
    return row.get(snake, default)


def _investor_id(row: Mapping[str, Any]) -> int | None:
    investor = row.get("investor")
    if isinstance(investor, Mapping) and investor.get("id"):
        return investor["id"]
    # 0 and empty values are treated as "no investor", like a falsy id upstream
    return _get(row, "investorId", "investor_id") or None


def _enum(enum_cls: type, value: Any, default: Any = None) -> Any:
    if value is None:
        return default
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise InvalidRecordError(f"Unknown {enum_cls.__name__} {value!r}") from exc


def interest_period_from_row(row: Mapping[str, Any]) -> InterestPeriod:
    """Parse an interest period row."""
    return InterestPeriod(
        due_date=parse_date(_get(row, "dueDate", "due_date")),
        interest=parse_interest_spec(
            _get(row, "interestRate", "interest_rate"),
            _get(row, "interestType", "interest_type"),
        ),
        status=_enum(PeriodStatus, row.get("status"), PeriodStatus.PENDING),
        period_id=row.get("id"),
    )


def funding_record_from_row(row: Mapping[str, Any]) -> FundingRecord:
    """Parse a loan-investor (funding) row, including nested interest periods."""
    periods = _get(row, "interestPeriods", "interest_periods") or ()
    return FundingRecord(
        amount=parse_decimal(row.get("amount")),
        interest=parse_interest_spec(
            _get(row, "interestRate", "interest_rate"),
            _get(row, "interestType", "interest_type"),
        ),
        sent_date=parse_date(_get(row, "sentDate", "sent_date")),
        investor_id=_investor_id(row),
        is_paid=bool(_get(row, "isPaid", "is_paid", True)),
        has_multiple_periods=bool(_get(row, "hasMultipleInterest", "has_multiple_periods", False)),
        periods=tuple(interest_period_from_row(p) for p in periods),
        record_id=row.get("id"),
        loan_id=_get(row, "loanId", "loan_id"),
    )


def ledger_entry_from_row(row: Mapping[str, Any]) -> LedgerEntry:
    """Parse a transaction row."""
    return LedgerEntry(
        investor_id=_get(row, "investorId", "investor_id"),
        date=parse_date(row.get("date")),
        entry_type=_enum(EntryType, _get(row, "type", "entry_type"), EntryType.LOAN),
        direction=_enum(Direction, row.get("direction")),
        name=row.get("name", ""),
        amount=parse_decimal(row.get("amount")),
        balance=parse_decimal(row.get("balance", "0")),
        entry_id=row.get("id"),
        loan_id=_get(row, "loanId", "loan_id"),
        sequence_index=_get(row, "transactionIndex", "sequence_index"),
        sequence_total=_get(row, "transactionTotal", "sequence_total"),
        notes=row.get("notes"),
    )


def loan_from_row(row: Mapping[str, Any]) -> Loan:
    """Parse a loan row with its nested loan-investor rows."""
    loan_id = _get(row, "id", "loan_id")
    funding = []
    for funding_row in _get(row, "loanInvestors", "funding") or ():
        record = funding_record_from_row(funding_row)
        if record.loan_id is None:
            record = replace(record, loan_id=loan_id)
        funding.append(record)

    return Loan(
        loan_id=loan_id,
        name=_get(row, "loanName", "name", ""),
        loan_type=_enum(LoanType, _get(row, "type", "loan_type")),
        status=_enum(LoanStatus, row.get("status"), LoanStatus.FULLY_FUNDED),
        due_date=parse_date(_get(row, "dueDate", "due_date")),
        funding=tuple(funding),
        free_lot_sqm=_get(row, "freeLotSqm", "free_lot_sqm"),
        notes=row.get("notes"),
    )
