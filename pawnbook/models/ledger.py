"""Ledger entry model (investor cash movements)."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from pawnbook.models.enums import Direction, EntryType


@dataclass(frozen=True)
class LedgerEntry:
    """A dated money movement in an investor's ledger."""

    investor_id: int
    date: date
    entry_type: EntryType
    direction: Direction
    name: str
    amount: Decimal
    balance: Decimal  # Running balance after this entry
    entry_id: int | None = None
    loan_id: int | None = None
    sequence_index: int | None = None  # e.g. 2 in "Due Payment (2/3)"
    sequence_total: int | None = None
    notes: str | None = None
