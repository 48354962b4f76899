"""Loan and investor models."""

from dataclasses import dataclass
from datetime import date

from pawnbook.models.enums import LoanStatus, LoanType
from pawnbook.models.funding import FundingRecord
from pawnbook.models.ledger import LedgerEntry


@dataclass(frozen=True)
class Loan:
    """Pawn loan with the funding records of every investor."""

    loan_id: int
    name: str
    loan_type: LoanType
    status: LoanStatus
    due_date: date
    funding: tuple[FundingRecord, ...] = ()
    free_lot_sqm: int | None = None
    notes: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.funding, tuple):
            object.__setattr__(self, "funding", tuple(self.funding))

    def records_for(self, investor_id: int) -> tuple[FundingRecord, ...]:
        """Funding records of a single investor."""
        return tuple(r for r in self.funding if r.investor_id == investor_id)


@dataclass(frozen=True)
class InvestorFunding:
    """A funding record seen from the investor side, with its loan's status."""

    record: FundingRecord
    loan_id: int
    loan_status: LoanStatus
    loan_name: str = ""


@dataclass(frozen=True)
class Investor:
    """Investor with their funding across loans and their ledger."""

    investor_id: int
    name: str
    email: str
    contact_number: str | None = None
    funding: tuple[InvestorFunding, ...] = ()
    entries: tuple[LedgerEntry, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.funding, tuple):
            object.__setattr__(self, "funding", tuple(self.funding))
        if not isinstance(self.entries, tuple):
            object.__setattr__(self, "entries", tuple(self.entries))
