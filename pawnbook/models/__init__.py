"""Lending domain models."""

from pawnbook.models.enums import (
    BalanceStatus,
    Direction,
    EntryType,
    InterestType,
    LoanStatus,
    LoanType,
    PeriodStatus,
)
from pawnbook.models.funding import FundingRecord
from pawnbook.models.interest import (
    Fixed,
    InterestPeriod,
    InterestSchedule,
    InterestSpec,
    Multiple,
    Rate,
    Single,
)
from pawnbook.models.ledger import LedgerEntry
from pawnbook.models.loan import Investor, InvestorFunding, Loan

__all__ = [
    "BalanceStatus",
    "Direction",
    "EntryType",
    "Fixed",
    "FundingRecord",
    "InterestPeriod",
    "InterestSchedule",
    "InterestSpec",
    "InterestType",
    "Investor",
    "InvestorFunding",
    "LedgerEntry",
    "Loan",
    "LoanStatus",
    "LoanType",
    "Multiple",
    "PeriodStatus",
    "Rate",
    "Single",
]
