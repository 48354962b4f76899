"""Enumeration types for lending entities."""

from enum import Enum


class LoanType(str, Enum):
    LOT_TITLE = "Lot Title"
    OR_CR = "OR/CR"
    AGENT = "Agent"


class LoanStatus(str, Enum):
    PARTIALLY_FUNDED = "Partially Funded"
    FULLY_FUNDED = "Fully Funded"
    OVERDUE = "Overdue"
    COMPLETED = "Completed"


class InterestType(str, Enum):
    RATE = "rate"
    FIXED = "fixed"


class PeriodStatus(str, Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    OVERDUE = "Overdue"


class EntryType(str, Enum):
    LOAN = "Loan"
    INVESTMENT = "Investment"


class Direction(str, Enum):
    IN = "In"
    OUT = "Out"


class BalanceStatus(str, Enum):
    CAN_INVEST = "Can invest"
    LOW_FUNDS = "Low funds"
    NO_FUNDS = "No funds"
