"""Loan funding and interest calculations for investor-backed pawn lending."""

__version__ = "0.1.0"
