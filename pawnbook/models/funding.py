"""Funding record model."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from pawnbook.models.interest import InterestPeriod, InterestSchedule, InterestSpec, Multiple, Single


@dataclass(frozen=True)
class FundingRecord:
    """One investor's disbursement into one loan."""

    amount: Decimal
    interest: InterestSpec  # Used when the record has no multi-period schedule
    sent_date: date
    investor_id: int | None  # None when the source row had no resolvable investor
    is_paid: bool = True  # Disbursement happened on or before today
    has_multiple_periods: bool = False
    periods: tuple[InterestPeriod, ...] = ()
    record_id: int | None = None
    loan_id: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.periods, tuple):
            object.__setattr__(self, "periods", tuple(self.periods))

    @property
    def schedule(self) -> InterestSchedule:
        """Explicit schedule variant for this record."""
        if self.has_multiple_periods and self.periods:
            return Multiple(self.periods)
        return Single(self.interest)
