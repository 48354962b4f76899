"""Interest specifications and schedules.

An interest specification is either a percentage of principal (``Rate``) or a
flat amount (``Fixed``). A funding record's schedule is either ``Single`` (one
specification settled on the loan due date) or ``Multiple`` (dated interest
periods, the last of which also settles principal).
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from pawnbook.exceptions import InvalidRecordError
from pawnbook.models.enums import InterestType, PeriodStatus


@dataclass(frozen=True)
class Rate:
    """Interest as a percentage of principal (``5`` means 5%)."""

    percent: Decimal

    @property
    def interest_type(self) -> InterestType:
        return InterestType.RATE


@dataclass(frozen=True)
class Fixed:
    """Interest as a flat amount, owed regardless of principal."""

    amount: Decimal

    @property
    def interest_type(self) -> InterestType:
        return InterestType.FIXED


InterestSpec = Rate | Fixed


@dataclass(frozen=True)
class InterestPeriod:
    """One dated checkpoint of a multi-period schedule."""

    due_date: date
    interest: InterestSpec
    status: PeriodStatus = PeriodStatus.PENDING
    period_id: int | None = None


@dataclass(frozen=True)
class Single:
    """Interest settled once, on the loan due date."""

    interest: InterestSpec


@dataclass(frozen=True)
class Multiple:
    """Interest settled over several periods, ordered by due date."""

    periods: tuple[InterestPeriod, ...]

    def __post_init__(self) -> None:
        if not self.periods:
            raise InvalidRecordError("A multi-period schedule needs at least one period")
        object.__setattr__(self, "periods", tuple(sorted(self.periods, key=lambda p: p.due_date)))

    @property
    def final(self) -> InterestPeriod:
        """The period with the latest due date; the only one carrying principal."""
        return self.periods[-1]


InterestSchedule = Single | Multiple
