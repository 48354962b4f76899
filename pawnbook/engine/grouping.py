"""Partition funding records by investor.

Every aggregate that depends on an investor's schedule goes through
``group_by_investor``: a multi-period schedule applies once per investor, to
the sum of that investor's disbursements into the loan.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from pawnbook.config import get_config
from pawnbook.exceptions import MissingInvestorError
from pawnbook.models.funding import FundingRecord
from pawnbook.models.interest import InterestPeriod, Multiple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvestorGroup:
    """All funding records of one investor within one loan."""

    investor_id: int
    records: tuple[FundingRecord, ...]

    @property
    def principal(self) -> Decimal:
        """Investor total principal across all of its records."""
        return sum((r.amount for r in self.records), Decimal(0))

    @property
    def schedule(self) -> Multiple | None:
        """The first multi-period schedule among the records, if any."""
        for record in self.records:
            schedule = record.schedule
            if isinstance(schedule, Multiple):
                return schedule
        return None

    @property
    def periods(self) -> tuple[InterestPeriod, ...]:
        """Periods sorted by due date (empty for single-interest groups)."""
        schedule = self.schedule
        return schedule.periods if schedule is not None else ()


def group_by_investor(
    records: Iterable[FundingRecord],
    *,
    strict: bool | None = None,
) -> dict[int, InvestorGroup]:
    """Group records by investor, preserving order.

    Parameters
    ----------
    records : Iterable[FundingRecord]
        Funding records of one loan.
    strict : bool | None
        Raise ``MissingInvestorError`` for records without an investor
        instead of dropping them. ``None`` uses
        ``EngineConfig.strict_investor_identity``.

    Returns
    -------
    dict[int, InvestorGroup]
        Groups keyed by investor id, in order of first appearance.
    """
    if strict is None:
        strict = get_config().strict_investor_identity

    grouped: dict[int, list[FundingRecord]] = {}
    for record in records:
        if record.investor_id is None:
            if strict:
                raise MissingInvestorError(f"Funding record {record.record_id} has no investor")
            logger.debug("Skipping funding record %s without investor", record.record_id)
            continue
        grouped.setdefault(record.investor_id, []).append(record)

    return {investor_id: InvestorGroup(investor_id, tuple(group)) for investor_id, group in grouped.items()}
