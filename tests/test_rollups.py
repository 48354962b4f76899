"""Tests for loan and investor rollups."""

from datetime import date
from decimal import Decimal

from pawnbook.config import BalanceThresholds, EngineConfig, set_config
from pawnbook.engine.rollups import (
    balance_status,
    count_unique_investors,
    current_balance,
    investor_stats,
    loan_stats,
)
from pawnbook.models import (
    BalanceStatus,
    Direction,
    EntryType,
    Investor,
    InvestorFunding,
    LedgerEntry,
    LoanStatus,
)
from pawnbook.models.parsing import ledger_entry_from_row
from tests.builders import fixed, loan, period, rate, record


def entry(entry_id: int, when: date, balance: str) -> LedgerEntry:
    return LedgerEntry(
        investor_id=1,
        date=when,
        entry_type=EntryType.LOAN,
        direction=Direction.IN,
        name="entry",
        amount=Decimal("1"),
        balance=Decimal(balance),
        entry_id=entry_id,
    )


class TestLoanStats:
    """Tests for loan_stats."""

    def test_loan_stats(self) -> None:
        stats = loan_stats(
            loan(
                funding=(
                    record("10000", rate(10), investor_id=1),
                    record("5000", rate(10), investor_id=1),
                    record("5000", fixed(1000), investor_id=2),
                )
            )
        )

        assert stats.total_principal == Decimal("20000")
        assert stats.total_interest == Decimal("2500")
        assert stats.avg_rate == Decimal("12.5")
        assert stats.total_amount == Decimal("22500")
        assert stats.unique_investors == 2

    def test_empty_loan(self) -> None:
        stats = loan_stats(loan())
        assert stats.total_amount == 0
        assert stats.avg_rate == 0
        assert stats.unique_investors == 0

    def test_count_unique_investors_ignores_missing(self) -> None:
        records = [record(investor_id=1), record(investor_id=1), record(investor_id=None), record(investor_id=3)]
        assert count_unique_investors(records) == 2


class TestInvestorStats:
    """Tests for investor_stats."""

    def _funding(self, loan_id: int, status: LoanStatus, *records) -> list[InvestorFunding]:
        return [InvestorFunding(record=r, loan_id=loan_id, loan_status=status) for r in records]

    def test_counts_and_totals(self) -> None:
        investor = Investor(
            investor_id=1,
            name="Maria Santos",
            email="maria@example.ph",
            funding=(
                *self._funding(1, LoanStatus.FULLY_FUNDED, record("10000", rate(10))),
                *self._funding(2, LoanStatus.PARTIALLY_FUNDED, record("5000", fixed(250))),
                *self._funding(3, LoanStatus.COMPLETED, record("2000", rate(5))),
                *self._funding(4, LoanStatus.OVERDUE, record("1000", rate(10))),
            ),
            entries=(entry(1, date(2025, 1, 1), "500"), entry(2, date(2025, 2, 1), "750")),
        )

        stats = investor_stats(investor)

        assert stats.total_capital == Decimal("18000")
        assert stats.total_interest == Decimal("1000") + Decimal("250") + Decimal("100") + Decimal("100")
        assert stats.active_loans == 2
        assert stats.completed_loans == 1
        assert stats.overdue_loans == 1
        assert stats.total_loans == 4
        assert stats.current_balance == Decimal("750")
        assert stats.total_gain == stats.total_capital + stats.total_interest

    def test_schedules_stay_within_their_loan(self) -> None:
        periods = (period(date(2025, 2, 1), rate(5)), period(date(2025, 3, 1), rate(5)))
        investor = Investor(
            investor_id=1,
            name="Jose Cruz",
            email="jose@example.ph",
            funding=(
                *self._funding(1, LoanStatus.FULLY_FUNDED, record("10000", periods=periods)),
                *self._funding(2, LoanStatus.FULLY_FUNDED, record("10000", rate(10))),
            ),
        )

        # 1000 from the two periods on loan 1 plus 1000 from loan 2
        assert investor_stats(investor).total_interest == Decimal("2000")

    def test_no_entries_balance_is_zero(self) -> None:
        investor = Investor(investor_id=1, name="Ana Reyes", email="ana@example.ph")
        stats = investor_stats(investor)

        assert stats.current_balance == 0
        assert stats.total_loans == 0


class TestCurrentBalance:
    """Tests for current_balance."""

    def test_latest_by_date(self) -> None:
        investor = Investor(
            investor_id=1,
            name="x",
            email="x@example.ph",
            entries=(entry(5, date(2025, 1, 1), "100"), entry(1, date(2025, 3, 1), "300")),
        )
        assert current_balance(investor) == Decimal("300")

    def test_same_day_tie_broken_by_id(self) -> None:
        investor = Investor(
            investor_id=1,
            name="x",
            email="x@example.ph",
            entries=(entry(9, date(2025, 3, 1), "900"), entry(4, date(2025, 3, 1), "400")),
        )
        assert current_balance(investor) == Decimal("900")


class TestBalanceStatus:
    """Tests for balance_status."""

    def test_default_thresholds(self) -> None:
        assert balance_status(Decimal("150000")) == BalanceStatus.CAN_INVEST
        assert balance_status(Decimal("100000")) == BalanceStatus.LOW_FUNDS
        assert balance_status(Decimal("60000")) == BalanceStatus.LOW_FUNDS
        assert balance_status(Decimal("50000")) == BalanceStatus.NO_FUNDS
        assert balance_status(Decimal("-10")) == BalanceStatus.NO_FUNDS

    def test_explicit_thresholds(self) -> None:
        thresholds = BalanceThresholds(invest_threshold=Decimal("1000"), low_funds_threshold=Decimal("100"))
        assert balance_status(Decimal("1001"), thresholds) == BalanceStatus.CAN_INVEST
        assert balance_status(Decimal("500"), thresholds) == BalanceStatus.LOW_FUNDS

    def test_unreadable_balance_has_no_funds(self) -> None:
        row = {"id": 1, "investorId": 1, "date": "2025-03-01", "direction": "In", "amount": "10", "balance": "oops"}
        investor = Investor(investor_id=1, name="x", email="x@example.ph", entries=(ledger_entry_from_row(row),))

        assert current_balance(investor).is_nan()
        assert balance_status(current_balance(investor)) == BalanceStatus.NO_FUNDS

    def test_thresholds_from_config(self) -> None:
        set_config(EngineConfig(balance=BalanceThresholds(invest_threshold=Decimal("10"))))
        assert balance_status(Decimal("11")) == BalanceStatus.CAN_INVEST
