"""Tests for principal/interest/rate totals."""

from dataclasses import replace
from datetime import date
from decimal import Decimal

from pawnbook.engine.totals import (
    average_rate,
    calculate_transaction_stats,
    has_unpaid_records,
    loan_balance,
    total_amount,
    total_interest,
    total_principal,
)
from tests.builders import fixed, period, rate, record


class TestSingleInterest:
    """Loans where each record carries its own terms."""

    def test_single_record(self) -> None:
        records = [record("10000", rate(10))]

        assert total_principal(records) == Decimal("10000")
        assert total_interest(records) == Decimal("1000")
        assert total_amount(records) == Decimal("11000")
        assert average_rate(records) == Decimal("10")

    def test_records_resolve_independently(self) -> None:
        records = [
            record("10000", rate(10), investor_id=1),
            record("5000", rate(4), investor_id=1),
            record("2000", fixed(300), investor_id=2),
        ]

        assert total_interest(records) == Decimal("1000") + Decimal("200") + Decimal("300")

    def test_average_rate_is_weighted(self) -> None:
        """10% on 9000 and 20% on 1000 is 11%, not the 15% mean."""
        records = [record("9000", rate(10), investor_id=1), record("1000", rate(20), investor_id=2)]
        assert average_rate(records) == Decimal("11")

    def test_fixed_on_zero_amount(self) -> None:
        records = [record("0", fixed(500))]
        assert total_interest(records) == Decimal("500")
        assert average_rate(records) == 0

    def test_zero_principal_no_division(self) -> None:
        assert average_rate([record("0", rate(10))]) == 0
        assert average_rate([]) == 0


class TestMultiplePeriods:
    """Loans where an investor's interest is split into periods."""

    def test_periods_apply_to_same_base(self, two_period_record) -> None:
        """Two 5% periods on 10000 are 1000, not compounded."""
        assert total_interest([two_period_record]) == Decimal("1000")
        assert total_amount([two_period_record]) == Decimal("11000")

    def test_periods_apply_to_investor_total_principal(self) -> None:
        periods = (period(date(2025, 2, 1), rate(5)), period(date(2025, 3, 1), rate(5)))
        records = [
            record("6000", rate(99), periods=periods),
            record("4000", rate(99)),
        ]

        # One schedule on 10000; the records' own rates are ignored
        assert total_interest(records) == Decimal("1000")

    def test_periods_apply_once_per_investor(self) -> None:
        periods = (period(date(2025, 2, 1), rate(5)),)
        records = [record("5000", periods=periods), record("5000", periods=periods)]

        assert total_interest(records) == Decimal("500")

    def test_fixed_period(self) -> None:
        periods = (period(date(2025, 2, 1), fixed(250)), period(date(2025, 3, 1), rate(10)))
        assert total_interest([record("1000", periods=periods)]) == Decimal("350")

    def test_mixed_investors(self, two_period_record) -> None:
        other = record("2000", rate(10), investor_id=2)
        assert total_interest([two_period_record, other]) == Decimal("1200")

    def test_record_without_investor_excluded_from_interest(self) -> None:
        records = [record("10000", rate(10)), record("5000", rate(10), investor_id=None)]

        assert total_principal(records) == Decimal("15000")
        assert total_interest(records) == Decimal("1000")


class TestMalformedInput:
    """NaN amounts flow through instead of raising."""

    def test_nan_amount_poisons_totals(self) -> None:
        records = [record("10000"), replace(record(), amount=Decimal("NaN"))]

        assert total_principal(records).is_nan()
        assert total_interest(records).is_nan()

    def test_nan_principal_rate_is_zero(self) -> None:
        records = [replace(record(), amount=Decimal("NaN"))]
        assert average_rate(records) == 0


class TestTransactionStats:
    """Tests for calculate_transaction_stats."""

    def test_bundle(self) -> None:
        stats = calculate_transaction_stats([record("10000", rate(10)), record("10000", fixed(500), investor_id=2)])

        assert stats.total_principal == Decimal("20000")
        assert stats.total_interest == Decimal("1500")
        assert stats.average_rate == Decimal("7.5")
        assert stats.total == Decimal("21500")

    def test_accepts_generator(self) -> None:
        stats = calculate_transaction_stats(r for r in [record("10000", rate(10))])
        assert stats.total == Decimal("11000")

    def test_empty(self) -> None:
        stats = calculate_transaction_stats([])
        assert stats.total_principal == 0
        assert stats.average_rate == 0
        assert stats.total == 0


class TestFundingState:
    """Tests for loan_balance and has_unpaid_records."""

    def test_loan_balance_is_unpaid_principal(self) -> None:
        records = [record("10000", is_paid=True), record("2500", is_paid=False), record("500", is_paid=False)]
        assert loan_balance(records) == Decimal("3000")

    def test_fully_funded_balance_is_zero(self) -> None:
        assert loan_balance([record("10000")]) == 0

    def test_has_unpaid_records(self) -> None:
        assert has_unpaid_records([record(), record(is_paid=False)]) is True
        assert has_unpaid_records([record()]) is False
        assert has_unpaid_records([]) is False
