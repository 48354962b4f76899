"""Tests for interest resolution."""

from decimal import Decimal

from pawnbook.engine.interest import investment_total, resolve_interest
from tests.builders import fixed, rate


class TestResolveInterest:
    """Tests for resolve_interest."""

    def test_rate_is_percentage_of_principal(self) -> None:
        assert resolve_interest(Decimal("10000"), rate(10)) == Decimal("1000")

    def test_fractional_rate(self) -> None:
        assert resolve_interest(Decimal("2500"), rate("2.5")) == Decimal("62.5")

    def test_fixed_ignores_principal(self) -> None:
        assert resolve_interest(Decimal("10000"), fixed(500)) == Decimal("500")

    def test_fixed_on_zero_principal(self) -> None:
        """Fixed interest is owed even when nothing was lent."""
        assert resolve_interest(Decimal("0"), fixed(500)) == Decimal("500")

    def test_rate_on_zero_principal(self) -> None:
        assert resolve_interest(Decimal("0"), rate(10)) == 0

    def test_nan_principal_propagates(self) -> None:
        assert resolve_interest(Decimal("NaN"), rate(10)).is_nan()


class TestInvestmentTotal:
    """Tests for investment_total."""

    def test_rate(self) -> None:
        assert investment_total(Decimal("10000"), rate(10)) == Decimal("11000")

    def test_fixed(self) -> None:
        assert investment_total(Decimal("10000"), fixed(750)) == Decimal("10750")
