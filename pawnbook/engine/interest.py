"""Interest resolution for a single principal amount."""

from decimal import Decimal

from pawnbook.models.interest import Fixed, InterestSpec

HUNDRED = Decimal(100)


def resolve_interest(principal: Decimal, spec: InterestSpec) -> Decimal:
    """Interest owed on ``principal`` under ``spec``.

    ``Rate`` is a percentage of principal; ``Fixed`` is owed as-is, even on a
    zero principal.
    """
    if isinstance(spec, Fixed):
        return spec.amount
    return principal * spec.percent / HUNDRED


def investment_total(principal: Decimal, spec: InterestSpec) -> Decimal:
    """Principal plus interest for a single investment."""
    return principal + resolve_interest(principal, spec)
