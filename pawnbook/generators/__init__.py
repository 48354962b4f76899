"""Synthetic lending data generators."""

from pawnbook.generators.portfolio import Portfolio, PortfolioGenerator

__all__ = ["Portfolio", "PortfolioGenerator"]
