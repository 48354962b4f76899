"""Pytest configuration and fixtures."""

import os
from datetime import date
from unittest.mock import patch

import pytest
from hypothesis import HealthCheck, settings

from pawnbook.config import set_config
from tests.builders import period, rate, record

# reset_config is autouse and function scoped
settings.register_profile("pawnbook", suppress_health_check=[HealthCheck.function_scoped_fixture], deadline=None)
settings.load_profile("pawnbook")


ENV_VARS = [
    "BALANCE_INVEST_THRESHOLD",
    "BALANCE_LOW_FUNDS_THRESHOLD",
    "MATURING_HORIZON_DAYS",
    "MULTIPLE_PERIOD_MIN_DAYS",
    "MAX_PERIOD_MONTHS",
    "FAKER_LOCALE",
    "SEED",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "PAWNBOOK_STRICT_INVESTORS",
]


@pytest.fixture(autouse=True)
def reset_config():
    """Each test starts from the default config, without pawnbook env vars."""
    env = {k: v for k, v in os.environ.items() if k not in ENV_VARS}
    with patch.dict(os.environ, env, clear=True):
        set_config(None)
        yield
        set_config(None)


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def today() -> date:
    """Reference date for status-sensitive tests."""
    return date(2025, 3, 15)


@pytest.fixture
def two_period_record():
    """10000 principal with two 5% periods, both pending."""
    return record(
        "10000",
        periods=(
            period(date(2025, 2, 1), rate(5)),
            period(date(2025, 3, 1), rate(5)),
        ),
    )
