"""Configuration management for pawnbook."""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from pawnbook.exceptions import ConfigurationError


@dataclass
class BalanceThresholds:
    """Cut-offs used to label an investor's cash balance."""

    invest_threshold: Decimal = Decimal("100000")
    low_funds_threshold: Decimal = Decimal("50000")


@dataclass
class CalendarConfig:
    """Date-related knobs for schedules and activity views."""

    maturing_horizon_days: int = 14
    multiple_period_min_days: int = 45
    max_period_months: int = 120


@dataclass
class GeneratorConfig:
    """Synthetic portfolio generation settings."""

    locale: str = "en_PH"
    seed: int | None = None


@dataclass
class EngineConfig:
    """Main configuration for pawnbook."""

    strict_investor_identity: bool = False
    log_level: str = "INFO"
    log_format: str = "standard"
    balance: BalanceThresholds = field(default_factory=BalanceThresholds)
    calendar: CalendarConfig = field(default_factory=CalendarConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Create config from environment variables."""
        import os

        balance = BalanceThresholds(
            invest_threshold=_env_decimal("BALANCE_INVEST_THRESHOLD", "100000"),
            low_funds_threshold=_env_decimal("BALANCE_LOW_FUNDS_THRESHOLD", "50000"),
        )

        calendar = CalendarConfig(
            maturing_horizon_days=_env_int("MATURING_HORIZON_DAYS", "14"),
            multiple_period_min_days=_env_int("MULTIPLE_PERIOD_MIN_DAYS", "45"),
            max_period_months=_env_int("MAX_PERIOD_MONTHS", "120"),
        )

        generator = GeneratorConfig(
            locale=os.getenv("FAKER_LOCALE", "en_PH"),
            seed=_env_int("SEED", None) if os.getenv("SEED") else None,
        )

        log_format = os.getenv("LOG_FORMAT", "standard")
        if log_format not in ("standard", "json"):
            raise ConfigurationError(f"LOG_FORMAT must be 'standard' or 'json', got {log_format!r}")

        return cls(
            strict_investor_identity=os.getenv("PAWNBOOK_STRICT_INVESTORS", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=log_format,
            balance=balance,
            calendar=calendar,
            generator=generator,
        )


def _env_int(name: str, default: str | None) -> int:
    import os

    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


def _env_decimal(name: str, default: str) -> Decimal:
    import os

    raw = os.getenv(name, default)
    try:
        return Decimal(raw)
    except InvalidOperation as exc:
        raise ConfigurationError(f"{name} must be a decimal number, got {raw!r}") from exc


_config: EngineConfig | None = None


def get_config() -> EngineConfig:
    """Return the process-wide config, read from the environment on first use."""
    global _config
    if _config is None:
        _config = EngineConfig.from_env()
    return _config


def set_config(config: EngineConfig | None) -> None:
    """Replace the process-wide config (``None`` re-reads the environment on next use)."""
    global _config
    _config = config
