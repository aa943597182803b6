"""Mini README: Centralised configuration for the daily expense tracker.

Structure:
    * ExpenseTrackerSettings - pydantic-settings model read from the environment.
    * get_settings - cached accessor so validation runs once per process.

Usage:
    Every field can be overridden with a ``DAILY_EXPENSES_`` prefixed
    environment variable or a local ``.env`` file, e.g.
    ``DAILY_EXPENSES_STATISTICS_INTERVAL_SECONDS=0`` disables the periodic
    statistics log line.
"""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ExpenseTrackerSettings(BaseSettings):
    """Runtime configuration for the expense tracker."""

    model_config = SettingsConfigDict(
        env_prefix="DAILY_EXPENSES_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the web interface to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the web interface listens on.",
        ge=1,
        le=65535,
    )
    log_level: str = Field("INFO", description="Root logging level.")
    max_description_length: int = Field(
        100,
        description="Longest accepted expense description, in characters.",
        ge=1,
    )
    max_amount: Decimal = Field(
        Decimal("999999.99"),
        description="Largest accepted expense amount.",
        gt=0,
    )
    future_date_cutoff_days: int = Field(
        1,
        description=(
            "Dates on or after today plus this many days are rejected as future"
            " dates. The default of 1 accepts anything up to and including today."
        ),
        ge=1,
    )
    statistics_interval_seconds: float = Field(
        30.0,
        description="Seconds between session statistics log lines; 0 disables them.",
        ge=0,
    )
    currency_symbol: str = Field("$", description="Symbol prefixed to displayed amounts.")

    @field_validator("log_level")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        """Accept any casing but only the standard logging level names."""

        normalised = value.strip().upper()
        if normalised not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log level: {value}")
        return normalised


@lru_cache()
def get_settings() -> ExpenseTrackerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return ExpenseTrackerSettings()
