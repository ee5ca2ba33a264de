"""Application configuration and environment helpers."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings

from networth.fx import DEFAULT_RATES, CurrencyNormalizer

DEFAULT_BASE_CURRENCY = "USD"


class AppSettings(BaseSettings):
    """Configuration options for the net-worth service."""

    app_name: str = Field(default="Family Net Worth Tracker")
    base_currency: str = Field(default=DEFAULT_BASE_CURRENCY)
    log_level: str = Field(default="INFO")

    currency_rates: dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_RATES),
        description="Static conversion rates to the base currency, keyed by currency code.",
    )
    breakdown_top_n: int = Field(default=10, ge=1)
    commentary_snapshot_limit: int = Field(default=10, ge=1)

    openai_api_key: str | None = Field(default=None)
    openai_model: str = Field(default="gpt-4.1-mini")

    telemetry_enabled: bool = Field(default=False)
    telemetry_service_name: str = Field(default="networth")
    telemetry_otlp_endpoint: str | None = Field(default=None)
    telemetry_otlp_insecure: bool = Field(default=True)
    telemetry_sample_ratio: float = Field(default=1.0, ge=0.0, le=1.0)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    def normalizer(self) -> CurrencyNormalizer:
        """Return a normalizer over the configured rate table."""

        return CurrencyNormalizer({code.upper(): rate for code, rate in self.currency_rates.items()})

    def dict_for_logging(self) -> dict[str, Any]:
        """Return a sanitized dict for logging purposes."""

        hidden = {"openai_api_key"}
        return {k: ("***" if k in hidden else v) for k, v in self.model_dump().items()}


@lru_cache(maxsize=1)
def get_settings(**overrides: Any) -> AppSettings:
    """Return cached application settings with optional overrides."""

    if overrides:
        return AppSettings(**overrides)
    return AppSettings()


__all__ = [
    "AppSettings",
    "DEFAULT_BASE_CURRENCY",
    "get_settings",
]
