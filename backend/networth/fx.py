"""Static currency normalization."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping

DEFAULT_RATES: Dict[str, float] = {
    "USD": 1.0,
    "EUR": 1.05,
    "GBP": 1.25,
    "CAD": 0.74,
    "AUD": 0.65,
    "CNY": 0.14,
    "JPY": 0.0067,
    "SGD": 0.73,
    "INR": 0.012,
}


@dataclass(frozen=True)
class CurrencyNormalizer:
    """Convert currency-tagged amounts to the reference unit.

    Unknown codes are treated as already normalized (rate 1); no lookup ever
    raises.
    """

    rates: Mapping[str, float] = field(default_factory=lambda: dict(DEFAULT_RATES))

    def rate(self, code: str | None) -> float:
        """Return the conversion rate for ``code``."""

        if not code:
            return 1.0
        rate = self.rates.get(code.upper())
        # A zero rate is treated like a missing one.
        return rate or 1.0

    def normalize(self, amount: float, code: str | None) -> float:
        return amount * self.rate(code)

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.rates.items())))


DEFAULT_NORMALIZER = CurrencyNormalizer()


def normalize(amount: float, code: str | None) -> float:
    """Normalize ``amount`` using the default static rate table."""

    return DEFAULT_NORMALIZER.normalize(amount, code)


__all__ = ["CurrencyNormalizer", "DEFAULT_NORMALIZER", "DEFAULT_RATES", "normalize"]
