"""Currency normalization tests."""

from __future__ import annotations

import pytest

from networth.fx import DEFAULT_RATES, CurrencyNormalizer, normalize


def test_known_codes_use_static_rates():
    assert normalize(100, "EUR") == pytest.approx(105.0)
    assert normalize(100, "GBP") == pytest.approx(125.0)
    assert normalize(10_000, "JPY") == pytest.approx(67.0)
    assert normalize(42, "USD") == pytest.approx(42.0)


def test_code_lookup_is_case_insensitive():
    assert normalize(100, "eur") == pytest.approx(normalize(100, "EUR"))


def test_unknown_or_blank_code_passes_amount_through():
    assert normalize(100, "XYZ") == 100
    assert normalize(100, "") == 100
    assert normalize(100, None) == 100
    assert normalize(-250.5, "BTC") == -250.5


def test_custom_rate_table():
    normalizer = CurrencyNormalizer({"USD": 1.0, "EUR": 2.0, "ZZZ": 0.0})

    assert normalizer.normalize(3, "EUR") == pytest.approx(6.0)
    # Zero rate reads as missing.
    assert normalizer.normalize(3, "ZZZ") == pytest.approx(3.0)
    assert normalizer.rate("GBP") == 1.0


def test_normalizers_with_equal_rates_hash_alike():
    first = CurrencyNormalizer(dict(DEFAULT_RATES))
    second = CurrencyNormalizer(dict(DEFAULT_RATES))

    assert first == second
    assert hash(first) == hash(second)
