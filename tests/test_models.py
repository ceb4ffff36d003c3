# tests/test_models.py
"""
Tests for domain value objects.

This module tests:
- Decimal normalization of observation fields
- Currency code validation on construction
"""

from decimal import Decimal

import pytest

from folio.models import ExchangeRateObservation, Holding, PriceObservation, PriceSource
from tests.conftest import make_holding


class TestPriceObservation:

    def test_numeric_fields_become_decimal(self):
        quote = PriceObservation(
            symbol="AAPL", price=150.25, currency="usd", change=1.1, change_percent=0.0074,
        )

        assert quote.price == Decimal("150.25")
        assert quote.change == Decimal("1.1")
        assert isinstance(quote.change, Decimal)
        assert quote.change_percent == Decimal("0.0074")
        assert quote.currency == "USD"

    def test_source_accepts_string(self):
        quote = PriceObservation(symbol="BTC", price=1, currency="USD", source="coingecko")

        assert quote.source == PriceSource.COINGECKO

    def test_missing_currency_rejected(self):
        with pytest.raises(ValueError, match="currency is required"):
            PriceObservation(symbol="AAPL", price=1, currency=None)

    def test_float_change_reaches_valuation_as_decimal(self, service, usd_twd_rates):
        quote = PriceObservation(symbol="AAPL", price=150, currency="USD", change=1.1)

        [row] = service.value_holdings([make_holding()], [quote], usd_twd_rates)

        assert row.price_change == Decimal("1.1")
        assert isinstance(row.price_change, Decimal)


class TestHolding:

    @pytest.mark.parametrize("currency", [None, "", "   "])
    def test_missing_currency_rejected(self, currency):
        with pytest.raises(ValueError, match="currency is required"):
            make_holding(currency=currency)

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValueError, match="quantity must be non-negative"):
            make_holding(quantity="-1")

    def test_normalizes_fields(self):
        holding = make_holding(currency=" usd ", quantity="2.5")

        assert holding.currency == "USD"
        assert holding.quantity == Decimal("2.5")


class TestExchangeRateObservation:

    def test_normalizes_codes_and_rate(self):
        rate = ExchangeRateObservation(from_currency="usd", to_currency=" twd", rate=30.31)

        assert (rate.from_currency, rate.to_currency) == ("USD", "TWD")
        assert rate.rate == Decimal("30.31")

    def test_missing_code_rejected(self):
        with pytest.raises(ValueError, match="to_currency is required"):
            ExchangeRateObservation(from_currency="USD", to_currency=None, rate=1)
