# tests/conftest.py
"""
Pytest configuration and fixtures.

This module provides shared fixtures for all tests:
- Sample data factories (holdings, quotes, rates)
- Mock price provider
"""

from decimal import Decimal

import pytest

from folio.models import (
    AssetType,
    ExchangeRateObservation,
    Holding,
    Market,
    PriceObservation,
    PriceSource,
)
from folio.services.currency_resolver import CurrencyResolver
from folio.services.exceptions import FXRateNotFoundError, SymbolNotFoundError
from folio.services.market_data.base import PriceProvider
from folio.services.valuation import ValuationService


# =============================================================================
# SAMPLE DATA FACTORIES
# =============================================================================

def make_holding(
        id: str = "h1",
        account_id: str = "etrade",
        symbol: str = "AAPL",
        name: str = "Apple Inc.",
        type: AssetType = AssetType.STOCK,
        market: Market = Market.US,
        quantity: str | Decimal = "10",
        cost_basis: str | Decimal = "100",
        currency: str = "USD",
        current_price: str | Decimal | None = None,
        **kwargs,
) -> Holding:
    """Factory function for creating Holding test data."""
    return Holding(
        id=id,
        account_id=account_id,
        symbol=symbol,
        name=name,
        type=type,
        market=market,
        quantity=Decimal(quantity),
        cost_basis=Decimal(cost_basis),
        currency=currency,
        current_price=Decimal(current_price) if current_price is not None else None,
        **kwargs,
    )


def make_cash(
        id: str = "cash1",
        account_id: str = "fubon",
        quantity: str | Decimal = "1000000",
        currency: str = "TWD",
) -> Holding:
    """Factory function for a cash holding (cost basis 1 per unit)."""
    return make_holding(
        id=id,
        account_id=account_id,
        symbol=currency,
        name=f"{currency} cash",
        type=AssetType.CASH,
        market=Market.TW if currency == "TWD" else Market.OTHER,
        quantity=quantity,
        cost_basis="1",
        currency=currency,
    )


def make_price(
        symbol: str = "AAPL",
        price: str | Decimal = "150",
        currency: str = "USD",
        change: str = "0",
        change_percent: str = "0",
        source: PriceSource = PriceSource.YAHOO,
        **kwargs,
) -> PriceObservation:
    """Factory function for creating PriceObservation test data."""
    return PriceObservation(
        symbol=symbol,
        price=Decimal(price),
        currency=currency,
        change=Decimal(change),
        change_percent=Decimal(change_percent),
        source=source,
        **kwargs,
    )


def make_rate(from_currency: str, to_currency: str, rate: str | Decimal) -> ExchangeRateObservation:
    """Factory function for creating ExchangeRateObservation test data."""
    return ExchangeRateObservation(
        from_currency=from_currency,
        to_currency=to_currency,
        rate=Decimal(rate),
    )


# =============================================================================
# RATE FIXTURES
# =============================================================================

@pytest.fixture
def usd_twd_rates() -> list[ExchangeRateObservation]:
    """Single direct USD → TWD rate."""
    return [make_rate("USD", "TWD", "30.31")]


@pytest.fixture
def pivot_rates() -> list[ExchangeRateObservation]:
    """USD-quoted rates only: other pairs must be triangulated."""
    return [
        make_rate("USD", "TWD", "30"),
        make_rate("USD", "JPY", "150"),
        make_rate("USD", "EUR", "0.9"),
    ]


# =============================================================================
# SERVICE FIXTURES
# =============================================================================

@pytest.fixture
def resolver() -> CurrencyResolver:
    return CurrencyResolver(pivot_currency="USD")


@pytest.fixture
def service(resolver) -> ValuationService:
    """Valuation service reporting in TWD."""
    return ValuationService(resolver=resolver, base_currency="TWD")


# =============================================================================
# MOCK PRICE PROVIDER
# =============================================================================

class MockPriceProvider(PriceProvider):
    """
    Mock implementation of PriceProvider for testing.

    Allows configuring prices, rates and errors per symbol or pair.
    Retry waits are zero so retry tests run instantly.
    """

    RETRY_MIN_WAIT = 0
    RETRY_MAX_WAIT = 0

    def __init__(self, name: str = "mock"):
        self._name = name
        self._prices: dict[str, PriceObservation] = {}
        self._rates: dict[tuple[str, str], ExchangeRateObservation] = {}
        self._errors: dict[str, list[Exception]] = {}
        self.price_calls: list[str] = []
        self.rate_calls: list[tuple[str, str]] = []

    @property
    def name(self) -> str:
        return self._name

    def add_price(self, observation: PriceObservation) -> None:
        self._prices[observation.symbol] = observation

    def add_rate(self, from_currency: str, to_currency: str, rate: str) -> None:
        self._rates[(from_currency, to_currency)] = make_rate(from_currency, to_currency, rate)

    def add_error(self, key: str, *errors: Exception) -> None:
        """Queue errors raised (in order) for a symbol or "FROM/TO" pair."""
        self._errors.setdefault(key, []).extend(errors)

    def _raise_queued(self, key: str) -> None:
        queued = self._errors.get(key)
        if queued:
            raise queued.pop(0)

    def get_price(self, symbol, market):
        self.price_calls.append(symbol)
        self._raise_queued(symbol)
        if symbol in self._prices:
            return self._prices[symbol]
        raise SymbolNotFoundError(symbol, self.name)

    def get_exchange_rate(self, from_currency, to_currency):
        self.rate_calls.append((from_currency, to_currency))
        self._raise_queued(f"{from_currency}/{to_currency}")
        key = (from_currency, to_currency)
        if key in self._rates:
            return self._rates[key]
        raise FXRateNotFoundError(from_currency, to_currency, provider=self.name)


@pytest.fixture
def mock_provider() -> MockPriceProvider:
    """Create a fresh mock provider for each test."""
    return MockPriceProvider()
