# folio/services/market_data/refresh.py
"""
Price Refresh Service: builds the observation snapshots the valuation
engine consumes.

This service handles:
- One price observation per distinct symbol
- Synthesized observations for cash (static, 1) and manual prices
- Routing asset types to providers (e.g. crypto to a crypto source)
- Exchange rates for every non-base currency held

Design Principles:
- Partial Success: a failing symbol is logged and collected, never raised;
  the engine later values it at cost basis
- Dependency Injection: providers injected via constructor
- Each refresh runs under a correlation ID so its log lines group

Usage:
    from folio.services.market_data import PriceRefreshService

    service = PriceRefreshService(provider=stock_provider,
                                  type_providers={AssetType.CRYPTO: crypto_provider})

    prices = service.refresh_prices(holdings)
    rates = service.refresh_rates({h.currency for h in holdings}, "TWD")

    if prices.used_fallback:
        print(f"Failed: {list(prices.failed)}")
"""

import logging
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Iterable, Iterator, Mapping

from folio.config import settings
from folio.models import (
    AssetType,
    ExchangeRateObservation,
    Holding,
    PriceObservation,
    PriceSource,
)
from folio.services.constants import CASH_UNIT_PRICE
from folio.services.exceptions import FXRateError, MarketDataError
from folio.services.market_data.base import PriceProvider
from folio.utils.context import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)

logger = logging.getLogger(__name__)


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass
class PriceRefreshResult:
    """
    Result of a price refresh.

    Attributes:
        observations: One observation per symbol that could be priced
        failed: symbol → error message for symbols that could not
    """

    observations: list[PriceObservation] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def used_fallback(self) -> bool:
        """True if any symbol will be valued at its cost basis."""
        return bool(self.failed)


@dataclass
class RateRefreshResult:
    """
    Result of an exchange-rate refresh.

    Attributes:
        observations: (currency → base) observations fetched
        failed: currency → error message
    """

    observations: list[ExchangeRateObservation] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def used_fallback(self) -> bool:
        return bool(self.failed)


# =============================================================================
# REFRESH SERVICE
# =============================================================================

class PriceRefreshService:
    """
    Fetches prices and exchange rates for a set of holdings.

    Attributes:
        _provider: Default price provider
        _type_providers: Per asset type overrides
        _fx_provider: Provider used for exchange rates
        refresh_interval: Seconds after which a snapshot is due for refresh
    """

    def __init__(
            self,
            provider: PriceProvider,
            type_providers: Mapping[AssetType, PriceProvider] | None = None,
            fx_provider: PriceProvider | None = None,
            refresh_interval_seconds: int | None = None,
    ) -> None:
        """
        Initialize the refresh service.

        Args:
            provider: Price provider for any asset type without an override
            type_providers: Asset type → provider overrides
            fx_provider: Exchange-rate provider (defaults to `provider`)
            refresh_interval_seconds: Refresh cadence
                (default: settings.price_refresh_interval_seconds)
        """
        self._provider = provider
        self._type_providers = dict(type_providers or {})
        self._fx_provider = fx_provider or provider
        self.refresh_interval = timedelta(
            seconds=refresh_interval_seconds or settings.price_refresh_interval_seconds
        )

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def refresh_prices(self, holdings: Iterable[Holding]) -> PriceRefreshResult:
        """
        Build a price observation snapshot.

        Per symbol:
            any holding without a manual price → fetched from the routed provider
            otherwise, first holding is cash   → static observation at 1
            otherwise                          → manual observation at the
                                                 first holding's current_price

        Holdings with their own manual price keep it whatever the snapshot
        holds, so a quote is fetched only for the holdings that need one.

        Args:
            holdings: Holdings to price

        Returns:
            PriceRefreshResult; never raises for provider failures
        """
        result = PriceRefreshResult()

        with self._correlation_scope("prices"):
            for symbol, group in self._group_by_symbol(holdings).items():
                needs_quote = [
                    h for h in group
                    if not h.is_cash and not h.has_manual_price
                ]

                if not needs_quote:
                    first = group[0]
                    if first.is_cash:
                        result.observations.append(self._static_observation(first))
                    else:
                        result.observations.append(self._manual_observation(first))
                    continue

                holding = needs_quote[0]
                provider = self._provider_for(holding.type)
                try:
                    result.observations.append(
                        provider.fetch_price(symbol, holding.market)
                    )
                except MarketDataError as e:
                    logger.warning(
                        f"Price fetch failed for {symbol} via {provider.name}: {e}"
                    )
                    result.failed[symbol] = str(e)

            logger.info(
                f"Price refresh: {len(result.observations)} observations, "
                f"{len(result.failed)} failed"
            )

        return result

    def refresh_rates(
            self,
            currencies: Iterable[str],
            base_currency: str | None = None,
    ) -> RateRefreshResult:
        """
        Fetch (currency → base) rates for every distinct non-base currency.

        Args:
            currencies: Currencies held
            base_currency: Target currency (defaults to settings.base_currency)

        Returns:
            RateRefreshResult; never raises for provider failures
        """
        base = (base_currency or settings.base_currency).strip().upper()
        result = RateRefreshResult()

        with self._correlation_scope("rates"):
            targets = dict.fromkeys(c.strip().upper() for c in currencies)
            for currency in targets:
                if currency == base:
                    continue
                try:
                    result.observations.append(
                        self._fx_provider.fetch_exchange_rate(currency, base)
                    )
                except (FXRateError, MarketDataError) as e:
                    logger.warning(f"Exchange rate fetch failed for {currency}/{base}: {e}")
                    result.failed[currency] = str(e)

            logger.info(
                f"Rate refresh into {base}: {len(result.observations)} rates, "
                f"{len(result.failed)} failed"
            )

        return result

    def is_refresh_due(
            self,
            last_refreshed: datetime | None,
            now: datetime | None = None,
    ) -> tuple[bool, str]:
        """
        Check whether a price/rate snapshot needs refreshing.

        Args:
            last_refreshed: When the current snapshot was taken
            now: Reference time (default: current UTC time)

        Returns:
            Tuple of (is_due, reason)

        Examples:
            (True, "never_refreshed")
            (True, "last_refresh_600_seconds_ago")
            (False, "refreshed_120_seconds_ago")
        """
        if last_refreshed is None:
            return True, "never_refreshed"

        now = now or datetime.now(timezone.utc)
        if last_refreshed.tzinfo is None:
            last_refreshed = last_refreshed.replace(tzinfo=timezone.utc)

        elapsed = now - last_refreshed
        seconds = int(elapsed.total_seconds())

        if elapsed >= self.refresh_interval:
            return True, f"last_refresh_{seconds}_seconds_ago"

        return False, f"refreshed_{seconds}_seconds_ago"

    # =========================================================================
    # PRIVATE HELPERS
    # =========================================================================

    @staticmethod
    def _group_by_symbol(holdings: Iterable[Holding]) -> dict[str, list[Holding]]:
        groups: dict[str, list[Holding]] = {}
        for holding in holdings:
            groups.setdefault(holding.symbol, []).append(holding)
        return groups

    def _provider_for(self, asset_type: AssetType) -> PriceProvider:
        return self._type_providers.get(asset_type, self._provider)

    @staticmethod
    def _static_observation(holding: Holding) -> PriceObservation:
        return PriceObservation(
            symbol=holding.symbol,
            price=CASH_UNIT_PRICE,
            currency=holding.currency,
            timestamp=datetime.now(timezone.utc),
            source=PriceSource.STATIC,
        )

    @staticmethod
    def _manual_observation(holding: Holding) -> PriceObservation:
        return PriceObservation(
            symbol=holding.symbol,
            price=holding.current_price,
            currency=holding.currency,
            timestamp=holding.last_updated or datetime.now(timezone.utc),
            source=PriceSource.MANUAL,
        )

    @staticmethod
    @contextmanager
    def _correlation_scope(kind: str) -> Iterator[str]:
        """Run under the caller's correlation ID, or a fresh one for this refresh."""
        existing = get_correlation_id()
        if existing:
            yield existing
            return

        correlation_id = f"refresh-{kind}-{uuid.uuid4().hex[:12]}"
        set_correlation_id(correlation_id)
        try:
            yield correlation_id
        finally:
            clear_correlation_id()
