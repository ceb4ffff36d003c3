# folio/services/valuation/service.py
"""
Valuation Service - Main orchestrator for portfolio valuation.

This is the single entry point for all valuation operations:
- value_holding(): Value/cost/gain for one holding at a given price and rate
- value_holdings(): Detail rows for a list of holdings
- calculate_stats(): Portfolio totals and distributions
- top_holdings(): Largest positions by current value
- weighted_volatility(): Value-weighted absolute price move

Design Principles:
- Pure: output depends only on (holdings, prices, rates); no I/O, no
  ambient state. Which rate set to use (live or pinned) is decided by the
  caller before calling in (see folio.services.snapshots).
- Never raises for missing data: missing price → cost basis,
  missing rate → 1, zero division → 0. Each degradation is logged and
  recorded in PortfolioStats.warnings.
- Dependency Injection: CurrencyResolver injected via constructor

Usage:
    from folio.services.valuation import ValuationService

    service = ValuationService(base_currency="TWD")
    stats = service.calculate_stats(holdings, prices, rates)

    stats.total_value
    stats.distribution_by_account["etrade"].percentage
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, TYPE_CHECKING

from folio.config import settings
from folio.models import (
    AssetType,
    ExchangeRateObservation,
    Holding,
    Market,
    PriceObservation,
    PriceProvenance,
)
from folio.services.constants import (
    RATIO_QUANTUM,
    TOP_HOLDINGS_LIMIT,
    VALUE_QUANTUM,
    ZERO,
)
from folio.services.currency_resolver import CurrencyResolver
from folio.services.valuation.calculators import (
    DistributionCalculator,
    HoldingValueCalculator,
    PriceSelector,
)
from folio.services.valuation.types import (
    HoldingValuation,
    HoldingValue,
    PortfolioStats,
)

if TYPE_CHECKING:
    from folio.services.protocols import CurrencyResolverProtocol

logger = logging.getLogger(__name__)


class ValuationService:
    """
    Main service for portfolio valuation.

    Composes the price selector, the holding value calculator and the
    distribution calculator around an injected currency resolver.

    Attributes:
        base_currency: Currency all statistics are normalized into
        _resolver: Resolves holding currency → base currency rates
    """

    def __init__(
            self,
            resolver: CurrencyResolverProtocol | None = None,
            base_currency: str | None = None,
    ) -> None:
        """
        Initialize the valuation service.

        Args:
            resolver: Currency resolver. Defaults to CurrencyResolver()
                      with the configured pivot currency.
            base_currency: Reporting currency. Defaults to settings.base_currency.
        """
        self._resolver: CurrencyResolverProtocol = resolver or CurrencyResolver()
        self.base_currency = (base_currency or settings.base_currency).strip().upper()

        self._price_selector = PriceSelector()
        self._value_calc = HoldingValueCalculator()
        self._distribution_calc = DistributionCalculator()

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def value_holding(
            self,
            holding: Holding,
            current_price: Decimal,
            exchange_rate: Decimal,
    ) -> HoldingValue:
        """
        Value one holding at an explicit price and exchange rate.

        Args:
            holding: Holding to value
            current_price: Per-unit price in the holding currency
            exchange_rate: Holding currency → base currency factor

        Returns:
            HoldingValue in the base currency
        """
        return self._value_calc.calculate(holding, current_price, exchange_rate)

    def value_holdings(
            self,
            holdings: Iterable[Holding],
            prices: Iterable[PriceObservation],
            rates: Iterable[ExchangeRateObservation],
    ) -> list[HoldingValuation]:
        """
        Build per-holding detail rows.

        Args:
            holdings: Holdings to value
            prices: Current quote snapshot
            rates: Exchange-rate snapshot (live or pinned)

        Returns:
            HoldingValuation per holding, in input order
        """
        valuations, _ = self._value_all(holdings, prices, rates)
        return valuations

    def calculate_stats(
            self,
            holdings: Iterable[Holding],
            prices: Iterable[PriceObservation],
            rates: Iterable[ExchangeRateObservation],
    ) -> PortfolioStats:
        """
        Calculate portfolio totals and distributions.

        Steps:
            1. Value every holding (effective price, resolved rate)
            2. Sum totals
            3. Group by type, market and account in one pass each
            4. Derive total gain/loss and its ratio to cost

        Args:
            holdings: Holdings to aggregate
            prices: Current quote snapshot
            rates: Exchange-rate snapshot (live or pinned)

        Returns:
            PortfolioStats snapshot in the base currency
        """
        valuations, warnings = self._value_all(holdings, prices, rates)

        total_value = sum((v.current_value for v in valuations), ZERO).quantize(VALUE_QUANTUM)
        total_cost = sum((v.cost_value for v in valuations), ZERO).quantize(VALUE_QUANTUM)
        total_gain_loss = total_value - total_cost

        if total_cost > ZERO:
            total_gain_loss_percent = (total_gain_loss / total_cost).quantize(RATIO_QUANTUM)
        else:
            total_gain_loss_percent = ZERO.quantize(RATIO_QUANTUM)

        by_type = self._distribution_calc.calculate(
            valuations,
            key=lambda v: v.holding.type,
            total_value=total_value,
            categories=list(AssetType),
        )
        by_market = self._distribution_calc.calculate(
            valuations,
            key=lambda v: v.holding.market,
            total_value=total_value,
            categories=list(Market),
        )
        by_account = self._distribution_calc.calculate(
            valuations,
            key=lambda v: v.holding.account_id,
            total_value=total_value,
        )

        logger.info(
            f"Calculated portfolio stats for {len(valuations)} holdings: "
            f"value={total_value} cost={total_cost} {self.base_currency} "
            f"({len(warnings)} warnings)"
        )

        return PortfolioStats(
            base_currency=self.base_currency,
            total_value=total_value,
            total_cost=total_cost,
            total_gain_loss=total_gain_loss,
            total_gain_loss_percent=total_gain_loss_percent,
            distribution_by_type=by_type,
            distribution_by_market=by_market,
            distribution_by_account=by_account,
            holdings=tuple(valuations),
            warnings=tuple(warnings),
        )

    @staticmethod
    def top_holdings(
            valuations: Iterable[HoldingValuation],
            limit: int = TOP_HOLDINGS_LIMIT,
            include_cash: bool = False,
    ) -> list[HoldingValuation]:
        """
        Largest positions by current value.

        Args:
            valuations: Valuations to rank (e.g. PortfolioStats.holdings)
            limit: Maximum number of rows
            include_cash: Whether cash holdings may appear

        Returns:
            Up to `limit` valuations, largest first (ties keep input order)
        """
        candidates = [
            v for v in valuations
            if include_cash or not v.holding.is_cash
        ]
        candidates.sort(key=lambda v: v.current_value, reverse=True)
        return candidates[:max(limit, 0)]

    @staticmethod
    def weighted_volatility(valuations: Iterable[HoldingValuation]) -> Decimal:
        """
        Value-weighted average of absolute daily price moves.

            volatility = Σ (current_value / total_value) × |price_change_percent|

        Holdings without a fetched quote (manual, assumed, cash) count
        in the weights with a zero move. Result is in the units of
        price_change_percent; 0 when the total value is 0.

        Args:
            valuations: Detail rows (e.g. PortfolioStats.holdings)

        Returns:
            Weighted volatility (not rounded)
        """
        rows = list(valuations)
        total_value = sum((v.current_value for v in rows), ZERO)
        if total_value <= ZERO:
            return ZERO

        weighted = sum(
            (v.current_value * abs(v.price_change_percent) for v in rows),
            ZERO,
        )
        return weighted / total_value

    # =========================================================================
    # PRIVATE HELPERS
    # =========================================================================

    def _value_all(
            self,
            holdings: Iterable[Holding],
            prices: Iterable[PriceObservation],
            rates: Iterable[ExchangeRateObservation],
    ) -> tuple[list[HoldingValuation], list[str]]:
        """Value every holding and collect data quality warnings."""
        prices_by_symbol = PriceSelector.index_observations(prices)
        rate_snapshot = tuple(rates)

        valuations: list[HoldingValuation] = []
        warnings: list[str] = []

        for holding in holdings:
            valuation = self._value_one(holding, prices_by_symbol, rate_snapshot)
            valuations.append(valuation)

            if valuation.is_price_assumed:
                warnings.append(
                    f"No price data for {holding.symbol}, valued at cost basis"
                )
            if not valuation.is_rate_resolved:
                warnings.append(
                    f"No exchange rate for {holding.currency}/{self.base_currency}, "
                    f"converted at 1"
                )

        # One note per distinct problem, first occurrence order
        return valuations, list(dict.fromkeys(warnings))

    def _value_one(
            self,
            holding: Holding,
            prices_by_symbol: dict[str, PriceObservation],
            rates: tuple[ExchangeRateObservation, ...],
    ) -> HoldingValuation:
        selected = self._price_selector.select(holding, prices_by_symbol)
        resolution = self._resolver.resolve(holding.currency, self.base_currency, rates)
        value = self._value_calc.calculate(holding, selected.price, resolution.rate)

        if selected.provenance == PriceProvenance.FETCHED:
            price_change = selected.observation.change
            price_change_percent = selected.observation.change_percent
        else:
            price_change = ZERO
            price_change_percent = ZERO

        if selected.observation is not None:
            last_updated = selected.observation.timestamp
        elif selected.provenance == PriceProvenance.MANUAL:
            last_updated = holding.last_updated
        else:
            last_updated = None

        logger.debug(
            f"Valued {holding.symbol} ({holding.id}): price={selected.price} "
            f"[{selected.provenance.value}] rate={resolution.rate} "
            f"[{resolution.method.value}] value={value.current_value} cost={value.cost_value}"
        )

        return HoldingValuation(
            holding=holding,
            price=selected.price,
            price_provenance=selected.provenance,
            exchange_rate=resolution.rate,
            rate_method=resolution.method,
            current_value=value.current_value,
            cost_value=value.cost_value,
            gain_loss=value.gain_loss,
            gain_loss_percent=value.gain_loss_percent,
            price_change=price_change,
            price_change_percent=price_change_percent,
            last_updated=last_updated,
        )
