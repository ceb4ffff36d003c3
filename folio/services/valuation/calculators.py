# folio/services/valuation/calculators.py
"""
Point-in-time valuation calculators.

Each calculator does one thing:
- PriceSelector: Picks the effective price for a holding
- HoldingValueCalculator: Values one holding in the base currency
- DistributionCalculator: Groups valuations into a distribution

Design Principles:
- Stateless (no instance state beyond configuration, pure functions)
- Receives all inputs explicitly, performs no I/O
- Never raises for missing data; degrades to documented defaults
- Uses Decimal for ALL financial calculations

Usage:
    selector = PriceSelector()
    prices_by_symbol = PriceSelector.index_observations(prices)
    selected = selector.select(holding, prices_by_symbol)

    value = HoldingValueCalculator().calculate(holding, selected.price, rate)
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Callable, Hashable, Iterable, Mapping, TypeVar

from folio.models import Holding, PriceObservation, PriceProvenance, PriceSource
from folio.services.constants import (
    CASH_UNIT_PRICE,
    HUNDRED,
    PERCENT_QUANTUM,
    RATIO_QUANTUM,
    VALUE_QUANTUM,
    ZERO,
)
from folio.services.valuation.types import (
    DistributionEntry,
    HoldingValuation,
    HoldingValue,
    SelectedPrice,
)
from folio.utils.fx_conversion import convert_amount

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)


# =============================================================================
# PRICE SELECTOR
# =============================================================================

class PriceSelector:
    """
    Chooses the per-unit price used to value a holding.

    Priority (first match wins):
        1. Cash                      → 1 (face value)
        2. Manual price > 0          → holding.current_price
        3. Quote price > 0           → observation.price
        4. Nothing                   → holding.cost_basis (assumed break-even)

    Manual prices are authoritative and never replaced by fetched quotes.
    A quote synthesized from another holding's manual price keeps the
    MANUAL provenance.
    """

    @staticmethod
    def index_observations(
            prices: Iterable[PriceObservation],
    ) -> dict[str, PriceObservation]:
        """
        Index observations by symbol.

        The first observation for a symbol wins; later duplicates are ignored.
        """
        by_symbol: dict[str, PriceObservation] = {}
        for observation in prices:
            by_symbol.setdefault(observation.symbol, observation)
        return by_symbol

    def select(
            self,
            holding: Holding,
            prices_by_symbol: Mapping[str, PriceObservation],
    ) -> SelectedPrice:
        """
        Select the effective price for a holding.

        Args:
            holding: Holding to price
            prices_by_symbol: Observations indexed by symbol

        Returns:
            SelectedPrice with price, provenance and any matching quote
        """
        observation = prices_by_symbol.get(holding.symbol)

        if holding.is_cash:
            return SelectedPrice(CASH_UNIT_PRICE, PriceProvenance.FACE_VALUE, observation)

        if holding.has_manual_price:
            return SelectedPrice(holding.current_price, PriceProvenance.MANUAL)

        if observation is not None and observation.price > 0:
            if observation.source == PriceSource.MANUAL:
                return SelectedPrice(observation.price, PriceProvenance.MANUAL, observation)
            return SelectedPrice(observation.price, PriceProvenance.FETCHED, observation)

        return SelectedPrice(holding.cost_basis, PriceProvenance.ASSUMED)


# =============================================================================
# HOLDING VALUE CALCULATOR
# =============================================================================

class HoldingValueCalculator:
    """
    Values a single holding in the base currency.

    Non-cash:
        cost_value    = quantity × cost_basis × rate
        current_value = quantity × price × rate
        gain_loss     = current_value - cost_value
        gain_loss_pct = gain_loss / cost_value   (0 when cost_value is 0)

    Cash:
        current_value = cost_value = quantity × 1 × rate
        gain_loss = gain_loss_pct = 0

    Cash never reports FX drift as gain: its cost is revalued at the same
    rate as its value. Amounts are quantized to 0.01 before gain/loss is
    derived, so gain_loss always equals the difference of the reported values.
    """

    def calculate(
            self,
            holding: Holding,
            current_price: Decimal,
            exchange_rate: Decimal,
    ) -> HoldingValue:
        """
        Calculate value, cost and gain/loss for one holding.

        Args:
            holding: The holding to value
            current_price: Per-unit price in the holding's currency
                           (ignored for cash)
            exchange_rate: Factor from holding currency to base currency

        Returns:
            HoldingValue in the base currency
        """
        if holding.is_cash:
            face_value = holding.quantity * CASH_UNIT_PRICE
            value = convert_amount(face_value, exchange_rate).quantize(VALUE_QUANTUM)
            return HoldingValue(
                current_value=value,
                cost_value=value,
                gain_loss=ZERO.quantize(VALUE_QUANTUM),
                gain_loss_percent=ZERO.quantize(RATIO_QUANTUM),
            )

        cost_value = convert_amount(
            holding.quantity * holding.cost_basis, exchange_rate
        ).quantize(VALUE_QUANTUM)
        current_value = convert_amount(
            holding.quantity * current_price, exchange_rate
        ).quantize(VALUE_QUANTUM)
        gain_loss = current_value - cost_value

        if cost_value > ZERO:
            gain_loss_percent = (gain_loss / cost_value).quantize(RATIO_QUANTUM)
        else:
            gain_loss_percent = ZERO.quantize(RATIO_QUANTUM)

        return HoldingValue(
            current_value=current_value,
            cost_value=cost_value,
            gain_loss=gain_loss,
            gain_loss_percent=gain_loss_percent,
        )


# =============================================================================
# DISTRIBUTION CALCULATOR
# =============================================================================

class DistributionCalculator:
    """
    Groups holding valuations into one distribution.

    Value, cost and gain/loss are accumulated together in a single pass;
    percentages are derived in a second pass once the portfolio total is
    known:

        percentage = category_value / total_value × 100   (0 if total is 0)
    """

    def calculate(
            self,
            valuations: Iterable[HoldingValuation],
            key: Callable[[HoldingValuation], K],
            total_value: Decimal,
            categories: Iterable[K] = (),
    ) -> dict[K, DistributionEntry]:
        """
        Build a distribution.

        Args:
            valuations: Per-holding valuations
            key: Extracts the category from a valuation
            total_value: Portfolio total used for percentages
            categories: Categories to always include, in order (zero if empty)

        Returns:
            Dict mapping category -> DistributionEntry, seeded categories first
        """
        sums: dict[K, list[Decimal]] = {category: [ZERO, ZERO] for category in categories}

        for valuation in valuations:
            bucket = sums.setdefault(key(valuation), [ZERO, ZERO])
            bucket[0] += valuation.current_value
            bucket[1] += valuation.cost_value

        distribution: dict[K, DistributionEntry] = {}
        for category, (value, cost) in sums.items():
            distribution[category] = DistributionEntry(
                total_value=value.quantize(VALUE_QUANTUM),
                total_cost=cost.quantize(VALUE_QUANTUM),
                total_gain_loss=(value - cost).quantize(VALUE_QUANTUM),
                percentage=self._percentage(value, total_value),
            )

        return distribution

    @staticmethod
    def _percentage(value: Decimal, total_value: Decimal) -> Decimal:
        if total_value <= ZERO:
            return ZERO.quantize(PERCENT_QUANTUM)
        return (value / total_value * HUNDRED).quantize(PERCENT_QUANTUM)
