# folio/services/valuation/types.py
"""
Data types for the Valuation Service.

These dataclasses are produced by the valuation calculators. They are NOT
Pydantic schemas - those are defined in folio/schemas/valuation.py for
serialization.

Design Principles:
- Immutable (frozen=True); PortfolioStats is a snapshot that is rebuilt,
  never patched
- Decimal for ALL financial values
- Every valuation carries the provenance of its price and the method used
  to resolve its exchange rate, so callers can flag assumed data

Type Hierarchy:
    HoldingValue       - value/cost/gain for one holding (pure arithmetic)
    SelectedPrice      - effective price plus provenance
    HoldingValuation   - full detail row for one holding
    DistributionEntry  - one category of a distribution
    PortfolioStats     - portfolio totals and the three distributions
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping

from folio.models import AssetType, Holding, Market, PriceObservation, PriceProvenance
from folio.services.currency_resolver import RateMethod


# =============================================================================
# PER-HOLDING
# =============================================================================

@dataclass(frozen=True)
class HoldingValue:
    """
    Value, cost and gain/loss of one holding in the base currency.

    Attributes:
        current_value: quantity × price × rate
        cost_value: quantity × cost_basis × rate (quantity × rate for cash)
        gain_loss: current_value - cost_value
        gain_loss_percent: gain_loss / cost_value as a ratio (0 if cost is 0)
    """

    current_value: Decimal
    cost_value: Decimal
    gain_loss: Decimal
    gain_loss_percent: Decimal


@dataclass(frozen=True)
class SelectedPrice:
    """
    Effective per-unit price chosen for a holding.

    Attributes:
        price: Per-unit price in the holding's currency
        provenance: Rule that supplied the price
        observation: The fetched quote, when one matched the symbol
    """

    price: Decimal
    provenance: PriceProvenance
    observation: PriceObservation | None = None


@dataclass(frozen=True)
class HoldingValuation:
    """
    Complete valuation detail for a single holding.

    Attributes:
        holding: The valued holding
        price: Effective per-unit price (holding currency)
        price_provenance: manual | fetched | assumed | face_value
        exchange_rate: Factor from holding currency to base currency
        rate_method: How the exchange rate was resolved
        current_value, cost_value, gain_loss, gain_loss_percent: see HoldingValue
        price_change: Change since previous close (0 for manual prices)
        price_change_percent: Percentage change since previous close
        last_updated: When the price was set or observed
    """

    holding: Holding
    price: Decimal
    price_provenance: PriceProvenance
    exchange_rate: Decimal
    rate_method: RateMethod
    current_value: Decimal
    cost_value: Decimal
    gain_loss: Decimal
    gain_loss_percent: Decimal
    price_change: Decimal = Decimal("0")
    price_change_percent: Decimal = Decimal("0")
    last_updated: datetime | None = None

    @property
    def holding_id(self) -> str:
        return self.holding.id

    @property
    def is_price_assumed(self) -> bool:
        """True if the cost basis stood in for a missing quote."""
        return self.price_provenance == PriceProvenance.ASSUMED

    @property
    def is_rate_resolved(self) -> bool:
        return self.rate_method != RateMethod.UNRESOLVED


# =============================================================================
# AGGREGATES
# =============================================================================

@dataclass(frozen=True)
class DistributionEntry:
    """
    Aggregate of one category within a distribution.

    Attributes:
        total_value: Sum of current values in the category
        total_cost: Sum of cost values in the category
        total_gain_loss: total_value - total_cost
        percentage: Share of portfolio value, 0-100 (0 if portfolio is empty)
    """

    total_value: Decimal
    total_cost: Decimal
    total_gain_loss: Decimal
    percentage: Decimal


@dataclass(frozen=True)
class PortfolioStats:
    """
    Portfolio-level statistics in the base currency.

    A pure projection of (holdings, prices, rates). Distributions by type
    and market list every enum member; the account distribution lists the
    accounts present in the holdings.

    Attributes:
        base_currency: Currency of every amount below
        total_value: Sum of holding current values
        total_cost: Sum of holding cost values
        total_gain_loss: total_value - total_cost
        total_gain_loss_percent: total_gain_loss / total_cost as a ratio
        distribution_by_type: AssetType → DistributionEntry
        distribution_by_market: Market → DistributionEntry
        distribution_by_account: account_id → DistributionEntry
        holdings: Per-holding valuations, in input order
        warnings: Data quality notes (assumed prices, unresolved rates)
    """

    base_currency: str
    total_value: Decimal
    total_cost: Decimal
    total_gain_loss: Decimal
    total_gain_loss_percent: Decimal
    distribution_by_type: Mapping[AssetType, DistributionEntry]
    distribution_by_market: Mapping[Market, DistributionEntry]
    distribution_by_account: Mapping[str, DistributionEntry]
    holdings: tuple[HoldingValuation, ...] = ()
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Read-only views so a published snapshot cannot be patched in place
        for name in ("distribution_by_type", "distribution_by_market", "distribution_by_account"):
            mapping = getattr(self, name)
            if not isinstance(mapping, MappingProxyType):
                object.__setattr__(self, name, MappingProxyType(dict(mapping)))
        object.__setattr__(self, "holdings", tuple(self.holdings))
        object.__setattr__(self, "warnings", tuple(self.warnings))

    @property
    def holdings_count(self) -> int:
        return len(self.holdings)

    @property
    def has_assumed_prices(self) -> bool:
        return any(h.is_price_assumed for h in self.holdings)

    @property
    def has_unresolved_rates(self) -> bool:
        return any(not h.is_rate_resolved for h in self.holdings)
