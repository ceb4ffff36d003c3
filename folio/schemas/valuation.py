# folio/schemas/valuation.py
"""
Pydantic schemas for Portfolio Valuation output.

These schemas handle:
- Portfolio totals
- Distributions by type, market and account
- Per-holding detail rows

Built from the service-layer dataclasses with `from_stats()`; category
keys become plain strings so the result serializes to JSON directly.
"""

import datetime as dt
from decimal import Decimal

from pydantic import Field

from folio.schemas.holdings import CamelModel
from folio.services.valuation.types import (
    DistributionEntry,
    HoldingValuation,
    PortfolioStats,
)


# =============================================================================
# DISTRIBUTION SCHEMAS
# =============================================================================

class DistributionEntryResponse(CamelModel):
    """One category of a distribution."""

    total_value: Decimal
    total_cost: Decimal
    total_gain_loss: Decimal
    percentage: Decimal = Field(..., description="Share of portfolio value, 0-100")

    @classmethod
    def from_entry(cls, entry: DistributionEntry) -> "DistributionEntryResponse":
        return cls.model_validate(entry)


# =============================================================================
# HOLDING VALUATION SCHEMAS
# =============================================================================

class HoldingValuationResponse(CamelModel):
    """Valuation detail for a single holding."""

    holding_id: str
    account_id: str
    symbol: str
    name: str
    type: str
    market: str
    currency: str
    quantity: Decimal

    price: Decimal = Field(..., description="Effective per-unit price in holding currency")
    price_provenance: str = Field(
        ...,
        description="manual, fetched, assumed (cost basis) or face_value (cash)"
    )
    exchange_rate: Decimal = Field(..., description="Holding currency → base currency")
    rate_method: str

    current_value: Decimal
    cost_value: Decimal
    gain_loss: Decimal
    gain_loss_percent: Decimal = Field(..., description="gain_loss / cost_value as a ratio")

    price_change: Decimal = Decimal("0")
    price_change_percent: Decimal = Decimal("0")
    last_updated: dt.datetime | None = None

    @classmethod
    def from_valuation(cls, valuation: HoldingValuation) -> "HoldingValuationResponse":
        holding = valuation.holding
        return cls(
            holding_id=holding.id,
            account_id=holding.account_id,
            symbol=holding.symbol,
            name=holding.name,
            type=holding.type.value,
            market=holding.market.value,
            currency=holding.currency,
            quantity=holding.quantity,
            price=valuation.price,
            price_provenance=valuation.price_provenance.value,
            exchange_rate=valuation.exchange_rate,
            rate_method=valuation.rate_method.value,
            current_value=valuation.current_value,
            cost_value=valuation.cost_value,
            gain_loss=valuation.gain_loss,
            gain_loss_percent=valuation.gain_loss_percent,
            price_change=valuation.price_change,
            price_change_percent=valuation.price_change_percent,
            last_updated=valuation.last_updated,
        )


# =============================================================================
# PORTFOLIO STATS SCHEMAS
# =============================================================================

class PortfolioStatsResponse(CamelModel):
    """Serializable view of PortfolioStats."""

    base_currency: str
    total_value: Decimal
    total_cost: Decimal
    total_gain_loss: Decimal
    total_gain_loss_percent: Decimal = Field(
        ...,
        description="total_gain_loss / total_cost as a ratio"
    )

    distribution_by_type: dict[str, DistributionEntryResponse]
    distribution_by_market: dict[str, DistributionEntryResponse]
    distribution_by_account: dict[str, DistributionEntryResponse]

    holdings: list[HoldingValuationResponse] = Field(default_factory=list)
    warnings: list[str] = Field(
        default_factory=list,
        description="Data quality notes (assumed prices, unresolved rates)"
    )

    @classmethod
    def from_stats(cls, stats: PortfolioStats) -> "PortfolioStatsResponse":
        def _entries(distribution) -> dict[str, DistributionEntryResponse]:
            return {
                getattr(key, "value", key): DistributionEntryResponse.from_entry(entry)
                for key, entry in distribution.items()
            }

        return cls(
            base_currency=stats.base_currency,
            total_value=stats.total_value,
            total_cost=stats.total_cost,
            total_gain_loss=stats.total_gain_loss,
            total_gain_loss_percent=stats.total_gain_loss_percent,
            distribution_by_type=_entries(stats.distribution_by_type),
            distribution_by_market=_entries(stats.distribution_by_market),
            distribution_by_account=_entries(stats.distribution_by_account),
            holdings=[HoldingValuationResponse.from_valuation(v) for v in stats.holdings],
            warnings=list(stats.warnings),
        )
