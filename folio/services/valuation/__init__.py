# folio/services/valuation/__init__.py
"""
Valuation Service Package.

This package provides portfolio valuation capabilities:
- Per-holding values (value_holding, value_holdings)
- Portfolio totals and distributions (calculate_stats)
- Largest positions (top_holdings)

Usage:
    from folio.services.valuation import ValuationService

    service = ValuationService(base_currency="TWD")

    stats = service.calculate_stats(holdings, prices, rates)
    stats.total_value
    stats.distribution_by_type[AssetType.STOCK].percentage

    top = service.top_holdings(stats.holdings, limit=5)

Architecture:
    valuation/
    ├── __init__.py       # This file - package exports
    ├── types.py          # Internal data classes
    ├── calculators.py    # Price selection, holding value, distributions
    └── service.py        # ValuationService (orchestrator)

Data Flow:
    Holding + PriceObservations → PriceSelector → SelectedPrice
    Holding.currency + ExchangeRateObservations → CurrencyResolver → RateResolution
    Holding + SelectedPrice + RateResolution → HoldingValueCalculator → HoldingValue
    All Above → HoldingValuation
    HoldingValuations → DistributionCalculator (×3) → PortfolioStats
"""

# Calculators (for testing / direct usage)
from folio.services.valuation.calculators import (
    PriceSelector,
    HoldingValueCalculator,
    DistributionCalculator,
)
# Main service
from folio.services.valuation.service import ValuationService
# Internal types
from folio.services.valuation.types import (
    HoldingValue,
    SelectedPrice,
    HoldingValuation,
    DistributionEntry,
    PortfolioStats,
)

__all__ = [
    # Main service
    "ValuationService",

    # Data types
    "HoldingValue",
    "SelectedPrice",
    "HoldingValuation",
    "DistributionEntry",
    "PortfolioStats",

    # Calculators (for testing)
    "PriceSelector",
    "HoldingValueCalculator",
    "DistributionCalculator",
]
