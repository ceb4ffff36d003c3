# folio/services/__init__.py
"""
Service layer for portfolio valuation.

Services:
- Perform no persistence and hold no shared mutable state
- Receive holdings and observation snapshots as arguments
- Are easily testable via dependency injection

Usage:
    from folio.services import ValuationService, CurrencyResolver
    from folio.services import PriceRefreshService, select_exchange_rates
    from folio.services import MarketDataError, FXRateNotFoundError

Architecture:
    services/
    ├── __init__.py              # This file - main exports
    ├── exceptions.py            # Domain exceptions
    ├── constants.py             # Rounding quanta and defaults
    ├── protocols.py             # Service interfaces (Protocol classes)
    ├── currency_resolver.py     # Exchange-rate resolution
    ├── snapshots.py             # Daily snapshots and rate selection
    ├── market_data/             # Provider interface and refresh service
    │   ├── base.py
    │   └── refresh.py
    └── valuation/               # Valuation engine
        ├── service.py
        ├── types.py
        └── calculators.py
"""

# Currency resolution
from folio.services.currency_resolver import (
    CurrencyResolver,
    RateMethod,
    RateResolution,
    resolve_rate,
)
# Exceptions
from folio.services.exceptions import (
    ServiceError,
    MarketDataError,
    ProviderUnavailableError,
    SymbolNotFoundError,
    RateLimitError,
    FXRateError,
    FXRateNotFoundError,
    FXConversionError,
)
# Market data
from folio.services.market_data import (
    PriceProvider,
    PriceRefreshService,
    PriceRefreshResult,
    RateRefreshResult,
)
# Snapshots
from folio.services.snapshots import (
    PortfolioSnapshot,
    RateSelection,
    RateSource,
    build_snapshot,
    select_exchange_rates,
    snapshot_observations,
)
# Valuation
from folio.services.valuation import (
    ValuationService,
    HoldingValuation,
    DistributionEntry,
    PortfolioStats,
)

__all__ = [
    # Currency resolution
    "CurrencyResolver",
    "RateMethod",
    "RateResolution",
    "resolve_rate",
    # Exceptions
    "ServiceError",
    "MarketDataError",
    "ProviderUnavailableError",
    "SymbolNotFoundError",
    "RateLimitError",
    "FXRateError",
    "FXRateNotFoundError",
    "FXConversionError",
    # Market data
    "PriceProvider",
    "PriceRefreshService",
    "PriceRefreshResult",
    "RateRefreshResult",
    # Snapshots
    "PortfolioSnapshot",
    "RateSelection",
    "RateSource",
    "build_snapshot",
    "select_exchange_rates",
    "snapshot_observations",
    # Valuation
    "ValuationService",
    "HoldingValuation",
    "DistributionEntry",
    "PortfolioStats",
]
