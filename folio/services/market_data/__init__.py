# folio/services/market_data/__init__.py
"""
Market data services package.

This package contains:
- Abstract interface for price/exchange-rate providers (base.py)
- Refresh orchestration producing observation snapshots (refresh.py)

Concrete providers (quote scrapers, crypto and FX APIs) subclass
PriceProvider and live with the application that deploys them.

Architecture:
    PriceProvider (ABC)
    └── get_price / get_exchange_rate implemented by subclasses
    └── fetch_price / fetch_exchange_rate add retry and validation

    PriceRefreshService
    └── Routes holdings to providers
    └── Synthesizes cash and manual observations
    └── Collects failures instead of raising
"""

from folio.services.market_data.base import PriceProvider
from folio.services.market_data.refresh import (
    PriceRefreshResult,
    PriceRefreshService,
    RateRefreshResult,
)

__all__ = [
    "PriceProvider",
    "PriceRefreshService",
    "PriceRefreshResult",
    "RateRefreshResult",
]
