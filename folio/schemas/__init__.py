# folio/schemas/__init__.py
"""
Pydantic schemas for input validation and output serialization.

Usage:
    from folio.schemas import HoldingIn, PortfolioStatsResponse

    holdings = [HoldingIn.model_validate(raw).to_domain() for raw in payload]
    body = PortfolioStatsResponse.from_stats(stats).model_dump(by_alias=True, mode="json")
"""

from folio.schemas.holdings import (
    CamelModel,
    HoldingIn,
    PriceObservationIn,
    ExchangeRateIn,
)
from folio.schemas.valuation import (
    DistributionEntryResponse,
    HoldingValuationResponse,
    PortfolioStatsResponse,
)

__all__ = [
    "CamelModel",
    "HoldingIn",
    "PriceObservationIn",
    "ExchangeRateIn",
    "DistributionEntryResponse",
    "HoldingValuationResponse",
    "PortfolioStatsResponse",
]
