# folio/services/protocols.py
"""
Protocol interfaces for service dependency injection.

Using typing.Protocol enables structural subtyping:
- Existing classes satisfy protocols without modification
- Test doubles work without explicit inheritance
"""

from __future__ import annotations

from typing import Iterable, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from folio.models import ExchangeRateObservation
    from folio.services.currency_resolver import RateResolution


class CurrencyResolverProtocol(Protocol):
    """Interface required by ValuationService."""

    def resolve(
        self,
        from_currency: str,
        to_currency: str,
        observations: Iterable[ExchangeRateObservation],
    ) -> RateResolution:
        ...
