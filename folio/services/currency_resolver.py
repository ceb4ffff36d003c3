# folio/services/currency_resolver.py
"""
Currency Resolver: conversion factors from a snapshot of rate observations.

=============================================================================
RATE CONVENTION
=============================================================================

    ExchangeRateObservation(from_currency="USD", to_currency="TWD", rate=30.31)

    Meaning: 1 USD = 30.31 TWD

    To convert USD → TWD:  TWD_amount = USD_amount × rate

=============================================================================
RESOLUTION ORDER (first match wins)
=============================================================================

    1. IDENTITY      from == to                     → 1
    2. DIRECT        (from, to) observed            → rate
    3. INVERSE       (to, from) observed            → 1 / rate
    4. TRIANGULATED  (PIVOT, from) and (PIVOT, to)  → rate(PIVOT,to) / rate(PIVOT,from)
    5. UNRESOLVED    nothing usable                 → 1, plus a WARNING log

The resolver never raises. An unresolved pair converts as a no-op, which
can misstate value; the warning is the operator's signal.

Observations with a non-positive rate are skipped. There is no caching:
observation sets are small and every call scans them afresh, so a caller
can swap in a new snapshot at any time.

Usage:
    from folio.services.currency_resolver import CurrencyResolver, resolve_rate

    resolver = CurrencyResolver()
    resolution = resolver.resolve("USD", "TWD", observations)
    value_twd = value_usd * resolution.rate

    # Or just the number
    rate = resolve_rate("USD", "TWD", observations)
"""

import enum
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from folio.config import settings
from folio.models import ExchangeRateObservation
from folio.services.constants import IDENTITY_RATE
from folio.utils.fx_conversion import cross_rate, invert_rate

logger = logging.getLogger(__name__)


class RateMethod(str, enum.Enum):
    """Which resolution rule produced a rate."""
    IDENTITY = "identity"
    DIRECT = "direct"
    INVERSE = "inverse"
    TRIANGULATED = "triangulated"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class RateResolution:
    """Result of a rate lookup."""

    from_currency: str
    to_currency: str
    rate: Decimal
    method: RateMethod

    @property
    def is_resolved(self) -> bool:
        """False if the identity fallback was used for a real conversion."""
        return self.method != RateMethod.UNRESOLVED


class CurrencyResolver:
    """
    Resolves conversion factors between currencies.

    Attributes:
        pivot_currency: Currency used for triangulation

    Example:
        resolver = CurrencyResolver(pivot_currency="USD")
        observations = [
            ExchangeRateObservation("USD", "TWD", Decimal("30")),
            ExchangeRateObservation("USD", "JPY", Decimal("150")),
        ]
        resolver.resolve_rate("JPY", "TWD", observations)  # Decimal("0.2")
    """

    def __init__(self, pivot_currency: str | None = None) -> None:
        self.pivot_currency = (pivot_currency or settings.pivot_currency).strip().upper()

    def resolve(
            self,
            from_currency: str,
            to_currency: str,
            observations: Iterable[ExchangeRateObservation],
    ) -> RateResolution:
        """
        Resolve the factor converting from_currency amounts into to_currency.

        Args:
            from_currency: Currency of the amount being converted
            to_currency: Target currency
            observations: Current snapshot of observed rates

        Returns:
            RateResolution with the rate and the rule that produced it
        """
        source = from_currency.strip().upper()
        target = to_currency.strip().upper()

        if source == target:
            return RateResolution(source, target, IDENTITY_RATE, RateMethod.IDENTITY)

        usable = [obs for obs in observations if obs.rate > 0]

        direct = self._find(usable, source, target)
        if direct is not None:
            return RateResolution(source, target, direct.rate, RateMethod.DIRECT)

        inverse = self._find(usable, target, source)
        if inverse is not None:
            return RateResolution(
                source, target, invert_rate(inverse.rate), RateMethod.INVERSE
            )

        pivot = self.pivot_currency
        pivot_to_source = self._find(usable, pivot, source)
        pivot_to_target = self._find(usable, pivot, target)
        if pivot_to_source is not None and pivot_to_target is not None:
            rate = cross_rate(pivot_to_source.rate, pivot_to_target.rate)
            logger.debug(
                f"Triangulated {source}/{target} via {pivot}: "
                f"{pivot_to_target.rate} / {pivot_to_source.rate} = {rate}"
            )
            return RateResolution(source, target, rate, RateMethod.TRIANGULATED)

        logger.warning(
            f"No exchange rate for {source}/{target} "
            f"(checked direct, inverse and {pivot} triangulation), using 1",
            extra={"from_currency": source, "to_currency": target},
        )
        return RateResolution(source, target, IDENTITY_RATE, RateMethod.UNRESOLVED)

    def resolve_rate(
            self,
            from_currency: str,
            to_currency: str,
            observations: Iterable[ExchangeRateObservation],
    ) -> Decimal:
        """Resolve and return only the conversion factor."""
        return self.resolve(from_currency, to_currency, observations).rate

    @staticmethod
    def _find(
            observations: list[ExchangeRateObservation],
            from_currency: str,
            to_currency: str,
    ) -> ExchangeRateObservation | None:
        for obs in observations:
            if obs.from_currency == from_currency and obs.to_currency == to_currency:
                return obs
        return None


def resolve_rate(
        from_currency: str,
        to_currency: str,
        observations: Iterable[ExchangeRateObservation],
        pivot_currency: str | None = None,
) -> Decimal:
    """
    Module-level shortcut for CurrencyResolver(pivot_currency).resolve_rate().

    Returns 1 for identical or unresolvable pairs; never raises.
    """
    return CurrencyResolver(pivot_currency).resolve_rate(
        from_currency, to_currency, observations
    )
