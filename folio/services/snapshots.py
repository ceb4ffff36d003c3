# folio/services/snapshots.py
"""
Daily portfolio snapshots and exchange-rate selection.

A snapshot records the day's totals together with the exchange rates used
to compute them. Re-valuing a past day with its pinned rates reproduces
the reported totals even after live rates have moved.

Which rate set feeds the valuation engine is decided here, never inside
the engine:

    1. PINNED         snapshot for `today` that carries rates
    2. LIVE           non-empty live observation set
    3. LATEST_PINNED  most recent snapshot that carries rates
    4. NONE           empty set (resolver degrades to 1)
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from types import MappingProxyType
from typing import Iterable, Mapping

from folio.models import ExchangeRateObservation
from folio.services.currency_resolver import CurrencyResolver
from folio.services.valuation.types import PortfolioStats

logger = logging.getLogger(__name__)


class RateSource(str, enum.Enum):
    PINNED = "pinned"
    LIVE = "live"
    LATEST_PINNED = "latest_pinned"
    NONE = "none"


@dataclass(frozen=True)
class PortfolioSnapshot:
    """
    Totals and pinned exchange rates for one day.

    Attributes:
        snapshot_date: Day the snapshot describes
        base_currency: Currency of the totals
        total_value, total_cost, total_gain_loss: Portfolio totals
        exchange_rates: currency → rate into base_currency
    """

    snapshot_date: date
    base_currency: str
    total_value: Decimal
    total_cost: Decimal
    total_gain_loss: Decimal
    exchange_rates: Mapping[str, Decimal] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_currency", self.base_currency.strip().upper())
        object.__setattr__(
            self,
            "exchange_rates",
            MappingProxyType({k.strip().upper(): v for k, v in self.exchange_rates.items()}),
        )

    @property
    def has_rates(self) -> bool:
        return bool(self.exchange_rates)


@dataclass(frozen=True)
class RateSelection:
    """Observations chosen for a valuation run and where they came from."""

    observations: tuple[ExchangeRateObservation, ...]
    source: RateSource
    snapshot_date: date | None = None


def build_snapshot(
        stats: PortfolioStats,
        rates: Iterable[ExchangeRateObservation],
        snapshot_date: date,
        resolver: CurrencyResolver | None = None,
) -> PortfolioSnapshot:
    """
    Pin the day's totals and the rates that produced them.

    A rate is recorded for every non-base currency held. Currencies the
    resolver could not resolve are left out so a later re-valuation
    degrades the same way instead of pinning a fake 1.

    Args:
        stats: Statistics computed from `rates`
        rates: Observation set used for `stats`
        snapshot_date: Day being recorded
        resolver: Resolver used to derive currency → base rates

    Returns:
        PortfolioSnapshot
    """
    resolver = resolver or CurrencyResolver()
    observations = tuple(rates)
    base = stats.base_currency

    currencies = dict.fromkeys(
        v.holding.currency for v in stats.holdings if v.holding.currency != base
    )

    pinned: dict[str, Decimal] = {}
    for currency in currencies:
        resolution = resolver.resolve(currency, base, observations)
        if resolution.is_resolved:
            pinned[currency] = resolution.rate

    logger.info(
        f"Built snapshot for {snapshot_date}: value={stats.total_value} {base}, "
        f"{len(pinned)} pinned rates"
    )

    return PortfolioSnapshot(
        snapshot_date=snapshot_date,
        base_currency=base,
        total_value=stats.total_value,
        total_cost=stats.total_cost,
        total_gain_loss=stats.total_gain_loss,
        exchange_rates=pinned,
    )


def snapshot_observations(snapshot: PortfolioSnapshot) -> list[ExchangeRateObservation]:
    """Convert a snapshot's pinned rates into (currency → base) observations."""
    return [
        ExchangeRateObservation(
            from_currency=currency,
            to_currency=snapshot.base_currency,
            rate=rate,
        )
        for currency, rate in snapshot.exchange_rates.items()
    ]


def select_exchange_rates(
        live_rates: Iterable[ExchangeRateObservation],
        snapshots: Iterable[PortfolioSnapshot],
        today: date,
) -> RateSelection:
    """
    Choose the rate set to value with.

    Args:
        live_rates: Latest fetched observations
        snapshots: Stored snapshots, any order
        today: Day being valued

    Returns:
        RateSelection with the observations and their source
    """
    live = tuple(live_rates)
    with_rates = [s for s in snapshots if s.has_rates]

    for snapshot in with_rates:
        if snapshot.snapshot_date == today:
            logger.debug(f"Using pinned rates from {today}")
            return RateSelection(
                tuple(snapshot_observations(snapshot)),
                RateSource.PINNED,
                snapshot.snapshot_date,
            )

    if live:
        return RateSelection(live, RateSource.LIVE)

    if with_rates:
        latest = max(with_rates, key=lambda s: s.snapshot_date)
        logger.warning(
            f"No live exchange rates, using rates pinned on {latest.snapshot_date}"
        )
        return RateSelection(
            tuple(snapshot_observations(latest)),
            RateSource.LATEST_PINNED,
            latest.snapshot_date,
        )

    logger.warning("No exchange rates available, conversions will use 1")
    return RateSelection((), RateSource.NONE)
