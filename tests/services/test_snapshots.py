# tests/services/test_snapshots.py
"""
Tests for daily snapshots and exchange-rate selection.

Test Coverage:
- build_snapshot pins a rate for every non-base currency held
- Re-valuing with pinned rates reproduces the snapshot totals
- select_exchange_rates priority: same-day pinned → live → latest pinned → none
"""

from datetime import date
from decimal import Decimal

import pytest

from folio.services.snapshots import (
    PortfolioSnapshot,
    RateSource,
    build_snapshot,
    select_exchange_rates,
    snapshot_observations,
)
from tests.conftest import make_cash, make_holding, make_rate


TODAY = date(2025, 6, 2)
YESTERDAY = date(2025, 6, 1)


def _snapshot(day: date, rates: dict[str, str]) -> PortfolioSnapshot:
    return PortfolioSnapshot(
        snapshot_date=day,
        base_currency="TWD",
        total_value=Decimal("100"),
        total_cost=Decimal("90"),
        total_gain_loss=Decimal("10"),
        exchange_rates={k: Decimal(v) for k, v in rates.items()},
    )


class TestBuildSnapshot:

    def test_pins_rates_for_held_currencies(self, service, resolver, pivot_rates):
        holdings = [
            make_holding(id="a", currency="USD"),
            make_holding(id="b", symbol="7203", currency="JPY"),
            make_cash(),
        ]
        stats = service.calculate_stats(holdings, [], pivot_rates)

        snapshot = build_snapshot(stats, pivot_rates, TODAY, resolver=resolver)

        assert dict(snapshot.exchange_rates) == {
            "USD": Decimal("30"),
            "JPY": Decimal("0.2"),
        }
        assert snapshot.total_value == stats.total_value
        assert snapshot.snapshot_date == TODAY

    def test_unresolved_currency_not_pinned(self, service, resolver):
        stats = service.calculate_stats([make_holding(currency="CHF")], [], [])

        snapshot = build_snapshot(stats, [], TODAY, resolver=resolver)

        assert dict(snapshot.exchange_rates) == {}
        assert not snapshot.has_rates

    def test_pinned_rates_reproduce_totals(self, service, resolver):
        holdings = [make_holding(current_price="150"), make_cash()]
        live = [make_rate("USD", "TWD", "30.31")]
        stats = service.calculate_stats(holdings, [], live)
        snapshot = build_snapshot(stats, live, TODAY, resolver=resolver)

        # Live rates move; re-valuing today with pinned rates is unchanged
        selection = select_exchange_rates([make_rate("USD", "TWD", "33")], [snapshot], TODAY)
        revalued = service.calculate_stats(holdings, [], selection.observations)

        assert selection.source == RateSource.PINNED
        assert revalued.total_value == stats.total_value


class TestSnapshotObservations:

    def test_converts_to_base_observations(self):
        snapshot = _snapshot(TODAY, {"usd": "30.5"})

        [observation] = snapshot_observations(snapshot)

        assert observation.from_currency == "USD"
        assert observation.to_currency == "TWD"
        assert observation.rate == Decimal("30.5")

    def test_snapshot_rates_are_read_only(self):
        snapshot = _snapshot(TODAY, {"USD": "30.5"})

        with pytest.raises(TypeError):
            snapshot.exchange_rates["EUR"] = Decimal("34")


class TestSelectExchangeRates:

    def test_same_day_pinned_wins_over_live(self):
        live = [make_rate("USD", "TWD", "31")]

        selection = select_exchange_rates(live, [_snapshot(TODAY, {"USD": "30"})], TODAY)

        assert selection.source == RateSource.PINNED
        assert selection.snapshot_date == TODAY
        assert selection.observations[0].rate == Decimal("30")

    def test_live_used_without_same_day_snapshot(self):
        live = [make_rate("USD", "TWD", "31")]

        selection = select_exchange_rates(live, [_snapshot(YESTERDAY, {"USD": "30"})], TODAY)

        assert selection.source == RateSource.LIVE
        assert selection.observations == tuple(live)
        assert selection.snapshot_date is None

    def test_same_day_snapshot_without_rates_is_skipped(self):
        live = [make_rate("USD", "TWD", "31")]

        selection = select_exchange_rates(live, [_snapshot(TODAY, {})], TODAY)

        assert selection.source == RateSource.LIVE

    def test_latest_pinned_when_no_live(self):
        snapshots = [
            _snapshot(date(2025, 5, 1), {"USD": "29"}),
            _snapshot(YESTERDAY, {"USD": "30"}),
            _snapshot(date(2025, 5, 15), {"USD": "29.5"}),
        ]

        selection = select_exchange_rates([], snapshots, TODAY)

        assert selection.source == RateSource.LATEST_PINNED
        assert selection.snapshot_date == YESTERDAY
        assert selection.observations[0].rate == Decimal("30")

    def test_nothing_available(self):
        selection = select_exchange_rates([], [_snapshot(YESTERDAY, {})], TODAY)

        assert selection.source == RateSource.NONE
        assert selection.observations == ()

    def test_selection_feeds_resolver(self, resolver):
        selection = select_exchange_rates([], [_snapshot(YESTERDAY, {"JPY": "0.21"})], TODAY)

        assert resolver.resolve_rate("JPY", "TWD", selection.observations) == Decimal("0.21")
