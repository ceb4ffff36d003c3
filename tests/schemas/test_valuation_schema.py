# tests/schemas/test_valuation_schema.py
"""
Tests for valuation output schemas.

This module tests:
- PortfolioStatsResponse built from service output
- String category keys and camelCase serialization
"""

from decimal import Decimal

from folio.schemas import PortfolioStatsResponse
from tests.conftest import make_cash, make_holding


class TestPortfolioStatsResponse:
    """Tests for PortfolioStatsResponse.from_stats."""

    def test_from_stats(self, service, usd_twd_rates):
        holdings = [make_holding(quantity="20", cost_basis="288.74", current_price="283"), make_cash()]
        stats = service.calculate_stats(holdings, [], usd_twd_rates)

        response = PortfolioStatsResponse.from_stats(stats)

        assert response.base_currency == "TWD"
        assert response.total_value == stats.total_value
        assert set(response.distribution_by_type) == {
            "stock", "fund", "bond", "gold", "crypto", "cash", "commodity"
        }
        assert set(response.distribution_by_market) == {"US", "TW", "OTHER"}
        assert set(response.distribution_by_account) == {"etrade", "fubon"}
        assert len(response.holdings) == 2

    def test_holding_rows(self, service, usd_twd_rates):
        stats = service.calculate_stats([make_holding()], [], usd_twd_rates)

        [row] = PortfolioStatsResponse.from_stats(stats).holdings

        assert row.holding_id == "h1"
        assert row.price_provenance == "assumed"
        assert row.rate_method == "direct"
        assert row.exchange_rate == Decimal("30.31")
        assert row.type == "stock"

    def test_json_dump_uses_camel_case(self, service):
        stats = service.calculate_stats([make_cash()], [], [])

        body = PortfolioStatsResponse.from_stats(stats).model_dump(by_alias=True, mode="json")

        assert "totalGainLossPercent" in body
        assert "distributionByAccount" in body
        assert body["distributionByAccount"]["fubon"]["totalValue"] == "1000000.00"
        assert body["holdings"][0]["priceProvenance"] == "face_value"

    def test_warnings_carried(self, service):
        stats = service.calculate_stats([make_holding(currency="CHF")], [], [])

        response = PortfolioStatsResponse.from_stats(stats)

        assert len(response.warnings) == 2
