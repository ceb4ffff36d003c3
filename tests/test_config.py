# tests/test_config.py
"""
Tests for application settings.
"""

import pytest
from pydantic import ValidationError

from folio.config import Settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("BASE_CURRENCY", "PIVOT_CURRENCY", "ENVIRONMENT", "LOG_FORMAT"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.base_currency == "TWD"
        assert settings.pivot_currency == "USD"
        assert settings.log_format is None
        assert settings.effective_log_format == "text"
        assert settings.price_refresh_interval_seconds == 300

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("BASE_CURRENCY", "eur")
        monkeypatch.setenv("ENVIRONMENT", "production")

        settings = Settings(_env_file=None)

        assert settings.base_currency == "EUR"
        assert settings.is_production

    def test_currency_normalized(self):
        settings = Settings(_env_file=None, pivot_currency=" usd ")

        assert settings.pivot_currency == "USD"

    @pytest.mark.parametrize("value", ["US", "DOLLAR", "12A"])
    def test_invalid_currency_rejected(self, value):
        with pytest.raises(ValidationError, match="Invalid currency"):
            Settings(_env_file=None, base_currency=value)

    def test_refresh_interval_bounds(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, price_refresh_interval_seconds=5)

    def test_invalid_log_format_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_format="xml")


class TestEffectiveLogFormat:

    def test_production_defaults_to_json(self, monkeypatch):
        monkeypatch.delenv("LOG_FORMAT", raising=False)

        settings = Settings(_env_file=None, environment="production")

        assert settings.effective_log_format == "json"

    def test_explicit_format_wins(self):
        settings = Settings(_env_file=None, environment="production", log_format="text")

        assert settings.effective_log_format == "text"
