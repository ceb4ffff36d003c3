# folio/config.py
"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables with validation:
- ENVIRONMENT: Runtime mode (development, test, production)
- BASE_CURRENCY: Currency every aggregate is normalized into
- PIVOT_CURRENCY: Intermediate currency used for triangulation
- LOG_LEVEL / LOG_FORMAT: Logging setup (see folio.utils.logging)

Configuration is validated on import. Invalid configuration
will raise a ValueError with a descriptive message.

Usage:
    from folio.config import settings

    base = settings.base_currency
"""
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from folio.validators import validate_currency


# .env lives in the project root (parent of the package directory)
_PACKAGE_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _PACKAGE_DIR.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Environment variables:
        - ENVIRONMENT: Runtime environment (development, test, production)
        - LOG_LEVEL: Logging level (default: "INFO")
        - LOG_FORMAT: "text" or "json" (default: json in production, else text)
        - BASE_CURRENCY: Reporting currency (default: "TWD")
        - PIVOT_CURRENCY: Triangulation currency (default: "USD")
        - PRICE_REFRESH_INTERVAL_SECONDS: Refresh cadence for price and
          rate snapshots (default: 300)
    """

    environment: Literal["development", "test", "production"] = Field(
        default="development",
        description="Runtime environment (development, test, production)"
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_format: Literal["text", "json"] | None = Field(
        default=None,
        description="Log output format (unset: json in production, else text)"
    )

    # =========================================================================
    # VALUATION
    # =========================================================================
    base_currency: str = Field(
        default="TWD",
        description="Currency all portfolio statistics are normalized into"
    )
    pivot_currency: str = Field(
        default="USD",
        description="Intermediate currency for rate triangulation"
    )

    # =========================================================================
    # MARKET DATA
    # =========================================================================
    price_refresh_interval_seconds: int = Field(
        default=300,
        ge=30,
        le=86400,
        description="Seconds between scheduled price/rate refreshes"
    )

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("base_currency", "pivot_currency", mode="before")
    @classmethod
    def normalize_currency(cls, value: str) -> str:
        return validate_currency(str(value))

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def effective_log_format(self) -> str:
        """LOG_FORMAT if set, otherwise json in production and text elsewhere."""
        if self.log_format:
            return self.log_format
        return "json" if self.is_production else "text"


# Create single instance
settings = Settings()
