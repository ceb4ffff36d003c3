# folio/schemas/holdings.py
"""
Pydantic schemas for holdings and market observations.

These schemas accept the storage layer's camelCase payloads
(`accountId`, `costBasis`, `currentPrice`, ...) and build the domain
value objects in folio.models via `to_domain()`.

Validation layers:
- Field constraints: type, length, numeric limits
- Field validators: normalization (uppercase, trim)
- Domain objects: re-check invariants on construction

IMPORTANT: All financial values use Decimal for precision.
Never use float for money!
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from folio.models import (
    AssetType,
    ExchangeRateObservation,
    Holding,
    Market,
    PriceObservation,
    PriceSource,
)
from folio.validators import validate_currency, validate_symbol


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =============================================================================
# HOLDING
# =============================================================================

class HoldingIn(CamelModel):
    """A holding as stored by the UI/storage layer."""

    id: str = Field(..., min_length=1)
    account_id: str = Field(..., min_length=1, description="Owning account")
    symbol: str
    name: str = ""
    type: AssetType
    market: Market = Market.OTHER
    quantity: Decimal = Field(..., ge=0, description="Units held")
    cost_basis: Decimal = Field(..., ge=0, description="Per-unit cost in `currency`")
    currency: str
    current_price: Decimal | None = Field(
        default=None,
        description="Manually entered per-unit price; 0 or missing means none"
    )
    purchase_date: date | None = None
    last_updated: datetime | None = None

    @field_validator('symbol')
    @classmethod
    def normalize_symbol(cls, v: str) -> str:
        return validate_symbol(v)

    @field_validator('currency')
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        return validate_currency(v)

    @field_validator('purchase_date', 'last_updated', mode='before')
    @classmethod
    def empty_string_as_none(cls, v):
        """Stored payloads use "" for unset dates."""
        if v == "":
            return None
        return v

    def to_domain(self) -> Holding:
        return Holding(
            id=self.id,
            account_id=self.account_id,
            symbol=self.symbol,
            name=self.name,
            type=self.type,
            market=self.market,
            quantity=self.quantity,
            cost_basis=self.cost_basis,
            currency=self.currency,
            current_price=self.current_price,
            purchase_date=self.purchase_date,
            last_updated=self.last_updated,
        )


# =============================================================================
# OBSERVATIONS
# =============================================================================

class PriceObservationIn(CamelModel):
    """A quote as returned by a price source."""

    symbol: str
    price: Decimal
    currency: str
    timestamp: datetime | None = None
    change: Decimal = Decimal("0")
    change_percent: Decimal = Decimal("0")
    source: PriceSource = PriceSource.YAHOO

    @field_validator('symbol')
    @classmethod
    def normalize_symbol(cls, v: str) -> str:
        return validate_symbol(v)

    @field_validator('currency')
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        return validate_currency(v)

    def to_domain(self) -> PriceObservation:
        return PriceObservation(
            symbol=self.symbol,
            price=self.price,
            currency=self.currency,
            timestamp=self.timestamp,
            change=self.change,
            change_percent=self.change_percent,
            source=self.source,
        )


class ExchangeRateIn(CamelModel):
    """
    An exchange rate: 1 `from` = `rate` × `to`.

    Accepts the stored `from`/`to` keys as well as the Python names.
    Non-positive rates are accepted here and skipped by the resolver.
    """

    from_currency: str = Field(..., alias="from")
    to_currency: str = Field(..., alias="to")
    rate: Decimal
    timestamp: datetime | None = None

    @field_validator('from_currency', 'to_currency')
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        return validate_currency(v)

    def to_domain(self) -> ExchangeRateObservation:
        return ExchangeRateObservation(
            from_currency=self.from_currency,
            to_currency=self.to_currency,
            rate=self.rate,
            timestamp=self.timestamp,
        )
