# folio/models.py
"""
Domain model for holdings and market observations.

These are plain value objects. Persistence lives outside this package;
storage adapters build these objects (usually through folio.schemas) and
hand them to the services.
"""
import enum
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


# Closed sets: every distribution keyed by these lists all members
class AssetType(str, enum.Enum):
    STOCK = "stock"
    FUND = "fund"
    BOND = "bond"
    GOLD = "gold"
    CRYPTO = "crypto"
    CASH = "cash"
    COMMODITY = "commodity"


class Market(str, enum.Enum):
    US = "US"
    TW = "TW"
    OTHER = "OTHER"


class PriceSource(str, enum.Enum):
    """Where a PriceObservation came from."""
    YAHOO = "yahoo"
    EXCHANGERATE = "exchangerate"
    COINGECKO = "coingecko"
    TWSE = "twse"

    # Synthesized by the refresh service, not fetched
    MANUAL = "manual"
    STATIC = "static"


class PriceProvenance(str, enum.Enum):
    """
    Which rule supplied the price used to value a holding.

    MANUAL and FETCHED are real quotes. ASSUMED means no quote existed and
    the cost basis was used (break-even assumption). FACE_VALUE is the fixed
    unit price of cash.
    """
    MANUAL = "manual"
    FETCHED = "fetched"
    ASSUMED = "assumed"
    FACE_VALUE = "face_value"


def _to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _normalize_code(value, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field_name} is required")
    return value.strip().upper()


@dataclass(frozen=True)
class Holding:
    """
    A single position inside an account.

    Attributes:
        id: Stable identifier
        account_id: Owning account (open set, user-configurable)
        symbol: Ticker, currency code or other display identifier
        name: Product name
        type: Asset type; decides the valuation rule
        market: Reporting dimension only
        quantity: Units held (>= 0)
        cost_basis: Per-unit cost in `currency` (>= 0)
        currency: Currency the holding is priced in
        current_price: Manually entered per-unit price, if any
        purchase_date: Informational
        last_updated: When current_price was last set
    """

    id: str
    account_id: str
    symbol: str
    name: str
    type: AssetType
    market: Market
    quantity: Decimal
    cost_basis: Decimal
    currency: str
    current_price: Decimal | None = None
    purchase_date: date | None = None
    last_updated: datetime | None = None

    def __post_init__(self) -> None:
        """Normalize and validate fields after initialization."""
        object.__setattr__(self, "type", AssetType(self.type))
        object.__setattr__(self, "market", Market(self.market))
        object.__setattr__(self, "quantity", _to_decimal(self.quantity))
        object.__setattr__(self, "cost_basis", _to_decimal(self.cost_basis))
        object.__setattr__(self, "currency", _normalize_code(self.currency, "currency"))
        if self.current_price is not None:
            object.__setattr__(self, "current_price", _to_decimal(self.current_price))

        if not self.id:
            raise ValueError("id is required")
        if self.quantity < 0:
            raise ValueError(f"quantity must be non-negative, got {self.quantity}")
        if self.cost_basis < 0:
            raise ValueError(f"cost_basis must be non-negative, got {self.cost_basis}")

    @property
    def is_cash(self) -> bool:
        return self.type == AssetType.CASH

    @property
    def has_manual_price(self) -> bool:
        """True if a usable manual price overrides fetched quotes."""
        return self.current_price is not None and self.current_price > 0


@dataclass(frozen=True)
class PriceObservation:
    """
    A fetched (or synthesized) quote for one symbol.

    Attributes:
        symbol: Symbol the quote belongs to
        price: Per-unit price in `currency`
        currency: Quote currency
        timestamp: When the quote was taken
        change: Absolute change since previous close
        change_percent: Percentage change since previous close
        source: Provider tag
    """

    symbol: str
    price: Decimal
    currency: str
    timestamp: datetime | None = None
    change: Decimal = Decimal("0")
    change_percent: Decimal = Decimal("0")
    source: PriceSource = PriceSource.YAHOO

    def __post_init__(self) -> None:
        object.__setattr__(self, "currency", _normalize_code(self.currency, "currency"))
        object.__setattr__(self, "price", _to_decimal(self.price))
        object.__setattr__(self, "change", _to_decimal(self.change))
        object.__setattr__(self, "change_percent", _to_decimal(self.change_percent))
        object.__setattr__(self, "source", PriceSource(self.source))


@dataclass(frozen=True)
class ExchangeRateObservation:
    """
    One observed exchange rate: 1 from_currency = rate × to_currency.

    The resolver treats the set it is given as authoritative; staleness is
    the caller's concern.
    """

    from_currency: str
    to_currency: str
    rate: Decimal
    timestamp: datetime | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "from_currency", _normalize_code(self.from_currency, "from_currency"))
        object.__setattr__(self, "to_currency", _normalize_code(self.to_currency, "to_currency"))
        object.__setattr__(self, "rate", _to_decimal(self.rate))
