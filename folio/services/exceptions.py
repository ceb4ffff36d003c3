# folio/services/exceptions.py
"""
Service layer exceptions.

The valuation engine itself never raises for missing data: it degrades to
safe defaults. These exceptions exist at the edges, where market data is
fetched, and are caught by the refresh service which turns them into a
"used fallback" flag.

Exception Hierarchy:
    ServiceError (base)
    ├── MarketDataError
    │   ├── ProviderUnavailableError
    │   ├── SymbolNotFoundError
    │   └── RateLimitError
    └── FXRateError
        ├── FXRateNotFoundError
        └── FXConversionError
"""


class ServiceError(Exception):
    """
    Base exception for all service layer errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


# =============================================================================
# MARKET DATA PROVIDER ERRORS
# =============================================================================


class MarketDataError(ServiceError):
    """
    Base exception for market data provider failures.

    Attributes:
        provider: Name of the provider that failed
    """

    def __init__(self, message: str, provider: str | None = None) -> None:
        self.provider = provider
        super().__init__(message)


class ProviderUnavailableError(MarketDataError):
    """
    Raised when a market data provider is temporarily unavailable.

    Examples:
    - Network timeout
    - Server errors (500, 502, 503)
    - Scraped page layout changed

    This is a retryable error.
    """

    def __init__(self, provider: str, reason: str) -> None:
        message = f"Provider '{provider}' is unavailable: {reason}"
        super().__init__(message, provider=provider)
        self.reason = reason


class SymbolNotFoundError(MarketDataError):
    """
    Raised when a symbol is not known to the provider.

    This is NOT a retryable error.
    """

    def __init__(self, symbol: str, provider: str) -> None:
        message = f"Symbol '{symbol}' not found by {provider}"
        super().__init__(message, provider=provider)
        self.symbol = symbol


class RateLimitError(MarketDataError):
    """
    Raised when the provider's rate limit has been exceeded.

    This is a retryable error (with backoff).

    Attributes:
        retry_after: Seconds to wait before retrying (if provided by API)
    """

    def __init__(self, provider: str, retry_after: int | None = None) -> None:
        message = f"Rate limit exceeded for provider '{provider}'"
        if retry_after:
            message += f" (retry after {retry_after}s)"
        super().__init__(message, provider=provider)
        self.retry_after = retry_after


# =============================================================================
# FX RATE ERRORS
# =============================================================================


class FXRateError(ServiceError):
    """
    Base exception for FX rate errors.

    Attributes:
        from_currency: The source currency code
        to_currency: The target currency code
    """

    def __init__(
            self,
            message: str,
            from_currency: str | None = None,
            to_currency: str | None = None,
    ) -> None:
        self.from_currency = from_currency
        self.to_currency = to_currency
        super().__init__(message)


class FXRateNotFoundError(FXRateError):
    """Raised by a provider when it has no rate for the requested pair."""

    def __init__(self, from_currency: str, to_currency: str, provider: str | None = None) -> None:
        self.provider = provider
        msg = f"No FX rate found for {from_currency}/{to_currency}"
        if provider:
            msg += f" from {provider}"
        super().__init__(msg, from_currency=from_currency, to_currency=to_currency)


class FXConversionError(FXRateError):
    """
    Raised when a provider returns a rate that cannot be used.

    Examples:
    - Zero or negative rate

    Attributes:
        reason: Specific reason for conversion failure
    """

    def __init__(
            self,
            reason: str,
            from_currency: str | None = None,
            to_currency: str | None = None,
    ) -> None:
        self.reason = reason
        super().__init__(
            f"FX conversion error: {reason}",
            from_currency=from_currency,
            to_currency=to_currency,
        )


__all__ = [
    # Base
    "ServiceError",
    # Market Data
    "MarketDataError",
    "ProviderUnavailableError",
    "SymbolNotFoundError",
    "RateLimitError",
    # FX Rate
    "FXRateError",
    "FXRateNotFoundError",
    "FXConversionError",
]
