# folio/services/market_data/base.py
"""
Abstract interface for price and exchange-rate providers.

This module defines the contract that all market data providers must follow.
Using an abstract base class allows for:
- Routing asset types to different sources (stock quotes, crypto, FX)
- Mock implementations for testing
- Consistent retry behavior across all providers

Design Principles:
- Interface Segregation: Only essential methods in the base class
- Dependency Inversion: The refresh service depends on this abstraction
- DRY: Common retry logic implemented once in base class
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, TypeVar

from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from folio.models import ExchangeRateObservation, Market, PriceObservation
from folio.services.exceptions import (
    FXConversionError,
    FXRateNotFoundError,
    MarketDataError,
    ProviderUnavailableError,
    RateLimitError,
)

logger = logging.getLogger(__name__)

T = TypeVar('T')


class PriceProvider(ABC):
    """
    Abstract base class for market data providers.

    Retry Behavior:
        `_execute_with_retry` implements exponential backoff. Subclasses
        can tune it through class attributes:

        - MAX_RETRY_ATTEMPTS: Total attempts (default: 3)
        - RETRY_MIN_WAIT: Minimum wait in seconds (default: 1)
        - RETRY_MAX_WAIT: Maximum wait in seconds (default: 10)
        - RETRY_MULTIPLIER: Exponential multiplier (default: 1)

    Retryable Exceptions:
        - ProviderUnavailableError: Network issues, timeouts, server errors
        - RateLimitError: API rate limit exceeded

    Non-Retryable Exceptions:
        - SymbolNotFoundError, FXRateNotFoundError: Permanent failures
    """

    MAX_RETRY_ATTEMPTS: int = 3
    RETRY_MIN_WAIT: int = 1
    RETRY_MAX_WAIT: int = 10
    RETRY_MULTIPLIER: int = 1

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Unique identifier for this provider, used in logs and errors.

        Returns:
            Provider name (e.g., "yahoo", "twse", "coingecko")
        """
        pass

    @abstractmethod
    def get_price(self, symbol: str, market: Market) -> PriceObservation:
        """
        Fetch the latest quote for a symbol.

        Args:
            symbol: Trading symbol (e.g., "AAPL", "2330")
            market: Market the symbol trades in

        Returns:
            PriceObservation with a positive price

        Raises:
            SymbolNotFoundError: Symbol not known to the provider
            ProviderUnavailableError: Network or API error (retryable)
            RateLimitError: Rate limit exceeded (retryable)
        """
        pass

    def get_exchange_rate(
            self,
            from_currency: str,
            to_currency: str,
    ) -> ExchangeRateObservation:
        """
        Fetch the latest rate for a currency pair.

        Default implementation: this provider does not quote FX.

        Raises:
            FXRateNotFoundError: Pair not available
            ProviderUnavailableError: Network or API error (retryable)
            RateLimitError: Rate limit exceeded (retryable)
        """
        raise FXRateNotFoundError(from_currency, to_currency, provider=self.name)

    # =========================================================================
    # VALIDATED FETCH (used by PriceRefreshService)
    # =========================================================================

    def fetch_price(self, symbol: str, market: Market) -> PriceObservation:
        """
        get_price() with retry and a positive-price check.

        Raises:
            MarketDataError: Any provider failure, or a non-positive price
        """
        observation = self._execute_with_retry(self.get_price, symbol, market)
        if observation.price <= 0:
            raise MarketDataError(
                f"Provider '{self.name}' returned non-positive price "
                f"{observation.price} for {symbol}",
                provider=self.name,
            )
        return observation

    def fetch_exchange_rate(
            self,
            from_currency: str,
            to_currency: str,
    ) -> ExchangeRateObservation:
        """
        get_exchange_rate() with retry and a positive-rate check.

        Raises:
            FXRateError: Pair not available or non-positive rate
            MarketDataError: Provider failure after retries
        """
        observation = self._execute_with_retry(
            self.get_exchange_rate, from_currency, to_currency
        )
        if observation.rate <= 0:
            raise FXConversionError(
                f"non-positive rate {observation.rate} from {self.name}",
                from_currency,
                to_currency,
            )
        return observation

    # =========================================================================
    # RETRY HELPER METHOD
    # =========================================================================

    def _execute_with_retry(
            self,
            func: Callable[..., T],
            *args: Any,
            **kwargs: Any,
    ) -> T:
        """
        Execute a function with retry logic for transient failures.

        Args:
            func: Function to execute
            *args: Positional arguments for func
            **kwargs: Keyword arguments for func

        Returns:
            Return value of func

        Raises:
            The last exception if all retries fail
        """

        @retry(
            stop=stop_after_attempt(self.MAX_RETRY_ATTEMPTS),
            wait=wait_exponential(
                multiplier=self.RETRY_MULTIPLIER,
                min=self.RETRY_MIN_WAIT,
                max=self.RETRY_MAX_WAIT,
            ),
            retry=retry_if_exception_type((ProviderUnavailableError, RateLimitError)),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        def _inner() -> T:
            return func(*args, **kwargs)

        return _inner()

    def is_available(self) -> bool:
        """
        Check if the provider is currently available.

        Default implementation returns True. Subclasses can override
        to implement health checks.
        """
        return True
