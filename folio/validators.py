# folio/validators.py
"""
Reusable validation functions shared by settings and Pydantic schemas.

This module provides:
- Currency code validation
- Symbol normalization

These validators ensure consistent input handling across configuration
and all schemas. This module imports nothing from folio.
"""

import re

# =============================================================================
# CONSTANTS
# =============================================================================

# Currency: 3 letters (ISO 4217 style)
CURRENCY_PATTERN = re.compile(r'^[A-Z]{3}$')

# Symbols cover tickers ("AAPL", "2330"), currency codes and product names
SYMBOL_MAX_LENGTH = 32


# =============================================================================
# CURRENCY VALIDATION
# =============================================================================

def validate_currency(value: str) -> str:
    """
    Validate and normalize a currency code.

    Args:
        value: Raw currency input (e.g., "usd", " TWD ")

    Returns:
        Normalized currency (uppercase, trimmed)

    Raises:
        ValueError: If currency format is invalid
    """
    if not value:
        raise ValueError("Currency cannot be empty")

    normalized = value.strip().upper()

    if not CURRENCY_PATTERN.match(normalized):
        raise ValueError(
            f"Invalid currency format: '{normalized}'. "
            "Currency must be a 3-letter code (e.g., TWD, USD)"
        )

    return normalized


# =============================================================================
# SYMBOL VALIDATION
# =============================================================================

def validate_symbol(value: str) -> str:
    """
    Trim a holding or quote symbol.

    Case is preserved: symbols are matched exactly between holdings and
    price observations.

    Raises:
        ValueError: If the symbol is empty or too long
    """
    normalized = value.strip() if value else ""

    if not normalized:
        raise ValueError("Symbol cannot be empty")

    if len(normalized) > SYMBOL_MAX_LENGTH:
        raise ValueError(f"Symbol cannot exceed {SYMBOL_MAX_LENGTH} characters")

    return normalized
