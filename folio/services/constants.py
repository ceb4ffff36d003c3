# folio/services/constants.py
"""
Centralized constants for the valuation services.

Usage:
    from folio.services.constants import (
        VALUE_QUANTUM,
        CASH_UNIT_PRICE,
        TOP_HOLDINGS_LIMIT,
    )
"""

from decimal import Decimal


# =============================================================================
# ROUNDING
# =============================================================================

# Monetary amounts (values, costs, gain/loss) in the base currency
VALUE_QUANTUM: Decimal = Decimal("0.01")

# Gain/loss expressed as a ratio of cost (0.0123 = 1.23%)
RATIO_QUANTUM: Decimal = Decimal("0.0001")

# Distribution shares on a 0-100 scale
PERCENT_QUANTUM: Decimal = Decimal("0.01")


# =============================================================================
# VALUATION RULES
# =============================================================================

# Cash is always worth its face value in its own currency
CASH_UNIT_PRICE: Decimal = Decimal("1")

# Conversion factor used when no rate can be resolved (no-op conversion)
IDENTITY_RATE: Decimal = Decimal("1")

ZERO: Decimal = Decimal("0")
HUNDRED: Decimal = Decimal("100")


# =============================================================================
# PRESENTATION
# =============================================================================

# Number of positions shown in the "top holdings" panel (cash excluded)
TOP_HOLDINGS_LIMIT: int = 5
