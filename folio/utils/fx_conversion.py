# folio/utils/fx_conversion.py
"""
Exchange Rate Arithmetic

All observations in the system use one convention:

    ExchangeRateObservation(from_currency="USD", to_currency="TWD", rate=30.31)
    Meaning: 1 USD = 30.31 TWD

    To convert USD → TWD:  TWD_amount = USD_amount × rate
    To convert TWD → USD:  USD_amount = TWD_amount ÷ rate

These helpers give each derivation an explicit name so the resolver and
the valuation code never open-code a division in the wrong direction.
"""

from decimal import Decimal


def convert_amount(amount: Decimal, rate: Decimal) -> Decimal:
    """
    Convert an amount in the observation's source currency into its target.

    Example:
        - Rate USD→TWD: 30.31
        - Amount: 100 USD
        - Result: 100 × 30.31 = 3031 TWD
    """
    return amount * rate


def invert_rate(rate: Decimal) -> Decimal:
    """
    Derive the reverse-direction rate.

    Example:
        - TWD→USD observation: 0.033 (1 TWD = 0.033 USD)
        - USD→TWD: 1 / 0.033 ≈ 30.30

    Raises:
        ValueError: If rate is zero
    """
    if rate == 0:
        raise ValueError("Exchange rate cannot be zero")
    return Decimal("1") / rate


def cross_rate(pivot_to_from: Decimal, pivot_to_to: Decimal) -> Decimal:
    """
    Derive a from→to rate from two rates quoted against a shared pivot.

    Both arguments use the pivot as the source currency:
        pivot_to_from: 1 PIVOT = X FROM
        pivot_to_to:   1 PIVOT = Y TO

    Therefore 1 FROM = Y / X TO.

    Example (pivot USD):
        - USD→JPY: 150
        - USD→TWD: 30
        - JPY→TWD: 30 / 150 = 0.2

    Raises:
        ValueError: If pivot_to_from is zero
    """
    if pivot_to_from == 0:
        raise ValueError("Pivot rate cannot be zero")
    return pivot_to_to / pivot_to_from
