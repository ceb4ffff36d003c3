# tests/utils/test_fx_conversion.py
"""Tests for exchange-rate arithmetic helpers."""

from decimal import Decimal

import pytest

from folio.utils.fx_conversion import convert_amount, cross_rate, invert_rate


class TestConvertAmount:

    def test_multiplies_by_rate(self):
        assert convert_amount(Decimal("100"), Decimal("30.31")) == Decimal("3031.00")


class TestInvertRate:

    def test_inverse(self):
        assert invert_rate(Decimal("4")) == Decimal("0.25")

    def test_zero_rejected(self):
        with pytest.raises(ValueError):
            invert_rate(Decimal("0"))


class TestCrossRate:

    def test_jpy_to_twd_via_usd(self):
        assert cross_rate(Decimal("150"), Decimal("30")) == Decimal("0.2")

    def test_zero_pivot_leg_rejected(self):
        with pytest.raises(ValueError):
            cross_rate(Decimal("0"), Decimal("30"))
