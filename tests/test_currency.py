"""
Test suite for currency module

Tests currency code lookup and exact Decimal conversion of amounts.
"""

import pytest
from decimal import Decimal

from transfer_ledger.currency import (
    Currency, to_decimal, is_positive, format_amount, add_exact, subtract_exact
)


class TestCurrency:
    """Test Currency enumeration"""

    def test_code_and_precision(self):
        """Test currency attributes"""
        assert Currency.USD.code == "USD"
        assert Currency.USD.precision == 2
        assert Currency.JPY.precision == 0
        assert str(Currency.EUR) == "EUR"

    def test_from_code(self):
        """Test lookup is case-insensitive"""
        assert Currency.from_code("EUR") is Currency.EUR
        assert Currency.from_code("gbp") is Currency.GBP
        assert Currency.from_code(" usd ") is Currency.USD

    @pytest.mark.parametrize("code", ["USWD", "aaaa", "", "EURO"])
    def test_from_code_unknown(self, code):
        """Test unknown codes are rejected"""
        with pytest.raises(ValueError, match="Unsupported currency code"):
            Currency.from_code(code)

    @pytest.mark.parametrize("code,precision", [
        ("RUB", 2), ("THB", 2), ("JOD", 3), ("BHD", 3), ("CLF", 4), ("VND", 0), ("XAU", 0)
    ])
    def test_full_iso_table(self, code, precision):
        """Test codes beyond the major currencies are supported"""
        currency = Currency.from_code(code)
        assert currency.code == code
        assert currency.precision == precision

    def test_from_code_non_string(self):
        """Test only strings name a currency"""
        with pytest.raises(ValueError):
            Currency.from_code(840)


class TestDecimalConversion:
    """Test amount conversion helpers"""

    def test_to_decimal(self):
        """Test each accepted input type"""
        assert to_decimal(Decimal("1.10")) == Decimal("1.10")
        assert to_decimal(12) == Decimal("12")
        assert to_decimal("14.4") == Decimal("14.4")
        # Floats go through their shortest repr, not binary expansion
        assert to_decimal(500.2) == Decimal("500.2")
        assert to_decimal(0.1) + to_decimal(0.2) == Decimal("0.3")

    @pytest.mark.parametrize("value", ["abc", "", "NaN", "Infinity", float("inf"), True])
    def test_to_decimal_rejects(self, value):
        """Test non-numeric, non-finite and boolean inputs"""
        with pytest.raises(ValueError):
            to_decimal(value)

    def test_is_positive(self):
        """Test strictly positive check"""
        assert is_positive(Decimal("0.01"))
        assert not is_positive(Decimal("0"))
        assert not is_positive(Decimal("-1"))

    def test_format_amount(self):
        """Test display formatting follows currency precision"""
        assert format_amount(Decimal("1250"), Currency.EUR) == "EUR 1,250.00"
        assert format_amount(Decimal("1234567"), Currency.JPY) == "JPY 1,234,567"

    def test_format_three_digit_minor_unit(self):
        """Test dinars show three decimals"""
        assert format_amount(Decimal("12.5"), Currency.JOD) == "JOD 12.500"


class TestExactArithmetic:
    """Test add_exact and subtract_exact"""

    def test_beyond_context_precision(self):
        """Test results longer than 28 digits are not rounded"""
        a = Decimal("1234.000000000000000000000001")

        assert add_exact(a, Decimal("10000")) == Decimal("11234.000000000000000000000001")
        assert subtract_exact(a, Decimal("0.5")) == Decimal("1233.500000000000000000000001")
        assert a + Decimal("10000") != Decimal("11234.000000000000000000000001")

    def test_large_and_tiny(self):
        """Test a huge and a tiny operand sum exactly"""
        big = Decimal("1E+40")
        tiny = Decimal("1E-40")

        total = add_exact(big, tiny)

        assert len(total.as_tuple().digits) == 81
        assert subtract_exact(total, big) == tiny
