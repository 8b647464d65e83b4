"""Tests for amount conversion and slippage math."""

from decimal import Decimal

import pytest

from ammswap.errors import InvalidAmountError, InvalidSlippageError
from ammswap.units import (
    MAX_UINT256,
    apply_slippage,
    format_fee_tier,
    from_base_units,
    normalize_amount,
    parse_amount,
    parse_slippage,
    to_base_units,
)


class TestParseAmount:
    """Tests for parse_amount."""

    def test_decimal_string(self):
        assert parse_amount("1.5") == Decimal("1.5")

    def test_integer(self):
        assert parse_amount(10) == Decimal(10)

    @pytest.mark.parametrize("value", ["0", "-1", "abc", "", "NaN", "Infinity"])
    def test_rejects_invalid(self, value):
        with pytest.raises(InvalidAmountError):
            parse_amount(value)

    def test_rejects_float(self):
        """Floats lose precision before we ever see them."""
        with pytest.raises(InvalidAmountError):
            parse_amount(0.1)


class TestParseSlippage:
    """Tests for parse_slippage."""

    def test_bounds(self):
        assert parse_slippage("0") == Decimal("0")
        assert parse_slippage("99.99") == Decimal("99.99")

    def test_float_goes_through_str(self):
        assert parse_slippage(0.5) == Decimal("0.5")

    @pytest.mark.parametrize("value", ["100", "-0.1", "150", "x"])
    def test_rejects_out_of_range(self, value):
        with pytest.raises(InvalidSlippageError):
            parse_slippage(value)


class TestBaseUnits:
    """Tests for decimal <-> base unit conversion."""

    def test_to_base_units(self):
        assert to_base_units(Decimal("10"), 18) == 10 * 10**18
        assert to_base_units(Decimal("1.5"), 6) == 1_500_000

    def test_large_amount_is_exact(self):
        amount = Decimal("123456789012345678.123456789012345678")
        assert to_base_units(amount, 18) == 123456789012345678123456789012345678

    def test_too_many_decimals(self):
        with pytest.raises(InvalidAmountError):
            to_base_units(Decimal("0.0000001"), 6)

    def test_extra_digits_beyond_context_precision(self):
        amount = Decimal("1." + "0" * 77 + "1")
        with pytest.raises(InvalidAmountError):
            to_base_units(amount, 18)

    def test_trailing_zeros_beyond_token_decimals(self):
        assert to_base_units(Decimal("1.50000000"), 6) == 1_500_000

    def test_uint256_bound(self):
        assert to_base_units(Decimal(MAX_UINT256), 0) == MAX_UINT256
        with pytest.raises(InvalidAmountError):
            to_base_units(Decimal(MAX_UINT256 + 1), 0)
        with pytest.raises(InvalidAmountError):
            to_base_units(Decimal("1e70"), 18)

    @pytest.mark.parametrize("value", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite(self, value):
        with pytest.raises(InvalidAmountError):
            to_base_units(Decimal(value), 6)

    def test_from_base_units_keeps_precision(self):
        assert from_base_units(3501150000, 6) == "3501.150000"

    def test_from_base_units_trim(self):
        assert from_base_units(50_000_000, 6, trim=True) == "50"
        assert from_base_units(0, 6, trim=True) == "0"
        assert from_base_units(1, 18, trim=True) == "0.000000000000000001"

    def test_round_trip(self):
        for text, decimals in [("0.000001", 6), ("1234.5678", 8), ("42", 18)]:
            raw = to_base_units(Decimal(text), decimals)
            assert Decimal(from_base_units(raw, decimals)) == Decimal(text)


class TestSlippage:
    """Tests for apply_slippage."""

    def test_half_percent(self):
        assert apply_slippage(3501150000, Decimal("0.5")) == 3483644250

    def test_zero_slippage(self):
        assert apply_slippage(1000, Decimal("0")) == 1000

    def test_rounds_down(self):
        # 999 * 0.99 = 989.01
        assert apply_slippage(999, Decimal("1")) == 989

    def test_exact_for_large_values(self):
        raw = 2**200 + 12345
        assert apply_slippage(raw, Decimal("0.3")) == raw * 997 // 1000


class TestFormatting:
    """Tests for display helpers."""

    @pytest.mark.parametrize(
        "fee,expected", [(100, "0.01"), (500, "0.05"), (3000, "0.3"), (10000, "1")]
    )
    def test_format_fee_tier(self, fee, expected):
        assert format_fee_tier(fee) == expected

    def test_normalize_amount(self):
        assert normalize_amount(Decimal("1.500")) == "1.5"
        assert normalize_amount(Decimal("1E+2")) == "100"
