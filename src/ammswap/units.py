"""Exact conversions between human-decimal amounts and token base units.

Base-unit amounts routinely exceed 2**53, so nothing here touches float.
"""

from decimal import Decimal, InvalidOperation, localcontext
from typing import Union

from ammswap.errors import InvalidAmountError, InvalidSlippageError

# uint256 has 78 decimal digits
_PRECISION = 78

MAX_UINT256 = 2**256 - 1

AmountLike = Union[str, int, Decimal]


def parse_amount(value: AmountLike, *, field: str = "amount") -> Decimal:
    """Parse a positive decimal amount.

    Raises:
        InvalidAmountError: unparseable, non-finite or not > 0
    """
    if isinstance(value, float):
        raise InvalidAmountError(f"{field} must be a decimal string, not float")
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise InvalidAmountError(f"{field} is not a decimal number: {value!r}")

    if not amount.is_finite():
        raise InvalidAmountError(f"{field} must be finite: {value!r}")
    if amount <= 0:
        raise InvalidAmountError(f"{field} must be greater than zero: {value!r}")
    return amount


def parse_slippage(value: AmountLike) -> Decimal:
    """Parse a slippage percentage in [0, 100)."""
    if isinstance(value, float):
        value = str(value)
    try:
        slippage = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise InvalidSlippageError(f"Slippage is not a decimal number: {value!r}")

    if not slippage.is_finite() or slippage < 0 or slippage >= 100:
        raise InvalidSlippageError(f"Slippage must be in [0, 100): {value!r}")
    return slippage


def to_base_units(amount: Decimal, decimals: int) -> int:
    """Convert a human amount to integer base units, exactly.

    Works on the Decimal's digits and exponent so no context rounding can
    hide extra fractional digits.

    Raises:
        InvalidAmountError: non-finite, more fractional digits than the
            token has, or larger than a uint256
    """
    if not amount.is_finite():
        raise InvalidAmountError(f"Amount must be finite: {amount}")

    sign, digits, exponent = amount.as_tuple()
    coefficient = int("".join(map(str, digits)))
    if coefficient == 0:
        return 0
    if amount.adjusted() + decimals >= _PRECISION:
        raise InvalidAmountError(f"Amount {amount} does not fit in uint256")

    shift = exponent + decimals
    if shift >= 0:
        raw = coefficient * 10**shift
    else:
        if -shift > len(digits):
            raise InvalidAmountError(f"Amount {amount} has more than {decimals} decimal places")
        raw, remainder = divmod(coefficient, 10**-shift)
        if remainder:
            raise InvalidAmountError(f"Amount {amount} has more than {decimals} decimal places")

    if raw > MAX_UINT256:
        raise InvalidAmountError(f"Amount {amount} does not fit in uint256")
    return -raw if sign else raw


def from_base_units(raw: int, decimals: int, *, trim: bool = False) -> str:
    """Format base units as a decimal string.

    By default the string carries exactly ``decimals`` fractional digits
    (``3501150000, 6 -> "3501.150000"``); ``trim=True`` drops trailing zeros.
    """
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        value = Decimal(raw).scaleb(-decimals)
        if trim:
            value = value.normalize()
            if value == 0:
                return "0"
    return format(value, "f")


def apply_slippage(raw_amount: int, slippage_percent: Decimal) -> int:
    """Minimum acceptable output: raw * (1 - slippage/100), rounded down."""
    numerator, denominator = slippage_percent.as_integer_ratio()
    scale = 100 * denominator
    return raw_amount * (scale - numerator) // scale


def format_fee_tier(fee: int) -> str:
    """Fee tier as a percentage string: 500 -> "0.05", 10000 -> "1"."""
    pct = Decimal(fee) / Decimal(10000)
    return format(pct.normalize(), "f")


def normalize_amount(amount: Decimal) -> str:
    """Human string for a parsed amount without exponent or trailing zeros."""
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return format(amount.normalize(), "f")
