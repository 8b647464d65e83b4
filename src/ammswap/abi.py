"""ABI encoding for the quoter, router and ERC-20 calls.

Only the handful of functions the engine needs. Selectors are fixed
constants; arguments go through eth_abi.
"""

from dataclasses import dataclass

from eth_abi import decode, encode
from eth_utils import decode_hex, encode_hex, to_checksum_address

from ammswap.units import MAX_UINT256

# QuoterV2.quoteExactInputSingle((address,address,uint256,uint24,uint160))
QUOTE_EXACT_INPUT_SINGLE_SELECTOR = "0xc6a5026a"
# SwapRouter02.exactInputSingle((address,address,uint24,address,uint256,uint256,uint160))
EXACT_INPUT_SINGLE_SELECTOR = "0x04e45aaf"
# SwapRouter02.multicall(uint256,bytes[])
MULTICALL_DEADLINE_SELECTOR = "0x5ae401dc"
ERC20_APPROVE_SELECTOR = "0x095ea7b3"  # approve(address,uint256)
ERC20_ALLOWANCE_SELECTOR = "0xdd62ed3e"  # allowance(address,address)

_QUOTE_PARAMS = "(address,address,uint256,uint24,uint160)"
_QUOTE_RESULT = ["uint256", "uint160", "uint32", "uint256"]
_SWAP_PARAMS = "(address,address,uint24,address,uint256,uint256,uint160)"


@dataclass(frozen=True)
class QuoteResult:
    """Decoded QuoterV2 return values."""

    amount_out: int
    sqrt_price_x96_after: int
    initialized_ticks_crossed: int
    gas_estimate: int


@dataclass(frozen=True)
class ExactInputSingleParams:
    token_in: str
    token_out: str
    fee: int
    recipient: str
    amount_in: int
    amount_out_minimum: int
    sqrt_price_limit_x96: int = 0


def _call(selector: str, types: list[str], args: list) -> bytes:
    return decode_hex(selector) + encode(types, args)


def _split(data: bytes, selector: str) -> bytes:
    prefix = decode_hex(selector)
    if data[:4] != prefix:
        raise ValueError(f"Calldata does not start with selector {selector}")
    return data[4:]


def _address(value: str) -> str:
    # eth_abi 6 decodes addresses lowercase, 5 checksummed
    return to_checksum_address(value)


# ======================
# Quoter
# ======================


def encode_quote_exact_input_single(
    token_in: str, token_out: str, amount_in: int, fee: int, sqrt_price_limit_x96: int = 0
) -> bytes:
    return _call(
        QUOTE_EXACT_INPUT_SINGLE_SELECTOR,
        [_QUOTE_PARAMS],
        [(token_in, token_out, amount_in, fee, sqrt_price_limit_x96)],
    )


def decode_quote_exact_input_single_call(data: bytes) -> tuple[str, str, int, int, int]:
    """Calldata -> (token_in, token_out, amount_in, fee, sqrt_price_limit_x96)."""
    token_in, token_out, amount_in, fee, limit = decode(
        [_QUOTE_PARAMS], _split(data, QUOTE_EXACT_INPUT_SINGLE_SELECTOR)
    )[0]
    return _address(token_in), _address(token_out), amount_in, fee, limit


def encode_quote_result(result: QuoteResult) -> bytes:
    return encode(
        _QUOTE_RESULT,
        [
            result.amount_out,
            result.sqrt_price_x96_after,
            result.initialized_ticks_crossed,
            result.gas_estimate,
        ],
    )


def decode_quote_result(data: bytes) -> QuoteResult:
    return QuoteResult(*decode(_QUOTE_RESULT, data))


# ======================
# Router
# ======================


def encode_exact_input_single(params: ExactInputSingleParams) -> bytes:
    return _call(
        EXACT_INPUT_SINGLE_SELECTOR,
        [_SWAP_PARAMS],
        [
            (
                params.token_in,
                params.token_out,
                params.fee,
                params.recipient,
                params.amount_in,
                params.amount_out_minimum,
                params.sqrt_price_limit_x96,
            )
        ],
    )


def decode_exact_input_single(data: bytes) -> ExactInputSingleParams:
    token_in, token_out, fee, recipient, amount_in, min_out, limit = decode(
        [_SWAP_PARAMS], _split(data, EXACT_INPUT_SINGLE_SELECTOR)
    )[0]
    return ExactInputSingleParams(
        token_in=_address(token_in),
        token_out=_address(token_out),
        fee=fee,
        recipient=_address(recipient),
        amount_in=amount_in,
        amount_out_minimum=min_out,
        sqrt_price_limit_x96=limit,
    )


def encode_multicall(deadline: int, calls: list[bytes]) -> bytes:
    return _call(MULTICALL_DEADLINE_SELECTOR, ["uint256", "bytes[]"], [deadline, calls])


def decode_multicall(data: bytes) -> tuple[int, list[bytes]]:
    deadline, calls = decode(["uint256", "bytes[]"], _split(data, MULTICALL_DEADLINE_SELECTOR))
    return deadline, list(calls)


# ======================
# ERC-20
# ======================


def encode_approve(spender: str, amount: int = MAX_UINT256) -> bytes:
    return _call(ERC20_APPROVE_SELECTOR, ["address", "uint256"], [spender, amount])


def decode_approve(data: bytes) -> tuple[str, int]:
    spender, amount = decode(["address", "uint256"], _split(data, ERC20_APPROVE_SELECTOR))
    return _address(spender), amount


def encode_allowance(owner: str, spender: str) -> bytes:
    return _call(ERC20_ALLOWANCE_SELECTOR, ["address", "address"], [owner, spender])


def decode_allowance_call(data: bytes) -> tuple[str, str]:
    owner, spender = decode(["address", "address"], _split(data, ERC20_ALLOWANCE_SELECTOR))
    return _address(owner), _address(spender)


def encode_uint256(value: int) -> bytes:
    return encode(["uint256"], [value])


def decode_uint256(data: bytes) -> int:
    (value,) = decode(["uint256"], data)
    return value


def to_hex(data: bytes) -> str:
    return encode_hex(data)


def from_hex(data: str) -> bytes:
    return decode_hex(data)
