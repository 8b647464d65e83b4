"""Tests for ABI encoding of quoter, router and ERC-20 calls."""

import pytest
from eth_utils import function_signature_to_4byte_selector

from ammswap import abi

TOKEN_A = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
TOKEN_B = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
ROUTER = "0x68b3465833fb72A70ecDF485E0e4C7bD8665Fc45"
OWNER = "0x1111111111111111111111111111111111111111"


class TestSelectors:
    """Selectors must match the keccak of the canonical signatures."""

    @pytest.mark.parametrize(
        "selector,signature",
        [
            (
                abi.QUOTE_EXACT_INPUT_SINGLE_SELECTOR,
                "quoteExactInputSingle((address,address,uint256,uint24,uint160))",
            ),
            (
                abi.EXACT_INPUT_SINGLE_SELECTOR,
                "exactInputSingle((address,address,uint24,address,uint256,uint256,uint160))",
            ),
            (abi.MULTICALL_DEADLINE_SELECTOR, "multicall(uint256,bytes[])"),
            (abi.ERC20_APPROVE_SELECTOR, "approve(address,uint256)"),
            (abi.ERC20_ALLOWANCE_SELECTOR, "allowance(address,address)"),
        ],
    )
    def test_selector(self, selector, signature):
        assert abi.from_hex(selector) == function_signature_to_4byte_selector(signature)


class TestQuoter:
    """Tests for QuoterV2 encoding."""

    def test_quote_call(self):
        data = abi.encode_quote_exact_input_single(TOKEN_A, TOKEN_B, 10**18, 500)

        assert abi.to_hex(data[:4]) == abi.QUOTE_EXACT_INPUT_SINGLE_SELECTOR
        token_in, token_out, amount_in, fee, limit = abi.decode_quote_exact_input_single_call(data)
        assert token_in.lower() == TOKEN_A.lower()
        assert token_out.lower() == TOKEN_B.lower()
        assert amount_in == 10**18
        assert fee == 500
        assert limit == 0

    def test_quote_result(self):
        result = abi.QuoteResult(
            amount_out=3501150000,
            sqrt_price_x96_after=2**96,
            initialized_ticks_crossed=2,
            gas_estimate=120000,
        )
        assert abi.decode_quote_result(abi.encode_quote_result(result)) == result


class TestRouter:
    """Tests for SwapRouter02 encoding."""

    def test_decoded_swap_addresses_are_checksummed(self):
        params = abi.ExactInputSingleParams(
            token_in=TOKEN_A.lower(),
            token_out=TOKEN_B.lower(),
            fee=500,
            recipient=ROUTER.lower(),
            amount_in=1,
            amount_out_minimum=0,
        )
        decoded = abi.decode_exact_input_single(abi.encode_exact_input_single(params))

        assert (decoded.token_in, decoded.token_out, decoded.recipient) == (TOKEN_A, TOKEN_B, ROUTER)

    def test_multicall_wraps_exact_input_single(self):
        params = abi.ExactInputSingleParams(
            token_in=TOKEN_A,
            token_out=TOKEN_B,
            fee=3000,
            recipient=OWNER,
            amount_in=10**18,
            amount_out_minimum=3_000_000_000,
        )
        inner = abi.encode_exact_input_single(params)
        data = abi.encode_multicall(1_700_001_200, [inner])

        assert abi.to_hex(data[:4]) == abi.MULTICALL_DEADLINE_SELECTOR
        deadline, calls = abi.decode_multicall(data)
        assert deadline == 1_700_001_200
        assert calls == [inner]

        decoded = abi.decode_exact_input_single(calls[0])
        assert decoded.fee == 3000
        assert decoded.amount_in == 10**18
        assert decoded.amount_out_minimum == 3_000_000_000
        assert decoded.recipient.lower() == OWNER.lower()
        assert decoded.sqrt_price_limit_x96 == 0

    def test_selector_mismatch(self):
        data = abi.encode_approve(ROUTER)
        with pytest.raises(ValueError):
            abi.decode_multicall(data)


class TestErc20:
    """Tests for ERC-20 encoding."""

    def test_unlimited_approve(self):
        spender, amount = abi.decode_approve(abi.encode_approve(ROUTER))
        assert spender.lower() == ROUTER.lower()
        assert amount == abi.MAX_UINT256 == 2**256 - 1

    def test_allowance_call(self):
        owner, spender = abi.decode_allowance_call(abi.encode_allowance(OWNER, ROUTER))
        assert owner.lower() == OWNER.lower()
        assert spender.lower() == ROUTER.lower()

    def test_decoded_addresses_are_checksummed(self):
        spender, _ = abi.decode_approve(abi.encode_approve(ROUTER.lower()))
        owner, _ = abi.decode_allowance_call(abi.encode_allowance(TOKEN_B.lower(), ROUTER.lower()))

        assert spender == ROUTER
        assert owner == TOKEN_B

    def test_uint256(self):
        assert abi.decode_uint256(abi.encode_uint256(50_000_000)) == 50_000_000
