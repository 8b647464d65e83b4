"""Transaction builder for unsigned swap transactions.

This service builds unsigned transactions for client-side signing.
NO signing or broadcasting happens here - this is non-custodial.

Swaps are ``exactInputSingle`` calls wrapped in the router's
``multicall(deadline, bytes[])``; the router only accepts native value
through that entry point, and the wrapper carries the deadline.
"""

import logging
import time
from decimal import Decimal, InvalidOperation
from typing import Callable

from ammswap import abi
from ammswap.contracts.quotes import Quote
from ammswap.contracts.swaps import SwapRequest
from ammswap.contracts.transactions import UnsignedTransaction
from ammswap.errors import InvalidAmountError, InvalidRequestError
from ammswap.registry import ChainRegistry
from ammswap.units import format_fee_tier, parse_amount, to_base_units

logger = logging.getLogger(__name__)


class TransactionBuilder:
    """Builds unsigned swap transactions from a request and its quote.

    This service NEVER:
    - Accesses private keys
    - Signs transactions
    - Broadcasts transactions
    - Re-quotes (a stale quote is the caller's risk, bounded by min output)
    """

    def __init__(
        self,
        registry: ChainRegistry,
        deadline_seconds: int = 1200,
        gas_limit: int = 300000,
        clock: Callable[[], float] = time.time,
    ):
        self.registry = registry
        self.deadline_seconds = deadline_seconds
        self.gas_limit = gas_limit
        self._clock = clock

    def build_swap_transaction(self, request: SwapRequest, quote: Quote) -> UnsignedTransaction:
        """Build the router multicall for ``request`` at ``quote``'s fee tier.

        Args:
            request: Validated swap request
            quote: Quote from the quote engine for the same chain and pair

        Returns:
            UnsignedTransaction for client to sign

        Raises:
            InvalidRequestError: quote does not match the request
            InvalidAmountError: quote minimum output is not a finite uint256 amount
            UnsupportedChainError / UnsupportedTokenError
        """
        descriptor = self.registry.resolve_chain(request.chain)
        src = self.registry.resolve_token(descriptor.key, request.token_in)
        dst = self.registry.resolve_token(descriptor.key, request.token_out)

        quoted_chain = self.registry.resolve_chain(quote.chain)
        if (
            quoted_chain.key != descriptor.key
            or quote.token_in.upper() != src.symbol
            or quote.token_out.upper() != dst.symbol
        ):
            raise InvalidRequestError(
                f"Quote for {quote.token_in}->{quote.token_out} on {quote.chain} does not match "
                f"swap {src.symbol}->{dst.symbol} on {descriptor.key}",
                chain=descriptor.key,
            )
        if quote.fee_tier not in descriptor.fee_tiers:
            raise InvalidRequestError(
                f"Fee tier {quote.fee_tier} is not used on {descriptor.key}",
                chain=descriptor.key,
                fee_tier=quote.fee_tier,
            )

        raw_in = to_base_units(parse_amount(request.amount), src.decimals)
        try:
            min_out = Decimal(quote.min_amount_out)
        except InvalidOperation:
            raise InvalidAmountError(f"Quote minimum output is not a decimal: {quote.min_amount_out!r}")
        if not min_out.is_finite() or min_out < 0:
            raise InvalidAmountError(f"Quote minimum output must be finite and >= 0: {quote.min_amount_out}")
        raw_min_out = to_base_units(min_out, dst.decimals)

        swap_call = abi.encode_exact_input_single(
            abi.ExactInputSingleParams(
                token_in=src.address,
                token_out=dst.address,
                fee=quote.fee_tier,
                recipient=request.recipient,
                amount_in=raw_in,
                amount_out_minimum=raw_min_out,
            )
        )
        deadline = int(self._clock()) + self.deadline_seconds
        data = abi.encode_multicall(deadline, [swap_call])

        value = raw_in if src.is_native else 0
        warnings = []
        if dst.is_native:
            warnings.append(
                f"Output is delivered as {descriptor.wrapped_symbol}, not native {dst.symbol}"
            )

        logger.info(
            f"Built swap {request.amount} {src.symbol} -> {dst.symbol} on {descriptor.key} "
            f"(fee tier {quote.fee_tier}, min_out {raw_min_out}, value {value}, deadline {deadline})"
        )

        return UnsignedTransaction(
            chain=descriptor.key,
            chain_id=descriptor.chain_id,
            to=descriptor.router,
            data=abi.to_hex(data),
            value=hex(value),
            gas_limit=str(self.gas_limit),
            description=(
                f"Swap {request.amount} {src.symbol} for at least {quote.min_amount_out} "
                f"{dst.symbol} via {format_fee_tier(quote.fee_tier)}% pool"
            ),
            warnings=warnings,
        )
