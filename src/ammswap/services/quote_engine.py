"""Quote engine: best single-pool price across fee tiers.

Every fee tier of the chain is probed concurrently against the QuoterV2
contract. The comparison only happens after all probes have resolved, so a
fast answer from a thin pool can never win over a slower, better tier.
"""

import asyncio
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Union

from eth_abi.exceptions import DecodingError

from ammswap import abi
from ammswap.contracts.quotes import Quote
from ammswap.errors import (
    ContractRevertError,
    InvalidRequestError,
    NoLiquidityError,
    RpcConnectivityError,
)
from ammswap.registry import ChainDescriptor, ChainRegistry, TokenDescriptor
from ammswap.rpc import EthCallClient, RpcPool
from ammswap.units import (
    AmountLike,
    apply_slippage,
    format_fee_tier,
    from_base_units,
    normalize_amount,
    parse_amount,
    parse_slippage,
    to_base_units,
)

logger = logging.getLogger(__name__)

DEFAULT_SLIPPAGE_PERCENT = Decimal("0.5")


@dataclass(frozen=True)
class TierProbe:
    """Outcome of quoting one fee tier."""

    fee: int
    amount_out: Optional[int] = None
    gas_estimate: Optional[int] = None
    error: Optional[RpcConnectivityError] = None

    @property
    def is_liquid(self) -> bool:
        return bool(self.amount_out)


def route_label(token_in: str, token_out: str, fee: int) -> str:
    return f"{token_in} -> {token_out} ({format_fee_tier(fee)}% pool)"


class QuoteEngine:
    """Queries the chain's quoter across fee tiers and picks the best output."""

    def __init__(
        self,
        registry: ChainRegistry,
        rpc_pool: RpcPool,
        default_slippage: Decimal = DEFAULT_SLIPPAGE_PERCENT,
    ):
        self.registry = registry
        self.rpc_pool = rpc_pool
        self.default_slippage = default_slippage

    async def get_quote(
        self,
        chain: Union[str, int],
        token_in: str,
        token_out: str,
        amount_in: AmountLike,
        slippage_percent: Optional[AmountLike] = None,
    ) -> Quote:
        """Get the best quote for an exact-input single-pool swap.

        Args:
            chain: Chain key or id
            token_in: Input token symbol
            token_out: Output token symbol
            amount_in: Input amount as a decimal string
            slippage_percent: Tolerance in percent, [0, 100)

        Returns:
            Quote with the chosen fee tier and minimum output

        Raises:
            InvalidRequestError: bad amount, slippage or identical tokens
            UnsupportedChainError / UnsupportedTokenError: unknown chain or symbol
            NoLiquidityError: every tier confirmed without a usable pool
            RpcConnectivityError: no tier produced a quote and at least one
                could not be reached
        """
        amount = parse_amount(amount_in)
        slippage = parse_slippage(
            self.default_slippage if slippage_percent is None else slippage_percent
        )
        descriptor = self.registry.resolve_chain(chain)
        src = self.registry.resolve_token(descriptor.key, token_in)
        dst = self.registry.resolve_token(descriptor.key, token_out)

        if src.address == dst.address:
            raise InvalidRequestError(
                f"Cannot swap {src.symbol} for {dst.symbol}: same token contract",
                chain=descriptor.key,
                token=dst.symbol,
            )

        raw_in = to_base_units(amount, src.decimals)
        rpc = self.rpc_pool.for_chain(descriptor)

        logger.debug(
            f"Quoting {amount} {src.symbol} -> {dst.symbol} on {descriptor.key} "
            f"across tiers {list(descriptor.fee_tiers)}"
        )
        probes = await asyncio.gather(
            *(self._probe_tier(rpc, descriptor, src, dst, raw_in, fee) for fee in descriptor.fee_tiers)
        )

        best = self._select_best(descriptor, src, dst, probes)
        min_out = apply_slippage(best.amount_out, slippage)

        quote = Quote(
            chain=descriptor.key,
            token_in=src.symbol,
            token_out=dst.symbol,
            amount_in=normalize_amount(amount),
            amount_out=from_base_units(best.amount_out, dst.decimals),
            min_amount_out=from_base_units(min_out, dst.decimals),
            slippage_percent=slippage,
            fee_tier=best.fee,
            route=route_label(src.symbol, dst.symbol, best.fee),
            gas_estimate=best.gas_estimate,
        )
        logger.info(
            f"Quote {descriptor.key}: {quote.amount_in} {src.symbol} -> "
            f"{quote.amount_out} {dst.symbol} (min {quote.min_amount_out}, fee tier {best.fee})"
        )
        return quote

    async def _probe_tier(
        self,
        rpc: EthCallClient,
        chain: ChainDescriptor,
        src: TokenDescriptor,
        dst: TokenDescriptor,
        raw_in: int,
        fee: int,
    ) -> TierProbe:
        """Quote one tier. A missing pool is an expected outcome, not an error."""
        calldata = abi.encode_quote_exact_input_single(src.address, dst.address, raw_in, fee)
        try:
            reply = await rpc.eth_call(chain.quoter, calldata)
        except ContractRevertError:
            logger.debug(f"{chain.key} fee tier {fee}: no pool for {src.symbol}/{dst.symbol}")
            return TierProbe(fee=fee)
        except RpcConnectivityError as e:
            return TierProbe(fee=fee, error=e)

        try:
            result = abi.decode_quote_result(reply)
        except DecodingError as e:
            logger.debug(f"{chain.key} fee tier {fee}: undecodable quoter reply: {e}")
            return TierProbe(fee=fee)

        logger.debug(f"{chain.key} fee tier {fee}: amount_out={result.amount_out}")
        return TierProbe(fee=fee, amount_out=result.amount_out, gas_estimate=result.gas_estimate)

    @staticmethod
    def _select_best(
        chain: ChainDescriptor,
        src: TokenDescriptor,
        dst: TokenDescriptor,
        probes: list[TierProbe],
    ) -> TierProbe:
        liquid = [probe for probe in probes if probe.is_liquid]
        unreachable = [probe for probe in probes if probe.error is not None]

        if not liquid:
            if unreachable:
                logger.error(
                    f"No quote for {src.symbol}/{dst.symbol} on {chain.key}: "
                    f"{len(unreachable)}/{len(probes)} tier(s) unreachable"
                )
                first = unreachable[0]
                raise RpcConnectivityError(
                    f"Could not reach {chain.key} quoter for {src.symbol}/{dst.symbol}: {first.error.message}",
                    chain=chain.key,
                    token=dst.symbol,
                    fee_tier=first.fee,
                )
            raise NoLiquidityError(
                f"No liquidity available for {src.symbol}/{dst.symbol} on {chain.key}",
                chain=chain.key,
                token=dst.symbol,
            )

        if unreachable:
            logger.warning(
                f"Quoting {src.symbol}/{dst.symbol} on {chain.key} without tier(s) "
                f"{[probe.fee for probe in unreachable]}: RPC unreachable"
            )

        # max() keeps the first of equal outputs, i.e. the earlier tier
        return max(liquid, key=lambda probe: probe.amount_out)
