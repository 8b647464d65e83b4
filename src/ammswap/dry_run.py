"""Simulated chain for dry-run mode and tests.

DryRunRpcClient answers the quoter and ERC-20 allowance calls the engine
makes, from a price table instead of a node. It is only used when selected
explicitly (``DRY_RUN=true`` or by passing it to an RpcPool); real RPC
failures never fall back to it.
"""

import logging
from decimal import Decimal, localcontext
from typing import Optional, Union

from ammswap import abi
from ammswap.errors import ContractRevertError, RpcConnectivityError
from ammswap.registry import ChainDescriptor
from ammswap.rpc import EthCallClient

logger = logging.getLogger(__name__)


# Simulated market prices in USD, for demonstration only
SIMULATED_PRICES: dict[str, Decimal] = {
    "ETH": Decimal("3500.00"),
    "WETH": Decimal("3500.00"),
    "WBTC": Decimal("100000.00"),
    "MATIC": Decimal("0.62"),
    "WMATIC": Decimal("0.62"),
    "ARB": Decimal("0.80"),
    "OP": Decimal("1.90"),
    "USDC": Decimal("1.00"),
    "USDT": Decimal("1.00"),
    "DAI": Decimal("1.00"),
}

# Fee tiers that have a pool for every pair unless overridden
SIMULATED_LIQUID_TIERS: tuple[int, ...] = (500, 3000)

SIMULATED_GAS_ESTIMATE = 110000

TierOutcome = Union[int, None, Exception]


class DryRunRpcClient(EthCallClient):
    """Scripted eth_call responder for one chain.

    Per-tier outcomes can be pinned with ``set_tier_output``: an int is the
    raw output amount, None means no pool (the call reverts), and an
    exception instance is raised as-is (e.g. RpcConnectivityError).
    """

    def __init__(
        self,
        chain: ChainDescriptor,
        prices: Optional[dict[str, Decimal]] = None,
        liquid_tiers: tuple[int, ...] = SIMULATED_LIQUID_TIERS,
        offline: bool = False,
    ):
        self.chain = chain.key
        self.descriptor = chain
        self.liquid_tiers = liquid_tiers
        self.offline = offline
        self.calls: list[tuple[str, bytes]] = []
        self._prices = dict(SIMULATED_PRICES if prices is None else prices)
        self._tier_outputs: dict[tuple[str, str, int], TierOutcome] = {}
        self._allowances: dict[tuple[str, str], int] = {}
        # the native symbol shares the wrapped address; index the wrapped one
        self._by_address = {
            token.address.lower(): token for token in chain.tokens.values() if not token.is_native
        }

    def set_tier_output(self, token_in: str, token_out: str, fee: int, outcome: TierOutcome) -> None:
        key = (self._address(token_in), self._address(token_out), int(fee))
        self._tier_outputs[key] = outcome

    def set_allowance(self, token: str, owner: str, raw_amount: int) -> None:
        self._allowances[(self._address(token), owner.lower())] = raw_amount

    def _address(self, symbol: str) -> str:
        return self.descriptor.tokens[symbol.upper()].address.lower()

    async def eth_call(self, to: str, data: bytes) -> bytes:
        self.calls.append((to, data))
        if self.offline:
            raise RpcConnectivityError(f"Simulated {self.chain} RPC is offline", chain=self.chain)

        selector = abi.to_hex(data[:4])
        if selector == abi.QUOTE_EXACT_INPUT_SINGLE_SELECTOR and to.lower() == self.descriptor.quoter.lower():
            return self._quote(data)
        if selector == abi.ERC20_ALLOWANCE_SELECTOR:
            return self._allowance(to, data)

        raise ContractRevertError(f"Simulated chain has no handler for call to {to}", chain=self.chain)

    def _quote(self, data: bytes) -> bytes:
        token_in, token_out, amount_in, fee, _ = abi.decode_quote_exact_input_single_call(data)
        key = (token_in.lower(), token_out.lower(), fee)

        if key in self._tier_outputs:
            outcome = self._tier_outputs[key]
        elif fee in self.liquid_tiers:
            outcome = self._simulate(token_in.lower(), token_out.lower(), amount_in, fee)
        else:
            outcome = None

        if isinstance(outcome, Exception):
            raise outcome
        if outcome is None:
            raise ContractRevertError(f"Simulated pool missing for fee tier {fee}", chain=self.chain, fee_tier=fee)

        logger.debug(f"Simulated quote on {self.chain}: fee={fee} amount_out={outcome}")
        return abi.encode_quote_result(
            abi.QuoteResult(
                amount_out=outcome,
                sqrt_price_x96_after=0,
                initialized_ticks_crossed=1,
                gas_estimate=SIMULATED_GAS_ESTIMATE,
            )
        )

    def _simulate(self, token_in: str, token_out: str, amount_in: int, fee: int) -> Optional[int]:
        src = self._by_address.get(token_in)
        dst = self._by_address.get(token_out)
        if src is None or dst is None:
            return None
        src_price = self._prices.get(src.symbol)
        dst_price = self._prices.get(dst.symbol)
        if not src_price or not dst_price:
            return None

        with localcontext() as ctx:
            ctx.prec = 78
            value = Decimal(amount_in).scaleb(-src.decimals) * src_price / dst_price
            value *= 1 - Decimal(fee) / Decimal(1_000_000)
            return int(value.scaleb(dst.decimals))

    def _allowance(self, token: str, data: bytes) -> bytes:
        owner, spender = abi.decode_allowance_call(data)
        if spender.lower() != self.descriptor.router.lower():
            return abi.encode_uint256(0)
        return abi.encode_uint256(self._allowances.get((token.lower(), owner.lower()), 0))
