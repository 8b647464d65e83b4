"""Swap service: the engine's single entry point.

SECURITY: This service does NOT:
- Access private keys
- Sign transactions
- Broadcast transactions

It ONLY:
- Quotes the AMM's fee tiers over eth_call
- Reads ERC-20 allowances
- Builds unsigned approval and swap transactions

Callers sequence the operations: quote, then (if needed) approval and
wait for it to be mined, then swap.
"""

import logging
from decimal import Decimal
from typing import Optional, Union

from ammswap.config import Settings, get_settings
from ammswap.contracts.allowances import AllowanceStatus
from ammswap.contracts.quotes import Quote
from ammswap.contracts.swaps import SwapRequest
from ammswap.contracts.transactions import UnsignedTransaction
from ammswap.dry_run import DryRunRpcClient
from ammswap.registry import ChainRegistry, get_registry
from ammswap.rpc import RpcPool
from ammswap.services.allowance_checker import AllowanceChecker
from ammswap.services.quote_engine import QuoteEngine
from ammswap.services.transaction_builder import TransactionBuilder
from ammswap.units import AmountLike

logger = logging.getLogger(__name__)


class SwapService:
    """Stateless façade over quoting, allowances and transaction building.

    Holds no per-request state; concurrent calls share only the read-only
    registry and the RPC clients.
    """

    def __init__(
        self,
        quote_engine: QuoteEngine,
        allowance_checker: AllowanceChecker,
        transaction_builder: TransactionBuilder,
    ):
        self._quotes = quote_engine
        self._allowances = allowance_checker
        self._builder = transaction_builder

    @property
    def registry(self) -> ChainRegistry:
        return self._quotes.registry

    async def get_quote(
        self,
        chain: Union[str, int],
        token_in: str,
        token_out: str,
        amount_in: AmountLike,
        slippage_percent: Optional[AmountLike] = None,
    ) -> Quote:
        return await self._quotes.get_quote(chain, token_in, token_out, amount_in, slippage_percent)

    async def check_allowance(
        self,
        chain: Union[str, int],
        token: str,
        owner: str,
        amount: AmountLike,
    ) -> AllowanceStatus:
        return await self._allowances.check_allowance(chain, token, owner, amount)

    def build_approval_transaction(self, chain: Union[str, int], token: str) -> UnsignedTransaction:
        return self._allowances.build_approval_transaction(chain, token)

    def build_swap_transaction(self, request: SwapRequest, quote: Quote) -> UnsignedTransaction:
        return self._builder.build_swap_transaction(request, quote)


def create_swap_service(
    settings: Optional[Settings] = None,
    registry: Optional[ChainRegistry] = None,
    rpc_pool: Optional[RpcPool] = None,
) -> SwapService:
    """Wire a SwapService from settings.

    With ``dry_run`` set and no explicit pool, quoter and allowance calls
    are answered by the simulated chain instead of RPC nodes.
    """
    settings = settings or get_settings()
    registry = registry or get_registry(settings.registry_file)

    if rpc_pool is None:
        if settings.dry_run:
            logger.warning("DRY_RUN enabled: quotes come from the simulated chain")
            rpc_pool = RpcPool(settings, factory=DryRunRpcClient)
        else:
            rpc_pool = RpcPool(settings)

    return SwapService(
        quote_engine=QuoteEngine(
            registry, rpc_pool, default_slippage=Decimal(settings.default_slippage_percent)
        ),
        allowance_checker=AllowanceChecker(
            registry, rpc_pool, approval_gas_limit=settings.approval_gas_limit
        ),
        transaction_builder=TransactionBuilder(
            registry,
            deadline_seconds=settings.swap_deadline_seconds,
            gas_limit=settings.swap_gas_limit,
        ),
    )
