"""Allowance checks and approval transactions for the swap router."""

import logging
from typing import Union

from eth_abi.exceptions import DecodingError

from ammswap import abi
from ammswap.contracts.allowances import AllowanceStatus
from ammswap.contracts.swaps import checksum_address
from ammswap.contracts.transactions import UnsignedTransaction
from ammswap.errors import InvalidRequestError, RpcConnectivityError
from ammswap.registry import ChainRegistry
from ammswap.rpc import RpcPool
from ammswap.units import AmountLike, from_base_units, parse_amount, to_base_units

logger = logging.getLogger(__name__)

UNLIMITED = "unlimited"


class AllowanceChecker:
    """Reads ERC-20 allowances granted to the router and builds approvals.

    Native assets are sent as transaction value and never need approval.
    Approvals are always unlimited (2**256 - 1) so repeated swaps of the
    same token need a single approval.
    """

    def __init__(self, registry: ChainRegistry, rpc_pool: RpcPool, approval_gas_limit: int = 100000):
        self.registry = registry
        self.rpc_pool = rpc_pool
        self.approval_gas_limit = approval_gas_limit

    async def check_allowance(
        self,
        chain: Union[str, int],
        token: str,
        owner: str,
        amount: AmountLike,
    ) -> AllowanceStatus:
        """Check whether ``owner`` must approve the router before swapping.

        Returns:
            AllowanceStatus; needs_approval is True iff allowance < amount

        Raises:
            InvalidRequestError: bad amount or owner address
            UnsupportedChainError / UnsupportedTokenError
            RpcConnectivityError: allowance could not be read
        """
        requested = parse_amount(amount)
        owner = checksum_address(owner, "owner")
        descriptor = self.registry.resolve_chain(chain)
        token_info = self.registry.resolve_token(descriptor.key, token)

        if token_info.is_native:
            return AllowanceStatus(
                needs_approval=False,
                current_allowance=UNLIMITED,
                chain=descriptor.key,
                token=token_info.symbol,
                owner=owner,
            )

        raw_requested = to_base_units(requested, token_info.decimals)
        rpc = self.rpc_pool.for_chain(descriptor)
        reply = await rpc.eth_call(
            token_info.address, abi.encode_allowance(owner, descriptor.router)
        )
        try:
            raw_allowance = abi.decode_uint256(reply)
        except DecodingError as e:
            raise RpcConnectivityError(
                f"Unreadable allowance reply from {token_info.symbol} on {descriptor.key}: {e}",
                chain=descriptor.key,
                token=token_info.symbol,
            )

        needs_approval = raw_allowance < raw_requested
        logger.info(
            f"Allowance {token_info.symbol} on {descriptor.key} for {owner}: "
            f"{raw_allowance} (requested {raw_requested}, needs_approval={needs_approval})"
        )
        return AllowanceStatus(
            needs_approval=needs_approval,
            current_allowance=from_base_units(raw_allowance, token_info.decimals, trim=True),
            chain=descriptor.key,
            token=token_info.symbol,
            owner=owner,
            spender=descriptor.router,
        )

    def build_approval_transaction(self, chain: Union[str, int], token: str) -> UnsignedTransaction:
        """Build ``approve(router, MAX_UINT256)`` on the token contract.

        Raises:
            InvalidRequestError: token is the chain's native asset
            UnsupportedChainError / UnsupportedTokenError
        """
        descriptor = self.registry.resolve_chain(chain)
        token_info = self.registry.resolve_token(descriptor.key, token)

        if token_info.is_native:
            raise InvalidRequestError(
                f"{token_info.symbol} is native on {descriptor.key} and needs no approval",
                chain=descriptor.key,
                token=token_info.symbol,
            )

        data = abi.encode_approve(descriptor.router, abi.MAX_UINT256)
        logger.info(f"Built unlimited approval of {token_info.symbol} on {descriptor.key}")

        return UnsignedTransaction(
            chain=descriptor.key,
            chain_id=descriptor.chain_id,
            to=token_info.address,
            data=abi.to_hex(data),
            value="0x0",
            gas_limit=str(self.approval_gas_limit),
            description=f"Approve swap router {descriptor.router[:10]}... to spend {token_info.symbol}",
            warnings=["This grants the router an unlimited allowance. Review carefully."],
        )
