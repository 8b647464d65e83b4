"""Chain service for deployment metadata.

Provides read-only access to the chains and tokens in the registry.
"""

import logging
from typing import Optional, Union

from ammswap.contracts.chains import (
    ChainInfo,
    ChainListResponse,
    TokenInfo,
    TokenListResponse,
)
from ammswap.errors import UnsupportedChainError
from ammswap.registry import ChainDescriptor, ChainRegistry

logger = logging.getLogger(__name__)


def _chain_info(chain: ChainDescriptor) -> ChainInfo:
    return ChainInfo(
        key=chain.key,
        name=chain.name,
        chain_id=chain.chain_id,
        native_asset=chain.native_symbol,
        wrapped_asset=chain.wrapped_symbol,
        router=chain.router,
        quoter=chain.quoter,
        explorer_url=chain.explorer_url,
        fee_tiers=list(chain.fee_tiers),
    )


class ChainService:
    """Service for chain and token metadata.

    This is a READ-ONLY service over the immutable registry.
    """

    def __init__(self, registry: ChainRegistry):
        self.registry = registry

    def get_supported_chains(self) -> ChainListResponse:
        """Get list of supported chains.

        Returns:
            ChainListResponse with all supported chains
        """
        chains = [_chain_info(chain) for chain in self.registry.chains()]
        return ChainListResponse(
            success=True,
            chains=chains,
            total=len(chains),
        )

    def get_chain(self, chain: Union[str, int]) -> Optional[ChainInfo]:
        """Get information about a specific chain.

        Args:
            chain: Chain key (ethereum, polygon, etc.) or chain id

        Returns:
            ChainInfo or None if not found
        """
        try:
            return _chain_info(self.registry.resolve_chain(chain))
        except UnsupportedChainError:
            return None

    def get_supported_tokens(self, chain: Union[str, int]) -> TokenListResponse:
        """Get the tokens listed on one chain.

        Raises:
            UnsupportedChainError: unknown chain
        """
        descriptor = self.registry.resolve_chain(chain)
        tokens = [
            TokenInfo(
                symbol=token.symbol,
                address=token.address,
                decimals=token.decimals,
                is_native=token.is_native,
            )
            for token in descriptor.tokens.values()
        ]
        return TokenListResponse(
            success=True,
            chain=descriptor.key,
            tokens=tokens,
            total=len(tokens),
        )

    def explorer_tx_url(self, chain: Union[str, int], tx_hash: str) -> str:
        """Block explorer link for a transaction hash."""
        return self.registry.resolve_chain(chain).explorer_tx_url(tx_hash)
