"""Error taxonomy for the swap engine.

Every failure surfaced to callers is a SwapEngineError subclass with a
machine-readable ``kind`` plus the offending chain, token and fee tier where
known, so callers can render a message or decide whether to retry.
"""

from typing import Optional


class SwapEngineError(Exception):
    """Base class for all engine errors."""

    kind = "engine"
    retryable = False

    def __init__(
        self,
        message: str,
        *,
        chain: Optional[str] = None,
        token: Optional[str] = None,
        fee_tier: Optional[int] = None,
    ):
        self.message = message
        self.chain = chain
        self.token = token
        self.fee_tier = fee_tier
        super().__init__(message)

    def to_dict(self) -> dict:
        """Structured form for API responses and logs."""
        return {
            "kind": self.kind,
            "message": self.message,
            "chain": self.chain,
            "token": self.token,
            "fee_tier": self.fee_tier,
            "retryable": self.retryable,
        }


class RegistryError(SwapEngineError, ValueError):
    """Raised when registry data violates its invariants."""

    kind = "registry"


class UnsupportedChainError(SwapEngineError):
    """Chain key or id is not in the registry."""

    kind = "unsupported_chain"

    def __init__(self, chain: str):
        super().__init__(f"Unsupported chain: {chain}", chain=str(chain))


class UnsupportedTokenError(SwapEngineError):
    """Token symbol is not listed for the chain."""

    kind = "unsupported_token"

    def __init__(self, chain: str, token: str):
        super().__init__(
            f"Unsupported token {token} on chain {chain}", chain=chain, token=token
        )


class InvalidRequestError(SwapEngineError, ValueError):
    """Request rejected by validation before any network call."""

    kind = "invalid_request"


class InvalidAmountError(InvalidRequestError):
    """Amount is unparseable, non-positive or too precise for the token."""


class InvalidSlippageError(InvalidRequestError):
    """Slippage is outside [0, 100)."""


class NoLiquidityError(SwapEngineError):
    """No fee tier returned a usable quote."""

    kind = "no_liquidity"


class RpcConnectivityError(SwapEngineError):
    """The RPC endpoint could not be reached or answered garbage."""

    kind = "connectivity"
    retryable = True


class ContractRevertError(SwapEngineError):
    """eth_call reverted or returned no data."""

    kind = "reverted"
