"""Request and response contracts.

These Pydantic models are the value objects exchanged with callers.
"""

from ammswap.contracts.allowances import AllowanceRequest, AllowanceStatus
from ammswap.contracts.chains import (
    ChainInfo,
    ChainListResponse,
    TokenInfo,
    TokenListResponse,
)
from ammswap.contracts.quotes import Quote, QuoteRequest
from ammswap.contracts.swaps import (
    SwapPlanRequest,
    SwapPlanResponse,
    SwapRequest,
    SwapTransactionRequest,
)
from ammswap.contracts.transactions import ApprovalRequest, UnsignedTransaction

__all__ = [
    # Quote contracts
    "Quote",
    "QuoteRequest",
    # Allowance contracts
    "AllowanceRequest",
    "AllowanceStatus",
    # Chain contracts
    "ChainInfo",
    "ChainListResponse",
    "TokenInfo",
    "TokenListResponse",
    # Transaction contracts
    "ApprovalRequest",
    "UnsignedTransaction",
    # Swap contracts
    "SwapRequest",
    "SwapPlanRequest",
    "SwapPlanResponse",
    "SwapTransactionRequest",
]
