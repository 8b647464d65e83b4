"""Engine services.

SECURITY: These services MUST NOT:
- Access private keys or seed phrases
- Sign or broadcast transactions

These services CAN:
- Query chain state through eth_call (quotes, allowances)
- Prepare unsigned transactions for client signing
"""

from ammswap.services.allowance_checker import AllowanceChecker
from ammswap.services.chain_service import ChainService
from ammswap.services.quote_engine import QuoteEngine
from ammswap.services.swap_service import SwapService, create_swap_service
from ammswap.services.transaction_builder import TransactionBuilder

__all__ = [
    "AllowanceChecker",
    "ChainService",
    "QuoteEngine",
    "SwapService",
    "TransactionBuilder",
    "create_swap_service",
]
