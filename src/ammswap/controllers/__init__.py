"""HTTP controllers for the swap API.

SECURITY: These controllers MUST NOT:
- Access private keys
- Sign or broadcast transactions

All operations are read-only or prepare data for client-side signing.
"""

from ammswap.controllers.allowances import router as allowances_router
from ammswap.controllers.chains import router as chains_router
from ammswap.controllers.quotes import router as quotes_router
from ammswap.controllers.swaps import router as swaps_router
from ammswap.controllers.transactions import router as transactions_router

__all__ = [
    "allowances_router",
    "chains_router",
    "quotes_router",
    "swaps_router",
    "transactions_router",
]
