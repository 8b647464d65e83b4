"""Quote request and response contracts."""

import time
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class QuoteRequest(BaseModel):
    """Request for a swap quote."""

    chain: str = Field(..., description="Chain key (ethereum, polygon, ...) or chain id")
    token_in: str = Field(..., description="Input token symbol (e.g., ETH, USDC)")
    token_out: str = Field(..., description="Output token symbol")
    amount: str = Field(..., description="Input amount as a decimal string")
    slippage: Optional[Decimal] = Field(
        default=None,
        description="Slippage tolerance in percent (default from settings, 0.5)",
    )


class Quote(BaseModel):
    """Best single-pool quote across the chain's fee tiers.

    Produced fresh for every request; prices move, so callers should not
    hold on to it longer than needed to build the swap.
    """

    chain: str = Field(..., description="Chain key")
    token_in: str = Field(..., description="Input token symbol")
    token_out: str = Field(..., description="Output token symbol")
    amount_in: str = Field(..., description="Input amount")
    amount_out: str = Field(..., description="Expected output at the chosen tier")
    min_amount_out: str = Field(..., description="Minimum output after slippage")
    slippage_percent: Decimal = Field(..., description="Slippage tolerance used")
    fee_tier: int = Field(..., description="Chosen pool fee (500 = 0.05%)")
    route: str = Field(..., description="Human-readable route, e.g. 'ETH -> USDC (0.05% pool)'")
    gas_estimate: Optional[int] = Field(None, description="Quoter gas estimate for the swap")
    timestamp: float = Field(default_factory=time.time, description="When the quote was made")
