"""Transaction contracts for non-custodial operations.

These contracts define unsigned transactions that clients sign locally.
NO signing or broadcasting happens here.
"""

from typing import Optional

from pydantic import BaseModel, Field


class UnsignedTransaction(BaseModel):
    """An unsigned transaction for client-side signing.

    The client is responsible for:
    1. Assigning the nonce (approval and swap from one address must be ordered)
    2. Signing this transaction with their private key
    3. Broadcasting the signed transaction and waiting for the receipt
    """

    chain: str = Field(..., description="Chain identifier (ethereum, polygon, etc.)")
    chain_id: int = Field(..., description="EVM chain ID")
    to: str = Field(..., description="Destination contract address")
    data: str = Field(default="0x", description="Transaction data (hex encoded)")
    value: str = Field(default="0x0", description="Value in wei (hex string)")
    gas_limit: Optional[str] = Field(None, description="Gas limit hint (decimal)")

    # Additional context for client
    description: Optional[str] = Field(None, description="Human-readable description")
    warnings: list[str] = Field(default_factory=list, description="Any warnings")

    @property
    def value_wei(self) -> int:
        return int(self.value, 16)


class ApprovalRequest(BaseModel):
    """Request to prepare an unlimited router approval."""

    chain: str = Field(..., description="Chain key")
    token: str = Field(..., description="Token symbol to approve")

