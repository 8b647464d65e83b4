"""Allowance check contracts."""

from typing import Optional

from pydantic import BaseModel, Field


class AllowanceRequest(BaseModel):
    """Request to check whether the router may spend the owner's tokens."""

    chain: str = Field(..., description="Chain key")
    token: str = Field(..., description="Token symbol being sold")
    owner: str = Field(..., description="Wallet address that holds the tokens")
    amount: str = Field(..., description="Amount to be swapped, decimal string")


class AllowanceStatus(BaseModel):
    """Result of an allowance check."""

    needs_approval: bool = Field(..., description="True if an approval tx is required first")
    current_allowance: str = Field(
        ..., description="Allowance granted to the router, or 'unlimited' for native assets"
    )
    chain: Optional[str] = Field(None, description="Chain key")
    token: Optional[str] = Field(None, description="Token symbol")
    owner: Optional[str] = Field(None, description="Token owner")
    spender: Optional[str] = Field(None, description="Router address checked")
