"""Chain and token information contracts."""

from pydantic import BaseModel, Field


class TokenInfo(BaseModel):
    """A token listed on one chain."""

    symbol: str = Field(..., description="Token symbol")
    address: str = Field(..., description="Contract address (wrapped contract for the native asset)")
    decimals: int = Field(..., description="Token decimals")
    is_native: bool = Field(default=False, description="Whether this is the chain's native asset")


class ChainInfo(BaseModel):
    """Information about a supported deployment."""

    key: str = Field(..., description="Chain key (ethereum, polygon, etc.)")
    name: str = Field(..., description="Chain display name")
    chain_id: int = Field(..., description="EVM chain ID (1 for Ethereum, etc.)")
    native_asset: str = Field(..., description="Native asset symbol")
    wrapped_asset: str = Field(..., description="Wrapped native token symbol")
    router: str = Field(..., description="Swap router contract")
    quoter: str = Field(..., description="Quoter contract")
    explorer_url: str = Field(..., description="Block explorer URL")
    fee_tiers: list[int] = Field(default_factory=list, description="Probed pool fee tiers")


class ChainListResponse(BaseModel):
    """Response containing list of supported chains."""

    success: bool = True
    chains: list[ChainInfo] = Field(default_factory=list)
    total: int = Field(default=0)


class TokenListResponse(BaseModel):
    """Response containing the tokens of one chain."""

    success: bool = True
    chain: str
    tokens: list[TokenInfo] = Field(default_factory=list)
    total: int = Field(default=0)
