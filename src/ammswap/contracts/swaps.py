"""Swap request contracts."""

from decimal import Decimal
from typing import Optional

from eth_utils import is_address, to_checksum_address
from pydantic import BaseModel, Field, field_validator

from ammswap.contracts.allowances import AllowanceStatus
from ammswap.contracts.quotes import Quote
from ammswap.contracts.transactions import UnsignedTransaction
from ammswap.errors import InvalidRequestError
from ammswap.units import normalize_amount, parse_amount, parse_slippage


def checksum_address(value: str, field: str = "address") -> str:
    """Validate an EVM address and return it checksummed.

    Mixed-case input must carry a valid checksum.
    """
    if not isinstance(value, str) or not is_address(value.strip()):
        raise InvalidRequestError(f"Invalid {field}: {value!r}")
    return to_checksum_address(value.strip())


class SwapRequest(BaseModel):
    """Caller input for a swap, validated before any network call."""

    chain: str = Field(..., description="Chain key (ethereum, polygon, ...)")
    token_in: str = Field(..., description="Input token symbol")
    token_out: str = Field(..., description="Output token symbol")
    amount: str = Field(..., description="Input amount as a decimal string")
    recipient: str = Field(..., description="Address receiving the output tokens")
    slippage: Optional[Decimal] = Field(
        default=None,
        description="Slippage tolerance in percent (default from settings, 0.5)",
    )

    @field_validator("amount", mode="before")
    @classmethod
    def _check_amount(cls, value) -> str:
        return normalize_amount(parse_amount(value))

    @field_validator("slippage", mode="before")
    @classmethod
    def _check_slippage(cls, value) -> Optional[Decimal]:
        return parse_slippage(value) if value is not None else None

    @field_validator("recipient")
    @classmethod
    def _check_recipient(cls, value: str) -> str:
        return checksum_address(value, "recipient")

    @field_validator("token_in", "token_out")
    @classmethod
    def _upper_symbol(cls, value: str) -> str:
        return value.strip().upper()


class SwapPlanRequest(SwapRequest):
    """Swap request plus the address that will sign (defaults to recipient)."""

    owner: Optional[str] = Field(None, description="Sender address (defaults to recipient)")

    @field_validator("owner")
    @classmethod
    def _check_owner(cls, value: Optional[str]) -> Optional[str]:
        return checksum_address(value, "owner") if value is not None else None


class SwapPlanResponse(BaseModel):
    """Everything a wallet needs to run approve-then-swap.

    If ``approval_transaction`` is present it must be mined before the
    swap is sent.
    """

    success: bool = True
    quote: Quote
    allowance: AllowanceStatus
    approval_transaction: Optional[UnsignedTransaction] = None
    swap_transaction: UnsignedTransaction


class SwapTransactionRequest(BaseModel):
    """Request to prepare a swap from a previously fetched quote."""

    request: SwapRequest
    quote: Quote
