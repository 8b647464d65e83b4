"""Allowance API endpoints."""

from fastapi import APIRouter, Depends

from ammswap.contracts.allowances import AllowanceRequest, AllowanceStatus
from ammswap.controllers.dependencies import get_swap_service
from ammswap.services.swap_service import SwapService

router = APIRouter(prefix="/allowances", tags=["allowances"])


@router.post("/", response_model=AllowanceStatus)
async def check_allowance(
    request: AllowanceRequest,
    service: SwapService = Depends(get_swap_service),
) -> AllowanceStatus:
    """Check whether the swap router may already spend ``amount`` of the token."""
    return await service.check_allowance(
        request.chain, request.token, request.owner, request.amount
    )
