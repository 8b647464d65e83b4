"""Shared service instances for the HTTP controllers.

Routes receive services through ``Depends`` so tests can swap them with
``app.dependency_overrides``.
"""

from functools import lru_cache

from ammswap.config import get_settings
from ammswap.registry import get_registry
from ammswap.services.chain_service import ChainService
from ammswap.services.swap_service import SwapService, create_swap_service


@lru_cache
def get_swap_service() -> SwapService:
    return create_swap_service(get_settings())


@lru_cache
def get_chain_service() -> ChainService:
    return ChainService(get_registry(get_settings().registry_file))
