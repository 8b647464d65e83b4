"""Pytest configuration and fixtures."""

import os

import pytest

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["DRY_RUN"] = "true"
os.environ["DEBUG"] = "false"

from ammswap.config import Settings
from ammswap.dry_run import DryRunRpcClient
from ammswap.registry import build_default_registry
from ammswap.rpc import RpcPool
from ammswap.services.swap_service import create_swap_service



@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, environment="test", dry_run=True)


@pytest.fixture
def registry():
    return build_default_registry()


@pytest.fixture
def rpc_pool(settings):
    """Pool whose clients are simulated chains."""
    return RpcPool(settings, factory=DryRunRpcClient)


@pytest.fixture
def ethereum(registry, rpc_pool) -> DryRunRpcClient:
    """Simulated Ethereum client shared with every service built on ``rpc_pool``."""
    return rpc_pool.for_chain(registry.resolve_chain("ethereum"))


@pytest.fixture
def polygon(registry, rpc_pool) -> DryRunRpcClient:
    return rpc_pool.for_chain(registry.resolve_chain("polygon"))


@pytest.fixture
def swap_service(settings, registry, rpc_pool):
    return create_swap_service(settings, registry=registry, rpc_pool=rpc_pool)
