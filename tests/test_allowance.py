"""Tests for allowance checks and approval transactions."""

import pytest

from ammswap import abi
from ammswap.errors import InvalidRequestError, RpcConnectivityError, UnsupportedTokenError
from ammswap.services.allowance_checker import AllowanceChecker

OWNER = "0x1111111111111111111111111111111111111111"


@pytest.fixture
def checker(registry, rpc_pool):
    return AllowanceChecker(registry, rpc_pool, approval_gas_limit=100000)


class TestCheckAllowance:
    """Tests for AllowanceChecker.check_allowance."""

    @pytest.mark.asyncio
    async def test_insufficient_allowance(self, checker, ethereum):
        ethereum.set_allowance("USDC", OWNER, 50_000_000)

        status = await checker.check_allowance("ethereum", "USDC", OWNER, "100")

        assert status.needs_approval is True
        assert status.current_allowance == "50"
        assert status.spender == ethereum.descriptor.router

    @pytest.mark.asyncio
    async def test_sufficient_allowance(self, checker, ethereum):
        ethereum.set_allowance("USDC", OWNER, 100_000_000)

        status = await checker.check_allowance("ethereum", "USDC", OWNER, "100")

        assert status.needs_approval is False
        assert status.current_allowance == "100"

    @pytest.mark.asyncio
    async def test_queries_token_for_router(self, checker, ethereum):
        await checker.check_allowance("ethereum", "DAI", OWNER, "1")

        to, data = ethereum.calls[0]
        owner, spender = abi.decode_allowance_call(data)
        assert to == ethereum.descriptor.tokens["DAI"].address
        assert owner.lower() == OWNER
        assert spender == ethereum.descriptor.router

    @pytest.mark.asyncio
    async def test_no_allowance(self, checker, ethereum):
        status = await checker.check_allowance("ethereum", "USDT", OWNER, "0.000001")

        assert status.needs_approval is True
        assert status.current_allowance == "0"

    @pytest.mark.asyncio
    async def test_native_needs_no_approval(self, checker, polygon):
        status = await checker.check_allowance("polygon", "MATIC", OWNER, "10")

        assert status.needs_approval is False
        assert status.current_allowance == "unlimited"
        assert polygon.calls == []

    @pytest.mark.asyncio
    async def test_invalid_owner(self, checker, ethereum):
        with pytest.raises(InvalidRequestError):
            await checker.check_allowance("ethereum", "USDC", "0xnotanaddress", "1")
        assert ethereum.calls == []

    @pytest.mark.asyncio
    async def test_connectivity(self, checker, ethereum):
        ethereum.offline = True

        with pytest.raises(RpcConnectivityError):
            await checker.check_allowance("ethereum", "USDC", OWNER, "1")


class TestApprovalTransaction:
    """Tests for AllowanceChecker.build_approval_transaction."""

    def test_unlimited_approval(self, checker, registry):
        chain = registry.resolve_chain("arbitrum")

        tx = checker.build_approval_transaction("arbitrum", "USDC")

        assert tx.chain == "arbitrum"
        assert tx.chain_id == 42161
        assert tx.to == chain.tokens["USDC"].address
        assert tx.value == "0x0"
        assert tx.gas_limit == "100000"
        spender, amount = abi.decode_approve(abi.from_hex(tx.data))
        assert spender == chain.router
        assert amount == abi.MAX_UINT256
        assert tx.warnings

    def test_native_rejected(self, checker):
        with pytest.raises(InvalidRequestError):
            checker.build_approval_transaction("ethereum", "ETH")

    def test_unknown_token(self, checker):
        with pytest.raises(UnsupportedTokenError):
            checker.build_approval_transaction("base", "USDT")
