"""Tests for the JSON-RPC eth_call client."""

import json

import httpx
import pytest

from ammswap import abi
from ammswap.config import Settings
from ammswap.errors import ContractRevertError, RpcConnectivityError, UnsupportedChainError
from ammswap.rpc import JsonRpcClient, RpcPool

QUOTER = "0x61fFE014bA17989E743c5F6cB21bF9697530B21e"


def _client(handler) -> JsonRpcClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return JsonRpcClient("ethereum", "https://rpc.test", client=http)


class TestJsonRpcClient:
    """Tests for JsonRpcClient error mapping."""

    @pytest.mark.asyncio
    async def test_successful_call(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(json.loads(request.content))
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": "0x" + "00" * 31 + "2a"})

        result = await _client(handler).eth_call(QUOTER, b"\x01\x02")

        assert abi.decode_uint256(result) == 42
        assert seen["method"] == "eth_call"
        assert seen["params"] == [{"to": QUOTER, "data": "0x0102"}, "latest"]

    @pytest.mark.asyncio
    async def test_revert_error(self):
        def handler(request):
            return httpx.Response(
                200, json={"jsonrpc": "2.0", "id": 1, "error": {"code": 3, "message": "execution reverted"}}
            )

        with pytest.raises(ContractRevertError):
            await _client(handler).eth_call(QUOTER, b"\x00")

    @pytest.mark.asyncio
    async def test_revert_message_without_code(self):
        def handler(request):
            return httpx.Response(
                200, json={"jsonrpc": "2.0", "id": 1, "error": {"code": -32000, "message": "Execution Reverted"}}
            )

        with pytest.raises(ContractRevertError):
            await _client(handler).eth_call(QUOTER, b"\x00")

    @pytest.mark.asyncio
    async def test_empty_result_is_revert(self):
        def handler(request):
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": "0x"})

        with pytest.raises(ContractRevertError):
            await _client(handler).eth_call(QUOTER, b"\x00")

    @pytest.mark.asyncio
    async def test_other_rpc_error_is_connectivity(self):
        def handler(request):
            return httpx.Response(
                200, json={"jsonrpc": "2.0", "id": 1, "error": {"code": -32005, "message": "rate limited"}}
            )

        with pytest.raises(RpcConnectivityError) as exc:
            await _client(handler).eth_call(QUOTER, b"\x00")
        assert exc.value.retryable is True
        assert exc.value.chain == "ethereum"

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        def handler(request):
            return httpx.Response(502, text="bad gateway")

        with pytest.raises(RpcConnectivityError):
            await _client(handler).eth_call(QUOTER, b"\x00")

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        def handler(request):
            return httpx.Response(200, text="<html>nope</html>")

        with pytest.raises(RpcConnectivityError):
            await _client(handler).eth_call(QUOTER, b"\x00")

    @pytest.mark.asyncio
    async def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(RpcConnectivityError):
            await _client(handler).eth_call(QUOTER, b"\x00")


class TestRpcPool:
    """Tests for per-chain client selection."""

    def test_reuses_client_per_chain(self, registry):
        pool = RpcPool(Settings(_env_file=None))
        chain = registry.resolve_chain("ethereum")

        client = pool.for_chain(chain)

        assert isinstance(client, JsonRpcClient)
        assert client.rpc_url == "https://eth.llamarpc.com"
        assert pool.for_chain(chain) is client

    def test_url_from_settings(self, registry):
        pool = RpcPool(Settings(_env_file=None, polygon_rpc_url="https://polygon.test/key"))
        client = pool.for_chain(registry.resolve_chain("polygon"))
        assert client.rpc_url == "https://polygon.test/key"

    def test_missing_url(self, registry):
        pool = RpcPool(Settings(_env_file=None, base_rpc_url=""))
        with pytest.raises(UnsupportedChainError):
            pool.for_chain(registry.resolve_chain("base"))
