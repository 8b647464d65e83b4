"""Read-only JSON-RPC access to EVM chains.

Only ``eth_call`` is needed. Failures are split into two kinds so callers
can tell an untradeable pair from a flaky endpoint:

- ContractRevertError: the node executed the call and it reverted, or the
  target returned no data (no pool, no contract).
- RpcConnectivityError: transport errors, timeouts, non-2xx responses,
  non-JSON bodies and any other JSON-RPC error.
"""

import itertools
import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

import httpx

from ammswap.abi import from_hex, to_hex
from ammswap.config import Settings
from ammswap.errors import ContractRevertError, RpcConnectivityError, UnsupportedChainError
from ammswap.registry import ChainDescriptor

logger = logging.getLogger(__name__)

# geth returns code 3 for reverts with data, -32000 with a message otherwise
_REVERT_CODES = {3}
_REVERT_MARKERS = ("revert", "invalid opcode", "out of gas")


class EthCallClient(ABC):
    """Anything that can execute a read-only contract call on one chain."""

    chain: str

    @abstractmethod
    async def eth_call(self, to: str, data: bytes) -> bytes:
        """Execute ``eth_call`` against the latest block.

        Raises:
            ContractRevertError: call reverted or returned no data
            RpcConnectivityError: endpoint unreachable or malformed reply
        """


class JsonRpcClient(EthCallClient):
    """eth_call over HTTP JSON-RPC using httpx.

    Pass ``client`` to share a connection pool (or inject a transport in
    tests); otherwise a short-lived AsyncClient is opened per call.
    """

    _ids = itertools.count(1)

    def __init__(
        self,
        chain: str,
        rpc_url: str,
        timeout: float = 15.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.chain = chain
        self.rpc_url = rpc_url
        self.timeout = timeout
        self._client = client

    async def eth_call(self, to: str, data: bytes) -> bytes:
        payload = {
            "jsonrpc": "2.0",
            "method": "eth_call",
            "params": [{"to": to, "data": to_hex(data)}, "latest"],
            "id": next(self._ids),
        }

        try:
            if self._client is not None:
                response = await self._client.post(self.rpc_url, json=payload, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(self.rpc_url, json=payload)
        except httpx.HTTPError as e:
            raise RpcConnectivityError(
                f"RPC request to {self.chain} failed: {type(e).__name__}: {e}",
                chain=self.chain,
            )

        if response.status_code != 200:
            raise RpcConnectivityError(
                f"RPC {self.chain} returned HTTP {response.status_code}", chain=self.chain
            )

        try:
            body = response.json()
        except ValueError:
            raise RpcConnectivityError(f"RPC {self.chain} returned non-JSON body", chain=self.chain)

        if not isinstance(body, dict):
            raise RpcConnectivityError(f"RPC {self.chain} returned malformed reply", chain=self.chain)

        if "error" in body:
            error = body["error"] or {}
            code = error.get("code") if isinstance(error, dict) else None
            message = str(error.get("message", error) if isinstance(error, dict) else error)
            if code in _REVERT_CODES or any(m in message.lower() for m in _REVERT_MARKERS):
                raise ContractRevertError(f"eth_call to {to} reverted: {message}", chain=self.chain)
            raise RpcConnectivityError(
                f"RPC {self.chain} error {code}: {message}", chain=self.chain
            )

        result = body.get("result")
        if not isinstance(result, str):
            raise RpcConnectivityError(f"RPC {self.chain} reply has no result", chain=self.chain)
        if result in ("0x", ""):
            raise ContractRevertError(f"eth_call to {to} returned no data", chain=self.chain)

        try:
            return from_hex(result)
        except ValueError:
            raise RpcConnectivityError(f"RPC {self.chain} result is not hex", chain=self.chain)


class RpcPool:
    """Hands out one EthCallClient per chain.

    ``factory`` builds a client for a chain descriptor; by default a
    JsonRpcClient pointed at the URL from settings.
    """

    def __init__(
        self,
        settings: Settings,
        factory: Optional[Callable[[ChainDescriptor], EthCallClient]] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._settings = settings
        self._factory = factory
        self._http = client
        self._clients: dict[str, EthCallClient] = {}

    def for_chain(self, chain: ChainDescriptor) -> EthCallClient:
        cached = self._clients.get(chain.key)
        if cached is not None:
            return cached

        if self._factory is not None:
            rpc = self._factory(chain)
        else:
            url = self._settings.get_rpc_url(chain.key) or chain.rpc_url
            if not url:
                raise UnsupportedChainError(chain.key)
            rpc = JsonRpcClient(
                chain.key, url, timeout=self._settings.rpc_timeout_seconds, client=self._http
            )
            logger.debug(f"Created RPC client for {chain.key}")

        self._clients[chain.key] = rpc
        return rpc
