"""Chain and token registry for the AMM deployments.

The same Uniswap V3 contract interface is deployed on every chain below;
only addresses differ. The registry is built once at startup and never
mutated: every service receives the same instance and every lookup fails
fast on unknown chains or tokens before any RPC traffic.
"""

import json
import logging
from dataclasses import dataclass, field
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Union

from eth_utils import is_address, to_checksum_address

from ammswap.errors import RegistryError, UnsupportedChainError, UnsupportedTokenError

logger = logging.getLogger(__name__)


class FeeTier(IntEnum):
    """Pool fee in hundredths of a basis point."""

    LOWEST = 100  # 0.01%
    LOW = 500  # 0.05%
    MEDIUM = 3000  # 0.3%
    HIGH = 10000  # 1%


DEFAULT_FEE_TIERS: tuple[int, ...] = tuple(int(tier) for tier in FeeTier)


@dataclass(frozen=True)
class TokenDescriptor:
    """A token on one chain."""

    symbol: str
    address: str
    decimals: int
    is_native: bool = False


@dataclass(frozen=True)
class ChainDescriptor:
    """One AMM deployment target."""

    key: str
    chain_id: int
    name: str
    router: str  # SwapRouter02
    quoter: str  # QuoterV2
    explorer_url: str
    native_symbol: str
    wrapped_symbol: str
    fee_tiers: tuple[int, ...] = DEFAULT_FEE_TIERS
    rpc_url: str = ""  # fallback when settings have no URL for this chain
    tokens: Mapping[str, TokenDescriptor] = field(default_factory=dict)

    @property
    def tx_url_template(self) -> str:
        return f"{self.explorer_url.rstrip('/')}/tx/{{tx_hash}}"

    def explorer_tx_url(self, tx_hash: str) -> str:
        return self.tx_url_template.format(tx_hash=tx_hash)


# ======================
# Built-in deployments
# ======================
# Token entries: symbol -> (address, decimals). The native symbol maps to the
# wrapped-native contract.

_SWAP_ROUTER_02 = "0x68b3465833fb72A70ecDF485E0e4C7bD8665Fc45"
_QUOTER_V2 = "0x61fFE014bA17989E743c5F6cB21bF9697530B21e"

DEFAULT_CHAINS: dict[str, dict] = {
    "ethereum": {
        "chain_id": 1,
        "name": "Ethereum",
        "router": _SWAP_ROUTER_02,
        "quoter": _QUOTER_V2,
        "explorer_url": "https://etherscan.io",
        "native_symbol": "ETH",
        "wrapped_symbol": "WETH",
        "tokens": {
            "ETH": ("0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2", 18),
            "WETH": ("0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2", 18),
            "USDC": ("0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48", 6),
            "USDT": ("0xdAC17F958D2ee523a2206206994597C13D831ec7", 6),
            "WBTC": ("0x2260FAC5E5542a773Aa44fBCfeDf7C193bc2C599", 8),
            "DAI": ("0x6B175474E89094C44Da98b954EedeAC495271d0F", 18),
        },
    },
    "arbitrum": {
        "chain_id": 42161,
        "name": "Arbitrum One",
        "router": _SWAP_ROUTER_02,
        "quoter": _QUOTER_V2,
        "explorer_url": "https://arbiscan.io",
        "native_symbol": "ETH",
        "wrapped_symbol": "WETH",
        "tokens": {
            "ETH": ("0x82aF49447D8a07e3bd95BD0d56f35241523fBab1", 18),
            "WETH": ("0x82aF49447D8a07e3bd95BD0d56f35241523fBab1", 18),
            "USDC": ("0xaf88d065e77c8cC2239327C5EDb3A432268e5831", 6),
            "USDT": ("0xFd086bC7CD5C481DCC9C85ebE478A1C0b69FCbb9", 6),
            "ARB": ("0x912CE59144191C1204E64559FE8253a0e49E6548", 18),
        },
    },
    "base": {
        "chain_id": 8453,
        "name": "Base",
        "router": "0x2626664c2603336E57B271c5C0b26F421741e481",
        "quoter": "0x3d4e44Eb1374240CE5F1B871ab261CD16335B76a",
        "explorer_url": "https://basescan.org",
        "native_symbol": "ETH",
        "wrapped_symbol": "WETH",
        "tokens": {
            "ETH": ("0x4200000000000000000000000000000000000006", 18),
            "WETH": ("0x4200000000000000000000000000000000000006", 18),
            "USDC": ("0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913", 6),
        },
    },
    "polygon": {
        "chain_id": 137,
        "name": "Polygon",
        "router": _SWAP_ROUTER_02,
        "quoter": _QUOTER_V2,
        "explorer_url": "https://polygonscan.com",
        "native_symbol": "MATIC",
        "wrapped_symbol": "WMATIC",
        "tokens": {
            "MATIC": ("0x0d500B1d8E8eF31E21C99d1Db9A6444d3ADf1270", 18),
            "WMATIC": ("0x0d500B1d8E8eF31E21C99d1Db9A6444d3ADf1270", 18),
            "USDC": ("0x3c499c542cEF5E3811e1192ce70d8cC03d5c3359", 6),
            "USDT": ("0xc2132D05D31c914a87C6611C10748AEb04B58e8F", 6),
            "WETH": ("0x7ceB23fD6bC0adD59E62ac25578270cFf1b9f619", 18),
        },
    },
    "optimism": {
        "chain_id": 10,
        "name": "Optimism",
        "router": _SWAP_ROUTER_02,
        "quoter": _QUOTER_V2,
        "explorer_url": "https://optimistic.etherscan.io",
        "native_symbol": "ETH",
        "wrapped_symbol": "WETH",
        "tokens": {
            "ETH": ("0x4200000000000000000000000000000000000006", 18),
            "WETH": ("0x4200000000000000000000000000000000000006", 18),
            "USDC": ("0x0b2C639c533813f4Aa9D7837CAf62653d097Ff85", 6),
            "OP": ("0x4200000000000000000000000000000000000042", 18),
        },
    },
}


def _checksum(value: str, what: str) -> str:
    if not isinstance(value, str) or not is_address(value.lower()):
        raise RegistryError(f"Invalid address for {what}: {value!r}")
    return to_checksum_address(value.lower())


def _build_chain(key: str, data: dict) -> ChainDescriptor:
    """Validate one chain entry and freeze it into a ChainDescriptor."""
    key = key.lower()
    try:
        native = data["native_symbol"].upper()
        wrapped = data["wrapped_symbol"].upper()
        raw_tokens = data["tokens"]
        chain_id = int(data["chain_id"])
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise RegistryError(f"Malformed registry entry: {e}", chain=key)

    tokens: dict[str, TokenDescriptor] = {}
    for symbol, entry in raw_tokens.items():
        symbol_key = symbol.upper()
        if symbol_key in tokens:
            raise RegistryError(f"Duplicate token symbol {symbol_key}", chain=key, token=symbol_key)

        if isinstance(entry, dict):
            address, decimals = entry.get("address"), entry.get("decimals")
        else:
            address, decimals = entry

        if not isinstance(decimals, int) or isinstance(decimals, bool) or not 0 <= decimals <= 18:
            raise RegistryError(
                f"Token decimals must be an integer in [0, 18], got {decimals!r}",
                chain=key,
                token=symbol_key,
            )

        tokens[symbol_key] = TokenDescriptor(
            symbol=symbol_key,
            address=_checksum(address, f"{key}/{symbol_key}"),
            decimals=decimals,
            is_native=symbol_key == native,
        )

    for symbol in (native, wrapped):
        if symbol not in tokens:
            raise RegistryError(f"Missing token {symbol}", chain=key, token=symbol)
    if tokens[native].address != tokens[wrapped].address:
        raise RegistryError(
            f"{native} must resolve to the {wrapped} contract", chain=key, token=native
        )

    fee_tiers = tuple(int(fee) for fee in data.get("fee_tiers", DEFAULT_FEE_TIERS))
    if not fee_tiers or len(set(fee_tiers)) != len(fee_tiers):
        raise RegistryError(f"Fee tiers must be unique and non-empty: {fee_tiers}", chain=key)

    return ChainDescriptor(
        key=key,
        chain_id=chain_id,
        name=data.get("name", key.title()),
        router=_checksum(data.get("router"), f"{key} router"),
        quoter=_checksum(data.get("quoter"), f"{key} quoter"),
        explorer_url=data.get("explorer_url", ""),
        native_symbol=native,
        wrapped_symbol=wrapped,
        fee_tiers=fee_tiers,
        rpc_url=data.get("rpc_url", ""),
        tokens=MappingProxyType(tokens),
    )


class ChainRegistry:
    """Read-only lookup of chains and their tokens."""

    def __init__(self, chains: list[ChainDescriptor]):
        by_key: dict[str, ChainDescriptor] = {}
        by_id: dict[int, ChainDescriptor] = {}
        for chain in chains:
            if chain.key in by_key or chain.chain_id in by_id:
                raise RegistryError(f"Duplicate chain {chain.key} ({chain.chain_id})", chain=chain.key)
            by_key[chain.key] = chain
            by_id[chain.chain_id] = chain
        self._by_key = MappingProxyType(by_key)
        self._by_id = MappingProxyType(by_id)

    @classmethod
    def from_dict(cls, data: dict) -> "ChainRegistry":
        """Build from the ``DEFAULT_CHAINS`` layout (tokens as tuples or dicts)."""
        return cls([_build_chain(key, entry) for key, entry in data.items()])

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ChainRegistry":
        """Load a JSON file with the ``DEFAULT_CHAINS`` layout."""
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise RegistryError(f"Cannot load registry file {path}: {e}")
        if not isinstance(data, dict):
            raise RegistryError(f"Registry file {path} must contain a JSON object")
        return cls.from_dict(data)

    def chains(self) -> list[ChainDescriptor]:
        return list(self._by_key.values())

    def resolve_chain(self, chain: Union[str, int]) -> ChainDescriptor:
        """Look up by key ("polygon") or chain id (137 or "137")."""
        if isinstance(chain, int) and not isinstance(chain, bool):
            found = self._by_id.get(chain)
        else:
            text = str(chain).strip().lower()
            found = self._by_key.get(text)
            if found is None and text.isdigit():
                found = self._by_id.get(int(text))
        if found is None:
            raise UnsupportedChainError(str(chain))
        return found

    def resolve_token(self, chain: Union[str, int], symbol: str) -> TokenDescriptor:
        descriptor = self.resolve_chain(chain)
        token = descriptor.tokens.get(symbol.strip().upper()) if symbol else None
        if token is None:
            raise UnsupportedTokenError(descriptor.key, symbol)
        return token

    def tokens(self, chain: Union[str, int]) -> list[TokenDescriptor]:
        return list(self.resolve_chain(chain).tokens.values())

    def is_native(self, chain: Union[str, int], symbol: str) -> bool:
        return self.resolve_token(chain, symbol).is_native


def build_default_registry() -> ChainRegistry:
    return ChainRegistry.from_dict(DEFAULT_CHAINS)


@lru_cache
def get_registry(registry_file: Optional[str] = None) -> ChainRegistry:
    """Process-wide registry, built once per source."""
    if registry_file:
        logger.info(f"Loading chain registry from {registry_file}")
        return ChainRegistry.from_file(registry_file)
    return build_default_registry()
