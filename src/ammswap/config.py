"""Application configuration using pydantic-settings.

RPC endpoints, swap defaults and API options are read from environment
variables (or a local .env file).
"""

from decimal import Decimal
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # API
    # ======================
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8000, description="API server port")

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=False, description="Enable debug mode")

    # ======================
    # Chain RPC Endpoints
    # ======================
    ethereum_rpc_url: str = Field(
        default="https://eth.llamarpc.com", description="Ethereum RPC URL"
    )
    arbitrum_rpc_url: str = Field(
        default="https://arb1.arbitrum.io/rpc", description="Arbitrum RPC URL"
    )
    base_rpc_url: str = Field(
        default="https://mainnet.base.org", description="Base RPC URL"
    )
    polygon_rpc_url: str = Field(
        default="https://polygon-rpc.com", description="Polygon RPC URL"
    )
    optimism_rpc_url: str = Field(
        default="https://mainnet.optimism.io", description="Optimism RPC URL"
    )
    rpc_timeout_seconds: float = Field(
        default=15.0, gt=0, description="Timeout for a single eth_call request"
    )

    # ======================
    # Swap Defaults
    # ======================
    default_slippage_percent: Decimal = Field(
        default=Decimal("0.5"), ge=0, lt=100, description="Default slippage tolerance (%)"
    )
    swap_deadline_seconds: int = Field(
        default=1200, gt=0, description="Seconds until a built swap expires (20 minutes)"
    )
    swap_gas_limit: int = Field(default=300000, description="Gas limit hint for swaps")
    approval_gas_limit: int = Field(default=100000, description="Gas limit hint for approvals")

    # ======================
    # Registry
    # ======================
    registry_file: Optional[str] = Field(
        default=None, description="JSON file replacing the built-in chain/token registry"
    )

    # ======================
    # Safety Guards
    # ======================
    dry_run: bool = Field(
        default=False, description="Answer quoter/allowance calls from the simulated chain"
    )

    def get_rpc_url(self, chain: str) -> str:
        """Get RPC URL for a chain key (ethereum, polygon, ...)."""
        rpc_map = {
            "ethereum": self.ethereum_rpc_url,
            "arbitrum": self.arbitrum_rpc_url,
            "base": self.base_rpc_url,
            "polygon": self.polygon_rpc_url,
            "optimism": self.optimism_rpc_url,
        }
        return rpc_map.get(chain.lower(), "")

    def get_safe_dict(self) -> dict:
        """Return settings dict for diagnostics (RPC hosts only, no paths or queries)."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "dry_run": self.dry_run,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "rpc": {
                chain: self._redact_url(self.get_rpc_url(chain))
                for chain in ("ethereum", "arbitrum", "base", "polygon", "optimism")
            },
            "swap": {
                "default_slippage_percent": str(self.default_slippage_percent),
                "deadline_seconds": self.swap_deadline_seconds,
                "swap_gas_limit": self.swap_gas_limit,
                "approval_gas_limit": self.approval_gas_limit,
            },
            "registry_file": self.registry_file or "(built-in)",
        }

    @staticmethod
    def _redact_url(url: str) -> str:
        """Strip path and query from an RPC URL; providers embed API keys there."""
        if "://" not in url:
            return url
        proto, rest = url.split("://", 1)
        host = rest.split("/", 1)[0]
        if "@" in host:
            host = host.rsplit("@", 1)[1]
        suffix = "/***" if "/" in rest.strip("/") else ""
        return f"{proto}://{host}{suffix}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
