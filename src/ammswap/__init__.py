"""Multi-chain swap engine for Uniswap-V3-style AMM deployments."""

__version__ = "0.1.0"
