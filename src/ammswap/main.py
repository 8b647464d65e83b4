"""Main entry point - API server and quote CLI."""

import argparse
import asyncio
import json
import logging
import sys
from typing import Optional

import uvicorn

from ammswap.config import get_settings
from ammswap.errors import SwapEngineError
from ammswap.services.swap_service import create_swap_service

logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    log_level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def run_api() -> None:
    """Run the FastAPI server."""
    from ammswap.api.app import create_app

    settings = get_settings()
    logger.info("Starting ammswap...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Starting API server on {settings.api_host}:{settings.api_port}")
    uvicorn.run(
        create_app(),
        host=settings.api_host,
        port=settings.api_port,
        log_level="debug" if settings.debug else "info",
    )


async def run_quote(args: argparse.Namespace) -> int:
    """Print a quote as JSON; engine errors are printed and exit 1."""
    settings = get_settings()
    if args.dry_run:
        settings = settings.model_copy(update={"dry_run": True})

    service = create_swap_service(settings)
    try:
        quote = await service.get_quote(
            args.chain, args.token_in, args.token_out, args.amount, args.slippage
        )
    except SwapEngineError as e:
        logger.error(f"Quote failed: {e.message}")
        print(json.dumps({"success": False, "error": e.to_dict()}, indent=2))
        return 1

    print(quote.model_dump_json(indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ammswap", description="Concentrated-liquidity AMM swap engine")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("serve", help="Run the HTTP API")

    quote = commands.add_parser("quote", help="Quote an exact-input swap")
    quote.add_argument("chain", help="Chain key or id (ethereum, polygon, 137, ...)")
    quote.add_argument("token_in", help="Input token symbol")
    quote.add_argument("token_out", help="Output token symbol")
    quote.add_argument("amount", help="Input amount as a decimal string")
    quote.add_argument("--slippage", type=str, default=None, help="Slippage tolerance in percent")
    quote.add_argument("--dry-run", action="store_true", help="Use the simulated chain")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    configure_logging(get_settings().debug)

    if args.command == "serve":
        run_api()
        return 0

    try:
        return asyncio.run(run_quote(args))
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")
        return 130


if __name__ == "__main__":
    sys.exit(main())
