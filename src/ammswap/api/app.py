"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ammswap import __version__
from ammswap.config import get_settings
from ammswap.errors import SwapEngineError

logger = logging.getLogger(__name__)

# Engine error kind -> HTTP status; unknown kinds are server errors
ERROR_STATUS = {
    "unsupported_chain": 400,
    "unsupported_token": 400,
    "invalid_request": 400,
    "no_liquidity": 404,
    "connectivity": 503,
    "registry": 500,
}


async def engine_error_handler(request: Request, exc: SwapEngineError) -> JSONResponse:
    status_code = ERROR_STATUS.get(exc.kind, 500)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected ({exc.kind}): {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": exc.to_dict()},
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="ammswap API",
        description="Quotes and unsigned transactions for concentrated-liquidity AMM swaps",
        version=__version__,
        debug=settings.debug,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(SwapEngineError, engine_error_handler)

    # Register routes
    from ammswap.api.routes import health
    from ammswap.controllers import (
        allowances_router,
        chains_router,
        quotes_router,
        swaps_router,
        transactions_router,
    )

    app.include_router(health.router, tags=["Health"])
    app.include_router(chains_router)
    app.include_router(quotes_router)
    app.include_router(allowances_router)
    app.include_router(transactions_router)
    app.include_router(swaps_router)

    return app


# Default app instance
app = create_app()
