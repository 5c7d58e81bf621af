"""FastAPI application entry point for the Escrow Ledger.

Lifecycle:
    1. Startup: Initialize logging, build the ledger from settings (unless one
       was injected), bind it to the MCP tools.
    2. Running: Serve REST API + MCP tools on a single Uvicorn process.
    3. Shutdown: Unbind the ledger from the MCP tools.

Run with:
    ESCROW_SELLER_ADDRESS=0x... ESCROW_AGENT_ADDRESS=0x... \
        uvicorn escrow_ledger.main:app --reload --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from escrow_ledger import __version__
from escrow_ledger.config import Settings, get_settings
from escrow_ledger.logging_config import get_logger, setup_logging
from escrow_ledger.mcp_server.tools import bind_ledger
from escrow_ledger.services.escrow_service import EscrowLedger, create_ledger
from escrow_ledger.services.payment_service import PaymentService

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


def build_ledger(settings: Settings) -> EscrowLedger:
    """Construct a ledger over a fresh in-memory account book.

    Every account except the custody account opens with the configured
    faucet balance.
    """
    payments = PaymentService(
        balances={settings.escrow_custody_address: 0},
        opening_balance=settings.escrow_faucet_balance_wei,
    )
    return create_ledger(settings, payments)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application startup and shutdown lifecycle."""
    settings = get_settings()

    setup_logging(
        log_level=settings.app_log_level,
        json_logs=not settings.is_development,
    )
    logger = get_logger(__name__)
    logger.info("app.starting", env=settings.app_env, debug=settings.app_debug)

    if getattr(app.state, "ledger", None) is None:
        app.state.ledger = build_ledger(settings)
    bind_ledger(app.state.ledger)

    logger.info("app.started", host=settings.app_host, port=settings.app_port)

    yield

    logger.info("app.shutting_down")
    bind_ledger(None)
    logger.info("app.stopped")


def create_app(ledger: EscrowLedger | None = None) -> FastAPI:
    """Application factory — creates and configures the FastAPI app.

    Args:
        ledger: Use this ledger instead of building one from settings at
            startup (tests, embedding).
    """
    settings = get_settings()

    app = FastAPI(
        title="Escrow Ledger",
        description=(
            "Three-party escrow: buyers deposit, an escrow agent releases to "
            "the seller or refunds the buyer."
        ),
        version=__version__,
        lifespan=lifespan,
        debug=settings.app_debug,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )
    app.state.ledger = ledger
    if ledger is not None:
        bind_ledger(ledger)

    # --- Middleware ---
    from escrow_ledger.api.middleware import setup_middleware

    setup_middleware(app)

    # --- REST API Routes ---
    from escrow_ledger.api.routes.escrow import router as escrow_router
    from escrow_ledger.api.routes.health import router as health_router

    app.include_router(health_router)
    app.include_router(escrow_router)

    # --- MCP Server (mounted as sub-application) ---
    from escrow_ledger.mcp_server.tools import mcp

    app.mount("/mcp", mcp.sse_app())

    return app


# The app instance used by Uvicorn
app = create_app()
