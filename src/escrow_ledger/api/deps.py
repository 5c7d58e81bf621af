"""FastAPI dependency injection providers.

These are used with Depends() in route handlers to inject the ledger
instance and the calling account.
"""

from __future__ import annotations

import structlog
from fastapi import Header, Request

from escrow_ledger.services.escrow_service import EscrowLedger


def get_ledger(request: Request) -> EscrowLedger:
    """Provide the ledger created at application startup."""
    return request.app.state.ledger


async def get_caller(
    x_caller_address: str = Header(
        ...,
        description="Address of the account making the call",
    ),
) -> str:
    """Provide the caller identity and tag this request's log entries with it."""
    structlog.contextvars.bind_contextvars(caller=x_caller_address)
    return x_caller_address
