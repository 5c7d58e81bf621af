"""Health check endpoint.

Reports that the ledger is constructed and whether it holds any deposits.
Used by Docker healthchecks, load balancers, and monitoring systems.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from escrow_ledger import __version__
from escrow_ledger.api.deps import get_ledger
from escrow_ledger.schemas.escrow import HealthResponse
from escrow_ledger.services.escrow_service import EscrowLedger

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns the health status of the ledger service.",
)
def health_check(ledger: EscrowLedger = Depends(get_ledger)) -> HealthResponse:
    return HealthResponse(status="ok", version=__version__, is_funded=ledger.is_funded)
