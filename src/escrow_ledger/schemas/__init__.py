"""Pydantic API schemas."""

from escrow_ledger.schemas.escrow import (
    DepositRequest,
    DepositResponse,
    HealthResponse,
    LedgerEventResponse,
    LedgerInfoResponse,
    PriceResponse,
    ResolveRequest,
    SaleIdsResponse,
    SetPriceRequest,
)

__all__ = [
    "DepositRequest",
    "DepositResponse",
    "HealthResponse",
    "LedgerEventResponse",
    "LedgerInfoResponse",
    "PriceResponse",
    "ResolveRequest",
    "SaleIdsResponse",
    "SetPriceRequest",
]
