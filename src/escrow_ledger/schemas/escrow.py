"""Pydantic schemas for the Escrow Ledger API.

These schemas define the request/response shapes for the REST API. Amounts
are integers in wei. Range checks that carry ledger meaning (price > 0,
deposit == price) are left to the ledger so callers see its error codes.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------


class SetPriceRequest(BaseModel):
    """Request body for changing the deposit price."""

    new_price_wei: int = Field(
        ...,
        description="New exact deposit amount in wei (must be > 0)",
        examples=[8_000_000_000_000_000],
    )


class DepositRequest(BaseModel):
    """Request body for a buyer depositing the current price."""

    amount_wei: int = Field(
        ...,
        description="Value sent with the deposit, in wei; must equal the current price",
        examples=[5_000_000_000_000_000],
    )


class ResolveRequest(BaseModel):
    """Request body for the escrow agent releasing or cancelling a buyer."""

    buyer: str = Field(
        ...,
        min_length=42,
        max_length=42,
        description="Address of the buyer whose deposit is resolved (0x-prefixed, 42 chars)",
        examples=["0x70997970C51812dc3A010C7d01b50e0d17dc79C8"],
    )


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------


class LedgerInfoResponse(BaseModel):
    """Identities and balances of the ledger instance."""

    seller: str
    escrow_agent: str
    owner: str
    custody_address: str
    price_wei: int
    held_balance_wei: int
    is_funded: bool


class PriceResponse(BaseModel):
    price_wei: int


class DepositResponse(BaseModel):
    """A buyer's recorded custody."""

    buyer: str
    amount_wei: int


class SaleIdsResponse(BaseModel):
    """A buyer's sale receipt identifiers, oldest first."""

    buyer: str
    sale_ids: list[str]


class LedgerEventResponse(BaseModel):
    """One entry of the ledger's event history."""

    event_type: str
    buyer: str
    amount: int
    seller: str | None = None
    sale_id: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = "0.1.0"
    is_funded: bool = False
