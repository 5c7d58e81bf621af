"""Escrow ledger REST API routes.

The caller identity travels in the X-Caller-Address header. The MCP tools in
mcp_server/tools.py call the same ledger instance, ensuring consistency.

Routes:
    GET    /api/v1/escrow                   — Ledger identities, price, balances
    GET    /api/v1/escrow/price             — Current deposit price
    PUT    /api/v1/escrow/price             — Owner changes the price
    POST   /api/v1/escrow/deposit           — Buyer deposits the price
    POST   /api/v1/escrow/release           — Agent releases a buyer to the seller
    POST   /api/v1/escrow/cancel            — Agent refunds a buyer
    GET    /api/v1/escrow/deposits/{buyer}  — Recorded custody for a buyer
    GET    /api/v1/escrow/sales/{buyer}     — Sale IDs minted for a buyer
    GET    /api/v1/escrow/events            — Event history
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from escrow_ledger.api.deps import get_caller, get_ledger
from escrow_ledger.schemas.escrow import (
    DepositRequest,
    DepositResponse,
    LedgerEventResponse,
    LedgerInfoResponse,
    PriceResponse,
    ResolveRequest,
    SaleIdsResponse,
    SetPriceRequest,
)
from escrow_ledger.services.escrow_service import EscrowLedger

router = APIRouter(prefix="/api/v1/escrow", tags=["Escrow"])


# ---------------------------------------------------------------------------
# Ledger info & pricing
# ---------------------------------------------------------------------------


@router.get(
    "",
    response_model=LedgerInfoResponse,
    summary="Get ledger identities and balances",
)
def get_ledger_info(ledger: EscrowLedger = Depends(get_ledger)) -> LedgerInfoResponse:
    return LedgerInfoResponse(
        seller=ledger.seller,
        escrow_agent=ledger.escrow_agent,
        owner=ledger.owner,
        custody_address=ledger.custody_address,
        price_wei=ledger.price,
        held_balance_wei=ledger.held_balance,
        is_funded=ledger.is_funded,
    )


@router.get("/price", response_model=PriceResponse, summary="Get the deposit price")
def get_price(ledger: EscrowLedger = Depends(get_ledger)) -> PriceResponse:
    return PriceResponse(price_wei=ledger.price)


@router.put("/price", response_model=PriceResponse, summary="Change the deposit price")
def set_price(
    request: SetPriceRequest,
    caller: str = Depends(get_caller),
    ledger: EscrowLedger = Depends(get_ledger),
) -> PriceResponse:
    """Owner only. The new price must be greater than zero."""
    ledger.set_price(caller, request.new_price_wei)
    return PriceResponse(price_wei=ledger.price)


# ---------------------------------------------------------------------------
# Deposit
# ---------------------------------------------------------------------------


@router.post(
    "/deposit",
    response_model=LedgerEventResponse,
    status_code=201,
    summary="Deposit the current price into custody",
)
def deposit_funds(
    request: DepositRequest,
    caller: str = Depends(get_caller),
    ledger: EscrowLedger = Depends(get_ledger),
) -> LedgerEventResponse:
    """The amount must equal the current price exactly."""
    event = ledger.deposit_funds(caller, request.amount_wei)
    return LedgerEventResponse(**event.to_dict())


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


@router.post(
    "/release",
    response_model=LedgerEventResponse,
    summary="Release a buyer's deposit to the seller",
)
def release_funds(
    request: ResolveRequest,
    caller: str = Depends(get_caller),
    ledger: EscrowLedger = Depends(get_ledger),
) -> LedgerEventResponse:
    """Escrow agent only. Returns the NewSaleMade event with the sale ID."""
    sale = ledger.release_funds(caller, request.buyer)
    return LedgerEventResponse(**sale.to_dict())


@router.post(
    "/cancel",
    response_model=LedgerEventResponse,
    summary="Refund a buyer's deposit",
)
def cancel_transaction(
    request: ResolveRequest,
    caller: str = Depends(get_caller),
    ledger: EscrowLedger = Depends(get_ledger),
) -> LedgerEventResponse:
    """Escrow agent only."""
    event = ledger.cancel_transaction(caller, request.buyer)
    return LedgerEventResponse(**event.to_dict())


# ---------------------------------------------------------------------------
# Read endpoints
# ---------------------------------------------------------------------------


@router.get(
    "/deposits/{buyer}",
    response_model=DepositResponse,
    summary="Get a buyer's recorded deposit",
)
def get_deposit(buyer: str, ledger: EscrowLedger = Depends(get_ledger)) -> DepositResponse:
    return DepositResponse(buyer=buyer.lower(), amount_wei=ledger.get_deposit(buyer))


@router.get(
    "/sales/{buyer}",
    response_model=SaleIdsResponse,
    summary="Get a buyer's sale IDs",
)
def get_sale_ids(buyer: str, ledger: EscrowLedger = Depends(get_ledger)) -> SaleIdsResponse:
    return SaleIdsResponse(buyer=buyer.lower(), sale_ids=ledger.get_sale_ids(buyer))


@router.get(
    "/events",
    response_model=list[LedgerEventResponse],
    summary="Get the event history",
)
def get_events(ledger: EscrowLedger = Depends(get_ledger)) -> list[LedgerEventResponse]:
    return [LedgerEventResponse(**e.to_dict()) for e in ledger.get_events()]
