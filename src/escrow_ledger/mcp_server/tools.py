"""MCP Tool definitions for the Escrow Ledger.

These tools expose the ledger via the Model Context Protocol, so buyer and
escrow-agent bots can discover and call them programmatically.

Tools:
    - ledger_info: Identities, price and custody balance
    - set_price: Owner changes the deposit price
    - deposit_funds: Buyer deposits the current price
    - release_funds: Escrow agent pays a buyer's deposit to the seller
    - cancel_transaction: Escrow agent refunds a buyer
    - get_deposit: Recorded custody for a buyer
    - get_sale_ids: Sale IDs minted for a buyer

The MCP server is mounted into FastAPI at /mcp via app.mount(). The ledger
is bound once at startup with bind_ledger(); ledger errors come back as
{"error": code, "message": ...} payloads instead of exceptions.
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from escrow_ledger.domain.exceptions import EscrowLedgerError
from escrow_ledger.logging_config import get_logger
from escrow_ledger.services.escrow_service import EscrowLedger

logger = get_logger(__name__)

mcp = FastMCP(
    "Escrow Ledger",
    json_response=True,
)

_ledger: EscrowLedger | None = None


def bind_ledger(ledger: EscrowLedger | None) -> None:
    """Point every tool at ``ledger`` (None unbinds)."""
    global _ledger
    _ledger = ledger


def _get_ledger() -> EscrowLedger:
    if _ledger is None:
        raise RuntimeError("No ledger bound to the MCP server; call bind_ledger() first")
    return _ledger


def _error(tool: str, exc: EscrowLedgerError) -> dict:
    logger.warning(f"mcp.{tool}.rejected", code=exc.code, error=exc.message)
    return {"error": exc.code, "message": exc.message}


@mcp.tool()
async def ledger_info() -> dict:
    """Describe this escrow: seller, escrow agent, owner, price and custody.

    Returns:
        Addresses, the current price in wei, and the held balance in wei.
    """
    ledger = _get_ledger()
    return {
        "seller": ledger.seller,
        "escrow_agent": ledger.escrow_agent,
        "owner": ledger.owner,
        "price_wei": ledger.price,
        "held_balance_wei": ledger.held_balance,
        "is_funded": ledger.is_funded,
    }


@mcp.tool()
async def set_price(caller: str, new_price_wei: int) -> dict:
    """Change the deposit price. Only the owner may do this.

    Args:
        caller: Your account address.
        new_price_wei: New exact deposit amount in wei (> 0).
    """
    ledger = _get_ledger()
    try:
        ledger.set_price(caller, new_price_wei)
    except EscrowLedgerError as exc:
        return _error("set_price", exc)
    return {"price_wei": ledger.price}


@mcp.tool()
async def deposit_funds(caller: str, amount_wei: int) -> dict:
    """Deposit into escrow as a buyer.

    Args:
        caller: Your account address (the buyer).
        amount_wei: Must equal the current price exactly; see ledger_info.

    Returns:
        The FundsDeposited event.
    """
    try:
        event = _get_ledger().deposit_funds(caller, amount_wei)
    except EscrowLedgerError as exc:
        return _error("deposit_funds", exc)
    return {
        **event.to_dict(),
        "message": "Deposit held. The escrow agent will release or cancel it.",
    }


@mcp.tool()
async def release_funds(caller: str, buyer: str) -> dict:
    """Release a buyer's deposit to the seller. Escrow agent only.

    Args:
        caller: Your account address (must be the escrow agent).
        buyer: The buyer whose deposit completes the sale.

    Returns:
        The NewSaleMade event, including the sale_id receipt.
    """
    try:
        sale = _get_ledger().release_funds(caller, buyer)
    except EscrowLedgerError as exc:
        return _error("release_funds", exc)
    return sale.to_dict()


@mcp.tool()
async def cancel_transaction(caller: str, buyer: str) -> dict:
    """Refund a buyer's deposit. Escrow agent only.

    Args:
        caller: Your account address (must be the escrow agent).
        buyer: The buyer to refund.
    """
    try:
        event = _get_ledger().cancel_transaction(caller, buyer)
    except EscrowLedgerError as exc:
        return _error("cancel_transaction", exc)
    return event.to_dict()


@mcp.tool()
async def get_deposit(buyer: str) -> dict:
    """Check how much a buyer currently has in custody."""
    try:
        amount = _get_ledger().get_deposit(buyer)
    except EscrowLedgerError as exc:
        return _error("get_deposit", exc)
    return {"buyer": buyer.lower(), "amount_wei": amount}


@mcp.tool()
async def get_sale_ids(buyer: str) -> dict:
    """List the sale receipt IDs minted for a buyer, oldest first."""
    try:
        sale_ids = _get_ledger().get_sale_ids(buyer)
    except EscrowLedgerError as exc:
        return _error("get_sale_ids", exc)
    return {"buyer": buyer.lower(), "sale_ids": sale_ids}
