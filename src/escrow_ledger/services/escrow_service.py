"""Escrow Ledger — core business logic for deposits, releases and refunds.

This is the application layer that coordinates between:
    - Domain state machine (deposit transition guard)
    - Sale ID generator (receipt minting)
    - Value-transfer backend (custody movements)
    - Event history (audit trail)

REST routes, MCP tools and the simulation script all call into one
EscrowLedger instance, so every rule lives here.

Operation order inside release_funds:
    1. Role guard, buyer validation, deposit guard.
    2. Mint the sale ID (pure; may raise SaleIdExhaustedError).
    3. Transfer custody to the seller (may raise TransferFailedError).
    4. Commit bookkeeping and emit events.
Nothing is written before step 4, so any failure leaves the ledger untouched.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from statemachine.exceptions import TransitionNotAllowed

from escrow_ledger.domain.accounts import normalize_address
from escrow_ledger.domain.enums import Role
from escrow_ledger.domain.events import (
    FundsDeposited,
    FundsReleased,
    LedgerEvent,
    NewSaleMade,
    TransactionCancelled,
)
from escrow_ledger.domain.exceptions import (
    InsufficientFundsError,
    InvalidAddressError,
    InvalidPaymentAmountError,
    InvalidPriceError,
    NoFundsDepositedError,
    TransferFailedError,
    UnauthorizedError,
)
from escrow_ledger.domain.models import LedgerConfig, LedgerState
from escrow_ledger.domain.sale_id import (
    EntropySource,
    SaleIdEntropy,
    SystemEntropy,
    generate_sale_id,
)
from escrow_ledger.domain.state_machine import DepositStateMachine, status_for
from escrow_ledger.logging_config import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from escrow_ledger.config import Settings
    from escrow_ledger.domain.transfer_protocol import ValueTransfer

logger = get_logger(__name__)


class EscrowLedger:
    """Custody for one seller and one escrow agent, with many buyers."""

    def __init__(
        self,
        seller: str,
        escrow_agent: str,
        owner: str,
        transfer: ValueTransfer,
        custody: str,
        entropy: EntropySource | None = None,
    ) -> None:
        """Create the ledger.

        Args:
            seller: Account paid on release.
            escrow_agent: Account allowed to release and cancel.
            owner: The creating account; the only one allowed to set the price.
            transfer: Backend that moves value between accounts.
            custody: The ledger's own account in that backend.
            entropy: Timestamp/seed source for sale IDs (system clock + CSPRNG
                by default).

        Raises:
            InvalidAddressError: If any identity is missing, malformed or zero,
                or if the custody account is also the seller, agent or owner.
        """
        self._config = LedgerConfig.create(
            seller=seller,
            escrow_agent=escrow_agent,
            owner=owner,
            custody=custody,
        )
        self._state = LedgerState()
        self._transfer = transfer
        self._entropy = entropy or SystemEntropy()
        self._listeners: list[Callable[[LedgerEvent], None]] = []
        self._lock = threading.RLock()

        logger.info(
            "ledger.created",
            seller=self._config.seller,
            escrow_agent=self._config.escrow_agent,
            owner=self._config.owner,
            price=self._state.price,
        )

    # ------------------------------------------------------------------
    # Pricing
    # ------------------------------------------------------------------

    def set_price(self, caller: str, new_price: int) -> None:
        """Replace the deposit price. Owner only; must be > 0."""
        with self._lock:
            self._require_role(caller, Role.OWNER)
            if new_price <= 0:
                raise InvalidPriceError(new_price)

            old_price = self._state.price
            self._state.price = new_price

        logger.info("ledger.price_updated", old_price=old_price, new_price=new_price)

    # ------------------------------------------------------------------
    # Deposits
    # ------------------------------------------------------------------

    def deposit_funds(self, caller: str, amount: int) -> FundsDeposited:
        """Move exactly the current price from the caller into custody."""
        with self._lock:
            buyer = normalize_address(caller)
            if buyer == self._config.custody:
                raise InvalidAddressError(caller)
            price = self._state.price
            if amount != price:
                raise InvalidPaymentAmountError(amount, price)

            available = self._transfer.balance_of(buyer)
            if available < amount:
                raise InsufficientFundsError(buyer, amount, available)

            recorded = self._state.deposits.get(buyer, 0)
            self._fire_transition(buyer, recorded, "deposit")

            if not self._transfer.transfer(buyer, self._config.custody, amount):
                logger.warning("ledger.deposit_transfer_failed", buyer=buyer, amount=amount)
                raise TransferFailedError(buyer, self._config.seller)

            self._state.deposits[buyer] = recorded + amount

            event = FundsDeposited(buyer=buyer, amount=amount)
            self._emit(event)
            return event

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def release_funds(self, caller: str, buyer: str) -> NewSaleMade:
        """Pay the buyer's deposit to the seller and mint a sale ID.

        Returns:
            The NewSaleMade event, carrying the minted sale ID.
        """
        with self._lock:
            self._require_role(caller, Role.ESCROW_AGENT)
            buyer = normalize_address(buyer)
            amount = self._state.deposits.get(buyer, 0)
            self._fire_transition(buyer, amount, "release")

            entropy = SaleIdEntropy(
                timestamp=self._entropy.timestamp(),
                seed=self._entropy.seed(),
                caller=self._config.escrow_agent,
                counter=self._state.next_id,
            )
            sale_id = generate_sale_id(entropy, self._state.sale_ids.get(buyer, ()), buyer)

            seller = self._config.seller
            if not self._transfer.transfer(self._config.custody, seller, amount):
                logger.warning("ledger.release_transfer_failed", buyer=buyer, seller=seller)
                raise TransferFailedError(buyer, seller)

            del self._state.deposits[buyer]
            self._state.sale_ids.setdefault(buyer, []).append(sale_id)
            self._state.next_id += 1

            self._emit(FundsReleased(buyer=buyer, seller=seller, amount=amount))
            sale = NewSaleMade(buyer=buyer, seller=seller, amount=amount, sale_id=sale_id)
            self._emit(sale)
            return sale

    def cancel_transaction(self, caller: str, buyer: str) -> TransactionCancelled:
        """Refund the buyer's deposit. No sale ID is minted."""
        with self._lock:
            self._require_role(caller, Role.ESCROW_AGENT)
            buyer = normalize_address(buyer)
            amount = self._state.deposits.get(buyer, 0)
            self._fire_transition(buyer, amount, "cancel")

            if not self._transfer.transfer(self._config.custody, buyer, amount):
                logger.warning("ledger.refund_transfer_failed", buyer=buyer, amount=amount)
                raise TransferFailedError(buyer, self._config.seller)

            del self._state.deposits[buyer]

            event = TransactionCancelled(buyer=buyer, amount=amount)
            self._emit(event)
            return event

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def subscribe(self, listener: Callable[[LedgerEvent], None]) -> None:
        """Call ``listener`` synchronously with every event emitted from now on."""
        with self._lock:
            self._listeners.append(listener)

    def get_events(self) -> list[LedgerEvent]:
        """Return the full event history, oldest first."""
        with self._lock:
            return list(self._state.events)

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def seller(self) -> str:
        return self._config.seller

    @property
    def escrow_agent(self) -> str:
        return self._config.escrow_agent

    @property
    def owner(self) -> str:
        return self._config.owner

    @property
    def custody_address(self) -> str:
        return self._config.custody

    @property
    def price(self) -> int:
        with self._lock:
            return self._state.price

    @property
    def is_funded(self) -> bool:
        with self._lock:
            return self._state.is_funded

    @property
    def next_id(self) -> int:
        with self._lock:
            return self._state.next_id

    @property
    def held_balance(self) -> int:
        """Value currently in the custody account."""
        with self._lock:
            return self._transfer.balance_of(self._config.custody)

    def get_deposit(self, buyer: str) -> int:
        """Return the amount recorded for ``buyer`` (0 if none)."""
        buyer = normalize_address(buyer)
        with self._lock:
            return self._state.deposits.get(buyer, 0)

    def get_sale_ids(self, buyer: str) -> list[str]:
        """Return a copy of the buyer's sale IDs, oldest first."""
        buyer = normalize_address(buyer)
        with self._lock:
            return list(self._state.sale_ids.get(buyer, ()))

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _require_role(self, caller: str | None, role: Role) -> None:
        expected = {
            Role.OWNER: self._config.owner,
            Role.SELLER: self._config.seller,
            Role.ESCROW_AGENT: self._config.escrow_agent,
        }[role]
        if (caller or "").lower() != expected:
            logger.warning("ledger.unauthorized", caller=caller, required_role=role.value)
            raise UnauthorizedError(str(caller), role.value)

    def _fire_transition(self, buyer: str, amount: int, event_name: str) -> None:
        """Validate a deposit transition for ``buyer``.

        Raises NoFundsDepositedError if the buyer has nothing to resolve.
        """
        sm = DepositStateMachine(current_status=status_for(amount))
        try:
            getattr(sm, event_name)()
        except TransitionNotAllowed as err:
            raise NoFundsDepositedError(buyer) from err

    def _emit(self, event: LedgerEvent) -> None:
        self._state.events.append(event)
        logger.info("ledger.event", **event.to_dict())
        for listener in self._listeners:
            listener(event)


def create_ledger(
    settings: Settings,
    transfer: ValueTransfer,
    entropy: EntropySource | None = None,
) -> EscrowLedger:
    """Build a ledger from the configured identities."""
    return EscrowLedger(
        seller=settings.escrow_seller_address,
        escrow_agent=settings.escrow_agent_address,
        owner=settings.owner_address,
        transfer=transfer,
        custody=settings.escrow_custody_address,
        entropy=entropy,
    )
