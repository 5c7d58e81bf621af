"""Payment Service — in-memory value transfers between accounts.

Stands in for the hosting environment's transfer primitive. Accounts are
plain addresses with wei balances. Every transfer gets a synthetic
transaction hash in the logs so flows can be traced like on-chain ones.

Accounts never seen before open with `opening_balance` wei, which plays the
role of a local chain's pre-funded accounts (0 by default).

A transfer is rejected (returns False, moves nothing) when:
    - the sender cannot cover the amount, or
    - the recipient has been flagged to refuse incoming payments.
"""

from __future__ import annotations

import threading
import uuid

from escrow_ledger.domain.accounts import normalize_address
from escrow_ledger.logging_config import get_logger

logger = get_logger(__name__)


class PaymentService:
    """Handles balances and transfers for the escrow ledger."""

    def __init__(
        self,
        balances: dict[str, int] | None = None,
        opening_balance: int = 0,
    ) -> None:
        """Initialize the account book.

        Args:
            balances: Explicit opening balances keyed by address.
            opening_balance: Balance given to any other account on first use.
        """
        self._lock = threading.Lock()
        self._opening_balance = opening_balance
        self._balances: dict[str, int] = {}
        self._rejecting: set[str] = set()
        for account, amount in (balances or {}).items():
            if amount < 0:
                raise ValueError(f"Opening balance cannot be negative: {amount}")
            # Explicit balances replace the opening balance, they do not add to it.
            self._balances[normalize_address(account)] = amount

    def balance_of(self, account: str) -> int:
        with self._lock:
            return self._balance(account.lower())

    def credit(self, account: str, amount: int) -> None:
        """Mint ``amount`` wei into an account (faucet for local runs)."""
        if amount < 0:
            raise ValueError(f"Cannot credit a negative amount: {amount}")
        account = normalize_address(account)
        with self._lock:
            self._balances[account] = self._balance(account) + amount
        logger.debug("payment.credited", account=account, amount=amount)

    def reject_payments_to(self, account: str, rejecting: bool = True) -> None:
        """Make an account refuse (or accept again) incoming transfers."""
        account = normalize_address(account)
        with self._lock:
            if rejecting:
                self._rejecting.add(account)
            else:
                self._rejecting.discard(account)
        logger.info("payment.recipient_policy", account=account, rejecting=rejecting)

    def transfer(self, sender: str, recipient: str, amount: int) -> bool:
        """Move ``amount`` wei from sender to recipient.

        Returns:
            True with balances updated, or False with nothing changed.
        """
        sender = sender.lower()
        recipient = recipient.lower()
        tx_hash = "0x" + uuid.uuid4().hex + uuid.uuid4().hex
        with self._lock:
            if recipient in self._rejecting:
                logger.warning(
                    "payment.transfer_rejected",
                    tx_hash=tx_hash,
                    reason="recipient_refused",
                    from_wallet=sender,
                    to_wallet=recipient,
                    amount=amount,
                )
                return False

            available = self._balance(sender)
            if amount < 0 or available < amount:
                logger.warning(
                    "payment.transfer_rejected",
                    tx_hash=tx_hash,
                    reason="insufficient_balance",
                    from_wallet=sender,
                    to_wallet=recipient,
                    amount=amount,
                    available=available,
                )
                return False

            self._balances[sender] = available - amount
            self._balances[recipient] = self._balance(recipient) + amount

        logger.info(
            "payment.transfer_complete",
            tx_hash=tx_hash,
            from_wallet=sender,
            to_wallet=recipient,
            amount=amount,
        )
        return True

    def _balance(self, account: str) -> int:
        # Caller holds the lock.
        if account not in self._balances:
            self._balances[account] = self._opening_balance
        return self._balances[account]
