"""Value Transfer Protocol.

Defines the interface the ledger uses to move value between accounts. This is
a Protocol (structural subtyping) so a hosting environment only needs to
match the shape.

Transfers are untrusted: a recipient may reject a payment, and the ledger
must check the result instead of assuming success.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ValueTransfer(Protocol):
    """Protocol that all value-transfer backends must satisfy.

    Concrete implementations:
        - services/payment_service.py (in-memory account book)
    """

    def balance_of(self, account: str) -> int:
        """Return the account's balance in wei (0 for unknown accounts)."""
        ...

    def transfer(self, sender: str, recipient: str, amount: int) -> bool:
        """Move ``amount`` wei from sender to recipient.

        Returns:
            True if the value moved, False if the transfer was rejected.
            A rejected transfer moves nothing.
        """
        ...
