"""Ledger events.

One immutable record per observable state transition. Each event carries
exactly the fields listed on it, plus its type name for serialization.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import ClassVar

from escrow_ledger.domain.enums import LedgerEventType


@dataclass(frozen=True)
class LedgerEvent:
    """Base class for everything appended to the ledger history."""

    event_type: ClassVar[LedgerEventType]

    def to_dict(self) -> dict:
        """Serialize for API responses and log lines."""
        return {"event_type": self.event_type.value, **asdict(self)}


@dataclass(frozen=True)
class FundsDeposited(LedgerEvent):
    """A buyer moved exactly the current price into custody."""

    event_type: ClassVar[LedgerEventType] = LedgerEventType.FUNDS_DEPOSITED

    buyer: str
    amount: int


@dataclass(frozen=True)
class FundsReleased(LedgerEvent):
    """The escrow agent paid a buyer's deposit out to the seller."""

    event_type: ClassVar[LedgerEventType] = LedgerEventType.FUNDS_RELEASED

    buyer: str
    seller: str
    amount: int


@dataclass(frozen=True)
class NewSaleMade(LedgerEvent):
    """A completed sale with its freshly minted receipt identifier."""

    event_type: ClassVar[LedgerEventType] = LedgerEventType.NEW_SALE_MADE

    buyer: str
    seller: str
    amount: int
    sale_id: str


@dataclass(frozen=True)
class TransactionCancelled(LedgerEvent):
    """The escrow agent refunded a buyer's deposit."""

    event_type: ClassVar[LedgerEventType] = LedgerEventType.TRANSACTION_CANCELLED

    buyer: str
    amount: int
