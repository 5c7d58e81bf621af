"""Ledger data model.

LedgerConfig is fixed at construction. LedgerState holds everything that
changes afterwards and is owned by exactly one EscrowLedger, which mutates it
only while holding its lock.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from escrow_ledger.domain.accounts import normalize_address
from escrow_ledger.domain.events import LedgerEvent  # noqa: TC001 - runtime field type
from escrow_ledger.domain.exceptions import InvalidAddressError
from escrow_ledger.domain.units import DEFAULT_PRICE_WEI


@dataclass(frozen=True)
class LedgerConfig:
    """Identities of one escrow instance.

    Attributes:
        seller: Account that receives released deposits.
        escrow_agent: Only account allowed to release or cancel.
        owner: Only account allowed to change the price (the creator).
        custody: The ledger's own account in the value-transfer backend.
    """

    seller: str
    escrow_agent: str
    owner: str
    custody: str

    @classmethod
    def create(cls, seller: str, escrow_agent: str, owner: str, custody: str) -> LedgerConfig:
        """Validate and normalize every identity.

        Raises:
            InvalidAddressError: If any identity is missing, malformed or zero,
                or if the custody account doubles as one of the roles.
        """
        config = cls(
            seller=normalize_address(seller),
            escrow_agent=normalize_address(escrow_agent),
            owner=normalize_address(owner),
            custody=normalize_address(custody),
        )
        if config.custody in (config.seller, config.escrow_agent, config.owner):
            raise InvalidAddressError(custody)
        return config


@dataclass
class LedgerState:
    """Mutable ledger state.

    Attributes:
        price: Exact deposit amount in wei.
        deposits: Recorded custody per buyer.
        sale_ids: Per-buyer receipt identifiers, in minting order.
        next_id: Releases recorded so far; entropy for sale IDs.
        events: Append-only history of emitted events.
    """

    price: int = DEFAULT_PRICE_WEI
    deposits: dict[str, int] = field(default_factory=dict)
    sale_ids: dict[str, list[str]] = field(default_factory=dict)
    next_id: int = 0
    events: list[LedgerEvent] = field(default_factory=list)

    @property
    def is_funded(self) -> bool:
        return any(amount > 0 for amount in self.deposits.values())
