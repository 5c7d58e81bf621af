"""Domain enumerations for the Escrow Ledger.

These enums define the canonical roles, deposit states and event types used
throughout the system. They are framework-agnostic (no FastAPI imports).
"""

import enum


class Role(enum.StrEnum):
    """The three identities a ledger instance knows about.

    Roles are fixed at construction; only the owner can change the price and
    only the escrow agent can resolve deposits.
    """

    OWNER = "OWNER"
    SELLER = "SELLER"
    ESCROW_AGENT = "ESCROW_AGENT"


class DepositStatus(enum.StrEnum):
    """Lifecycle states of a single buyer's deposit.

    See domain/state_machine.py for the transition table.
    """

    EMPTY = "EMPTY"
    HELD = "HELD"


class LedgerEventType(enum.StrEnum):
    """Types of events appended to the ledger history.

    Every successful deposit, release or cancel produces its events exactly once.
    """

    FUNDS_DEPOSITED = "FundsDeposited"
    FUNDS_RELEASED = "FundsReleased"
    NEW_SALE_MADE = "NewSaleMade"
    TRANSACTION_CANCELLED = "TransactionCancelled"
