"""Domain layer — pure business rules with zero web-framework dependencies."""

from escrow_ledger.domain.enums import (
    DepositStatus,
    LedgerEventType,
    Role,
)
from escrow_ledger.domain.events import (
    FundsDeposited,
    FundsReleased,
    LedgerEvent,
    NewSaleMade,
    TransactionCancelled,
)
from escrow_ledger.domain.exceptions import (
    EscrowLedgerError,
    InsufficientFundsError,
    InvalidAddressError,
    InvalidPaymentAmountError,
    InvalidPriceError,
    NoFundsDepositedError,
    SaleIdExhaustedError,
    TransferFailedError,
    UnauthorizedError,
)
from escrow_ledger.domain.state_machine import (
    DepositStateMachine,
    validate_transition,
)
from escrow_ledger.domain.transfer_protocol import ValueTransfer

__all__ = [
    "DepositStatus",
    "LedgerEventType",
    "Role",
    "FundsDeposited",
    "FundsReleased",
    "LedgerEvent",
    "NewSaleMade",
    "TransactionCancelled",
    "EscrowLedgerError",
    "InsufficientFundsError",
    "InvalidAddressError",
    "InvalidPaymentAmountError",
    "InvalidPriceError",
    "NoFundsDepositedError",
    "SaleIdExhaustedError",
    "TransferFailedError",
    "UnauthorizedError",
    "DepositStateMachine",
    "validate_transition",
    "ValueTransfer",
]
