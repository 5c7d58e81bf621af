"""Domain exceptions for the Escrow Ledger.

These exceptions are framework-agnostic and represent business rule violations.
They are caught and translated to HTTP responses by the API layer's middleware
and to error payloads by the MCP tools.
"""


class EscrowLedgerError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str, code: str = "ESCROW_LEDGER_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


# --- Authorization Errors ---


class UnauthorizedError(EscrowLedgerError):
    """Raised when the caller does not hold the role an operation requires."""

    def __init__(self, caller: str, required_role: str) -> None:
        super().__init__(
            message=f"Account {caller} is not authorized: {required_role} only",
            code="UNAUTHORIZED",
        )
        self.caller = caller
        self.required_role = required_role


# --- Validation Errors ---


class InvalidAddressError(EscrowLedgerError):
    """Raised when an account identity is missing, malformed or the zero address."""

    def __init__(self, address: str | None) -> None:
        super().__init__(
            message=f"Invalid account address: {address!r}",
            code="INVALID_ADDRESS",
        )
        self.address = address


class InvalidPriceError(EscrowLedgerError):
    """Raised when the owner tries to set a price that is not strictly positive."""

    def __init__(self, price: int) -> None:
        super().__init__(
            message=f"Price must be greater than zero, got {price}",
            code="INVALID_PRICE",
        )
        self.price = price


class InvalidPaymentAmountError(EscrowLedgerError):
    """Raised when a deposit does not carry exactly the current price."""

    def __init__(self, amount: int, price: int) -> None:
        super().__init__(
            message=f"Deposit must equal the current price {price} wei, got {amount} wei",
            code="INVALID_PAYMENT_AMOUNT",
        )
        self.amount = amount
        self.price = price


# --- State Errors ---


class NoFundsDepositedError(EscrowLedgerError):
    """Raised when a buyer has nothing recorded in custody to resolve."""

    def __init__(self, buyer: str) -> None:
        super().__init__(
            message=f"No funds deposited for buyer {buyer}",
            code="NO_FUNDS_DEPOSITED",
        )
        self.buyer = buyer


# --- Payment Errors ---


class TransferFailedError(EscrowLedgerError):
    """Raised when the value-transfer primitive rejects a payout or refund."""

    def __init__(self, buyer: str, seller: str) -> None:
        super().__init__(
            message=f"Transfer failed for buyer {buyer} (seller {seller})",
            code="TRANSFER_FAILED",
        )
        self.buyer = buyer
        self.seller = seller


class InsufficientFundsError(EscrowLedgerError):
    """Raised when a depositing account cannot cover the amount it sends."""

    def __init__(self, account: str, required: int, available: int) -> None:
        super().__init__(
            message=(
                f"Insufficient funds in {account}: "
                f"required {required} wei, available {available} wei"
            ),
            code="INSUFFICIENT_FUNDS",
        )
        self.account = account
        self.required = required
        self.available = available


# --- Sale ID Errors ---


class SaleIdExhaustedError(EscrowLedgerError):
    """Raised when every sale ID attempt collided with the buyer's history."""

    def __init__(self, buyer: str, attempts: int) -> None:
        super().__init__(
            message=f"Could not generate a unique sale ID for {buyer} after {attempts} attempts",
            code="SALE_ID_EXHAUSTED",
        )
        self.buyer = buyer
        self.attempts = attempts
