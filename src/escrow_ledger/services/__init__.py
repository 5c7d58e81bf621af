"""Application services — ledger operations and value transfers."""

from escrow_ledger.services.escrow_service import EscrowLedger, create_ledger
from escrow_ledger.services.payment_service import PaymentService

__all__ = ["EscrowLedger", "PaymentService", "create_ledger"]
