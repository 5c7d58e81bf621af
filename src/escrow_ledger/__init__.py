"""Escrow Ledger: three-party escrow with buyer deposits, agent resolution and sale receipts."""

__version__ = "0.1.0"
