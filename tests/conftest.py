"""Shared test fixtures for the Escrow Ledger test suite.

Provides:
    - Well-known account addresses (the layout a local dev chain hands out)
    - A deterministic entropy source for sale IDs
    - An in-memory account book and a ledger wired to it
"""

from __future__ import annotations

import pytest

from escrow_ledger.domain.units import parse_ether
from escrow_ledger.services.escrow_service import EscrowLedger
from escrow_ledger.services.payment_service import PaymentService

# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------

SELLER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
AGENT = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
BUYER = "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC"
BUYER_2 = "0x90F79bf6EB2c4f870365E96c7B6BcC78b3B9e39a"
CUSTODY = "0x000000000000000000000000000000000000e5c0"

BUYER_FUNDS = parse_ether("1")


class FixedEntropy:
    """Entropy source returning the same timestamp and seed every time."""

    def __init__(self, timestamp: int = 1_700_000_000, seed: int = 0xC0FFEE) -> None:
        self._timestamp = timestamp
        self._seed = seed

    def timestamp(self) -> int:
        return self._timestamp

    def seed(self) -> int:
        return self._seed


@pytest.fixture
def seller() -> str:
    return SELLER


@pytest.fixture
def agent() -> str:
    return AGENT


@pytest.fixture
def buyer() -> str:
    return BUYER


@pytest.fixture
def buyer_2() -> str:
    return BUYER_2


# ---------------------------------------------------------------------------
# Ledger Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def payments() -> PaymentService:
    """Account book where both buyers hold 1 native unit and nobody else holds anything."""
    return PaymentService(balances={BUYER: BUYER_FUNDS, BUYER_2: BUYER_FUNDS})


@pytest.fixture
def ledger(payments: PaymentService) -> EscrowLedger:
    """Ledger deployed by the seller (who is also the owner)."""
    return EscrowLedger(
        seller=SELLER,
        escrow_agent=AGENT,
        owner=SELLER,
        transfer=payments,
        custody=CUSTODY,
        entropy=FixedEntropy(),
    )
