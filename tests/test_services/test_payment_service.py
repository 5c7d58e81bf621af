"""Tests for the in-memory PaymentService."""

from __future__ import annotations

import pytest

from escrow_ledger.domain.exceptions import InvalidAddressError
from escrow_ledger.domain.transfer_protocol import ValueTransfer
from escrow_ledger.services.payment_service import PaymentService

ALICE = "0x" + "a1" * 20
BOB = "0x" + "b2" * 20


class TestBalances:
    def test_unknown_account_has_opening_balance(self) -> None:
        assert PaymentService().balance_of(ALICE) == 0
        assert PaymentService(opening_balance=7).balance_of(ALICE) == 7

    def test_explicit_balances_override_opening_balance(self) -> None:
        payments = PaymentService(balances={ALICE: 3}, opening_balance=100)
        assert payments.balance_of(ALICE) == 3
        assert payments.balance_of(BOB) == 100

    def test_explicit_zero_balance_is_not_topped_up(self) -> None:
        payments = PaymentService(balances={ALICE: 0}, opening_balance=10**20)
        assert payments.balance_of(ALICE) == 0

    def test_negative_opening_balance_is_rejected(self) -> None:
        with pytest.raises(ValueError, match="negative"):
            PaymentService(balances={ALICE: -1})

    def test_lookup_is_case_insensitive(self) -> None:
        payments = PaymentService(balances={"0x" + "A1" * 20: 5})
        assert payments.balance_of(ALICE) == 5

    def test_credit_adds_to_balance(self) -> None:
        payments = PaymentService(balances={ALICE: 5})
        payments.credit(ALICE, 10)
        assert payments.balance_of(ALICE) == 15

    def test_credit_rejects_negative_amount(self) -> None:
        with pytest.raises(ValueError, match="negative"):
            PaymentService().credit(ALICE, -1)

    def test_credit_rejects_invalid_address(self) -> None:
        with pytest.raises(InvalidAddressError):
            PaymentService().credit("0x1234", 1)

    def test_satisfies_transfer_protocol(self) -> None:
        assert isinstance(PaymentService(), ValueTransfer)


class TestTransfer:
    def test_moves_value(self) -> None:
        payments = PaymentService(balances={ALICE: 10})
        assert payments.transfer(ALICE, BOB, 4) is True
        assert payments.balance_of(ALICE) == 6
        assert payments.balance_of(BOB) == 4

    def test_insufficient_balance_moves_nothing(self) -> None:
        payments = PaymentService(balances={ALICE: 3})
        assert payments.transfer(ALICE, BOB, 4) is False
        assert payments.balance_of(ALICE) == 3
        assert payments.balance_of(BOB) == 0

    def test_negative_amount_is_rejected(self) -> None:
        payments = PaymentService(balances={ALICE: 3})
        assert payments.transfer(ALICE, BOB, -1) is False
        assert payments.balance_of(ALICE) == 3

    def test_zero_amount_succeeds(self) -> None:
        payments = PaymentService()
        assert payments.transfer(ALICE, BOB, 0) is True

    def test_refusing_recipient(self) -> None:
        payments = PaymentService(balances={ALICE: 10})
        payments.reject_payments_to(BOB)

        assert payments.transfer(ALICE, BOB, 4) is False
        assert payments.balance_of(ALICE) == 10
        assert payments.balance_of(BOB) == 0

    def test_recipient_can_accept_again(self) -> None:
        payments = PaymentService(balances={ALICE: 10})
        payments.reject_payments_to(BOB)
        payments.reject_payments_to(BOB, rejecting=False)

        assert payments.transfer(ALICE, BOB, 4) is True
        assert payments.balance_of(BOB) == 4

    def test_refusing_recipient_can_still_send(self) -> None:
        payments = PaymentService(balances={BOB: 10})
        payments.reject_payments_to(BOB)
        assert payments.transfer(BOB, ALICE, 10) is True
        assert payments.balance_of(ALICE) == 10
