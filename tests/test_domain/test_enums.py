"""Tests for domain enumerations."""

from __future__ import annotations

from escrow_ledger.domain.enums import DepositStatus, LedgerEventType, Role


class TestRole:
    def test_three_roles(self) -> None:
        assert {r.value for r in Role} == {"OWNER", "SELLER", "ESCROW_AGENT"}

    def test_role_is_str_enum(self) -> None:
        assert isinstance(Role.ESCROW_AGENT, str)
        assert Role.OWNER == "OWNER"


class TestDepositStatus:
    def test_all_statuses_exist(self) -> None:
        assert {s.value for s in DepositStatus} == {"EMPTY", "HELD"}


class TestLedgerEventType:
    def test_event_names(self) -> None:
        assert {e.value for e in LedgerEventType} == {
            "FundsDeposited",
            "FundsReleased",
            "NewSaleMade",
            "TransactionCancelled",
        }
