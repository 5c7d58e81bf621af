"""Tests for address normalization and wei conversions."""

from __future__ import annotations

from decimal import Decimal

import pytest

from escrow_ledger.domain.accounts import (
    ZERO_ADDRESS,
    address_bytes,
    is_valid_address,
    normalize_address,
)
from escrow_ledger.domain.exceptions import InvalidAddressError
from escrow_ledger.domain.units import DEFAULT_PRICE_WEI, format_ether, parse_ether


class TestAddresses:
    def test_normalizes_to_lowercase(self) -> None:
        address = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
        assert normalize_address(address) == address.lower()

    @pytest.mark.parametrize(
        "value",
        [
            None,
            "",
            ZERO_ADDRESS,
            "70997970C51812dc3A010C7d01b50e0d17dc79C8",
            "0x70997970C51812dc3A010C7d01b50e0d17dc79",
            "0xZZ997970C51812dc3A010C7d01b50e0d17dc79C8",
        ],
    )
    def test_rejects_invalid(self, value: str | None) -> None:
        assert is_valid_address(value) is False
        with pytest.raises(InvalidAddressError):
            normalize_address(value)

    def test_error_carries_the_value(self) -> None:
        with pytest.raises(InvalidAddressError) as exc_info:
            normalize_address("nope")
        assert exc_info.value.address == "nope"
        assert exc_info.value.code == "INVALID_ADDRESS"

    def test_address_bytes(self) -> None:
        raw = address_bytes("0x" + "ab" * 20)
        assert raw == bytes([0xAB]) * 20


class TestUnits:
    def test_default_price_is_half_a_percent_of_a_unit(self) -> None:
        assert DEFAULT_PRICE_WEI == parse_ether("0.005") == 5_000_000_000_000_000

    def test_parse_accepts_decimal_and_int(self) -> None:
        assert parse_ether(Decimal("0.008")) == 8_000_000_000_000_000
        assert parse_ether(2) == 2 * 10**18

    def test_parse_rejects_negative(self) -> None:
        with pytest.raises(ValueError, match="negative"):
            parse_ether("-0.1")

    def test_parse_rejects_sub_wei_precision(self) -> None:
        with pytest.raises(ValueError, match="precision"):
            parse_ether("0.0000000000000000001")

    def test_parse_rejects_garbage(self) -> None:
        with pytest.raises(ValueError, match="Not a decimal"):
            parse_ether("five")

    def test_format(self) -> None:
        assert format_ether(5_000_000_000_000_000) == "0.005"
        assert format_ether(10**18) == "1"
        assert format_ether(0) == "0"
