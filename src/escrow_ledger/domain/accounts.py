"""Account identities.

Accounts are EVM-style addresses: ``0x`` followed by 40 hex digits. They are
compared case-insensitively, so every address entering the ledger is
normalized to lowercase first.
"""

from __future__ import annotations

import re

from escrow_ledger.domain.exceptions import InvalidAddressError

ZERO_ADDRESS = "0x" + "0" * 40

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_valid_address(value: str | None) -> bool:
    """Return True for a well-formed, non-zero address."""
    if not value or not _ADDRESS_RE.match(value):
        return False
    return value.lower() != ZERO_ADDRESS


def normalize_address(value: str | None) -> str:
    """Return the lowercase form of ``value``.

    Raises:
        InvalidAddressError: If the value is empty, malformed or the zero address.
    """
    if not is_valid_address(value):
        raise InvalidAddressError(value)
    return value.lower()  # type: ignore[union-attr]


def address_bytes(address: str) -> bytes:
    """Return the 20 raw bytes of a normalized address."""
    return bytes.fromhex(address[2:])
