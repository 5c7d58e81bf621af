"""Currency unit helpers.

All amounts inside the ledger are unsigned integers in wei, the smallest unit
of the native currency. These helpers convert to and from decimal amounts of
the native unit (1 unit = 10**18 wei).
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

WEI_PER_UNIT = 10**18

# 0.005 of the native unit
DEFAULT_PRICE_WEI = 5 * 10**15


def parse_ether(amount: str | Decimal | int) -> int:
    """Convert a decimal native-unit amount to wei.

    Example:
        parse_ether("0.005") == 5_000_000_000_000_000

    Raises:
        ValueError: If the amount is negative, not a number, or finer than 1 wei.
    """
    try:
        value = Decimal(str(amount))
    except InvalidOperation as err:
        raise ValueError(f"Not a decimal amount: {amount!r}") from err

    if value < 0:
        raise ValueError(f"Amount must not be negative: {amount!r}")

    wei = value * WEI_PER_UNIT
    if wei != wei.to_integral_value():
        raise ValueError(f"Amount has more precision than 1 wei: {amount!r}")
    return int(wei)


def format_ether(wei: int) -> str:
    """Render a wei amount as a plain decimal string of native units."""
    value = Decimal(wei) / WEI_PER_UNIT
    return format(value.normalize(), "f")
