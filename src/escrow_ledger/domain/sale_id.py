"""Sale receipt identifier generation.

A sale ID is a 15-character string over ``A-Z0-9`` minted when the escrow
agent releases a buyer's deposit. It only has to be unique within that
buyer's own receipt history.

Generation flow:
    1. Hash (timestamp, seed, caller, counter, attempt) with SHA3-256.
    2. Map the first 15 digest bytes onto the 36-symbol alphabet by modulo.
    3. Compare against the buyer's existing IDs; on collision bump the attempt
       number and hash again.
    4. Give up after 10 attempts with SaleIdExhaustedError.

Everything except the entropy source is pure: given the same SaleIdEntropy
and history, the same ID comes out.
"""

from __future__ import annotations

import hashlib
import secrets
import time
from collections.abc import Collection
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from tenacity import RetryError, Retrying, retry_if_exception_type, stop_after_attempt

from escrow_ledger.domain.accounts import address_bytes
from escrow_ledger.domain.exceptions import SaleIdExhaustedError
from escrow_ledger.logging_config import get_logger

logger = get_logger(__name__)

SALE_ID_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
SALE_ID_LENGTH = 15
MAX_SALE_ID_ATTEMPTS = 10

_WORD = 32


@dataclass(frozen=True)
class SaleIdEntropy:
    """Inputs to one sale ID derivation.

    Attributes:
        timestamp: Seconds since the epoch when the release was processed.
        seed: Low-predictability random integer (up to 256 bits).
        caller: Normalized address of the account triggering the release.
        counter: The ledger's next_id counter at the time of the release.
    """

    timestamp: int
    seed: int
    caller: str
    counter: int

    def pack(self, attempt: int) -> bytes:
        """Tightly packed big-endian encoding of the inputs plus attempt."""
        return b"".join(
            (
                self.timestamp.to_bytes(_WORD, "big"),
                self.seed.to_bytes(_WORD, "big"),
                address_bytes(self.caller),
                self.counter.to_bytes(_WORD, "big"),
                attempt.to_bytes(_WORD, "big"),
            )
        )


@runtime_checkable
class EntropySource(Protocol):
    """Supplies the non-deterministic half of the sale ID inputs."""

    def timestamp(self) -> int: ...

    def seed(self) -> int: ...


class SystemEntropy:
    """Wall clock plus the OS CSPRNG."""

    def timestamp(self) -> int:
        return int(time.time())

    def seed(self) -> int:
        return secrets.randbits(256)


class _SaleIdCollision(Exception):
    """Candidate already present in the buyer's history."""


def derive_sale_id(entropy: SaleIdEntropy, attempt: int) -> str:
    """Derive the candidate sale ID for one attempt."""
    digest = hashlib.sha3_256(entropy.pack(attempt)).digest()
    return "".join(
        SALE_ID_ALPHABET[digest[i % len(digest)] % len(SALE_ID_ALPHABET)]
        for i in range(SALE_ID_LENGTH)
    )


def generate_sale_id(
    entropy: SaleIdEntropy,
    existing: Collection[str],
    buyer: str,
    max_attempts: int = MAX_SALE_ID_ATTEMPTS,
) -> str:
    """Return a sale ID not present in ``existing``.

    Args:
        entropy: Hash inputs for this release.
        existing: The buyer's current sale IDs.
        buyer: Used for error reporting only.
        max_attempts: Upper bound on derivations tried.

    Raises:
        SaleIdExhaustedError: If every attempt collided.
    """
    candidate = ""
    try:
        for attempt in Retrying(
            stop=stop_after_attempt(max_attempts),
            retry=retry_if_exception_type(_SaleIdCollision),
        ):
            with attempt:
                index = attempt.retry_state.attempt_number - 1
                candidate = derive_sale_id(entropy, index)
                if candidate in existing:
                    logger.debug("sale_id.collision", buyer=buyer, attempt=index)
                    raise _SaleIdCollision(candidate)
    except RetryError as err:
        logger.error("sale_id.exhausted", buyer=buyer, attempts=max_attempts)
        raise SaleIdExhaustedError(buyer, max_attempts) from err

    return candidate
