"""
Byte-level entry points for Poseidon hashing.

These functions are the boundary used by bindings: every field element
crosses it as a little-endian byte string of at most 32 bytes, and every
digest leaves it as exactly 32 bytes.

Shorter encodings are zero-extended on the high end, so `b"\\x05"` is the
element 5. Encodings longer than 32 bytes, or encoding a value that is not
below the modulus, are rejected with the position of the offending element.
"""

from __future__ import annotations

from typing import List, Sequence

from ...types import MalformedEncodingError
from ..bn254 import P_BYTES, Fr
from . import encoding
from .hasher import poseidon_hash


def decode_field(data: bytes, index: int | None = None) -> Fr:
    """
    Decodes one little-endian field encoding, padding it to 32 bytes.

    Args:
        data: Up to 32 bytes, least significant byte first.
        index: Position in the caller's batch, used in error messages.

    Returns:
        The decoded field element.

    Raises:
        MalformedEncodingError: If `data` is too long or not canonical.
    """
    if len(data) > P_BYTES:
        raise MalformedEncodingError(
            f"Expected at most {P_BYTES} bytes, got {len(data)}", index=index
        )
    try:
        return Fr.from_bytes(data.ljust(P_BYTES, b"\x00"))
    except MalformedEncodingError as e:
        raise MalformedEncodingError(e.detail, index=index) from e


def decode_fields(elements: Sequence[bytes]) -> List[Fr]:
    """Decodes a batch of field encodings."""
    return [decode_field(data, index) for index, data in enumerate(elements)]


def hash_fields(elements: Sequence[bytes]) -> bytes:
    """Hashes a list of field encodings into a 32-byte digest."""
    return bytes(poseidon_hash(decode_fields(elements)))


def hash_bytes(data: bytes) -> bytes:
    """Hashes an arbitrary byte string into a 32-byte digest."""
    return bytes(encoding.hash_bytes(data))


def compose_and_hash(elements: Sequence[bytes], chunk_size: int, bits_per_chunk: int) -> bytes:
    """
    Composes a list of field encodings and hashes the result.

    `bits_per_chunk` is accepted and passed through, but composition does not
    use it.
    """
    return bytes(encoding.compose_and_hash(decode_fields(elements), chunk_size, bits_per_chunk))
