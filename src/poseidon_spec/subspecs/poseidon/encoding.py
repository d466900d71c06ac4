"""
Input preparation for the Poseidon hash.

Raw bytes and long field sequences do not fit the fixed-width permutation
directly. This module turns bytes into field elements and "composes" runs of
elements into single elements by a weighted sum before hashing.

.. warning::
   Composition weights consecutive elements by 1, 2, 4, 8, ... regardless of
   how many bits each element carries. Only single-bit inputs are packed
   losslessly; for byte values the slots overlap, so different byte strings
   can compose to the same element. Existing digests depend on this rule, so
   it is kept as is rather than switched to base-256 weights.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from ..bn254 import ONE, ZERO, Fr
from .constants import CIRCOM_BN254
from .hasher import poseidon_hash

logger = logging.getLogger(__name__)

TWO = Fr(value=2)
"""Ratio between consecutive composition weights."""

BYTES_CHUNK_SIZE = CIRCOM_BN254.BYTES_CHUNK_SIZE
"""Number of byte values composed into one element by `hash_bytes`."""


def bytes_to_fields(data: bytes) -> List[Fr]:
    """Maps every byte to the field element holding its value (0..255)."""
    return [Fr(value=b) for b in data]


def compose(inputs: Sequence[Fr], chunk_size: int) -> List[Fr]:
    """
    Packs consecutive runs of elements into single elements.

    The input is cut into chunks of `chunk_size` elements (the last one may be
    shorter) and each chunk `[v_0, v_1, ...]` becomes `sum_k v_k * 2^k`.

    Args:
        inputs: The elements to pack.
        chunk_size: Maximum number of elements per composed value.

    Returns:
        One element per chunk, in order.

    Raises:
        ValueError: If `chunk_size` is not positive.
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    composed: List[Fr] = []
    for start in range(0, len(inputs), chunk_size):
        acc = ZERO
        coeff = ONE
        for element in inputs[start : start + chunk_size]:
            acc += element * coeff
            coeff *= TWO
        composed.append(acc)
    return composed


def compose_and_hash(
    inputs: Sequence[Fr], chunk_size: int, bits_per_chunk: int | None = None
) -> Fr:
    """
    Composes the inputs and hashes the composed elements.

    Args:
        inputs: The elements to pack and hash.
        chunk_size: Maximum number of elements per composed value.
        bits_per_chunk: Accepted for interface compatibility. Composition
            does not consult it.

    Returns:
        The Poseidon digest of the composed elements.

    Raises:
        WrongInputsLength: If the composed sequence is empty or too long.
    """
    if bits_per_chunk is not None:
        logger.debug("Ignoring bits_per_chunk=%d during composition", bits_per_chunk)
    return poseidon_hash(compose(inputs, chunk_size))


def hash_bytes(data: bytes) -> Fr:
    """
    Hashes an arbitrary byte string.

    Every `BYTES_CHUNK_SIZE` bytes are composed into one element. Inputs of
    zero bytes, or of more than `BYTES_CHUNK_SIZE * max_inputs` bytes, fail
    with `WrongInputsLength`.
    """
    return compose_and_hash(bytes_to_fields(data), BYTES_CHUNK_SIZE)
