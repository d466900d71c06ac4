"""Specification for the Poseidon hash over the BN254 scalar field."""

from .constants import (
    CIRCOM_BN254,
    ConstantsTable,
    PoseidonConfig,
    WidthConstants,
    load_constants,
)
from .encoding import bytes_to_fields, compose, compose_and_hash, hash_bytes
from .hasher import PoseidonHasher, poseidon_default, poseidon_hash
from .permutation import permute

__all__ = [
    "CIRCOM_BN254",
    "ConstantsTable",
    "PoseidonConfig",
    "PoseidonHasher",
    "WidthConstants",
    "bytes_to_fields",
    "compose",
    "compose_and_hash",
    "hash_bytes",
    "load_constants",
    "permute",
    "poseidon_default",
    "poseidon_hash",
]
