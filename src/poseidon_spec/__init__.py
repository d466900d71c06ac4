"""Python specification of the Poseidon hash over the BN254 scalar field."""

from .subspecs.bn254 import Fr
from .subspecs.poseidon import compose, compose_and_hash, hash_bytes, poseidon_hash
from .types import MalformedEncodingError, PoseidonError, WrongInputsLength

__all__ = [
    "Fr",
    "MalformedEncodingError",
    "PoseidonError",
    "WrongInputsLength",
    "compose",
    "compose_and_hash",
    "hash_bytes",
    "poseidon_hash",
]
