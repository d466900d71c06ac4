"""Specifications for the BN254 scalar field."""

from .field import ONE, P_BITS, P_BYTES, ZERO, Fr, P

__all__ = [
    "P",
    "P_BITS",
    "P_BYTES",
    "ZERO",
    "ONE",
    "Fr",
]
