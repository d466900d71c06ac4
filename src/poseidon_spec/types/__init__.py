"""Reusable type definitions for the Poseidon specification."""

from .base import StrictBaseModel
from .exceptions import MalformedEncodingError, PoseidonError, WrongInputsLength

__all__ = [
    "StrictBaseModel",
    # Exceptions
    "PoseidonError",
    "WrongInputsLength",
    "MalformedEncodingError",
]
