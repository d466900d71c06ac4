"""Core definition of the BN254 scalar field Fr."""

from typing import Self

from pydantic import Field, field_validator

from poseidon_spec.types import MalformedEncodingError, StrictBaseModel

# =================================================================
# Field Constants
#
# The scalar field of the BN254 (alt_bn128) curve, which is the native
# field of circom circuits and of the EVM pairing precompiles.
# =================================================================

P: int = 21888242871839275222246405745257275088548364400416034343698204186575808495617
"""The BN254 scalar field modulus (the group order of the curve)."""

P_BITS: int = 254
"""The number of bits in the prime P."""

P_BYTES: int = (P_BITS + 7) // 8
"""The size of a BN254 scalar field element in bytes."""

# =================================================================
# Scalar Field Fr
#
# All arithmetic is performed modulo P and every stored value is fully
# reduced, so no un-reduced integer can reach the permutation.
# =================================================================


class Fr(StrictBaseModel):
    """An element in the BN254 scalar field F_r."""

    value: int = Field(ge=0, lt=P, description="Field element value in the range [0, P)")

    @field_validator("value", mode="before")
    @classmethod
    def reduce_modulo_p(cls, v: int) -> int:
        """Reduces an integer input modulo P before validation."""
        return v % P

    def __add__(self, other: Self) -> Self:
        """Field addition."""
        return self.__class__(value=self.value + other.value)

    def __sub__(self, other: Self) -> Self:
        """Field subtraction."""
        return self.__class__(value=self.value - other.value)

    def __neg__(self) -> Self:
        """Field negation."""
        return self.__class__(value=-self.value)

    def __mul__(self, other: Self) -> Self:
        """Field multiplication."""
        return self.__class__(value=self.value * other.value)

    def __pow__(self, exponent: int) -> Self:
        """Field exponentiation."""
        return self.__class__(value=pow(self.value, exponent, P))

    def square(self) -> Self:
        """Field squaring."""
        return self * self

    def inverse(self) -> Self:
        """Computes the multiplicative inverse."""
        if self.value == 0:
            raise ZeroDivisionError("Cannot invert the zero element.")
        # a^(P-2) is the multiplicative inverse of a in F_r
        return self ** (P - 2)

    def __truediv__(self, other: Self) -> Self:
        """Field division."""
        return self * other.inverse()

    def __int__(self) -> int:
        """Canonical integer value in [0, P)."""
        return self.value

    def __bytes__(self) -> bytes:
        """
        Serialize the field element using Python's bytes protocol.

        Returns:
            32-byte little-endian representation of the field element.

        Example:
            >>> fr = Fr(value=42)
            >>> data = bytes(fr)
            >>> len(data) == 32
            True
        """
        return self.value.to_bytes(P_BYTES, byteorder="little")

    @classmethod
    def from_bytes(cls, data: bytes) -> Self:
        """
        Deserialize a field element from its canonical encoding.

        Unlike integer construction, decoding never reduces: the bytes must
        already hold a value below the modulus.

        Args:
            data: 32-byte little-endian representation of a field element.

        Returns:
            Deserialized field element.

        Raises:
            MalformedEncodingError: If data has incorrect length or is not canonical.

        Example:
            >>> fr = Fr(value=42)
            >>> Fr.from_bytes(bytes(fr)) == fr
            True
        """
        if len(data) != P_BYTES:
            raise MalformedEncodingError(f"Expected {P_BYTES} bytes, got {len(data)}")

        value = int.from_bytes(data, byteorder="little")

        if value >= P:
            raise MalformedEncodingError(
                f"Value 0x{value:064x} exceeds field modulus 0x{P:064x}"
            )

        return cls(value=value)

    @classmethod
    def serialize_list(cls, elements: list[Self]) -> bytes:
        """
        Serialize a list of field elements to bytes.

        Args:
            elements: List of field elements to serialize.

        Returns:
            Concatenated bytes of all field elements.
        """
        return b"".join(bytes(elem) for elem in elements)

    @classmethod
    def deserialize_list(cls, data: bytes, count: int) -> list[Self]:
        """
        Deserialize a fixed number of field elements from bytes.

        Args:
            data: Raw bytes to deserialize.
            count: Expected number of field elements.

        Returns:
            List of deserialized field elements.

        Raises:
            MalformedEncodingError: If data length doesn't match expected count,
                or any element is not canonical.
        """
        expected_len = count * P_BYTES
        if len(data) != expected_len:
            raise MalformedEncodingError(
                f"Expected {expected_len} bytes for {count} elements, got {len(data)}"
            )

        return [cls.from_bytes(data[i : i + P_BYTES]) for i in range(0, len(data), P_BYTES)]


ZERO = Fr(value=0)
"""The additive identity."""

ONE = Fr(value=1)
"""The multiplicative identity."""
