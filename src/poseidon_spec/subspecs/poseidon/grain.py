"""
Deterministic derivation of Poseidon round constants and MDS matrices.

The circomlib Poseidon instance was parameterised with the reference script
from the Poseidon paper (https://eprint.iacr.org/2019/458, Appendix F). That
script seeds an 80-bit Grain LFSR with the instance parameters and draws every
round constant, then the Cauchy MDS matrix, from its output stream.

Running the same generator reproduces the published tables bit for bit, so
the constants never need to be shipped as data.
"""

from __future__ import annotations

from typing import Iterator, List

from ..bn254 import Fr, P, P_BITS

STATE_BITS = 80
"""Width of the Grain shift register."""

WARMUP_CLOCKS = 160
"""Number of initial outputs discarded before sampling."""

TAPS = (62, 51, 38, 23, 13, 0)
"""Feedback positions: new = b[62] ^ b[51] ^ b[38] ^ b[23] ^ b[13] ^ b[0]."""

FIELD_PRIME = 1
"""Field type tag for a prime field (`0` would be a binary field)."""

SBOX_POWER = 0
"""S-box type tag for x -> x^alpha (`1` would be the inverse S-box)."""


def init_sequence(field_bits: int, width: int, rounds_f: int, rounds_p: int) -> List[int]:
    """
    Builds the 80-bit seed of the register from the instance parameters.

    The layout (all big-endian) is: field type (2 bits), S-box type (4 bits),
    field size (12 bits), width (12 bits), full rounds (10 bits), partial
    rounds (10 bits), followed by 30 one bits.

    Args:
        field_bits: Size of the field in bits.
        width: The permutation width `t`.
        rounds_f: Number of full rounds.
        rounds_p: Number of partial rounds.

    Returns:
        The initial register contents, oldest bit first.
    """
    fields = [
        (FIELD_PRIME, 2),
        (SBOX_POWER, 4),
        (field_bits, 12),
        (width, 12),
        (rounds_f, 10),
        (rounds_p, 10),
    ]
    bits: List[int] = []
    for value, size in fields:
        if value >= 1 << size:
            raise ValueError(f"Parameter {value} does not fit in {size} bits")
        bits.extend(int(b) for b in format(value, f"0{size}b"))
    bits.extend([1] * 30)

    assert len(bits) == STATE_BITS
    return bits


class GrainLFSR:
    """The self-shrinking Grain generator used for Poseidon parameters."""

    def __init__(self, field_bits: int, width: int, rounds_f: int, rounds_p: int):
        """Seeds the register and runs the warm-up clocks."""
        # Bit k of the integer holds position k of the register,
        # so the oldest bit is always the least significant one.
        self._state = 0
        for k, bit in enumerate(init_sequence(field_bits, width, rounds_f, rounds_p)):
            self._state |= bit << k

        for _ in range(WARMUP_CLOCKS):
            self._clock()

    def _clock(self) -> int:
        """Shifts the register once and returns the new bit."""
        s = self._state
        new_bit = ((s >> 62) ^ (s >> 51) ^ (s >> 38) ^ (s >> 23) ^ (s >> 13) ^ s) & 1
        self._state = (s >> 1) | (new_bit << (STATE_BITS - 1))
        return new_bit

    def bits(self) -> Iterator[int]:
        """
        Yields output bits using the self-shrinking rule.

        Bits are consumed in pairs `(b1, b2)`; `b2` is emitted only when `b1`
        is one, otherwise the pair is dropped.
        """
        while True:
            if self._clock() == 1:
                yield self._clock()
            else:
                self._clock()

    def random_bits(self, num_bits: int) -> int:
        """Reads `num_bits` output bits as a big-endian integer."""
        stream = self.bits()
        value = 0
        for _ in range(num_bits):
            value = (value << 1) | next(stream)
        return value

    def field_element(self, field_bits: int = P_BITS) -> Fr:
        """Samples a uniform field element by rejection."""
        candidate = self.random_bits(field_bits)
        while candidate >= P:
            candidate = self.random_bits(field_bits)
        return Fr(value=candidate)

    def round_constants(self, count: int, field_bits: int = P_BITS) -> List[Fr]:
        """Draws `count` additive round constants."""
        return [self.field_element(field_bits) for _ in range(count)]

    def cauchy_mds(self, width: int, field_bits: int = P_BITS) -> List[List[Fr]]:
        """
        Draws a `width x width` Cauchy matrix `M[i][j] = 1 / (x_i + y_j)`.

        The `2 * width` seeds are sampled without rejection (reduced modulo P)
        and must be pairwise distinct. The whole sample is redrawn when a
        denominator vanishes.
        """
        while True:
            seeds = [self.random_bits(field_bits) % P for _ in range(2 * width)]
            while len(set(seeds)) != len(seeds):
                seeds = [self.random_bits(field_bits) % P for _ in range(2 * width)]

            xs = [Fr(value=s) for s in seeds[:width]]
            ys = [Fr(value=s) for s in seeds[width:]]

            if any((x + y).value == 0 for x in xs for y in ys):
                continue

            return [[(x + y).inverse() for y in ys] for x in xs]
