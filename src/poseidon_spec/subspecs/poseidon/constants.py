"""
Defines the parameter presets and the per-width constants table for Poseidon.

The table holds, for every supported width `t`, the additive round constants
and the MDS matrix. Entries are derived from the Grain generator on first use
and shared read-only for the lifetime of the process.

.. note::
   The `CIRCOM_BN254` preset matches iden3's circomlib/circomlibjs, which is
   the instance most zero-knowledge tooling on BN254 agrees on.
"""

from __future__ import annotations

import logging
import time
from threading import Lock
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing_extensions import Final

from ..bn254 import Fr
from .grain import GrainLFSR

logger = logging.getLogger(__name__)


class PoseidonConfig(BaseModel):
    """A model holding the configuration constants for a Poseidon preset."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    FIELD_BITS: int
    """Size of the field in bits, as fed into the Grain seed."""

    N_ROUNDS_F: int
    """Number of full rounds, shared across all widths."""

    N_ROUNDS_P: List[int]
    """
    Number of partial rounds per width.

    The entry at index `t - 2` belongs to width `t`.
    """

    BYTES_CHUNK_SIZE: int
    """
    Number of byte values composed into one element when hashing raw bytes.

    31 bytes always stay below the 254-bit modulus.
    """

    @property
    def MAX_INPUTS(self) -> int:  # noqa: N802
        """The largest number of absorbed elements with a matching width."""
        return len(self.N_ROUNDS_P)

    @property
    def MAX_WIDTH(self) -> int:  # noqa: N802
        """The widest supported permutation state."""
        return self.MAX_INPUTS + 1


CIRCOM_BN254: Final = PoseidonConfig(
    FIELD_BITS=254,
    N_ROUNDS_F=8,
    N_ROUNDS_P=[56, 57, 56, 60, 60, 63, 64, 63, 60, 66, 60, 65, 70, 60, 64, 68],
    BYTES_CHUNK_SIZE=31,
)
"""Widths 2 through 17 with the x^5 S-box, as used by circomlib."""


class WidthConstants(BaseModel):
    """The round constants and mixing matrix for a single width."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    width: int = Field(ge=2, description="The size of the state (t).")
    n_rounds_f: int = Field(gt=0, description="Total number of 'full' rounds.")
    n_rounds_p: int = Field(ge=0, description="Total number of 'partial' rounds.")
    round_constants: List[Fr] = Field(
        min_length=1,
        description="Flat list of additive constants, `width` per round.",
    )
    mds: List[List[Fr]] = Field(
        min_length=1,
        description="The `width x width` MDS matrix applied in every round.",
    )

    @model_validator(mode="after")
    def check_lengths(self) -> "WidthConstants":
        """Ensures table sizes match the configuration."""
        expected_constants = (self.n_rounds_f + self.n_rounds_p) * self.width
        if len(self.round_constants) != expected_constants:
            raise ValueError("Incorrect number of round constants provided.")

        if len(self.mds) != self.width or any(len(row) != self.width for row in self.mds):
            raise ValueError("MDS matrix must be square with side equal to width.")

        return self

    @property
    def total_rounds(self) -> int:
        """Number of rounds applied by the permutation."""
        return self.n_rounds_f + self.n_rounds_p


def generate_width_constants(config: PoseidonConfig, width: int) -> WidthConstants:
    """
    Derives the constants for one width from the Grain generator.

    Round constants are drawn first and the MDS matrix afterwards, from the
    same stream, so the order of the two calls below matters.
    """
    n_rounds_p = config.N_ROUNDS_P[width - 2]
    grain = GrainLFSR(config.FIELD_BITS, width, config.N_ROUNDS_F, n_rounds_p)

    round_constants = grain.round_constants(
        (config.N_ROUNDS_F + n_rounds_p) * width, config.FIELD_BITS
    )
    mds = grain.cauchy_mds(width, config.FIELD_BITS)

    return WidthConstants(
        width=width,
        n_rounds_f=config.N_ROUNDS_F,
        n_rounds_p=n_rounds_p,
        round_constants=round_constants,
        mds=mds,
    )


class ConstantsTable:
    """
    Width-indexed, lazily populated, read-only table of Poseidon constants.

    Each width is generated at most once. Generation runs under a lock, so
    concurrent first callers block until the entry is complete and then all
    observe the same object. Published entries are never mutated.
    """

    def __init__(self, config: PoseidonConfig = CIRCOM_BN254):
        """Creates an empty table for the given preset."""
        self.config = config
        self._entries: Dict[int, WidthConstants] = {}
        self._lock = Lock()

    @property
    def max_inputs(self) -> int:
        """The largest number of inputs a single hash can absorb."""
        return self.config.MAX_INPUTS

    def supports(self, width: int) -> bool:
        """Whether the preset defines a permutation of this width."""
        return 2 <= width <= self.config.MAX_WIDTH

    def for_width(self, width: int) -> WidthConstants:
        """
        Returns the constants for width `t`, generating them on first use.

        Args:
            width: The permutation width `t = inputs + 1`.

        Returns:
            The immutable constants for that width.

        Raises:
            ValueError: If the preset has no entry for `width`.
        """
        if not self.supports(width):
            raise ValueError(
                f"Width must be between 2 and {self.config.MAX_WIDTH}, got {width}"
            )

        entry = self._entries.get(width)
        if entry is not None:
            return entry

        with self._lock:
            # Another caller may have finished while we waited on the lock.
            entry = self._entries.get(width)
            if entry is None:
                start = time.perf_counter()
                entry = generate_width_constants(self.config, width)
                self._entries[width] = entry
                logger.debug(
                    "Generated Poseidon constants for width %d (%d rounds) in %.2fs",
                    width,
                    entry.total_rounds,
                    time.perf_counter() - start,
                )
        return entry

    def precompute(self) -> None:
        """Generates every width up front."""
        for width in range(2, self.config.MAX_WIDTH + 1):
            self.for_width(width)


_DEFAULT_TABLE: ConstantsTable | None = None
_DEFAULT_TABLE_LOCK = Lock()


def load_constants() -> ConstantsTable:
    """Returns the process-wide table for the `CIRCOM_BN254` preset."""
    global _DEFAULT_TABLE
    if _DEFAULT_TABLE is None:
        with _DEFAULT_TABLE_LOCK:
            if _DEFAULT_TABLE is None:
                _DEFAULT_TABLE = ConstantsTable(CIRCOM_BN254)
    return _DEFAULT_TABLE
