"""
Defines the Poseidon hash over BN254 field elements.

A hash call builds a fresh state of width `t = len(inputs) + 1`: the first
slot is the capacity element, initialised to zero, and the remaining slots
hold the inputs verbatim. The permutation runs once and the digest is the
capacity slot of the final state.

There is no padding and no sponge: the input length selects the width, so
`[1, 2]` and `[1, 2, 0]` hash with different permutations and give unrelated
digests.
"""

from __future__ import annotations

from threading import Lock
from typing import List, Sequence

from ...types import WrongInputsLength
from ..bn254 import ZERO, Fr
from .constants import ConstantsTable, load_constants
from .permutation import permute


class PoseidonHasher:
    """An instance of the Poseidon hash engine bound to a constants table."""

    def __init__(self, table: ConstantsTable):
        """Initializes the hasher with a specific constants table."""
        self.table = table

    @property
    def max_inputs(self) -> int:
        """The largest number of elements a single call can absorb."""
        return self.table.max_inputs

    def hash(self, inputs: Sequence[Fr]) -> Fr:
        """
        Hashes between 1 and `max_inputs` field elements into one element.

        Args:
            inputs: The field elements to absorb.

        Returns:
            The digest, `state[0]` after the final round.

        Raises:
            WrongInputsLength: If `inputs` is empty or too long.
        """
        if not 1 <= len(inputs) <= self.max_inputs:
            raise WrongInputsLength(self.max_inputs, len(inputs))

        width = len(inputs) + 1
        constants = self.table.for_width(width)

        # Capacity slot first, then the inputs.
        state: List[Fr] = [ZERO, *inputs]

        return permute(state, constants)[0]


_DEFAULT_HASHER: PoseidonHasher | None = None
_DEFAULT_HASHER_LOCK = Lock()


def poseidon_default() -> PoseidonHasher:
    """Returns the process-wide hasher for the circomlib parameters."""
    global _DEFAULT_HASHER
    if _DEFAULT_HASHER is None:
        with _DEFAULT_HASHER_LOCK:
            if _DEFAULT_HASHER is None:
                _DEFAULT_HASHER = PoseidonHasher(load_constants())
    return _DEFAULT_HASHER


def poseidon_hash(inputs: Sequence[Fr]) -> Fr:
    """Hashes field elements with the default hasher."""
    return poseidon_default().hash(inputs)
