"""
A minimal Python specification for the Poseidon permutation.

The design follows the paper "POSEIDON: A New Hash Function for
Zero-Knowledge Proof Systems" (https://eprint.iacr.org/2019/458), with the
round layout used by circomlib: every round adds constants to the whole
state, applies the S-box, then multiplies by a dense MDS matrix.
"""

from typing import List

from ..bn254 import ZERO, Fr
from .constants import WidthConstants

S_BOX_DEGREE = 5
"""
The S-box exponent `d`.

For BN254, `gcd(5, p-1) = 1`, so `x -> x^5` is a permutation of the field.
"""


def add_round_constants(state: List[Fr], round_constants: List[Fr], offset: int) -> List[Fr]:
    """
    Adds one round's worth of constants to the state (ARK).

    Args:
        state: The current state vector.
        round_constants: The flat constants list for this width.
        offset: Index of the first constant for this round (`round * width`).

    Returns:
        The state after constant addition.
    """
    return [s + round_constants[offset + j] for j, s in enumerate(state)]


def sbox(x: Fr) -> Fr:
    """Computes `x^5` as `((x^2)^2) * x`."""
    return x.square().square() * x


def mix(state: List[Fr], mds: List[List[Fr]]) -> List[Fr]:
    """
    Applies the linear layer: `new_state[i] = sum_j mds[i][j] * state[j]`.

    Args:
        state: The current state vector.
        mds: The `width x width` MDS matrix.

    Returns:
        The mixed state vector.
    """
    return [sum((m_ij * s_j for m_ij, s_j in zip(row, state, strict=True)), ZERO) for row in mds]


def permute(state: List[Fr], constants: WidthConstants) -> List[Fr]:
    """
    Performs the full Poseidon permutation on the given state.

    The rounds are split into three zones:
    Full Rounds (R_F / 2) -> Partial Rounds (R_P) -> Full Rounds (R_F / 2)

    Args:
        state: A list of Fr elements representing the current state.
        constants: The constants for the state's width.

    Returns:
        The new state after applying the permutation.
    """
    # Ensure the input state has the correct dimensions.
    width = constants.width
    if len(state) != width:
        raise ValueError(f"Input state must have length {width}")

    # Zone boundaries: rounds in [partial_start, partial_end) are partial.
    partial_start = constants.n_rounds_f // 2
    partial_end = partial_start + constants.n_rounds_p

    state = list(state)
    for i in range(constants.total_rounds):
        # Add round constants to the entire state.
        state = add_round_constants(state, constants.round_constants, i * width)

        if partial_start <= i < partial_end:
            # Partial round: only the first element goes through the S-box.
            state[0] = sbox(state[0])
        else:
            # Full round: every element goes through the S-box.
            state = [sbox(s) for s in state]

        # Apply the MDS matrix for diffusion.
        state = mix(state, constants.mds)

    return state
