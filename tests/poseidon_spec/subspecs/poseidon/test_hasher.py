"""
Tests for the Poseidon hash over BN254 field elements.
"""

from typing import List

import pytest

from poseidon_spec.subspecs.bn254 import Fr
from poseidon_spec.subspecs.poseidon import constants as constants_module
from poseidon_spec.subspecs.poseidon.constants import CIRCOM_BN254, ConstantsTable
from poseidon_spec.subspecs.poseidon.hasher import (
    PoseidonHasher,
    poseidon_default,
    poseidon_hash,
)
from poseidon_spec.types import PoseidonError, WrongInputsLength


def _fields(*values: int) -> List[Fr]:
    return [Fr(value=v) for v in values]


# --- Test Vectors ---
#
# Digests of circomlibjs' `poseidon` for the same inputs.

HASH_VECTORS = [
    (
        [1],
        18586133768512220936620570745912940619677854269274689475585506675881198879027,
    ),
    (
        [1, 2],
        7853200120776062878684798364095072458815029376092732009249414926327459813530,
    ),
    (
        [1, 2, 0, 0, 0],
        1018317224307729531995786483840663576608797660851238720571059489595066344487,
    ),
    (
        [1, 2, 0, 0, 0, 0],
        15336558801450556532856248569924170992202208561737609669134139141992924267169,
    ),
    (
        [3, 4, 0, 0, 0],
        5811595552068139067952687508729883632420015185677766880877743348592482390548,
    ),
    (
        [3, 4, 0, 0, 0, 0],
        12263118664590987767234828103155242843640892839966517009184493198782366909018,
    ),
    (
        [1, 2, 3, 4, 5, 6],
        20400040500897583745843009878988256314335038853985262692600694741116813247201,
    ),
    (
        list(range(1, 15)),
        8354478399926161176778659061636406690034081872658507739535256090879947077494,
    ),
    (
        list(range(1, 10)) + [0] * 5,
        5540388656744764564518487011617040650780060800286365721923524861648744699539,
    ),
    (
        list(range(1, 10)) + [0] * 7,
        11882816200654282475720830292386643970958445617880627439994635298904836126497,
    ),
    (
        list(range(1, 17)),
        9989051620750914585850546081941653841776809718687451684622678807385399211877,
    ),
]


@pytest.mark.parametrize(
    "inputs, expected",
    HASH_VECTORS,
    ids=[f"{len(v)}_inputs_sum_{sum(v)}" for v, _ in HASH_VECTORS],
)
def test_hash_vector(hasher: PoseidonHasher, inputs: List[int], expected: int) -> None:
    """
    Tests the hash against known answer vectors.

    These pin the constants, the round schedule and the state layout at once.
    """
    assert hasher.hash(_fields(*inputs)) == Fr(value=expected)


def test_hash_is_deterministic(hasher: PoseidonHasher) -> None:
    """Repeated calls on the same input agree."""
    inputs = _fields(7, 11, 13)
    assert hasher.hash(inputs) == hasher.hash(inputs)
    assert hasher.hash(inputs) == hasher.hash(list(inputs))


def test_no_implicit_padding(hasher: PoseidonHasher) -> None:
    """Appending zeros selects a wider permutation and changes the digest."""
    assert hasher.hash(_fields(1, 2)) != hasher.hash(_fields(1, 2, 0))
    assert hasher.hash(_fields(1, 2, 0, 0, 0)) != hasher.hash(_fields(1, 2, 0, 0, 0, 0))


def test_hash_leaves_input_untouched(hasher: PoseidonHasher) -> None:
    """The input sequence is copied into a fresh state."""
    inputs = _fields(1, 2)
    hasher.hash(inputs)
    assert inputs == _fields(1, 2)


def test_empty_input() -> None:
    """Zero inputs have no matching width."""
    with pytest.raises(WrongInputsLength) as exc_info:
        poseidon_hash([])

    assert exc_info.value.max_length == 16
    assert exc_info.value.actual == 0
    assert str(exc_info.value) == "Wrong inputs length: max length is `16` but got `0`"


def test_too_many_inputs() -> None:
    """More than 16 inputs exceed the widest permutation."""
    inputs = _fields(1, 2) + _fields(*[0] * 15)
    assert len(inputs) == 17

    with pytest.raises(WrongInputsLength, match="max length is `16` but got `17`") as exc_info:
        poseidon_hash(inputs)

    assert exc_info.value.max_length == 16
    assert exc_info.value.actual == 17
    assert isinstance(exc_info.value, PoseidonError)


def test_length_checked_before_constants(monkeypatch: pytest.MonkeyPatch) -> None:
    """Invalid lengths fail without generating any constants."""

    def fail(*args: object) -> None:
        raise AssertionError("constants must not be generated")

    monkeypatch.setattr(constants_module, "generate_width_constants", fail)
    hasher = PoseidonHasher(ConstantsTable(CIRCOM_BN254))

    with pytest.raises(WrongInputsLength):
        hasher.hash([])
    with pytest.raises(WrongInputsLength):
        hasher.hash(_fields(*range(20)))


def test_default_hasher() -> None:
    """The module-level helper uses one shared hasher."""
    assert poseidon_default() is poseidon_default()
    assert poseidon_default().max_inputs == CIRCOM_BN254.MAX_INPUTS
    assert poseidon_hash(_fields(1)) == Fr(value=HASH_VECTORS[0][1])
