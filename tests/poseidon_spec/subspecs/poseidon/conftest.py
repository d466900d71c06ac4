"""Shared fixtures for the Poseidon tests."""

import pytest

from poseidon_spec.subspecs.poseidon import (
    ConstantsTable,
    PoseidonHasher,
    load_constants,
    poseidon_default,
)


@pytest.fixture(scope="session")
def table() -> ConstantsTable:
    """The process-wide constants table, shared so each width is generated once."""
    return load_constants()


@pytest.fixture(scope="session")
def hasher() -> PoseidonHasher:
    """The default hasher bound to the shared table."""
    return poseidon_default()
