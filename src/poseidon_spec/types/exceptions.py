"""Exception hierarchy for the Poseidon hashing specification."""

from __future__ import annotations


class PoseidonError(Exception):
    """
    Base exception for all Poseidon-related errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class WrongInputsLength(PoseidonError):
    """
    Raised when the number of absorbed elements has no matching permutation width.

    Covers both the empty input and inputs longer than the widest state.

    Attributes:
        max_length: The largest number of inputs the constants table supports.
        actual: The number of inputs that was supplied.
    """

    def __init__(self, max_length: int, actual: int) -> None:
        self.max_length = max_length
        self.actual = actual

        super().__init__(f"Wrong inputs length: max length is `{max_length}` but got `{actual}`")


class MalformedEncodingError(PoseidonError, ValueError):
    """
    Raised when bytes cannot be decoded into a canonical field element.

    Attributes:
        detail: Description of what went wrong.
        index: Position of the offending element in a batch (if known).
    """

    def __init__(self, detail: str, *, index: int | None = None) -> None:
        self.detail = detail
        self.index = index

        msg = detail if index is None else f"Element {index}: {detail}"
        super().__init__(msg)
