"""Final equality check between computed and declared cardinality."""

from __future__ import annotations

from typing import Optional

from .exceptions import CardinalityAssertionError, InvalidInputError
from .field import FieldProvider


def validate_expected(expected: int, field: FieldProvider) -> int:
    """Reject a declared cardinality that is not a field element."""
    if not field.contains(expected):
        raise InvalidInputError(
            f"expected cardinality must be a field element, got {expected!r}"
        )
    return expected


def assert_cardinality(
    cardinality: int, expected: int, field: Optional[FieldProvider] = None
) -> None:
    """
    Require ``cardinality == expected``.

    Raises:
        CardinalityAssertionError: On mismatch. There is no partial success.
    """
    field = field or FieldProvider()
    validate_expected(expected, field)
    if not field.eq(cardinality, expected):
        raise CardinalityAssertionError(cardinality, expected)
