"""
Membership counting between two hashed sets.

``count`` is the constraint-friendly version: a fixed N x N grid where each
pair contributes through 0/1 arithmetic, so neither the number of matches nor
their positions change the work done.

``count_reference`` is an off-target oracle built on Python sets. It must
agree with the fixed-loop path on every input and exists for tests and
tooling only.
"""

from __future__ import annotations

from typing import Iterable

from .bounded import BoundedArray, SetKind
from .exceptions import ConfigurationError
from .field import FieldProvider


def count(
    hashed_a: BoundedArray,
    n_a: int,
    hashed_b: BoundedArray,
    n_b: int,
    field: FieldProvider,
) -> int:
    """
    Count active elements of A that occur among the active elements of B.

    Membership is boolean: an element of A matching several slots of B is
    counted once. Slots at index ``>= n_a`` (in A) or ``>= n_b`` (in B) never
    contribute.

    Returns:
        Cardinality in ``[0, min(n_a, n_b)]``
    """
    _check_hashed(hashed_a, n_a, "A")
    _check_hashed(hashed_b, n_b, "B")
    if hashed_a.capacity != hashed_b.capacity:
        raise ConfigurationError(
            f"capacity mismatch: {hashed_a.capacity} vs {hashed_b.capacity}"
        )

    capacity = hashed_a.capacity
    total = 0
    for i in range(capacity):
        member = 0
        for j in range(capacity):
            hit = field.and_(
                field.is_equal(hashed_a.values[i], hashed_b.values[j]),
                field.is_less(j, n_b),
            )
            member = field.or_(member, hit)
        total = field.add(total, field.and_(member, field.is_less(i, n_a)))
    return total


def count_reference(a_values: Iterable[int], b_values: Iterable[int]) -> int:
    """
    Distinct elements of ``a_values`` that also appear in ``b_values``.

    O(N) hash-set version of the fixed-loop count. Not for constraint
    targets: its running time depends on the data.
    """
    public = set(b_values)
    return sum(1 for value in dict.fromkeys(a_values) if value in public)


def _check_hashed(hashed: BoundedArray, active: int, label: str) -> None:
    if hashed.kind is not SetKind.HASHED:
        raise ConfigurationError(
            f"set {label} must be hashed, got {hashed.kind.value}"
        )
    if active != hashed.active_count:
        raise ConfigurationError(
            f"active count for {label} ({active}) does not match the set "
            f"({hashed.active_count})"
        )
