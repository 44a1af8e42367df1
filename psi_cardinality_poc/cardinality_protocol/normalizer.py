"""
First-occurrence deduplication over a fixed-capacity array.

Algorithm:
    For each slot i, compare element i with every earlier slot j < i. If no
    earlier slot is equal, the element is new: it is written to the next free
    output slot and the active count grows by one. The comparison grid is the
    fixed triangle {(i, j) : j < i < N}; there is no early exit and no loop
    bound that depends on the element values.

The write itself is branch-free: every output slot k is rewritten as
``select(is_new * [k == active], value, out[k])``.
"""

from __future__ import annotations

import logging
from typing import Sequence, Tuple

from .bounded import BoundedArray, SetKind, prepare_raw_set
from .config import DEFAULT_CONFIG, CircuitConfig
from .exceptions import ConfigurationError
from .field import FieldProvider

logger = logging.getLogger(__name__)


def validate_raw_set(
    values: Sequence[int], config: CircuitConfig = DEFAULT_CONFIG
) -> BoundedArray:
    """
    Reject a raw set before normalization begins.

    Raises:
        InvalidInputError: An element equals the sentinel or is not a field
            element
        CapacityExceededError: More than ``config.capacity`` values
        ConfigurationError: Fewer than ``config.capacity`` values
    """
    return prepare_raw_set(values, config)


def normalize(
    source: BoundedArray, field: FieldProvider
) -> Tuple[BoundedArray, int]:
    """
    Deduplicate ``source`` keeping first occurrences in order.

    Accepts a RAW array, or a NORMALIZED array (its inactive tail is masked
    out), so that normalizing twice is well defined.

    Args:
        source: Array to deduplicate
        field: Field provider; its trace records the work done

    Returns:
        (normalized array, active count)

    Example:
        >>> raw = prepare_raw_set([1, 1, 2, 3])
        >>> normalized, count = normalize(raw, FieldProvider())
        >>> normalized.values, count
        ((1, 2, 3, 0), 3)
    """
    if source.kind is SetKind.HASHED:
        raise ConfigurationError("cannot normalize a hashed set")
    if source.modulus != field.modulus:
        raise ConfigurationError("set and field provider use different moduli")

    capacity = source.capacity
    values = source.values
    out = [source.sentinel] * capacity
    active = 0

    for i in range(capacity):
        live = field.is_less(i, source.active_count)
        seen = 0
        for j in range(i):
            seen = field.or_(seen, field.is_equal(values[i], values[j]))
        is_new = field.and_(live, field.not_(seen))

        for k in range(capacity):
            write = field.and_(is_new, field.is_equal(k, active))
            out[k] = field.select(write, values[i], out[k])
        active = field.add(active, is_new)

    logger.debug(
        "normalized %s set: capacity=%d active=%d", source.kind.value, capacity, active
    )
    normalized = BoundedArray(
        kind=SetKind.NORMALIZED,
        values=tuple(out),
        capacity=capacity,
        active_count=active,
        sentinel=source.sentinel,
        modulus=source.modulus,
    )
    return normalized, active
