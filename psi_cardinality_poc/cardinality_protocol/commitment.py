"""Element commitments for normalized sets."""

from __future__ import annotations

import logging

from .bounded import BoundedArray, SetKind
from .exceptions import ConfigurationError
from .field import FieldProvider
from .hashing import FieldHash

logger = logging.getLogger(__name__)


def commit(
    normalized: BoundedArray,
    active_count: int,
    hasher: FieldHash,
    field: FieldProvider,
) -> BoundedArray:
    """
    Replace every active element by its one-way hash.

    Slot i holds ``hasher(normalized[i])`` for ``i < active_count`` and the
    sentinel otherwise. The hash is evaluated on every slot and the result is
    kept or discarded by ``select``, so the work done does not depend on
    ``active_count``.

    Raises:
        TypeError: If ``hasher`` is not a ``FieldHash``
        ConfigurationError: If ``hasher`` is flagged invertible, the input
            is not a normalized set, or the active count disagrees with it
    """
    if not isinstance(hasher, FieldHash):
        raise TypeError(
            f"hasher must be a FieldHash provider, got {type(hasher).__name__}"
        )
    if hasher.invertible:
        raise ConfigurationError(
            f"hash provider {type(hasher).__name__} is flagged invertible"
        )
    if normalized.kind is not SetKind.NORMALIZED:
        raise ConfigurationError(
            f"commit expects a normalized set, got {normalized.kind.value}"
        )
    if active_count != normalized.active_count:
        raise ConfigurationError(
            f"active_count {active_count} does not match normalized set "
            f"({normalized.active_count})"
        )
    if hasher.modulus != field.modulus:
        raise ConfigurationError("hasher and field provider use different moduli")

    out = []
    for i, value in enumerate(normalized.values):
        hashed = field.apply_hash(hasher, value)
        active = field.is_less(i, active_count)
        out.append(field.select(active, hashed, normalized.sentinel))

    logger.debug("committed %d slots with %s", normalized.capacity, hasher.name)
    return BoundedArray(
        kind=SetKind.HASHED,
        values=tuple(out),
        capacity=normalized.capacity,
        active_count=active_count,
        sentinel=normalized.sentinel,
        modulus=normalized.modulus,
    )
