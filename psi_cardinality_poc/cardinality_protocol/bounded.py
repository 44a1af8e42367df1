"""
Fixed-capacity arrays with an explicit active count.

A single frozen dataclass models the three set shapes of the kernel:

- RAW: exactly ``capacity`` caller-supplied elements, none equal to the
  sentinel, all active.
- NORMALIZED: distinct elements in first-occurrence order in the first
  ``active_count`` slots, sentinel afterwards.
- HASHED: commitments of the normalized elements in the first
  ``active_count`` slots, sentinel afterwards.

Invariant for every kind: ``0 <= active_count <= capacity`` and
``len(values) == capacity``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Tuple

from .config import DEFAULT_CONFIG, CircuitConfig
from .exceptions import CapacityExceededError, ConfigurationError, InvalidInputError


class SetKind(Enum):
    RAW = "raw"
    NORMALIZED = "normalized"
    HASHED = "hashed"


@dataclass(frozen=True)
class BoundedArray:
    """
    Fixed-capacity sequence of field elements.

    Attributes:
        kind: Which stage of the pipeline produced the array
        values: Exactly ``capacity`` field elements
        capacity: Fixed number of slots N
        active_count: Number of meaningful leading slots
        sentinel: Reserved field element for inactive slots
        modulus: Field modulus the values belong to

    Raises:
        ConfigurationError: If the shape does not match the capacity
        InvalidInputError: If a RAW array holds the sentinel or a value
            outside the field
    """

    kind: SetKind
    values: Tuple[int, ...]
    capacity: int
    active_count: int
    sentinel: int = DEFAULT_CONFIG.sentinel
    modulus: int = DEFAULT_CONFIG.modulus

    def __post_init__(self) -> None:
        if not isinstance(self.values, tuple):
            object.__setattr__(self, "values", tuple(self.values))

        if len(self.values) != self.capacity:
            raise ConfigurationError(
                f"{self.kind.value} set must hold exactly {self.capacity} "
                f"elements, got {len(self.values)}"
            )
        if not 0 <= self.active_count <= self.capacity:
            raise ConfigurationError(
                f"active_count {self.active_count} outside [0, {self.capacity}]"
            )

        for index, value in enumerate(self.values):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidInputError(
                    f"slot {index} must be an int field element, got {type(value).__name__}"
                )
            if not 0 <= value < self.modulus:
                raise InvalidInputError(f"slot {index} is outside the field")

        if self.kind is SetKind.RAW:
            if self.active_count != self.capacity:
                raise ConfigurationError("raw set must have every slot active")
            for index, value in enumerate(self.values):
                if value == self.sentinel:
                    raise InvalidInputError(
                        f"slot {index} holds the reserved sentinel value"
                    )
        else:
            for index in range(self.active_count, self.capacity):
                if self.values[index] != self.sentinel:
                    raise ConfigurationError(
                        f"inactive slot {index} of {self.kind.value} set "
                        "must hold the sentinel"
                    )

    def active_values(self) -> Tuple[int, ...]:
        return self.values[: self.active_count]

    def __len__(self) -> int:
        return self.capacity

    def __iter__(self):
        return iter(self.values)


def prepare_raw_set(
    values: Sequence[int], config: CircuitConfig = DEFAULT_CONFIG
) -> BoundedArray:
    """
    Build a RAW array from caller values.

    Args:
        values: Exactly ``config.capacity`` field elements
        config: Circuit configuration

    Returns:
        BoundedArray of kind RAW

    Raises:
        CapacityExceededError: More values than the capacity. The fixed-size
            kernel would otherwise silently drop the overflow.
        ConfigurationError: Fewer values than the capacity
        InvalidInputError: Sentinel or non-field value present
    """
    if isinstance(values, BoundedArray):
        if values.kind is not SetKind.RAW:
            raise ConfigurationError(f"expected a raw set, got {values.kind.value}")
        if values.capacity != config.capacity:
            raise ConfigurationError(
                f"raw set capacity {values.capacity} does not match "
                f"configured capacity {config.capacity}"
            )
        return values

    items = tuple(values)
    if len(items) > config.capacity:
        raise CapacityExceededError(
            f"{len(items)} values supplied for capacity {config.capacity}"
        )
    return BoundedArray(
        kind=SetKind.RAW,
        values=items,
        capacity=config.capacity,
        active_count=config.capacity,
        sentinel=config.sentinel,
        modulus=config.modulus,
    )
