"""
Prime-field arithmetic provider for the cardinality kernel.

The kernel never branches on element values. Every decision is expressed as
a 0/1 field element and combined arithmetically, for example::

    select(cond, a, b) = cond * a + (1 - cond) * b

``FieldProvider`` also records how many operations an evaluation performs.
Two evaluations with the same capacity must produce the same trace, whatever
the input values are.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Callable, Dict

from .config import FIELD_MODULUS
from .exceptions import ConfigurationError


@dataclass
class FieldTrace:
    """Operation counters for one evaluation."""

    adds: int = 0
    muls: int = 0
    comparisons: int = 0
    hashes: int = 0

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


class FieldProvider:
    """
    Arithmetic over GF(p) with boolean-weighted selection.

    Booleans are field elements restricted to {0, 1}. Passing anything else
    to ``select``, ``not_`` or ``or_`` is a programming error and raises
    ``ValueError``.

    Example:
        >>> field = FieldProvider(97)
        >>> field.select(field.is_equal(3, 3), 10, 20)
        10
        >>> field.trace.comparisons
        1
    """

    def __init__(self, modulus: int = FIELD_MODULUS) -> None:
        if not isinstance(modulus, int) or modulus < 3:
            raise ConfigurationError("modulus must be an int >= 3")
        self.modulus = modulus
        self.trace = FieldTrace()

    def fresh(self) -> "FieldProvider":
        """Return a provider over the same field with a zeroed trace."""
        return FieldProvider(self.modulus)

    def contains(self, value: int) -> bool:
        return (
            isinstance(value, int)
            and not isinstance(value, bool)
            and 0 <= value < self.modulus
        )

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def add(self, a: int, b: int) -> int:
        self.trace.adds += 1
        return (a + b) % self.modulus

    def sub(self, a: int, b: int) -> int:
        self.trace.adds += 1
        return (a - b) % self.modulus

    def mul(self, a: int, b: int) -> int:
        self.trace.muls += 1
        return (a * b) % self.modulus

    # ------------------------------------------------------------------
    # Comparisons (return 0/1 field elements)
    # ------------------------------------------------------------------

    def is_equal(self, a: int, b: int) -> int:
        self.trace.comparisons += 1
        return int(a % self.modulus == b % self.modulus)

    def is_less(self, a: int, b: int) -> int:
        """
        Compare two small non-negative integers (indices or counts).

        Field elements have no order; this is only meaningful for values far
        below the modulus, such as slot indices and active counts.
        """
        self.trace.comparisons += 1
        return int(a < b)

    def eq(self, a: int, b: int) -> bool:
        return self.is_equal(a, b) == 1

    # ------------------------------------------------------------------
    # Boolean combinators
    # ------------------------------------------------------------------

    def select(self, cond: int, a: int, b: int) -> int:
        self._require_bit(cond, "cond")
        return self.add(self.mul(cond, a), self.mul(self.sub(1, cond), b))

    def not_(self, x: int) -> int:
        self._require_bit(x, "x")
        return self.sub(1, x)

    def or_(self, x: int, y: int) -> int:
        self._require_bit(x, "x")
        self._require_bit(y, "y")
        return self.sub(self.add(x, y), self.mul(x, y))

    def and_(self, x: int, y: int) -> int:
        self._require_bit(x, "x")
        self._require_bit(y, "y")
        return self.mul(x, y)

    # ------------------------------------------------------------------
    # Hashing
    # ------------------------------------------------------------------

    def apply_hash(self, hasher: Callable[[int], int], value: int) -> int:
        self.trace.hashes += 1
        return hasher(value) % self.modulus

    @staticmethod
    def _require_bit(value: int, label: str) -> None:
        if value not in (0, 1):
            raise ValueError(f"{label} must be 0 or 1, got {value!r}")
