"""
⚠️ DRAFT — requires crypto review before production use

Multiplicative Pedersen commitment over bit-decomposed openings.

Mathematical Definition:
    C = g^x * h^r  (mod p)
    where x and r are given as little-endian bit vectors of fixed width.

Exponentiation is square-and-multiply with a selection per bit instead of a
branch, so the number of field operations depends only on the bit width::

    acc = acc * select(bit_i, g^(2^i), 1)

Security Requirements:
    1. g and h must have no known discrete log relation in the field
    2. r must be random and kept secret for hiding
    3. Bits must be exactly 0 or 1; anything else is rejected

Known vector:
    x = 5, r = 7, g = 2, h = 3  ->  C = 2^5 * 3^7 = 69984
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..config import BITS_WIDTH
from ..exceptions import InvalidInputError
from ..field import FieldProvider


def int_to_bits(value: int, width: int = BITS_WIDTH) -> List[int]:
    """
    Little-endian bit decomposition.

    Raises:
        InvalidInputError: If ``value`` does not fit in ``width`` bits
    """
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidInputError("value must be a non-negative int")
    if value >> width:
        raise InvalidInputError(f"value does not fit in {width} bits")
    return [(value >> i) & 1 for i in range(width)]


def bits_to_int(bits: Sequence[int]) -> int:
    _require_bits(bits, len(bits), "bits")
    return sum(bit << i for i, bit in enumerate(bits))


def commit_bits(
    x_bits: Sequence[int],
    r_bits: Sequence[int],
    g: int,
    h: int,
    field: Optional[FieldProvider] = None,
    *,
    width: int = BITS_WIDTH,
) -> int:
    """
    Compute ``g^x * h^r`` from bit vectors.

    Args:
        x_bits: Committed value, little-endian bits
        r_bits: Blinding factor, little-endian bits
        g: First base (field element)
        h: Second base (field element)
        field: Field provider (defaults to the configured field)
        width: Required bit-vector length

    Returns:
        Commitment as a field element

    Raises:
        InvalidInputError: Malformed bits or bases outside the field
    """
    field = field or FieldProvider()
    _require_bits(x_bits, width, "x_bits")
    _require_bits(r_bits, width, "r_bits")
    for label, base in (("g", g), ("h", h)):
        if not field.contains(base) or base == 0:
            raise InvalidInputError(f"{label} must be a non-zero field element")

    return field.mul(_pow_bits(g, x_bits, field), _pow_bits(h, r_bits, field))


def verify_opening(
    x_bits: Sequence[int],
    r_bits: Sequence[int],
    g: int,
    h: int,
    commitment: int,
    field: Optional[FieldProvider] = None,
    *,
    width: int = BITS_WIDTH,
) -> bool:
    """Return True if (x_bits, r_bits) opens ``commitment`` under (g, h)."""
    field = field or FieldProvider()
    if not field.contains(commitment):
        return False
    try:
        computed = commit_bits(x_bits, r_bits, g, h, field, width=width)
    except InvalidInputError:
        return False
    return field.eq(computed, commitment)


def _pow_bits(base: int, bits: Sequence[int], field: FieldProvider) -> int:
    acc = 1
    power = base
    for bit in bits:
        acc = field.mul(acc, field.select(bit, power, 1))
        power = field.mul(power, power)
    return acc


def _require_bits(bits: Sequence[int], width: int, label: str) -> None:
    if len(bits) != width:
        raise InvalidInputError(f"{label} must have exactly {width} bits")
    for index, bit in enumerate(bits):
        if isinstance(bit, bool) or bit not in (0, 1):
            raise InvalidInputError(f"{label}[{index}] must be 0 or 1")
