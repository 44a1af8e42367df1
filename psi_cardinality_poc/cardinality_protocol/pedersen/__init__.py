"""Pedersen commitment over bit-decomposed openings."""

from .bits import bits_to_int, commit_bits, int_to_bits, verify_opening

__all__ = ["bits_to_int", "commit_bits", "int_to_bits", "verify_opening"]
