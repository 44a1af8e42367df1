"""
Private set-intersection cardinality toolkit - Proof of Concept

⚠️  PROOF OF CONCEPT - NOT PRODUCTION READY
"""

__version__ = "0.1.0"

DISCLAIMER = (
    "⚠️  PROOF OF CONCEPT: the mock proof backend binds public data only and "
    "provides no cryptographic soundness."
)


def print_disclaimer() -> None:
    """Print the proof-of-concept warning."""
    print(DISCLAIMER)
