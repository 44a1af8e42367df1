"""
⚠️ DRAFT — requires crypto review before production use

Custom exceptions for the set-intersection cardinality protocol.

Every error is terminal for the evaluation in which it occurs. The kernel
never retries; the caller must start a new evaluation with corrected inputs.
"""


class CardinalityProtocolError(Exception):
    """Base exception for cardinality protocol errors."""

    pass


class ConfigurationError(CardinalityProtocolError):
    """Configuration error (capacity, sentinel, modulus, hash type)."""

    pass


class InvalidInputError(CardinalityProtocolError):
    """An input element is the sentinel, outside the field, or malformed."""

    pass


class CapacityExceededError(CardinalityProtocolError):
    """More values were supplied than the fixed capacity can hold."""

    pass


class CardinalityAssertionError(CardinalityProtocolError, AssertionError):
    """Computed cardinality does not equal the declared expected value."""

    def __init__(self, cardinality: int, expected: int):
        super().__init__(
            f"Cardinality mismatch: computed {cardinality}, expected {expected}"
        )
        self.cardinality = cardinality
        self.expected = expected


class ProofGenerationError(CardinalityProtocolError):
    """Error during proof artifact generation."""

    pass


class ProofVerificationError(CardinalityProtocolError):
    """Error during proof artifact verification."""

    pass


class SerializationError(CardinalityProtocolError):
    """Artifact encoding or decoding failed."""

    pass
