"""
⚠️ DRAFT — requires crypto review before production use

Circuit configuration for the set-intersection cardinality kernel.

This is a PROTOTYPE implementation for testing and validation.
DO NOT use in production without security audit.

Capacity and sentinel are fixed before an evaluation begins. They are
configuration, never runtime parameters of the kernel.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from .exceptions import ConfigurationError

# ============================================================================
# FIELD SELECTION
# ============================================================================

# BN254 scalar field, the native field of the Noir/UltraHonk proving stack.
FIELD_NAME = "bn254"
FIELD_MODULUS = (
    21888242871839275222246405745257275088548364400416034343698204186575808495617
)
FIELD_MODULUS_BITS = 254
FIELD_ELEMENT_BYTES = 32

# Smaller moduli make collisions of the reduced element hash practical.
MIN_MODULUS_BITS = 128

# Fixed Miller-Rabin bases; exact below 3.3e24, probabilistic above.
_PRIMALITY_BASES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41)

# ============================================================================
# FIXED-CAPACITY ARRAYS
# ============================================================================

DEFAULT_CAPACITY = 4
MAX_CAPACITY = 64  # N*N comparisons per count; keep the grid small
SENTINEL = 0

# ============================================================================
# HASH FUNCTIONS
# ============================================================================

HASH_FUNCTION = "SHA3-256"  # NOT SHA-256 (length extension attack)
HASH_TYPES = ("sha3", "blake2b")
DEFAULT_HASH_TYPE = "sha3"

DOMAIN_SEPARATOR_PREFIX = b"PSI_CARDINALITY_V1_"

DOMAIN_SEPARATORS = {
    "element_commitment": DOMAIN_SEPARATOR_PREFIX + b"ELEMENT",
    "artifact_binding": DOMAIN_SEPARATOR_PREFIX + b"BINDING",
    "proof_context": DOMAIN_SEPARATOR_PREFIX + b"CONTEXT",
}

# ============================================================================
# PEDERSEN BIT COMMITMENT
# ============================================================================

BITS_WIDTH = 16

# ============================================================================
# PROOF ARTIFACTS
# ============================================================================

SERIALIZATION_FORMAT = "CBOR"
ARTIFACT_VERSION = 1  # Increment for breaking changes
MAX_ARTIFACT_SIZE_BYTES = 16 * 1024

PROOF_FILENAME = "proof"
PUBLIC_INPUTS_FILENAME = "public-inputs"


# ============================================================================
# CIRCUIT CONFIGURATION
# ============================================================================


def is_probable_prime(n: int) -> bool:
    """Miller-Rabin test over the fixed bases in ``_PRIMALITY_BASES``."""
    if n < 2:
        return False
    for p in _PRIMALITY_BASES:
        if n % p == 0:
            return n == p
    d, s = n - 1, 0
    while d % 2 == 0:
        d //= 2
        s += 1
    for a in _PRIMALITY_BASES:
        x = pow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(s - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True


@dataclass(frozen=True)
class CircuitConfig:
    """
    Fixed parameters of one circuit instance.

    Attributes:
        capacity: Number of slots N in every fixed-capacity array
        sentinel: Reserved field element marking inactive slots
        modulus: Prime modulus of the field
        hash_type: Name of the one-way hash provider

    Example:
        >>> cfg = CircuitConfig(capacity=8)
        >>> cfg.validate().capacity
        8
    """

    capacity: int = DEFAULT_CAPACITY
    sentinel: int = SENTINEL
    modulus: int = FIELD_MODULUS
    hash_type: str = DEFAULT_HASH_TYPE

    def validate(self) -> "CircuitConfig":
        """
        Check parameter ranges.

        Returns:
            self, for chaining

        Raises:
            ConfigurationError: If any parameter is out of range
        """
        if isinstance(self.capacity, bool) or not isinstance(self.capacity, int):
            raise ConfigurationError("capacity must be an int")
        if not 1 <= self.capacity <= MAX_CAPACITY:
            raise ConfigurationError(
                f"capacity must be in [1, {MAX_CAPACITY}], got {self.capacity}"
            )
        if not isinstance(self.modulus, int) or self.modulus < 3:
            raise ConfigurationError("modulus must be an int >= 3")
        if self.modulus <= self.capacity:
            raise ConfigurationError("modulus must exceed capacity")
        if self.modulus.bit_length() < MIN_MODULUS_BITS:
            raise ConfigurationError(
                f"modulus must have at least {MIN_MODULUS_BITS} bits, "
                f"got {self.modulus.bit_length()}"
            )
        if not is_probable_prime(self.modulus):
            raise ConfigurationError("modulus must be prime")
        if not isinstance(self.sentinel, int) or not 0 <= self.sentinel < self.modulus:
            raise ConfigurationError("sentinel must be a field element")
        if self.hash_type not in HASH_TYPES:
            raise ConfigurationError(
                f"Invalid hash type: {self.hash_type!r}. "
                f"Valid options: {', '.join(HASH_TYPES)}"
            )
        return self

    def with_overrides(self, **changes: Any) -> "CircuitConfig":
        """Return a validated copy with the non-None ``changes`` applied."""
        applied = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **applied).validate()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CircuitConfig":
        if not isinstance(data, Mapping):
            raise ConfigurationError("configuration must be a mapping")
        known = {"capacity", "sentinel", "modulus", "hash_type"}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {', '.join(sorted(unknown))}"
            )
        return cls(**dict(data)).validate()

    @classmethod
    def from_yaml(cls, path: str | Path) -> "CircuitConfig":
        """
        Load a configuration from a YAML file.

        Example file::

            capacity: 4
            sentinel: 0
            hash_type: sha3
        """
        try:
            with Path(path).open("r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle)
        except OSError as exc:
            raise ConfigurationError(f"Unable to read config {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc
        return cls.from_mapping(data or {})


DEFAULT_CONFIG = CircuitConfig()


# ============================================================================
# VALIDATION
# ============================================================================


def validate_config() -> bool:
    """
    Validate module-level configuration parameters.

    Returns:
        True if configuration is valid

    Raises:
        ConfigurationError: If configuration is invalid
    """
    if FIELD_MODULUS.bit_length() != FIELD_MODULUS_BITS:
        raise ConfigurationError("FIELD_MODULUS does not match FIELD_MODULUS_BITS")
    if not is_probable_prime(FIELD_MODULUS):
        raise ConfigurationError("FIELD_MODULUS must be prime")
    if (FIELD_MODULUS_BITS + 7) // 8 != FIELD_ELEMENT_BYTES:
        raise ConfigurationError("FIELD_ELEMENT_BYTES does not fit the modulus")
    if DEFAULT_HASH_TYPE not in HASH_TYPES:
        raise ConfigurationError("Default hash type is not registered")
    if HASH_FUNCTION not in ("SHA3-256", "BLAKE2b"):
        raise ConfigurationError("Invalid hash function")
    if len(set(DOMAIN_SEPARATORS.values())) != len(DOMAIN_SEPARATORS):
        raise ConfigurationError("Domain separators must be distinct")
    DEFAULT_CONFIG.validate()
    return True


# Auto-validate on import
validate_config()
