"""
⚠️ DRAFT — requires crypto review before production use

One-way hash providers mapping field elements to field elements.

The kernel treats a provider as an opaque capability ``Field -> Field``.
Providers are deterministic, domain separated, and built on a
collision-resistant digest from ``cryptography``. Easily invertible maps
(identity, scalar multiplication) are not providers and are refused by the
commitment hasher.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from cryptography.hazmat.primitives import hashes

from .config import (
    DEFAULT_HASH_TYPE,
    DOMAIN_SEPARATORS,
    FIELD_MODULUS,
)
from .exceptions import ConfigurationError, InvalidInputError


class FieldHash(ABC):
    """
    Base class for one-way field hashes.

    Subclasses choose the digest algorithm; encoding, domain separation and
    reduction into the field are shared.
    """

    name: str = ""
    # Set on maps that are cheap to invert; commit refuses them.
    invertible: bool = False

    def __init__(
        self,
        modulus: int = FIELD_MODULUS,
        domain_sep: bytes = DOMAIN_SEPARATORS["element_commitment"],
    ) -> None:
        if not isinstance(modulus, int) or modulus < 3:
            raise ConfigurationError("modulus must be an int >= 3")
        if not isinstance(domain_sep, bytes) or not domain_sep:
            raise ConfigurationError("domain_sep must be non-empty bytes")
        self.modulus = modulus
        self.domain_sep = domain_sep
        self._element_bytes = (modulus.bit_length() + 7) // 8

    @abstractmethod
    def _algorithm(self) -> hashes.HashAlgorithm:
        """Digest algorithm instance."""

    def digest(self, value: int) -> bytes:
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidInputError("hash input must be an int field element")
        if not 0 <= value < self.modulus:
            raise InvalidInputError("hash input is outside the field")
        ctx = hashes.Hash(self._algorithm())
        ctx.update(len(self.domain_sep).to_bytes(4, "big"))
        ctx.update(self.domain_sep)
        ctx.update(value.to_bytes(self._element_bytes, "big"))
        return ctx.finalize()

    def __call__(self, value: int) -> int:
        return int.from_bytes(self.digest(value), "big") % self.modulus

    def describe(self) -> dict:
        return {
            "name": self.name,
            "modulus_bits": self.modulus.bit_length(),
            "invertible": self.invertible,
            "domain_sep": self.domain_sep.decode("ascii", errors="replace"),
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(modulus_bits={self.modulus.bit_length()})"


class Sha3FieldHash(FieldHash):
    """SHA3-256 of the domain-separated element, reduced into the field."""

    name = "sha3"

    def _algorithm(self) -> hashes.HashAlgorithm:
        return hashes.SHA3_256()


class Blake2FieldHash(FieldHash):
    """BLAKE2b-512 of the domain-separated element, reduced into the field."""

    name = "blake2b"

    def _algorithm(self) -> hashes.HashAlgorithm:
        return hashes.BLAKE2b(64)


_PROVIDERS = {cls.name: cls for cls in (Sha3FieldHash, Blake2FieldHash)}


def get_hash_provider(
    name: str | None = None, *, modulus: int = FIELD_MODULUS
) -> FieldHash:
    """
    Instantiate a hash provider by name.

    Raises:
        ConfigurationError: If the name is not registered
    """
    name = name or DEFAULT_HASH_TYPE
    if name not in _PROVIDERS:
        raise ConfigurationError(
            f"Invalid hash type: {name!r}. Valid options: {', '.join(_PROVIDERS)}"
        )
    return _PROVIDERS[name](modulus=modulus)
