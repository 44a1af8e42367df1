"""
⚠️ DRAFT — requires crypto review before production use

Common types for cardinality proof artifacts.

This module provides:
1. ProofContext - session context bound into an artifact
2. ProofArtifact - opaque proof object with CBOR serialization

The artifact only carries public data: the public set B, the declared and
computed cardinality, and a binding digest. The private set is never
serialized.
"""

import time
import json
import hashlib
from dataclasses import dataclass, field
from typing import Dict, Any, Optional

import cbor2

from .config import (
    ARTIFACT_VERSION,
    DOMAIN_SEPARATORS,
    MAX_ARTIFACT_SIZE_BYTES,
)
from .exceptions import SerializationError

# ============================================================================
# PROOF CONTEXT
# ============================================================================


@dataclass
class ProofContext:
    """
    Context bound into a proof artifact.

    Attributes:
        session_id: Identifier of the proving session
        metadata: Additional context-specific metadata
        timestamp: Unix timestamp when context was created

    Example:
        >>> ctx = ProofContext(session_id="session_123")
        >>> len(ctx.digest())
        32
    """

    session_id: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)

    def to_bytes(self) -> bytes:
        """
        Serialize context deterministically (sorted-key JSON).

        Returns:
            bytes: Serialized context suitable for hashing
        """
        data = {
            "session_id": self.session_id,
            "metadata": self.metadata,
            "timestamp": self.timestamp,
        }
        return json.dumps(data, sort_keys=True).encode("utf-8")

    def digest(self) -> bytes:
        return hashlib.sha3_256(
            DOMAIN_SEPARATORS["proof_context"] + self.to_bytes()
        ).digest()


# ============================================================================
# PROOF ARTIFACT
# ============================================================================


@dataclass
class ProofArtifact:
    """
    Opaque, independently verifiable proof object.

    Fields:
        statement_type: Statement identifier (StatementType value)
        binding: Digest binding the public inputs and public commitments
        public_inputs: Public inputs of the statement
        backend: Name of the backend that produced the artifact
        timestamp: Generation time

    Serialization:
        - Primary: CBOR with version field
        - Compatibility: JSON via to_dict()

    Example:
        >>> artifact = ProofArtifact(statement_type="psi_cardinality_v1",
        ...                          binding=b"\\x01" * 32)
        >>> ProofArtifact.deserialize(artifact.serialize()).binding == artifact.binding
        True
    """

    statement_type: str
    binding: bytes
    public_inputs: Dict[str, Any] = field(default_factory=dict)
    backend: str = ""
    timestamp: float = field(default_factory=time.time)

    @property
    def short_id(self) -> str:
        """First 16 hex characters of SHA-256(binding)."""
        if not self.binding:
            return "0" * 16
        return hashlib.sha256(self.binding).hexdigest()[:16]

    # ========================================================================
    # SERIALIZATION (CBOR)
    # ========================================================================

    def serialize(self) -> bytes:
        """
        Serialize artifact to canonical CBOR bytes.

        Raises:
            SerializationError: If encoding fails or exceeds the size limit
        """
        data = {
            "v": ARTIFACT_VERSION,
            "t": self.statement_type,
            "b": self.binding,
            "p": self.public_inputs,
            "be": self.backend,
            "ts": self.timestamp,
        }
        try:
            encoded = cbor2.dumps(data, canonical=True)
        except (TypeError, ValueError, cbor2.CBOREncodeError) as e:
            raise SerializationError(f"Failed to serialize artifact: {e}") from e
        if len(encoded) > MAX_ARTIFACT_SIZE_BYTES:
            raise SerializationError("artifact too large")
        return encoded

    @classmethod
    def deserialize(cls, data: bytes) -> "ProofArtifact":
        """
        Deserialize artifact from CBOR bytes.

        Raises:
            SerializationError: If data is malformed, too large, or of an
                unsupported version
        """
        if not isinstance(data, (bytes, bytearray)):
            raise SerializationError("artifact data must be bytes")
        if len(data) > MAX_ARTIFACT_SIZE_BYTES:
            raise SerializationError("artifact too large")
        try:
            obj = cbor2.loads(bytes(data))
        except (cbor2.CBORDecodeError, ValueError, EOFError) as e:
            raise SerializationError(f"Failed to deserialize artifact: {e}") from e

        if not isinstance(obj, dict):
            raise SerializationError("Invalid artifact format: expected a map")

        version = obj.get("v")
        if version != ARTIFACT_VERSION:
            raise SerializationError(
                f"Unsupported artifact version: {version} "
                f"(expected {ARTIFACT_VERSION})"
            )

        if "t" not in obj or "b" not in obj:
            raise SerializationError("Invalid artifact format: missing required fields")
        if not isinstance(obj["b"], bytes):
            raise SerializationError("Invalid artifact format: binding must be bytes")
        public_inputs = obj.get("p", {})
        if not isinstance(public_inputs, dict):
            raise SerializationError("Invalid artifact format: public inputs must be a map")

        return cls(
            statement_type=obj["t"],
            binding=obj["b"],
            public_inputs=public_inputs,
            backend=obj.get("be", ""),
            timestamp=obj.get("ts", 0.0),
        )

    def public_inputs_json(self) -> Dict[str, Any]:
        """Public inputs with bytes values hex-encoded."""
        return {
            key: value.hex() if isinstance(value, (bytes, bytearray)) else value
            for key, value in self.public_inputs.items()
        }

    def to_dict(self) -> dict:
        """JSON-compatible view; binary fields are hex-encoded."""
        return {
            "statement_type": self.statement_type,
            "binding": self.binding.hex() if self.binding else None,
            "public_inputs": self.public_inputs_json(),
            "backend": self.backend,
            "timestamp": self.timestamp,
            "short_id": self.short_id,
        }
