"""
Proof backend interface.

A backend turns an accepted evaluation into an opaque ``ProofArtifact`` and
re-checks artifacts against the public set and declared cardinality. A
verifier never receives the private set.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Sequence

from .exceptions import ProofVerificationError
from .types import ProofArtifact, ProofContext


class ProofBackend(ABC):
    """Abstract proof backend."""

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Human-readable backend name."""

    @property
    @abstractmethod
    def backend_version(self) -> str:
        """Backend implementation version."""

    @abstractmethod
    def generate_proof(
        self,
        private_set: Sequence[int],
        public_set: Sequence[int],
        expected: int,
        *,
        context: Optional[ProofContext] = None,
    ) -> ProofArtifact:
        """
        Produce an artifact for an accepted evaluation.

        Raises:
            ProofGenerationError: If the evaluation is rejected
        """

    @abstractmethod
    def verify_proof(
        self,
        artifact: ProofArtifact,
        public_set: Sequence[int],
        expected: int,
    ) -> bool:
        """Return True if ``artifact`` is consistent with B and ``expected``."""

    def require_valid(
        self,
        artifact: ProofArtifact,
        public_set: Sequence[int],
        expected: int,
    ) -> None:
        """
        Raise instead of returning False.

        Raises:
            ProofVerificationError: If ``verify_proof`` rejects the artifact
        """
        if not self.verify_proof(artifact, public_set, expected):
            short_id = getattr(artifact, "short_id", "?")
            raise ProofVerificationError(
                f"artifact {short_id} rejected by {self.backend_name}"
            )

    def batch_verify(self, items: Sequence[tuple]) -> bool:
        """Verify ``(artifact, public_set, expected)`` triples; all must pass."""
        for artifact, public_set, expected in items:
            if not self.verify_proof(artifact, public_set, expected):
                return False
        return True

    @abstractmethod
    def get_backend_info(self) -> Dict[str, Any]:
        """Describe the backend and its security level."""
