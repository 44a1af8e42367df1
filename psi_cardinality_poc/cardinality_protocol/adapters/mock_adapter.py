from __future__ import annotations

import hashlib
import hmac
import logging
from typing import Any, Dict, Optional, Sequence

import cbor2

from ..config import ARTIFACT_VERSION, DEFAULT_CONFIG, DOMAIN_SEPARATORS, CircuitConfig
from ..evaluator import commit_public_set, evaluate_strict
from ..exceptions import (
    CardinalityProtocolError,
    ConfigurationError,
    ProofGenerationError,
)
from ..hashing import FieldHash, get_hash_provider
from ..interfaces import ProofBackend
from ..statements import StatementType, build_public_inputs, validate_public_inputs
from ..types import ProofArtifact, ProofContext

logger = logging.getLogger(__name__)


class MockProofBackend(ProofBackend):
    """
    Proof backend that binds public data without a real SNARK.

    Notes:
    - The prover runs the full kernel and only emits an artifact when the
      evaluation is ACCEPTED.
    - The binding digest covers the public inputs and the hashed public set.
      It proves nothing about A to a verifier; it is for plumbing and tests.
    - It does NOT provide real cryptographic soundness.
    """

    _BACKEND_NAME = "MockProofBackend"
    _BACKEND_VERSION = "0.1.0"
    _BINDING_LEN = 32

    def __init__(
        self,
        config: CircuitConfig = DEFAULT_CONFIG,
        hasher: Optional[FieldHash] = None,
    ) -> None:
        self.config = config.validate()
        self.hasher = hasher or get_hash_provider(
            self.config.hash_type, modulus=self.config.modulus
        )
        self._statement = StatementType.SET_INTERSECTION_CARDINALITY

    @property
    def backend_name(self) -> str:
        return self._BACKEND_NAME

    @property
    def backend_version(self) -> str:
        return self._BACKEND_VERSION

    def generate_proof(
        self,
        private_set: Sequence[int],
        public_set: Sequence[int],
        expected: int,
        *,
        context: Optional[ProofContext] = None,
    ) -> ProofArtifact:
        if context is not None and not isinstance(context, ProofContext):
            raise TypeError("context must be ProofContext")

        try:
            result = evaluate_strict(
                private_set,
                public_set,
                expected,
                config=self.config,
                hasher=self.hasher,
            )
        except ConfigurationError:
            raise
        except CardinalityProtocolError as exc:
            logger.warning("mock proof refused: %s", type(exc).__name__)
            raise ProofGenerationError(
                f"evaluation rejected: {type(exc).__name__}: {exc}"
            ) from exc

        public_inputs: Dict[str, Any] = build_public_inputs(
            result.public_set,
            expected,
            result.cardinality,
            capacity=self.config.capacity,
            hash_type=self.hasher.name,
            statement_type=self._statement,
        )
        public_inputs["adapter"] = "mock"
        public_inputs["v"] = ARTIFACT_VERSION
        if context is not None:
            public_inputs["ctx_hash"] = context.digest()

        binding = self._binding(public_inputs, result.public_set)
        artifact = ProofArtifact(
            statement_type=self._statement.value,
            binding=binding,
            public_inputs=public_inputs,
            backend=self.backend_name,
        )
        logger.info("generated mock proof %s", artifact.short_id)
        return artifact

    def verify_proof(
        self,
        artifact: ProofArtifact,
        public_set: Sequence[int],
        expected: int,
    ) -> bool:
        try:
            if not isinstance(artifact, ProofArtifact):
                return False
            if artifact.statement_type != self._statement.value:
                return False
            if not isinstance(artifact.binding, bytes):
                return False
            if len(artifact.binding) != self._BINDING_LEN:
                return False

            public_inputs = artifact.public_inputs
            validate_public_inputs(self._statement, public_inputs)
            if public_inputs.get("adapter") != "mock":
                return False
            if public_inputs.get("v") != ARTIFACT_VERSION:
                return False
            if public_inputs["capacity"] != self.config.capacity:
                return False
            if public_inputs["hash_type"] != self.hasher.name:
                return False
            if public_inputs["public_set"] != list(public_set):
                return False
            if public_inputs["expected"] != expected:
                return False
            if public_inputs["cardinality"] != expected:
                return False

            recomputed = self._binding(public_inputs, tuple(public_set))
            return hmac.compare_digest(recomputed, artifact.binding)
        except (CardinalityProtocolError, ValueError, TypeError) as exc:
            logger.debug("mock proof rejected: %s", exc)
            return False

    def get_backend_info(self) -> Dict[str, Any]:
        return {
            "name": self.backend_name,
            "version": self.backend_version,
            "adapter": "mock",
            "statement": self._statement.value,
            "capacity": self.config.capacity,
            "hash_type": self.hasher.name,
            "hash": self.hasher.describe(),
            "features": ["psi_cardinality", "batch_verify"],
            "security": "mock_only",
        }

    def _binding(self, public_inputs: Dict[str, Any], public_set) -> bytes:
        hashed_b = commit_public_set(
            public_set, config=self.config, hasher=self.hasher
        )
        encoded_inputs = cbor2.dumps(public_inputs, canonical=True)
        encoded_hashes = cbor2.dumps(list(hashed_b.values), canonical=True)
        return hashlib.sha3_256(
            DOMAIN_SEPARATORS["artifact_binding"] + encoded_inputs + encoded_hashes
        ).digest()
