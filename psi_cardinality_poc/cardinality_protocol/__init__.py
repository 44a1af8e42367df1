"""Public API for cardinality_protocol.

The kernel (normalize, commit, count, assert) is importable directly; proof
backends are loaded lazily so that importing the kernel stays cheap.
"""
from __future__ import annotations

from importlib import import_module

from .assertion import assert_cardinality
from .bounded import BoundedArray, SetKind, prepare_raw_set
from .commitment import commit
from .config import DEFAULT_CONFIG, CircuitConfig
from .evaluator import (
    EvaluationResult,
    Outcome,
    Stage,
    commit_public_set,
    compute_cardinality,
    evaluate,
    evaluate_strict,
)
from .exceptions import (
    CapacityExceededError,
    CardinalityAssertionError,
    CardinalityProtocolError,
    ConfigurationError,
    InvalidInputError,
    ProofGenerationError,
    ProofVerificationError,
    SerializationError,
)
from .factory import get_proof_backend
from .feature_flags import (
    get_backend_type,
    get_hash_type,
    set_backend_type,
    set_hash_type,
)
from .field import FieldProvider, FieldTrace
from .hashing import Blake2FieldHash, FieldHash, Sha3FieldHash, get_hash_provider
from .interfaces import ProofBackend
from .intersection import count, count_reference
from .normalizer import normalize, validate_raw_set
from .types import ProofArtifact, ProofContext

__all__ = [
    "assert_cardinality",
    "BoundedArray",
    "SetKind",
    "prepare_raw_set",
    "commit",
    "CircuitConfig",
    "DEFAULT_CONFIG",
    "EvaluationResult",
    "Outcome",
    "Stage",
    "commit_public_set",
    "compute_cardinality",
    "evaluate",
    "evaluate_strict",
    "CapacityExceededError",
    "CardinalityAssertionError",
    "CardinalityProtocolError",
    "ConfigurationError",
    "InvalidInputError",
    "ProofGenerationError",
    "ProofVerificationError",
    "SerializationError",
    "get_proof_backend",
    "get_backend_type",
    "get_hash_type",
    "set_backend_type",
    "set_hash_type",
    "FieldProvider",
    "FieldTrace",
    "FieldHash",
    "Sha3FieldHash",
    "Blake2FieldHash",
    "get_hash_provider",
    "ProofBackend",
    "count",
    "count_reference",
    "normalize",
    "validate_raw_set",
    "ProofArtifact",
    "ProofContext",
    "MockProofBackend",
]

_LAZY_EXPORTS = {
    "MockProofBackend": "adapters.mock_adapter",
}


def __getattr__(name: str):
    if name in _LAZY_EXPORTS:
        module = import_module(f"{__name__}.{_LAZY_EXPORTS[name]}")
        value = getattr(module, name)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
