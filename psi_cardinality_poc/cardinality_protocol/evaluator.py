"""
End-to-end evaluation of the cardinality statement.

Stages run strictly in sequence:

    VALIDATE -> NORMALIZE_A -> NORMALIZE_B -> HASH_A -> HASH_B -> COUNT -> ASSERT

The outcome is ACCEPTED when every stage succeeds and REJECTED otherwise.
Nothing survives between evaluations: each one builds its own field
provider, arrays, and trace.

The private set (A) is never logged and never copied into the result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field as dataclass_field
from enum import Enum
from typing import Dict, Optional, Sequence, Tuple

from .assertion import assert_cardinality, validate_expected
from .bounded import BoundedArray
from .commitment import commit
from .config import DEFAULT_CONFIG, CircuitConfig
from .exceptions import (
    CapacityExceededError,
    CardinalityAssertionError,
    ConfigurationError,
    InvalidInputError,
)
from .field import FieldProvider
from .hashing import FieldHash, get_hash_provider
from .intersection import count
from .normalizer import normalize, validate_raw_set

logger = logging.getLogger(__name__)

_REJECTABLE = (InvalidInputError, CapacityExceededError, CardinalityAssertionError)


class Stage(Enum):
    VALIDATE = "validate"
    NORMALIZE_A = "normalize_a"
    NORMALIZE_B = "normalize_b"
    HASH_A = "hash_a"
    HASH_B = "hash_b"
    COUNT = "count"
    ASSERT = "assert"


class Outcome(Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"


@dataclass(frozen=True)
class EvaluationResult:
    """
    Outcome of one evaluation.

    Attributes:
        outcome: ACCEPTED or REJECTED
        cardinality: Computed cardinality, or None if counting never ran
        expected: Declared cardinality
        public_set: The public set B as supplied
        failed_stage: Stage that rejected, or None when accepted
        error: Error message when rejected
        trace: Operation counts of the evaluation
    """

    outcome: Outcome
    cardinality: Optional[int]
    expected: int
    public_set: Tuple[int, ...]
    failed_stage: Optional[Stage] = None
    error: Optional[str] = None
    trace: Dict[str, int] = dataclass_field(default_factory=dict)

    @property
    def accepted(self) -> bool:
        return self.outcome is Outcome.ACCEPTED

    def to_dict(self) -> dict:
        return {
            "outcome": self.outcome.value,
            "cardinality": self.cardinality,
            "expected": self.expected,
            "public_set": list(self.public_set),
            "failed_stage": self.failed_stage.value if self.failed_stage else None,
            "error": self.error,
            "trace": dict(self.trace),
        }


class _EvaluationRun:
    """Single-use pipeline; tracks the current stage for error reporting."""

    def __init__(
        self, config: CircuitConfig, hasher: Optional[FieldHash]
    ) -> None:
        self.config = config.validate()
        self.field = FieldProvider(self.config.modulus)
        self.hasher = hasher or get_hash_provider(
            self.config.hash_type, modulus=self.config.modulus
        )
        self.stage = Stage.VALIDATE
        self.cardinality: Optional[int] = None

    def execute(
        self,
        private_set: Sequence[int],
        public_set: Sequence[int],
        expected: Optional[int],
    ) -> int:
        self.stage = Stage.VALIDATE
        raw_a = validate_raw_set(private_set, self.config)
        raw_b = validate_raw_set(public_set, self.config)
        if expected is not None:
            validate_expected(expected, self.field)

        self.stage = Stage.NORMALIZE_A
        norm_a, n_a = normalize(raw_a, self.field)
        self.stage = Stage.NORMALIZE_B
        norm_b, n_b = normalize(raw_b, self.field)

        self.stage = Stage.HASH_A
        hashed_a = commit(norm_a, n_a, self.hasher, self.field)
        self.stage = Stage.HASH_B
        hashed_b = commit(norm_b, n_b, self.hasher, self.field)

        self.stage = Stage.COUNT
        self.cardinality = count(hashed_a, n_a, hashed_b, n_b, self.field)
        logger.debug(
            "counted cardinality over capacity %d (active public=%d)",
            self.config.capacity,
            n_b,
        )

        if expected is not None:
            self.stage = Stage.ASSERT
            assert_cardinality(self.cardinality, expected, self.field)
        return self.cardinality


def evaluate(
    private_set: Sequence[int],
    public_set: Sequence[int],
    expected: int,
    *,
    config: CircuitConfig = DEFAULT_CONFIG,
    hasher: Optional[FieldHash] = None,
) -> EvaluationResult:
    """
    Evaluate the statement "|dedup(A) ∩ B| == expected".

    Input errors and a failed assertion become a REJECTED result; they are
    not raised. ``ConfigurationError`` always propagates because it means
    the circuit itself is misconfigured.

    Example:
        >>> evaluate([1, 2, 3, 4], [3, 4, 5, 6], 2).accepted
        True
    """
    run = _EvaluationRun(config, hasher)
    try:
        cardinality = run.execute(private_set, public_set, expected)
    except _REJECTABLE as exc:
        logger.warning(
            "evaluation rejected at %s: %s", run.stage.value, type(exc).__name__
        )
        return EvaluationResult(
            outcome=Outcome.REJECTED,
            cardinality=run.cardinality,
            expected=expected,
            public_set=_public_tuple(public_set),
            failed_stage=run.stage,
            error=str(exc),
            trace=run.field.trace.as_dict(),
        )

    return EvaluationResult(
        outcome=Outcome.ACCEPTED,
        cardinality=cardinality,
        expected=expected,
        public_set=_public_tuple(public_set),
        trace=run.field.trace.as_dict(),
    )


def evaluate_strict(
    private_set: Sequence[int],
    public_set: Sequence[int],
    expected: int,
    *,
    config: CircuitConfig = DEFAULT_CONFIG,
    hasher: Optional[FieldHash] = None,
) -> EvaluationResult:
    """
    Like ``evaluate`` but raise the rejecting error.

    Raises:
        InvalidInputError: Sentinel or out-of-field element
        CapacityExceededError: Too many values for the capacity
        CardinalityAssertionError: Count differs from ``expected``
    """
    run = _EvaluationRun(config, hasher)
    cardinality = run.execute(private_set, public_set, expected)
    return EvaluationResult(
        outcome=Outcome.ACCEPTED,
        cardinality=cardinality,
        expected=expected,
        public_set=_public_tuple(public_set),
        trace=run.field.trace.as_dict(),
    )


def compute_cardinality(
    private_set: Sequence[int],
    public_set: Sequence[int],
    *,
    config: CircuitConfig = DEFAULT_CONFIG,
    hasher: Optional[FieldHash] = None,
) -> int:
    """Run the pipeline without the final assertion and return the count."""
    run = _EvaluationRun(config, hasher)
    return run.execute(private_set, public_set, None)


def commit_public_set(
    public_set: Sequence[int],
    *,
    config: CircuitConfig = DEFAULT_CONFIG,
    hasher: Optional[FieldHash] = None,
) -> BoundedArray:
    """
    Validate, normalize and hash the public set alone.

    Used by verifiers, which see B but never A.
    """
    config = config.validate()
    field = FieldProvider(config.modulus)
    hasher = hasher or get_hash_provider(config.hash_type, modulus=config.modulus)
    raw = validate_raw_set(public_set, config)
    normalized, active = normalize(raw, field)
    return commit(normalized, active, hasher, field)


def _public_tuple(public_set: Sequence[int]) -> Tuple[int, ...]:
    if isinstance(public_set, BoundedArray):
        return public_set.values
    try:
        return tuple(public_set)
    except TypeError as exc:
        raise ConfigurationError("public set must be a sequence") from exc


__all__ = [
    "EvaluationResult",
    "Outcome",
    "Stage",
    "commit_public_set",
    "compute_cardinality",
    "evaluate",
    "evaluate_strict",
]
