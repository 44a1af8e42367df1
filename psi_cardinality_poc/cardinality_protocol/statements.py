"""
Statement registry for cardinality proofs.
Defines statement types, versions, and public-input schemas.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Dict, Any, Sequence


class StatementType(Enum):
    """Statement types for cardinality proofs"""

    SET_INTERSECTION_CARDINALITY = "psi_cardinality_v1"


@dataclass
class StatementSpec:
    """
    Specification for a cardinality statement.

    Attributes:
        statement_type: Type identifier
        version: Statement version (for future upgrades)
        public_input_schema: Required fields in public_inputs
        witness_schema: Private witness components (for documentation)
        description: Human-readable statement description
    """

    statement_type: StatementType
    version: int
    public_input_schema: Dict[str, type]
    witness_schema: Dict[str, Any]
    description: str


# Registry of all supported statements
STATEMENT_REGISTRY: Dict[StatementType, StatementSpec] = {
    StatementType.SET_INTERSECTION_CARDINALITY: StatementSpec(
        statement_type=StatementType.SET_INTERSECTION_CARDINALITY,
        version=1,
        public_input_schema={
            "statement_type": str,
            "statement_version": int,
            "capacity": int,
            "public_set": list,  # B, as supplied
            "expected": int,
            "cardinality": int,  # equals expected on an accepted proof
            "hash_type": str,
        },
        witness_schema={
            "private_set": "List[int]",
        },
        description="Prove |dedup(A) ∩ B| equals a declared value without revealing A",
    ),
}


def build_public_inputs(
    public_set: Sequence[int],
    expected: int,
    cardinality: int,
    *,
    capacity: int,
    hash_type: str,
    statement_type: StatementType = StatementType.SET_INTERSECTION_CARDINALITY,
) -> Dict[str, Any]:
    """Assemble and validate the public inputs of a statement."""
    spec = get_statement_spec(statement_type)
    public_inputs = {
        "statement_type": statement_type.value,
        "statement_version": spec.version,
        "capacity": capacity,
        "public_set": list(public_set),
        "expected": expected,
        "cardinality": cardinality,
        "hash_type": hash_type,
    }
    validate_public_inputs(statement_type, public_inputs)
    return public_inputs


def validate_public_inputs(
    statement_type: StatementType, public_inputs: Dict[str, Any]
) -> None:
    """
    Validate public inputs match statement schema.

    Raises:
        ValueError: If inputs don't match schema
    """
    spec = get_statement_spec(statement_type)
    schema = spec.public_input_schema

    if not isinstance(public_inputs, dict):
        raise ValueError("public_inputs must be a dict")

    # Check all required fields present
    for field, expected_type in schema.items():
        if field not in public_inputs:
            raise ValueError(
                f"Missing required field '{field}' for {statement_type.value}"
            )

        actual_value = public_inputs[field]

        # Type checking (basic); bool is not accepted where int is required
        if expected_type is int and (
            isinstance(actual_value, bool) or not isinstance(actual_value, int)
        ):
            raise ValueError(
                f"Field '{field}' must be int, got {type(actual_value)}"
            )
        elif not isinstance(actual_value, expected_type):
            raise ValueError(
                f"Field '{field}' must be {expected_type.__name__}, "
                f"got {type(actual_value)}"
            )

    if public_inputs["statement_type"] != statement_type.value:
        raise ValueError(
            f"Statement type mismatch: expected {statement_type.value}, "
            f"got {public_inputs['statement_type']}"
        )

    # Check version matches
    if public_inputs["statement_version"] != spec.version:
        raise ValueError(
            f"Statement version mismatch: expected {spec.version}, "
            f"got {public_inputs['statement_version']}"
        )

    if len(public_inputs["public_set"]) != public_inputs["capacity"]:
        raise ValueError("public_set length must equal capacity")


def get_statement_spec(statement_type: StatementType) -> StatementSpec:
    """Get specification for a statement type"""
    if statement_type not in STATEMENT_REGISTRY:
        raise ValueError(f"Unknown statement type: {statement_type}")
    return STATEMENT_REGISTRY[statement_type]
