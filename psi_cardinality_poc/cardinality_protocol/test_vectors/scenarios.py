# -*- coding: utf-8 -*-
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from ..config import FIELD_NAME, CircuitConfig
from ..evaluator import evaluate
from ..exceptions import ConfigurationError, InvalidInputError
from ..pedersen.bits import commit_bits, int_to_bits

VECTOR_FILE = Path(__file__).with_name("scenarios.json")


def load_vectors(path: Path = VECTOR_FILE) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def validate_vectors(data: Dict[str, Any]) -> List[str]:
    errors: List[str] = []
    if data.get("version") != "1.0":
        errors.append("version must be 1.0")
    if data.get("field") != FIELD_NAME:
        errors.append(f"field must be {FIELD_NAME}")

    try:
        config = CircuitConfig(
            capacity=data["capacity"],
            sentinel=data["sentinel"],
            hash_type=data["hash"],
        ).validate()
    except (KeyError, TypeError, ConfigurationError) as exc:
        errors.append(f"invalid circuit parameters: {exc}")
        return errors

    scenarios = data.get("scenarios")
    if not isinstance(scenarios, list) or not scenarios:
        errors.append("scenarios must be a non-empty list")
        return errors

    for index, scenario in enumerate(scenarios):
        errors.extend(_check_scenario(scenario, index, config))

    errors.extend(_check_pedersen(data.get("pedersen_bits")))
    return errors


def _check_scenario(
    scenario: Dict[str, Any], index: int, config: CircuitConfig
) -> List[str]:
    label = scenario.get("name") or f"scenarios[{index}]"
    try:
        result = evaluate(
            scenario["private_set"],
            scenario["public_set"],
            scenario["expected"],
            config=config,
        )
    except KeyError as exc:
        return [f"{label}: missing field {exc}"]
    except ConfigurationError as exc:
        return [f"{label}: {exc}"]

    errors = []
    if result.outcome.value != scenario.get("outcome"):
        errors.append(
            f"{label}: outcome {result.outcome.value} != {scenario.get('outcome')}"
        )
    if result.cardinality != scenario.get("cardinality"):
        errors.append(
            f"{label}: cardinality {result.cardinality} != {scenario.get('cardinality')}"
        )
    failed_stage = result.failed_stage.value if result.failed_stage else None
    if failed_stage != scenario.get("failed_stage"):
        errors.append(
            f"{label}: failed_stage {failed_stage} != {scenario.get('failed_stage')}"
        )
    return errors


def _check_pedersen(vector: Any) -> List[str]:
    if vector is None:
        return []
    if not isinstance(vector, dict):
        return ["pedersen_bits must be a dict"]
    try:
        commitment = commit_bits(
            int_to_bits(vector["x"]),
            int_to_bits(vector["r"]),
            vector["g"],
            vector["h"],
        )
    except KeyError as exc:
        return [f"pedersen_bits: missing field {exc}"]
    except InvalidInputError as exc:
        return [f"pedersen_bits: {exc}"]
    if commitment != vector.get("commitment"):
        return [f"pedersen_bits: commitment {commitment} != {vector.get('commitment')}"]
    return []
