"""Unit tests for the bundled scenario vectors."""

import copy

import pytest

from psi_cardinality_poc.cardinality_protocol.test_vectors import scenarios


@pytest.fixture
def vectors():
    return scenarios.load_vectors()


def test_bundled_vectors_valid(vectors):
    assert scenarios.validate_vectors(vectors) == []


def test_bundled_vectors_cover_both_outcomes(vectors):
    outcomes = {scenario["outcome"] for scenario in vectors["scenarios"]}
    assert outcomes == {"accepted", "rejected"}


def test_wrong_cardinality_detected(vectors):
    data = copy.deepcopy(vectors)
    data["scenarios"][0]["cardinality"] = 3
    errors = scenarios.validate_vectors(data)
    assert any("partial_overlap: cardinality" in error for error in errors)


def test_wrong_outcome_detected(vectors):
    data = copy.deepcopy(vectors)
    data["scenarios"][0]["expected"] = 1
    errors = scenarios.validate_vectors(data)
    assert any("partial_overlap: outcome" in error for error in errors)


def test_missing_field_detected(vectors):
    data = copy.deepcopy(vectors)
    del data["scenarios"][1]["public_set"]
    errors = scenarios.validate_vectors(data)
    assert errors == ["disjoint: missing field 'public_set'"]


def test_bad_version_and_field(vectors):
    data = copy.deepcopy(vectors)
    data["version"] = "2.0"
    data["field"] = "bls12_381"
    errors = scenarios.validate_vectors(data)
    assert "version must be 1.0" in errors
    assert "field must be bn254" in errors


def test_invalid_circuit_parameters(vectors):
    data = copy.deepcopy(vectors)
    data["capacity"] = 0
    errors = scenarios.validate_vectors(data)
    assert len(errors) == 1
    assert errors[0].startswith("invalid circuit parameters")


def test_pedersen_mismatch_detected(vectors):
    data = copy.deepcopy(vectors)
    data["pedersen_bits"]["commitment"] = 1
    errors = scenarios.validate_vectors(data)
    assert errors == ["pedersen_bits: commitment 69984 != 1"]


def test_empty_scenarios(vectors):
    data = copy.deepcopy(vectors)
    data["scenarios"] = []
    assert scenarios.validate_vectors(data) == ["scenarios must be a non-empty list"]
