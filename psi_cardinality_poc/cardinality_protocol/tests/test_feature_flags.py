"""
Unit tests for feature flag backend and hash selection.
"""

import pytest

from psi_cardinality_poc.cardinality_protocol import feature_flags


@pytest.fixture(autouse=True)
def reset_feature_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    feature_flags.set_backend_type(None)
    feature_flags.set_hash_type(None)
    monkeypatch.delenv("PSI_PROOF_BACKEND", raising=False)
    monkeypatch.delenv("PSI_HASH_FUNCTION", raising=False)
    yield
    feature_flags.set_backend_type(None)
    feature_flags.set_hash_type(None)


def test_default_backend_is_mock() -> None:
    assert feature_flags.get_backend_type() == "mock"


def test_env_var_controls_backend(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PSI_PROOF_BACKEND", "mock")
    assert feature_flags.get_backend_type() == "mock"


def test_invalid_prefer_raises_value_error() -> None:
    with pytest.raises(ValueError, match="Invalid backend type"):
        feature_flags.get_backend_type(prefer="groth16")


def test_invalid_env_raises_value_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PSI_PROOF_BACKEND", "invalid")
    with pytest.raises(ValueError, match="Invalid backend type"):
        feature_flags.get_backend_type()


def test_invalid_override_raises_value_error() -> None:
    with pytest.raises(ValueError, match="Invalid backend type"):
        feature_flags.set_backend_type("invalid")


def test_empty_env_var_treated_as_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PSI_PROOF_BACKEND", "")
    assert feature_flags.get_backend_type() == "mock"


def test_default_hash_is_sha3() -> None:
    assert feature_flags.get_hash_type() == "sha3"


def test_env_var_controls_hash(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PSI_HASH_FUNCTION", "blake2b")
    assert feature_flags.get_hash_type() == "blake2b"


def test_prefer_overrides_env_hash(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PSI_HASH_FUNCTION", "blake2b")
    assert feature_flags.get_hash_type(prefer="sha3") == "sha3"


def test_set_hash_type_overrides_and_clears(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PSI_HASH_FUNCTION", "sha3")
    feature_flags.set_hash_type("blake2b")
    assert feature_flags.get_hash_type() == "blake2b"
    feature_flags.set_hash_type(None)
    assert feature_flags.get_hash_type() == "sha3"


def test_set_hash_type_empty_string_clears(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PSI_HASH_FUNCTION", "blake2b")
    feature_flags.set_hash_type("sha3")
    feature_flags.set_hash_type("")
    assert feature_flags.get_hash_type() == "blake2b"


def test_invalid_hash_env_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PSI_HASH_FUNCTION", "poseidon")
    with pytest.raises(ValueError, match="Invalid hash type"):
        feature_flags.get_hash_type()


def test_non_string_value_rejected() -> None:
    with pytest.raises(ValueError, match="Invalid hash type"):
        feature_flags.set_hash_type(3)
