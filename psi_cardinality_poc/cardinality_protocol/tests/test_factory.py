"""
DRAFT - requires crypto review before production use.

Unit tests for backend factory selection and lazy imports.
"""

from __future__ import annotations

import pytest

from psi_cardinality_poc.cardinality_protocol import factory
from psi_cardinality_poc.cardinality_protocol.config import CircuitConfig
from psi_cardinality_poc.cardinality_protocol.feature_flags import (
    set_backend_type,
    set_hash_type,
)
from psi_cardinality_poc.cardinality_protocol.interfaces import ProofBackend


@pytest.fixture(autouse=True)
def reset_factory_state(monkeypatch: pytest.MonkeyPatch) -> None:
    set_backend_type(None)
    set_hash_type(None)
    monkeypatch.delenv("PSI_PROOF_BACKEND", raising=False)
    monkeypatch.delenv("PSI_HASH_FUNCTION", raising=False)
    yield
    set_backend_type(None)
    set_hash_type(None)


def _assert_backend_interface(backend: ProofBackend) -> None:
    assert isinstance(backend, ProofBackend)
    assert callable(getattr(backend, "generate_proof", None))
    assert callable(getattr(backend, "verify_proof", None))
    assert callable(getattr(backend, "get_backend_info", None))


def test_default_backend_is_mock() -> None:
    backend = factory.get_proof_backend()
    _assert_backend_interface(backend)
    assert type(backend).__name__ == "MockProofBackend"
    assert backend.get_backend_info()["hash_type"] == "sha3"


def test_override_selects_backend() -> None:
    backend = factory.get_proof_backend(override="mock")
    _assert_backend_interface(backend)


def test_invalid_override_raises() -> None:
    with pytest.raises(ValueError, match="Invalid backend name from override"):
        factory.get_proof_backend(override="groth16")


def test_invalid_prefer_raises() -> None:
    with pytest.raises(ValueError, match="Invalid backend name from prefer"):
        factory.get_proof_backend(prefer="plonk")


def test_hash_flag_applies_to_default_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PSI_HASH_FUNCTION", "blake2b")
    backend = factory.get_proof_backend()
    assert backend.get_backend_info()["hash_type"] == "blake2b"


def test_explicit_config_wins_over_hash_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PSI_HASH_FUNCTION", "blake2b")
    backend = factory.get_proof_backend(config=CircuitConfig(capacity=6))
    info = backend.get_backend_info()
    assert info["hash_type"] == "sha3"
    assert info["capacity"] == 6


def test_missing_backend_module_raises_import_error(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setitem(
        factory.BACKEND_REGISTRY,
        "mock",
        "psi_cardinality_poc.cardinality_protocol.adapters.missing.Backend",
    )
    with pytest.raises(ImportError, match="Unable to import backend module"):
        factory.get_proof_backend()


def test_missing_backend_class_raises_import_error(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setitem(
        factory.BACKEND_REGISTRY,
        "mock",
        "psi_cardinality_poc.cardinality_protocol.adapters.mock_adapter.Missing",
    )
    with pytest.raises(ImportError, match="not found in module"):
        factory.get_proof_backend()


def test_non_backend_class_raises_type_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(
        factory.BACKEND_REGISTRY,
        "mock",
        "psi_cardinality_poc.cardinality_protocol.config.CircuitConfig",
    )
    with pytest.raises(TypeError, match="does not implement ProofBackend"):
        factory.get_proof_backend()


def test_available_backends() -> None:
    assert factory.available_backends() == ["mock"]
