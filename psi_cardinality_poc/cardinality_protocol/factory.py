"""
Prototype backend factory for cardinality proof systems.

WARNING: This is prototype infrastructure. Backend choice affects security
assumptions and does not provide any security guarantee. The mock backend is
for testing only and must not be used in production.

Backends are referenced by dotted import path and only imported when first
requested.
"""

from __future__ import annotations

import importlib
from typing import Final

from .config import DEFAULT_CONFIG, CircuitConfig
from .feature_flags import get_backend_type, get_hash_type
from .interfaces import ProofBackend

BACKEND_REGISTRY: Final[dict[str, str]] = {
    "mock": "psi_cardinality_poc.cardinality_protocol.adapters.mock_adapter.MockProofBackend",
}


def available_backends() -> list[str]:
    """Registered backend names, sorted."""
    return sorted(BACKEND_REGISTRY)


def _check_registered(value: str | None, source: str) -> str | None:
    if value is None or value == "":
        return None
    if not isinstance(value, str) or value not in BACKEND_REGISTRY:
        raise ValueError(
            f"Invalid backend name from {source}: {value!r}. "
            f"Valid options: {', '.join(available_backends())}"
        )
    return value


def _resolve_backend_name(
    *, prefer: str | None = None, override: str | None = None
) -> str:
    # override beats prefer; feature flags are only consulted when both are unset
    for source, value in (("override", override), ("prefer", prefer)):
        name = _check_registered(value, source)
        if name is not None:
            return name
    return _check_registered(get_backend_type(), "feature flags")


def _load_backend_class(backend_name: str) -> type[ProofBackend]:
    import_path = BACKEND_REGISTRY[backend_name]
    module_path, _, class_name = import_path.rpartition(".")
    if not module_path or not class_name:
        raise ValueError(
            f"Invalid backend import path for {backend_name!r}: {import_path!r}"
        )

    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as exc:
        raise ImportError(
            f"Unable to import backend module {module_path!r} for {backend_name!r}"
        ) from exc

    backend_cls = getattr(module, class_name, None)
    if backend_cls is None:
        raise ImportError(
            f"Backend class {class_name!r} not found in module {module_path!r}"
        )
    if not isinstance(backend_cls, type) or not issubclass(backend_cls, ProofBackend):
        raise TypeError(
            f"Backend reference {import_path!r} does not implement ProofBackend"
        )
    return backend_cls


def get_proof_backend(
    *,
    prefer: str | None = None,
    override: str | None = None,
    config: CircuitConfig | None = None,
) -> ProofBackend:
    """
    Return a proof backend instance based on feature flags.

    Args:
        prefer: Backend name hint, used when no override is given
        override: Backend name that wins over everything else
        config: Circuit configuration. When omitted, the default
            configuration is used with the hash provider from the feature
            flags.

    Raises:
        ValueError: If a backend or hash name is invalid.
        ImportError: If the backend class cannot be imported.
        TypeError: If the backend class does not implement ProofBackend.
    """
    backend_cls = _load_backend_class(
        _resolve_backend_name(prefer=prefer, override=override)
    )
    if config is None:
        config = DEFAULT_CONFIG.with_overrides(hash_type=get_hash_type())
    return backend_cls(config=config)
