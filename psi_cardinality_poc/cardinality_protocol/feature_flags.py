"""
Prototype feature flags for selecting the proof backend and hash provider.

WARNING: This is prototype code and backend selection affects security assumptions.
"""

from __future__ import annotations

import os
from typing import Final

from .config import DEFAULT_HASH_TYPE, HASH_TYPES

_VALID_BACKENDS: Final[tuple[str, ...]] = ("mock",)
_DEFAULT_BACKEND: Final[str] = "mock"
_BACKEND_ENV_VAR: Final[str] = "PSI_PROOF_BACKEND"

_VALID_HASHES: Final[tuple[str, ...]] = HASH_TYPES
_DEFAULT_HASH: Final[str] = DEFAULT_HASH_TYPE
_HASH_ENV_VAR: Final[str] = "PSI_HASH_FUNCTION"

_backend_override: str | None = None
_hash_override: str | None = None


def _normalize(value: str | None, valid: tuple[str, ...], label: str) -> str | None:
    if value is None:
        return None

    if not isinstance(value, str):
        raise ValueError(
            f"Invalid {label}: {value!r}. Valid options: {', '.join(valid)}"
        )

    if value == "":
        return None

    if value not in valid:
        raise ValueError(
            f"Invalid {label}: {value!r}. Valid options: {', '.join(valid)}"
        )

    return value


def _resolve(
    prefer: str | None,
    override: str | None,
    env_var: str,
    default: str,
    valid: tuple[str, ...],
    label: str,
) -> str:
    preferred = _normalize(prefer, valid, label)
    if preferred is not None:
        return preferred

    if override is not None:
        return override

    env_value = _normalize(os.getenv(env_var), valid, label)
    if env_value is not None:
        return env_value

    return default


def get_backend_type(prefer: str | None = None) -> str:
    """
    Resolve proof backend type in precedence order.

    prefer -> in-memory override -> PSI_PROOF_BACKEND -> default ("mock").

    Raises:
        ValueError: If a provided backend value is invalid.
    """
    return _resolve(
        prefer,
        _backend_override,
        _BACKEND_ENV_VAR,
        _DEFAULT_BACKEND,
        _VALID_BACKENDS,
        "backend type",
    )


def set_backend_type(value: str | None) -> None:
    """
    Set in-memory backend override (testing only).

    Args:
        value: Backend type to force, or None to clear the override.

    Raises:
        ValueError: If the value is invalid.
    """
    global _backend_override
    _backend_override = _normalize(value, _VALID_BACKENDS, "backend type")


def get_hash_type(prefer: str | None = None) -> str:
    """
    Resolve hash provider name in precedence order.

    prefer -> in-memory override -> PSI_HASH_FUNCTION -> default ("sha3").

    Raises:
        ValueError: If a provided hash name is invalid.
    """
    return _resolve(
        prefer,
        _hash_override,
        _HASH_ENV_VAR,
        _DEFAULT_HASH,
        _VALID_HASHES,
        "hash type",
    )


def set_hash_type(value: str | None) -> None:
    """Set in-memory hash override (testing only)."""
    global _hash_override
    _hash_override = _normalize(value, _VALID_HASHES, "hash type")
