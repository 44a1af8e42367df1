"""Write and read proof artifact files (``proof`` + ``public-inputs``)."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Tuple

from .config import PROOF_FILENAME, PUBLIC_INPUTS_FILENAME
from .exceptions import SerializationError
from .types import ProofArtifact

logger = logging.getLogger(__name__)


def write_artifact_files(
    artifact: ProofArtifact, out_dir: str | Path
) -> Tuple[Path, Path]:
    """
    Write the CBOR proof and a JSON copy of its public inputs.

    The JSON file is informational; ``read_artifact_files`` checks that it
    agrees with the public inputs embedded in the proof.

    Returns:
        (proof_path, public_inputs_path)
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    proof_path = out_dir / PROOF_FILENAME
    public_inputs_path = out_dir / PUBLIC_INPUTS_FILENAME

    proof_path.write_bytes(artifact.serialize())
    public_inputs_path.write_text(
        json.dumps(artifact.public_inputs_json(), sort_keys=True, indent=2),
        encoding="utf-8",
    )
    logger.info("wrote proof artifact %s to %s", artifact.short_id, out_dir)
    return proof_path, public_inputs_path


def read_artifact_files(artifact_dir: str | Path) -> ProofArtifact:
    """
    Load an artifact written by ``write_artifact_files``.

    Raises:
        FileNotFoundError: If either file is missing
        SerializationError: If the files are malformed or disagree
    """
    artifact_dir = Path(artifact_dir)
    proof_path = artifact_dir / PROOF_FILENAME
    public_inputs_path = artifact_dir / PUBLIC_INPUTS_FILENAME
    for path in (proof_path, public_inputs_path):
        if not path.exists():
            raise FileNotFoundError(f"missing artifact file: {path}")

    artifact = ProofArtifact.deserialize(proof_path.read_bytes())
    try:
        declared = json.loads(public_inputs_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SerializationError(f"invalid public inputs JSON: {exc}") from exc

    if declared != artifact.public_inputs_json():
        raise SerializationError("public inputs file does not match proof")
    return artifact
