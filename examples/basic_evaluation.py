"""
Basic Cardinality Evaluation Example

Evaluates "|dedup(A) ∩ B| == expected" for a few sets, then produces and
checks a mock proof artifact the way a prover and a verifier would.

The verifier side only ever receives the public set, the declared
cardinality and the artifact.
"""

import tempfile
from pathlib import Path

from psi_cardinality_poc.cardinality_protocol import (
    CircuitConfig,
    ProofContext,
    evaluate,
    get_proof_backend,
)
from psi_cardinality_poc.cardinality_protocol.artifacts import (
    read_artifact_files,
    write_artifact_files,
)

CONFIG_FILE = Path(__file__).with_name("circuit.yaml")


def show(label, result):
    if result.accepted:
        print(f"   {label}: ✓ ACCEPTED (cardinality {result.cardinality})")
    else:
        print(f"   {label}: ✗ REJECTED at {result.failed_stage.value}: {result.error}")


def main():
    print("\n" + "=" * 70)
    print("Private Set-Intersection Cardinality - Basic Example")
    print("=" * 70)

    print("\n1. Evaluating with the default circuit (capacity 4)...")
    show("partial overlap", evaluate([1, 2, 3, 4], [3, 4, 5, 6], 2))
    show("duplicates", evaluate([1, 1, 2, 3], [2, 2, 3, 4], 2))
    show("wrong claim", evaluate([1, 2, 3, 4], [3, 4, 5, 6], 3))
    show("sentinel", evaluate([1, 0, 3, 4], [3, 4, 5, 6], 2))

    print(f"\n2. Loading {CONFIG_FILE.name}...")
    config = CircuitConfig.from_yaml(CONFIG_FILE)
    print(f"   capacity={config.capacity} hash={config.hash_type}")
    private_set = [10, 20, 30, 40, 50, 60, 70, 80]
    public_set = [15, 20, 25, 30, 35, 40, 45, 50]
    result = evaluate(private_set, public_set, 4, config=config)
    show("capacity 8", result)
    print(f"   trace: {result.trace}")

    print("\n3. Proving and verifying with the mock backend...")
    backend = get_proof_backend(config=config)
    artifact = backend.generate_proof(
        private_set, public_set, 4, context=ProofContext(session_id="example")
    )
    with tempfile.TemporaryDirectory() as tmp:
        write_artifact_files(artifact, tmp)
        loaded = read_artifact_files(tmp)
    print(f"   artifact id: {loaded.short_id}")
    print(f"   verify(expected=4): {backend.verify_proof(loaded, public_set, 4)}")
    print(f"   verify(expected=5): {backend.verify_proof(loaded, public_set, 5)}")

    print("\n⚠️  The mock backend binds public data only; it is not a proof system.")


if __name__ == "__main__":
    main()
