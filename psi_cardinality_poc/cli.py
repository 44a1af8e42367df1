"""
Command-Line Interface for the private set-intersection cardinality toolkit

Provides commands to evaluate the statement, produce and check mock proof
artifacts, and run the bundled scenario vectors.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from psi_cardinality_poc import __version__, print_disclaimer
from psi_cardinality_poc.cardinality_protocol.artifacts import (
    read_artifact_files,
    write_artifact_files,
)
from psi_cardinality_poc.cardinality_protocol.config import (
    BITS_WIDTH,
    DEFAULT_CONFIG,
    HASH_TYPES,
    CircuitConfig,
)
from psi_cardinality_poc.cardinality_protocol.evaluator import evaluate as run_evaluation
from psi_cardinality_poc.cardinality_protocol.exceptions import (
    CardinalityProtocolError,
    ConfigurationError,
    ProofGenerationError,
    ProofVerificationError,
)
from psi_cardinality_poc.cardinality_protocol.factory import (
    available_backends,
    get_proof_backend,
)
from psi_cardinality_poc.cardinality_protocol.feature_flags import get_hash_type
from psi_cardinality_poc.cardinality_protocol.pedersen.bits import (
    commit_bits,
    int_to_bits,
)
from psi_cardinality_poc.cardinality_protocol.test_vectors import scenarios
from psi_cardinality_poc.cardinality_protocol.types import ProofContext


def _parse_field_list(ctx, param, value):
    """Parse a comma-separated list of non-negative integers."""
    if value is None:
        return None
    try:
        items = [int(part.strip(), 0) for part in value.split(",") if part.strip()]
    except ValueError:
        raise click.BadParameter("expected comma-separated integers, e.g. 1,2,3,4")
    if not items:
        raise click.BadParameter("at least one value is required")
    return items


def _load_config(config_path: Optional[str], hash_type: Optional[str]) -> CircuitConfig:
    try:
        base = CircuitConfig.from_yaml(config_path) if config_path else DEFAULT_CONFIG
        if hash_type is None and not config_path:
            hash_type = get_hash_type()
        return base.with_overrides(hash_type=hash_type)
    except (ConfigurationError, ValueError) as e:
        raise click.UsageError(str(e))


_config_option = click.option(
    '--config',
    'config_path',
    type=click.Path(exists=True, dir_okay=False),
    help='YAML file with capacity, sentinel, modulus and hash_type'
)
_hash_option = click.option(
    '--hash',
    'hash_type',
    type=click.Choice(list(HASH_TYPES), case_sensitive=False),
    default=None,
    help='One-way hash provider (default: PSI_HASH_FUNCTION or sha3)'
)
_public_option = click.option(
    '--public',
    'public_set',
    required=True,
    callback=_parse_field_list,
    help='Public set B, comma-separated'
)
_expected_option = click.option(
    '--expected',
    type=int,
    required=True,
    help='Declared intersection cardinality'
)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', is_flag=True, help='Enable debug logging')
def main(verbose):
    """
    Private Set-Intersection Cardinality Toolkit - Proof of Concept

    Proves how many elements of a private set appear in a public set,
    using a fixed-capacity, branch-free kernel.

    ⚠️  PROOF OF CONCEPT - NOT PRODUCTION READY
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


@main.command()
@click.option(
    '--private',
    'private_set',
    required=True,
    callback=_parse_field_list,
    help='Private set A, comma-separated (never printed)'
)
@_public_option
@_expected_option
@_config_option
@_hash_option
@click.option('--json', 'as_json', is_flag=True, help='Print the result as JSON')
def evaluate(private_set, public_set, expected, config_path, hash_type, as_json):
    """
    Evaluate |dedup(A) ∩ B| == EXPECTED.

    Exits 0 when ACCEPTED and 1 when REJECTED.

    Examples:

        psi-cardinality evaluate --private 1,2,3,4 --public 3,4,5,6 --expected 2
    """
    config = _load_config(config_path, hash_type)
    try:
        result = run_evaluation(private_set, public_set, expected, config=config)
    except ConfigurationError as e:
        raise click.UsageError(str(e))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    elif result.accepted:
        click.echo(click.style("✓ ACCEPTED", fg="green", bold=True))
        click.echo(f"  cardinality: {result.cardinality}")
    else:
        click.echo(click.style("✗ REJECTED", fg="red", bold=True))
        click.echo(f"  stage: {result.failed_stage.value}")
        click.echo(f"  reason: {result.error}")

    sys.exit(0 if result.accepted else 1)


@main.command()
@click.option(
    '--private',
    'private_set',
    required=True,
    callback=_parse_field_list,
    help='Private set A, comma-separated (never written to the artifact)'
)
@_public_option
@_expected_option
@click.option(
    '--out',
    'out_dir',
    type=click.Path(file_okay=False),
    required=True,
    help='Directory for the proof and public-inputs files'
)
@click.option('--session-id', type=str, default=None, help='Bind a session id into the proof')
@_config_option
@_hash_option
def prove(private_set, public_set, expected, out_dir, session_id, config_path, hash_type):
    """
    Generate a (mock) proof artifact for an accepted evaluation.
    """
    print_disclaimer()
    config = _load_config(config_path, hash_type)
    backend = get_proof_backend(config=config)
    context = ProofContext(session_id=session_id) if session_id else None

    try:
        artifact = backend.generate_proof(
            private_set, public_set, expected, context=context
        )
    except ProofGenerationError as e:
        click.echo(click.style(f"✗ Proof generation failed: {e}", fg="red"), err=True)
        sys.exit(1)
    except ConfigurationError as e:
        raise click.UsageError(str(e))

    proof_path, public_inputs_path = write_artifact_files(artifact, out_dir)
    click.echo(click.style("✓ Proof generated successfully", fg="green"))
    click.echo(f"  proof: {proof_path}")
    click.echo(f"  public inputs: {public_inputs_path}")
    click.echo(f"  id: {artifact.short_id}")


@main.command()
@click.option(
    '--artifact-dir',
    type=click.Path(exists=True, file_okay=False),
    required=True,
    help='Directory written by `prove`'
)
@_public_option
@_expected_option
@_config_option
@_hash_option
def verify(artifact_dir, public_set, expected, config_path, hash_type):
    """
    Verify a proof artifact against public set B and EXPECTED.
    """
    config = _load_config(config_path, hash_type)
    backend = get_proof_backend(config=config)
    try:
        artifact = read_artifact_files(artifact_dir)
    except (FileNotFoundError, CardinalityProtocolError) as e:
        click.echo(click.style(f"✗ FAIL: {e}", fg="red"), err=True)
        sys.exit(1)

    try:
        backend.require_valid(artifact, public_set, expected)
    except ProofVerificationError as e:
        click.echo(click.style("✗ FAIL", fg="red", bold=True))
        click.echo(f"  {e}")
        sys.exit(1)
    click.echo(click.style("✓ PASS", fg="green", bold=True))
    click.echo(f"  id: {artifact.short_id}")


@main.command(name="commit-bits")
@click.option('--x', 'x_value', type=int, required=True, help='Committed value')
@click.option('--r', 'r_value', type=int, required=True, help='Blinding factor')
@click.option('--g', type=int, default=2, show_default=True, help='First base')
@click.option('--h', type=int, default=3, show_default=True, help='Second base')
def commit_bits_command(x_value, r_value, g, h):
    """
    Compute the Pedersen commitment g^x * h^r from 16-bit openings.
    """
    try:
        commitment = commit_bits(
            int_to_bits(x_value, BITS_WIDTH),
            int_to_bits(r_value, BITS_WIDTH),
            g,
            h,
        )
    except CardinalityProtocolError as e:
        raise click.UsageError(str(e))
    click.echo(str(commitment))


@main.command()
@click.option(
    '--file',
    'vector_file',
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help='Scenario JSON file (default: bundled scenarios)'
)
def vectors(vector_file):
    """
    Check the scenario vectors against the kernel.
    """
    path = Path(vector_file) if vector_file else scenarios.VECTOR_FILE
    data = scenarios.load_vectors(path)
    errors = scenarios.validate_vectors(data)
    if errors:
        for error in errors:
            click.echo(click.style(f"✗ {path.name}: {error}", fg="red"))
        sys.exit(1)
    click.echo(click.style(f"✓ {path.name}: OK", fg="green"))


@main.command()
def version():
    """Show version information."""
    click.echo(f"psi-cardinality {__version__}")
    click.echo(f"backends: {', '.join(available_backends())}")
    print_disclaimer()


if __name__ == '__main__':
    main()
