"""
Test CLI commands end to end.

Most tests drive the click group in-process with CliRunner; one smoke test
runs the module as a subprocess the way a user would.
"""
import json
import os
import subprocess
import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

from psi_cardinality_poc import __version__
from psi_cardinality_poc.cli import main

REPO_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture(autouse=True)
def clear_flag_env(monkeypatch):
    monkeypatch.delenv("PSI_PROOF_BACKEND", raising=False)
    monkeypatch.delenv("PSI_HASH_FUNCTION", raising=False)


@pytest.fixture
def runner():
    return CliRunner()


def _prove(runner, out_dir, private="1,2,3,4", public="3,4,5,6", expected="2", *extra):
    return runner.invoke(
        main,
        [
            "prove",
            "--private", private,
            "--public", public,
            "--expected", expected,
            "--out", str(out_dir),
            *extra,
        ],
    )


class TestEvaluate:
    def test_accepted(self, runner):
        result = runner.invoke(
            main, ["evaluate", "--private", "1,2,3,4", "--public", "3,4,5,6", "--expected", "2"]
        )
        assert result.exit_code == 0, result.output
        assert "ACCEPTED" in result.output
        assert "cardinality: 2" in result.output

    def test_rejected(self, runner):
        result = runner.invoke(
            main, ["evaluate", "--private", "1,2,3,4", "--public", "3,4,5,6", "--expected", "3"]
        )
        assert result.exit_code == 1
        assert "REJECTED" in result.output
        assert "stage: assert" in result.output

    def test_sentinel_rejected(self, runner):
        result = runner.invoke(
            main, ["evaluate", "--private", "0,2,3,4", "--public", "3,4,5,6", "--expected", "1"]
        )
        assert result.exit_code == 1
        assert "stage: validate" in result.output

    def test_json_output(self, runner):
        result = runner.invoke(
            main,
            [
                "evaluate",
                "--private", "1,1,2,3",
                "--public", "2,2,3,4",
                "--expected", "2",
                "--json",
            ],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["outcome"] == "accepted"
        assert data["cardinality"] == 2
        assert data["public_set"] == [2, 2, 3, 4]

    def test_hex_values_and_hash_option(self, runner):
        result = runner.invoke(
            main,
            [
                "evaluate",
                "--private", "0x1,0x2,0x3,0x4",
                "--public", "4,5,6,7",
                "--expected", "1",
                "--hash", "blake2b",
            ],
        )
        assert result.exit_code == 0, result.output

    def test_wrong_length_is_usage_error(self, runner):
        result = runner.invoke(
            main, ["evaluate", "--private", "1,2,3", "--public", "3,4,5,6", "--expected", "1"]
        )
        assert result.exit_code == 2

    def test_unparsable_values(self, runner):
        result = runner.invoke(
            main, ["evaluate", "--private", "a,b", "--public", "3,4,5,6", "--expected", "1"]
        )
        assert result.exit_code == 2
        assert "comma-separated integers" in result.output

    def test_yaml_config(self, runner, tmp_path):
        config_path = tmp_path / "circuit.yaml"
        config_path.write_text("capacity: 2\nhash_type: blake2b\n")
        result = runner.invoke(
            main,
            [
                "evaluate",
                "--private", "1,2",
                "--public", "2,3",
                "--expected", "1",
                "--config", str(config_path),
            ],
        )
        assert result.exit_code == 0, result.output

    def test_invalid_yaml_config(self, runner, tmp_path):
        config_path = tmp_path / "circuit.yaml"
        config_path.write_text("capacity: 0\n")
        result = runner.invoke(
            main,
            [
                "evaluate",
                "--private", "1",
                "--public", "1",
                "--expected", "1",
                "--config", str(config_path),
            ],
        )
        assert result.exit_code == 2


class TestProveVerify:
    def test_prove_then_verify(self, runner, tmp_path):
        out_dir = tmp_path / "artifact"
        result = _prove(runner, out_dir, "1,2,3,4", "3,4,5,6", "2", "--session-id", "s-1")
        assert result.exit_code == 0, result.output
        assert "Proof generated successfully" in result.output
        assert (out_dir / "proof").exists()
        assert (out_dir / "public-inputs").exists()

        result = runner.invoke(
            main,
            [
                "verify",
                "--artifact-dir", str(out_dir),
                "--public", "3,4,5,6",
                "--expected", "2",
            ],
        )
        assert result.exit_code == 0, result.output
        assert "PASS" in result.output

    def test_verify_fails_on_wrong_expected(self, runner, tmp_path):
        _prove(runner, tmp_path)
        result = runner.invoke(
            main,
            ["verify", "--artifact-dir", str(tmp_path), "--public", "3,4,5,6", "--expected", "3"],
        )
        assert result.exit_code == 1
        assert "FAIL" in result.output

    def test_verify_fails_on_other_public_set(self, runner, tmp_path):
        _prove(runner, tmp_path)
        result = runner.invoke(
            main,
            ["verify", "--artifact-dir", str(tmp_path), "--public", "3,4,5,7", "--expected", "2"],
        )
        assert result.exit_code == 1

    def test_verify_fails_on_missing_files(self, runner, tmp_path):
        result = runner.invoke(
            main,
            ["verify", "--artifact-dir", str(tmp_path), "--public", "3,4,5,6", "--expected", "2"],
        )
        assert result.exit_code == 1

    def test_prove_rejected_evaluation(self, runner, tmp_path):
        result = _prove(runner, tmp_path / "out", "1,2,3,4", "3,4,5,6", "1")
        assert result.exit_code == 1
        assert not (tmp_path / "out" / "proof").exists()

    def test_public_inputs_file_has_no_private_values(self, runner, tmp_path):
        _prove(runner, tmp_path, "901,902,5,6", "3,4,5,6", "2")
        text = (tmp_path / "public-inputs").read_text()
        assert "901" not in text
        assert "902" not in text


class TestOtherCommands:
    def test_commit_bits(self, runner):
        result = runner.invoke(main, ["commit-bits", "--x", "5", "--r", "7"])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "69984"

    def test_commit_bits_value_too_wide(self, runner):
        result = runner.invoke(main, ["commit-bits", "--x", "70000", "--r", "7"])
        assert result.exit_code == 2

    def test_vectors(self, runner):
        result = runner.invoke(main, ["vectors"])
        assert result.exit_code == 0, result.output
        assert "scenarios.json: OK" in result.output

    def test_vectors_with_broken_file(self, runner, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text(
            json.dumps(
                {
                    "version": "1.0",
                    "field": "bn254",
                    "hash": "sha3",
                    "capacity": 4,
                    "sentinel": 0,
                    "scenarios": [
                        {
                            "name": "off_by_one",
                            "private_set": [1, 2, 3, 4],
                            "public_set": [3, 4, 5, 6],
                            "expected": 2,
                            "outcome": "accepted",
                            "cardinality": 3,
                        }
                    ],
                }
            )
        )
        result = runner.invoke(main, ["vectors", "--file", str(path)])
        assert result.exit_code == 1
        assert "off_by_one: cardinality 2 != 3" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["version"])
        assert result.exit_code == 0
        assert f"psi-cardinality {__version__}" in result.output
        assert "PROOF OF CONCEPT" in result.output


def test_cli_module_runs_as_subprocess():
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        filter(None, [str(REPO_ROOT), env.get("PYTHONPATH")])
    )
    result = subprocess.run(
        [sys.executable, "-m", "psi_cardinality_poc.cli", "version"],
        capture_output=True,
        text=True,
        timeout=30,
        check=False,
        env=env,
    )
    assert result.returncode == 0, result.stdout + result.stderr
    assert __version__ in result.stdout
