"""Tests for the command line interface."""

from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from openapi_to_java_generator.cli import main

from .fixture_helpers import fixture_dir

_PETSTORE = fixture_dir() / "petstore.yaml"


def test_list_schemas(capsys: pytest.CaptureFixture[str]) -> None:
    """--list prints one line per schema with its roles."""
    assert main(["--input", str(_PETSTORE), "--list"]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "Pet [request, response] (5 properties)",
        "pet_status (0 properties)",
        "Order [response] (5 properties)",
        "OrderItem (2 properties)",
        "Address (2 properties)",
        "Error [response] (2 properties)",
    ]


def test_prints_units_without_output(capsys: pytest.CaptureFixture[str]) -> None:
    """Without an output target units are printed to stdout."""
    assert main(["--input", str(_PETSTORE), "--schema", "Address", "--no-jackson"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("// ===== Address.java =====\n")
    assert "public class Address {" in out
    assert "JsonProperty" not in out


def test_writes_output_directory(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """--output writes files and reports their paths."""
    output_dir = tmp_path / "java"
    exit_code = main(
        [
            "--input",
            str(_PETSTORE),
            "--schema",
            "Pet",
            "--output",
            str(output_dir),
            "--package",
            "org.acme.pets",
            "--lombok",
        ]
    )
    assert exit_code == 0
    assert sorted(path.name for path in output_dir.iterdir()) == [
        "PetRequest.java",
        "PetResponse.java",
        "PetStatus.java",
    ]
    code = (output_dir / "PetRequest.java").read_text(encoding="utf-8")
    assert code.startswith("package org.acme.pets;\n")
    assert "@Data" in code
    assert f"Wrote {output_dir / 'PetRequest.java'}" in capsys.readouterr().out


def test_default_archive_next_to_input(tmp_path: Path) -> None:
    """--archive without a value names the zip after the input."""
    spec_path = tmp_path / "store.yaml"
    spec_path.write_text(_PETSTORE.read_text(encoding="utf-8"), encoding="utf-8")
    assert main(["--input", str(spec_path), "--schema", "Address", "--archive"]) == 0
    with zipfile.ZipFile(tmp_path / "store-models.zip") as archive:
        assert archive.namelist() == ["Address.java"]


def test_config_file_and_flag_override(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Command line flags win over the config file."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text("java:\n  enumType: string\n  packageName: cfg.pkg\n", encoding="utf-8")
    exit_code = main(
        [
            "--input",
            str(_PETSTORE),
            "--schema",
            "pet_status",
            "--config",
            str(config_path),
            "--package",
            "cli.pkg",
        ]
    )
    assert exit_code == 0
    out = capsys.readouterr().out
    assert "package cli.pkg;" in out
    assert "public final class PetStatus {" in out


def test_unknown_schema_warning(capsys: pytest.CaptureFixture[str]) -> None:
    """Unknown names are reported as warnings."""
    assert main(["--input", str(_PETSTORE), "--schema", "Ghost"]) == 0
    assert "Warning: Unknown schema names ignored: Ghost" in capsys.readouterr().out


def test_missing_input_is_a_usage_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Load failures exit through the argument parser."""
    with pytest.raises(SystemExit) as exc_info:
        main(["--input", str(tmp_path / "missing.yaml")])
    assert exc_info.value.code == 2
    assert "Failed to read OpenAPI file" in capsys.readouterr().err


def test_invalid_config_is_a_usage_error(tmp_path: Path) -> None:
    """Invalid configuration exits with status 2."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text("java:\n  bogus: 1\n", encoding="utf-8")
    with pytest.raises(SystemExit) as exc_info:
        main(["--input", str(_PETSTORE), "--config", str(config_path)])
    assert exc_info.value.code == 2


def test_rejects_unknown_choice() -> None:
    """Choice options are validated by argparse."""
    with pytest.raises(SystemExit):
        main(["--input", str(_PETSTORE), "--validation-api", "jee"])


def test_schema_named_error_exits_cleanly(tmp_path: Path) -> None:
    """Generating a real Error class exits with status 0."""
    spec_path = tmp_path / "errors.yaml"
    spec_path.write_text(
        "openapi: 3.0.0\n"
        "paths: {}\n"
        "components:\n"
        "  schemas:\n"
        "    Error:\n"
        "      type: object\n"
        "      properties:\n"
        "        reason:\n"
        "          type: string\n",
        encoding="utf-8",
    )
    assert main(["--input", str(spec_path)]) == 0
