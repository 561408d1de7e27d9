"""
Unit tests for the CLI.
"""

import json
from pathlib import Path

from typer.testing import CliRunner

from schema_ast import __version__
from schema_ast.cli import app


SCHEMAS_DIR = Path(__file__).parent.parent / "fixtures" / "schemas"

runner = CliRunner()


def test_version():
    """Test the version flag."""
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_parse_tree_output():
    """Test parsing a recursive schema prints its tree."""
    result = runner.invoke(app, ["parse", "--schema", str(SCHEMAS_DIR / "tree.json")])

    assert result.exit_code == 0
    assert "Schema is well-formed" in result.stdout
    assert "INTERFACE" in result.stdout
    assert "children" in result.stdout


def test_parse_json_output_saved(tmp_path):
    """Test the JSON dump is written to the output file."""
    output = tmp_path / "person.ast.json"

    result = runner.invoke(app, [
        "parse",
        "--schema", str(SCHEMAS_DIR / "person.json"),
        "--format", "json",
        "--unreachable-definitions",
        "--output", str(output),
    ])

    assert result.exit_code == 0
    dumped = json.loads(output.read_text())
    assert dumped["type"] == "INTERFACE"
    assert dumped["standaloneName"] == "Person"
    assert [p["keyName"] for p in dumped["properties"]][-2:] == ["unused_note", "[k: string]"]


def test_parse_unknown_format():
    """Test an unsupported format is refused."""
    result = runner.invoke(app, ["parse", "--schema", str(SCHEMAS_DIR / "tree.json"), "--format", "yaml"])

    assert result.exit_code == 1
    assert "Unknown format" in result.stdout


def test_parse_rejects_invalid_schema():
    """Test parse stops when meta-schema validation fails."""
    result = runner.invoke(app, ["parse", "--schema", str(SCHEMAS_DIR / "invalid.json")])

    assert result.exit_code == 1
    assert "problem(s)" in result.stdout


def test_parse_skip_validation():
    """Test --skip-validation parses a schema the meta-schema rejects."""
    result = runner.invoke(app, [
        "parse",
        "--schema", str(SCHEMAS_DIR / "invalid.json"),
        "--skip-validation",
    ])

    assert result.exit_code == 0
    assert "Broken" in result.stdout


def test_validate_ok():
    """Test validate accepts a well-formed schema."""
    result = runner.invoke(app, ["validate", "--schema", str(SCHEMAS_DIR / "inheritance.json")])

    assert result.exit_code == 0
    assert "Schema is well-formed" in result.stdout


def test_validate_reports_errors():
    """Test validate lists problems and fails."""
    result = runner.invoke(app, ["validate", "--schema", str(SCHEMAS_DIR / "invalid.json")])

    assert result.exit_code == 1
    assert ".required" in result.stdout


def test_missing_file():
    """Test a nonexistent schema path is rejected by option validation."""
    result = runner.invoke(app, ["validate", "--schema", "does-not-exist.json"])

    assert result.exit_code != 0
