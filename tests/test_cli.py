"""Tests for the querymatch command line."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from querymatch import __version__
from querymatch.cli import app

runner = CliRunner()


@pytest.fixture
def document(tmp_path):
    path = tmp_path / "doc.json"
    path.write_text('{"a": {"b": [1, 2]}, "ready": true}')
    return path


@pytest.fixture
def manifest(tmp_path):
    path = tmp_path / "deploy.yaml"
    path.write_text("kind: Deployment\nspec:\n  replicas: 3\n")
    return path


def test_version() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


class TestMatchCommand:
    def test_match(self, document) -> None:
        result = runner.invoke(app, ["match", ".a.b | length == 2", str(document)])
        assert result.exit_code == 0
        assert "Matched" in result.output

    def test_no_match(self, document) -> None:
        result = runner.invoke(app, ["match", ".a.b | length == 3", str(document)])
        assert result.exit_code == 1
        assert "No match" in result.output

    def test_invalid_expression(self, document) -> None:
        result = runner.invoke(app, ["match", ".a ==", str(document)])
        assert result.exit_code == 2
        assert "unable to parse expression" in result.output

    def test_jsonpath_engine(self, document) -> None:
        result = runner.invoke(app, ["match", "$.ready", str(document), "--engine", "jsonpath"])
        assert result.exit_code == 0

    def test_yq_engine(self, manifest) -> None:
        result = runner.invoke(app, ["match", ".spec.replicas == 3", str(manifest), "-e", "yq"])
        assert result.exit_code == 0

    def test_missing_file(self, tmp_path) -> None:
        result = runner.invoke(app, ["match", ".a", str(tmp_path / "missing.json")])
        assert result.exit_code == 2

    def test_config_file(self, document, tmp_path) -> None:
        config = tmp_path / "querymatch.yaml"
        config.write_text("format:\n  max_length: 100\n")

        result = runner.invoke(app, ["--config", str(config), "match", ".ready", str(document)])
        assert result.exit_code == 0

    def test_invalid_config_file(self, document, tmp_path) -> None:
        config = tmp_path / "querymatch.yaml"
        config.write_text("format:\n  colour: red\n")

        result = runner.invoke(app, ["--config", str(config), "match", ".ready", str(document)])
        assert result.exit_code == 2
        assert "Invalid config" in result.output


class TestExtractCommand:
    def test_extract(self, document) -> None:
        result = runner.invoke(app, ["extract", ".a", str(document)])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"b": [1, 2]}

    def test_extract_jsonpath(self, document) -> None:
        result = runner.invoke(app, ["extract", "$.a.b[1]", str(document), "--engine", "jsonpath"])
        assert result.exit_code == 0
        assert json.loads(result.output) == 2

    def test_no_result_prints_null(self, document) -> None:
        result = runner.invoke(app, ["extract", "empty", str(document)])
        assert result.exit_code == 0
        assert json.loads(result.output) is None

    def test_evaluation_error(self, document) -> None:
        result = runner.invoke(app, ["extract", ".a.b.c", str(document)])
        assert result.exit_code == 2
        assert "Error" in result.output

    def test_yq_not_supported(self, manifest) -> None:
        result = runner.invoke(app, ["extract", ".kind", str(manifest), "--engine", "yq"])
        assert result.exit_code == 2
