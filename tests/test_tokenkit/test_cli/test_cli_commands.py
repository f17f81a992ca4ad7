"""Tests for the tokenkit CLI."""
from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from tokenkit.cli.main import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def catalog_file(store, catalog_path) -> str:
    """Catalog file written by the seeded store fixture."""
    return str(catalog_path)


class TestModelsCommand:
    def test_lists_models(self, runner, catalog_file):
        result = runner.invoke(cli, ["models", "--catalog", catalog_file])
        assert result.exit_code == 0
        assert "m1\tAcme\t100" in result.output
        assert "2 models" in result.output

    def test_provider_filter(self, runner, catalog_file):
        result = runner.invoke(cli, ["models", "--catalog", catalog_file, "--provider", "glo"])
        assert "priced" in result.output
        assert "m1\t" not in result.output

    def test_catalog_from_environment(self, runner, catalog_file):
        result = runner.invoke(cli, ["models"], env={"TOKENKIT_CATALOG": catalog_file})
        assert "2 models" in result.output

    def test_missing_catalog_is_empty(self, runner, tmp_path):
        result = runner.invoke(cli, ["models", "--catalog", str(tmp_path / "none.json")])
        assert result.exit_code == 0
        assert "0 models" in result.output

    def test_malformed_catalog(self, runner, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        result = runner.invoke(cli, ["models", "--catalog", str(path)])
        assert result.exit_code == 1
        assert "invalid JSON" in result.output


class TestEnginesCommand:
    def test_lists_engines(self, runner):
        result = runner.invoke(cli, ["engines"])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["simple (default)", "approximate", "tiktoken"]

    def test_default_from_environment(self, runner):
        result = runner.invoke(cli, ["engines"], env={"TOKENKIT_ENGINE": "approximate"})
        assert result.exit_code == 0
        assert result.output.splitlines() == ["simple", "approximate (default)", "tiktoken"]

    def test_unregistered_default(self, runner):
        result = runner.invoke(cli, ["engines", "--default-engine", "nope"])
        assert result.exit_code == 1
        assert "nope" in result.output


class TestAnalyzeCommand:
    def test_analyze_text(self, runner, catalog_file):
        result = runner.invoke(cli, ["analyze", "Hello, world!", "--model", "m1", "--catalog", catalog_file])
        assert result.exit_code == 0
        assert "4 tokens (simple, m1)" in result.output

    def test_analyze_json_with_costs(self, runner, catalog_file):
        result = runner.invoke(
            cli, ["analyze", "a b c d", "--model", "PRICED", "--catalog", catalog_file, "--json"]
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["modelId"] == "priced"
        assert data["estimatedOutputCost"] == pytest.approx(0.006)

    def test_analyze_file(self, runner, catalog_file, tmp_path):
        text_file = tmp_path / "input.txt"
        text_file.write_text("one two", encoding="utf-8")
        result = runner.invoke(
            cli, ["analyze", "--file", str(text_file), "--model", "m1", "--catalog", catalog_file]
        )
        assert "2 tokens" in result.output

    def test_analyze_needs_text(self, runner, catalog_file):
        result = runner.invoke(cli, ["analyze", "--model", "m1", "--catalog", catalog_file])
        assert result.exit_code == 2

    def test_unknown_model(self, runner, catalog_file):
        result = runner.invoke(cli, ["analyze", "x", "--model", "nope", "--catalog", catalog_file])
        assert result.exit_code == 1
        assert "Model 'nope' not found" in result.output

    def test_default_engine_from_environment(self, runner, catalog_file):
        result = runner.invoke(
            cli,
            ["analyze", "abcdefgh", "--model", "m1", "--catalog", catalog_file],
            env={"TOKENKIT_ENGINE": "approximate"},
        )
        assert result.exit_code == 0
        assert "2 tokens (approximate, m1)" in result.output


class TestValidateCommand:
    def test_within_limit(self, runner, catalog_file):
        result = runner.invoke(
            cli,
            ["validate", "aaaaaaaaaa", "--model", "m1", "--engine", "unknownengine", "--catalog", catalog_file],
        )
        assert result.exit_code == 0
        assert "OK: 1/100 tokens (simple)" in result.output

    def test_over_limit_exit_code(self, runner, catalog_file):
        text = " ".join(["w"] * 101)
        result = runner.invoke(cli, ["validate", text, "--model", "m1", "--catalog", catalog_file])
        assert result.exit_code == 2
        assert "OVER LIMIT: 101/100" in result.output

    def test_unknown_engine_falls_back_to_configured_default(self, runner, catalog_file):
        result = runner.invoke(
            cli,
            ["validate", "abcdefgh", "--model", "m1", "--engine", "nope", "--catalog", catalog_file],
            env={"TOKENKIT_ENGINE": "approximate"},
        )
        assert result.exit_code == 0
        assert "OK: 2/100 tokens (approximate)" in result.output


class TestImportCommand:
    def test_merge_import(self, runner, catalog_file, tmp_path):
        models_file = tmp_path / "incoming.json"
        models_file.write_text(json.dumps([
            {"id": "M1", "provider": "Acme", "maxTokens": 200},
            {"id": "m2", "provider": "Acme", "maxTokens": 50},
        ]))
        result = runner.invoke(cli, ["import", "--file", str(models_file), "--catalog", catalog_file])
        assert result.exit_code == 0
        assert "Merged 2 models (3 total)" in result.output

        data = json.loads(Path(catalog_file).read_text())
        assert [(m["id"], m["maxTokens"]) for m in data] == [("m1", 200), ("priced", 1000), ("m2", 50)]

    def test_replace_import(self, runner, catalog_file, tmp_path):
        models_file = tmp_path / "incoming.json"
        models_file.write_text('[{"id": "solo", "maxTokens": 5}]')
        result = runner.invoke(
            cli, ["import", "--file", str(models_file), "--replace", "--catalog", catalog_file]
        )
        assert "Replaced catalog with 1 models (1 total)" in result.output

    def test_malformed_import(self, runner, catalog_file, tmp_path):
        models_file = tmp_path / "incoming.json"
        models_file.write_text('[{"id": "x"}]')
        result = runner.invoke(cli, ["import", "--file", str(models_file), "--catalog", catalog_file])
        assert result.exit_code == 1
        assert "maxTokens" in result.output
        assert len(json.loads(Path(catalog_file).read_text())) == 2
