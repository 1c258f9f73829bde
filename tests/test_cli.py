"""Tests for the command line interface."""

import json
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from fieldscope import __version__
from fieldscope.cli.app import app

runner = CliRunner()


@pytest.fixture
def account_file(tmp_path: Path, account) -> Path:
    path = tmp_path / "account.json"
    path.write_text(json.dumps(account), encoding="utf-8")
    return path


class TestFilterCommand:
    """fieldscope filter."""

    def test_include(self, account_file: Path) -> None:
        result = runner.invoke(app, ["filter", str(account_file), "-i", "accountNumber"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"accountNumber": "ACC-1001"}

    def test_repeated_options(self, account_file: Path) -> None:
        result = runner.invoke(
            app,
            ["filter", str(account_file), "-i", "accountNumber", "-i", "transactions.transactionId", "-e", "meta"],
        )
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {
            "accountNumber": "ACC-1001",
            "transactions": [{"transactionId": "T1"}, {"transactionId": "T2"}],
        }

    def test_yaml_input_and_output(self, tmp_path: Path, account) -> None:
        path = tmp_path / "account.yaml"
        path.write_text(yaml.safe_dump(account), encoding="utf-8")
        result = runner.invoke(app, ["filter", str(path), "-e", "transactions,meta", "--format", "yaml"])
        assert result.exit_code == 0
        assert yaml.safe_load(result.stdout) == {"accountNumber": "ACC-1001", "accountType": "checking"}

    def test_prune_flag(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.json"
        path.write_text(json.dumps({"a": {"b": 1}, "c": 2}), encoding="utf-8")
        result = runner.invoke(app, ["filter", str(path), "-e", "a.b", "--prune"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"c": 2}

    def test_prune_from_config(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.json"
        path.write_text(json.dumps({"a": {"b": 1}, "c": 2}), encoding="utf-8")
        config = tmp_path / "fieldscope.yaml"
        config.write_text("prune_empty: true\n", encoding="utf-8")
        result = runner.invoke(app, ["filter", str(path), "-e", "a.b", "--config", str(config)])
        assert json.loads(result.stdout) == {"c": 2}

        result = runner.invoke(app, ["filter", str(path), "-e", "a.b", "-c", str(config), "--no-prune"])
        assert json.loads(result.stdout) == {"a": {}, "c": 2}

    def test_stdin(self, account) -> None:
        result = runner.invoke(app, ["filter", "-", "-i", "accountType"], input=json.dumps(account))
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"accountType": "checking"}

    def test_invalid_path_exits_2(self, account_file: Path) -> None:
        result = runner.invoke(app, ["filter", str(account_file), "-i", "meta..version"])
        assert result.exit_code == 2
        assert "Invalid field path" in result.output

    def test_missing_file_exits_1(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["filter", str(tmp_path / "nope.json")])
        assert result.exit_code == 1

    def test_bad_json_exits_1(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        result = runner.invoke(app, ["filter", str(path)])
        assert result.exit_code == 1

    def test_max_depth_exits_1(self, tmp_path: Path) -> None:
        path = tmp_path / "deep.json"
        path.write_text(json.dumps({"a": {"b": {"c": {"d": 1}}}}), encoding="utf-8")
        result = runner.invoke(app, ["filter", str(path), "--max-depth", "2"])
        assert result.exit_code == 1
        assert "Maximum depth 2 exceeded" in result.output

    def test_bad_config_exits_2(self, account_file: Path, tmp_path: Path) -> None:
        config = tmp_path / "bad.yaml"
        config.write_text("colour: red\n", encoding="utf-8")
        result = runner.invoke(app, ["filter", str(account_file), "-c", str(config)])
        assert result.exit_code == 2

    def test_rich_format(self, account_file: Path) -> None:
        result = runner.invoke(app, ["filter", str(account_file), "-i", "accountNumber", "-f", "rich"])
        assert result.exit_code == 0
        assert "ACC-1001" in result.stdout


class TestExplainCommand:
    def test_tree(self, account_file: Path) -> None:
        result = runner.invoke(app, ["explain", str(account_file), "-i", "accountNumber"])
        assert result.exit_code == 0
        assert "accountNumber" in result.stdout
        assert "not included" in result.stdout

    def test_invalid_path(self, account_file: Path) -> None:
        result = runner.invoke(app, ["explain", str(account_file), "-e", ".meta"])
        assert result.exit_code == 2


class TestPathsCommand:
    def test_lists_distinct_paths(self, account_file: Path) -> None:
        result = runner.invoke(app, ["paths", str(account_file)])
        assert result.exit_code == 0
        assert result.stdout.splitlines() == [
            "accountNumber",
            "accountType",
            "transactions",
            "transactions.transactionId",
            "transactions.transactionType",
            "transactions.amount",
            "meta",
            "meta.createdBy",
            "meta.version",
        ]

    def test_max_depth_option(self, tmp_path: Path) -> None:
        doc: dict = {"leaf": 1}
        for _ in range(150):
            doc = {"node": doc}
        path = tmp_path / "deep.json"
        path.write_text(json.dumps(doc), encoding="utf-8")

        assert runner.invoke(app, ["paths", str(path)]).exit_code == 1
        result = runner.invoke(app, ["paths", str(path), "--max-depth", "200"])
        assert result.exit_code == 0
        assert result.stdout.splitlines()[-1].endswith("node.leaf")

    def test_max_depth_from_config(self, account_file: Path, tmp_path: Path) -> None:
        config = tmp_path / "shallow.yaml"
        config.write_text("max-depth: 0\n", encoding="utf-8")
        result = runner.invoke(app, ["paths", str(account_file), "-c", str(config)])
        assert result.exit_code == 1
        assert "Maximum depth 0 exceeded" in result.output

    def test_bad_config_exits_2(self, account_file: Path, tmp_path: Path) -> None:
        config = tmp_path / "bad.yaml"
        config.write_text("colour: red\n", encoding="utf-8")
        result = runner.invoke(app, ["paths", str(account_file), "-c", str(config)])
        assert result.exit_code == 2


class TestVersionCommand:
    def test_version(self) -> None:
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout
