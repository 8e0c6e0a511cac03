"""Tests for the tagsweep command line."""
import json
import os

from typer.testing import CliRunner

from tagsweep.cli import app

runner = CliRunner()


def test_default_run(sample_tree):
    result = runner.invoke(app, ["--path", str(sample_tree), "--no-color"])

    assert result.exit_code == 0, result.output
    assert "TODO\n  - refactor\tb.go:1\n" in result.output
    assert "BUG\n  - null deref\ta.go:3\n" in result.output


def test_scans_current_directory_by_default(sample_tree, monkeypatch):
    monkeypatch.chdir(sample_tree)
    result = runner.invoke(app, ["--no-color"])

    assert result.exit_code == 0, result.output
    assert "b.go:1" in result.output


def test_empty_path_means_current_directory(sample_tree, monkeypatch):
    monkeypatch.chdir(sample_tree)
    result = runner.invoke(app, ["--path", "", "--no-color"])

    assert result.exit_code == 0, result.output
    assert "a.go:3" in result.output


def test_config_overlay(sample_tree, tmp_path_factory):
    config_file = tmp_path_factory.mktemp("cfg") / "tagsweep.json"
    config_file.write_text(json.dumps({
        "keywords": [{"text": "BUG", "color": "red", "priority": 1}],
    }))

    result = runner.invoke(
        app, ["--path", str(sample_tree), "--config", str(config_file), "--no-color"],
    )

    assert result.exit_code == 0, result.output
    assert "BUG" in result.output
    assert "TODO" not in result.output


def test_config_exclusions(sample_tree, tmp_path_factory):
    config_file = tmp_path_factory.mktemp("cfg") / "tagsweep.yaml"
    config_file.write_text(f"excluded:\n  - '{sample_tree}/a.*'\n")

    result = runner.invoke(
        app, ["--path", str(sample_tree), "--config", str(config_file), "--no-color"],
    )

    assert result.exit_code == 0, result.output
    assert "a.go" not in result.output
    assert "b.go:1" in result.output


def test_json_output(sample_tree):
    result = runner.invoke(app, ["--path", str(sample_tree), "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["TODO"] == [{"instruction": " refactor", "filename": "b.go", "row": 1}]


def test_indent_output(sample_tree):
    result = runner.invoke(app, ["--path", str(sample_tree), "--indent", "--no-color"])

    assert result.exit_code == 0, result.output
    assert "\t" not in result.output
    assert "null deref" in result.output


def test_missing_root_exits_nonzero(tmp_path):
    result = runner.invoke(app, ["--path", str(tmp_path / "nope")])

    assert result.exit_code == 1
    assert "error:" in result.output
    assert "TODO" not in result.output


def test_unreadable_config_exits_nonzero(sample_tree, tmp_path):
    result = runner.invoke(
        app, ["--path", str(sample_tree), "--config", str(tmp_path / "missing.json")],
    )

    assert result.exit_code == 1
    assert "Cannot read config" in result.output


def test_bad_pattern_exits_nonzero(sample_tree, tmp_path_factory):
    config_file = tmp_path_factory.mktemp("cfg") / "c.json"
    config_file.write_text('{"excluded": ["[oops"]}')

    result = runner.invoke(
        app, ["--path", str(sample_tree), "--config", str(config_file)],
    )

    assert result.exit_code == 1
    assert "bad exclusion pattern" in result.output


def test_config_path_used_without_flag(sample_tree, tmp_path_factory):
    config_file = tmp_path_factory.mktemp("cfg") / "tagsweep.yaml"
    config_file.write_text(f"path: '{sample_tree}'\n")

    result = runner.invoke(app, ["--config", str(config_file), "--no-color"])

    assert result.exit_code == 0, result.output
    assert "a.go:3" in result.output


def test_empty_config_means_no_overlay(sample_tree):
    result = runner.invoke(app, ["--path", str(sample_tree), "--config", "", "--no-color"])

    assert result.exit_code == 0, result.output
    assert "TODO\n  - refactor\tb.go:1\n" in result.output
    assert "BUG\n  - null deref\ta.go:3\n" in result.output


def test_undecodable_file_name_does_not_crash(tmp_path):
    raw_path = os.fsencode(tmp_path) + b"/bad\xff.go"
    with open(raw_path, "wb") as f:
        f.write(b"// TODO: x\n")

    result = runner.invoke(app, ["--path", str(tmp_path), "--no-color"])

    assert result.exit_code == 0, result.output
    assert "bad\ufffd.go:1" in result.output
