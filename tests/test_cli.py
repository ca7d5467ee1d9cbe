"""Tests for the craftlog-lewitt command line."""

import json

import pytest
from PIL import Image
from typer.testing import CliRunner

from craftlog_lewitt import __version__
from craftlog_lewitt.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "home")
    monkeypatch.chdir(tmp_path)


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout


class TestRender:
    def test_svg(self, log_file, tmp_path):
        output = tmp_path / "out.svg"
        result = runner.invoke(app, ["render", str(log_file), "-o", str(output), "--seed", "42"])
        assert result.exit_code == 0, result.stdout
        svg = output.read_text()
        assert svg.startswith('<svg xmlns="http://www.w3.org/2000/svg" width="1512" height="2150"')
        assert svg.count("<ellipse") == 14

    def test_png_custom_size(self, log_file, tmp_path):
        output = tmp_path / "out.png"
        result = runner.invoke(
            app,
            ["render", str(log_file), "-o", str(output), "--width", "300", "--height", "200", "--seed", "1"],
        )
        assert result.exit_code == 0, result.stdout
        with Image.open(output) as image:
            assert image.size == (300, 200)

    def test_standalone_mode(self, log_file, tmp_path):
        output = tmp_path / "out.svg"
        result = runner.invoke(app, ["render", str(log_file), "-o", str(output), "--seed", "42", "--mode", "standalone"])
        assert result.exit_code == 0, result.stdout
        assert output.read_text().count("<ellipse") == 14

    def test_unknown_mode(self, log_file, tmp_path):
        result = runner.invoke(app, ["render", str(log_file), "-o", str(tmp_path / "x.svg"), "--mode", "spiral"])
        assert result.exit_code == 2

    def test_unsupported_extension(self, log_file, tmp_path):
        result = runner.invoke(app, ["render", str(log_file), "-o", str(tmp_path / "x.gif")])
        assert result.exit_code == 2

    def test_bad_paper(self, log_file, tmp_path):
        result = runner.invoke(app, ["render", str(log_file), "-o", str(tmp_path / "x.svg"), "--paper", "A4"])
        assert result.exit_code == 1
        assert "Error" in result.stdout

    def test_bad_order(self, log_file, tmp_path):
        result = runner.invoke(app, ["render", str(log_file), "-o", str(tmp_path / "x.svg"), "--order", "sideways"])
        assert result.exit_code == 1

    def test_missing_log(self, tmp_path):
        result = runner.invoke(app, ["render", str(tmp_path / "missing.jsonl")])
        assert result.exit_code != 0


class TestReports:
    def test_summary_stdout(self, log_file):
        result = runner.invoke(app, ["summary", str(log_file)])
        assert result.exit_code == 0, result.stdout
        data = json.loads(result.stdout)
        assert data["session_id"] == "s1"
        assert data["total_events"] == 8

    def test_summary_file(self, log_file, tmp_path):
        output = tmp_path / "summary.json"
        result = runner.invoke(app, ["summary", str(log_file), "-o", str(output)])
        assert result.exit_code == 0
        assert json.loads(output.read_text())["counts"]["by_event"]["edit"] == 5

    def test_instructions(self, log_file):
        result = runner.invoke(app, ["instructions", str(log_file), "--seed", "42"])
        assert result.exit_code == 0, result.stdout
        assert result.stdout.startswith("WALL DRAWING (CRAFTLOG)")
        assert "Seed: 42" in result.stdout
        assert "Generated:" in result.stdout


class TestTiles:
    def test_small_layout(self, log_file, tmp_path):
        output = tmp_path / "tiles.png"
        result = runner.invoke(
            app,
            [
                "tiles", str(log_file), "-o", str(output),
                "--tile", "B6", "--cols", "1", "--rows", "1", "--portrait", "--density", "1", "--seed", "5",
            ],
        )
        assert result.exit_code == 0, result.stdout
        with Image.open(output) as image:
            assert image.size == (1512, 2150)

    def test_bad_tile_paper(self, log_file, tmp_path):
        result = runner.invoke(app, ["tiles", str(log_file), "-o", str(tmp_path / "t.png"), "--tile", "Z9"])
        assert result.exit_code == 1


class TestMerge:
    def test_merge_directory(self, tmp_path):
        directory = tmp_path / ".craftlog"
        directory.mkdir()
        (directory / "a.jsonl").write_text(
            '{"ts": 1000, "event": "session_start", "session_id": "a"}\n'
            '{"ts": 4000, "event": "edit", "session_id": "a"}\n'
        )
        result = runner.invoke(app, ["merge", str(directory)])
        assert result.exit_code == 0, result.stdout
        lines = (directory / "merged.jsonl").read_text().splitlines()
        assert [json.loads(line)["elapsed_ms"] for line in lines] == [0, 3000]

    def test_dry_run(self, tmp_path):
        directory = tmp_path / ".craftlog"
        directory.mkdir()
        (directory / "a.jsonl").write_text('{"ts": 1, "event": "edit", "session_id": "a"}\n')
        result = runner.invoke(app, ["merge", str(directory), "--dry-run"])
        assert result.exit_code == 0
        assert "Dry run" in result.stdout
        assert not (directory / "merged.jsonl").exists()

    def test_no_files(self, tmp_path):
        result = runner.invoke(app, ["merge", str(tmp_path)])
        assert result.exit_code == 0
        assert "No JSONL files found" in result.stdout

    def test_missing_directory(self, tmp_path):
        result = runner.invoke(app, ["merge", str(tmp_path / "nope")])
        assert result.exit_code == 1
