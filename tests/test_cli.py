"""
Tests for CLI commands — build, publish, convert, and global options.
"""

import json
import os
from pathlib import Path

import pytest
from click.testing import CliRunner

from inkwell.main import cli


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "static blog generator" in result.output
        for command in ("build", "preview", "publish", "convert"):
            assert command in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestBuildCommand:
    def test_build(self, site_root: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["build", str(site_root)])
        assert result.exit_code == 0, result.output
        assert "Built 1 articles, copied 1 files" in result.output
        assert (site_root / "public" / "posts" / "hello.html").is_file()

    def test_build_json(self, site_root: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["build", str(site_root), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["articles"] == 1
        assert data["site_root"] == str(site_root.resolve())

    def test_build_without_config(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["build", str(tmp_path)])
        assert result.exit_code == 1
        assert "please specify a valid path" in result.output

    def test_build_quiet(self, site_root: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["-q", "build", str(site_root)])
        assert result.exit_code == 0
        assert result.output == ""


@pytest.mark.skipif(os.name == "nt", reason="POSIX shell commands")
class TestPublishCommand:
    def test_publish_streams_output(self, site_root: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["publish", str(site_root)])
        assert result.exit_code == 0, result.output
        assert "published" in result.output
        assert "✅ Published" in result.output

    def test_publish_json(self, site_root: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["publish", str(site_root), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["command"] == "echo published"
        assert data["returncode"] == 0
        assert data["output"] == ["published"]

    def test_publish_failure(self, site_root: Path):
        config = site_root / "config.yml"
        config.write_text(config.read_text().replace("echo published", "exit 4"))
        runner = CliRunner()
        result = runner.invoke(cli, ["publish", str(site_root)])
        assert result.exit_code == 1
        assert "exit code 4" in result.output


class TestConvertCommand:
    def test_convert(self, tmp_path: Path):
        legacy = tmp_path / "_posts"
        legacy.mkdir()
        (legacy / "a.md").write_text("---\ntitle: A\ndate: 2015-01-02\n---\nbody\n")
        (legacy / "b.html").write_text("title: B\n---\nbody\n")
        target = tmp_path / "site"
        target.mkdir()

        runner = CliRunner()
        result = runner.invoke(cli, ["convert", str(legacy), str(target)])

        assert result.exit_code == 0, result.output
        assert "Convert finish, total 2 articles" in result.output
        assert (target / "source" / "a.md").is_file()
        assert (target / "source" / "b.html.md").is_file()

    def test_convert_shows_progress(self, tmp_path: Path):
        legacy = tmp_path / "_posts"
        legacy.mkdir()
        (legacy / "a.md").write_text("title: A\n---\nbody\n")

        runner = CliRunner()
        result = runner.invoke(cli, ["convert", str(legacy), str(tmp_path)])

        assert result.exit_code == 0
        assert "Converting a.md" in result.stderr

    def test_convert_quiet_hides_progress(self, tmp_path: Path):
        legacy = tmp_path / "_posts"
        legacy.mkdir()
        (legacy / "a.md").write_text("title: A\n---\nbody\n")

        runner = CliRunner()
        result = runner.invoke(cli, ["-q", "convert", str(legacy), str(tmp_path)])

        assert result.exit_code == 0
        assert "Converting" not in result.stderr

    def test_convert_default_target(self, tmp_path: Path, monkeypatch):
        legacy = tmp_path / "_posts"
        legacy.mkdir()
        (legacy / "a.md").write_text("title: A\n---\nbody\n")
        monkeypatch.chdir(tmp_path)

        runner = CliRunner()
        result = runner.invoke(cli, ["convert", str(legacy)])

        assert result.exit_code == 0
        assert (tmp_path / "source" / "a.md").is_file()

    def test_convert_reports_skipped(self, tmp_path: Path):
        legacy = tmp_path / "_posts"
        legacy.mkdir()
        (legacy / "plain.md").write_text("no header")

        runner = CliRunner()
        result = runner.invoke(cli, ["convert", str(legacy), str(tmp_path)])

        assert result.exit_code == 0
        assert "plain.md" in result.output
        assert "total 0 articles" in result.output

    def test_convert_invalid_path(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["convert", str(tmp_path / "missing"), str(tmp_path)])
        assert result.exit_code == 1
        assert "Please specify valid path" in result.output

    def test_convert_json(self, tmp_path: Path):
        legacy = tmp_path / "_posts"
        legacy.mkdir()
        (legacy / "a.md").write_text("title: A\n---\nbody\n")

        runner = CliRunner()
        result = runner.invoke(cli, ["convert", str(legacy), str(tmp_path), "--json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["count"] == 1
