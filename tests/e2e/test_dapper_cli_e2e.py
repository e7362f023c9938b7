#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/e2e/test_dapper_cli_e2e.py
"""End-to-end tests for the ``python -m dapper`` command.

These tests run the formatter in a subprocess, the way editors and CI
scripts invoke it, and check its streams and exit codes.
"""

import json
import subprocess
import sys

import pytest
from utils import SAMPLE_MARKDOWN, SAMPLE_MARKDOWN_FORMATTED, SAMPLE_YAML, SAMPLE_YAML_FORMATTED, write_tree


@pytest.mark.e2e
@pytest.mark.slow
@pytest.mark.cli
class TestDapperCommand:
    """Test suite for the dapper command."""

    def _run_cli(self, args: list[str], cwd) -> subprocess.CompletedProcess:
        """Run the CLI with the given arguments.

        Parameters
        ----------
        args : list[str]
            Command-line arguments to pass to dapper
        cwd : Path
            Working directory for the command

        Returns
        -------
        subprocess.CompletedProcess
            The result of the CLI execution

        """
        cmd = [sys.executable, "-m", "dapper"] + args
        return subprocess.run(cmd, capture_output=True, text=True, cwd=cwd, encoding="utf-8")

    def test_version(self, tmp_path):
        """Test the version flag."""
        result = self._run_cli(["--version"], tmp_path)

        assert result.returncode == 0
        assert result.stdout.startswith("dapper ")

    def test_help(self, tmp_path):
        """Test that help lists the main options."""
        result = self._run_cli(["--help"], tmp_path)

        assert result.returncode == 0
        assert "--set-exit-if-changed" in result.stdout
        assert "--prose-wrap" in result.stdout

    def test_format_current_directory(self, tmp_path):
        """Test formatting the working directory in place."""
        created = write_tree(tmp_path, {"README.md": SAMPLE_MARKDOWN, "app.yaml": SAMPLE_YAML})

        result = self._run_cli(["--no-config"], tmp_path)

        assert result.returncode == 0
        assert created["README.md"].read_text(encoding="utf-8") == SAMPLE_MARKDOWN_FORMATTED
        assert created["app.yaml"].read_text(encoding="utf-8") == SAMPLE_YAML_FORMATTED
        assert "Formatted 2 files (2 changed) in" in result.stderr

    def test_second_run_changes_nothing(self, tmp_path):
        """Test that a second run leaves formatted files alone."""
        write_tree(tmp_path, {"README.md": SAMPLE_MARKDOWN})
        self._run_cli(["--no-config"], tmp_path)

        result = self._run_cli(["--no-config", "--set-exit-if-changed"], tmp_path)

        assert result.returncode == 0
        assert result.stdout == ""
        assert "Formatted 1 files in" in result.stderr

    def test_set_exit_if_changed(self, tmp_path):
        """Test exit code 1 when formatting would change a file."""
        created = write_tree(tmp_path, {"a.md": "*x*\n"})

        result = self._run_cli([".", "--no-config", "-o", "none", "--set-exit-if-changed"], tmp_path)

        assert result.returncode == 1
        assert created["a.md"].read_text(encoding="utf-8") == "*x*\n"

    def test_show_output(self, tmp_path):
        """Test printing formatted content."""
        write_tree(tmp_path, {"a.yaml": "list: [ 1, 2 ]\n"})

        result = self._run_cli(["a.yaml", "--no-config", "-o", "show"], tmp_path)

        assert result.returncode == 0
        assert result.stdout == "list:\n  - 1\n  - 2\n"

    def test_json_output(self, tmp_path):
        """Test JSON lines output."""
        write_tree(tmp_path, {"a.md": "*x*\n"})

        result = self._run_cli(["a.md", "--no-config", "-o", "json"], tmp_path)

        assert json.loads(result.stdout) == {"path": "a.md", "source": "_x_\n"}

    def test_missing_path(self, tmp_path):
        """Test exit code 1 for a path that does not exist."""
        result = self._run_cli(["missing.md", "--no-config"], tmp_path)

        assert result.returncode == 1
        assert '"missing.md" not found.' in result.stderr

    def test_invalid_config(self, tmp_path):
        """Test exit code 2 for an invalid configuration file."""
        write_tree(tmp_path, {".dapper.toml": "print_width = -5\n", "a.md": "*x*\n"})

        result = self._run_cli(["a.md"], tmp_path)

        assert result.returncode == 2
        assert result.stderr.startswith("Error:")

    def test_invalid_arguments(self, tmp_path):
        """Test exit code 2 for invalid arguments."""
        result = self._run_cli(["--prose-wrap", "sometimes"], tmp_path)

        assert result.returncode == 2
        assert "invalid choice" in result.stderr

    def test_log_file(self, tmp_path):
        """Test that --log-file records the run."""
        write_tree(tmp_path, {"a.md": "*x*\n"})

        result = self._run_cli(["a.md", "--no-config", "--log-level", "INFO", "--log-file", "run.log"], tmp_path)

        assert result.returncode == 0
        assert "Found 1 file(s) to format" in (tmp_path / "run.log").read_text(encoding="utf-8")
