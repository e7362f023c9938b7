#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/cli/test_processors.py
"""Unit tests for file collection and per-file processing."""

import io
import json
from pathlib import Path

import pytest
from utils import write_tree

from dapper.cli.ignore import IgnoreRules
from dapper.cli.processors import (
    FileOutcome,
    ProcessResult,
    RunSummary,
    collect_files,
    emit_outcome,
    format_path,
    is_formattable,
    process_file,
    process_paths,
)
from dapper.options import FormatOptions


@pytest.mark.unit
class TestProcessResult:
    """Tests for merging results."""

    @pytest.mark.parametrize(
        "first,second,expected",
        [
            (ProcessResult.UNCHANGED, ProcessResult.UNCHANGED, ProcessResult.UNCHANGED),
            (ProcessResult.UNCHANGED, ProcessResult.CHANGED, ProcessResult.CHANGED),
            (ProcessResult.CHANGED, ProcessResult.ERROR, ProcessResult.ERROR),
            (ProcessResult.ERROR, ProcessResult.UNCHANGED, ProcessResult.ERROR),
        ],
    )
    def test_merge(self, first, second, expected):
        """Test that the more severe result wins."""
        assert first.merge(second) is expected

    def test_run_summary_counts(self):
        """Test file counting."""
        summary = RunSummary()
        summary.add(ProcessResult.CHANGED)
        summary.add(ProcessResult.UNCHANGED)
        summary.add(ProcessResult.ERROR)
        assert (summary.total_files, summary.changed_files, summary.failed_files) == (3, 1, 1)
        assert summary.result is ProcessResult.ERROR

    def test_uncounted_result(self):
        """Test that uncounted results only affect the merged result."""
        summary = RunSummary()
        summary.add(ProcessResult.ERROR, counted=False)
        assert summary.total_files == 0
        assert summary.result is ProcessResult.ERROR


@pytest.mark.unit
class TestCollectFiles:
    """Tests for expanding paths into files."""

    @pytest.mark.parametrize("name,expected", [("a.md", True), ("a.MARKDOWN", True), ("b.yml", True), ("c.txt", False)])
    def test_is_formattable(self, name, expected):
        """Test the extension check."""
        assert is_formattable(Path(name)) is expected

    def test_directory_walk(self, tmp_path):
        """Test recursive collection with ignore rules."""
        write_tree(
            tmp_path,
            {
                "a.md": "# A\n",
                "b.yaml": "b: 1\n",
                "c.txt": "text\n",
                "sub/d.yml": "d: 1\n",
                "node_modules/x.md": "# X\n",
                "build/e.md": "# E\n",
                "pubspec-lock.yaml": "packages: {}\n",
                ".gitignore": "build/\n",
            },
        )

        files = collect_files([tmp_path])

        assert files == [tmp_path / "a.md", tmp_path / "b.yaml", tmp_path / "sub" / "d.yml"]

    def test_explicit_file_bypasses_ignore_rules(self, tmp_path):
        """Test that a named file is formatted even if ignored."""
        created = write_tree(tmp_path, {"build/e.md": "# E\n", ".gitignore": "build/\n"})
        assert collect_files([created["build/e.md"]]) == [created["build/e.md"]]

    def test_explicit_unsupported_file_skipped(self, tmp_path):
        """Test that a named file with another extension is skipped."""
        created = write_tree(tmp_path, {"notes.txt": "x\n"})
        assert collect_files([created["notes.txt"]]) == []

    def test_duplicates_removed(self, tmp_path):
        """Test that overlapping arguments give each file once."""
        created = write_tree(tmp_path, {"a.md": "# A\n"})
        assert collect_files([tmp_path, created["a.md"]]) == [created["a.md"]]

    def test_custom_rules(self, tmp_path):
        """Test passing rules explicitly."""
        write_tree(tmp_path, {"a.md": "# A\n", "b.md": "# B\n"})
        rules = IgnoreRules.from_lines(tmp_path, ["b.md"])
        assert collect_files([tmp_path], ignore_rules=rules) == [tmp_path / "a.md"]


@pytest.mark.unit
class TestFormatPath:
    """Tests for format_path."""

    def test_changed(self, tmp_path):
        """Test a file that needs formatting."""
        created = write_tree(tmp_path, {"a.md": "*x*\n"})
        outcome = format_path(created["a.md"], FormatOptions())
        assert outcome == FileOutcome(path=created["a.md"], result=ProcessResult.CHANGED, formatted="_x_\n")

    def test_unchanged(self, tmp_path):
        """Test a file that is already formatted."""
        created = write_tree(tmp_path, {"a.yaml": "a: 1\n"})
        assert format_path(created["a.yaml"], FormatOptions()).result is ProcessResult.UNCHANGED

    def test_error_captured(self, tmp_path):
        """Test that errors become ERROR outcomes instead of exceptions."""
        path = tmp_path / "bad.md"
        path.write_bytes(b"\xff\xfe\xfa")
        outcome = format_path(path, FormatOptions())
        assert outcome.result is ProcessResult.ERROR
        assert outcome.formatted is None
        assert "Could not read" in outcome.error


@pytest.mark.unit
class TestEmitOutcome:
    """Tests for the output modes."""

    def _outcome(self, tmp_path, result=ProcessResult.CHANGED):
        path = tmp_path / "a.md"
        path.write_text("*x*\n", encoding="utf-8")
        return FileOutcome(path=path, result=result, formatted="_x_\n")

    def test_write_changed(self, tmp_path):
        """Test that write mode rewrites the file and reports it."""
        outcome = self._outcome(tmp_path)
        stdout = io.StringIO()

        assert emit_outcome(outcome, "write", stdout) is ProcessResult.CHANGED
        assert outcome.path.read_text(encoding="utf-8") == "_x_\n"
        assert stdout.getvalue() == f"Formatted {outcome.path}\n"

    def test_write_unchanged_is_silent(self, tmp_path):
        """Test that unchanged files are not rewritten."""
        outcome = self._outcome(tmp_path, ProcessResult.UNCHANGED)
        stdout = io.StringIO()

        emit_outcome(outcome, "write", stdout)

        assert outcome.path.read_text(encoding="utf-8") == "*x*\n"
        assert stdout.getvalue() == ""

    def test_show(self, tmp_path):
        """Test printing the formatted content."""
        outcome = self._outcome(tmp_path)
        stdout = io.StringIO()
        emit_outcome(outcome, "show", stdout)
        assert stdout.getvalue() == "_x_\n"
        assert outcome.path.read_text(encoding="utf-8") == "*x*\n"

    def test_json(self, tmp_path):
        """Test one JSON object per file."""
        outcome = self._outcome(tmp_path)
        stdout = io.StringIO()
        emit_outcome(outcome, "json", stdout)
        assert json.loads(stdout.getvalue()) == {"path": str(outcome.path), "source": "_x_\n"}

    def test_none(self, tmp_path):
        """Test that none mode produces no output."""
        outcome = self._outcome(tmp_path)
        stdout = io.StringIO()
        assert emit_outcome(outcome, "none", stdout) is ProcessResult.CHANGED
        assert stdout.getvalue() == ""

    def test_error_outcome(self, tmp_path):
        """Test that error outcomes are reported as errors."""
        outcome = FileOutcome(path=tmp_path / "a.md", result=ProcessResult.ERROR, error="boom")
        assert emit_outcome(outcome, "write", io.StringIO()) is ProcessResult.ERROR

    def test_process_file(self, tmp_path):
        """Test formatting and emitting in one step."""
        created = write_tree(tmp_path, {"a.md": "*x*\n"})
        stdout = io.StringIO()
        assert process_file(created["a.md"], FormatOptions(), "show", stdout) is ProcessResult.CHANGED
        assert stdout.getvalue() == "_x_\n"


@pytest.mark.unit
class TestProcessPaths:
    """Tests for process_paths."""

    def test_summary(self, tmp_path):
        """Test the merged result and counts."""
        write_tree(tmp_path, {"a.md": "*x*\n", "b.yaml": "b: 1\n"})
        summary = process_paths([tmp_path], FormatOptions(), "none", io.StringIO())
        assert summary.result is ProcessResult.CHANGED
        assert (summary.total_files, summary.changed_files, summary.failed_files) == (2, 1, 0)

    def test_missing_path(self, tmp_path):
        """Test that a missing path makes the run an error without counting a file."""
        summary = process_paths([tmp_path / "missing"], FormatOptions(), "none", io.StringIO())
        assert summary.result is ProcessResult.ERROR
        assert summary.total_files == 0

    def test_output_in_sorted_order(self, tmp_path):
        """Test that files are emitted in path order."""
        write_tree(tmp_path, {"b.md": "*b*\n", "a.md": "*a*\n"})
        stdout = io.StringIO()
        process_paths([tmp_path], FormatOptions(), "show", stdout)
        assert stdout.getvalue() == "_a_\n_b_\n"
