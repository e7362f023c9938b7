#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/cli/test_output.py
"""Unit tests for CLI summary output."""

import io

import pytest

from dapper.cli.output import SummaryRenderer, format_summary_line, should_use_rich_output


class _FakeTTY(io.StringIO):
    def isatty(self):
        return True


@pytest.mark.unit
class TestSummaryLine:
    """Tests for the plain summary line."""

    def test_with_changes(self):
        """Test the changed count."""
        assert format_summary_line(3, 1, 0.25) == "Formatted 3 files (1 changed) in 0.25 seconds."

    def test_without_changes(self):
        """Test that a zero changed count is left out."""
        assert format_summary_line(3, 0, 0.25) == "Formatted 3 files in 0.25 seconds."

    def test_elapsed_rounding(self):
        """Test two decimal places."""
        assert format_summary_line(1, 1, 1.0) == "Formatted 1 files (1 changed) in 1.00 seconds."


@pytest.mark.unit
class TestShouldUseRichOutput:
    """Tests for deciding on rich output."""

    def test_not_requested(self):
        """Test that rich is off unless requested."""
        assert not should_use_rich_output(False, _FakeTTY())

    def test_not_a_terminal(self):
        """Test that rich needs a terminal."""
        assert not should_use_rich_output(True, io.StringIO())

    def test_terminal(self):
        """Test rich on a terminal."""
        assert should_use_rich_output(True, _FakeTTY())

    def test_closed_stream(self):
        """Test that closed streams fall back to plain output."""
        stream = io.StringIO()
        stream.close()
        assert not should_use_rich_output(True, stream)


@pytest.mark.unit
class TestSummaryRenderer:
    """Tests for SummaryRenderer."""

    def test_plain(self):
        """Test the plain summary line."""
        stream = io.StringIO()
        SummaryRenderer(use_rich=False, stream=stream).render_run_summary(total=2, changed=1, failed=0, elapsed=0.5)
        assert stream.getvalue() == "Formatted 2 files (1 changed) in 0.50 seconds.\n"

    def test_rich_table(self):
        """Test the rich summary table."""
        stream = io.StringIO()
        SummaryRenderer(use_rich=True, stream=stream).render_run_summary(total=4, changed=1, failed=1, elapsed=0.5)
        output = stream.getvalue()
        assert "Formatting Summary" in output
        assert "Changed" in output
        assert "Done in 0.50 seconds." in output
