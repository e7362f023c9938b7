#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/cli/test_cli_main.py
"""Unit tests for argument parsing and the CLI entry point."""

import argparse
import io

import pytest
from utils import write_tree

from dapper.cli import create_parser, main, resolve_options
from dapper.cli.builder import non_negative_int, positive_int
from dapper.options import FormatOptions


@pytest.mark.unit
class TestArgumentTypes:
    """Tests for the integer argument types."""

    def test_positive_int(self):
        """Test accepted and rejected values."""
        assert positive_int("3") == 3
        with pytest.raises(argparse.ArgumentTypeError):
            positive_int("0")
        with pytest.raises(argparse.ArgumentTypeError):
            positive_int("many")

    def test_non_negative_int(self):
        """Test that zero is accepted."""
        assert non_negative_int("0") == 0
        with pytest.raises(argparse.ArgumentTypeError):
            non_negative_int("-1")


@pytest.mark.unit
@pytest.mark.cli
class TestCreateParser:
    """Tests for the argument parser."""

    def test_defaults(self):
        """Test default argument values."""
        args = create_parser().parse_args([])
        assert args.paths == ["."]
        assert args.output == "write"
        assert args.parallel == 1
        assert not args.set_exit_if_changed
        assert args.print_width is None
        assert args.prose_wrap is None

    def test_parallel_without_value(self):
        """Test that a bare --parallel means one worker per CPU."""
        assert create_parser().parse_args(["--parallel"]).parallel == 0
        assert create_parser().parse_args(["-p", "4"]).parallel == 4

    def test_format_flags(self):
        """Test formatting option flags."""
        args = create_parser().parse_args(
            ["docs", "--print-width", "100", "--tab-width", "4", "--prose-wrap", "always", "--ul-style", "plus"]
        )
        assert args.paths == ["docs"]
        assert (args.print_width, args.tab_width, args.prose_wrap, args.ul_style) == (100, 4, "always", "plus")

    @pytest.mark.parametrize(
        "argv",
        [["--print-width", "0"], ["--prose-wrap", "sometimes"], ["--output", "stdout"], ["--ul-style", "circle"]],
    )
    def test_invalid_arguments(self, argv, capsys):
        """Test that invalid arguments exit with status 2."""
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(argv)
        assert exc_info.value.code == 2

    def test_version(self, capsys):
        """Test the version flag."""
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.startswith("dapper ")


@pytest.mark.unit
@pytest.mark.cli
class TestResolveOptions:
    """Tests for combining config and flags."""

    def test_no_config_uses_defaults(self):
        """Test --no-config."""
        args = create_parser().parse_args(["--no-config"])
        assert resolve_options(args) == FormatOptions()

    def test_flags_override_config(self, tmp_path):
        """Test that flags win over the config file."""
        config = tmp_path / "style.yaml"
        config.write_text("print_width: 60\ntab_width: 4\n", encoding="utf-8")
        args = create_parser().parse_args(["--config", str(config), "--print-width", "100"])
        assert resolve_options(args) == FormatOptions(print_width=100, tab_width=4)


@pytest.mark.unit
@pytest.mark.cli
class TestMain:
    """Tests for the main entry point."""

    def test_write_mode(self, tmp_path, capsys):
        """Test that files are rewritten and reported."""
        created = write_tree(tmp_path, {"a.md": "*x*\n", "b.md": "_y_\n"})
        stdout = io.StringIO()

        exit_code = main([str(tmp_path), "--no-config"], stdout=stdout)

        assert exit_code == 0
        assert created["a.md"].read_text(encoding="utf-8") == "_x_\n"
        assert stdout.getvalue() == f"Formatted {created['a.md']}\n"
        assert "Formatted 2 files (1 changed) in" in capsys.readouterr().err

    def test_set_exit_if_changed(self, tmp_path):
        """Test the changed exit code."""
        write_tree(tmp_path, {"a.md": "*x*\n"})
        assert main([str(tmp_path), "--no-config", "-o", "none", "--set-exit-if-changed"], stdout=io.StringIO()) == 1

    def test_set_exit_if_changed_clean(self, tmp_path):
        """Test that clean files exit 0 with --set-exit-if-changed."""
        write_tree(tmp_path, {"a.md": "_x_\n"})
        assert main([str(tmp_path), "--no-config", "-o", "none", "--set-exit-if-changed"], stdout=io.StringIO()) == 0

    def test_show_mode_has_no_summary(self, tmp_path, capsys):
        """Test that the summary is only printed when writing."""
        created = write_tree(tmp_path, {"a.yaml": "a:   1\n"})
        stdout = io.StringIO()

        assert main([str(created["a.yaml"]), "--no-config", "-o", "show"], stdout=stdout) == 0

        assert stdout.getvalue() == "a: 1\n"
        assert "Formatted" not in capsys.readouterr().err

    def test_missing_path(self, tmp_path, capsys):
        """Test that a missing path exits 1."""
        assert main([str(tmp_path / "missing.md"), "--no-config", "-o", "none"], stdout=io.StringIO()) == 1
        assert "not found" in capsys.readouterr().err

    def test_bad_config(self, tmp_path, capsys):
        """Test that configuration errors exit 2."""
        config = tmp_path / "style.yaml"
        config.write_text("print_width: 0\n", encoding="utf-8")

        assert main([str(tmp_path), "--config", str(config)], stdout=io.StringIO()) == 2
        assert "Error:" in capsys.readouterr().err

    def test_flag_applied(self, tmp_path):
        """Test that formatting flags reach the formatter."""
        created = write_tree(tmp_path, {"a.md": "- a\n"})
        stdout = io.StringIO()
        main([str(created["a.md"]), "--no-config", "-o", "show", "--ul-style", "asterisk"], stdout=stdout)
        assert stdout.getvalue() == "* a\n"
