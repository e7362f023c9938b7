#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/cli/test_ignore.py
"""Unit tests for gitignore-style ignore rules."""

from pathlib import Path

import pytest

from dapper.cli.ignore import IgnorePattern, IgnoreRules

ROOT = Path("/project")


def _rules(*lines):
    return IgnoreRules.from_lines(ROOT, lines)


@pytest.mark.unit
class TestIgnorePatternParse:
    """Tests for parsing ignore file lines."""

    @pytest.mark.parametrize("line", ["", "   ", "# comment", "!", "/"])
    def test_skipped_lines(self, line):
        """Test blank lines, comments and empty patterns."""
        assert IgnorePattern.parse(line) is None

    def test_plain_pattern(self):
        """Test a basename pattern."""
        assert IgnorePattern.parse("*.md") == IgnorePattern("*.md")

    def test_negated(self):
        """Test the re-include prefix."""
        pattern = IgnorePattern.parse("!README.md")
        assert pattern.negated
        assert pattern.pattern == "README.md"

    def test_directory_only(self):
        """Test a trailing slash."""
        pattern = IgnorePattern.parse("build/")
        assert pattern.directory_only
        assert not pattern.anchored
        assert pattern.pattern == "build"

    def test_anchored(self):
        """Test patterns with a slash are matched against the full path."""
        assert IgnorePattern.parse("docs/*.md").anchored
        pattern = IgnorePattern.parse("/CHANGELOG.md")
        assert pattern.anchored
        assert pattern.pattern == "CHANGELOG.md"


@pytest.mark.unit
class TestIgnorePatternMatches:
    """Tests for matching a single pattern."""

    def test_basename_match_at_any_depth(self):
        """Test unanchored patterns against nested paths."""
        pattern = IgnorePattern.parse("*.gen.md")
        assert pattern.matches("a/b/c.gen.md", is_dir=False)

    def test_anchored_match(self):
        """Test anchored patterns only match from the root."""
        pattern = IgnorePattern.parse("docs/*.md")
        assert pattern.matches("docs/a.md", is_dir=False)
        assert not pattern.matches("other/docs/a.md", is_dir=False)

    def test_directory_only_skips_files(self):
        """Test that directory patterns ignore files with the same name."""
        pattern = IgnorePattern.parse("build/")
        assert pattern.matches("build", is_dir=True)
        assert not pattern.matches("build", is_dir=False)


@pytest.mark.unit
class TestIgnoreRules:
    """Tests for rule sets."""

    def test_default_lock_file_pattern(self):
        """Test that lock files are ignored by default."""
        rules = _rules()
        assert rules.is_ignored(ROOT / "pubspec-lock.yaml", is_dir=False)
        assert not rules.is_ignored(ROOT / "pubspec.yaml", is_dir=False)

    def test_last_match_wins(self):
        """Test re-including a file."""
        rules = _rules("*.md", "!README.md")
        assert rules.is_ignored(ROOT / "docs" / "guide.md", is_dir=False)
        assert not rules.is_ignored(ROOT / "README.md", is_dir=False)

    def test_default_pattern_can_be_negated(self):
        """Test that ignore files can override the defaults."""
        rules = _rules("!keep-lock.yaml")
        assert not rules.is_ignored(ROOT / "keep-lock.yaml", is_dir=False)

    def test_ignored_parent_directory(self):
        """Test that files under an ignored directory are ignored."""
        rules = _rules("build/")
        assert rules.is_ignored(ROOT / "build" / "out" / "a.md", is_dir=False)
        assert not rules.is_ignored(ROOT / "src" / "a.md", is_dir=False)

    def test_builtin_ignored_directories(self):
        """Test that VCS and dependency directories are always skipped."""
        rules = _rules()
        assert rules.is_ignored(ROOT / ".git", is_dir=True)
        assert rules.is_ignored(ROOT / "node_modules" / "pkg" / "README.md", is_dir=False)

    def test_path_outside_root(self):
        """Test that patterns do not apply outside the root."""
        rules = _rules("*.md")
        assert not rules.is_ignored(Path("/elsewhere/a.md"), is_dir=False)

    def test_root_itself(self):
        """Test that the root is never ignored."""
        assert not _rules("*").is_ignored(ROOT, is_dir=True)

    def test_load_from_directory(self, tmp_path):
        """Test reading .gitignore and .dapperignore."""
        (tmp_path / ".gitignore").write_text("generated/\n", encoding="utf-8")
        (tmp_path / ".dapperignore").write_text("# docs are hand-formatted\nCHANGELOG.md\n", encoding="utf-8")

        rules = IgnoreRules.load(tmp_path)

        assert rules.is_ignored(tmp_path / "generated" / "a.md", is_dir=False)
        assert rules.is_ignored(tmp_path / "CHANGELOG.md", is_dir=False)
        assert not rules.is_ignored(tmp_path / "README.md", is_dir=False)

    def test_dapperignore_overrides_gitignore(self, tmp_path):
        """Test that .dapperignore rules come after .gitignore rules."""
        (tmp_path / ".gitignore").write_text("*.yaml\n", encoding="utf-8")
        (tmp_path / ".dapperignore").write_text("!config.yaml\n", encoding="utf-8")

        rules = IgnoreRules.load(tmp_path)

        assert not rules.is_ignored(tmp_path / "config.yaml", is_dir=False)
        assert rules.is_ignored(tmp_path / "other.yaml", is_dir=False)

    def test_load_without_ignore_files(self, tmp_path):
        """Test that only the defaults apply when no files exist."""
        rules = IgnoreRules.load(tmp_path)
        assert [pattern.pattern for pattern in rules.patterns] == ["*-lock.yaml"]
