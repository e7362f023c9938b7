#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/parsers/test_front_matter.py
"""Unit tests for front matter extraction and reattachment."""

import pytest

from dapper.parsers.front_matter import extract_front_matter, with_front_matter


@pytest.mark.unit
class TestExtractFrontMatter:
    """Tests for extract_front_matter."""

    def test_basic_front_matter(self):
        """Test that the block between delimiters is split off."""
        result = extract_front_matter("---\ntitle: T\n---\n\n# H")
        assert result.has_front_matter
        assert result.front_matter == "title: T"
        assert result.content == "# H"

    def test_content_directly_after_delimiter(self):
        """Test that content without a separating blank line is kept intact."""
        result = extract_front_matter("---\na: 1\n---\n# H\n")
        assert result.front_matter == "a: 1"
        assert result.content == "# H\n"

    def test_multiline_front_matter_kept_verbatim(self):
        """Test that the front matter text is not normalized."""
        result = extract_front_matter("---\ntitle:   Spaced\ntags: [a,b]\n---\nBody")
        assert result.front_matter == "title:   Spaced\ntags: [a,b]"

    def test_empty_front_matter(self):
        """Test that two adjacent delimiters give empty front matter."""
        result = extract_front_matter("---\n---\nbody")
        assert result.has_front_matter
        assert result.front_matter == ""
        assert result.content == "body"

    def test_no_front_matter(self):
        """Test documents that do not start with a delimiter."""
        text = "# Title\n\n---\n\nMore"
        result = extract_front_matter(text)
        assert not result.has_front_matter
        assert result.front_matter is None
        assert result.content == text

    def test_unclosed_front_matter(self):
        """Test that an opening delimiter without a closing one is content."""
        text = "---\ntitle: T\n\n# H"
        result = extract_front_matter(text)
        assert result.front_matter is None
        assert result.content == text


@pytest.mark.unit
class TestWithFrontMatter:
    """Tests for with_front_matter."""

    def test_none_returns_content(self):
        """Test that content passes through when there is no front matter."""
        assert with_front_matter(None, "# H\n") == "# H\n"

    def test_reattaches_with_blank_line(self):
        """Test that one blank line separates front matter and content."""
        assert with_front_matter("a: 1", "# H\n") == "---\na: 1\n---\n\n# H\n"

    def test_empty_content(self):
        """Test front matter followed by nothing."""
        assert with_front_matter("a: 1", "") == "---\na: 1\n---\n"

    def test_empty_front_matter(self):
        """Test that empty front matter leaves the content unchanged."""
        assert with_front_matter("", "") == ""
        assert with_front_matter("", "# H\n") == "# H\n"
