"""Tests for path segment sanitization."""

import pytest
from catalog_publish.album_paths.sanitizer import normalize_path, sanitize_segment


class TestSanitizeSegment:
    """Tests for sanitize_segment function."""

    def test_illegal_characters_replaced(self):
        """Test that every illegal character is replaced."""
        assert sanitize_segment('a\\b/c:d*e?f"g<h>i|j') == "a_b_c_d_e_f_g_h_i_j"

    def test_control_characters_replaced(self):
        """Test that ASCII control characters are replaced."""
        assert sanitize_segment("a\tb\nc\x00") == "a_b_c_"

    def test_legal_characters_kept(self):
        """Test that legal characters including Unicode are untouched."""
        assert sanitize_segment("Été 2020 - Côte d'Azur (best)") == "Été 2020 - Côte d'Azur (best)"

    def test_length_preserved(self):
        """Test that a one-character replacement keeps the length."""
        name = "Trips: 2020/2021?"
        assert len(sanitize_segment(name)) == len(name)

    def test_empty_and_none(self):
        """Test that empty input gives an empty string."""
        assert sanitize_segment("") == ""
        assert sanitize_segment(None) == ""

    def test_non_string_stringified(self):
        """Test that numbers are converted to text."""
        assert sanitize_segment(2020) == "2020"
        assert sanitize_segment(1.5) == "1.5"

    def test_custom_replacement(self):
        """Test a custom replacement string."""
        assert sanitize_segment("a/b", replacement="-") == "a-b"

    @pytest.mark.parametrize("name", [
        "plain",
        "a/b\\c",
        'x:"y"<z>',
        "???",
        "tab\there",
        "",
    ])
    def test_idempotent(self, name):
        """Test that sanitizing twice equals sanitizing once."""
        once = sanitize_segment(name)
        assert sanitize_segment(once) == once


class TestNormalizePath:
    """Tests for normalize_path function."""

    def test_none_passes_through(self):
        """Test that None is returned unchanged."""
        assert normalize_path(None) is None

    def test_trims_whitespace(self):
        """Test that surrounding whitespace is removed."""
        assert normalize_path("  a/b  ") == "a/b"

    def test_backslashes_converted(self):
        """Test that backslashes become forward slashes."""
        assert normalize_path("Trips\\2020\\Paris") == "Trips/2020/Paris"

    def test_trailing_slashes_stripped(self):
        """Test that trailing slashes are removed."""
        assert normalize_path("a/b/") == "a/b"
        assert normalize_path("a/b//") == "a/b"

    def test_does_not_sanitize(self):
        """Test that illegal characters in a joined path are kept."""
        assert normalize_path("a:b/c?") == "a:b/c?"

    def test_empty(self):
        """Test that an empty path stays empty."""
        assert normalize_path("") == ""
