"""
Tests for slug derivation and id assignment.
"""

from unittest.mock import patch

from shining_star.utils.slug import slugify, assign_id


class TestSlugify:
    """Tests for slugify"""

    def test_punctuation_collapsed(self):
        assert slugify("Deep Clean & Shine!") == "deep-clean-shine"

    def test_diacritics_stripped(self):
        assert slugify("Limpieza Básica Ñandú") == "limpieza-basica-nandu"

    def test_leading_and_trailing_separators_trimmed(self):
        assert slugify("  --Windows--  ") == "windows"

    def test_max_length(self):
        slug = slugify("word " * 40)
        assert len(slug) <= 80
        assert not slug.endswith('-')

    def test_non_latin_text_gives_empty_slug(self):
        assert slugify("Генеральная уборка") == ""

    def test_empty_input(self):
        assert slugify("") == ""
        assert slugify(None) == ""


class TestAssignId:
    """Tests for assign_id"""

    def test_unique_slug_used_as_is(self):
        assert assign_id("Window Washing", []) == "window-washing"

    def test_collisions_get_numeric_suffix(self):
        existing = ["window-washing", "window-washing-1"]
        assert assign_id("Window Washing", existing) == "window-washing-2"

    def test_timestamp_fallback_for_empty_slug(self):
        with patch('shining_star.utils.slug.time.time', return_value=1700000000.5):
            assert assign_id("!!!", []) == "1700000000500"

    def test_timestamp_fallback_is_deduplicated(self):
        with patch('shining_star.utils.slug.time.time', return_value=1700000000.5):
            assert assign_id("Уборка", ["1700000000500"]) == "1700000000500-1"
