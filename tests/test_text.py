# tests/test_text.py
"""Unit tests for tag and slug normalization."""

import pytest

from inkpost.core.errors import ValidationError
from inkpost.services.text import derive_slug, normalize_tags


class TestNormalizeTags:
    """Tag cleaning rules."""

    def test_comma_separated_string(self):
        assert normalize_tags("#A, b , ,#C") == ["A", "b", "C"]

    def test_list_input_keeps_order_and_duplicates(self):
        assert normalize_tags([" #news", "tech", "news", "#news"]) == ["news", "tech", "news", "news"]

    def test_only_one_leading_hash_is_stripped(self):
        assert normalize_tags("##double") == ["#double"]

    def test_hash_followed_by_space(self):
        assert normalize_tags("# spaced") == ["spaced"]

    @pytest.mark.parametrize("raw", [None, "", "   ", []])
    def test_empty_input_gives_no_tags(self, raw):
        assert normalize_tags(raw) == []

    @pytest.mark.parametrize("raw", [", ,", "#", [" ", "#"]])
    def test_non_empty_input_without_tags_is_rejected(self, raw):
        with pytest.raises(ValidationError, match="comma-separated strings") as exc_info:
            normalize_tags(raw)
        assert exc_info.value.field == "tags"

    def test_non_string_entries_are_rejected(self):
        with pytest.raises(ValidationError):
            normalize_tags(["ok", 3])  # type: ignore[list-item]


class TestDeriveSlug:
    """Slug derivation from titles."""

    def test_basic_title(self):
        assert derive_slug("Hello World Example") == "hello-world-example"

    def test_punctuation_collapses_to_single_separator(self):
        assert derive_slug("  FastAPI -- & SQLAlchemy!!  ") == "fastapi-sqlalchemy"

    def test_transliterates_to_ascii(self):
        slug = derive_slug("Привет мир Café")
        assert slug == "privet-mir-cafe"
        assert slug.isascii()

    def test_title_without_letters_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            derive_slug("!!! ??? ***")
        assert exc_info.value.field == "title"
