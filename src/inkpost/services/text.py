"""Canonical forms for post tags and titles."""
from __future__ import annotations

from collections.abc import Sequence

from slugify import slugify

from inkpost.core.errors import ValidationError

TAGS_FORMAT_MESSAGE = "tags must be comma-separated strings"


def clean_tag(tag: str) -> str:
    """Trim `tag` and drop a single leading ``#``."""
    tag = tag.strip()
    if tag.startswith("#"):
        tag = tag[1:]
    return tag.strip()


def normalize_tags(raw: str | Sequence[str] | None) -> list[str]:
    """Return the cleaned, ordered tag list for `raw`.

    `raw` may be a comma-separated string or a list of strings. Entries are
    trimmed, lose a single leading ``#``, and are dropped when empty. Order is
    kept and duplicates are not removed.

    Raises:
        ValidationError: If `raw` carries a value but nothing usable remains,
            or a list holds non-string entries.
    """
    if raw is None:
        return []

    if isinstance(raw, str):
        if not raw.strip():
            return []
        parts = raw.split(",")
    else:
        if not raw:
            return []
        if not all(isinstance(item, str) for item in raw):
            raise ValidationError(TAGS_FORMAT_MESSAGE, field="tags")
        parts = list(raw)

    tags = [cleaned for cleaned in (clean_tag(part) for part in parts) if cleaned]
    if not tags:
        raise ValidationError(TAGS_FORMAT_MESSAGE, field="tags")
    return tags


def derive_slug(title: str) -> str:
    """Return the URL-safe slug for a post title.

    Lower-cases, transliterates to ASCII, and collapses every run of
    non-alphanumeric characters into a single hyphen.

    Raises:
        ValidationError: If the title has no letters or digits to build a slug from.
    """
    slug = slugify(title, lowercase=True, separator="-")
    if not slug:
        raise ValidationError("title must contain letters or digits", field="title")
    return slug
