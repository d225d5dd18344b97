# src/inkpost/services/__init__.py
"""Service layer implementing the blog's mutation protocols."""

from .text import clean_tag, derive_slug, normalize_tags

__all__ = ["clean_tag", "derive_slug", "normalize_tags"]
