"""Shared helpers for sitemap validation."""

from .urls import check_url_syntax, expected_url, has_repeated_slashes, normalize_path

__all__ = [
    "check_url_syntax",
    "expected_url",
    "has_repeated_slashes",
    "normalize_path",
]
