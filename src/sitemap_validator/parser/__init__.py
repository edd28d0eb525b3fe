"""Secure sitemap XML parsing."""

from .sitemap import SitemapDocument, SitemapElement, SitemapParseResult, parse_sitemap

__all__ = [
    "SitemapDocument",
    "SitemapElement",
    "SitemapParseResult",
    "parse_sitemap",
]
