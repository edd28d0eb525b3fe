"""Shared fixtures for sitemap-validator tests."""

import pytest

from sitemap_validator.config import ValidatorConfig
from sitemap_validator.validation import ValidationEngine

BASE_URL = "https://www.example.com"
SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
XHTML_NS = "http://www.w3.org/1999/xhtml"


def build_sitemap(*entries: str, xmlns: bool = True, xhtml: bool = True) -> str:
    """Wrap <url> fragments in a <urlset> with the usual declarations."""
    attrs = ""
    if xmlns:
        attrs += f' xmlns="{SITEMAP_NS}"'
    if xhtml:
        attrs += f' xmlns:xhtml="{XHTML_NS}"'
    body = "\n".join(entries)
    return f'<?xml version="1.0" encoding="UTF-8"?>\n<urlset{attrs}>\n{body}\n</urlset>'


def build_entry(loc: str | None, links: list[tuple[str, str]] = (), metadata: bool = True) -> str:
    """Build a <url> fragment; ``links`` are (hreflang, href) pairs."""
    parts = ["<url>"]
    if loc is not None:
        parts.append(f"<loc>{loc}</loc>")
    if metadata:
        parts.append("<lastmod>2024-05-01</lastmod><changefreq>daily</changefreq><priority>0.8</priority>")
    for hreflang, href in links:
        parts.append(f'<xhtml:link rel="alternate" hreflang="{hreflang}" href="{href}"/>')
    parts.append("</url>")
    return "".join(parts)


@pytest.fixture
def config():
    """Validator configuration with the test base URL."""
    return ValidatorConfig(base_url=BASE_URL)


@pytest.fixture
def engine(config):
    """Validation engine bound to the test base URL."""
    return ValidationEngine(config)


@pytest.fixture
def localized_entry():
    """Entry with an en-us alternate and an x-default alternate."""
    return build_entry(
        f"{BASE_URL}/a",
        links=[("en-us", f"{BASE_URL}/en-us/a"), ("x-default", f"{BASE_URL}/a")],
    )


@pytest.fixture
def base_url():
    return BASE_URL


@pytest.fixture
def make_sitemap():
    """Factory for complete sitemap documents."""
    return build_sitemap


@pytest.fixture
def make_entry():
    """Factory for <url> fragments."""
    return build_entry
