"""Validation rules for sitemap documents, entries and alternate links.

Each rule returns diagnostics instead of raising; the engine decides how the
results roll up into entry and document validity.
"""

import logging
from abc import ABC, abstractmethod

from ..config import ValidatorConfig
from ..parser.sitemap import SitemapDocument, SitemapElement
from ..utils.urls import check_url_syntax, has_repeated_slashes
from .locale import X_DEFAULT, LocaleExtractor
from .models import Issue, IssueCategory, IssueKind, LinkResult

logger = logging.getLogger(__name__)

SITEMAP_NAMESPACE_MARKER = "sitemaps.org"
XHTML_NAMESPACE = "http://www.w3.org/1999/xhtml"
ADVISORY_FIELDS = ("lastmod", "changefreq", "priority")


class ValidationRule(ABC):
    """Base class for validation rules."""

    def __init__(self, config: ValidatorConfig):
        self.config = config

    @property
    @abstractmethod
    def name(self) -> str:
        """Rule name for identification."""
        pass

    @property
    def base_url(self) -> str:
        return self.config.base_url


class LocaleAwareRule(ValidationRule):
    """Rule that compares hreflang values with the locale found in URLs."""

    def __init__(self, config: ValidatorConfig, locale_extractor: LocaleExtractor | None = None):
        super().__init__(config)
        self.locale_extractor = locale_extractor or LocaleExtractor()


class DocumentStructureRule(ValidationRule):
    """Validate the <urlset> root and the structural shape of each <url>."""

    @property
    def name(self) -> str:
        return "document_structure"

    def check_document(self, document: SitemapDocument) -> list[Issue]:
        """Document-level checks. A missing root stops the remaining checks."""
        urlset = document.find_urlset()
        if urlset is None:
            return [Issue(
                IssueKind.ERROR,
                IssueCategory.STRUCTURE_ERROR,
                "Missing <urlset> root element",
            )]

        issues = []

        xmlns = document.namespace("")
        if not xmlns or SITEMAP_NAMESPACE_MARKER not in xmlns:
            issues.append(Issue(
                IssueKind.WARNING,
                IssueCategory.STRUCTURE_WARNING,
                "Missing or invalid xmlns attribute in <urlset>",
            ))

        xhtml_ns = document.namespace("xhtml")
        if xhtml_ns != XHTML_NAMESPACE:
            issues.append(Issue(
                IssueKind.WARNING,
                IssueCategory.STRUCTURE_WARNING,
                "Missing or invalid xmlns:xhtml attribute in <urlset>",
            ))

        if not document.entries():
            issues.append(Issue(
                IssueKind.WARNING,
                IssueCategory.EMPTY_SITEMAP,
                "No URLs found in sitemap",
            ))

        return issues

    def check_entry(self, entry: SitemapElement, index: int) -> list[Issue]:
        """Per-entry structural checks; every check fires independently."""
        issues = []

        if entry.find("loc") is None:
            issues.append(Issue(
                IssueKind.ERROR,
                IssueCategory.STRUCTURE_ERROR,
                f"Missing <loc> element in <url> at index {index}",
                entry_index=index,
            ))

        if not entry.find_all("link"):
            issues.append(Issue(
                IssueKind.WARNING,
                IssueCategory.STRUCTURE_WARNING,
                f"No alternate links found in <url> at index {index}",
                entry_index=index,
            ))

        for field_name in ADVISORY_FIELDS:
            if entry.find(field_name) is None:
                issues.append(Issue(
                    IssueKind.WARNING,
                    IssueCategory.STRUCTURE_WARNING,
                    f"Missing <{field_name}> in URL at index {index}",
                    entry_index=index,
                ))

        return issues


class EntryUrlRule(ValidationRule):
    """Validate an entry's <loc> URL against the base URL and parent path."""

    @property
    def name(self) -> str:
        return "entry_url"

    def check(self, url: str, parent_path: str, index: int | None = None) -> list[Issue]:
        """Check ``url``; ``parent_path`` must already be normalized.

        The format checks stop at the first failure; the style checks only run
        on a URL that passed all of them.
        """
        def error(message: str, details: str | None = None) -> list[Issue]:
            return [Issue(
                IssueKind.ERROR,
                IssueCategory.URL_FORMAT_ERROR,
                message,
                entry_index=index,
                url=url,
                details=details,
            )]

        if not url or not url.strip():
            return error("URL is empty")

        if not url.startswith(self.base_url):
            return error(f"URL does not start with {self.base_url}")

        url_path = url[len(self.base_url):].lstrip("/")
        if parent_path and not url_path.startswith(parent_path):
            return error(f"URL path does not start with parent folder path: {parent_path}")

        try:
            check_url_syntax(url)
        except ValueError as e:
            return error(f"Invalid URL format: {e}", details=str(e))

        warnings = []
        if has_repeated_slashes(url):
            warnings.append("URL contains multiple consecutive slashes")
        if url.endswith("/"):
            warnings.append("URL ends with trailing slash")

        return [
            Issue(IssueKind.WARNING, IssueCategory.URL_STYLE_WARNING, message, entry_index=index, url=url)
            for message in warnings
        ]


class AlternateLinkRule(LocaleAwareRule):
    """Validate a single <xhtml:link rel="alternate"> element."""

    @property
    def name(self) -> str:
        return "alternate_link"

    def check(self, link: SitemapElement, link_index: int, entry_index: int | None = None) -> LinkResult:
        result = LinkResult(index=link_index)

        def error(message: str, url: str | None = None) -> None:
            result.add_error(Issue(
                IssueKind.ERROR,
                IssueCategory.ALTERNATE_LINK_ERROR,
                message,
                entry_index=entry_index,
                link_index=link_index,
                url=url,
            ))

        rel = link.get("rel")
        if rel != "alternate":
            error(f'Missing or invalid rel attribute (expected "alternate", got "{rel}")')

        hreflang = link.get("hreflang")
        if not hreflang:
            error("Missing hreflang attribute")
            return result
        result.hreflang = hreflang

        href = link.get("href")
        if not href:
            error("Missing href attribute")
            return result
        result.href = href

        if not href.startswith(self.base_url):
            error(f"Href URL does not start with {self.base_url}", url=href)
            return result

        try:
            check_url_syntax(href)
        except ValueError as e:
            error(f"Invalid href URL format: {e}", url=href)
            return result

        if hreflang != X_DEFAULT:
            locale = self.locale_extractor.extract(href)
            # Links without a locale segment are left to the set-level check
            if locale and locale != hreflang.lower():
                error(
                    f'Hreflang "{hreflang}" does not match locale in href URL (found: {locale})',
                    url=href,
                )

        return result


class AlternateSetRule(LocaleAwareRule):
    """Validate the alternate links of one entry taken together."""

    @property
    def name(self) -> str:
        return "alternate_set"

    def check(self, link_results: list[LinkResult], entry_index: int | None = None) -> list[Issue]:
        hreflang_map: dict[str, str] = {}
        has_x_default = False

        for link in link_results:
            if link.hreflang == X_DEFAULT:
                has_x_default = True
            elif link.hreflang and link.href:
                # Repeated hreflang values: last one wins
                hreflang_map[link.hreflang] = link.href

        issues = []
        if not has_x_default:
            issues.append(Issue(
                IssueKind.ERROR,
                IssueCategory.ALTERNATE_SET_ERROR,
                'Missing alternate link with hreflang="x-default"',
                entry_index=entry_index,
            ))

        for hreflang, href in hreflang_map.items():
            locale = self.locale_extractor.extract(href)
            # Exact match: unlike the per-link check, case differences count
            if locale != hreflang:
                issues.append(Issue(
                    IssueKind.ERROR,
                    IssueCategory.ALTERNATE_SET_ERROR,
                    f'Hreflang "{hreflang}" does not match locale in href "{href}" (expected locale: {locale})',
                    entry_index=entry_index,
                    url=href,
                ))

        return issues
