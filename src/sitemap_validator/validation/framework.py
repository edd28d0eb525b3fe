"""Validation engine orchestrating the sitemap rules.

The engine is a pure function of its configuration and the input document:
it performs no I/O, keeps no state between calls, and never raises on
malformed content. Everything it finds ends up in a ValidationReport.
"""

import logging

from ..config import ValidatorConfig
from ..parser.sitemap import SitemapDocument, SitemapElement, parse_sitemap
from ..utils.urls import normalize_path
from .locale import LocaleExtractor
from .models import EntryResult, Issue, IssueCategory, IssueKind, ValidationReport
from .rules import AlternateLinkRule, AlternateSetRule, DocumentStructureRule, EntryUrlRule

logger = logging.getLogger(__name__)


class ValidationEngine:
    """Runs structure, URL and alternate-link rules over a sitemap."""

    def __init__(self, config: ValidatorConfig | None = None):
        self.config = config or ValidatorConfig()
        locale_extractor = LocaleExtractor()
        self.structure_rule = DocumentStructureRule(self.config)
        self.entry_url_rule = EntryUrlRule(self.config)
        self.link_rule = AlternateLinkRule(self.config, locale_extractor)
        self.link_set_rule = AlternateSetRule(self.config, locale_extractor)

    def validate_content(self, content: str | bytes, parent_path: str | None = None) -> ValidationReport:
        """Parse raw sitemap XML and validate it.

        Args:
            content: Serialized sitemap document
            parent_path: Path fragment every <loc> must start with after the
                base URL; falls back to the configured parent path

        Returns:
            ValidationReport; a parse failure yields a report holding a single
            parse error and no entries
        """
        try:
            parsed = parse_sitemap(content)
        except Exception as e:
            return self._internal_error_report(e)

        if not parsed.success:
            report = ValidationReport()
            report.add_document_issue(Issue(
                IssueKind.ERROR,
                IssueCategory.PARSE_ERROR,
                "Invalid XML format",
                details=parsed.error,
            ))
            logger.info("Sitemap could not be parsed, skipping validation")
            return report

        return self.validate(parsed.document, parent_path)

    def validate(self, document: SitemapDocument, parent_path: str | None = None) -> ValidationReport:
        """Validate a parsed sitemap document."""
        if parent_path is None:
            parent_path = self.config.parent_path
        normalized_parent = normalize_path(parent_path)

        try:
            return self._run(document, normalized_parent)
        except Exception as e:
            return self._internal_error_report(e)

    def _internal_error_report(self, error: Exception) -> ValidationReport:
        logger.error(f"Validation aborted by unexpected error: {error}")
        report = ValidationReport()
        report.add_document_issue(Issue(
            IssueKind.ERROR,
            IssueCategory.INTERNAL_ERROR,
            f"Validation failed: {error}",
            details=type(error).__name__,
        ))
        return report

    def _run(self, document: SitemapDocument, parent_path: str) -> ValidationReport:
        report = ValidationReport()

        logger.info(f"Starting sitemap validation (base URL {self.config.base_url})")

        for issue in self.structure_rule.check_document(document):
            report.add_document_issue(issue)

        if report.document_errors:
            # No recognizable root: nothing to walk
            logger.info("Sitemap has no <urlset> root, skipping entry validation")
            return report

        for index, entry in enumerate(document.entries(), start=1):
            report.entry_results.append(self._validate_entry(entry, index, parent_path))

        logger.info(
            f"Validation completed: {report.valid_entries}/{report.total_entries} entries valid, "
            f"{len(report.errors)} errors, {len(report.warnings)} warnings"
        )
        return report

    def _validate_entry(self, entry: SitemapElement, index: int, parent_path: str) -> EntryResult:
        loc = entry.find("loc")
        url = loc.text.strip() if loc is not None else None
        result = EntryResult(index=index, url=url)

        result.extend(self.structure_rule.check_entry(entry, index))
        if loc is None:
            logger.debug(f"Entry {index} has no <loc>, skipping URL checks")
            return result

        result.extend(self.entry_url_rule.check(url, parent_path, index))

        links = entry.find_all("link")
        for link_index, link in enumerate(links, start=1):
            link_result = self.link_rule.check(link, link_index, entry_index=index)
            result.link_results.append(link_result)
            result.extend(link_result.errors)

        if links:
            result.extend(self.link_set_rule.check(result.link_results, entry_index=index))

        logger.debug(
            f"Entry {index} ({url}): {'valid' if result.valid else 'invalid'}, "
            f"{len(result.errors)} errors, {len(result.warnings)} warnings"
        )
        return result


def validate(
    content: str | bytes,
    parent_path: str | None = None,
    base_url: str | None = None,
) -> ValidationReport:
    """Validate serialized sitemap XML with a one-off engine.

    Args:
        content: Sitemap XML
        parent_path: Optional parent folder path the <loc> paths must start with
        base_url: Base URL every URL must start with (default from ValidatorConfig)
    """
    config = ValidatorConfig(base_url=base_url) if base_url else ValidatorConfig()
    return ValidationEngine(config).validate_content(content, parent_path)
