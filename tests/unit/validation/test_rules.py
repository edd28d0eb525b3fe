"""Tests for the individual validation rules."""

import xml.etree.ElementTree as ET

import pytest

from sitemap_validator.parser import SitemapElement, parse_sitemap
from sitemap_validator.validation.locale import LocaleExtractor
from sitemap_validator.validation.models import IssueCategory, IssueKind, LinkResult
from sitemap_validator.validation.rules import (
    AlternateLinkRule,
    AlternateSetRule,
    DocumentStructureRule,
    EntryUrlRule,
)


def link_element(**attributes) -> SitemapElement:
    """Build a bare <link> element with the given attributes."""
    element = ET.Element("link")
    for name, value in attributes.items():
        element.set(name, value)
    return SitemapElement(element)


def link_result(hreflang, href, index=1) -> LinkResult:
    return LinkResult(index=index, hreflang=hreflang, href=href)


class TestDocumentStructureRule:
    """Test DocumentStructureRule."""

    def test_well_formed_document(self, config, make_sitemap, localized_entry):
        document = parse_sitemap(make_sitemap(localized_entry)).document
        rule = DocumentStructureRule(config)

        assert rule.check_document(document) == []

    def test_nested_urlset_is_found(self, config):
        content = (
            '<wrapper><urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9" '
            'xmlns:xhtml="http://www.w3.org/1999/xhtml">'
            "<url><loc>https://www.example.com/a</loc></url></urlset></wrapper>"
        )
        document = parse_sitemap(content).document
        issues = DocumentStructureRule(config).check_document(document)

        assert issues == []

    def test_wrapper_declarations_do_not_count(self, config):
        content = (
            '<wrapper xmlns:xhtml="http://www.w3.org/1999/xhtml">'
            '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">'
            "<url><loc>https://www.example.com/a</loc></url></urlset></wrapper>"
        )
        document = parse_sitemap(content).document
        issues = DocumentStructureRule(config).check_document(document)

        assert [issue.message for issue in issues] == ["Missing or invalid xmlns:xhtml attribute in <urlset>"]

    def test_entry_checks_are_independent(self, config):
        entry = SitemapElement(ET.fromstring("<url><priority>0.5</priority></url>"))
        issues = DocumentStructureRule(config).check_entry(entry, 3)

        assert [issue.kind for issue in issues] == [
            IssueKind.ERROR,
            IssueKind.WARNING,
            IssueKind.WARNING,
            IssueKind.WARNING,
        ]
        assert issues[0].message == "Missing <loc> element in <url> at index 3"
        assert all(issue.entry_index == 3 for issue in issues)
        assert "priority" not in " ".join(issue.message for issue in issues)


class TestEntryUrlRule:
    """Test EntryUrlRule."""

    @pytest.fixture
    def rule(self, config):
        return EntryUrlRule(config)

    def test_valid_url(self, rule, base_url):
        assert rule.check(f"{base_url}/en-us/hotel", "") == []

    @pytest.mark.parametrize("url", ["", "   "])
    def test_empty_url(self, rule, url):
        issues = rule.check(url, "")

        assert len(issues) == 1
        assert issues[0].message == "URL is empty"
        assert issues[0].category == IssueCategory.URL_FORMAT_ERROR

    def test_wrong_prefix_stops_further_checks(self, rule):
        issues = rule.check("http://other.com//a/", "en-us")

        assert len(issues) == 1
        assert issues[0].message == "URL does not start with https://www.example.com"

    def test_parent_path(self, rule, base_url):
        assert rule.check(f"{base_url}/en-us/hotel/bali", "en-us/hotel") == []

        issues = rule.check(f"{base_url}/id-id/hotel/bali", "en-us/hotel", index=4)
        assert len(issues) == 1
        assert issues[0].entry_index == 4
        assert "en-us/hotel" in issues[0].message

    def test_invalid_syntax_carries_parse_message(self, rule, base_url):
        issues = rule.check(f"{base_url}:notaport/a", "")

        assert len(issues) == 1
        assert issues[0].message.startswith("Invalid URL format:")
        assert issues[0].details

    def test_style_warnings(self, rule, base_url):
        issues = rule.check(f"{base_url}/en-us//hotel/", "")

        assert [issue.kind for issue in issues] == [IssueKind.WARNING, IssueKind.WARNING]
        assert [issue.message for issue in issues] == [
            "URL contains multiple consecutive slashes",
            "URL ends with trailing slash",
        ]
        assert all(issue.category == IssueCategory.URL_STYLE_WARNING for issue in issues)


class TestAlternateLinkRule:
    """Test AlternateLinkRule."""

    @pytest.fixture
    def rule(self, config):
        return AlternateLinkRule(config)

    def test_valid_link(self, rule, base_url):
        result = rule.check(link_element(rel="alternate", hreflang="en-us", href=f"{base_url}/en-us/a"), 1)

        assert result.valid
        assert result.hreflang == "en-us"
        assert result.href == f"{base_url}/en-us/a"

    def test_bad_rel_keeps_checking(self, rule, base_url):
        result = rule.check(link_element(rel="canonical", hreflang="en-us", href=f"{base_url}/fr-fr/a"), 2)

        assert not result.valid
        assert len(result.errors) == 2
        assert 'got "canonical"' in result.errors[0].message
        assert result.errors[0].link_index == 2

    def test_missing_hreflang_stops(self, rule, base_url):
        result = rule.check(link_element(rel="alternate", href=f"{base_url}/en-us/a"), 1)

        assert [e.message for e in result.errors] == ["Missing hreflang attribute"]
        assert result.hreflang is None
        assert result.href is None

    def test_missing_href_stops(self, rule):
        result = rule.check(link_element(rel="alternate", hreflang="en-us"), 1)

        assert [e.message for e in result.errors] == ["Missing href attribute"]
        assert result.hreflang == "en-us"

    def test_href_with_wrong_prefix(self, rule):
        result = rule.check(link_element(rel="alternate", hreflang="en-us", href="https://other.com/en-us/a"), 1)

        assert len(result.errors) == 1
        assert result.errors[0].message == "Href URL does not start with https://www.example.com"
        assert result.href == "https://other.com/en-us/a"

    def test_locale_comparison_ignores_case(self, rule, config, base_url):
        result = rule.check(link_element(rel="alternate", hreflang="EN-US", href=f"{base_url}/en-US/a"), 1)

        assert result.valid
        assert result.hreflang == "EN-US"

        # The set-level check is exact, so the same link still fails there
        default = link_result("x-default", f"{base_url}/a", index=2)
        issues = AlternateSetRule(config).check([result, default], entry_index=1)
        assert [issue.category for issue in issues] == [IssueCategory.ALTERNATE_SET_ERROR]

    def test_result_dict_has_no_warnings(self, rule, base_url):
        data = rule.check(link_element(rel="alternate", hreflang="en-us", href=f"{base_url}/fr-fr/a"), 2).to_dict()

        assert set(data) == {"index", "valid", "hreflang", "href", "errors"}
        assert data["valid"] is False
        assert data["errors"][0]["linkIndex"] == 2

    def test_locale_mismatch(self, rule, base_url):
        result = rule.check(link_element(rel="alternate", hreflang="en-us", href=f"{base_url}/fr-fr/a"), 1)

        assert len(result.errors) == 1
        assert result.errors[0].category == IssueCategory.ALTERNATE_LINK_ERROR
        assert '"en-us"' in result.errors[0].message
        assert "fr-fr" in result.errors[0].message

    def test_x_default_skips_locale_check(self, rule, base_url):
        result = rule.check(link_element(rel="alternate", hreflang="x-default", href=f"{base_url}/fr-fr/a"), 1)

        assert result.valid

    def test_href_without_locale_passes_link_check(self, rule, base_url):
        result = rule.check(link_element(rel="alternate", hreflang="en-us", href=f"{base_url}/hotel"), 1)

        assert result.valid


class TestAlternateSetRule:
    """Test AlternateSetRule."""

    @pytest.fixture
    def rule(self, config):
        return AlternateSetRule(config)

    def test_consistent_set(self, rule, base_url):
        links = [link_result("en-us", f"{base_url}/en-us/a"), link_result("x-default", f"{base_url}/a")]

        assert rule.check(links, entry_index=1) == []

    def test_missing_default_reported_once(self, rule, base_url):
        links = [
            link_result("en-us", f"{base_url}/en-us/a"),
            link_result("id-id", f"{base_url}/id-id/a"),
            link_result("th-th", f"{base_url}/th-th/a"),
        ]
        issues = rule.check(links, entry_index=5)

        assert len(issues) == 1
        assert issues[0].category == IssueCategory.ALTERNATE_SET_ERROR
        assert issues[0].entry_index == 5

    def test_href_without_locale_is_a_mismatch(self, rule, base_url):
        links = [link_result("en-us", f"{base_url}/hotel"), link_result("x-default", f"{base_url}/a")]
        issues = rule.check(links)

        assert len(issues) == 1
        assert "expected locale: None" in issues[0].message

    def test_locale_comparison_is_case_sensitive(self, rule, base_url):
        links = [link_result("EN-US", f"{base_url}/en-us/a"), link_result("x-default", f"{base_url}/a")]
        issues = rule.check(links, entry_index=1)

        assert len(issues) == 1
        assert issues[0].category == IssueCategory.ALTERNATE_SET_ERROR
        assert '"EN-US"' in issues[0].message
        assert "expected locale: en-us" in issues[0].message

    def test_rules_share_the_locale_extractor(self, config):
        extractor = LocaleExtractor()

        assert AlternateLinkRule(config, extractor).locale_extractor is extractor
        assert AlternateSetRule(config, extractor).locale_extractor is extractor
        assert not hasattr(EntryUrlRule(config), "locale_extractor")

    def test_last_duplicate_hreflang_wins(self, rule, base_url):
        links = [
            link_result("en-us", f"{base_url}/fr-fr/a"),
            link_result("en-us", f"{base_url}/en-us/a"),
            link_result("x-default", f"{base_url}/a"),
        ]

        assert rule.check(links) == []

    def test_links_without_href_are_ignored(self, rule):
        links = [link_result("en-us", None), link_result("x-default", None)]

        assert rule.check(links) == []
