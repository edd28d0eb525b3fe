"""Rule engine for sitemap validation.

Walks a parsed sitemap and classifies every deviation as an error or a
warning. Nothing here performs I/O; the CLI is responsible for reading files
and rendering reports.
"""

from .framework import ValidationEngine, validate
from .locale import X_DEFAULT, LocaleExtractor, extract_locale
from .models import EntryResult, Issue, IssueCategory, IssueKind, LinkResult, ValidationReport
from .rules import (
    AlternateLinkRule,
    AlternateSetRule,
    DocumentStructureRule,
    EntryUrlRule,
    ValidationRule,
)

__all__ = [
    "ValidationEngine",
    "validate",
    "LocaleExtractor",
    "extract_locale",
    "X_DEFAULT",
    "Issue",
    "IssueKind",
    "IssueCategory",
    "LinkResult",
    "EntryResult",
    "ValidationReport",
    "ValidationRule",
    "DocumentStructureRule",
    "EntryUrlRule",
    "AlternateLinkRule",
    "AlternateSetRule",
]
