"""Diagnostic and report models produced by the validation engine."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class IssueKind(str, Enum):
    """Whether an issue makes its scope invalid."""
    ERROR = "error"
    WARNING = "warning"


class IssueCategory(str, Enum):
    """Closed set of diagnostic categories."""
    PARSE_ERROR = "parse_error"
    STRUCTURE_ERROR = "structure_error"
    STRUCTURE_WARNING = "structure_warning"
    EMPTY_SITEMAP = "empty_sitemap"
    URL_FORMAT_ERROR = "url_format_error"
    URL_STYLE_WARNING = "url_style_warning"
    ALTERNATE_LINK_ERROR = "alternate_link_error"
    ALTERNATE_SET_ERROR = "alternate_set_error"
    INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True)
class Issue:
    """A single diagnostic found during validation."""
    kind: IssueKind
    category: IssueCategory
    message: str
    entry_index: int | None = None
    link_index: int | None = None
    url: str | None = None
    details: str | None = None

    @property
    def is_error(self) -> bool:
        return self.kind == IssueKind.ERROR

    def __str__(self) -> str:
        location = ""
        if self.entry_index is not None:
            location += f" at entry {self.entry_index}"
        if self.link_index is not None:
            location += f" link {self.link_index}"
        if self.url:
            location += f" ({self.url})"
        return f"[{self.kind.value.upper()}] {self.category.value}: {self.message}{location}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, omitting unset context fields."""
        data: dict[str, Any] = {
            "kind": self.kind.value,
            "category": self.category.value,
            "message": self.message,
        }
        optional = {
            "entryIndex": self.entry_index,
            "linkIndex": self.link_index,
            "url": self.url,
            "details": self.details,
        }
        data.update({key: value for key, value in optional.items() if value is not None})
        return data


@dataclass
class LinkResult:
    """Outcome of validating one alternate link.

    Link checks only produce errors. ``hreflang`` and ``href`` are filled in
    as soon as they are read so the set-level checks can reuse them without
    touching the element again.
    """
    index: int = 0
    hreflang: str | None = None
    href: str | None = None
    errors: list[Issue] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def add_error(self, issue: Issue) -> None:
        self.errors.append(issue)

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "valid": self.valid,
            "hreflang": self.hreflang,
            "href": self.href,
            "errors": [issue.to_dict() for issue in self.errors],
        }


@dataclass
class EntryResult:
    """Outcome of validating one <url> entry."""
    index: int = 0
    url: str | None = None
    valid: bool = True
    errors: list[Issue] = field(default_factory=list)
    warnings: list[Issue] = field(default_factory=list)
    link_results: list[LinkResult] = field(default_factory=list)

    def add_issue(self, issue: Issue) -> None:
        if issue.is_error:
            self.errors.append(issue)
            self.valid = False
        else:
            self.warnings.append(issue)

    def extend(self, issues: list[Issue]) -> None:
        for issue in issues:
            self.add_issue(issue)

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "url": self.url,
            "valid": self.valid,
            "errors": [issue.to_dict() for issue in self.errors],
            "warnings": [issue.to_dict() for issue in self.warnings],
            "linkResults": [link.to_dict() for link in self.link_results],
        }


@dataclass
class ValidationReport:
    """Aggregated outcome for a whole sitemap document."""
    document_errors: list[Issue] = field(default_factory=list)
    document_warnings: list[Issue] = field(default_factory=list)
    entry_results: list[EntryResult] = field(default_factory=list)

    @property
    def total_entries(self) -> int:
        return len(self.entry_results)

    @property
    def valid_entries(self) -> int:
        return sum(1 for entry in self.entry_results if entry.valid)

    @property
    def invalid_entries(self) -> int:
        return self.total_entries - self.valid_entries

    @property
    def valid(self) -> bool:
        return self.invalid_entries == 0 and not self.document_errors

    @property
    def errors(self) -> list[Issue]:
        """Document-level errors followed by entry errors in document order."""
        issues = list(self.document_errors)
        for entry in self.entry_results:
            issues.extend(entry.errors)
        return issues

    @property
    def warnings(self) -> list[Issue]:
        issues = list(self.document_warnings)
        for entry in self.entry_results:
            issues.extend(entry.warnings)
        return issues

    @property
    def exit_code(self) -> int:
        """Exit code for CI: 0 = valid, 1 = invalid."""
        return 0 if self.valid else 1

    def add_document_issue(self, issue: Issue) -> None:
        if issue.is_error:
            self.document_errors.append(issue)
        else:
            self.document_warnings.append(issue)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "valid": self.valid,
            "totalEntries": self.total_entries,
            "validEntries": self.valid_entries,
            "invalidEntries": self.invalid_entries,
            "errors": [issue.to_dict() for issue in self.errors],
            "warnings": [issue.to_dict() for issue in self.warnings],
            "entryResults": [entry.to_dict() for entry in self.entry_results],
        }
