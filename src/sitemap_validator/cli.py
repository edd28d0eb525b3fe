"""CLI interface for sitemap-validator using Typer framework."""

import json as jsonlib
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from sitemap_validator import __description__, __version__
from sitemap_validator.config import ReportFormat, ValidatorConfig, load_config
from sitemap_validator.utils.urls import expected_url
from sitemap_validator.validation import Issue, ValidationEngine, ValidationReport

app = typer.Typer(
    name="sitemap-validator",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()
err_console = Console(stderr=True)

LOG_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def setup_logging(level: str) -> None:
    """Route library logging through rich on stderr."""
    logging.basicConfig(
        level=LOG_LEVELS.get(level, logging.WARNING),
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"sitemap-validator version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """sitemap-validator - Rule-based validation for XML sitemaps."""


def _issue_location(issue: Issue) -> str:
    location = ""
    if issue.entry_index is not None:
        location += f"entry {issue.entry_index}"
    if issue.link_index is not None:
        location += f" link {issue.link_index}"
    if issue.url:
        location += f" {issue.url}"
    return location.strip()


def _print_markdown(report: ValidationReport) -> None:
    console.print("# Sitemap Validation Report", markup=False)
    console.print(f"**Status:** {'valid' if report.valid else 'invalid'}", markup=False)
    console.print(f"**Entries:** {report.valid_entries}/{report.total_entries} valid", markup=False)
    console.print()

    for title, issues in (("Errors", report.errors), ("Warnings", report.warnings)):
        if issues:
            console.print(f"## {title}", markup=False)
            for issue in issues:
                location = _issue_location(issue)
                suffix = f" ({location})" if location else ""
                console.print(f"- **{issue.category.value}** {issue.message}{suffix}", markup=False)
            console.print()


def _print_table(report: ValidationReport) -> None:
    status_color = "green" if report.valid else "red"
    status = "VALID" if report.valid else "INVALID"
    console.print(f"[{status_color}]Sitemap Status: {status}[/{status_color}]")

    summary_table = Table()
    summary_table.add_column("Metric", style="cyan")
    summary_table.add_column("Count", style="white", justify="right")
    summary_table.add_row("Total Entries", str(report.total_entries))
    summary_table.add_row("Valid Entries", str(report.valid_entries))
    summary_table.add_row("Invalid Entries", str(report.invalid_entries))
    summary_table.add_row("Errors", str(len(report.errors)))
    summary_table.add_row("Warnings", str(len(report.warnings)))
    console.print(summary_table)

    issues = report.errors + report.warnings
    if not issues:
        console.print("\n[green]No issues found![/green]")
        return

    console.print("\n[blue]Issues Found:[/blue]")
    issues_table = Table()
    issues_table.add_column("Kind", style="white")
    issues_table.add_column("Category", style="cyan")
    issues_table.add_column("Message", style="white")
    issues_table.add_column("Location", style="dim")

    for issue in issues:
        kind_color = "red" if issue.is_error else "yellow"
        issues_table.add_row(
            f"[{kind_color}]{issue.kind.value.upper()}[/{kind_color}]",
            issue.category.value,
            escape(issue.message),
            escape(_issue_location(issue)),
        )

    console.print(issues_table)


@app.command("validate")
def validate_command(
    path: Annotated[
        Path,
        typer.Argument(help="Path to the sitemap XML file")
    ],
    parent_path: Annotated[
        Optional[str],
        typer.Option("--parent-path", "-p", help="Parent folder path every <loc> must start with")
    ] = None,
    base_url: Annotated[
        Optional[str],
        typer.Option("--base-url", "-b", help="Base URL every URL must start with")
    ] = None,
    format: Annotated[
        Optional[str],
        typer.Option("--format", "-f", help="Output format: table, json, markdown (default: table)")
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .sitemap-validator.json)")
    ] = None,
) -> None:
    """Validate a sitemap file and report errors and warnings."""
    try:
        app_config = load_config(config)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    setup_logging(app_config.logging.level)

    output_format = format or app_config.output.format
    valid_formats = [f.value for f in ReportFormat]
    if output_format not in valid_formats:
        console.print(f"[red]Error:[/red] Invalid format '{output_format}'. Must be one of: {', '.join(valid_formats)}")
        raise typer.Exit(1)

    try:
        validator_config = ValidatorConfig(
            base_url=base_url or app_config.validator.base_url,
            parent_path=parent_path if parent_path is not None else app_config.validator.parent_path,
        )
    except ValidationError as e:
        console.print(f"[red]Error:[/red] Invalid base URL: {escape(str(e))}")
        raise typer.Exit(1)

    try:
        content = path.read_bytes()
    except OSError as e:
        console.print(f"[red]Error:[/red] Cannot read {escape(str(path))}: {escape(str(e))}")
        raise typer.Exit(1)

    report = ValidationEngine(validator_config).validate_content(content)

    if output_format == ReportFormat.JSON.value:
        typer.echo(jsonlib.dumps(report.to_dict(), indent=2))
    elif output_format == ReportFormat.MARKDOWN.value:
        _print_markdown(report)
    else:
        _print_table(report)

    raise typer.Exit(report.exit_code)


@app.command("expected-url")
def expected_url_command(
    parent_path: Annotated[
        str,
        typer.Argument(help="Parent folder path, e.g. en-us/hotel")
    ],
    additional_path: Annotated[
        str,
        typer.Argument(help="Optional path below the parent folder")
    ] = "",
    base_url: Annotated[
        Optional[str],
        typer.Option("--base-url", "-b", help="Base URL (default from configuration)")
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path")
    ] = None,
) -> None:
    """Print the URL an entry is expected to have under a parent path."""
    try:
        app_config = load_config(config)
        validator_config = ValidatorConfig(base_url=base_url or app_config.validator.base_url)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    typer.echo(expected_url(validator_config.base_url, parent_path, additional_path))


if __name__ == "__main__":
    app()
