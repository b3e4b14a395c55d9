"""CLI entry point for license-intelligence."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from license_intelligence import __version__
from license_intelligence.analysis.filtering import filter_ignored_packages
from license_intelligence.config import AnalyzerConfig, load_config
from license_intelligence.constants import EXIT_ERROR, EXIT_ISSUES, EXIT_SUCCESS
from license_intelligence.exceptions import (
    ConfigurationError,
    LicenseIntelligenceError,
)
from license_intelligence.models.document import (
    ComplianceDocumentOptions,
    DocumentFormat,
)
from license_intelligence.models.license import LicenseAnalysis, Package, ScanOptions
from license_intelligence.models.risk import ProjectIdentity
from license_intelligence.output.documents import render_document
from license_intelligence.output.terminal import TerminalFormatter
from license_intelligence.scanner import discover_packages, load_package_manifest
from license_intelligence.service import LicenseIntelligenceService

logger = logging.getLogger(__name__)

# Module-level console for consistent output
_console = Console()
# Separate console for error and log output (writes to stderr)
_error_console = Console(stderr=True)

DOCUMENT_FORMAT_CHOICES = ["terminal"] + [f.value for f in DocumentFormat]
REPORT_FORMAT_CHOICES = ["terminal", "json"]


def _configure_logging(level: str) -> None:
    """Send the package's log records to stderr through Rich."""
    package_logger = logging.getLogger("license_intelligence")
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)

    handler = RichHandler(console=_error_console, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    package_logger.addHandler(handler)
    package_logger.setLevel(level.upper())


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default="warning",
    help="Logging verbosity on stderr (default: warning).",
)
def main(log_level: str) -> None:
    """License Intelligence - Detect licenses and assess legal risk.

    Detects the licenses of a set of packages from their metadata and
    license files, checks cross-package compatibility, assesses legal
    risk and renders compliance documents.

    \b
    Examples:
        license-intelligence scan
        license-intelligence scan --format markdown -o NOTICE.md
        license-intelligence compat --manifest packages.yaml
        license-intelligence risk --format json
        license-intelligence policy --config policy.yaml
    """
    _configure_logging(log_level)


def _manifest_option(func: Callable[..., Any]) -> Callable[..., Any]:
    return click.option(
        "--manifest",
        "-m",
        "manifest_path",
        type=click.Path(exists=True, dir_okay=False),
        default=None,
        help="YAML/JSON file listing packages (default: installed packages).",
    )(func)


def _output_option(func: Callable[..., Any]) -> Callable[..., Any]:
    return click.option(
        "--output",
        "-o",
        "output_path",
        type=click.Path(dir_okay=False),
        default=None,
        help="Write report to file instead of stdout.",
    )(func)


def _config_option(func: Callable[..., Any]) -> Callable[..., Any]:
    return click.option(
        "--config",
        "-c",
        "config_path",
        type=click.Path(exists=True, dir_okay=False),
        default=None,
        help="Path to configuration file.",
    )(func)


def _report_format_option(func: Callable[..., Any]) -> Callable[..., Any]:
    return click.option(
        "--format",
        "output_format",
        type=click.Choice(REPORT_FORMAT_CHOICES, case_sensitive=False),
        default="terminal",
        help="Output format (default: terminal).",
    )(func)


@main.command()
@click.option(
    "--format",
    "output_format",
    type=click.Choice(DOCUMENT_FORMAT_CHOICES, case_sensitive=False),
    default="terminal",
    help="Output format for scan results (default: terminal).",
)
@click.option(
    "--group-by-license",
    is_flag=True,
    default=False,
    help="Group packages by primary license in documents.",
)
@click.option(
    "--include-license-texts",
    is_flag=True,
    default=False,
    help="Embed full license texts in documents when available.",
)
@click.option(
    "--include-copyright",
    is_flag=True,
    default=False,
    help="Include copyright statements in documents.",
)
@click.option("--header", default=None, help="Custom document header.")
@click.option("--footer", default=None, help="Custom document footer.")
@click.option(
    "--min-confidence",
    type=click.FloatRange(0.0, 1.0),
    default=0.0,
    show_default=True,
    help="Discard license file matches below this confidence.",
)
@_manifest_option
@_output_option
@_config_option
def scan(
    output_format: str,
    group_by_license: bool,
    include_license_texts: bool,
    include_copyright: bool,
    header: Optional[str],
    footer: Optional[str],
    min_confidence: float,
    manifest_path: Optional[str],
    output_path: Optional[str],
    config_path: Optional[str],
) -> None:
    """Detect the licenses of packages and render a compliance report.

    \b
    Examples:
        license-intelligence scan
        license-intelligence scan --format json
        license-intelligence scan --format html --group-by-license -o report.html
        license-intelligence scan --manifest packages.yaml --include-copyright
    """
    format_value = output_format.lower()

    try:
        config = load_config(config_path)
        packages, ignored_names = _load_packages(manifest_path, config)
        service = _create_service(format_value, output_path)

        analyses = asyncio.run(
            service.analyze_licenses(
                packages, ScanOptions(confidence_threshold=min_confidence)
            )
        )

        if format_value == "terminal" and not output_path:
            TerminalFormatter(console=_console).format_analyses(
                analyses, total_packages=len(packages), ignored_names=ignored_names
            )
        else:
            # Terminal format to file uses markdown instead
            document_format = (
                DocumentFormat.MARKDOWN.value
                if format_value == "terminal"
                else format_value
            )
            options = ComplianceDocumentOptions(
                format=document_format,
                group_by_license=group_by_license,
                include_license_texts=include_license_texts,
                include_copyright_notices=include_copyright,
                custom_header=header,
                custom_footer=footer,
            )
            _emit(render_document(analyses, options), output_path)

        if _has_scan_issues(packages, analyses):
            sys.exit(EXIT_ISSUES)
        sys.exit(EXIT_SUCCESS)

    except LicenseIntelligenceError as e:
        _display_error(e, format_value)
        sys.exit(EXIT_ERROR)


@main.command()
@_report_format_option
@_manifest_option
@_output_option
@_config_option
def compat(
    output_format: str,
    manifest_path: Optional[str],
    output_path: Optional[str],
    config_path: Optional[str],
) -> None:
    """Check license compatibility across packages.

    Exits with code 1 when incompatible licenses are combined.

    \b
    Examples:
        license-intelligence compat
        license-intelligence compat --format json -o compat.json
    """
    format_value = output_format.lower()

    try:
        config = load_config(config_path)
        packages, _ = _load_packages(manifest_path, config)
        service = _create_service(format_value, output_path)

        report = asyncio.run(service.generate_compatibility_report(packages))

        if format_value == "json" or output_path:
            _emit(report.model_dump_json(indent=2), output_path)
        else:
            TerminalFormatter(console=_console).format_compatibility_report(report)

        if report.has_conflicts:
            sys.exit(EXIT_ISSUES)
        sys.exit(EXIT_SUCCESS)

    except LicenseIntelligenceError as e:
        _display_error(e, format_value)
        sys.exit(EXIT_ERROR)


@main.command()
@_report_format_option
@_manifest_option
@_output_option
@_config_option
def risk(
    output_format: str,
    manifest_path: Optional[str],
    output_path: Optional[str],
    config_path: Optional[str],
) -> None:
    """Assess the legal risk of a project's licenses.

    Exits with code 1 when a legal review is required.

    \b
    Examples:
        license-intelligence risk
        license-intelligence risk --format json
    """
    format_value = output_format.lower()

    try:
        config = load_config(config_path)
        packages, _ = _load_packages(manifest_path, config)
        service = _create_service(format_value, output_path)

        project = (
            ProjectIdentity(name=config.project_name) if config.project_name else None
        )
        report = asyncio.run(service.assess_legal_risk(packages, project=project))

        if format_value == "json" or output_path:
            _emit(report.model_dump_json(indent=2), output_path)
        else:
            TerminalFormatter(console=_console).format_risk_report(report)

        if report.legal_review.required:
            sys.exit(EXIT_ISSUES)
        sys.exit(EXIT_SUCCESS)

    except LicenseIntelligenceError as e:
        _display_error(e, format_value)
        sys.exit(EXIT_ERROR)


@main.command()
@_report_format_option
@_manifest_option
@_output_option
@_config_option
def policy(
    output_format: str,
    manifest_path: Optional[str],
    output_path: Optional[str],
    config_path: Optional[str],
) -> None:
    """Validate packages against the license policy in the config file.

    The policy is read from the ``policy`` key of the configuration file.
    Exits with code 1 on any violation.

    \b
    Examples:
        license-intelligence policy
        license-intelligence policy --config policy.yaml --format json
    """
    format_value = output_format.lower()

    try:
        config = load_config(config_path)
        if config.policy is None:
            raise ConfigurationError(
                "No license policy configured: add a 'policy' section to "
                "the configuration file"
            )
        packages, _ = _load_packages(manifest_path, config)
        service = _create_service(format_value, output_path)

        result = asyncio.run(service.validate_policy(packages, config.policy))

        if format_value == "json" or output_path:
            _emit(result.model_dump_json(indent=2), output_path)
        else:
            TerminalFormatter(console=_console).format_policy_result(
                result, config.policy.name
            )

        if not result.compliant:
            sys.exit(EXIT_ISSUES)
        sys.exit(EXIT_SUCCESS)

    except LicenseIntelligenceError as e:
        _display_error(e, format_value)
        sys.exit(EXIT_ERROR)


def _load_packages(
    manifest_path: Optional[str], config: AnalyzerConfig
) -> tuple[list[Package], list[str]]:
    """Load packages from a manifest or the environment, minus ignored ones.

    Returns:
        Tuple of (packages to analyze, names of ignored packages).
    """
    if manifest_path is not None:
        packages = load_package_manifest(Path(manifest_path))
    else:
        packages = discover_packages()

    result = filter_ignored_packages(packages, config)
    if result.ignored:
        logger.info(
            "Ignoring %d package(s): %s",
            len(result.ignored),
            ", ".join(result.ignored_names),
        )
    return result.packages, result.ignored_names


def _create_service(
    format_value: str, output_path: Optional[str]
) -> LicenseIntelligenceService:
    """Service with a progress bar only when rendering to the terminal."""
    interactive = format_value == "terminal" and not output_path
    return LicenseIntelligenceService(console=_console if interactive else None)


def _has_scan_issues(packages: list[Package], analyses: list[LicenseAnalysis]) -> bool:
    """Failed detections, missing licenses or conflicting licenses."""
    if len(analyses) < len(packages):
        return True
    return any(
        not analysis.has_license
        or any(issue.type == "conflicting_licenses" for issue in analysis.issues)
        for analysis in analyses
    )


def _emit(content: str, output_path: Optional[str]) -> None:
    if output_path:
        _write_output_to_file(content, output_path)
    else:
        click.echo(content)


def _write_output_to_file(content: str, path: str) -> None:
    """Write report content to file.

    Args:
        content: The report content to write.
        path: The file path to write to.

    Raises:
        ConfigurationError: If file cannot be written.
    """
    file_path = Path(path)

    try:
        if file_path.exists():
            _console.print(
                f"[yellow]Warning: Overwriting existing file: {path}[/yellow]"
            )

        file_path.write_text(content, encoding="utf-8")
        # User read/write, group/other read
        file_path.chmod(0o644)
    except OSError as e:
        raise ConfigurationError(f"Cannot write to file '{path}': {e}") from e

    _console.print(f"[green]Report written to {path}[/green]")


def _display_error(error: LicenseIntelligenceError, format_type: str) -> None:
    """Display error message to user.

    All errors are written to stderr for consistent CI/CD behavior.

    Args:
        error: The exception that occurred.
        format_type: Output format type for styling.
    """
    error_type = type(error).__name__
    message = f"Error: {error_type}: {error}"

    if format_type == "terminal":
        _error_console.print(f"[red bold]{escape(message)}[/red bold]")
    else:
        click.echo(message, err=True)


if __name__ == "__main__":
    main()
