"""Terminal output formatter using Rich."""
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from license_intelligence.constants import LEGAL_DISCLAIMER_SHORT
from license_intelligence.models.compatibility import CompatibilityReport
from license_intelligence.models.license import LicenseAnalysis, RiskLevel
from license_intelligence.models.policy import PolicyValidationResult
from license_intelligence.models.risk import LegalRiskReport

RISK_COLORS = {
    RiskLevel.VERY_LOW: "green",
    RiskLevel.LOW: "green",
    RiskLevel.MEDIUM: "yellow",
    RiskLevel.HIGH: "red",
    RiskLevel.VERY_HIGH: "bold red",
    RiskLevel.CRITICAL: "bold white on red",
}

SEVERITY_COLORS = {
    "warning": "yellow",
    "error": "red",
    "critical": "bold red",
}


def _risk(level: RiskLevel) -> str:
    color = RISK_COLORS[level]
    return f"[{color}]{level.value.upper()}[/{color}]"


class TerminalFormatter:
    """Display license intelligence results in the terminal using Rich.

    Every view starts with a summary panel and the legal disclaimer,
    followed by detail tables.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize the formatter with a Rich console.

        Args:
            console: Optional Rich Console instance. If not provided,
                a new Console will be created.
        """
        self._console = console if console is not None else Console()

    def format_analyses(
        self,
        analyses: list[LicenseAnalysis],
        total_packages: Optional[int] = None,
        ignored_names: Optional[list[str]] = None,
    ) -> None:
        """Display per-package license analyses.

        Args:
            analyses: Successful analyses.
            total_packages: Packages submitted for analysis. Defaults to the
                number of analyses.
            ignored_names: Packages skipped by configuration.
        """
        total = total_packages if total_packages is not None else len(analyses)
        if total == 0:
            # Still show disclaimer even for empty results
            self._print_disclaimer()
            self._console.print("[yellow]No packages found[/yellow]")
            return

        missing = sum(1 for a in analyses if not a.has_license)
        failed = total - len(analyses)
        issues = sum(len(a.issues) for a in analyses)
        has_problems = missing > 0 or failed > 0

        summary_lines = [
            f"Total Packages: {total}",
            f"Analyzed: {len(analyses)}",
            f"Missing Licenses: {missing}",
            f"Issues: {issues}",
        ]
        if failed:
            summary_lines.append(f"Failed: {failed}")
        if ignored_names:
            names_str = ", ".join(ignored_names[:3])
            if len(ignored_names) > 3:
                names_str += f", ... (+{len(ignored_names) - 3} more)"
            summary_lines.append(
                f"Packages Ignored: {len(ignored_names)} ({escape(names_str)})"
            )
        self._print_summary(
            summary_lines,
            passed=not has_problems,
            message=(
                "All packages have a detected license"
                if not has_problems
                else "Some packages require attention"
            ),
        )
        self._print_disclaimer()

        table = Table(title="License Analysis")
        table.add_column("Package", style="cyan", no_wrap=True)
        table.add_column("Version", style="magenta")
        table.add_column("Licenses", style="green")
        table.add_column("Method")
        table.add_column("Risk")

        for analysis in sorted(analyses, key=lambda a: a.package.name.lower()):
            if analysis.licenses:
                licenses = ", ".join(
                    f"{lic.spdx_id} ({lic.confidence:.0%})" for lic in analysis.licenses
                )
            else:
                licenses = "[yellow]Unknown[/yellow]"
            table.add_row(
                escape(analysis.package.name),
                escape(analysis.package.version),
                licenses,
                analysis.detection_method.value,
                _risk(analysis.risk_level),
            )
        self._console.print(table)

        issue_rows = [(a, issue) for a in analyses for issue in a.issues]
        if issue_rows:
            issues_table = Table(title="Issues")
            issues_table.add_column("Package", style="cyan", no_wrap=True)
            issues_table.add_column("Severity")
            issues_table.add_column("Issue")
            for analysis, issue in issue_rows:
                color = SEVERITY_COLORS[issue.severity]
                issues_table.add_row(
                    escape(analysis.package.name),
                    f"[{color}]{issue.severity}[/{color}]",
                    escape(issue.description),
                )
            self._console.print(issues_table)

    def format_compatibility_report(self, report: CompatibilityReport) -> None:
        """Display a compatibility report.

        Args:
            report: The report to display.
        """
        summary = report.summary
        self._print_summary(
            [
                f"Total Packages: {summary.total_packages}",
                f"Unique Licenses: {summary.total_licenses}",
                f"Conflicts: {summary.conflict_count}",
                f"Unclear Pairs: {summary.unknown_count}",
                f"Risk Score: {summary.risk_score}/100",
            ],
            passed=report.overall_compatibility == "compatible",
            message=f"Overall: {report.overall_compatibility.replace('_', ' ')}",
        )
        self._print_disclaimer()

        if report.conflicts:
            table = Table(title="License Conflicts")
            table.add_column("License A", style="red")
            table.add_column("License B", style="red")
            table.add_column("Reason")
            table.add_column("Packages", style="cyan")
            for conflict in report.conflicts:
                table.add_row(
                    conflict.license_a,
                    conflict.license_b,
                    escape(conflict.reason),
                    escape(", ".join(conflict.packages)),
                )
            self._console.print(table)

        if report.warnings:
            table = Table(title="Needs Review")
            table.add_column("License A", style="yellow")
            table.add_column("License B", style="yellow")
            table.add_column("Reason")
            for warning in report.warnings:
                table.add_row(warning.license_a, warning.license_b, escape(warning.reason))
            self._console.print(table)

    def format_risk_report(self, report: LegalRiskReport) -> None:
        """Display a legal risk report.

        Args:
            report: The report to display.
        """
        project = report.project.name
        if report.project.version:
            project += f" {report.project.version}"

        review = report.legal_review
        summary_lines = [
            f"Project: {escape(project)}",
            f"Overall Risk: {_risk(report.overall_risk)}",
            f"Risk Score: {report.risk_score}/100",
            f"Legal Review: {'required' if review.required else 'not required'}",
        ]
        if review.required:
            summary_lines.append(
                f"Urgency: {review.urgency} ({review.estimated_hours}h estimated)"
            )
        self._print_summary(
            summary_lines,
            passed=not review.required,
            message=(
                "No legal review needed"
                if not review.required
                else "Scope: " + ", ".join(review.scope)
            ),
        )
        self._print_disclaimer()

        if report.risk_factors:
            table = Table(title="Risk Factors")
            table.add_column("Category", style="cyan")
            table.add_column("Description")
            table.add_column("Impact")
            table.add_column("Likelihood")
            table.add_column("Score", justify="right")
            table.add_column("Mitigation")
            for factor in report.risk_factors:
                table.add_row(
                    factor.category,
                    escape(factor.description),
                    factor.impact,
                    factor.likelihood,
                    str(factor.risk_score),
                    escape(factor.mitigation or ""),
                )
            self._console.print(table)

        for jurisdiction in report.jurisdiction_risks:
            self._console.print(
                f"[bold]Jurisdiction {escape(jurisdiction.jurisdiction)}:[/bold] "
                f"{_risk(jurisdiction.risk_level)} - "
                + escape("; ".join(jurisdiction.specific_risks))
            )

        if report.patent_risks:
            licenses = sorted({risk.license.spdx_id for risk in report.patent_risks})
            self._console.print(
                f"[bold]Patent clauses:[/bold] {len(report.patent_risks)} "
                f"license use(s) ({', '.join(licenses)})"
            )

        if report.compliance_requirements:
            self._console.print("\n[bold]Compliance requirements:[/bold]")
            for requirement in report.compliance_requirements:
                self._console.print(
                    f"  - {escape(requirement.requirement)} "
                    f"[dim]({requirement.responsible}, {requirement.status})[/dim]"
                )

    def format_policy_result(
        self, result: PolicyValidationResult, policy_name: str
    ) -> None:
        """Display a policy validation result.

        Args:
            result: The validation result.
            policy_name: Name of the validated policy.
        """
        self._print_summary(
            [
                f"Policy: {escape(policy_name)}",
                f"Violations: {len(result.violations)}",
            ],
            passed=result.compliant,
            message="Compliant" if result.compliant else "Policy violations found",
        )
        self._print_disclaimer()

        if result.violations:
            table = Table(title="Policy Violations")
            table.add_column("Package", style="cyan", no_wrap=True)
            table.add_column("License", style="yellow")
            table.add_column("Severity")
            table.add_column("Violation")
            for violation in result.violations:
                color = SEVERITY_COLORS[violation.severity]
                table.add_row(
                    escape(violation.package),
                    violation.license,
                    f"[{color}]{violation.severity}[/{color}]",
                    escape(violation.violation),
                )
            self._console.print(table)

    def _print_summary(self, lines: list[str], passed: bool, message: str) -> None:
        """Print executive summary panel.

        Args:
            lines: Metric lines.
            passed: Whether the overall status is a pass.
            message: One-line status message.
        """
        if passed:
            status, status_color = "PASS", "green"
        else:
            status, status_color = "ISSUES FOUND", "red"

        content = lines + [
            "",
            f"Status: [{status_color}]{status}[/{status_color}]",
            f"[{status_color}]{escape(message)}[/{status_color}]",
        ]
        panel = Panel(
            "\n".join(content),
            title="[bold]EXECUTIVE SUMMARY[/bold]",
            border_style=status_color,
        )
        self._console.print(panel)
        self._console.print("")

    def _print_disclaimer(self) -> None:
        """Print legal disclaimer panel.

        Uses yellow styling to indicate an informational warning.
        """
        panel = Panel(
            LEGAL_DISCLAIMER_SHORT,
            title="[bold yellow]NOT LEGAL ADVICE[/bold yellow]",
            border_style="yellow",
        )
        self._console.print(panel)
        self._console.print("")
