# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Rich console output formatter for scan reports."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from leakguard import __version__
from leakguard.core.constants import ScanStatus, Severity
from leakguard.models.report import Report
from leakguard.models.rule import Rule

console = Console()

SEVERITY_COLORS = {
    Severity.CRITICAL: "bold red",
    Severity.HIGH: "red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "cyan",
}

STATUS_COLORS = {
    ScanStatus.FAILED: "bold red",
    ScanStatus.PASSED: "bold green",
}


def format_report(report: Report, *, fail_on_findings: bool = True, out: Console | None = None) -> None:
    """Print a report to the console with Rich formatting."""
    out = out or console
    out.print()
    out.print(f"[bold]leakguard v{__version__}[/bold] - Security Scanner")
    out.print()

    info_table = Table(show_header=False, box=None, padding=(0, 2))
    info_table.add_column("key", style="dim")
    info_table.add_column("value")
    info_table.add_row("Scan Path:", report.root)
    info_table.add_row("Threshold:", report.verdict.threshold.value)
    info_table.add_row("Fail on Findings:", str(fail_on_findings).lower())
    info_table.add_row("Files:", str(report.files_scanned))
    info_table.add_row("Rules:", str(report.rules_loaded))
    out.print(info_table)
    out.print()

    if report.findings:
        for finding in report.displayed_findings:
            sev_color = SEVERITY_COLORS.get(finding.severity, "white")
            sev_label = Text(finding.severity.upper().ljust(9), style=sev_color)

            out.print(Text.assemble(sev_label, "  ", (finding.source, "bold"), "  ", finding.description))

            where = finding.location.path
            if finding.location.line is not None:
                where += f":{finding.location.line}"
            if finding.excerpt:
                out.print(f"          {where}: {finding.excerpt[:120]}", style="dim", markup=False)
            else:
                out.print(f"          {where}", style="dim", markup=False)
        if report.truncated:
            hidden = report.findings_count - len(report.displayed_findings)
            out.print(f"          ... and {hidden} more", style="dim")
        out.print()
    else:
        out.print("  No security issues detected.", style="bold green")
        out.print()

    summary = Table(title="Scan Summary", show_lines=False)
    summary.add_column("Severity")
    summary.add_column("Count", justify="right")
    for severity, count in report.tally.as_rows():
        summary.add_row(Text(severity.value.capitalize(), style=SEVERITY_COLORS[severity]), str(count))
    summary.add_row("[bold]Total[/bold]", f"[bold]{report.tally.total}[/bold]")
    out.print(summary)
    out.print()

    if report.warnings:
        out.print(f"  Skipped ({len(report.warnings)}):", style="yellow")
        for warning in report.warnings:
            rule = f" [{warning.rule}]" if warning.rule else ""
            out.print(f"    {warning.path}{rule}: {warning.message}", style="dim", markup=False)
        out.print()

    status_color = STATUS_COLORS[report.status]
    out.print(
        Panel(
            f"[{status_color}]SCAN {report.status.upper()}[/{status_color}]"
            f"  ({report.tally.total} findings, threshold: {report.verdict.threshold})",
            style=status_color,
        )
    )
    if report.findings and (not fail_on_findings or report.verdict.passed):
        out.print("  Security issues detected but not failing build", style="yellow")
    out.print()


def format_rules(rules: Sequence[Rule], *, out: Console | None = None) -> None:
    """Print the loaded catalog as a table."""
    out = out or console
    table = Table(title=f"Rule Catalog ({len(rules)} rules)")
    table.add_column("Name", style="bold")
    table.add_column("Severity")
    table.add_column("Description")
    for rule in sorted(rules, key=lambda r: (-r.severity.rank, r.name)):
        table.add_row(
            rule.name,
            Text(rule.severity.value, style=SEVERITY_COLORS[rule.severity]),
            rule.description,
        )
    out.print(table)
