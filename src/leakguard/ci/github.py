# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""GitHub Actions sinks: output variables, job summary, and annotations."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from leakguard.core.constants import Severity
from leakguard.models.report import Report

logger = logging.getLogger("leakguard.ci.github")

_SEVERITY_TO_COMMAND: dict[Severity, str] = {
    Severity.CRITICAL: "error",
    Severity.HIGH: "error",
    Severity.MEDIUM: "warning",
    Severity.LOW: "notice",
}

RECOMMENDATIONS = (
    "Review all detected security findings above",
    "Remove any hardcoded credentials immediately",
    "Use GitHub Secrets for sensitive values",
    "Implement secret scanning in your repository settings",
    "Consider using a secrets management system (HashiCorp Vault, AWS Secrets Manager)",
)


def report_outputs(report: Report) -> dict[str, str]:
    """The action's output variables."""
    return {
        "findings-count": str(report.tally.total),
        "critical-count": str(report.tally.critical),
        "high-count": str(report.tally.high),
        "scan-status": report.status.value,
    }


def write_outputs(report: Report, output_file: str | None = None) -> bool:
    """Append ``name=value`` lines to ``$GITHUB_OUTPUT``. Returns False when unset."""
    target = output_file or os.environ.get("GITHUB_OUTPUT")
    if not target:
        logger.debug("GITHUB_OUTPUT not set; skipping output variables")
        return False
    with Path(target).open("a", encoding="utf-8") as f:
        for name, value in report_outputs(report).items():
            f.write(f"{name}={value}\n")
    return True


def format_job_summary(report: Report, scan_path: str | None = None) -> str:
    """Render the Markdown job summary."""
    tally = report.tally
    lines = [
        "## Security Scan Results",
        "",
        f"**Scan Path:** `{scan_path or report.root}`  ",
        f"**Status:** {report.status.value.upper()}",
        "",
        "### Findings by Severity",
        "",
        "| Severity | Count |",
        "|----------|-------|",
    ]
    for severity, count in tally.as_rows():
        lines.append(f"| {severity.value.capitalize()} | {count} |")
    lines.append(f"| **Total** | **{tally.total}** |")
    lines.append("")
    lines.append("### Recommendations")
    lines.append("")

    if tally.total == 0:
        lines.append("No security issues detected. Great job!")
    else:
        for num, item in enumerate(RECOMMENDATIONS, 1):
            lines.append(f"{num}. {item}")

    if report.warnings:
        lines.append("")
        lines.append(f"### Skipped ({len(report.warnings)})")
        lines.append("")
        for warning in report.warnings:
            lines.append(f"- `{warning.path}`: {warning.message}")

    return "\n".join(lines) + "\n"


def write_job_summary(report: Report, summary_file: str | None = None, scan_path: str | None = None) -> bool:
    """Append the job summary to ``$GITHUB_STEP_SUMMARY``. Returns False when unset."""
    target = summary_file or os.environ.get("GITHUB_STEP_SUMMARY")
    if not target:
        logger.debug("GITHUB_STEP_SUMMARY not set; skipping job summary")
        return False
    with Path(target).open("a", encoding="utf-8") as f:
        f.write(format_job_summary(report, scan_path))
    return True


def _escape(value: str, *, property_value: bool = False) -> str:
    value = value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
    if property_value:
        value = value.replace(":", "%3A").replace(",", "%2C")
    return value


def format_annotations(report: Report) -> str:
    """Format the displayed findings as workflow commands (``::error file=...::``)."""
    lines: list[str] = []
    for finding in report.displayed_findings:
        command = _SEVERITY_TO_COMMAND.get(finding.severity, "warning")
        props = [f"file={_escape(finding.location.path, property_value=True)}"]
        if finding.location.line is not None:
            props.append(f"line={finding.location.line}")
        props.append(f"title={_escape(f'[{finding.severity.value}] {finding.source}', property_value=True)}")
        message = _escape(finding.description or finding.source)
        lines.append(f"::{command} {','.join(props)}::{message}")
    return "\n".join(lines)
