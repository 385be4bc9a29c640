# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Typer CLI application root."""

from __future__ import annotations

import asyncio
import sys
from enum import StrEnum
from pathlib import Path
from typing import Annotated, NoReturn

import typer

from leakguard.ci.exit_codes import CIExitCode, report_to_exit_code
from leakguard.core.config import Settings, load_settings
from leakguard.core.exceptions import LeakguardError
from leakguard.core.logging import setup_logging

app = typer.Typer(
    name="leakguard",
    help="Scan a source tree for hardcoded secrets and sensitive files",
    no_args_is_help=True,
)


class OutputFormat(StrEnum):
    CONSOLE = "console"
    JSON = "json"
    SUMMARY = "summary"


@app.command()
def scan(
    path: Annotated[
        str | None,
        typer.Argument(help="Directory to scan (default: LEAKGUARD_SCAN_PATH or '.')"),
    ] = None,
    threshold: Annotated[
        str | None,
        typer.Option("--threshold", "-t", help="Minimum failing severity: low, medium, high, critical"),
    ] = None,
    fail_on_findings: Annotated[
        bool | None,
        typer.Option(
            "--fail-on-findings/--no-fail-on-findings",
            help="Exit 1 when the verdict fails",
            show_default=False,
        ),
    ] = None,
    rules: Annotated[
        Path | None,
        typer.Option("--rules", "-r", help="Rule catalog (.json/.yml); defaults to the bundled catalog"),
    ] = None,
    skip_invalid_rules: Annotated[
        bool,
        typer.Option("--skip-invalid-rules", help="Drop malformed rules instead of aborting"),
    ] = False,
    fmt: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = OutputFormat.CONSOLE,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output file path (json/summary formats)"),
    ] = None,
    github: Annotated[
        bool,
        typer.Option("--github", help="Read INPUT_* action inputs and write GitHub outputs, summary, annotations"),
    ] = False,
) -> None:
    """Scan a directory for secrets and sensitive files."""
    try:
        settings = load_settings(
            action_env=github,
            scan_path=path,
            severity_threshold=threshold,
            fail_on_findings=fail_on_findings,
            rules_path=str(rules) if rules is not None else None,
            skip_invalid_rules=skip_invalid_rules or None,
        )
    except LeakguardError as exc:
        _fail(exc)

    setup_logging(settings.log_level, settings.log_format)
    exit_code = _run_scan(settings, fmt, output, github=github)
    raise typer.Exit(int(exit_code))


def _run_scan(settings: Settings, fmt: OutputFormat, output: Path | None, *, github: bool) -> CIExitCode:
    from leakguard.sdk import scan as sdk_scan

    try:
        report = asyncio.run(sdk_scan(settings.scan_path, settings=settings))
    except LeakguardError as exc:
        _fail(exc)

    if fmt == OutputFormat.CONSOLE:
        from leakguard.cli.formatters.console import format_report

        format_report(report, fail_on_findings=settings.fail_on_findings)
    elif fmt == OutputFormat.JSON:
        from leakguard.cli.formatters.json_fmt import format_json

        _write_output(format_json(report), output)
    elif fmt == OutputFormat.SUMMARY:
        from leakguard.cli.formatters.json_fmt import format_json_summary

        _write_output(format_json_summary(report), output)

    if github:
        from leakguard.ci.github import format_annotations, write_job_summary, write_outputs

        annotations = format_annotations(report)
        if annotations:
            # Keep stdout parseable when it carries the JSON report
            stream = sys.stdout if fmt == OutputFormat.CONSOLE or output is not None else sys.stderr
            stream.write(annotations + "\n")
        write_outputs(report)
        write_job_summary(report, scan_path=settings.scan_path)

    return report_to_exit_code(report, fail_on_findings=settings.fail_on_findings)


@app.command(name="rules")
def list_rules(
    rules: Annotated[
        Path | None,
        typer.Option("--rules", "-r", help="Rule catalog (.json/.yml); defaults to the bundled catalog"),
    ] = None,
) -> None:
    """Validate and list the rule catalog."""
    from leakguard.cli.formatters.console import format_rules
    from leakguard.sdk import load_rules

    try:
        loaded = load_rules(rules)
    except LeakguardError as exc:
        _fail(exc)
    format_rules(loaded)


@app.command()
def version() -> None:
    """Show leakguard version."""
    from leakguard import __version__

    typer.echo(f"leakguard v{__version__}")


def _fail(exc: LeakguardError) -> NoReturn:
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(int(CIExitCode.SCAN_ERROR))


def _write_output(content: str, output: Path | None) -> None:
    if output:
        output.write_text(content, encoding="utf-8")
        typer.echo(f"Output written to {output}", err=True)
    else:
        sys.stdout.write(content + "\n")
