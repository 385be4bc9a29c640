# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Standardized exit codes for CI/CD pipeline integrations.

Exit codes:
    0 - PASSED: no findings, findings below the threshold, or failing disabled
    1 - FAILED: findings at or above the threshold with failing enabled
    2 - ERROR: scan could not start (bad catalog, configuration, or root)
"""

from __future__ import annotations

from enum import IntEnum

from leakguard.models.report import Report


class CIExitCode(IntEnum):
    """Exit codes used by leakguard."""

    PASSED = 0
    FAILED = 1
    SCAN_ERROR = 2


def report_to_exit_code(report: Report, *, fail_on_findings: bool = True) -> CIExitCode:
    """Convert a report to a process exit code.

    Warnings never influence the result; only the verdict does, and only
    when *fail_on_findings* is enabled.
    """
    if fail_on_findings and not report.verdict.passed:
        return CIExitCode.FAILED
    return CIExitCode.PASSED
