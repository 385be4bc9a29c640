# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""CI/CD integration module for leakguard.

Provides exit codes and GitHub Actions output sinks.
"""

from leakguard.ci.exit_codes import CIExitCode, report_to_exit_code
from leakguard.ci.github import (
    format_annotations,
    format_job_summary,
    report_outputs,
    write_job_summary,
    write_outputs,
)

__all__ = [
    "CIExitCode",
    "format_annotations",
    "format_job_summary",
    "report_outputs",
    "report_to_exit_code",
    "write_job_summary",
    "write_outputs",
]
