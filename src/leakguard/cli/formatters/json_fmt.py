# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""JSON output formatter."""

from __future__ import annotations

import json

from leakguard.models.report import Report


def format_json(report: Report) -> str:
    """Return the full report as a formatted JSON string."""
    return report.model_dump_json(indent=2)


def format_json_summary(report: Report) -> str:
    """Return a compact JSON summary (no per-finding detail)."""
    data = {
        "root": report.root,
        "status": report.status,
        "threshold": report.verdict.threshold,
        "findings_count": report.findings_count,
        "counts": {s.value: c for s, c in report.tally.as_rows()},
        "files_scanned": report.files_scanned,
        "warnings": len(report.warnings),
    }
    return json.dumps(data, indent=2)
