# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Severity aggregation and verdict computation."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from leakguard.core.constants import ScanStatus, Severity
from leakguard.core.exceptions import ConfigError
from leakguard.models.finding import Finding
from leakguard.models.report import Tally, Verdict


def aggregate(findings: Iterable[Finding]) -> Tally:
    """Count findings per severity. Order and partitioning do not matter."""
    counts = Counter(f.severity.value for f in findings)
    return Tally(**counts)


def resolve_threshold(threshold: str | Severity) -> Severity:
    """Parse a threshold value, raising ConfigError for unknown severities."""
    try:
        return Severity.parse(threshold)
    except ValueError as exc:
        raise ConfigError("severity_threshold", str(exc)) from None


def decide(tally: Tally, threshold: str | Severity) -> Verdict:
    """Fail iff any finding sits at or above *threshold* in the severity order."""
    level = resolve_threshold(threshold)
    failed = tally.count_at_or_above(level) > 0
    return Verdict(
        status=ScanStatus.FAILED if failed else ScanStatus.PASSED,
        threshold=level,
        tally=tally,
    )
