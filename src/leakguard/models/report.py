# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tally, verdict, and the immutable report handed to presentation layers."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field, computed_field

from leakguard.core.constants import SEVERITY_ORDER, ScanStatus, Severity
from leakguard.models.finding import Finding, ScanWarning


class Tally(BaseModel):
    """Per-severity finding counts. ``total`` is always their sum."""

    model_config = ConfigDict(frozen=True)

    critical: int = Field(default=0, ge=0)
    high: int = Field(default=0, ge=0)
    medium: int = Field(default=0, ge=0)
    low: int = Field(default=0, ge=0)

    @classmethod
    def zero(cls) -> Tally:
        return cls()

    @classmethod
    def single(cls, severity: Severity) -> Tally:
        return cls(**{severity.value: 1})

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> int:
        return self.critical + self.high + self.medium + self.low

    def count(self, severity: Severity) -> int:
        return int(getattr(self, severity.value))

    def count_at_or_above(self, threshold: Severity) -> int:
        return sum(self.count(s) for s in SEVERITY_ORDER if s >= threshold)

    def as_rows(self) -> list[tuple[Severity, int]]:
        """Severity/count pairs, most severe first, for reporting."""
        return [(s, self.count(s)) for s in reversed(SEVERITY_ORDER)]

    def __add__(self, other: object) -> Tally:
        if not isinstance(other, Tally):
            return NotImplemented
        return Tally(
            critical=self.critical + other.critical,
            high=self.high + other.high,
            medium=self.medium + other.medium,
            low=self.low + other.low,
        )


class Verdict(BaseModel):
    """Pass/fail decision derived from a tally and a threshold."""

    model_config = ConfigDict(frozen=True)

    status: ScanStatus
    threshold: Severity
    tally: Tally

    @property
    def passed(self) -> bool:
        return self.status == ScanStatus.PASSED


class Report(BaseModel):
    """Complete result of one scan invocation.

    Counting always uses the full ``findings`` sequence; ``displayed_findings``
    is the capped, severity-ordered view for human output.
    """

    model_config = ConfigDict(frozen=True)

    root: str
    tally: Tally
    verdict: Verdict
    findings: tuple[Finding, ...] = ()
    warnings: tuple[ScanWarning, ...] = ()
    files_scanned: int = 0
    rules_loaded: int = 0
    display_limit: int = 50

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status(self) -> ScanStatus:
        return self.verdict.status

    @computed_field  # type: ignore[prop-decorator]
    @property
    def findings_count(self) -> int:
        return len(self.findings)

    @property
    def displayed_findings(self) -> list[Finding]:
        ordered = sorted(
            self.findings,
            key=lambda f: (-f.severity.rank, *f.sort_key),
        )
        return ordered[: self.display_limit]

    @property
    def truncated(self) -> bool:
        return len(self.findings) > self.display_limit


def build_report(
    *,
    root: str,
    tally: Tally,
    verdict: Verdict,
    findings: Iterable[Finding],
    warnings: Iterable[ScanWarning] = (),
    files_scanned: int = 0,
    rules_loaded: int = 0,
    display_limit: int = 50,
) -> Report:
    """Assemble a Report. Pure: no I/O, inputs are copied into tuples."""
    return Report(
        root=root,
        tally=tally,
        verdict=verdict,
        findings=tuple(findings),
        warnings=tuple(warnings),
        files_scanned=files_scanned,
        rules_loaded=rules_loaded,
        display_limit=display_limit,
    )
