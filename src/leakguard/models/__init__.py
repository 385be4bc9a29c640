# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Domain models for leakguard."""

from leakguard.models.finding import Finding, Location, ScanWarning
from leakguard.models.report import Report, Tally, Verdict, build_report
from leakguard.models.rule import Rule, RuleDefinition

__all__ = [
    "Finding",
    "Location",
    "Report",
    "Rule",
    "RuleDefinition",
    "ScanWarning",
    "Tally",
    "Verdict",
    "build_report",
]
