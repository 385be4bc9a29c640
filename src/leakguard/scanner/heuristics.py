# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Structural checks that look at file size and file name, never content."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from fnmatch import fnmatchcase

from leakguard.core.config import Settings
from leakguard.core.constants import (
    LARGE_FILE_BYTES,
    LARGE_FILE_SEVERITY,
    SENSITIVE_FILENAME_PATTERNS,
    SENSITIVE_FILENAME_SEVERITY,
    HeuristicKind,
    Severity,
)
from leakguard.models.finding import Finding, Location
from leakguard.scanner.walker import ScanTarget


class BaseHeuristic(ABC):
    """All heuristics emit at most one finding per file."""

    kind: HeuristicKind
    severity: Severity

    @abstractmethod
    def check(self, target: ScanTarget) -> Finding | None:
        """Return a finding when *target* qualifies, else ``None``."""
        ...

    def _finding(self, target: ScanTarget, description: str) -> Finding:
        return Finding(
            source=self.kind.value,
            severity=self.severity,
            location=Location(path=target.relative_path),
            description=description,
        )


class OversizedFile(BaseHeuristic):
    kind = HeuristicKind.OVERSIZED_FILE

    def __init__(
        self,
        threshold_bytes: int = LARGE_FILE_BYTES,
        severity: Severity = LARGE_FILE_SEVERITY,
    ) -> None:
        self.threshold_bytes = threshold_bytes
        self.severity = severity

    def check(self, target: ScanTarget) -> Finding | None:
        if target.size <= self.threshold_bytes:
            return None
        return self._finding(
            target,
            f"File is {_human_size(target.size)}, larger than {_human_size(self.threshold_bytes)} "
            "(potential data exfiltration)",
        )


class SensitiveFilename(BaseHeuristic):
    kind = HeuristicKind.SENSITIVE_FILENAME

    def __init__(
        self,
        patterns: Iterable[str] = SENSITIVE_FILENAME_PATTERNS,
        severity: Severity = SENSITIVE_FILENAME_SEVERITY,
    ) -> None:
        self.patterns = tuple(patterns)
        self.severity = severity

    def matching_pattern(self, filename: str) -> str | None:
        return next((p for p in self.patterns if fnmatchcase(filename, p)), None)

    def check(self, target: ScanTarget) -> Finding | None:
        pattern = self.matching_pattern(target.name)
        if pattern is None:
            return None
        return self._finding(target, f"Sensitive file name matches {pattern!r}")


def build_heuristics(settings: Settings) -> list[BaseHeuristic]:
    """Instantiate the heuristics described by *settings*."""
    return [
        OversizedFile(settings.large_file_bytes, settings.large_file_level),
        SensitiveFilename(settings.sensitive_filename_patterns, settings.sensitive_filename_level),
    ]


def _human_size(size: int) -> str:
    value = float(size)
    for unit in ("B", "KiB", "MiB"):
        if value < 1024:
            return f"{value:.0f} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GiB"
