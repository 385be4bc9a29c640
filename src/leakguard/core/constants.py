# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Enumerations, severity ordering, and default thresholds."""

from __future__ import annotations

from enum import StrEnum


class Severity(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        """Position in the total order ``low < medium < high < critical``."""
        return SEVERITY_ORDER.index(self)

    @classmethod
    def parse(cls, value: str | Severity) -> Severity:
        """Case-insensitive lookup; raises ``ValueError`` for unknown levels."""
        if isinstance(value, Severity):
            return value
        normalized = str(value).strip().lower()
        try:
            return cls(normalized)
        except ValueError:
            msg = f"Unknown severity: {value!r}. Expected one of: {', '.join(s.value for s in SEVERITY_ORDER)}"
            raise ValueError(msg) from None

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank


SEVERITY_ORDER: tuple[Severity, ...] = (
    Severity.LOW,
    Severity.MEDIUM,
    Severity.HIGH,
    Severity.CRITICAL,
)


class ScanStatus(StrEnum):
    PASSED = "passed"
    FAILED = "failed"


class HeuristicKind(StrEnum):
    OVERSIZED_FILE = "oversized_file"
    SENSITIVE_FILENAME = "sensitive_filename"


class WarningKind(StrEnum):
    FILE_ACCESS = "file_access"
    MATCH_TIMEOUT = "match_timeout"


DEFAULT_SEVERITY_THRESHOLD = Severity.MEDIUM

LARGE_FILE_BYTES = 10 * 1024 * 1024
LARGE_FILE_SEVERITY = Severity.MEDIUM

SENSITIVE_FILENAME_PATTERNS: tuple[str, ...] = (
    "*.pem",
    "*.key",
    "*_rsa",
    "*.pfx",
    "*.p12",
    ".env",
    "credentials.*",
    "*secret*",
)
SENSITIVE_FILENAME_SEVERITY = Severity.CRITICAL

EXCLUDED_DIRS: tuple[str, ...] = (".git", ".hg", ".svn", "node_modules")

BINARY_EXTENSIONS: tuple[str, ...] = (
    ".jpg",
    ".jpeg",
    ".png",
    ".gif",
    ".bmp",
    ".ico",
    ".webp",
    ".pdf",
)
