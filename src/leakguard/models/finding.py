# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Finding and scan warning models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from leakguard.core.constants import HeuristicKind, Severity, WarningKind


class Location(BaseModel):
    """Where in the scanned tree the finding was located."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(description="Path relative to the scan root, '/'-separated")
    line: int | None = None


class Finding(BaseModel):
    """One concrete rule match (per line) or heuristic trigger (per file)."""

    model_config = ConfigDict(frozen=True)

    source: str = Field(description="Rule name or heuristic kind that produced this finding")
    severity: Severity
    location: Location
    excerpt: str | None = None
    description: str = ""

    @property
    def is_heuristic(self) -> bool:
        return self.source in {kind.value for kind in HeuristicKind}

    @property
    def sort_key(self) -> tuple[str, int, str]:
        return (self.location.path, self.location.line or 0, self.source)


class ScanWarning(BaseModel):
    """A non-fatal problem recorded during the scan."""

    model_config = ConfigDict(frozen=True)

    kind: WarningKind
    path: str
    message: str
    rule: str | None = None
