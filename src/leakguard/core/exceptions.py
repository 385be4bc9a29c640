# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Custom exception hierarchy for leakguard."""

from __future__ import annotations


class LeakguardError(Exception):
    """Base exception for all leakguard errors."""


class CatalogError(LeakguardError):
    """A rule record in the catalog is malformed."""

    def __init__(self, index: int | None, reason: str, name: str | None = None) -> None:
        self.index = index
        self.name = name
        self.reason = reason
        super().__init__(self._render())

    def _render(self) -> str:
        if self.index is None:
            return f"Invalid rule catalog: {self.reason}"
        label = f"rule #{self.index}"
        if self.name:
            label += f" ({self.name!r})"
        return f"Invalid {label}: {self.reason}"


class ConfigError(LeakguardError):
    """Invalid threshold or configuration value."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid configuration for {key!r}: {reason}")


class ScanError(LeakguardError):
    """Error during scan execution."""
