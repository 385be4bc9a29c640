# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Detection rule models: the raw catalog record schema and the compiled rule."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, PrivateAttr, field_validator

from leakguard.core.constants import Severity


class RuleDefinition(BaseModel):
    """Schema for a single rule record in a catalog file."""

    model_config = ConfigDict(extra="ignore")

    name: str
    pattern: str
    severity: Severity
    description: str = ""

    @field_validator("name")
    @classmethod
    def _validate_name(cls, v: str) -> str:
        if not v.strip():
            msg = "Rule name must not be empty"
            raise ValueError(msg)
        return v.strip()

    @field_validator("pattern")
    @classmethod
    def _validate_pattern(cls, v: str) -> str:
        if not v:
            msg = "Pattern must not be empty"
            raise ValueError(msg)
        try:
            re.compile(v)
        except re.error as exc:
            msg = f"Pattern does not compile: {exc}"
            raise ValueError(msg) from None
        return v

    @field_validator("severity", mode="before")
    @classmethod
    def _normalize_severity(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v


class Rule(BaseModel):
    """A validated, immutable detection rule.

    Patterns are compiled without flags: matching is case-sensitive and each
    line is matched on its own, so ``^``/``$`` anchor to the line.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    pattern: str
    severity: Severity
    description: str = ""

    _compiled: re.Pattern[str] = PrivateAttr()

    def model_post_init(self, __context: object) -> None:
        self._compiled = re.compile(self.pattern)

    @property
    def compiled(self) -> re.Pattern[str]:
        return self._compiled

    @classmethod
    def from_definition(cls, definition: RuleDefinition) -> Rule:
        return cls(
            name=definition.name,
            pattern=definition.pattern,
            severity=definition.severity,
            description=definition.description,
        )
