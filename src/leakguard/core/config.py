# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Application configuration via environment variables and .env files."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Annotated

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from leakguard.core.constants import (
    BINARY_EXTENSIONS,
    DEFAULT_SEVERITY_THRESHOLD,
    EXCLUDED_DIRS,
    LARGE_FILE_BYTES,
    LARGE_FILE_SEVERITY,
    SENSITIVE_FILENAME_PATTERNS,
    SENSITIVE_FILENAME_SEVERITY,
    Severity,
)
from leakguard.core.exceptions import ConfigError

# GitHub Actions exposes `with:` inputs as INPUT_<NAME> variables
_ACTION_INPUTS: dict[str, str] = {
    "INPUT_SCAN_PATH": "scan_path",
    "INPUT_FAIL_ON_FINDINGS": "fail_on_findings",
    "INPUT_SEVERITY_THRESHOLD": "severity_threshold",
    "INPUT_RULES_PATH": "rules_path",
}


def _split_csv(v: object) -> list[str]:
    if isinstance(v, str):
        return [item.strip() for item in v.split(",") if item.strip()]
    if isinstance(v, (list, tuple)):
        return [str(item) for item in v]
    return []


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LEAKGUARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    # Scan invocation
    scan_path: str = "."
    severity_threshold: str = DEFAULT_SEVERITY_THRESHOLD.value
    fail_on_findings: bool = True

    # Rule catalog
    rules_path: str = ""
    skip_invalid_rules: bool = False

    # Heuristics
    large_file_bytes: int = LARGE_FILE_BYTES
    large_file_severity: str = LARGE_FILE_SEVERITY.value
    sensitive_filename_patterns: Annotated[list[str], NoDecode] = list(SENSITIVE_FILENAME_PATTERNS)
    sensitive_filename_severity: str = SENSITIVE_FILENAME_SEVERITY.value

    # File walking
    excluded_dirs: Annotated[list[str], NoDecode] = list(EXCLUDED_DIRS)
    binary_extensions: Annotated[list[str], NoDecode] = list(BINARY_EXTENSIONS)

    @field_validator(
        "sensitive_filename_patterns",
        "excluded_dirs",
        "binary_extensions",
        mode="before",
    )
    @classmethod
    def _parse_csv_lists(cls, v: object) -> list[str]:
        return _split_csv(v)

    @field_validator("binary_extensions", mode="after")
    @classmethod
    def _normalize_extensions(cls, v: list[str]) -> list[str]:
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in v]

    # Matching
    max_workers: int = 8
    match_timeout: float = 5.0
    excerpt_length: int = 200
    redact_excerpts: bool = True

    # Reporting
    display_limit: int = 50

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"

    @property
    def threshold(self) -> Severity:
        return _parse_severity("severity_threshold", self.severity_threshold)

    @property
    def large_file_level(self) -> Severity:
        return _parse_severity("large_file_severity", self.large_file_severity)

    @property
    def sensitive_filename_level(self) -> Severity:
        return _parse_severity("sensitive_filename_severity", self.sensitive_filename_severity)

    @classmethod
    def from_action_env(cls, environ: Mapping[str, str] | None = None, **overrides: object) -> Settings:
        """Build settings, letting GitHub Action inputs override LEAKGUARD_* values."""
        env = os.environ if environ is None else environ
        values: dict[str, object] = {
            field: env[var]
            for var, field in _ACTION_INPUTS.items()
            if env.get(var, "").strip()
        }
        values.update(overrides)
        return cls(**values)


def _parse_severity(key: str, value: str) -> Severity:
    try:
        return Severity.parse(value)
    except ValueError as exc:
        raise ConfigError(key, str(exc)) from None


def validate_settings(settings: Settings) -> Settings:
    """Check every engine-relevant value, raising ConfigError on the first bad key."""
    _ = settings.threshold
    _ = settings.large_file_level
    _ = settings.sensitive_filename_level

    if settings.large_file_bytes <= 0:
        raise ConfigError("large_file_bytes", "must be a positive number of bytes")
    if settings.max_workers <= 0:
        raise ConfigError("max_workers", "must be at least 1")
    if settings.match_timeout <= 0:
        raise ConfigError("match_timeout", "must be a positive number of seconds")
    if settings.excerpt_length <= 0:
        raise ConfigError("excerpt_length", "must be at least 1")
    if settings.display_limit < 0:
        raise ConfigError("display_limit", "must not be negative")
    if settings.log_format not in ("json", "text"):
        raise ConfigError("log_format", "must be 'json' or 'text'")
    return settings


def get_settings() -> Settings:
    return Settings()


def load_settings(*, action_env: bool = False, **overrides: object) -> Settings:
    """Construct and validate settings, reporting bad values as ConfigError.

    *overrides* take precedence over the environment; ``None`` values are
    ignored. With *action_env*, GitHub Action ``INPUT_*`` variables are read
    as well.
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        settings = Settings.from_action_env(**values) if action_env else Settings(**values)
    except ValidationError as exc:
        first = exc.errors()[0] if exc.errors() else {}
        key = ".".join(str(part) for part in first.get("loc", ())) or "settings"
        raise ConfigError(key, str(first.get("msg", exc))) from None
    return validate_settings(settings)
