# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Shared test fixtures and configuration."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import pytest

from leakguard.core.config import Settings
from leakguard.core.constants import Severity
from leakguard.models.rule import Rule


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep host LEAKGUARD_* / GitHub variables from leaking into tests."""
    import os

    for name in list(os.environ):
        if name.startswith(("LEAKGUARD_", "INPUT_")) or name in ("GITHUB_OUTPUT", "GITHUB_STEP_SUMMARY"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers installed by setup_logging (e.g. from CLI invocations)."""
    yield
    root = logging.getLogger("leakguard")
    root.handlers.clear()
    root.setLevel(logging.NOTSET)


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    def _make(**overrides: object) -> Settings:
        return Settings(_env_file=None, **overrides)

    return _make


@pytest.fixture
def settings(make_settings) -> Settings:
    return make_settings()


@pytest.fixture
def aws_rule() -> Rule:
    return Rule(
        name="aws-key",
        pattern=r"AKIA[0-9A-Z]{16}",
        severity=Severity.CRITICAL,
        description="AWS access key",
    )


@pytest.fixture
def password_rule() -> Rule:
    return Rule(
        name="password",
        pattern=r"password\s*=\s*['\"][^'\"]+['\"]",
        severity=Severity.HIGH,
        description="Hardcoded password",
    )


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[..., Path]:
    """Create files under ``tmp_path/name`` from a ``{relative_path: content}`` mapping."""

    def _make(files: dict[str, str | bytes], name: str = "repo") -> Path:
        root = tmp_path / name
        root.mkdir(exist_ok=True)
        for rel, content in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        return root

    return _make

