# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Public SDK interface for embedding leakguard in other tools.

Usage::

    from leakguard import scan, scan_sync

    # Synchronous (blocking)
    report = scan_sync("path/to/repo", threshold="high")
    print(report.status, report.tally.total)

    # Async
    report = await scan("path/to/repo", rules="rules.yml")
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from leakguard.catalog.loader import CatalogSource, default_catalog_path, load_catalog
from leakguard.core.config import Settings, get_settings, validate_settings
from leakguard.core.constants import Severity
from leakguard.models.report import Report
from leakguard.models.rule import Rule
from leakguard.scanner.pipeline import ScanPipeline

logger = logging.getLogger("leakguard.sdk")


def load_rules(
    rules: CatalogSource | None = None,
    *,
    settings: Settings | None = None,
) -> list[Rule]:
    """Resolve and load the rule catalog.

    Precedence: explicit *rules*, then ``settings.rules_path``, then the
    bundled catalog. Raises :class:`~leakguard.core.exceptions.CatalogError`
    unless ``settings.skip_invalid_rules`` is set.
    """
    settings = settings or get_settings()
    source: CatalogSource
    if rules is not None:
        source = rules
    elif settings.rules_path:
        source = settings.rules_path
    else:
        source = default_catalog_path()

    if settings.skip_invalid_rules:
        logger.info("Invalid rules will be skipped (skip_invalid_rules=true)")
    return load_catalog(source, skip_invalid=settings.skip_invalid_rules)


def _with_threshold(settings: Settings, threshold: str | Severity | None) -> Settings:
    if threshold is None:
        return settings
    return settings.model_copy(update={"severity_threshold": str(threshold)})


# ---------------------------------------------------------------------------
# Public async API
# ---------------------------------------------------------------------------


async def scan(
    root: str | Path | None = None,
    *,
    rules: CatalogSource | None = None,
    threshold: str | Severity | None = None,
    settings: Settings | None = None,
) -> Report:
    """Scan a directory tree and return its :class:`Report`.

    Parameters
    ----------
    root:
        Directory to scan; defaults to ``settings.scan_path``.
    rules:
        Catalog path or in-memory rule records; see :func:`load_rules`.
    threshold:
        Severity threshold override (``low`` .. ``critical``).
    settings:
        Optional ``Settings`` override; falls back to ``get_settings()``.

    The catalog is loaded, and configuration validated, before any file is
    read: a bad rule or threshold aborts the scan with no findings produced.
    """
    settings = validate_settings(_with_threshold(settings or get_settings(), threshold))
    pipeline = ScanPipeline(load_rules(rules, settings=settings), settings=settings)
    return await pipeline.scan(root)


def scan_sync(
    root: str | Path | None = None,
    *,
    rules: CatalogSource | None = None,
    threshold: str | Severity | None = None,
    settings: Settings | None = None,
) -> Report:
    """Blocking wrapper around :func:`scan`."""
    return asyncio.run(scan(root, rules=rules, threshold=threshold, settings=settings))
