# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""leakguard - secret and sensitive-file scanner for source trees."""

__version__ = "0.1.0"

from leakguard.catalog.loader import load_catalog
from leakguard.core.constants import Severity
from leakguard.core.exceptions import CatalogError, ConfigError, LeakguardError, ScanError
from leakguard.models.report import Report
from leakguard.sdk import load_rules, scan, scan_sync

__all__ = [
    "CatalogError",
    "ConfigError",
    "LeakguardError",
    "Report",
    "ScanError",
    "Severity",
    "__version__",
    "load_catalog",
    "load_rules",
    "scan",
    "scan_sync",
]
