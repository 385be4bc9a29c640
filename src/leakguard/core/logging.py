# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Structured logging that never echoes the credentials being hunted.

Every record passes through :func:`redact_sensitive` before it is written.
The masks follow the families in the bundled rule catalog: each keeps enough
of the match to identify the kind of secret and replaces the rest.
"""

import json
import logging
import re
import sys
from typing import Any

MASK = "[REDACTED]"

# (catalog family, pattern); group 1 is the part left visible
REDACT_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    ("aws-access-key", re.compile(r"((?:AKIA|ASIA)[0-9A-Z]{4})[0-9A-Z]{12}")),
    (
        "aws-secret-key",
        re.compile(r"((?i:aws_secret_access_key)\s*[:=]\s*['\"]?[A-Za-z0-9/+=]{4})[A-Za-z0-9/+=]{36}"),
    ),
    ("github-token", re.compile(r"(gh[pousr]_[A-Za-z0-9]{4})[A-Za-z0-9_]{32,}")),
    ("slack-token", re.compile(r"(xox[baprs]-[0-9]{4})[0-9A-Za-z\-]*")),
    (
        "generic-api-key",
        re.compile(r"((?i:api[_-]?key|apikey)\s*[:=]\s*['\"][A-Za-z0-9_\-]{4})[A-Za-z0-9_\-]{12,}"),
    ),
    ("hardcoded-password", re.compile(r"((?i:password|passwd|pwd)\s*[:=]\s*['\"])[^'\"\s]{6,}")),
    (
        "connection-string",
        re.compile(r"((?:postgres(?:ql)?|mysql|mongodb(?:\+srv)?|redis)://[^:/\s]+:)[^@/\s]+(?=@)"),
    ),
    ("bearer-token", re.compile(r"(Bearer\s+[A-Za-z0-9\-._~+/]{4})[A-Za-z0-9\-._~+/]{16,}=*")),
]


def redact_sensitive(text: str) -> str:
    for _family, pattern in REDACT_PATTERNS:
        text = pattern.sub(r"\1" + MASK, text)
    return text


def redact_matches(pattern: re.Pattern[str], text: str, keep: int = 4) -> str:
    """Mask every match of *pattern* in *text*, keeping its first *keep* characters."""
    return pattern.sub(lambda m: m.group(0)[:keep] + MASK if m.group(0) else "", text)


class TextFormatter(logging.Formatter):
    """Plain-text lines, scrubbed after the record and any traceback are rendered."""

    def format(self, record: logging.LogRecord) -> str:
        return redact_sensitive(super().format(record))


class JsonFormatter(logging.Formatter):
    """One JSON object per line. Fields are scrubbed before encoding so quoting stays intact."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": redact_sensitive(record.getMessage()),
        }
        if record.exc_info and record.exc_info[1]:
            exc = record.exc_info[1]
            log_entry["exception"] = redact_sensitive(f"{type(exc).__name__}: {exc}")
        return json.dumps(log_entry)


def setup_logging(level: str = "INFO", fmt: str = "text") -> None:
    logger = logging.getLogger("leakguard")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(TextFormatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
