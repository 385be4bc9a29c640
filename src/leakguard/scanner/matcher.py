# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Apply rules and heuristics to a single file."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Sequence
from dataclasses import dataclass, field

from leakguard.core.constants import WarningKind
from leakguard.core.logging import redact_matches
from leakguard.models.finding import Finding, Location, ScanWarning
from leakguard.models.rule import Rule
from leakguard.scanner.heuristics import BaseHeuristic
from leakguard.scanner.walker import ScanTarget

logger = logging.getLogger("leakguard.scanner.matcher")


@dataclass
class FileResult:
    """Findings and warnings produced for one file. Owned by a single worker."""

    path: str
    findings: list[Finding] = field(default_factory=list)
    warnings: list[ScanWarning] = field(default_factory=list)
    cancelled: bool = False


class MatchEngine:
    """Line-granular rule matching plus per-file heuristics.

    A rule yields at most one finding per line no matter how many times it
    matches there. Files are streamed, never read whole. Each rule has a time
    budget per file; a rule that exhausts it loses its findings for that file
    and a ``match_timeout`` warning is recorded instead.
    """

    def __init__(
        self,
        rules: Sequence[Rule],
        heuristics: Sequence[BaseHeuristic] = (),
        *,
        match_timeout: float = 5.0,
        excerpt_length: int = 200,
        redact_excerpts: bool = True,
    ) -> None:
        self.rules = tuple(rules)
        self.heuristics = tuple(heuristics)
        self.match_timeout = match_timeout
        self.excerpt_length = excerpt_length
        self.redact_excerpts = redact_excerpts

    def match_file(self, target: ScanTarget, stop: threading.Event | None = None) -> FileResult:
        """Apply heuristics, then rules, to *target*.

        When *stop* is set the file is abandoned at the next line boundary and
        the result comes back ``cancelled`` with no rule findings.
        """
        result = FileResult(path=target.relative_path)

        for heuristic in self.heuristics:
            finding = heuristic.check(target)
            if finding is not None:
                result.findings.append(finding)

        if target.text_scannable and self.rules:
            self._match_rules(target, result, stop)

        return result

    def _match_rules(self, target: ScanTarget, result: FileResult, stop: threading.Event | None) -> None:
        # Per-rule state is indexed by catalog position, so rules sharing a name stay apart
        per_rule: list[list[Finding]] = [[] for _ in self.rules]
        elapsed = [0.0] * len(self.rules)
        active = list(range(len(self.rules)))
        timed_out: list[int] = []

        try:
            # Binary mode: only b"\n" ends a line, as with grep -n
            with target.path.open("rb") as handle:
                for line_num, raw_line in enumerate(handle, 1):
                    if stop is not None and stop.is_set():
                        result.cancelled = True
                        return
                    if not active:
                        break
                    line = raw_line.rstrip(b"\r\n").decode("utf-8", errors="ignore")
                    for index in list(active):
                        rule = self.rules[index]
                        started = time.perf_counter()
                        matched = rule.compiled.search(line) is not None
                        elapsed[index] += time.perf_counter() - started

                        if matched:
                            per_rule[index].append(self._finding(rule, target, line_num, line))

                        if elapsed[index] > self.match_timeout:
                            active.remove(index)
                            timed_out.append(index)
        except OSError as exc:
            message = f"cannot read file: {exc.strerror or exc}"
            logger.warning("Skipping %s: %s", target.relative_path, message)
            result.warnings.append(
                ScanWarning(kind=WarningKind.FILE_ACCESS, path=target.relative_path, message=message)
            )
            return

        for index in timed_out:
            rule = self.rules[index]
            per_rule[index].clear()
            message = f"rule exceeded its {self.match_timeout:g}s budget; skipped for this file"
            logger.warning("Rule %s timed out on %s", rule.name, target.relative_path)
            result.warnings.append(
                ScanWarning(
                    kind=WarningKind.MATCH_TIMEOUT,
                    path=target.relative_path,
                    message=message,
                    rule=rule.name,
                )
            )

        # Line order within the file; rule order within a line
        ordered = sorted(
            ((f.location.line or 0, index, f) for index, findings in enumerate(per_rule) for f in findings),
            key=lambda item: item[:2],
        )
        result.findings.extend(f for _, _, f in ordered)

    def _finding(self, rule: Rule, target: ScanTarget, line_num: int, line: str) -> Finding:
        text = redact_matches(rule.compiled, line) if self.redact_excerpts else line
        return Finding(
            source=rule.name,
            severity=rule.severity,
            location=Location(path=target.relative_path, line=line_num),
            excerpt=text.strip()[: self.excerpt_length],
            description=rule.description,
        )
