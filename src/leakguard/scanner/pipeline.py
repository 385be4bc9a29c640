# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Scanner pipeline orchestrator: walk, match in parallel, merge, decide."""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from collections.abc import Sequence
from pathlib import Path

from leakguard.core.config import Settings, get_settings, validate_settings
from leakguard.core.exceptions import ScanError
from leakguard.models.report import Report, build_report
from leakguard.models.rule import Rule
from leakguard.scanner.heuristics import BaseHeuristic, build_heuristics
from leakguard.scanner.matcher import FileResult, MatchEngine
from leakguard.scanner.severity import aggregate, decide
from leakguard.scanner.walker import FileWalker, ScanTarget

logger = logging.getLogger("leakguard.scanner.pipeline")


class ScanPipeline:
    """Runs one scan over a directory tree.

    The walk feeds a bounded queue drained by ``settings.max_workers``
    workers, each matching one file at a time in a thread. Each worker owns its
    :class:`FileResult`; results are merged once, after every worker is done,
    in a deterministic order.
    """

    def __init__(
        self,
        rules: Sequence[Rule],
        settings: Settings | None = None,
        heuristics: Sequence[BaseHeuristic] | None = None,
    ) -> None:
        self._settings = validate_settings(settings or get_settings())
        self._rules = tuple(rules)
        self._heuristics = (
            tuple(heuristics) if heuristics is not None else tuple(build_heuristics(self._settings))
        )
        self._engine = MatchEngine(
            self._rules,
            self._heuristics,
            match_timeout=self._settings.match_timeout,
            excerpt_length=self._settings.excerpt_length,
            redact_excerpts=self._settings.redact_excerpts,
        )

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    async def scan(self, root: str | Path | None = None) -> Report:
        """Scan *root* (default ``settings.scan_path``) and return the report.

        Raises:
            ConfigError: If the severity threshold is not recognized.
            ScanError: If *root* is not an existing directory.
        """
        threshold = self._settings.threshold
        root_path = Path(root if root is not None else self._settings.scan_path)
        if not root_path.is_dir():
            raise ScanError(f"Scan root must be an existing directory: {root_path}")

        walker = FileWalker(
            root_path,
            excluded_dirs=self._settings.excluded_dirs,
            binary_extensions=self._settings.binary_extensions,
        )

        logger.info(
            "Scanning %s with %d rules, threshold=%s",
            root_path,
            len(self._rules),
            threshold,
        )
        start_time = time.monotonic()

        file_results = await self._run_workers(walker)
        findings = sorted(
            (f for fr in file_results for f in fr.findings),
            key=lambda f: f.sort_key,
        )
        warnings = [*walker.warnings, *(w for fr in file_results for w in fr.warnings)]

        tally = aggregate(findings)
        verdict = decide(tally, threshold)
        report = build_report(
            root=str(root_path),
            tally=tally,
            verdict=verdict,
            findings=findings,
            warnings=warnings,
            files_scanned=len(file_results),
            rules_loaded=len(self._rules),
            display_limit=self._settings.display_limit,
        )

        elapsed_ms = int((time.monotonic() - start_time) * 1000)
        logger.info(
            "Scan of %s complete: status=%s findings=%d warnings=%d files=%d duration=%dms",
            root_path,
            report.status,
            report.findings_count,
            len(report.warnings),
            report.files_scanned,
            elapsed_ms,
        )
        return report

    async def _run_workers(self, walker: FileWalker) -> list[FileResult]:
        """Feed walked files through a bounded queue to ``max_workers`` consumers.

        The walk advances only as fast as workers drain the queue. Results come
        back in walk order. On cancellation or error every worker thread is told
        to stop at its next line.
        """
        workers = self._settings.max_workers
        queue: asyncio.Queue[tuple[int, ScanTarget] | None] = asyncio.Queue(maxsize=workers)
        stop = threading.Event()
        done: list[tuple[int, FileResult]] = []

        async def produce() -> None:
            targets = walker.walk()
            seq = 0
            while True:
                target = await asyncio.to_thread(next, targets, None)
                if target is None:
                    break
                await queue.put((seq, target))
                seq += 1
            for _ in range(workers):
                await queue.put(None)

        async def consume() -> None:
            while True:
                item = await queue.get()
                if item is None:
                    return
                seq, target = item
                result = await asyncio.to_thread(self._engine.match_file, target, stop)
                done.append((seq, result))

        tasks = [asyncio.ensure_future(produce())]
        tasks.extend(asyncio.ensure_future(consume()) for _ in range(workers))
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            stop.set()
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        done.sort(key=lambda item: item[0])
        return [result for _, result in done]
