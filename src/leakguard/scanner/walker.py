# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Enumerate scannable files under a root directory."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from leakguard.core.constants import BINARY_EXTENSIONS, EXCLUDED_DIRS, WarningKind
from leakguard.models.finding import ScanWarning

logger = logging.getLogger("leakguard.scanner.walker")


@dataclass(frozen=True)
class ScanTarget:
    """A regular file discovered under the scan root."""

    path: Path
    relative_path: str
    size: int
    text_scannable: bool

    @property
    def name(self) -> str:
        return self.path.name


@dataclass
class FileWalker:
    """Lazy, restartable directory walk.

    Excluded directories are pruned entirely. Files with a binary extension are
    still yielded (heuristics apply to them) but flagged as not text-scannable.
    Symlinks are followed; each real path is visited at most once, so link
    cycles terminate.
    """

    root: Path
    excluded_dirs: Iterable[str] = EXCLUDED_DIRS
    binary_extensions: Iterable[str] = BINARY_EXTENSIONS
    warnings: list[ScanWarning] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.root = Path(self.root)
        self._excluded = frozenset(self.excluded_dirs)
        self._binary = frozenset(ext.lower() for ext in self.binary_extensions)

    def walk(self) -> Iterator[ScanTarget]:
        """Yield targets in a deterministic (sorted) order.

        Each call starts a fresh walk and resets :attr:`warnings`.
        """
        self.warnings = []
        root = self.root.resolve()
        seen: set[str] = set()

        for dirpath, dirnames, filenames in os.walk(
            root, onerror=self._on_walk_error, followlinks=True
        ):
            real_dir = os.path.realpath(dirpath)
            if real_dir in seen:
                dirnames[:] = []
                continue
            seen.add(real_dir)

            dirnames[:] = sorted(d for d in dirnames if d not in self._excluded)

            for filename in sorted(filenames):
                full_path = Path(dirpath) / filename
                target = self._make_target(root, full_path, seen)
                if target is not None:
                    yield target

    def _make_target(self, root: Path, full_path: Path, seen: set[str]) -> ScanTarget | None:
        relative = full_path.relative_to(root).as_posix()
        try:
            real_path = os.path.realpath(full_path)
            if real_path in seen:
                return None
            stat = full_path.stat()
        except OSError as exc:
            self._record(relative, f"cannot stat file: {exc.strerror or exc}")
            return None

        if not full_path.is_file():
            return None
        seen.add(real_path)

        return ScanTarget(
            path=full_path,
            relative_path=relative,
            size=stat.st_size,
            text_scannable=full_path.suffix.lower() not in self._binary,
        )

    def _on_walk_error(self, exc: OSError) -> None:
        path = exc.filename or str(self.root)
        try:
            relative = Path(path).resolve().relative_to(self.root.resolve()).as_posix()
        except ValueError:
            relative = str(path)
        self._record(relative, f"cannot read directory: {exc.strerror or exc}")

    def _record(self, path: str, message: str) -> None:
        logger.warning("Skipping %s: %s", path, message)
        self.warnings.append(
            ScanWarning(kind=WarningKind.FILE_ACCESS, path=path, message=message)
        )
