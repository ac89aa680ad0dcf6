"""Recursive search for Java launchers below a start directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from .java_env import JavaResult, evaluate_java, is_java_candidate
from .walker import walk

LOGGER = logging.getLogger("jfind.scanner")


class ScanError(RuntimeError):
    """The start path of a scan could not be walked."""

    def __init__(self, path: str, reason: OSError) -> None:
        super().__init__(f"cannot scan {path}: {reason}")
        self.path = path


@dataclass
class ScanStatistics:
    scanned_dirs: int = 0


class JavaFinder:
    """Find Java launchers below ``start_path``.

    A finder can be reused for sequential scans; :meth:`find` resets
    :attr:`stats` every time it starts.
    """

    def __init__(
        self,
        start_path: str,
        max_depth: int = -1,
        *,
        verbose: bool = False,
        evaluate: bool = False,
        timeout: Optional[float] = None,
        windows: Optional[bool] = None,
    ) -> None:
        self.start_path = start_path
        self.max_depth = max_depth
        self.verbose = verbose
        self.evaluate = evaluate
        self.timeout = timeout
        self.windows = windows
        self.stats = ScanStatistics()

    def _on_directory(self, path: str) -> None:
        if self.verbose:
            LOGGER.debug("Scanning: %s", path)
        self.stats.scanned_dirs += 1

    def _on_error(self, path: str, exc: OSError) -> None:
        if not self.verbose:
            return
        if isinstance(exc, PermissionError):
            LOGGER.debug("Permission denied: %s", path)
        else:
            LOGGER.debug("Error accessing %s: %s", path, exc)

    def find(self) -> List[JavaResult]:
        """Return one result per launcher, in the order they were found."""

        self.stats = ScanStatistics()
        if self.verbose:
            LOGGER.debug("Start looking for java in %s (scanning subdirectories)", self.start_path)

        try:
            entries = walk(
                self.start_path,
                self.max_depth,
                on_directory=self._on_directory,
                on_error=self._on_error,
            )
        except OSError as exc:
            raise ScanError(self.start_path, exc) from exc

        results: List[JavaResult] = []
        for entry in entries:
            if not is_java_candidate(entry.name, entry.mode, windows=self.windows):
                continue

            LOGGER.info("%s", entry.path)
            if self.evaluate:
                results.append(evaluate_java(entry.path, timeout=self.timeout))
            else:
                results.append(JavaResult(path=entry.path))
        return results
