"""Detection and evaluation of Java launchers."""

from __future__ import annotations

import logging
import stat
import subprocess
from dataclasses import dataclass, field
from typing import List, Optional, Union

from .host import is_windows
from .properties import JavaProperties, parse_java_properties

LOGGER = logging.getLogger("jfind.java_env")

PROBE_ARGUMENTS = ("-XshowSettings:properties", "--version")
ORACLE_MARKER = "Oracle"
ORACLE_WARNING = "Warning: Oracle vendor detected"

_EXECUTE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def is_executable(mode: int, *, windows: Optional[bool] = None) -> bool:
    """Return whether an entry with ``mode`` counts as executable.

    Windows has no permission bits, any non-directory qualifies. Elsewhere at
    least one execute bit must be set.
    """

    if windows is None:
        windows = is_windows()
    if windows:
        return not stat.S_ISDIR(mode)
    return bool(mode & _EXECUTE_BITS)


def is_java_executable(name: str, *, windows: Optional[bool] = None) -> bool:
    if windows is None:
        windows = is_windows()
    return name == ("java.exe" if windows else "java")


def is_java_candidate(name: str, mode: int, *, windows: Optional[bool] = None) -> bool:
    """Return whether a directory entry is a Java launcher candidate."""

    if stat.S_ISDIR(mode):
        return False
    return is_executable(mode, windows=windows) and is_java_executable(name, windows=windows)


@dataclass(frozen=True)
class ProbeCompleted:
    """The launcher ran to completion, whatever its exit status."""

    return_code: int
    stdout: str
    stderr: str


@dataclass(frozen=True)
class ProbeFailed:
    """The launcher could not be run at all, or did not finish in time."""

    error: str


ProbeOutcome = Union[ProbeCompleted, ProbeFailed]


def run_probe(java_exec: str, timeout: Optional[float] = None) -> ProbeOutcome:
    """Run ``java_exec`` with :data:`PROBE_ARGUMENTS` and capture both streams."""

    try:
        proc = subprocess.run(
            [java_exec, *PROBE_ARGUMENTS],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        return ProbeFailed(f"timed out after {timeout:g}s")
    except OSError as exc:
        return ProbeFailed(str(exc))

    return ProbeCompleted(proc.returncode, proc.stdout, proc.stderr)


@dataclass
class JavaResult:
    """What a scan learned about one candidate.

    ``properties`` is only set for a probe that completed with exit status 0.
    """

    path: str
    properties: Optional[JavaProperties] = None
    warnings: List[str] = field(default_factory=list)
    stderr: str = ""
    return_code: int = 0
    error: Optional[str] = None

    @property
    def evaluated_ok(self) -> bool:
        return self.error is None and self.return_code == 0 and self.properties is not None


def vendor_warnings(properties: Optional[JavaProperties]) -> List[str]:
    if properties is not None and ORACLE_MARKER in properties.vendor:
        return [ORACLE_WARNING]
    return []


def evaluate_java(java_exec: str, timeout: Optional[float] = None) -> JavaResult:
    """Probe ``java_exec`` and turn its diagnostics into a :class:`JavaResult`.

    Java prints the property dump on stderr, which is what gets parsed. A probe
    that cannot be launched is reported through ``error`` and never raises.
    """

    result = JavaResult(path=java_exec)
    outcome = run_probe(java_exec, timeout=timeout)
    if isinstance(outcome, ProbeFailed):
        LOGGER.debug("Failed to execute %s: %s", java_exec, outcome.error)
        result.error = outcome.error
        return result

    result.return_code = outcome.return_code
    result.stderr = outcome.stderr
    if outcome.return_code != 0:
        LOGGER.debug("%s exited with return code %d", java_exec, outcome.return_code)
        return result

    result.properties = parse_java_properties(outcome.stderr)
    result.warnings.extend(vendor_warnings(result.properties))
    return result
