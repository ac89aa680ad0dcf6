"""Scan reports: the JSON document sent to a collector and the text listing."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from .host import get_computer_name, get_user_name
from .java_env import ORACLE_MARKER, JavaResult

LOGGER = logging.getLogger("jfind.report")

DEFAULT_POST_URL = "http://localhost:8080/jfind"


class PostError(RuntimeError):
    """The report could not be delivered to the collector."""


def format_duration_iso8601(seconds: float) -> str:
    """Format ``seconds`` as an ISO 8601 duration with millisecond precision.

    >>> format_duration_iso8601(3723.5)
    'PT1H2M3.500S'
    """

    total_ms = int(max(seconds, 0.0) * 1000 + 0.5)
    hours, total_ms = divmod(total_ms, 3_600_000)
    minutes, total_ms = divmod(total_ms, 60_000)
    secs, millis = divmod(total_ms, 1000)

    parts = ["PT"]
    if hours:
        parts.append(f"{hours}H")
    if minutes:
        parts.append(f"{minutes}M")
    if secs or millis or not (hours or minutes):
        if millis:
            parts.append(f"{secs}.{millis:03d}S")
        else:
            parts.append(f"{secs}S")
    return "".join(parts)


@dataclass(frozen=True)
class RuntimeEntry:
    java_executable: str
    java_version: str = ""
    java_vendor: str = ""
    java_runtime_name: str = ""
    is_oracle: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"java.executable": self.java_executable}
        if self.java_version:
            data["java.version"] = self.java_version
        if self.java_vendor:
            data["java.vendor"] = self.java_vendor
        if self.java_runtime_name:
            data["java.runtime.name"] = self.java_runtime_name
        if self.is_oracle:
            data["is_oracle"] = True
        return data


@dataclass(frozen=True)
class MetaInfo:
    scan_ts: str
    computer_name: str
    user_name: str
    scan_duration: str
    has_oracle_jdk: bool
    count_result: int
    scanned_dirs: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scan_ts": self.scan_ts,
            "computer_name": self.computer_name,
            "user_name": self.user_name,
            "scan_duration": self.scan_duration,
            "has_oracle_jdk": self.has_oracle_jdk,
            "count_result": self.count_result,
            "scanned_dirs": self.scanned_dirs,
        }


@dataclass(frozen=True)
class ReportDocument:
    meta: MetaInfo
    runtimes: Tuple[RuntimeEntry, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "meta": self.meta.to_dict(),
            "result": [runtime.to_dict() for runtime in self.runtimes],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)


def _runtime_entry(result: JavaResult, evaluate: bool) -> RuntimeEntry:
    if not evaluate or not result.evaluated_ok:
        return RuntimeEntry(java_executable=result.path)

    properties = result.properties
    assert properties is not None
    return RuntimeEntry(
        java_executable=result.path,
        java_version=properties.version,
        java_vendor=properties.vendor,
        java_runtime_name=properties.runtime_name,
        is_oracle=ORACLE_MARKER in properties.vendor,
    )


def build_report(
    results: Sequence[JavaResult],
    scanned_dirs: int,
    started: datetime,
    finished: datetime,
    *,
    evaluate: bool,
    computer_name: Optional[str] = None,
    user_name: Optional[str] = None,
) -> ReportDocument:
    """Summarise a finished scan.

    Runtime details are only copied from results that were evaluated
    successfully; everything else is reported by path alone. Host identity is
    looked up when not supplied.
    """

    runtimes = tuple(_runtime_entry(result, evaluate) for result in results)
    meta = MetaInfo(
        scan_ts=finished.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
        computer_name=computer_name if computer_name is not None else get_computer_name(),
        user_name=user_name if user_name is not None else get_user_name(),
        scan_duration=format_duration_iso8601((finished - started).total_seconds()),
        has_oracle_jdk=any(runtime.is_oracle for runtime in runtimes),
        count_result=len(runtimes),
        scanned_dirs=scanned_dirs,
    )
    return ReportDocument(meta=meta, runtimes=runtimes)


def format_result(result: JavaResult) -> List[str]:
    if result.error is not None:
        return [f"Failed to execute: {result.error}"]
    if result.return_code != 0:
        return [f"Command failed with return code: {result.return_code}"]

    lines = [f"Java executable: {result.path}"]
    if result.properties is not None:
        lines.append(f"Java version: {result.properties.version}")
        lines.append(f"Java vendor: {result.properties.vendor}")
        if result.properties.runtime_name:
            lines.append(f"Java runtime name: {result.properties.runtime_name}")
    lines.extend(result.warnings)
    return lines


def format_results(results: Iterable[JavaResult]) -> str:
    """Render results for the console, each followed by a blank line."""

    return "".join("\n".join(format_result(result)) + "\n\n" for result in results)


def post_json(payload: str, url: str, timeout: float = 30) -> None:
    """POST ``payload`` to ``url``; anything but HTTP 200 raises :class:`PostError`."""

    request = Request(
        url,
        data=payload.encode("utf-8"),
        headers={"Content-Type": "application/json"},
        method="POST",
    )
    try:
        with urlopen(request, timeout=timeout) as response:
            status = response.status
            reason = response.reason
            body = response.read().decode("utf-8", errors="replace")
    except HTTPError as exc:
        status, reason = exc.code, exc.reason
        body = exc.read().decode("utf-8", errors="replace")
    except (URLError, TimeoutError, OSError) as exc:
        raise PostError(f"failed to connect to server at {url}: {exc}") from exc

    if status != 200:
        message = f"server returned {status} {reason}"
        if body:
            message = f"{message}: {body}"
        raise PostError(message)
