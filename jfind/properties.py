"""Parsing of the property dump printed by ``java -XshowSettings:properties``."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Optional

VERSION_KEY = "java.version"
VENDOR_KEY = "java.vendor"
RUNTIME_NAME_KEY = "java.runtime.name"

_PROPERTY_RE = re.compile(r"^\s*([\w.$-]+)\s*=\s?(.*?)\s*$")
_BANNER_VERSION_RE = re.compile(r"\bversion\s+\"([^\"]+)\"")


@dataclass(frozen=True)
class JavaProperties:
    """The runtime properties a scan reports.

    Fields are empty strings when the launcher did not print them.
    """

    version: str = ""
    vendor: str = ""
    runtime_name: str = ""
    raw: Dict[str, str] = field(default_factory=dict, compare=False, repr=False)


def parse_java_properties(text: str) -> Optional[JavaProperties]:
    """Extract version, vendor and runtime name from launcher diagnostics.

    Lines are matched by shape, not position, so banners, warnings and blank
    lines may appear anywhere. Returns ``None`` only for empty input.
    """

    if not text or not text.strip():
        return None

    raw: Dict[str, str] = {}
    banner_version = ""
    for line in text.splitlines():
        match = _PROPERTY_RE.match(line)
        if match:
            raw.setdefault(match.group(1), match.group(2))
            continue
        if not banner_version:
            banner = _BANNER_VERSION_RE.search(line)
            if banner:
                banner_version = banner.group(1)

    return JavaProperties(
        version=raw.get(VERSION_KEY) or banner_version,
        vendor=raw.get(VENDOR_KEY, ""),
        runtime_name=raw.get(RUNTIME_NAME_KEY, ""),
        raw=raw,
    )
