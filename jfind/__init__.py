"""Inventory of the Java runtimes installed below a directory."""

from .__about__ import __version__
from .java_env import JavaResult, evaluate_java, is_java_candidate
from .properties import JavaProperties, parse_java_properties
from .report import ReportDocument, build_report, format_duration_iso8601, post_json
from .scanner import JavaFinder, ScanError, ScanStatistics
from .walker import WalkEntry, walk

__all__ = [
    "__version__",
    "JavaResult",
    "evaluate_java",
    "is_java_candidate",
    "JavaProperties",
    "parse_java_properties",
    "ReportDocument",
    "build_report",
    "format_duration_iso8601",
    "post_json",
    "JavaFinder",
    "ScanError",
    "ScanStatistics",
    "WalkEntry",
    "walk",
]
