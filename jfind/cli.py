"""Command line interface for scanning a filesystem for Java runtimes."""

from __future__ import annotations

import argparse
import logging
import os
from datetime import datetime, timezone
from typing import List, Optional

from .report import DEFAULT_POST_URL, PostError, build_report, format_results, post_json
from .scanner import JavaFinder, ScanError

LOGGER = logging.getLogger("jfind.cli")

POST_URL_ENV = "JFIND_POST_URL"


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(message)s")


def _post_url(args: argparse.Namespace) -> str:
    if args.url:
        return args.url
    return os.environ.get(POST_URL_ENV) or DEFAULT_POST_URL


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find Java executables and report what they are")
    parser.add_argument("--path", default=".", help="Start path for searching")
    parser.add_argument("--depth", type=int, default=-1, help="Maximum depth to search (-1 for unlimited)")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose output")
    parser.add_argument("--eval", dest="evaluate", action="store_true", help="Evaluate found java executables")
    parser.add_argument("--json", action="store_true", help="Output results in JSON format")
    parser.add_argument("--post", action="store_true", help="Post JSON output to server (implies --json)")
    parser.add_argument("--timeout", type=float, help="Seconds to wait for each evaluated executable")
    parser.add_argument(
        "url",
        nargs="?",
        help=f"Collector URL for --post (default: ${POST_URL_ENV} or {DEFAULT_POST_URL})",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    if args.post:
        args.json = True

    start_path = os.path.abspath(args.path)
    finder = JavaFinder(
        start_path,
        args.depth,
        verbose=args.verbose,
        evaluate=args.evaluate,
        timeout=args.timeout,
    )

    started = datetime.now(timezone.utc)
    try:
        results = finder.find()
    except ScanError as exc:
        LOGGER.error("Error during search: %s", exc)
        return 1

    if not args.json:
        print(format_results(results), end="")
        return 0

    report = build_report(
        results,
        finder.stats.scanned_dirs,
        started,
        datetime.now(timezone.utc),
        evaluate=args.evaluate,
    )
    payload = report.to_json()

    if not args.post:
        print(payload)
        return 0

    url = _post_url(args)
    LOGGER.info("Posting JSON to %s...", url)
    try:
        post_json(payload, url)
    except PostError as exc:
        LOGGER.error("Error: %s", exc)
        return 1
    LOGGER.info("Successfully posted JSON to %s", url)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
