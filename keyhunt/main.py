#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
keyhunt - a lion's hunt for dead translation keys in your codebase

Loads a JSON translation catalog, scans the source tree for references to
each key and reports (or removes) the keys nothing refers to.
"""

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional, Sequence

from keyhunt.config.settings import settings
from keyhunt.core.catalog import load_translations, remove_unused_keys
from keyhunt.core.discovery import discover_source_files, validate_source_dirs
from keyhunt.core.exceptions import KeyHuntException, ReportWriteError
from keyhunt.core.hunt_logging import setup_logging, logger
from keyhunt.core.ignore import load_ignore_patterns
from keyhunt.core.output import (
    print_results, print_cleared_results, print_validate_results, print_error
)
from keyhunt.core.scanner import check_translation_usage
from keyhunt.core.version import get_version_banner
from keyhunt.models.schemas import HuntStats, HuntReport

USAGE_EXAMPLES = (
    "  Example: hunt <translation_path> --dir src",
    "           hunt <translation_path>  # searches current directory",
)


class ProgressLine:
    """Single status line on stderr, redrawn for every scanned file"""

    def __init__(self, stream=None, message: str = "The lion is on the hunt…"):
        self.stream = stream if stream is not None else sys.stderr
        self.message = message
        self._width = 0

    def __call__(self, index: int, total: int, path: str):
        line = f"{self.message} {index}/{total}"
        self._width = max(self._width, len(line))
        self.stream.write("\r" + line.ljust(self._width))
        self.stream.flush()

    def clear(self):
        if self._width:
            self.stream.write("\r" + " " * self._width + "\r")
            self.stream.flush()


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="hunt",
        description="A lion's hunt for dead translation keys in your codebase.",
    )
    ap.add_argument("translation_path", help="Translation file (JSON) or directory containing JSON files")
    ap.add_argument("-d", "--dir", dest="source_dirs", action="append", default=[],
                    help="Source directory to search (repeatable, default: current directory)")
    ap.add_argument("-s", "--stats", dest="show_stats", action="store_true",
                    help="Show statistics (files processed, time elapsed, etc.)")
    ap.add_argument("-c", "--clear", dest="clear_unused", action="store_true",
                    help="Remove unused keys from translation files")
    ap.add_argument("--validate", action="store_true",
                    help="Exit with code 1 if unused keys are found (for pre-commit hooks)")
    ap.add_argument("--keys", dest="show_keys", action="store_true", help="Show the list of unused keys")
    ap.add_argument("--ext", dest="extensions", action="append", default=None,
                    help="Source file extension to scan (repeatable, default: js, jsx, ts, tsx)")
    ap.add_argument("--ignore", dest="ignore_patterns", action="append", default=[],
                    help="Extra gitignore-style pattern to skip (repeatable)")
    ap.add_argument("--report-json", default=None, help="Also write a JSON report to this path")
    ap.add_argument("--log-level", default=None, choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                    help="Log level for stderr diagnostics (default: settings)")
    ap.add_argument("--version", action="version", version=get_version_banner())
    return ap


def write_report(path: str, report: HuntReport) -> Path:
    report_path = Path(path).resolve()
    try:
        report_path.parent.mkdir(parents=True, exist_ok=True)
        report_path.write_text(report.to_json(), encoding="utf-8")
    except OSError as e:
        raise ReportWriteError(report_path, e) from e
    return report_path


def handle_unused(args: argparse.Namespace) -> bool:
    """Run one hunt; returns True when unused keys were found"""
    start_time = time.perf_counter()
    source_dirs = validate_source_dirs(args.source_dirs)

    translations = load_translations(args.translation_path)
    ignore = load_ignore_patterns(list(settings.extra_ignore_patterns) + list(args.ignore_patterns))
    source_files = discover_source_files(source_dirs, ignore=ignore, extensions=args.extensions)

    progress = None
    if settings.show_progress and sys.stderr.isatty():
        progress = ProgressLine()
    try:
        used_keys = check_translation_usage(translations, source_files, progress)
    finally:
        if progress is not None:
            progress.clear()

    unused_keys: List[str] = sorted(k for k in translations if k not in used_keys)

    if args.clear_unused and unused_keys:
        remove_unused_keys(args.translation_path, unused_keys, used_keys)

    stats = HuntStats(
        files_total=len(source_files),
        keys_total=len(translations),
        unused_keys_count=len(unused_keys),
        duration=time.perf_counter() - start_time,
    )

    if args.clear_unused:
        print_cleared_results(unused_keys, stats, show_stats=args.show_stats)
    elif args.validate:
        print_validate_results(unused_keys)
    else:
        print_results(unused_keys, stats, show_stats=args.show_stats, show_keys=args.show_keys)

    if args.report_json:
        report = HuntReport(
            translation_path=str(args.translation_path),
            source_dirs=source_dirs,
            unused_keys=unused_keys,
            cleared=args.clear_unused,
            stats=stats,
        )
        write_report(args.report_json, report)

    logger.info('hunt_finished', files=stats.files_total, keys=stats.keys_total,
                unused=stats.unused_keys_count)
    return bool(unused_keys)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    argv = list(sys.argv[1:] if argv is None else argv)

    if not argv:
        parser.print_help(sys.stderr)
        return 2

    args = parser.parse_args(argv)
    setup_logging(level=args.log_level)

    try:
        has_unused = handle_unused(args)
    except KeyHuntException as e:
        print_error(str(e))
        for line in USAGE_EXAMPLES:
            print(line, file=sys.stderr)
        return 1

    # In validate mode unused keys fail the run
    if args.validate and has_unused:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
