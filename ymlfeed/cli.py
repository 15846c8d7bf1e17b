"""
Command Line Entry Points

build_main runs one full build and prints one line per written feed.
list_main prints the discoverable sources.

Usage:
    python3 scripts/build_feeds.py
    python3 scripts/build_feeds.py --source-id shop-a --source-id shop-b
    python3 scripts/build_feeds.py --concurrency 10 --timeout-ms 8000 --base-url https://files.example/
    python3 scripts/build_feeds.py --install-schedule "*-*-* 03:00:00" --unit-dir ~/.config/systemd/user
    python3 scripts/list_sources.py
"""

import argparse
import logging
import os
import shlex
import shutil
import sys
from typing import List, Optional

from dotenv import load_dotenv

from .common.config_loader import DEFAULT_CONFIG_FILE, FeedConfig, load_feed_config
from .common.diagnostics import write_error_record
from .common.errors import FeedError, FetchError
from .common.log_config import setup_logging
from .common.remote_text import RemoteTextProvider
from .extraction.enricher import ProductEnricher
from .extraction.fetcher import HttpFetcher
from .orchestrator import FeedOrchestrator
from .scheduling import Schedule, SystemdUnitWriter
from .sources.csv_workbook import CsvWorkbookSource

logger = logging.getLogger(__name__)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config", "-c",
        default=DEFAULT_CONFIG_FILE,
        help=f"YAML config file name or path (default: {DEFAULT_CONFIG_FILE})"
    )
    parser.add_argument(
        "--sources-dir",
        help="Root directory of the CSV workbooks (overrides SOURCES_DIR)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress info messages, show only warnings and errors"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build YML product feeds from tabular sources"
    )
    _add_common_arguments(parser)
    parser.add_argument(
        "--output-dir", "-o",
        help="Directory for generated feeds (overrides FILES_DIR)"
    )
    parser.add_argument(
        "--source-id", "-s",
        action="append",
        dest="source_ids",
        help="Build only this source (repeatable; default: discover all)"
    )
    parser.add_argument(
        "--concurrency", "-n",
        type=int,
        help="Maximum parallel page fetches per source"
    )
    parser.add_argument(
        "--timeout-ms",
        type=int,
        help="Per-page fetch timeout in milliseconds"
    )
    parser.add_argument(
        "--base-url",
        help="Public URL of the output directory for download links"
    )
    parser.add_argument(
        "--print-license",
        action="store_true",
        help="Print the license text from LICENSE_URL and exit"
    )
    parser.add_argument(
        "--install-schedule",
        metavar="ON_CALENDAR",
        help='Write systemd units running this build on a schedule (e.g. "*-*-* 03:00:00") and exit'
    )
    parser.add_argument(
        "--unit-dir",
        default=os.path.expanduser("~/.config/systemd/user"),
        help="Directory for the systemd units (default: ~/.config/systemd/user)"
    )
    return parser


def resolve_config(args: argparse.Namespace) -> FeedConfig:
    """YAML defaults, then environment, then command line flags."""
    config = load_feed_config(args.config)
    return config.with_overrides(
        sources_dir=args.sources_dir,
        output_dir=getattr(args, "output_dir", None),
        source_ids=getattr(args, "source_ids", None),
        concurrency=getattr(args, "concurrency", None),
        timeout_ms=getattr(args, "timeout_ms", None),
        base_url=getattr(args, "base_url", None),
    )


def create_orchestrator(config: FeedConfig, fetcher: HttpFetcher) -> FeedOrchestrator:
    """Wire the CSV workbook source, enricher and builder together."""
    source = CsvWorkbookSource(
        config.sources_dir,
        settings_table=config.settings_table,
        categories_table=config.categories_table,
        products_table=config.products_table,
    )
    enricher = ProductEnricher(
        fetcher,
        concurrency=config.concurrency,
        timeout=config.timeout_seconds,
    )
    return FeedOrchestrator(config, source, enricher, source_catalog=source)


def print_license(config: FeedConfig, fetcher: HttpFetcher) -> int:
    if not config.license_url:
        print("[ERR] LICENSE_URL is not configured")
        return 1
    try:
        print(RemoteTextProvider(config.license_url, fetcher).get())
    except FetchError as e:
        print(f"[ERR] {e}")
        return 1
    return 0


def schedule_command(config_arg: str) -> str:
    """
    Command line for the scheduled build.

    Prefers the installed ymlfeed-build console script; a source checkout
    falls back to scripts/build_feeds.py. Every argument is shell-quoted.
    """
    console_script = shutil.which("ymlfeed-build")
    if console_script:
        argv = [console_script]
    else:
        script = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "scripts", "build_feeds.py"))
        argv = [sys.executable, script]
    return shlex.join(argv + ["--config", config_arg, "--quiet"])


def install_schedule(on_calendar: str, unit_dir: str, config_arg: str) -> int:
    writer = SystemdUnitWriter(unit_dir, schedule_command(config_arg), working_dir=os.getcwd())
    result = writer.install(Schedule(on_calendar=on_calendar))
    if not result.ok:
        print(f"[ERR] {result.message}")
        return 1
    for path in result.paths:
        print(f"[OK] {path}")
    print(result.message)
    return 0


def build_main(argv: Optional[List[str]] = None) -> int:
    """Run one build; returns the process exit code."""
    load_dotenv()
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    if args.install_schedule:
        return install_schedule(args.install_schedule, args.unit_dir, args.config)

    try:
        config = resolve_config(args)
    except (FeedError, FileNotFoundError) as e:
        print(f"[ERR] {e}")
        return 1

    with HttpFetcher() as fetcher:
        if args.print_license:
            return print_license(config, fetcher)

        orchestrator = create_orchestrator(config, fetcher)
        try:
            results = orchestrator.build_all()
        except Exception as e:
            logger.exception("Build failed")
            record = write_error_record(config.errors_dir, e, context=orchestrator.describe())
            print(f"[ERR] {e} (details: {record})")
            return 1

    for result in results:
        print(f"[OK] {result.filename}\t{result.url}")
    return 0


def list_main(argv: Optional[List[str]] = None) -> int:
    """Print discoverable sources as "<id>\\t<display name>"."""
    load_dotenv()
    parser = argparse.ArgumentParser(description="List discoverable feed sources")
    _add_common_arguments(parser)
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        config = resolve_config(args)
    except (FeedError, FileNotFoundError) as e:
        print(f"[ERR] {e}")
        return 1

    source = CsvWorkbookSource(config.sources_dir)
    for ref in source.list():
        print(f"{ref.id}\t{ref.display_name}")
    return 0
