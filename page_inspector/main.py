#!/usr/bin/env python3
"""
Page Inspector - checks every resource a web page references.

This tool fetches a page, discovers the resources it loads from its HTML
and CSS, and probes each one for reachability and metadata.

Usage:
    python -m page_inspector.main --url https://example.com --output report.json

Features:
    - Finds scripts, images, srcset entries, stylesheets, preloads,
      iframes, media and CSS url() references
    - Follows linked stylesheets to find the resources they reference
    - Probes with HEAD, falling back to GET when HEAD is refused
    - Refuses private, loopback and non-http(s) targets
"""

import argparse
import asyncio
import json
import logging
import sys

from rich.table import Table

from page_inspector import __version__
from page_inspector.errors import InvalidUrlError, MainFetchError
from page_inspector.inspector import PageInspector
from page_inspector.utils.constants import (
    MAX_RESOURCES,
    PROBE_CONCURRENCY,
    PROBE_TIMEOUT,
)
from page_inspector.utils.log import (
    console,
    set_level,
    setup_logger,
    print_status,
    print_success,
    print_error,
    print_info
)


def parse_arguments(argv=None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog='page_inspector',
        description='Inspect the resources referenced by a web page',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s --url https://example.com
    %(prog)s --url https://example.com --output report.json --pretty
    %(prog)s --url https://example.com --concurrency 4 --timeout 10000
        """
    )

    parser.add_argument(
        '--url', '-u',
        type=str,
        required=True,
        help='URL of the page to inspect (e.g., https://example.com)'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        default=None,
        help='Write the JSON report to this file'
    )

    parser.add_argument(
        '--pretty',
        action='store_true',
        help='Indent the JSON report'
    )

    parser.add_argument(
        '--max-resources', '-m',
        type=int,
        default=MAX_RESOURCES,
        help=f'Maximum number of resources to probe (default: {MAX_RESOURCES})'
    )

    parser.add_argument(
        '--concurrency', '-c',
        type=int,
        default=PROBE_CONCURRENCY,
        help=f'Number of resources probed together (default: {PROBE_CONCURRENCY})'
    )

    parser.add_argument(
        '--timeout',
        type=int,
        default=PROBE_TIMEOUT * 1000,
        help=f'Probe timeout in milliseconds (default: {PROBE_TIMEOUT * 1000})'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress output except errors'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser.parse_args(argv)


def print_summary(report) -> None:
    """
    Print the inspection summary.

    Args:
        report: InspectionReport object
    """
    main = report.main
    print_success(
        f"{report.fetched_url}: HTTP {main.status} "
        f"({main.content_type or 'unknown type'}) in {main.time_ms}ms"
    )

    table = Table(show_lines=False)
    table.add_column("Status", justify="right")
    table.add_column("Initiator")
    table.add_column("Method")
    table.add_column("Size", justify="right")
    table.add_column("Time", justify="right")
    table.add_column("URL", overflow="fold")

    for r in report.resources:
        status = str(r.status) if r.status is not None else (r.error or "error")
        style = None if r.ok else "red"
        table.add_row(
            status,
            r.initiator.value if r.initiator else "",
            r.method_tried or "",
            str(r.size) if r.size is not None else "",
            f"{r.time_ms}ms",
            r.url,
            style=style
        )

    console.print(table)

    failed = sum(1 for r in report.resources if not r.ok)
    print_info(f"{len(report.resources)} resources, {failed} not ok")
    print_status(report.note, "dim")


async def main(argv=None) -> int:
    """
    Main entry point for the page inspector.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    args = parse_arguments(argv)

    log_level = logging.DEBUG if args.verbose else (logging.WARNING if args.quiet else logging.INFO)
    setup_logger(level=log_level)
    set_level(log_level)

    inspector = PageInspector(
        max_resources=args.max_resources,
        probe_timeout=args.timeout / 1000,
        concurrency=args.concurrency
    )

    try:
        report = await inspector.inspect(args.url)
    except InvalidUrlError as e:
        print_error(f"Invalid input: {e}")
        return 1
    except MainFetchError as e:
        print_error(f"Failed to fetch target URL: {e.detail}")
        return 1
    except KeyboardInterrupt:
        print_error("\nInspection interrupted by user")
        return 1

    if not args.quiet:
        print_summary(report)

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            json.dump(report.to_dict(), f, indent=2 if args.pretty else None)
        print_success(f"Report written to: {args.output}")

    return 0


def run() -> None:
    """Entry point wrapper for running as module."""
    sys.exit(asyncio.run(main()))


if __name__ == '__main__':
    run()
