"""
Command line entry point

Flags follow the single-dash style of the original tool (`-file urls.txt`);
the double-dash spelling is accepted too.
"""

import re
import sys
import asyncio
import argparse
import logging
from typing import List, Optional
from . import __version__
from .checker import CheckerBuilder, summarize, Summary
from .cleanup import kill_browser_processes
from .monitoring import LogManager
from .storage import render_report, write_report
from .utils.encoding import read_urls, InputDecodeError

logger = logging.getLogger(__name__)

DURATION_UNITS = {
    'ns': 1e-9,
    'us': 1e-6,
    'µs': 1e-6,
    'ms': 1e-3,
    's': 1.0,
    'm': 60.0,
    'h': 3600.0,
}
DURATION_PART = re.compile(r'(\d+(?:\.\d+)?)(ns|us|µs|ms|s|m|h)')


def parse_duration(value: str) -> float:
    """
    Parse a duration such as "180s", "3m", "1m30s" or "90" into seconds

    Raises:
        argparse.ArgumentTypeError: if the value is not a positive duration
    """
    text = value.strip()
    try:
        seconds = float(text)
    except ValueError:
        seconds = None

    if seconds is None:
        parts = DURATION_PART.findall(text)
        if not parts or ''.join(n + u for n, u in parts) != text:
            raise argparse.ArgumentTypeError(f"invalid duration: {value!r}")
        seconds = sum(float(number) * DURATION_UNITS[unit] for number, unit in parts)

    if seconds <= 0:
        raise argparse.ArgumentTypeError(f"duration must be positive: {value!r}")
    return seconds


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value!r}")
    return number


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog='checkurl',
        add_help=False,
        description="Check the accessibility of multiple URLs, capture screenshots "
                    "and write an HTML report.",
        epilog="Example: checkurl -file urls.txt -concurrency 8"
    )
    p.add_argument('-file', '--file', dest='file', default=None,
                   help="Path to the file containing URLs (required)")
    p.add_argument('-concurrency', '--concurrency', dest='concurrency', type=positive_int, default=4,
                   help="Number of concurrent workers (default 4)")
    p.add_argument('-timeout', '--timeout', dest='timeout', type=parse_duration, default=180.0,
                   help="Deadline of a single capture attempt, e.g. 180s or 3m (default 180s)")
    p.add_argument('-max-retries', '--max-retries', dest='max_retries', type=positive_int, default=3,
                   help="Attempts per URL before giving up (default 3)")
    p.add_argument('-output', '--output', dest='output', default='results.html',
                   help="Path of the HTML report (default results.html)")
    p.add_argument('-log-level', '--log-level', dest='log_level', default='INFO',
                   help="Console log level (default INFO)")
    p.add_argument('-log-dir', '--log-dir', dest='log_dir', default=None,
                   help="Directory for log files (default: console only)")
    p.add_argument('-kill-browser', '--kill-browser', dest='kill_browser', action='store_true',
                   help="Terminate all Chrome/Chromium processes on the host after the run")
    p.add_argument('-version', '--version', action='version', version=f"checkurl {__version__}")
    p.add_argument('-h', '-help', '--help', action='help',
                   help="Show this help information")
    return p


async def main_async(args: argparse.Namespace, urls: List[str]) -> Summary:
    """Check all URLs and write the report"""
    checker = (CheckerBuilder(urls)
               .concurrency(args.concurrency)
               .timeout(args.timeout)
               .max_retries(args.max_retries)
               .build())

    results = await checker.run()
    summary = summarize(results)
    logger.info(f"Generating report with: {summary.as_dict()}")

    html = render_report(results, summary, order=urls)
    await write_report(args.output, html)
    return summary


def print_summary(summary: Summary):
    print("\nSummary:")
    print(f"  Total URLs: {summary.total}")
    print(f"  Accessible URLs: {summary.accessible}")
    print(f"  Inaccessible URLs: {summary.inaccessible}")
    print(f"  Redirected URLs: {summary.redirected}")


def run(argv: Optional[List[str]] = None) -> int:
    """Run the checker and return the process exit code"""
    parser = build_parser()
    args = parser.parse_args(argv)

    print(f"URL Checker version {__version__}")

    if not args.file:
        print("Please provide a file path using the -file flag")
        parser.print_help()
        return 1

    LogManager(log_dir=args.log_dir, log_level=args.log_level)

    try:
        urls = read_urls(args.file)
    except (OSError, InputDecodeError) as e:
        logger.error(f"Error reading URLs from file: {e}")
        return 1

    try:
        summary = asyncio.run(main_async(args, urls))
    except KeyboardInterrupt:
        print("\n🛑 Check stopped by user")
        return 130
    except OSError as e:
        logger.error(f"Failed to save HTML report: {e}")
        return 1
    finally:
        if args.kill_browser:
            kill_browser_processes()

    print_summary(summary)
    print(f"Results saved to {args.output}")
    return 0


def main():
    sys.exit(run())


if __name__ == '__main__':
    main()
