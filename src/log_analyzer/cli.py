from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from datetime import datetime

from log_analyzer.core.filters import FilterConfig
from log_analyzer.core.log_service import analyze_file
from log_analyzer.core.time_window import parse_bound, parse_levels
from log_analyzer.logging_setup import CLI_FORMAT, configure_logging

LOGGER = logging.getLogger(__name__)


def _levels_arg(s: str) -> frozenset[str]:
    try:
        return parse_levels(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _bound_arg(s: str) -> datetime:
    try:
        return parse_bound(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="log-analyzer",
        description="Summarize a plain-text log file (counts, response time, top message).",
    )
    p.add_argument("log_path", help="Log file to analyze (.log or .txt)")
    p.add_argument(
        "-level",
        "--level",
        dest="levels",
        type=_levels_arg,
        default=frozenset({"info"}),
        help="Comma-separated levels to analyze, e.g. 'info,warn,error'. Default: info",
    )
    p.add_argument(
        "-start",
        "--start",
        type=_bound_arg,
        default=None,
        help="Start time filter, e.g. '2021-01-01T00:00:00'",
    )
    p.add_argument(
        "-end",
        "--end",
        type=_bound_arg,
        default=None,
        help="End time filter, e.g. '2021-01-01T23:59:59'",
    )
    p.add_argument("--json", action="store_true", help="Print the report as JSON")
    p.add_argument(
        "--legacy-filter",
        action="store_true",
        help="Evaluate filters without excluding anything (old behavior)",
    )
    return p


def main(argv: Sequence[str] | None = None) -> None:
    configure_logging(CLI_FORMAT)
    args = build_parser().parse_args(argv)

    try:
        config = FilterConfig(
            levels=args.levels,
            start=args.start,
            end=args.end,
            legacy_passthrough=args.legacy_filter,
        )
        result = analyze_file(args.log_path, config)
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(2)
    except OSError as e:
        print(f"Error: failed to open file: {e}", file=sys.stderr)
        raise SystemExit(2)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)

    if result.invalid_lines:
        LOGGER.info("skipped %d invalid line(s)", result.invalid_lines)

    if args.json:
        print(result.report.summary().model_dump_json(indent=2))
    else:
        sys.stdout.write(result.report.render())


if __name__ == "__main__":
    main()
