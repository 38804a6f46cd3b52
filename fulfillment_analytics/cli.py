"""Command line entry points for fulfillment analytics."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

import structlog

from fulfillment_analytics.analyses.projections import (
    ProjectionConfig,
    build_projections_from_source,
)
from fulfillment_analytics.analyses.time_buckets import MonthBucketing
from fulfillment_analytics.formatters.markdown_tables import format_projections_summary

logger = structlog.get_logger(__name__)


MAX_INPUT_BYTES = 25 * 1024 * 1024  # 25 MiB cap to avoid accidental OOM


def configure_logging(level: int = logging.INFO) -> None:
    """Send structured JSON logs to stderr so stdout carries only results."""
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def load_records(path: Path) -> list[dict[str, Any]]:
    """Read a JSON list of raw fulfillment records.

    Accepts either a bare list or an object with a ``records`` list.
    """
    resolved = path.resolve()
    size = resolved.stat().st_size
    if size > MAX_INPUT_BYTES:
        raise ValueError(
            f"Input file {resolved} is {size} bytes; exceeds limit of {MAX_INPUT_BYTES} bytes"
        )
    with resolved.open("r", encoding="utf-8") as fh:
        payload = json.load(fh)
    if isinstance(payload, dict):
        payload = payload.get("records")
    if not isinstance(payload, list):
        raise ValueError("Expected a list of fulfillment records in the input file")
    return payload


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build chart-ready fulfillment projections from a JSON file."
    )
    parser.add_argument(
        "input", type=Path, help="Path to JSON file with raw fulfillment records"
    )
    parser.add_argument(
        "--top-n",
        type=int,
        default=ProjectionConfig().top_n,
        help="Entries kept in the top items / top customers rankings.",
    )
    parser.add_argument(
        "--bucketing",
        choices=[item.value for item in MonthBucketing],
        default=MonthBucketing.YEAR_MONTH.value,
        help="Month bucket labels; month_name folds years together.",
    )
    parser.add_argument(
        "--colors",
        choices=["hash", "random"],
        default="hash",
        help="Series color assignment (hash is stable across runs).",
    )
    parser.add_argument(
        "--seed", type=int, help="Seed for random color assignment."
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=["json", "markdown"],
        default="json",
        help="Output format written to stdout.",
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors."
    )
    return parser


def build_projections_cli(argv: list[str] | None = None) -> int:
    """Build fulfillment projections and write them to stdout.

    An unreadable or malformed input file is logged and treated as an empty
    record collection; the command still prints (empty) projections.

    Args:
        argv: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(logging.WARNING if args.quiet else logging.INFO)

    try:
        config = ProjectionConfig(
            top_n=args.top_n,
            bucketing=MonthBucketing(args.bucketing),
            color_mode=args.colors,
            color_seed=args.seed,
        )
    except ValueError as exc:
        parser.error(str(exc))

    projections = build_projections_from_source(
        lambda: load_records(args.input), config
    )

    if args.output_format == "markdown":
        sys.stdout.write(format_projections_summary(projections))
    else:
        json.dump(projections.as_dict(), fp=sys.stdout, indent=2)
        print()

    return 0


def main() -> None:
    raise SystemExit(build_projections_cli())


if __name__ == "__main__":  # pragma: no cover
    main()
