"""
Report Runner — Command-line driver for the seller performance report.

Usage:
    python -m sales_engine.processors.seller_performance.run_report data/sales.json
    python -m sales_engine.processors.seller_performance.run_report data/ \\
        --format csv --output report.csv --rounding final
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from ...config import settings
from .analyzer import SalesAnalyzer, report_to_frame
from .core.validation import SalesDataValidationError
from .json_ingestor import JsonIngestError, SalesDataIngestor


logger = logging.getLogger(__name__)

EXIT_INGEST_ERROR = 1
EXIT_VALIDATION_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run_report",
        description="Rank sellers by profit and compute bonuses.",
    )
    parser.add_argument("data", help="JSON file or directory with the sales dataset")
    parser.add_argument("-o", "--output", help="Write to this file instead of stdout")
    parser.add_argument("--format", choices=("json", "csv"), default="json")
    parser.add_argument(
        "--snapshot", action="store_true",
        help="Include team totals and run statistics (json only)",
    )
    parser.add_argument("--rounding", choices=("per_step", "final"), default=None)
    parser.add_argument("--top-n", type=int, default=None)
    parser.add_argument("--log-level", default=settings.LOG_LEVEL)
    return parser


def render(report: list[dict] | dict, fmt: str) -> str:
    if fmt == "csv":
        rows = report["sellers"] if isinstance(report, dict) else report
        return report_to_frame(rows).to_csv(index=False)
    return json.dumps(report, indent=2, ensure_ascii=False)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        data = SalesDataIngestor().ingest(args.data)
    except JsonIngestError as exc:
        print(f"[FAIL] {exc}", file=sys.stderr)
        return EXIT_INGEST_ERROR

    options = {"rounding": args.rounding, "top_n": args.top_n}
    analyzer = SalesAnalyzer()
    try:
        if args.snapshot:
            result = analyzer.snapshot(data, options)
        else:
            result = analyzer.analyze(data, options)
    except SalesDataValidationError as exc:
        print(f"[FAIL] Invalid input: {exc}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    text = render(result, args.format)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as fh:
            fh.write(text)
        logger.info("Report written to %s", args.output)
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
