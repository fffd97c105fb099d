"""
Business search simulator -- terminal front end.

Usage
-----
    python -m src.main -k restaurant -c Dhaka
    python -m src.main -k hotels -c London --max-records 20
    python -m src.main -k gym -c Tokyo --duration 30 --format xml
"""

import sys
import time
import argparse
from pathlib import Path
from typing import Dict, Optional

from loguru import logger

import src.config as cfg
from src.core.controller import RunController, RunStatus
from src.core.error_handler import ErrorHandler
from src.core.exceptions import SearchError
from src.models.business import BusinessRecord
from src.utils.exporter import EXPORTERS, export_all

POLL_INTERVAL: float = 0.2


# -- Helpers ---------------------------------------------------------------

def _log_record(record: BusinessRecord) -> None:
    logger.info(
        "  {:<28} | {:<16} | {:<36} | {:.1f} ({} reviews)",
        record.name,
        record.phone,
        record.address,
        record.rating,
        record.reviews,
    )


def _log_status(status: RunStatus) -> None:
    if status is RunStatus.RUNNING:
        logger.info("Extracting businesses ... (Ctrl+C to stop)")


def _run_until_done(
    controller: RunController,
    max_records: Optional[int],
    duration: Optional[float],
) -> None:
    """Block until the user interrupts or a record/time limit is hit."""
    deadline = time.monotonic() + duration if duration else None
    try:
        while controller.is_running:
            if max_records and controller.found >= max_records:
                logger.info("Record limit reached ({})", max_records)
                break
            if deadline and time.monotonic() >= deadline:
                logger.info("Time limit reached ({:.1f}s)", duration)
                break
            time.sleep(POLL_INTERVAL)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    finally:
        controller.stop_run()


# -- Single-run driver -----------------------------------------------------

def run_search(
    keyword: str,
    city: str,
    error_handler: ErrorHandler,
    max_records: Optional[int] = None,
    duration: Optional[float] = None,
    fmt: str = "all",
    export: bool = True,
) -> dict:
    """
    Execute one simulated search run and export what it collected.

    Returns a summary dict with the record count and file paths.
    """
    with RunController() as controller:
        controller.on_record(_log_record)
        controller.on_status(_log_status)

        logger.info("=" * 60)
        logger.info("SEARCH: '{}' in '{}'", keyword, city)
        logger.info("=" * 60)

        controller.start_run(keyword, city)
        _run_until_done(controller, max_records, duration)

        records = controller.store.snapshot()
        files: Dict[str, Path] = {}
        if export:
            output_dir = cfg.OUTPUT_DIR
            if fmt == "all":
                files = error_handler.retry_with_backoff(
                    export_all, records, controller.keyword, controller.city, output_dir
                )
            else:
                files[fmt] = error_handler.retry_with_backoff(
                    EXPORTERS[fmt], records, controller.keyword, controller.city, output_dir
                )

        return {
            "keyword": controller.keyword,
            "city": controller.city,
            "found": len(records),
            "files": files,
        }


# -- CLI -------------------------------------------------------------------

def main() -> None:
    parser = argparse.ArgumentParser(
        description="Business Data Extractor (simulated search)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m src.main -k restaurant -c Dhaka\n"
            "  python -m src.main -k hotels -c London --max-records 20\n"
            "  python -m src.main -k gym -c Tokyo --duration 30 --format xml\n"
        ),
    )
    parser.add_argument(
        "-k", "--keyword",
        type=str,
        required=True,
        help="Search keyword (e.g. restaurants, hotels, pharmacies)",
    )
    parser.add_argument(
        "-c", "--city",
        type=str,
        required=True,
        help="City or location (e.g. Dhaka, New York, London)",
    )
    parser.add_argument(
        "--max-records",
        type=int,
        default=None,
        help="Stop after this many records (default: run until Ctrl+C)",
    )
    parser.add_argument(
        "--duration",
        type=float,
        default=None,
        help="Stop after this many seconds (default: run until Ctrl+C)",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=None,
        help=f"Seconds between records (default: {cfg.EMIT_INTERVAL})",
    )
    parser.add_argument(
        "--format",
        choices=["all", *EXPORTERS],
        default="all",
        help="Export format (default: all)",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help=f"Output directory for XLSX/XML (default: {cfg.OUTPUT_DIR})",
    )
    parser.add_argument(
        "--no-export",
        action="store_true",
        default=False,
        help="Skip exporting the collected records",
    )
    args = parser.parse_args()

    # -- Apply CLI overrides -----------------------------------------------
    if args.interval is not None:
        if args.interval <= 0:
            parser.error("--interval must be greater than 0")
        cfg.EMIT_INTERVAL = args.interval
    if args.output_dir:
        cfg.OUTPUT_DIR = Path(args.output_dir)

    # -- Run ---------------------------------------------------------------
    error_handler = ErrorHandler()
    start = time.time()

    try:
        summary = run_search(
            args.keyword,
            args.city,
            error_handler,
            max_records=args.max_records,
            duration=args.duration,
            fmt=args.format,
            export=not args.no_export,
        )
    except SearchError as exc:
        logger.error("{}", exc)
        sys.exit(1)

    elapsed = time.time() - start

    # -- Report ------------------------------------------------------------
    logger.info("")
    logger.info("=" * 60)
    logger.info("SEARCH COMPLETE  ({:.1f}s elapsed)", elapsed)
    logger.info("=" * 60)
    logger.info(
        "  '{}' in '{}'  ->  {} businesses found",
        summary["keyword"],
        summary["city"],
        summary["found"],
    )
    for fmt, path in summary["files"].items():
        logger.info("  {} -> {}", fmt.upper(), path)
    logger.info("=" * 60)


if __name__ == "__main__":
    main()
