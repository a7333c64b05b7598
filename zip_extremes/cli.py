"""Report the easternmost, westernmost, northernmost and southernmost ZIP codes per state."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from zip_extremes.common.config_loader import Settings, load_settings
from zip_extremes.common.constants import (
    EXIT_CONFIG_ERROR,
    EXIT_EMPTY_RESULT,
    EXIT_OPEN_FAILURE,
    EXIT_SUCCESS,
    EXIT_USAGE,
    LOG_LEVELS,
)
from zip_extremes.common.errors import ConfigError, EmptyResultError, SourceOpenError, UsageError
from zip_extremes.common.ids import generate_run_id
from zip_extremes.common.logging import build_logger, close_logger, log_event
from zip_extremes.pipeline.extremes import aggregate_extremes
from zip_extremes.pipeline.report import build_summary, render_extremes_table, write_run_summary
from zip_extremes.reader.record_reader import RecordReader


class _HelpShown(Exception):
    pass


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):
        self.print_usage(sys.stderr)
        raise UsageError(message)

    def exit(self, status: int = 0, message: str | None = None):
        # Only reached from --help; errors go through error() above.
        if message:
            self._print_message(message, sys.stderr)
        raise _HelpShown()


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = _ArgumentParser(prog="zip-extremes", description=__doc__)
    parser.add_argument("csv_path")
    parser.add_argument("--config-dir", default="./config")
    parser.add_argument("--overlay-config-dir", default=None)
    parser.add_argument("--log-level", default=None, choices=list(LOG_LEVELS))
    parser.add_argument("--log-dir", default=None)
    parser.add_argument("--run-id", default=None)
    parser.add_argument("--summary-json", default=None)
    return parser.parse_args(argv)


def _fail(logger: logging.Logger, run_id: str, exc: Exception, *lines: str) -> None:
    for line in lines:
        print(line, file=sys.stderr)
    log_event(
        logger,
        str(exc),
        level=logging.ERROR,
        run_id=run_id,
        event="RUN_FAIL",
        status="error",
        error_code=getattr(exc, "error_code", "UNEXPECTED_ERROR"),
    )


def run_command(args: argparse.Namespace) -> int:
    run_id = args.run_id or generate_run_id()
    overlay_config_dir = Path(args.overlay_config_dir) if args.overlay_config_dir else None
    try:
        settings = load_settings(Path(args.config_dir), overlay_config_dir=overlay_config_dir)
    except ConfigError as exc:
        print(f"Error: Invalid configuration: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    log_dir = Path(args.log_dir) if args.log_dir else None
    logger = build_logger(run_id, level=args.log_level or settings.log_level, log_dir=log_dir)
    try:
        return _run(args, settings, logger, run_id)
    finally:
        close_logger(logger)


def _run(args: argparse.Namespace, settings: Settings, logger: logging.Logger, run_id: str) -> int:
    source = args.csv_path
    log_event(logger, "run start", run_id=run_id, source=source, event="RUN_START", status="ok")

    with RecordReader(encoding=settings.encoding, logger=logger) as reader:
        try:
            reader.open(source)
        except SourceOpenError as exc:
            _fail(
                logger,
                run_id,
                exc,
                f"Error: Could not open file '{source}'",
                "Please check that the file exists and is readable.",
            )
            return EXIT_OPEN_FAILURE

        print(f"Reading ZIP code data from: {source}")
        print("Processing records...")
        print()

        try:
            records = reader.read_all()
        except SourceOpenError as exc:
            _fail(logger, run_id, exc, f"Error: Could not read file '{source}'")
            return EXIT_OPEN_FAILURE
        skipped = reader.skipped_count

    log_event(
        logger,
        "records read",
        run_id=run_id,
        stage="read",
        source=source,
        event="STAGE_END",
        status="ok" if skipped == 0 else "partial",
        rows_out=len(records),
    )

    if not records:
        exc = EmptyResultError(f"No valid records in {source}")
        _fail(logger, run_id, exc, "Error: No valid records found in file.")
        return EXIT_EMPTY_RESULT

    print(f"Total records read: {len(records)}")
    print()

    extremes = aggregate_extremes(records)
    log_event(
        logger,
        "extremes aggregated",
        run_id=run_id,
        stage="aggregate",
        source=source,
        event="STAGE_END",
        status="ok",
        rows_in=len(records),
        rows_out=len(extremes),
    )

    print("Analysis Results:")
    print("=================")
    print()
    for line in render_extremes_table(extremes, settings.report):
        print(line)
    print()
    print(f"Total states/territories: {len(extremes)}")

    if args.summary_json:
        summary = build_summary(
            extremes,
            run_id=run_id,
            source=source,
            records_read=len(records),
            lines_skipped=skipped,
        )
        summary_path = write_run_summary(Path(args.summary_json), summary)
        log_event(logger, f"summary written to {summary_path}", run_id=run_id, event="SUMMARY_WRITTEN", status="ok")

    log_event(logger, "run end", run_id=run_id, source=source, event="RUN_END", status="ok")
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    try:
        args = parse_args(sys.argv[1:] if argv is None else argv)
    except _HelpShown:
        return EXIT_SUCCESS
    except UsageError:
        print("Usage: zip-extremes <csv_filename>", file=sys.stderr)
        print("Example: zip-extremes us_postal_codes.csv", file=sys.stderr)
        return EXIT_USAGE
    return run_command(args)


if __name__ == "__main__":
    raise SystemExit(main())
