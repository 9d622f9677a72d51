"""
Command-line entry point: split a label PDF and print the unique labels.

Flow:
    select input -> split_label_pdf -> select printer -> print_files

Exit codes:
    0  finished (including "nothing to do" cases)
    1  some print jobs failed
    2  fatal input, configuration or unknown --printer
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from label_slicer import __version__
from label_slicer.printing import dialogs
from label_slicer.printing.dispatcher import DEFAULT_PRINT_TIMEOUT, print_files
from label_slicer.slicer import (
    ConfigError,
    SliceConfig,
    SlicerError,
    load_config,
    split_label_pdf,
)
from label_slicer.slicer.config import DEFAULT_OUTPUT_DIR_NAME

logger = logging.getLogger("label_slicer")

EXIT_OK = 0
EXIT_PRINT_FAILED = 1
EXIT_FATAL = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="label-slicer",
        description="Split a shipping-label PDF into one PDF per unique label, then print them.",
    )
    parser.add_argument("pdf", nargs="?", type=Path, help="Input PDF (omit to choose with a dialog)")
    parser.add_argument(
        "-o", "--output-dir", type=Path,
        help=f"Output directory (default: '{DEFAULT_OUTPUT_DIR_NAME}' beside the input)",
    )
    parser.add_argument("--config", type=Path, help="JSON file with slicing settings")
    parser.add_argument("--band-height", type=float, help="Label height in points (default 209.1)")
    parser.add_argument("--printer", help="Printer name (omit to choose with a dialog)")
    parser.add_argument("--no-print", action="store_true", help="Only write the slices")
    parser.add_argument(
        "--print-timeout", type=float, default=DEFAULT_PRINT_TIMEOUT,
        help="Seconds to wait for lp to accept each job (ignored on Windows)",
    )
    parser.add_argument(
        "--fail-fast", action="store_true",
        help="Abort on the first slice that can't be extracted instead of skipping it",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _resolve_config(args: argparse.Namespace) -> SliceConfig:
    config = load_config(args.config) if args.config else SliceConfig()
    return config.with_overrides(
        band_height=args.band_height,
        skip_failed_slices=False if args.fail_fast else None,
    )


def _printer_known(name: str) -> bool:
    """Check a --printer name against the installed printers, logging a miss."""
    printers = dialogs.available_printers()
    if name in printers:
        return True
    known = ", ".join(printers) if printers else "none found"
    logger.error(f"Unknown printer '{name}' (available: {known})")
    return False


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    logger.info("=== Split PDF and Save Only Labels with Matching Text, Then Print ===")

    try:
        config = _resolve_config(args)
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return EXIT_FATAL

    if args.printer and not args.no_print and not _printer_known(args.printer):
        return EXIT_FATAL

    pdf_path = args.pdf or dialogs.select_input_file()
    if pdf_path is None:
        logger.info("No valid PDF selected. Exiting...")
        return EXIT_OK

    output_dir = args.output_dir or pdf_path.parent / DEFAULT_OUTPUT_DIR_NAME

    try:
        result = split_label_pdf(pdf_path, output_dir, config=config)
    except SlicerError as e:
        logger.error(str(e))
        return EXIT_FATAL

    for warning in result.warnings:
        logger.warning(warning)

    if not result.records:
        logger.info("No labels with matching text found to print.")
        return EXIT_OK

    if args.no_print:
        logger.info(f"Wrote {result.accepted_count} label(s) to {result.output_dir}")
        return EXIT_OK

    printer = args.printer or dialogs.select_printer()
    if not printer:
        logger.info("No printer selected. Exiting...")
        return EXIT_OK

    report = print_files(result.paths, printer, timeout=args.print_timeout)
    if not report.all_succeeded:
        logger.warning(
            f"{len(report.failed)} of {len(report.outcomes)} PDFs could not be sent to {printer}"
        )
        return EXIT_PRINT_FAILED

    logger.info("All selected PDFs sent to printer.")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
