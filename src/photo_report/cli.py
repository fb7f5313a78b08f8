"""
Module: cli

Purpose:
    Command line interface for exporting photo reports.

Commands:
    - export: Write the PDF (and metadata) of one report
    - list: Show report numbers found in a records file
    - encode: Encode a raw image as a report-ready JPEG

Dependencies:
    - argparse (std)
    - photo_report.builder: Export pipeline
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections import Counter
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import List, Optional

from photo_report import __version__
from photo_report.core.errors import ReportError, ValidationError
from photo_report.core.utils.datauri import encode_data_url
from photo_report.builder.config import ReportConfig, load_config
from photo_report.builder.controller import export_report
from photo_report.builder.grouping import available_report_ids, next_report_id
from photo_report.builder.images import encode_image, load_logo
from photo_report.builder.loading import load_records

logger = logging.getLogger("photo_report")

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO date (YYYY-MM-DD): {value}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="photo-report",
        description="Build site photo intervention reports as PDF",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    export = sub.add_parser("export", help="Export one report to PDF")
    export.add_argument("records", type=Path, help="Records file (.json or .jsonl)")
    export.add_argument("--report-id", type=int, required=True, help="Report number to export")
    export.add_argument("-o", "--output-dir", type=Path, default=Path("output"), help="Output directory")
    export.add_argument("--logo", type=Path, help="Company logo image")
    export.add_argument("--config", type=Path, help="JSON config file")
    export.add_argument("--locale", help="Override the config locale (e.g. fr-FR, en-US)")
    export.add_argument("--date", type=_iso_date, help="Date used in the file name (default: today)")
    export.add_argument("--no-metadata", action="store_true", help="Skip the metadata JSON")
    export.add_argument("--strict", action="store_true", help="Validate records against the JSON Schema")

    lister = sub.add_parser("list", help="List report numbers in a records file")
    lister.add_argument("records", type=Path, help="Records file (.json or .jsonl)")

    encode = sub.add_parser("encode", help="Encode an image for a photo record")
    encode.add_argument("image", type=Path, help="Source image")
    encode.add_argument("-o", "--output", type=Path, help="Write the JPEG here")
    encode.add_argument("--data-url", action="store_true", help="Print the result as a data URL")

    return parser


def _cmd_export(args: argparse.Namespace) -> int:
    config = load_config(args.config) if args.config else ReportConfig()
    try:
        if args.locale:
            config = replace(config, locale=args.locale)
        if args.no_metadata:
            config = replace(config, write_metadata=False)
    except ValueError as e:
        raise ValidationError(str(e), path="config") from e

    records = load_records(args.records, strict=args.strict)
    logo = load_logo(args.logo) if args.logo else None

    result = export_report(
        records,
        args.report_id,
        args.output_dir,
        logo,
        config=config,
        today=args.date,
    )
    for warning in result.warnings:
        print(f"warning: {warning}", file=sys.stderr)
    print(f"{result.pdf_path} ({result.page_count} pages)")
    return 0


def _cmd_list(args: argparse.Namespace) -> int:
    records = load_records(args.records)
    counts = Counter(r.report_id for r in records)
    for report_id in available_report_ids(records):
        print(f"{report_id}\t{counts[report_id]} records")
    print(f"next report number: {next_report_id(records)}")
    return 0


def _cmd_encode(args: argparse.Namespace) -> int:
    asset = encode_image(args.image)
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_bytes(asset.data)
        print(f"{args.output} ({asset.width}x{asset.height}, {asset.size_bytes} bytes)")
    if args.data_url or not args.output:
        print(encode_data_url(asset.data, asset.mime))
    return 0


_COMMANDS = {
    "export": _cmd_export,
    "list": _cmd_list,
    "encode": _cmd_encode,
}


def main(argv: Optional[List[str]] = None) -> int:
    """
    CLI entry point.

    Returns:
        Exit status: 0 on success, 1 on a report error
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
    )

    try:
        return _COMMANDS[args.command](args)
    except ReportError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"error: {e.message}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
