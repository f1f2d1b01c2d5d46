# SPDX-License-Identifier: Apache-2.0
"""
Sheet Localizer - CLI Tool

Applies translations from a localization CSV to the language sections of a
JSON document and shrinks text that no longer fits its container.

Usage:
    localize-doc <document.json> (--csv FILE | --url URL | --sheet-id ID) [options]

Examples:
    localize-doc design.json --csv strings.csv
    localize-doc design.json --url https://docs.google.com/spreadsheets/d/<id>/edit
    localize-doc design.json --csv strings.csv --autosize --min-font-size 8
    localize-doc design.json --csv strings.csv --generate-from EN
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import NoReturn

from dotenv import load_dotenv

from sheet_localizer.core.applier import LocalizeOptions
from sheet_localizer.core.models import Document
from sheet_localizer.errors import LocalizerError
from sheet_localizer.host.memory import InMemoryHost
from sheet_localizer.pipeline.localization_pipeline import (
    GenerateConfig,
    LoadResult,
    LoadStatus,
    LocalizationService,
)
from sheet_localizer.pipeline.notifications import (
    GenerationComplete,
    LocalizationComplete,
    SectionReport,
)

logger = logging.getLogger(__name__)

# Default output directory
DEFAULT_OUTPUT_DIR = "./output/"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed argument Namespace.
    """
    parser = argparse.ArgumentParser(
        prog="localize-doc",
        description="Sheet Localizer - Applies CSV translations to document language sections",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s design.json --csv strings.csv               # Localize all sections
  %(prog)s design.json --url <sheet-url>               # Published or shared sheet
  %(prog)s design.json --sheet-id <id>                 # Google Sheets API
  %(prog)s design.json --csv strings.csv --autosize    # Shrink overflowing text
  %(prog)s design.json --csv strings.csv --selected FR # Only the FR section
  %(prog)s design.json --csv strings.csv --generate-from EN

Environment Variables:
  GOOGLE_SHEETS_API_KEY   API key (required for --sheet-id)
""",
    )

    parser.add_argument(
        "document",
        type=Path,
        help="Path to the JSON document to localize",
    )

    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help=f"Output file path (default: {DEFAULT_OUTPUT_DIR}<document>_localized.json)",
    )

    # Source options
    source_group = parser.add_argument_group("Localization source")
    source = source_group.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--csv",
        type=Path,
        help="Local CSV file",
    )
    source.add_argument(
        "--url",
        help="CSV URL (Google Sheets edit links are converted to CSV export)",
    )
    source.add_argument(
        "--sheet-id",
        help="Google Sheets spreadsheet ID (read via the Sheets API)",
    )
    source_group.add_argument(
        "--api-key",
        help="Google Sheets API key (or set GOOGLE_SHEETS_API_KEY)",
    )

    # Mode options
    mode_group = parser.add_argument_group("Mode")
    mode = mode_group.add_mutually_exclusive_group()
    mode.add_argument(
        "--selected",
        nargs="+",
        metavar="NAME",
        help="Localize only these nodes (by name) instead of every section",
    )
    mode.add_argument(
        "--generate-from",
        metavar="NAME",
        help="Clone the named master section once per other language",
    )
    mode_group.add_argument(
        "--spacing",
        type=float,
        default=50.0,
        help="Gap between generated sections (default: 50)",
    )

    # Autosize options
    fit_group = parser.add_argument_group("Autosize options")
    fit_group.add_argument(
        "--autosize",
        action="store_true",
        help="Shrink text that overflows its container",
    )
    fit_group.add_argument(
        "--min-font-size",
        type=float,
        default=10.0,
        help="Smallest font size autosize may use (default: 10)",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    return parser.parse_args(argv)


async def load_table(service: LocalizationService, args: argparse.Namespace) -> LoadResult:
    """Load the localization table from the selected source.

    Args:
        service: Service to load into.
        args: Command line arguments.

    Returns:
        Load result.
    """
    if args.csv is not None:
        if not args.csv.exists():
            return LoadResult(status=LoadStatus.FAILED, error=f"File not found: {args.csv}")
        return await service.load_csv_text(args.csv.read_text(encoding="utf-8-sig"))

    if args.url is not None:
        return await service.load_csv_url(args.url)

    api_key = args.api_key or os.environ.get("GOOGLE_SHEETS_API_KEY", "")
    return await service.load_sheets_api(args.sheet_id, api_key)


def print_sections(reports: list[SectionReport]) -> None:
    """Print per-section counts and warnings."""
    for report in reports:
        result = report.result
        print(
            f"  {report.name} [{report.language}]: "
            f"{result.localized_count}/{result.total_text_nodes} localized, "
            f"{result.autosized_count} autosized"
        )
        for warning in result.warnings:
            print(f"    - {warning}")


async def run(args: argparse.Namespace) -> int:
    """Execute localization.

    Args:
        args: Command line arguments.

    Returns:
        Exit code (0: success, 1: failure).
    """
    document_path: Path = args.document

    if not document_path.exists():
        print(f"Error: File not found: {document_path}", file=sys.stderr)
        return 1

    try:
        document = Document.load(document_path)
    except (ValueError, KeyError, TypeError) as e:
        print(f"Error: Invalid document: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: Cannot read document: {e}", file=sys.stderr)
        return 1

    if args.selected:
        document.selection = list(args.selected)
    elif args.generate_from:
        document.selection = [args.generate_from]

    if args.output:
        output_path: Path = args.output
    else:
        output_path = Path(DEFAULT_OUTPUT_DIR) / f"{document_path.stem}_localized.json"

    host = InMemoryHost(document)
    service = LocalizationService(host)

    load_result = await load_table(service, args)
    if not load_result.success:
        print(f"Error: Failed to load localization data: {load_result.error}", file=sys.stderr)
        return 1

    print(f"Document: {document_path}")
    print(f"Output: {output_path}")
    print(f"Languages: {', '.join(load_result.languages)}")
    print(f"Keys: {load_result.key_count}")
    print()

    options = LocalizeOptions(
        autosize_enabled=args.autosize,
        min_font_size=args.min_font_size,
    )

    try:
        if args.generate_from:
            outcome: LocalizationComplete | GenerationComplete = (
                await service.generate_all_languages(
                    GenerateConfig(spacing=args.spacing, min_font_size=args.min_font_size)
                )
            )
        elif args.selected:
            outcome = await service.localize_selected(options)
        else:
            outcome = await service.localize_all(options)
    except LocalizerError as e:
        print(f"Error: Localization failed: {e}", file=sys.stderr)
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1

    if isinstance(outcome, GenerationComplete):
        if not outcome.success:
            print(f"Error: {outcome.error}", file=sys.stderr)
            return 1
        print(f"{outcome.message} (master: {outcome.master_language})")
    else:
        print(outcome.message)

    print_sections(outcome.sections)

    for advisory in host.notifications:
        print(f"  ! {advisory}")

    try:
        document.save(output_path)
    except OSError as e:
        print(f"Error: Cannot write output: {e}", file=sys.stderr)
        return 1

    print()
    print(f"Complete: {output_path}")
    return 0


def main() -> NoReturn:
    """Main entry point."""
    load_dotenv()
    args = parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")

    exit_code = asyncio.run(run(args))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
