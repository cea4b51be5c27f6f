"""Command-line interface for SheetDiff."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

import uvicorn

from .config import settings
from .engine import ColumnSelector, MatchConfig, compare
from .errors import SheetDiffError
from .report import build_summary, format_json, format_text
from .sheets import load_workbook

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="SheetDiff - Compare two Excel workbooks and report differences"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Compare command
    compare_parser = subparsers.add_parser(
        "compare", help="Compare two workbook files"
    )
    compare_parser.add_argument("old_file", help="Path to the old workbook")
    compare_parser.add_argument("new_file", help="Path to the new workbook")
    compare_parser.add_argument(
        "--sheet", "-s", help="Only compare the sheet with this name"
    )
    compare_parser.add_argument(
        "--key-column",
        "--id-column",
        "-k",
        "-i",
        dest="key_column",
        default=settings.default_key_column,
        help="Column name or 0-based index used to match rows",
    )
    compare_parser.add_argument(
        "--output", "-o", help="Also write the output to this file"
    )
    compare_parser.add_argument(
        "--json", action="store_true", help="Output results as JSON"
    )
    compare_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Enable debug logging",
    )

    # Server command
    server_parser = subparsers.add_parser("serve", help="Start the web server")
    server_parser.add_argument(
        "--host", default=settings.host, help=f"Host to bind to (default: {settings.host})"
    )
    server_parser.add_argument(
        "--port", type=int, default=settings.port, help=f"Port to bind to (default: {settings.port})"
    )
    server_parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload for development"
    )

    return parser


def main(argv: Optional[list[str]] = None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command == "compare":
        sys.exit(
            run_compare(
                args.old_file,
                args.new_file,
                sheet=args.sheet,
                key_column=args.key_column,
                output=args.output,
                as_json=args.json,
            )
        )
    elif args.command == "serve":
        run_server(args.host, args.port, args.reload)
    else:
        parser.print_help()
        sys.exit(1)


def run_compare(
    old_file: str,
    new_file: str,
    sheet: Optional[str] = None,
    key_column: Optional[str] = None,
    output: Optional[str] = None,
    as_json: bool = False,
) -> int:
    """Compare two workbook files and print the result.

    Returns the process exit code.
    """
    config = MatchConfig(
        key_column=ColumnSelector.parse(key_column) if key_column else None,
        sheet=sheet,
    )

    try:
        workbook1 = load_workbook(old_file)
        workbook2 = load_workbook(new_file)
        report = compare(workbook1, workbook2, config)
    except SheetDiffError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    summary = build_summary(report, workbook1, workbook2)
    text = format_json(report, summary) if as_json else format_text(report, summary)
    print(text)

    if output:
        try:
            Path(output).write_text(text + "\n", encoding="utf-8")
        except OSError as e:
            print(f"Error: could not write output file '{output}': {e}", file=sys.stderr)
            return 1
        logger.info(f"Wrote output to {output}")

    return 0


def run_server(host: str, port: int, reload: bool):
    """Run the web server."""
    uvicorn.run(
        "sheetdiff.api.app:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


if __name__ == "__main__":
    main()
