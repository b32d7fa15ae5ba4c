"""CLI for feedsheets - spreadsheet feed access.

Usage:
    feedsheets status                                  # Show configuration status
    feedsheets worksheets --key K --title T            # List worksheets and row counts
    feedsheets print Jan --key K --title T             # Print a worksheet (tab-separated)
    feedsheets print Jan --format pipe -o jan.txt      # Print to a file, pipe-separated
    feedsheets add Mar --cols 5 --rows 10              # Add a worksheet
    feedsheets delete Mar                              # Delete a worksheet
    feedsheets write Mar rows.tsv                      # Append rows from a delimited file

--key and --title default to FEEDSHEETS_KEY and FEEDSHEETS_TITLE.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path


def cmd_status() -> int:
    """Show feed configuration status."""
    from feedsheets.config import get_config_status

    status = get_config_status()

    print("=" * 60)
    print("FEEDSHEETS CONFIGURATION")
    print("=" * 60)
    print()
    print(f".env file : {status['env_file']} {'[x]' if status['env_file_exists'] else '[ ]'}")
    print(f"Feed root : {status['feed_root']}")
    print()

    print("Credentials:")
    for name, configured in status["credentials"].items():
        mark = "[x]" if configured else "[ ]"
        print(f"  {mark} {name}")
    print()

    print(f"Write delay: {status['write_delay'] or 'default'}")
    return 0


def _build_client(args: argparse.Namespace):
    """Create a SpreadsheetClient from parsed arguments."""
    from feedsheets.spreadsheet import SpreadsheetClient, SpreadsheetRef

    ref = SpreadsheetRef(
        key=args.key or "",
        title=args.title or "",
        visibility=args.visibility,
        projection=args.projection,
    )
    return SpreadsheetClient(ref)


def cmd_worksheets(args: argparse.Namespace) -> int:
    """Load every worksheet and list it with its row count."""
    with _build_client(args) as client:
        client.load_all_worksheets()

        titles = sorted(client.get_loaded_worksheet_titles())
        if not titles:
            print("No worksheets")
            return 0

        for title in titles:
            print(f"{title}\t{len(client.get_entries(title))} rows")
    return 0


def cmd_print(args: argparse.Namespace) -> int:
    """Load and print one worksheet."""
    from feedsheets.formatters import get_formatter

    formatter = get_formatter(args.format)
    with _build_client(args) as client:
        if client.load_worksheet(args.worksheet) is None:
            print(f"Error: Worksheet not found or empty: {args.worksheet}", file=sys.stderr)
            return 1

        client.print_worksheet(args.worksheet, args.output, formatter)
    return 0


def cmd_add(args: argparse.Namespace) -> int:
    """Add a worksheet."""
    with _build_client(args) as client:
        added = client.add_worksheet(args.worksheet, args.cols, args.rows)

    if not added:
        print(f"Error: No spreadsheet titled {args.title!r}", file=sys.stderr)
        return 1

    print(f"Added worksheet {args.worksheet!r} to {added} spreadsheet(s)")
    return 0


def cmd_delete(args: argparse.Namespace) -> int:
    """Delete a worksheet."""
    with _build_client(args) as client:
        deleted = client.delete_worksheet(args.worksheet)

    if not deleted:
        print(f"No worksheet titled {args.worksheet!r}")
        return 0

    print(f"Deleted {deleted} worksheet(s) titled {args.worksheet!r}")
    return 0


def read_rows(path: str | Path, separator: str):
    """Read rows from a delimited file whose first line is the header."""
    from feedsheets.feeds import Row

    with open(path, encoding="utf-8") as f:
        lines = [line.rstrip("\r\n") for line in f if line.strip()]

    if not lines:
        return []

    header = lines[0].split(separator)
    rows = []
    for number, line in enumerate(lines[1:], start=1):
        values = line.split(separator)
        if len(values) != len(header):
            raise ValueError(
                f"{path}: row {number} has {len(values)} fields, header has {len(header)}"
            )
        rows.append(Row.from_pairs(zip(header, values)))
    return rows


def cmd_write(args: argparse.Namespace) -> int:
    """Append rows from a delimited file."""
    from feedsheets.formatters import get_formatter

    source = Path(args.path).expanduser()
    if not source.exists():
        print(f"Error: File not found: {source}", file=sys.stderr)
        return 1

    try:
        rows = read_rows(source, get_formatter(args.format).separator)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    with _build_client(args) as client:
        written = client.write_to_worksheet(args.worksheet, rows)

    print(f"Wrote {written} of {len(rows)} rows to {args.worksheet!r}")
    return 0 if written == len(rows) else 1


def _add_spreadsheet_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--key",
        default=os.environ.get("FEEDSHEETS_KEY"),
        help="Spreadsheet key (default: $FEEDSHEETS_KEY)",
    )
    parser.add_argument(
        "--title",
        default=os.environ.get("FEEDSHEETS_TITLE"),
        help="Spreadsheet title (default: $FEEDSHEETS_TITLE)",
    )
    parser.add_argument(
        "--visibility",
        choices=["public", "private"],
        default="private",
        help="Feed visibility (default: private)",
    )
    parser.add_argument(
        "--projection",
        choices=["full", "basic"],
        default="full",
        help="Feed projection (default: full)",
    )


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    # Load .env before reading defaults from the environment
    import feedsheets.config  # noqa: F401
    from feedsheets.exceptions import FeedsheetsError
    from feedsheets.formatters import FORMATTERS

    parser = argparse.ArgumentParser(
        prog="feedsheets",
        description="Read and write worksheets through a spreadsheet feed API",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # status command
    subparsers.add_parser("status", help="Show configuration status")

    # worksheets command
    worksheets_parser = subparsers.add_parser("worksheets", help="List worksheets and row counts")
    _add_spreadsheet_args(worksheets_parser)

    # print command
    print_parser = subparsers.add_parser("print", help="Print a worksheet")
    print_parser.add_argument("worksheet", help="Worksheet title")
    print_parser.add_argument(
        "--format",
        choices=sorted(FORMATTERS),
        default="tab",
        help="Output format (default: tab)",
    )
    print_parser.add_argument("-o", "--output", help="Write to this file instead of stdout")
    _add_spreadsheet_args(print_parser)

    # add command
    add_parser = subparsers.add_parser("add", help="Add a worksheet")
    add_parser.add_argument("worksheet", help="New worksheet title")
    add_parser.add_argument("--cols", type=int, default=26, help="Initial columns (default: 26)")
    add_parser.add_argument("--rows", type=int, default=100, help="Initial rows (default: 100)")
    _add_spreadsheet_args(add_parser)

    # delete command
    delete_parser = subparsers.add_parser("delete", help="Delete a worksheet")
    delete_parser.add_argument("worksheet", help="Worksheet title")
    _add_spreadsheet_args(delete_parser)

    # write command
    write_parser = subparsers.add_parser("write", help="Append rows from a delimited file")
    write_parser.add_argument("worksheet", help="Worksheet title")
    write_parser.add_argument("path", help="Delimited file; the first line is the header")
    write_parser.add_argument(
        "--format",
        choices=sorted(FORMATTERS),
        default="tab",
        help="Input separator (default: tab)",
    )
    _add_spreadsheet_args(write_parser)

    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "status":
        return cmd_status()

    if not args.key and args.command != "add":
        print("Error: --key or FEEDSHEETS_KEY is required", file=sys.stderr)
        return 1
    if not args.title and args.command == "add":
        print("Error: --title or FEEDSHEETS_TITLE is required", file=sys.stderr)
        return 1

    commands = {
        "worksheets": cmd_worksheets,
        "print": cmd_print,
        "add": cmd_add,
        "delete": cmd_delete,
        "write": cmd_write,
    }

    try:
        return commands[args.command](args)
    except FeedsheetsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
