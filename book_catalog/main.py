#!/usr/bin/env python3
"""
Command-line entry point of the book catalog.

Usage:
    python -m book_catalog.main ingest books.csv
    python -m book_catalog.main search exports/
    python -m book_catalog.main            # interactive menu
"""

import argparse
import logging
import sys
from typing import Callable, List, Optional

from book_catalog import dependencies
from book_catalog.domain.services import CatalogService

logger = logging.getLogger(__name__)

EXIT_COMMAND = "exit"
SEPARATOR = "-" * 50

MENU = (
    f"Select an option (type '{EXIT_COMMAND}' to quit):\n"
    "1. Add Books from File\n"
    "2. Search Books"
)


def handle_option(
    option: str,
    service: CatalogService,
    read: Callable[[str], str],
    write: Callable[[str], None],
) -> None:
    """Run the action selected in the interactive menu."""
    if option == "1":
        file_path = read("Enter the file path of the CSV file:\n")
        summary = service.ingest(file_path.strip())
        if summary is not None:
            write(f"Books have been added to the database ({summary.n_inserted} new).")
    elif option == "2":
        output_directory = read("Enter the directory where you want to save the file:\n")
        result = service.search(output_directory.strip())
        if result is not None and result.output_path is not None:
            write(f"Books have been saved to {result.output_path}")
    else:
        write("Invalid option selected. Please try again.")


def run_interactive(
    service: CatalogService,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    """
    Prompt for actions until the user types 'exit' or input ends.

    Errors raised by an action are reported and the loop continues.
    """
    while True:
        try:
            option = read(MENU + "\n").strip()
        except EOFError:
            break

        if option.lower() == EXIT_COMMAND:
            break

        try:
            handle_option(option, service, read, write)
        except EOFError:
            break
        except Exception as e:
            logger.exception("Unexpected error in interactive session")
            write(f"An error occurred: {e}")

        write(SEPARATOR)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Ingest books from CSV files and export filtered searches"
    )
    parser.add_argument(
        "--db-path",
        type=str,
        default=None,
        help="SQLite database file (default: $CATALOG_DB_PATH or data/catalog.db)",
    )
    parser.add_argument(
        "--filter-path",
        type=str,
        default=None,
        help="JSON filter used by search (default: $FILTER_PATH or filter.json)",
    )

    subparsers = parser.add_subparsers(dest="command")

    ingest = subparsers.add_parser("ingest", help="Add the books of a CSV file to the catalog")
    ingest.add_argument("file", type=str, help="CSV file to ingest")

    search = subparsers.add_parser("search", help="Export books matching the filter to CSV")
    search.add_argument("output_dir", type=str, help="Directory to write the export under")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Process exit code: 0 on success, 1 if the requested operation failed
    """
    args = build_parser().parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=dependencies.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    dependencies.configure(db_path=args.db_path, filter_path=args.filter_path)

    try:
        service = dependencies.get_catalog_service()

        if args.command == "ingest":
            return 0 if service.ingest(args.file) is not None else 1

        if args.command == "search":
            return 0 if service.search(args.output_dir) is not None else 1

        run_interactive(service)
        return 0
    except Exception as e:
        logger.error(f"Catalog unavailable: {e}")
        return 1
    finally:
        dependencies.reset_dependencies()


if __name__ == "__main__":
    sys.exit(main())
