"""
Command-line entry point.

Usage:
    bookstore-queries                          # run the default sequence
    bookstore-queries find-by-author --author "Jane Austen"
    bookstore-queries sort-by-price paginate-books --order desc --page 2
    bookstore-queries --list
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from pydantic import ValidationError

from bookstore_queries.config import QueryParameters, load_settings
from bookstore_queries.console import console
from bookstore_queries.logger import logger, setup_logging
from bookstore_queries.runner import DEFAULT_RUN_ORDER, OPERATIONS, run_queries

_DEFAULTS = QueryParameters()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bookstore-queries",
        description="Run CRUD, query, aggregation and indexing examples against the books collection.",
    )
    parser.add_argument(
        "operations",
        nargs="*",
        metavar="OPERATION",
        help="Operations to run, in order (default: the full sequence). See --list.",
    )
    parser.add_argument("--list", action="store_true", help="List the available operations and exit.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")

    conn = parser.add_argument_group("connection")
    conn.add_argument("--uri", default=None, help="MongoDB connection string (env: MONGO_URI).")
    conn.add_argument("--database", default=None, help="Database name (env: DATABASE_NAME).")
    conn.add_argument("--collection", default=None, help="Collection name (env: COLLECTION_NAME).")

    params = parser.add_argument_group("query parameters")
    params.add_argument("--year", type=int, default=_DEFAULTS.year)
    params.add_argument("--author", default=_DEFAULTS.author)
    params.add_argument("--title", dest="update_title", default=_DEFAULTS.update_title,
                        help="Title whose price update-book-price changes.")
    params.add_argument("--price", type=float, default=_DEFAULTS.price)
    params.add_argument("--delete-title", default=_DEFAULTS.delete_title)
    params.add_argument("--order", default=_DEFAULTS.order,
                        help='"asc" sorts ascending; any other value sorts descending.')
    params.add_argument("--page", type=int, default=_DEFAULTS.page)
    params.add_argument("--page-size", type=int, default=_DEFAULTS.page_size)
    params.add_argument("--explain-title", default=_DEFAULTS.explain_title)
    return parser


def print_catalogue() -> None:
    for name, op in OPERATIONS.items():
        marker = "*" if name in DEFAULT_RUN_ORDER else " "
        console.print(f"{marker} {name:<28} {op.description}")
    console.print("\n* part of the default sequence")


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(debug_mode=args.debug)

    if args.list:
        print_catalogue()
        return

    unknown = [name for name in args.operations if name not in OPERATIONS]
    if unknown:
        parser.error(f"unknown operation(s): {', '.join(unknown)} (see --list)")

    try:
        params = QueryParameters(
            year=args.year,
            author=args.author,
            update_title=args.update_title,
            price=args.price,
            delete_title=args.delete_title,
            order=args.order,
            page=args.page,
            page_size=args.page_size,
            explain_title=args.explain_title,
        )
    except ValidationError as e:
        parser.error(str(e))

    try:
        settings = load_settings(args.uri, args.database, args.collection)
    except ValidationError as e:
        parser.error(str(e))

    logger.debug("Settings: %s", settings)

    succeeded = asyncio.run(run_queries(settings, params, args.operations or DEFAULT_RUN_ORDER))
    if not succeeded:
        sys.exit(1)
