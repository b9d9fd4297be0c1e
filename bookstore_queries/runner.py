"""
Query runner: opens one connection, awaits the selected operations one after
another, and always closes the connection.

Operations are looked up by their CLI name in ``OPERATIONS``; the order in
which names are given is the order in which they run.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from pymongo.asynchronous.collection import AsyncCollection

from bookstore_queries import aggregations, indexes, queries
from bookstore_queries.config import QueryParameters, Settings
from bookstore_queries.connection import open_collection
from bookstore_queries.console import print_closing, print_label
from bookstore_queries.logger import logger

CLOSING_MESSAGE = "MongoDB connection closed"

OperationFn = Callable[[AsyncCollection, QueryParameters], Awaitable[Any]]


@dataclass(frozen=True)
class Operation:
    name: str
    description: str
    call: OperationFn


def _op(name: str, description: str, call: OperationFn) -> Operation:
    return Operation(name=name, description=description, call=call)


_CATALOGUE: List[Operation] = [
    # basic CRUD
    _op("find-all-books", "Find every book",
        lambda books, p: queries.find_all_books(books)),
    _op("find-after-year", "Find books published after --year",
        lambda books, p: queries.find_after_year(books, p.year)),
    _op("find-by-author", "Find books by --author",
        lambda books, p: queries.find_by_author(books, p.author)),
    _op("update-book-price", "Set --price on the book titled --title",
        lambda books, p: queries.update_book_price(books, p.update_title, p.price)),
    _op("delete-book-by-title", "Delete the book titled --delete-title",
        lambda books, p: queries.delete_book_by_title(books, p.delete_title)),
    # advanced queries
    _op("find-in-stock-after-2010", "Find in-stock books published after 2010",
        lambda books, p: queries.find_in_stock_after_2010(books)),
    _op("project-title-author-price", "List title, author and price only",
        lambda books, p: queries.project_title_author_price(books)),
    _op("sort-by-price", "Sort books by price (--order asc|desc)",
        lambda books, p: queries.sort_by_price(books, p.order)),
    _op("paginate-books", "Show --page of --page-size books",
        lambda books, p: queries.paginate_books(books, p.page, p.page_size)),
    # aggregations
    _op("average-price-by-genre", "Average price per genre",
        lambda books, p: aggregations.average_price_by_genre(books)),
    _op("author-with-most-books", "Author with the most books",
        lambda books, p: aggregations.author_with_most_books(books)),
    _op("books-by-decade", "Book count per publication decade",
        lambda books, p: aggregations.books_by_decade(books)),
    # indexing
    _op("create-title-index", "Create an ascending index on title",
        lambda books, p: indexes.create_title_index(books)),
    _op("create-compound-index", "Create an index on author asc, published_year desc",
        lambda books, p: indexes.create_compound_index(books)),
    _op("analyze-index-performance", "Explain a title lookup before and after indexing",
        lambda books, p: indexes.analyze_index_performance(books, p.explain_title)),
    _op("list-indexes", "List the collection's indexes",
        lambda books, p: indexes.list_indexes(books)),
]

OPERATIONS: Dict[str, Operation] = {op.name: op for op in _CATALOGUE}

DEFAULT_RUN_ORDER: List[str] = [
    "find-all-books",
    "find-after-year",
    "find-by-author",
    "update-book-price",
    "delete-book-by-title",
    "find-in-stock-after-2010",
    "project-title-author-price",
    "sort-by-price",
    "paginate-books",
    "average-price-by-genre",
    "author-with-most-books",
    "books-by-decade",
    "create-title-index",
    "create-compound-index",
    "analyze-index-performance",
]


async def run_operations(
    books: AsyncCollection,
    operation_names: Sequence[str],
    params: QueryParameters,
) -> List[Any]:
    """Await each named operation in order and collect the results."""
    results = []
    for name in operation_names:
        logger.info("Running %s", name)
        results.append(await OPERATIONS[name].call(books, params))
    return results


async def run_queries(
    settings: Settings,
    params: Optional[QueryParameters] = None,
    operation_names: Optional[Sequence[str]] = None,
) -> bool:
    """Connect, run the operations, and close the connection.

    Any failure stops the run, is logged, and falls through to cleanup.
    Returns True when every operation finished.
    """
    params = params or QueryParameters()
    names = list(operation_names) if operation_names else list(DEFAULT_RUN_ORDER)

    unknown = [n for n in names if n not in OPERATIONS]
    if unknown:
        raise ValueError(f"Unknown operation(s): {', '.join(unknown)}")

    try:
        async with open_collection(settings) as books:
            print_label(f"Connected to {settings.database_name} database")
            await run_operations(books, names, params)
        return True
    except Exception as e:
        logger.error("Error occurred: %s", e)
        return False
    finally:
        print_closing(CLOSING_MESSAGE)
