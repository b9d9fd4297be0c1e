"""
CRUD and advanced find queries against the books collection.

Each function issues one driver call, prints a label plus the result, and
returns the raw result.
"""

from typing import Any, Dict, List

from pymongo import ASCENDING, DESCENDING
from pymongo.asynchronous.collection import AsyncCollection

from bookstore_queries.console import print_documents, print_outcome
from bookstore_queries.logger import logger

TITLE_AUTHOR_PRICE = {"title": 1, "author": 1, "price": 1, "_id": 0}


# ---------------------- BASIC CRUD ----------------------

async def find_all_books(books: AsyncCollection) -> List[Dict[str, Any]]:
    all_books = await books.find({}).to_list()
    print_documents("All Books:", all_books)
    return all_books


async def find_after_year(books: AsyncCollection, year: int) -> List[Dict[str, Any]]:
    result = await books.find({"published_year": {"$gt": year}}).to_list()
    print_documents(f"Books published after {year}:", result)
    return result


async def find_by_author(books: AsyncCollection, author: str) -> List[Dict[str, Any]]:
    result = await books.find({"author": author}).to_list()
    print_documents(f"Books by {author}:", result)
    return result


async def update_book_price(books: AsyncCollection, title: str, price: float) -> bool:
    """Set the price of the first book with an exactly matching title.

    Returns whether a document was modified; a missing title is reported as
    "No match found" and nothing is inserted.
    """
    result = await books.update_one({"title": title}, {"$set": {"price": price}})
    logger.debug("update_one matched=%s modified=%s", result.matched_count, result.modified_count)
    succeeded = bool(result.modified_count)
    print_outcome(f'Updated price for "{title}"', succeeded)
    return succeeded


async def delete_book_by_title(books: AsyncCollection, title: str) -> bool:
    result = await books.delete_one({"title": title})
    succeeded = bool(result.deleted_count)
    print_outcome(f'Deleted "{title}"', succeeded)
    return succeeded


# ---------------------- ADVANCED QUERIES ----------------------

async def find_in_stock_after_2010(books: AsyncCollection) -> List[Dict[str, Any]]:
    results = await books.find({
        "in_stock": True,
        "published_year": {"$gt": 2010},
    }).to_list()
    print_documents("Books in stock and published after 2010:", results)
    return results


async def project_title_author_price(books: AsyncCollection) -> List[Dict[str, Any]]:
    results = await books.find({}, TITLE_AUTHOR_PRICE).to_list()
    print_documents("Books (Title, Author, Price only):", results)
    return results


def sort_direction(order: str) -> int:
    """Only the literal ``"asc"`` sorts ascending; anything else is descending."""
    return ASCENDING if order == "asc" else DESCENDING


async def sort_by_price(books: AsyncCollection, order: str = "asc") -> List[Dict[str, Any]]:
    results = await books.find({}).sort("price", sort_direction(order)).to_list()
    print_documents(f"Books sorted by price ({order}):", results)
    return results


async def paginate_books(
    books: AsyncCollection,
    page: int = 1,
    page_size: int = 5,
) -> List[Dict[str, Any]]:
    """Return one 1-indexed page of books via skip/limit.

    Raises ValueError for a page or page size below 1; MongoDB reads
    ``limit(0)`` as "no limit" and would return the whole collection.
    """
    if page < 1 or page_size < 1:
        raise ValueError(f"page and page_size must be >= 1, got page={page} page_size={page_size}")
    skip = (page - 1) * page_size
    logger.debug("Paginating: page=%d page_size=%d skip=%d", page, page_size, skip)

    results = await books.find({}).skip(skip).limit(page_size).to_list()
    print_documents(f"Page {page} (showing {page_size} books):", results)
    return results
