"""
Aggregation pipelines over the books collection.

The pipelines are declarative and handed to the server unchanged; grouping,
averaging and sorting all happen inside MongoDB.
"""

from typing import Any, Dict, List

from pymongo.asynchronous.collection import AsyncCollection

from bookstore_queries.console import print_table
from bookstore_queries.logger import logger

# ---------------------- PIPELINES ----------------------

AVERAGE_PRICE_BY_GENRE: List[Dict[str, Any]] = [
    {
        "$group": {
            "_id": "$genre",
            "averagePrice": {"$avg": "$price"},
        }
    },
    {"$sort": {"averagePrice": -1}},
]

# Ties on totalBooks keep whatever order the server's sort produces.
AUTHOR_WITH_MOST_BOOKS: List[Dict[str, Any]] = [
    {
        "$group": {
            "_id": "$author",
            "totalBooks": {"$sum": 1},
        }
    },
    {"$sort": {"totalBooks": -1}},
    {"$limit": 1},
]

# Decade key: published_year - (published_year mod 10), so 1955 -> 1950
BOOKS_BY_DECADE: List[Dict[str, Any]] = [
    {
        "$group": {
            "_id": {
                "$subtract": [
                    "$published_year",
                    {"$mod": ["$published_year", 10]},
                ]
            },
            "totalBooks": {"$sum": 1},
        }
    },
    {"$sort": {"_id": 1}},
]


# ---------------------- RUNNERS ----------------------

async def _aggregate(books: AsyncCollection, pipeline: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    logger.debug("Running pipeline: %s", pipeline)
    cursor = await books.aggregate(pipeline)
    return await cursor.to_list()


async def average_price_by_genre(books: AsyncCollection) -> List[Dict[str, Any]]:
    result = await _aggregate(books, AVERAGE_PRICE_BY_GENRE)
    print_table("Average Price by Genre:", result)
    return result


async def author_with_most_books(books: AsyncCollection) -> List[Dict[str, Any]]:
    result = await _aggregate(books, AUTHOR_WITH_MOST_BOOKS)
    print_table("Author with the Most Books:", result)
    return result


async def books_by_decade(books: AsyncCollection) -> List[Dict[str, Any]]:
    result = await _aggregate(books, BOOKS_BY_DECADE)
    print_table("Books Grouped by Publication Decade:", result)
    return result
