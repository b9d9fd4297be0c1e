"""Pytest fixtures for unit tests: a mocked async pymongo collection."""

from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest


def make_cursor(docs: Optional[List[Dict[str, Any]]] = None, explain: Optional[Dict[str, Any]] = None):
    """Create a mock AsyncCursor whose chaining methods return itself."""
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.skip.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=list(docs or []))
    cursor.explain = AsyncMock(return_value=explain or {})
    return cursor


@pytest.fixture
def sample_books():
    return [
        {"_id": "1", "title": "1984", "author": "George Orwell", "genre": "Dystopian",
         "published_year": 1949, "price": 10.99, "in_stock": True},
        {"_id": "2", "title": "Animal Farm", "author": "George Orwell", "genre": "Political Satire",
         "published_year": 1945, "price": 8.5, "in_stock": False},
        {"_id": "3", "title": "The Alchemist", "author": "Paulo Coelho", "genre": "Fiction",
         "published_year": 1988, "price": 10.99, "in_stock": True},
    ]


@pytest.fixture
def mock_collection(sample_books):
    """Create a mock AsyncCollection returning ``sample_books`` from find()."""
    collection = MagicMock()
    collection.find.return_value = make_cursor(sample_books)
    collection.aggregate = AsyncMock(return_value=make_cursor([]))
    collection.update_one = AsyncMock(return_value=MagicMock(matched_count=1, modified_count=1))
    collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))
    collection.create_index = AsyncMock(return_value="title_1")
    collection.drop_indexes = AsyncMock(return_value=None)
    collection.index_information = AsyncMock(return_value={"_id_": {"key": [("_id", 1)]}})
    return collection
