"""Fixtures for tests against a live MongoDB server.

The tests are skipped when nothing answers on ``MONGO_URI``.
"""

import pytest
from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from bookstore_queries.config import MONGO_URI

TEST_DB = "bookstore_queries_test"


@pytest.fixture(scope="function")
async def mongo_client():
    """Create a MongoDB client for each test, skipping when unreachable."""
    client = AsyncMongoClient(MONGO_URI, serverSelectionTimeoutMS=1000)
    try:
        await client.server_info()
    except PyMongoError:
        await client.close()
        pytest.skip(f"MongoDB not reachable at {MONGO_URI}")
    try:
        yield client
    finally:
        await client.close()


@pytest.fixture(scope="function")
async def books(mongo_client):
    """An empty books collection, dropped after the test."""
    collection = mongo_client[TEST_DB]["books"]
    await collection.drop()
    try:
        yield collection
    finally:
        await mongo_client.drop_database(TEST_DB)


def book(title, price, genre="Fiction", author="Anon", published_year=2000, in_stock=True):
    return {
        "title": title,
        "author": author,
        "genre": genre,
        "published_year": published_year,
        "price": price,
        "in_stock": in_stock,
    }
