from contextlib import asynccontextmanager
from typing import AsyncIterator

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

from bookstore_queries.config import Settings
from bookstore_queries.logger import logger


class BookstoreConnectionError(Exception):
    """Raised when the MongoDB server cannot be reached."""


async def connect_to_cluster(mongo_uri: str, server_timeout_ms: int) -> AsyncMongoClient:
    """Create an AsyncMongoClient and test the connection."""
    client = AsyncMongoClient(mongo_uri, serverSelectionTimeoutMS=server_timeout_ms)
    try:
        await client.server_info()  # force connection test
    except ServerSelectionTimeoutError:
        await client.close()
        raise BookstoreConnectionError("Connection timed out. Check your MongoDB URI and network.")
    except ConnectionFailure:
        await client.close()
        raise BookstoreConnectionError("Failed to connect to MongoDB cluster")
    return client


@asynccontextmanager
async def open_collection(settings: Settings) -> AsyncIterator[AsyncCollection]:
    """Yield the configured collection; the client is closed on every exit path."""
    client = await connect_to_cluster(settings.mongo_uri, settings.server_timeout_ms)
    logger.info("Connected to %s (database=%s)", settings.mongo_uri, settings.database_name)
    try:
        yield client[settings.database_name][settings.collection_name]
    finally:
        await client.close()
        logger.debug("Client for %s closed", settings.mongo_uri)
