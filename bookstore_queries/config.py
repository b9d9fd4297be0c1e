import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
DATABASE_NAME = os.getenv("DATABASE_NAME", "plp_bookstore")
COLLECTION_NAME = os.getenv("COLLECTION_NAME", "books")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class Settings(BaseModel):
    mongo_uri: str = MONGO_URI
    database_name: str = DATABASE_NAME
    collection_name: str = COLLECTION_NAME
    # how long the driver waits for a reachable server; read from SERVER_TIMEOUT_MS
    server_timeout_ms: int = Field(
        default_factory=lambda: os.getenv("SERVER_TIMEOUT_MS", "5000"),
        ge=1,
        validate_default=True,
    )


class QueryParameters(BaseModel):
    """Arguments handed to the query operations.

    Defaults are the values the bookstore exercises were written against.
    """

    year: int = 1959
    author: str = "George Orwell"
    update_title: str = "Wuthering Heights"
    price: float = 7.99
    delete_title: str = "Moby Dick"
    order: str = "asc"
    page: int = Field(default=1, ge=1, description="Page number (1-based)")
    page_size: int = Field(default=5, ge=1, description="Books per page")
    explain_title: str = "1984"


def load_settings(
    mongo_uri: Optional[str] = None,
    database_name: Optional[str] = None,
    collection_name: Optional[str] = None,
) -> Settings:
    """Build ``Settings`` from the environment, letting explicit values win."""
    overrides = {
        "mongo_uri": mongo_uri,
        "database_name": database_name,
        "collection_name": collection_name,
    }
    return Settings(**{k: v for k, v in overrides.items() if v is not None})
