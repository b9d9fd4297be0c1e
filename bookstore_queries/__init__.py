"""Bookstore query runner: CRUD, advanced queries, aggregations and indexing
against a MongoDB ``books`` collection."""

__version__ = "1.0.0"
