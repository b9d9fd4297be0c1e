"""Unit tests for the query runner."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, patch

import pytest

from bookstore_queries import runner
from bookstore_queries.config import QueryParameters, Settings
from bookstore_queries.connection import BookstoreConnectionError


@pytest.fixture
def settings():
    return Settings(mongo_uri="mongodb://localhost:27017", database_name="plp_bookstore", collection_name="books")


def _fake_open_collection(collection, closed):
    @asynccontextmanager
    async def _open(settings):
        try:
            yield collection
        finally:
            closed.append(True)
    return _open


class TestCatalogue:

    def test_default_order_matches_catalogue(self):
        assert all(name in runner.OPERATIONS for name in runner.DEFAULT_RUN_ORDER)
        assert runner.DEFAULT_RUN_ORDER[0] == "find-all-books"
        assert runner.DEFAULT_RUN_ORDER[-1] == "analyze-index-performance"
        assert len(runner.DEFAULT_RUN_ORDER) == 15

    def test_list_indexes_is_opt_in(self):
        assert "list-indexes" in runner.OPERATIONS
        assert "list-indexes" not in runner.DEFAULT_RUN_ORDER


class TestRunOperations:

    @pytest.mark.asyncio
    async def test_runs_in_given_order_with_parameters(self, mock_collection):
        params = QueryParameters(author="Jane Austen", order="desc", page=2, page_size=3)

        await runner.run_operations(
            mock_collection, ["find-by-author", "sort-by-price", "paginate-books"], params,
        )

        finds = [c.args[0] for c in mock_collection.find.call_args_list]
        assert finds == [{"author": "Jane Austen"}, {}, {}]
        cursor = mock_collection.find.return_value
        cursor.skip.assert_called_once_with(3)
        cursor.limit.assert_called_once_with(3)

    @pytest.mark.asyncio
    async def test_each_call_finishes_before_the_next(self, mock_collection):
        order = []

        async def update_one(*args, **kwargs):
            order.append("update")
            return type("R", (), {"matched_count": 1, "modified_count": 1})()

        async def delete_one(*args, **kwargs):
            order.append("delete")
            return type("R", (), {"deleted_count": 0})()

        mock_collection.update_one = AsyncMock(side_effect=update_one)
        mock_collection.delete_one = AsyncMock(side_effect=delete_one)

        results = await runner.run_operations(
            mock_collection, ["delete-book-by-title", "update-book-price"], QueryParameters(),
        )

        assert order == ["delete", "update"]
        assert results == [False, True]


class TestRunQueries:

    @pytest.mark.asyncio
    async def test_success_closes_connection(self, settings, mock_collection, capsys):
        closed = []
        with patch.object(runner, "open_collection", _fake_open_collection(mock_collection, closed)):
            ok = await runner.run_queries(settings, operation_names=["find-all-books"])

        assert ok is True
        assert closed == [True]
        out = capsys.readouterr().out
        assert "Connected to plp_bookstore database" in out
        assert out.rstrip().endswith(runner.CLOSING_MESSAGE)

    @pytest.mark.asyncio
    async def test_failure_stops_run_and_still_closes(self, settings, mock_collection, capsys):
        mock_collection.update_one = AsyncMock(side_effect=RuntimeError("boom"))
        closed = []
        with patch.object(runner, "open_collection", _fake_open_collection(mock_collection, closed)), \
                patch.object(runner, "logger") as log:
            ok = await runner.run_queries(
                settings, operation_names=["update-book-price", "delete-book-by-title"],
            )

        assert ok is False
        assert closed == [True]
        mock_collection.delete_one.assert_not_awaited()
        log.error.assert_called_once()
        assert "boom" in str(log.error.call_args.args[-1])
        assert runner.CLOSING_MESSAGE in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_connection_failure_prints_closing_message(self, settings, capsys):
        @asynccontextmanager
        async def _unreachable(settings):
            raise BookstoreConnectionError("Connection timed out.")
            yield  # pragma: no cover

        with patch.object(runner, "open_collection", _unreachable):
            ok = await runner.run_queries(settings)

        assert ok is False
        out = capsys.readouterr().out
        assert "Connected to" not in out
        assert runner.CLOSING_MESSAGE in out

    @pytest.mark.asyncio
    async def test_default_run_order_used_when_none_given(self, settings, mock_collection):
        with patch.object(runner, "open_collection", _fake_open_collection(mock_collection, [])), \
                patch.object(runner, "run_operations", AsyncMock(return_value=[])) as run_ops:
            await runner.run_queries(settings)

        assert run_ops.await_args.args[1] == runner.DEFAULT_RUN_ORDER

    @pytest.mark.asyncio
    async def test_unknown_operation_rejected(self, settings):
        with pytest.raises(ValueError, match="not-a-query"):
            await runner.run_queries(settings, operation_names=["not-a-query"])
