"""
Unit tests for the MongoDB connection manager.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from creator_analytics.core import database as database_module
from creator_analytics.core.config import settings
from creator_analytics.core.database import (
    close_mongo_connection, connect_to_mongo, create_indexes, db, get_database
)


@pytest.fixture(autouse=True)
def reset_db():
    """Leave the connection manager uninitialized between tests."""
    db.client = None
    db.database = None
    yield
    db.client = None
    db.database = None


@pytest.fixture
def mock_client():
    client = MagicMock()
    client.admin.command = AsyncMock(return_value={"ok": 1})
    return client


class TestConnection:
    """Tests for connecting and disconnecting."""

    def test_uninitialized(self):
        """Test the database must be connected before use."""
        with pytest.raises(RuntimeError, match="Database not initialized"):
            get_database()

    @pytest.mark.asyncio
    async def test_connect_and_close(self, mock_client):
        """Test the client is created from settings, pinged and closed."""
        with patch.object(database_module, "AsyncIOMotorClient", return_value=mock_client) as factory:
            await connect_to_mongo()

        factory.assert_called_once_with(settings.MONGODB_URL)
        mock_client.admin.command.assert_awaited_once_with("ping")
        assert get_database() is mock_client[settings.MONGODB_DATABASE]

        await close_mongo_connection()

        mock_client.close.assert_called_once()
        assert db.database is None

    @pytest.mark.asyncio
    async def test_failed_ping(self, mock_client):
        """Test a failed ping propagates to the caller."""
        mock_client.admin.command.side_effect = ConnectionError("unreachable")

        with patch.object(database_module, "AsyncIOMotorClient", return_value=mock_client):
            with pytest.raises(ConnectionError):
                await connect_to_mongo()


class TestIndexes:
    """Tests for index creation."""

    @pytest.mark.asyncio
    async def test_create_indexes(self):
        """Test the analytics query indexes are created."""
        collections = {}
        database = MagicMock()

        def collection(name):
            if name not in collections:
                collections[name] = MagicMock()
                collections[name].create_index = AsyncMock()
            return collections[name]

        database.__getitem__.side_effect = collection
        db.database = database

        await create_indexes()

        collections[settings.CONTENT_COLLECTION].create_index.assert_any_await("creator_id")
        collections[settings.PERFORMANCE_COLLECTION].create_index.assert_awaited_once_with(
            [("content_id", 1), ("date", 1)]
        )
        collections[settings.FOLLOWER_COLLECTION].create_index.assert_awaited_once_with(
            [("creator_id", 1), ("date", 1)]
        )
