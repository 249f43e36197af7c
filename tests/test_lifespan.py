"""
Dealerships API — Startup / Shutdown Tests
============================================

What we test:
    ✅ connect() pings the server and closes the client when the ping fails
    ✅ An unreachable store aborts startup (DatabaseConnectionError escapes)
    ✅ A reachable store is seeded during startup and closed on shutdown
    ✅ A seeding failure does not abort startup
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from pymongo.errors import ServerSelectionTimeoutError

from dealer_api.config import Settings
from dealer_api.database import connect
from dealer_api.exceptions import DatabaseConnectionError
from dealer_api.main import create_app, lifespan


def _mock_client(database):
    client = MagicMock()
    client.__getitem__.return_value = database
    client.admin.command = AsyncMock(return_value={"ok": 1.0})
    client.close = AsyncMock()
    return client


class TestConnect:

    @pytest.mark.asyncio
    async def test_connect_pings_server(self, fake_database):
        client = _mock_client(fake_database)
        with patch("dealer_api.database.AsyncMongoClient", return_value=client) as factory:
            result = await connect(Settings(mongo_uri="mongodb://db:27017"))

        assert result is client
        factory.assert_called_once_with(
            "mongodb://db:27017", serverSelectionTimeoutMS=5000
        )
        client.admin.command.assert_awaited_once_with("ping")

    @pytest.mark.asyncio
    async def test_connect_failure_closes_client(self, fake_database):
        client = _mock_client(fake_database)
        client.admin.command = AsyncMock(side_effect=ServerSelectionTimeoutError("no servers"))
        with patch("dealer_api.database.AsyncMongoClient", return_value=client):
            with pytest.raises(DatabaseConnectionError, match="Could not connect"):
                await connect(Settings())

        client.close.assert_awaited_once()


class TestLifespan:

    @pytest.mark.asyncio
    async def test_unreachable_store_aborts_startup(self):
        app = create_app()
        with patch("dealer_api.main.setup_logging"), \
             patch("dealer_api.main.connect", AsyncMock(side_effect=DatabaseConnectionError())), \
             patch("dealer_api.main.initialize_database", AsyncMock()) as seed:
            with pytest.raises(DatabaseConnectionError):
                async with lifespan(app):
                    pass

        seed.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_startup_seeds_and_shutdown_closes(self, fake_database, seed_data):
        app = create_app()
        client = _mock_client(fake_database)
        with patch("dealer_api.main.setup_logging"), \
             patch("dealer_api.main.connect", AsyncMock(return_value=client)):
            async with lifespan(app):
                assert app.state.database is fake_database
                assert await fake_database["reviews"].count_documents({}) == len(seed_data["reviews"])
                assert await fake_database["dealerships"].count_documents({}) == len(
                    seed_data["dealerships"]
                )

        client.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_seed_failure_does_not_abort_startup(self, fake_database):
        fake_database["dealerships"].fail_with = ServerSelectionTimeoutError("flaky")
        app = create_app()
        client = _mock_client(fake_database)
        with patch("dealer_api.main.setup_logging"), \
             patch("dealer_api.main.connect", AsyncMock(return_value=client)):
            async with lifespan(app):
                assert app.state.database is fake_database

        client.close.assert_awaited_once()
