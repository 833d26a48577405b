"""
Integration test fixtures.

These tests require a running MongoDB server reachable at MONGO_TEST_URI with
rights to create users and collections. They are skipped when it is unset.
"""
import os

import pytest
import pytest_asyncio
from motor.motor_asyncio import AsyncIOMotorClient

from vnf_schema.config import Settings

TEST_DATABASE = "vnf_config_it"


@pytest.fixture
def live_mongo_uri():
    """MongoDB URI for live tests."""
    uri = os.getenv("MONGO_TEST_URI")
    if not uri:
        pytest.skip("MONGO_TEST_URI not set")
    return uri


@pytest.fixture
def live_settings(live_mongo_uri) -> Settings:
    return Settings(
        _env_file=None,
        mongo_uri=live_mongo_uri,
        mongo_database=TEST_DATABASE,
        server_selection_timeout_ms=5000,
    )


@pytest_asyncio.fixture
async def live_client(live_settings):
    """Real Motor client; the test database and user are dropped afterwards."""
    client = AsyncIOMotorClient(
        live_settings.mongo_uri,
        serverSelectionTimeoutMS=live_settings.server_selection_timeout_ms,
    )
    await client.drop_database(TEST_DATABASE)
    yield client
    db = client[TEST_DATABASE]
    users = await db.command("usersInfo", live_settings.app_user_name)
    if users.get("users"):
        await db.command("dropUser", live_settings.app_user_name)
    await client.drop_database(TEST_DATABASE)
    client.close()
