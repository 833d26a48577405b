"""
Global test fixtures for vnf-schema.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock-motor)
- Settings pointing at the mock database
- Explain plan builders for query plan checks
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from vnf_schema.config import Settings


# =============================================================================
# Settings Fixtures
# =============================================================================

@pytest.fixture
def settings() -> Settings:
    """Settings with the production layout defaults and no .env lookup."""
    return Settings(
        _env_file=None,
        mongo_uri="mongodb://test:27017",
        mongo_database="vnf_config",
        app_user_name="app_user",
        app_user_password="app_password",
    )


# =============================================================================
# MongoDB Fixtures (mongomock-motor)
# =============================================================================

@pytest_asyncio.fixture
async def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.
    """
    try:
        from mongomock_motor import AsyncMongoMockClient
        client = AsyncMongoMockClient()
        yield client
        client.close()
    except ImportError:
        pytest.skip("mongomock-motor not installed")


@pytest_asyncio.fixture
async def mock_vnf_config_db(mock_async_mongo_client):
    """Provide mock vnf_config database, empty."""
    yield mock_async_mongo_client["vnf_config"]


@pytest.fixture
def mock_command_db():
    """
    A database double for server commands mongomock does not implement
    (createUser, updateUser, usersInfo, explain).

        mock_command_db.command.return_value = {"users": [], "ok": 1}
    """
    db = MagicMock()
    db.name = "vnf_config"
    db.command = AsyncMock(return_value={"ok": 1})
    return db


# =============================================================================
# Explain Plan Fixtures
# =============================================================================

def make_explain(winning_plan: dict) -> dict:
    """Wrap a winning plan the way the explain command returns it."""
    return {
        "queryPlanner": {
            "namespace": "vnf_config.yaml_history",
            "winningPlan": winning_plan,
            "rejectedPlans": [],
        },
        "ok": 1,
    }


@pytest.fixture
def compound_index_plan() -> dict:
    """History query served by the compound index, no blocking sort."""
    return make_explain({
        "stage": "FETCH",
        "inputStage": {
            "stage": "IXSCAN",
            "keyPattern": {"filename": 1, "timestamp": -1},
            "indexName": "filename_1_timestamp_-1",
            "direction": "forward",
        },
    })


@pytest.fixture
def single_field_index_plan() -> dict:
    """History query filtered by filename_1 then sorted in memory."""
    return make_explain({
        "stage": "SORT",
        "sortPattern": {"timestamp": -1},
        "inputStage": {
            "stage": "FETCH",
            "inputStage": {
                "stage": "IXSCAN",
                "keyPattern": {"filename": 1},
                "indexName": "filename_1",
            },
        },
    })


@pytest.fixture
def collection_scan_plan() -> dict:
    return make_explain({"stage": "COLLSCAN", "direction": "forward"})
