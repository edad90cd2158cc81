from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from freet_social.config import Settings
from freet_social.database.manager import DatabaseManager


def test_cors_origins_are_split_and_trimmed():
    settings = Settings(CORS_ORIGINS="http://a.test, http://b.test ,")

    assert settings.cors_origins_list == ["http://a.test", "http://b.test"]


def test_empty_mongodb_url_is_rejected():
    with pytest.raises(ValueError):
        Settings(MONGODB_URL="  ")


def test_non_positive_alert_ttl_is_rejected():
    with pytest.raises(ValueError):
        Settings(ALERT_TTL_SECONDS=0)


def test_get_collection_requires_connection():
    with pytest.raises(ConnectionError):
        DatabaseManager().get_collection("followers")


def test_query_logging_redacts_contact_details():
    sanitized = DatabaseManager()._sanitize_query_for_logging(
        {"username": "alice", "contactNumber": "6175550100", "nested": {"contactEmail": "a@b.c"}}
    )

    assert sanitized == {"username": "alice", "contactNumber": "[REDACTED]", "nested": {"contactEmail": "[REDACTED]"}}


@pytest.mark.asyncio
async def test_connect_retries_with_backoff():
    client = MagicMock()
    client.admin.command = AsyncMock(side_effect=[ServerSelectionTimeoutError("down"), {"ok": 1}])
    manager = DatabaseManager()

    with patch("freet_social.database.manager.AsyncIOMotorClient", return_value=client), patch(
        "freet_social.database.manager.asyncio.sleep", new_callable=AsyncMock
    ) as sleep:
        await manager.connect()

    sleep.assert_awaited_once_with(1)
    assert manager.client is client


@pytest.mark.asyncio
async def test_health_check_without_client_is_false():
    assert await DatabaseManager().health_check() is False


@pytest.mark.asyncio
async def test_create_indexes_covers_relationship_keys(collections):
    manager = DatabaseManager()
    with patch.object(manager, "get_collection", side_effect=collections.get):
        await manager.create_indexes()

    assert collections.get("followers").indexes == ["[('username', 1)]", "[('followers', 1)]"]
    assert collections.get("grouptaggings").indexes == ["[('groupUsername', 1)]", "[('groupMembers', 1)]"]
    assert collections.get("contactinformationdisplays").indexes == ["[('username', 1)]"]


def test_health_endpoint_reports_database_state(app):
    from fastapi.testclient import TestClient

    from freet_social.database import db_manager

    with patch.object(db_manager, "health_check", AsyncMock(return_value=False)):
        response = TestClient(app).get("/health")

    assert response.status_code == 503
    assert response.json()["database"] == "disconnected"
