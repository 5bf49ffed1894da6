"""Shared test fixtures"""
import os

# Settings are read at import time; configure them before the app is imported
os.environ["KAFKA_ENABLED"] = "false"
os.environ["ENVIRONMENT"] = "test"
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ["BASIC_AUTH_USERNAME"] = "document-service"
os.environ["BASIC_AUTH_PASSWORD"] = "document-service"
os.environ["BASIC_AUTH_ROLES"] = "DOCUMENT,AUTHOR"
os.environ["JWT_SECRET"] = "test-secret"

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from app.core.config import config
from app.events.publisher import KafkaEventPublisher, get_event_publisher
from main import app
from tests.factories import basic_auth_header


@pytest.fixture
def mock_publisher():
    """Publisher double recording every published event"""
    return AsyncMock(spec=KafkaEventPublisher)


@pytest.fixture
def client(tmp_path, monkeypatch, mock_publisher):
    """Test client over a fresh SQLite database, authenticated as the service account"""
    monkeypatch.setattr(config, "database_url", f"sqlite+aiosqlite:///{tmp_path / 'documents.db'}")
    app.dependency_overrides[get_event_publisher] = lambda: mock_publisher

    with TestClient(app) as test_client:
        test_client.headers["Authorization"] = basic_auth_header("document-service", "document-service")
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def author(client):
    """An author persisted through the API"""
    response = client.post("/api/v1/authors", json={"firstName": "Ada", "lastName": "Lovelace"})
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def document_request(author):
    """Valid create/update payload listing the persisted author"""
    return {
        "title": "Document1",
        "body": "Document Body1",
        "authorIds": [author["id"]],
        "referenceDocIds": None,
    }
