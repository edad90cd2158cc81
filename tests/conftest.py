import copy
import re
from types import SimpleNamespace
from unittest.mock import patch

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from freet_social.database import db_manager


class FakeCollection:
    """In-memory stand-in for the subset of a Motor collection the store uses."""

    def __init__(self, name):
        self.name = name
        self.documents = []
        self.indexes = []

    @staticmethod
    def _matches(document, query):
        for key, expected in query.items():
            actual = document.get(key)
            if isinstance(expected, dict) and "$regex" in expected:
                flags = re.IGNORECASE if "i" in expected.get("$options", "") else 0
                if not isinstance(actual, str) or not re.search(expected["$regex"], actual, flags):
                    return False
            elif actual != expected:
                return False
        return True

    async def insert_one(self, document):
        stored = copy.deepcopy(document)
        stored.setdefault("_id", ObjectId())
        self.documents.append(stored)
        return SimpleNamespace(inserted_id=stored["_id"])

    async def find_one(self, query):
        for document in self.documents:
            if self._matches(document, query):
                return copy.deepcopy(document)
        return None

    async def replace_one(self, query, replacement):
        for index, document in enumerate(self.documents):
            if self._matches(document, query):
                stored = copy.deepcopy(replacement)
                stored["_id"] = document["_id"]
                self.documents[index] = stored
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def create_index(self, keys, **kwargs):
        name = kwargs.get("name") or str(keys)
        self.indexes.append(name)
        return name


@pytest.fixture
def collections():
    """Fake collections by name, wired in behind `db_manager.get_collection`."""
    fakes = {}

    def get_collection(name):
        if name not in fakes:
            fakes[name] = FakeCollection(name)
        return fakes[name]

    with patch.object(db_manager, "get_collection", side_effect=get_collection):
        yield SimpleNamespace(get=get_collection, fakes=fakes)


@pytest.fixture
def seed(collections):
    """Insert raw documents straight into a fake collection."""

    def _seed(name, document):
        stored = dict(document)
        stored.setdefault("_id", ObjectId())
        collections.get(name).documents.append(stored)
        return stored

    return _seed


@pytest.fixture
def app():
    from freet_social.main import app

    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app, collections):
    """Client for a session logged in as `alice`."""
    from freet_social.routes.auth.dependencies import get_session_username

    app.dependency_overrides[get_session_username] = lambda: "alice"
    return TestClient(app)


@pytest.fixture
def anonymous_client(app, collections):
    from freet_social.routes.auth.dependencies import get_session_username

    app.dependency_overrides[get_session_username] = lambda: None
    return TestClient(app)
