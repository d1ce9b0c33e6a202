"""
Blog API — Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_collection: MagicMock standing in for the `blogposts` AsyncCollection
    ├── mock_db: MagicMock database handle whose [] returns mock_collection
    ├── sample_post_document: A stored document as MongoDB would return it
    ├── blog_data_factory: Faker-backed generator of request bodies
    └── test_client: HTTPX AsyncClient wired to the app with mock_db injected

The integration suite (test_blog_posts_integration.py) brings its own fixtures
that talk to a real MongoDB.
"""

import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

# Set before any blog_api import so Settings() picks them up
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
import pytest_asyncio
from bson import ObjectId
from faker import Faker
from httpx import ASGITransport, AsyncClient

from blog_api.database import get_database


@pytest.fixture
def mock_collection():
    """
    Mock of the posts collection.

    find() is synchronous in the async driver and returns a cursor whose
    to_list() is awaited; every other method used by PostService is a coroutine.

    Usage:
        mock_collection.find_one.return_value = sample_post_document
        mock_collection.find.return_value.to_list.return_value = [doc1, doc2]
    """
    collection = MagicMock()
    collection.insert_one = AsyncMock(return_value=MagicMock(inserted_id=ObjectId()))
    collection.find_one = AsyncMock(return_value=None)
    collection.update_one = AsyncMock(return_value=MagicMock(matched_count=1))
    collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))
    collection.count_documents = AsyncMock(return_value=0)

    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=[])
    collection.find = MagicMock(return_value=cursor)
    return collection


@pytest.fixture
def mock_db(mock_collection):
    """Database handle; db["blogposts"] returns mock_collection."""
    db = MagicMock()
    db.__getitem__.return_value = mock_collection
    db.command = AsyncMock(return_value={"ok": 1})
    return db


@pytest.fixture
def sample_post_document():
    return {
        "_id": ObjectId(),
        "title": "Space",
        "content": "Space is so spacious",
        "author": {"firstName": "Ada", "lastName": "Lovelace"},
        "created": datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc),
    }


@pytest.fixture
def blog_data_factory():
    """
    Returns a function producing POST /posts bodies with Faker placeholder text.

    Usage:
        body = blog_data_factory()
        # {"title": ..., "content": ..., "author": {"firstName": ..., "lastName": ...}}
    """
    fake = Faker()

    def generate_blog_data():
        return {
            "title": fake.sentence(),
            "content": " ".join(fake.sentences()),
            "author": {
                "firstName": fake.first_name(),
                "lastName": fake.last_name(),
            },
        }

    return generate_blog_data


@pytest_asyncio.fixture
async def test_client(mock_db):
    """
    HTTPX AsyncClient for endpoint tests against a mocked store.

    ASGITransport does not run the lifespan, so no MongoDB connection is
    opened; the database dependency is overridden with mock_db instead.
    """
    from blog_api.main import create_app

    app = create_app()
    app.dependency_overrides[get_database] = lambda: mock_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
