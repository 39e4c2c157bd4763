"""Test configuration for mongo-docstore."""

import pytest

pytest_plugins = ["pytest_asyncio"]


@pytest.fixture
def mongo_client():
    """In-memory Motor client; avoids a real database dependency."""
    try:
        from mongomock_motor import AsyncMongoMockClient
    except ImportError:
        pytest.skip("mongomock-motor not installed")
    return AsyncMongoMockClient()


@pytest.fixture
def backend(mongo_client):
    """A fresh Motor collection handle."""
    return mongo_client.get_database("test_db").get_collection("test_collection")


@pytest.fixture
def mongo_connection(mongo_client):
    """MongoConnectionManager wired to the in-memory client."""
    from mongo_docstore import MongoConnectionManager

    connection = MongoConnectionManager(
        url="mongodb://mock:27017", database="test_db"
    )
    connection._client = mongo_client
    return connection
