"""
Pytest configuration and shared fixtures for MDB_INDEXER tests.

This module provides:
- Sample record types (pydantic and dataclass)
- Mock Motor collection fixtures
- In-memory collection gateway fixtures
"""

from dataclasses import dataclass, field
from unittest.mock import AsyncMock, MagicMock

import pytest
from motor.motor_asyncio import AsyncIOMotorCollection
from pydantic import BaseModel, Field

from mdb_indexer.database import InMemoryCollectionGateway
from mdb_indexer.observability.logging import _correlation_id, _index_context


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without a MongoDB server")


# ============================================================================
# SAMPLE RECORD TYPES
# ============================================================================


class User(BaseModel):
    """Record with a unique named index and a TTL index."""

    email: str = Field(json_schema_extra={"index": "unique,asc,name=email_idx"})
    display_name: str = ""
    created_at: int = Field(json_schema_extra={"index": "ttl=3600"})


class AuditEvent(BaseModel):
    """Record whose storage names differ from its attribute names."""

    event_id: str = Field(alias="eventId", json_schema_extra={"index": "unique"})
    occurred_at: int = Field(alias="ts", json_schema_extra={"index": "desc"})
    payload: dict = Field(default_factory=dict)


class Note(BaseModel):
    """Record without any index annotation."""

    title: str
    body: str = ""


@dataclass
class Session:
    """Dataclass record using field metadata."""

    token: str = field(metadata={"index": "unique,name=token_idx"})
    user_id: str = field(metadata={"bson": "userId", "index": ""})
    expires_at: int = field(default=0, metadata={"bson": "expiresAt", "index": "ttl=0"})
    note: str = ""


@pytest.fixture
def user_record() -> type[BaseModel]:
    return User


@pytest.fixture
def audit_record() -> type[BaseModel]:
    return AuditEvent


@pytest.fixture
def unindexed_record() -> type[BaseModel]:
    return Note


@pytest.fixture
def session_record() -> type:
    return Session


# ============================================================================
# COLLECTION FIXTURES
# ============================================================================


@pytest.fixture
def mock_mongo_collection() -> MagicMock:
    """Create a mock Motor collection whose create_indexes echoes default names."""
    collection = MagicMock(spec=AsyncIOMotorCollection)
    collection.name = "test_collection"

    async def create_indexes(models, **kwargs):
        return [model.document["name"] for model in models]

    collection.create_indexes = AsyncMock(side_effect=create_indexes)
    return collection


@pytest.fixture
def memory_gateway() -> InMemoryCollectionGateway:
    """Create an empty in-memory collection gateway."""
    return InMemoryCollectionGateway(name="users")


@pytest.fixture(autouse=True)
def clean_logging_context():
    """Reset logging context variables around each test."""
    yield
    _correlation_id.set(None)
    _index_context.set(None)
