"""
Unit tests for DatabaseCustomObjectStore.
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.errors import (
    CustomObjectNotFoundError,
    DuplicateCustomObjectError,
    VersionConflictError,
)
from app.domain.custom_object import IdentityKey
from app.infrastructure.database.models import Base
from app.infrastructure.store.database_store import DatabaseCustomObjectStore

IDENTITY = IdentityKey(container="test", key="k1")


@pytest.fixture
def store() -> DatabaseCustomObjectStore:
    """Create a database store on a fresh in-memory SQLite database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return DatabaseCustomObjectStore(session_factory=sessionmaker(bind=engine))


def test_create_and_fetch(store: DatabaseCustomObjectStore) -> None:
    """Test that a created object can be fetched by identity and id."""
    created = store.create_or_update(IDENTITY, {"a": 1})

    assert created.version == 1
    assert created.identity == IDENTITY
    assert store.fetch_by_identity(IDENTITY) == created
    assert store.fetch_by_id(created.remote_id) == created


def test_create_twice_fails(store: DatabaseCustomObjectStore) -> None:
    """Test that create without a version never overwrites."""
    store.create_or_update(IDENTITY, {"a": 1})

    with pytest.raises(DuplicateCustomObjectError):
        store.create_or_update(IDENTITY, {"a": 2})


def test_conditional_update(store: DatabaseCustomObjectStore) -> None:
    """Test that create with the current version acts as an update."""
    created = store.create_or_update(IDENTITY, {"a": 1})

    updated = store.create_or_update(IDENTITY, {"a": 2}, version=created.version)

    assert updated.remote_id == created.remote_id
    assert updated.version == 2
    assert updated.value == {"a": 2}


def test_fetch_missing_raises_not_found(store: DatabaseCustomObjectStore) -> None:
    """Test that a missing object raises CustomObjectNotFoundError."""
    with pytest.raises(CustomObjectNotFoundError):
        store.fetch_by_identity(IDENTITY)
    with pytest.raises(CustomObjectNotFoundError):
        store.fetch_by_id("no-such-id")


def test_delete_with_stale_version_conflicts(store: DatabaseCustomObjectStore) -> None:
    """Test that a non-forced delete with a stale version is rejected."""
    created = store.create_or_update(IDENTITY, {"a": 1})
    store.create_or_update(IDENTITY, {"a": 2}, version=created.version)

    with pytest.raises(VersionConflictError):
        store.delete_by_identity(IDENTITY, created.version, force=False)

    assert store.fetch_by_identity(IDENTITY).version == 2


def test_force_delete_with_stale_version(store: DatabaseCustomObjectStore) -> None:
    """Test that a forced delete succeeds regardless of version."""
    created = store.create_or_update(IDENTITY, {"a": 1})
    store.create_or_update(IDENTITY, {"a": 2}, version=created.version)

    deleted = store.delete_by_identity(IDENTITY, created.version, force=True)

    assert deleted.version == 2
    with pytest.raises(CustomObjectNotFoundError):
        store.fetch_by_identity(IDENTITY)


def test_new_identity_gets_new_id(store: DatabaseCustomObjectStore) -> None:
    """Test that each identity gets its own id."""
    first = store.create_or_update(IdentityKey(container="c1", key="a"), {})
    second = store.create_or_update(IdentityKey(container="c1", key="b"), {})

    assert first.remote_id != second.remote_id
