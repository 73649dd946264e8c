"""
Unit tests for database models.
"""
from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from app.infrastructure.database.models import Base, CustomObjectRecord


@pytest.fixture
def in_memory_session() -> Session:
    """Create an in-memory SQLite session for testing."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    yield session
    session.close()


def test_custom_object_creation(in_memory_session: Session) -> None:
    """Test creating a custom object record."""
    record = CustomObjectRecord(container="test", key="k1", value_json='{"a": 1}')
    in_memory_session.add(record)
    in_memory_session.commit()

    assert record.id is not None
    assert len(record.id) == 36
    assert record.version == 1
    assert isinstance(record.created_at, datetime)
    assert isinstance(record.updated_at, datetime)


def test_same_key_in_different_containers(in_memory_session: Session) -> None:
    """Test that a key can be reused across containers."""
    in_memory_session.add_all([
        CustomObjectRecord(container="c1", key="k1", value_json="{}"),
        CustomObjectRecord(container="c2", key="k1", value_json="{}"),
    ])
    in_memory_session.commit()

    assert in_memory_session.query(CustomObjectRecord).count() == 2


def test_identity_is_unique(in_memory_session: Session) -> None:
    """Test that only one record may exist per container and key."""
    in_memory_session.add(CustomObjectRecord(container="c1", key="k1", value_json="{}"))
    in_memory_session.commit()

    in_memory_session.add(CustomObjectRecord(container="c1", key="k1", value_json="[]"))
    with pytest.raises(IntegrityError):
        in_memory_session.commit()
