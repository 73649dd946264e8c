"""
Pytest configuration for E2E tests.

This module provides fixtures for testing the complete application
via GraphQL using an ASGI test client.

Note: These E2E tests use a SQLite database file in the test's temporary
directory, so each test starts from an empty store. This is more realistic
than mocking the database layer, as it tests the actual database operations
end-to-end.
"""
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.infrastructure.database.models import Base
from app.infrastructure.store.graphql_store import GraphQLCustomObjectStore
from app.main import app


@pytest.fixture(scope="function")
def test_client(tmp_path: Path):
    """
    Create a test client with a clean test database.

    Each test gets a fresh database file under its temporary directory.
    """
    test_db_path = tmp_path / "test_e2e.db"

    # Create engine for test database
    engine = create_engine(
        f"sqlite:///{test_db_path}",
        connect_args={"check_same_thread": False}
    )
    Base.metadata.create_all(bind=engine)

    # Point the app's session module at the test database
    from app.infrastructure.database import session as session_module
    original_engine = session_module.engine
    original_session_local = session_module.SessionLocal

    session_module.engine = engine
    session_module.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    with TestClient(app) as client:
        yield client

    # Restore original engine
    session_module.engine = original_engine
    session_module.SessionLocal = original_session_local
    engine.dispose()


@pytest.fixture
def graphql_client(test_client):
    """
    Create a helper for making GraphQL requests.

    Returns a callable that sends GraphQL queries/mutations.
    """
    def _query(query: str, variables: dict = None):
        """Execute a GraphQL query or mutation."""
        payload = {"query": query}
        if variables:
            payload["variables"] = variables

        response = test_client.post("/graphql", json=payload)
        return response.json()

    return _query


@pytest.fixture
def graphql_store(test_client) -> GraphQLCustomObjectStore:
    """Create a GraphQL store client talking to the test app."""
    return GraphQLCustomObjectStore(client=test_client)
