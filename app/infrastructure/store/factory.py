"""
Store backend selection from environment configuration.
"""
import logging
import os

from app.infrastructure.store.base import CustomObjectStore
from app.infrastructure.store.database_store import DatabaseCustomObjectStore
from app.infrastructure.store.graphql_store import GraphQLCustomObjectStore

logger = logging.getLogger(__name__)

STORE_BACKENDS = {"graphql", "database"}


def get_store_backend() -> str:
    """
    Get the store backend name from environment configuration.

    Returns:
        "graphql" (default) or "database"

    Raises:
        ValueError: If CUSTOM_OBJECT_STORE names an unknown backend
    """
    backend = os.getenv("CUSTOM_OBJECT_STORE", "graphql").strip().lower()
    if backend not in STORE_BACKENDS:
        raise ValueError(
            f"Invalid CUSTOM_OBJECT_STORE: {backend}. "
            f"Must be one of: {', '.join(sorted(STORE_BACKENDS))}"
        )
    return backend


def build_custom_object_store() -> CustomObjectStore:
    """Build the store configured by CUSTOM_OBJECT_STORE."""
    backend = get_store_backend()
    logger.info(f"Using {backend} custom object store")
    if backend == "database":
        return DatabaseCustomObjectStore()
    return GraphQLCustomObjectStore()
