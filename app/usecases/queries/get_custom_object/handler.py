"""
Handlers for get_custom_object queries.
"""
from typing import Optional

from sqlalchemy.orm import Session

from app.infrastructure.database.models import CustomObjectRecord
from app.usecases.commands.custom_object_management._output import (
    CustomObjectOutput,
    to_output,
)


def get_custom_object_handler(
    session: Session, container: str, key: str
) -> Optional[CustomObjectOutput]:
    """
    Get a custom object by container and key.

    Args:
        session: Database session
        container: Container of the object
        key: Key of the object

    Returns:
        The stored object, or None if nothing is stored at the identity
    """
    record = (
        session.query(CustomObjectRecord)
        .filter_by(container=container, key=key)
        .first()
    )
    return to_output(record) if record else None


def get_custom_object_by_id_handler(
    session: Session, object_id: str
) -> Optional[CustomObjectOutput]:
    """Get a custom object by its id, or None if no object has that id."""
    record = session.get(CustomObjectRecord, object_id)
    return to_output(record) if record else None
