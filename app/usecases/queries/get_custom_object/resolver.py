"""
GraphQL resolvers for get_custom_object queries.
"""
from typing import Optional

import strawberry

from app.infrastructure.database.session import session_scope
from app.usecases.commands.custom_object_management._output import CustomObjectOutput
from app.usecases.queries.get_custom_object.handler import (
    get_custom_object_by_id_handler,
    get_custom_object_handler,
)


@strawberry.field
def custom_object(container: str, key: str) -> Optional[CustomObjectOutput]:
    """
    GraphQL query to get a custom object by container and key.

    Returns null when nothing is stored at the identity.
    """
    with session_scope() as session:
        return get_custom_object_handler(session, container, key)


@strawberry.field
def custom_object_by_id(id: str) -> Optional[CustomObjectOutput]:
    """GraphQL query to get a custom object by id."""
    with session_scope() as session:
        return get_custom_object_by_id_handler(session, id)
