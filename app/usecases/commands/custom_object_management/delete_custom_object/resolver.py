"""
GraphQL resolver for delete_custom_object mutation.
"""
from typing import Optional

import strawberry

from app.infrastructure.api.errors import graphql_errors
from app.infrastructure.database.session import session_scope
from app.usecases.commands.custom_object_management._output import CustomObjectOutput
from app.usecases.commands.custom_object_management.delete_custom_object.handler import (
    delete_custom_object_handler,
)
from app.usecases.commands.custom_object_management.delete_custom_object.types import (
    DeleteCustomObjectModel,
)


@strawberry.mutation
def delete_custom_object(
    container: str,
    key: str,
    version: Optional[int] = None,
    force: bool = False,
) -> CustomObjectOutput:
    """
    GraphQL mutation to delete a custom object.

    Args:
        container: Container of the object
        key: Key of the object
        version: Expected current version, required unless force is set
        force: Delete regardless of version

    Returns:
        The deleted custom object
    """
    with graphql_errors():
        validated_input = DeleteCustomObjectModel(
            container=container, key=key, version=version, force=force
        )

        with session_scope() as session:
            return delete_custom_object_handler(session, validated_input)
