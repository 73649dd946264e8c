"""
GraphQL resolver for create_or_update_custom_object mutation.
"""
import strawberry

from app.infrastructure.api.errors import graphql_errors
from app.infrastructure.database.session import session_scope
from app.usecases.commands.custom_object_management._output import CustomObjectOutput
from app.usecases.commands.custom_object_management.create_or_update_custom_object.handler import (
    create_or_update_custom_object_handler,
)
from app.usecases.commands.custom_object_management.create_or_update_custom_object.types import (
    CustomObjectDraftInput,
    CustomObjectDraftModel,
)


@strawberry.mutation
def create_or_update_custom_object(draft: CustomObjectDraftInput) -> CustomObjectOutput:
    """
    GraphQL mutation to create a custom object or update it by version.

    Args:
        draft: Container, key, value and optional expected version

    Returns:
        The stored custom object
    """
    with graphql_errors():
        # Create validated Pydantic input (validation happens in constructor)
        validated_input = CustomObjectDraftModel(
            container=draft.container,
            key=draft.key,
            value=draft.value,
            version=draft.version,
        )

        with session_scope() as session:
            return create_or_update_custom_object_handler(session, validated_input)
