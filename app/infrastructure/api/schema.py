"""
GraphQL schema composition.

This module imports all resolvers from use case slices and composes them
into a single Strawberry schema.
"""
import strawberry

# Import command resolvers (mutations)
from app.usecases.commands.custom_object_management.create_or_update_custom_object.resolver import (
    create_or_update_custom_object,
)
from app.usecases.commands.custom_object_management.delete_custom_object.resolver import (
    delete_custom_object,
)

# Import query resolvers
from app.usecases.queries.get_custom_object.resolver import (
    custom_object,
    custom_object_by_id,
)


@strawberry.type
class Mutation:
    """Root mutation type - one resolver per command."""

    create_or_update_custom_object = create_or_update_custom_object
    delete_custom_object = delete_custom_object


@strawberry.type
class Query:
    """Root query type - one resolver per query."""

    custom_object = custom_object
    custom_object_by_id = custom_object_by_id

    @strawberry.field
    def health(self) -> str:
        """Health check endpoint."""
        return "ok"


# Build the schema
schema = strawberry.Schema(query=Query, mutation=Mutation)
