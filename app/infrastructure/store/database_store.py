"""
In-process custom object store backed by the local database.

Calls the command and query handlers directly inside a transactional session,
without going through GraphQL. Useful for local runs and tests.
"""
from typing import Any, Callable, Optional

from sqlalchemy.orm import Session

from app.core.errors import CustomObjectNotFoundError
from app.domain.custom_object import IdentityKey, VersionedObject
from app.infrastructure.database.session import session_scope
from app.usecases.commands.custom_object_management._output import CustomObjectOutput
from app.usecases.commands.custom_object_management.create_or_update_custom_object.handler import (
    create_or_update_custom_object_handler,
)
from app.usecases.commands.custom_object_management.create_or_update_custom_object.types import (
    CustomObjectDraftModel,
)
from app.usecases.commands.custom_object_management.delete_custom_object.handler import (
    delete_custom_object_handler,
)
from app.usecases.commands.custom_object_management.delete_custom_object.types import (
    DeleteCustomObjectModel,
)
from app.usecases.queries.get_custom_object.handler import (
    get_custom_object_by_id_handler,
    get_custom_object_handler,
)


def _to_versioned(output: CustomObjectOutput) -> VersionedObject:
    return VersionedObject(
        remote_id=output.id,
        identity=IdentityKey(container=output.container, key=output.key),
        value=output.value,
        version=output.version,
    )


class DatabaseCustomObjectStore:
    """CustomObjectStore that reads and writes the local database."""

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None):
        """
        Initialize the store.

        Args:
            session_factory: Session factory to use. Defaults to the
                application's SessionLocal.
        """
        self._session_factory = session_factory

    def create_or_update(
        self, identity: IdentityKey, value: Any, version: Optional[int] = None
    ) -> VersionedObject:
        draft = CustomObjectDraftModel(
            container=identity.container,
            key=identity.key,
            value=value,
            version=version,
        )
        with session_scope(self._session_factory) as session:
            return _to_versioned(create_or_update_custom_object_handler(session, draft))

    def fetch_by_identity(self, identity: IdentityKey) -> VersionedObject:
        with session_scope(self._session_factory) as session:
            output = get_custom_object_handler(session, identity.container, identity.key)
        if output is None:
            raise CustomObjectNotFoundError(
                f"Custom object with container '{identity.container}' and key "
                f"'{identity.key}' not found.",
                identity=identity,
            )
        return _to_versioned(output)

    def fetch_by_id(self, remote_id: str) -> VersionedObject:
        with session_scope(self._session_factory) as session:
            output = get_custom_object_by_id_handler(session, remote_id)
        if output is None:
            raise CustomObjectNotFoundError(f"Custom object with id '{remote_id}' not found.")
        return _to_versioned(output)

    def delete_by_identity(
        self, identity: IdentityKey, version: Optional[int], force: bool = False
    ) -> VersionedObject:
        input_data = DeleteCustomObjectModel(
            container=identity.container,
            key=identity.key,
            version=version,
            force=force,
        )
        with session_scope(self._session_factory) as session:
            return _to_versioned(delete_custom_object_handler(session, input_data))
