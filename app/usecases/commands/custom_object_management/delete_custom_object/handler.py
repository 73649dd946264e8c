"""
Handler for delete_custom_object command.
"""
import logging

from sqlalchemy.orm import Session

from app.core.errors import CustomObjectNotFoundError, VersionConflictError
from app.domain.custom_object import IdentityKey
from app.infrastructure.database.models import CustomObjectRecord
from app.usecases.commands.custom_object_management._output import (
    CustomObjectOutput,
    to_output,
)
from app.usecases.commands.custom_object_management.delete_custom_object.types import (
    DeleteCustomObjectModel,
)

logger = logging.getLogger(__name__)


def delete_custom_object_handler(
    session: Session, input_data: DeleteCustomObjectModel
) -> CustomObjectOutput:
    """
    Delete a custom object by container and key.

    Args:
        session: Database session
        input_data: Identity, expected version and force flag

    Returns:
        The object as it was before deletion

    Raises:
        CustomObjectNotFoundError: If nothing is stored at the identity
        VersionConflictError: If not forced and the version doesn't match
    """
    identity = IdentityKey(container=input_data.container, key=input_data.key)

    record = (
        session.query(CustomObjectRecord)
        .filter_by(container=input_data.container, key=input_data.key)
        .first()
    )
    if record is None:
        raise CustomObjectNotFoundError(
            f"Custom object with container '{identity.container}' and key "
            f"'{identity.key}' not found.",
            identity=identity,
        )

    deleted = to_output(record)

    query = session.query(CustomObjectRecord).filter_by(id=record.id)
    if not input_data.force:
        query = query.filter_by(version=input_data.version)

    if query.delete(synchronize_session=False) == 0:
        if input_data.force:
            raise CustomObjectNotFoundError(
                f"Custom object with container '{identity.container}' and key "
                f"'{identity.key}' was removed concurrently.",
                identity=identity,
            )
        raise VersionConflictError(
            f"Object {record.id} has a different version than expected. "
            f"Expected: {input_data.version} - Actual: {record.version}.",
            identity=identity,
        )

    logger.info(
        f"[CustomObject {identity}] Deleted {record.id} at version {record.version}"
        f"{' (forced)' if input_data.force else ''}"
    )
    return deleted
