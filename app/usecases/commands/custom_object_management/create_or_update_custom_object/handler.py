"""
Handler for create_or_update_custom_object command.
"""
import json
import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import (
    CustomObjectNotFoundError,
    DuplicateCustomObjectError,
    VersionConflictError,
)
from app.domain.custom_object import IdentityKey
from app.infrastructure.database.models import CustomObjectRecord
from app.usecases.commands.custom_object_management._output import (
    CustomObjectOutput,
    to_output,
)
from app.usecases.commands.custom_object_management.create_or_update_custom_object.types import (
    CustomObjectDraftModel,
)

logger = logging.getLogger(__name__)


def create_or_update_custom_object_handler(
    session: Session, input_data: CustomObjectDraftModel
) -> CustomObjectOutput:
    """
    Create a custom object, or update its value if the version matches.

    Args:
        session: Database session
        input_data: Draft with container, key, value and optional version

    Returns:
        The stored object. Version is 1 for a new object and is incremented
        by one on every update.

    Raises:
        DuplicateCustomObjectError: If no version is given and the identity is taken
        CustomObjectNotFoundError: If a version is given and nothing is stored
        VersionConflictError: If the given version doesn't match the stored one
    """
    identity = IdentityKey(container=input_data.container, key=input_data.key)
    value_json = json.dumps(input_data.value)

    record = (
        session.query(CustomObjectRecord)
        .filter_by(container=input_data.container, key=input_data.key)
        .first()
    )

    if input_data.version is None:
        if record is not None:
            raise DuplicateCustomObjectError(
                f"A custom object with container '{identity.container}' and key "
                f"'{identity.key}' already exists.",
                identity=identity,
            )

        record = CustomObjectRecord(
            container=input_data.container,
            key=input_data.key,
            value_json=value_json,
            version=1,
        )
        session.add(record)
        try:
            session.flush()
        except IntegrityError as e:
            # Lost a race with another create for the same identity
            raise DuplicateCustomObjectError(
                f"A custom object with container '{identity.container}' and key "
                f"'{identity.key}' already exists.",
                identity=identity,
            ) from e

        logger.info(f"[CustomObject {identity}] Created {record.id} at version 1")
        return to_output(record)

    if record is None:
        raise CustomObjectNotFoundError(
            f"Custom object with container '{identity.container}' and key "
            f"'{identity.key}' not found.",
            identity=identity,
        )

    # Conditional update so a concurrent writer can't slip in between
    # the read above and this write
    updated = (
        session.query(CustomObjectRecord)
        .filter_by(id=record.id, version=input_data.version)
        .update(
            {
                CustomObjectRecord.value_json: value_json,
                CustomObjectRecord.version: CustomObjectRecord.version + 1,
                CustomObjectRecord.updated_at: datetime.utcnow(),
            },
            synchronize_session=False,
        )
    )
    if updated == 0:
        session.refresh(record)
        raise VersionConflictError(
            f"Object {record.id} has a different version than expected. "
            f"Expected: {input_data.version} - Actual: {record.version}.",
            identity=identity,
        )

    session.refresh(record)
    logger.info(f"[CustomObject {identity}] Updated {record.id} to version {record.version}")
    return to_output(record)
