"""
Output type shared by the custom object commands and queries.

Every slice returns the same shape of stored object, so the type and its
conversion from the ORM record live in the common parent folder.
"""
import json
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import strawberry
from strawberry.scalars import JSON

from app.infrastructure.database.models import CustomObjectRecord


@strawberry.type
@dataclass
class CustomObjectOutput:
    """A stored custom object."""
    id: str
    container: str
    key: str
    value: Optional[JSON]
    version: int
    created_at: datetime
    last_modified_at: datetime


def to_output(record: CustomObjectRecord) -> CustomObjectOutput:
    """Convert an ORM record into the output type."""
    return CustomObjectOutput(
        id=record.id,
        container=record.container,
        key=record.key,
        value=json.loads(record.value_json),
        version=record.version,
        created_at=record.created_at,
        last_modified_at=record.updated_at,
    )
