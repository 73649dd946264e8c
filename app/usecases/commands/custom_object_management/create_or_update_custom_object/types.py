"""
Type definitions for create_or_update_custom_object command.
"""
from typing import Any, Optional

import strawberry
from pydantic import BaseModel, Field, field_validator
from strawberry.scalars import JSON

from app.domain.custom_object import IDENTITY_PATTERN


class CustomObjectDraftModel(BaseModel):
    """Pydantic model for a custom object draft with validation."""
    container: str = Field(pattern=IDENTITY_PATTERN, max_length=256)
    key: str = Field(pattern=IDENTITY_PATTERN, max_length=256)
    value: Any = None
    version: Optional[int] = None

    @field_validator('version')
    @classmethod
    def validate_version(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 0:
            raise ValueError('version must be >= 0')
        return v


@strawberry.input
class CustomObjectDraftInput:
    """
    GraphQL input for creating or updating a custom object.

    Without a version the object is created. With a version the stored object
    is updated in place, only if its version matches.
    """
    container: str
    key: str
    value: Optional[JSON] = None
    version: Optional[int] = None
