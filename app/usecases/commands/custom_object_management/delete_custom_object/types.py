"""
Type definitions for delete_custom_object command.
"""
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from app.domain.custom_object import IDENTITY_PATTERN


class DeleteCustomObjectModel(BaseModel):
    """Pydantic model for deleting a custom object with validation."""
    container: str = Field(pattern=IDENTITY_PATTERN)
    key: str = Field(pattern=IDENTITY_PATTERN)
    version: Optional[int] = None
    force: bool = False

    @model_validator(mode='after')
    def validate_version_or_force(self) -> "DeleteCustomObjectModel":
        if self.version is None and not self.force:
            raise ValueError('version is required unless force is set')
        return self
