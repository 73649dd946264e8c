"""
Custom object domain types.

A custom object is an arbitrary JSON document stored remotely under a
(container, key) identity. The store assigns an opaque id on creation and a
version that increases with every write.
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

# Allowed characters for both container and key
IDENTITY_PATTERN = r"^[-_~.a-zA-Z0-9]+$"


class IdentityKey(BaseModel):
    """The (container, key) pair addressing a custom object."""

    model_config = ConfigDict(frozen=True)

    container: str = Field(pattern=IDENTITY_PATTERN)
    key: str = Field(pattern=IDENTITY_PATTERN)

    def __str__(self) -> str:
        return f"{self.container}/{self.key}"


@dataclass(frozen=True)
class VersionedObject:
    """A custom object as held by the remote store."""
    remote_id: str
    identity: IdentityKey
    value: Any
    version: int


class CustomObjectInput(BaseModel):
    """Desired state for a custom object, as declared by the user."""
    container: str = Field(pattern=IDENTITY_PATTERN)
    key: str = Field(pattern=IDENTITY_PATTERN)
    value: str

    @property
    def identity(self) -> IdentityKey:
        return IdentityKey(container=self.container, key=self.key)


@dataclass
class CustomObjectState:
    """
    Last known local state of a custom object resource.

    ``id`` mirrors the remote id. A state whose ``id`` is None is absent: the
    object no longer exists upstream and should be created again.
    """
    container: str = ""
    key: str = ""
    value: str = ""
    id: Optional[str] = None
    version: Optional[int] = None

    @property
    def identity(self) -> IdentityKey:
        return IdentityKey(container=self.container, key=self.key)

    @property
    def is_absent(self) -> bool:
        return self.id is None

    @property
    def has_identity(self) -> bool:
        return bool(self.container and self.key)


def decode_custom_object_value(raw: str) -> Any:
    """
    Decode the raw text form of a custom object value.

    Decoding is lenient on purpose: malformed JSON yields an empty document
    instead of an error, so a bad value is stored as ``{}``.

    Args:
        raw: JSON text supplied by the user

    Returns:
        The decoded JSON document, or an empty dict if ``raw`` is not valid JSON
    """
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        logger.warning(f"Custom object value is not valid JSON, using empty document: {e}")
        return {}


def encode_custom_object_value(value: Any) -> str:
    """Render a JSON document as compact text."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
