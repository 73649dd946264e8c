"""
Client interface to a custom object store.

The store exposes one create-or-update endpoint. It is modelled here as a
single method whose ``version`` argument picks between "create" (None) and
"conditional update" (the last known version), which keeps both cases easy to
exercise against a fake.
"""
from typing import Any, Optional, Protocol

from app.domain.custom_object import IdentityKey, VersionedObject


class CustomObjectStore(Protocol):
    """Capabilities the reconciler needs from a custom object store."""

    def create_or_update(
        self, identity: IdentityKey, value: Any, version: Optional[int] = None
    ) -> VersionedObject:
        """
        Create an object, or update it in place when ``version`` matches.

        Raises:
            DuplicateCustomObjectError: If ``version`` is None and the identity is taken
            VersionConflictError: If ``version`` doesn't match the stored version
            CustomObjectNotFoundError: If ``version`` is given and nothing is stored
        """
        ...

    def fetch_by_identity(self, identity: IdentityKey) -> VersionedObject:
        """
        Fetch the live object at an identity.

        Raises:
            CustomObjectNotFoundError: If nothing is stored at the identity
        """
        ...

    def fetch_by_id(self, remote_id: str) -> VersionedObject:
        """
        Fetch the live object with a store-assigned id.

        Raises:
            CustomObjectNotFoundError: If no object has that id
        """
        ...

    def delete_by_identity(
        self, identity: IdentityKey, version: Optional[int], force: bool = False
    ) -> VersionedObject:
        """
        Delete the object at an identity and return it.

        Raises:
            CustomObjectNotFoundError: If nothing is stored at the identity
            VersionConflictError: If ``force`` is False and ``version`` doesn't match
        """
        ...
