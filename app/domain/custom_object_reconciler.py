"""
Reconciliation of declared custom objects against the store.

The reconciler drives one local resource through its lifecycle:
Absent -> Created -> (Updated)* -> Deleted. It never assigns versions itself;
every version comes from the store, and writes are made with the last version
the store reported so stale writes are rejected rather than overwriting.

Key rules:
- Read treats a missing object as absence, not an error
- Renaming (container or key) creates the new object before deleting the old
  one, so the data always exists somewhere
- Update and Delete hold the resource's lock from MutexKV, so this process
  never races itself on the version field
"""
import logging
from dataclasses import replace
from typing import Optional

from app.core.errors import (
    CustomObjectError,
    CustomObjectNotFoundError,
    with_context,
)
from app.core.mutex_kv import MutexKV, custom_object_locks
from app.domain.custom_object import (
    CustomObjectInput,
    CustomObjectState,
    IdentityKey,
    VersionedObject,
    decode_custom_object_value,
    encode_custom_object_value,
)
from app.infrastructure.store.base import CustomObjectStore

logger = logging.getLogger(__name__)


class CustomObjectReconciler:
    """Create, read, update and delete custom objects against a store."""

    def __init__(self, store: CustomObjectStore, locks: MutexKV = custom_object_locks):
        """
        Initialize the reconciler.

        Args:
            store: The custom object store to reconcile against
            locks: Lock table serializing operations per resource id
        """
        self._store = store
        self._locks = locks

    def create(self, desired: CustomObjectInput) -> CustomObjectState:
        """
        Create the declared object.

        Args:
            desired: Container, key and raw JSON value

        Returns:
            The new local state with the store's id and version

        Raises:
            DuplicateCustomObjectError: If an object already exists at the identity
            CustomObjectError: For any other store failure
        """
        identity = desired.identity
        # Intentional fallback: malformed JSON is stored as an empty document
        value = decode_custom_object_value(desired.value)

        try:
            created = self._store.create_or_update(identity, value)
        except CustomObjectError as e:
            raise with_context(e, "create", identity) from e

        logger.info(
            f"[CustomObject {identity}] Created {created.remote_id} at version {created.version}"
        )
        return self._state_for(desired, created)

    def read(self, state: CustomObjectState) -> CustomObjectState:
        """
        Refresh local state from the store.

        The store is authoritative: container, key, value and version are
        overwritten with what it holds. A state carrying only an id (after
        import) is resolved by id instead of identity.

        Args:
            state: Last known local state

        Returns:
            The refreshed state, or an absent state (id None) if the object no
            longer exists

        Raises:
            CustomObjectError: For store failures other than a missing object
        """
        by_id = not state.has_identity
        identity = None if by_id else state.identity
        logger.debug(
            f"[CustomObject {identity or state.id}] Reading custom object"
        )

        try:
            if by_id:
                found = self._store.fetch_by_id(state.id)
            else:
                found = self._store.fetch_by_identity(identity)
        except CustomObjectNotFoundError:
            logger.debug(f"[CustomObject {identity or state.id}] No custom object found")
            return replace(state, id=None)
        except CustomObjectError as e:
            raise with_context(e, "read", identity, remote_id=state.id) from e

        logger.debug(
            f"[CustomObject {found.identity}] Found {found.remote_id} at version {found.version}"
        )
        return replace(
            state,
            container=found.identity.container,
            key=found.identity.key,
            value=encode_custom_object_value(found.value),
            version=found.version,
        )

    def update(self, state: CustomObjectState, desired: CustomObjectInput) -> CustomObjectState:
        """
        Bring the stored object in line with the declared one.

        With an unchanged identity the value is written in place using the
        last known version. With a changed identity a new object is created
        and the old one is then force-deleted; failing to delete the old one
        is logged and does not fail the update.

        Args:
            state: Last known local state
            desired: Declared container, key and raw JSON value

        Returns:
            The new local state

        Raises:
            VersionConflictError: If the last known version is stale
            DuplicateCustomObjectError: If renaming onto a taken identity
            CustomObjectError: For any other store failure
        """
        with self._locks.hold(self._lock_key(state)):
            if desired.identity != state.identity:
                return self._move(state, desired)

            identity = desired.identity
            value = decode_custom_object_value(desired.value)
            try:
                # Creating with the current version updates in place
                updated = self._store.create_or_update(identity, value, version=state.version)
            except CustomObjectError as e:
                raise with_context(e, "update", identity) from e

            logger.info(
                f"[CustomObject {identity}] Updated {updated.remote_id} "
                f"from version {state.version} to {updated.version}"
            )
            return self._state_for(desired, updated)

    def delete(self, state: CustomObjectState) -> None:
        """
        Delete the stored object using its live version.

        The live version is fetched first because the local one may be stale.
        A missing object is an error here, unlike in read.

        Args:
            state: Last known local state

        Raises:
            CustomObjectNotFoundError: If the object no longer exists
            VersionConflictError: If the object changed between fetch and delete
            CustomObjectError: For any other store failure
        """
        identity = state.identity
        with self._locks.hold(self._lock_key(state)):
            try:
                live = self._store.fetch_by_identity(identity)
            except CustomObjectError as e:
                raise with_context(e, "get", identity) from e

            try:
                self._store.delete_by_identity(identity, live.version, force=False)
            except CustomObjectError as e:
                raise with_context(e, "delete", identity) from e

        logger.info(f"[CustomObject {identity}] Deleted {live.remote_id} at version {live.version}")

    @staticmethod
    def import_state(resource_id: str) -> CustomObjectState:
        """
        Adopt an existing object from its store id alone.

        The returned state is filled in by the next read.
        """
        return CustomObjectState(id=resource_id)

    def _move(self, state: CustomObjectState, desired: CustomObjectInput) -> CustomObjectState:
        old_identity = state.identity
        new_identity = desired.identity
        value = decode_custom_object_value(desired.value)

        # Create first so the data is never missing from the store
        try:
            created = self._store.create_or_update(new_identity, value)
        except CustomObjectError as e:
            raise with_context(e, "create", new_identity) from e

        new_state = self._state_for(desired, created)
        logger.info(
            f"[CustomObject {new_identity}] Created {created.remote_id} "
            f"replacing {old_identity}"
        )

        error = self._delete_replaced(old_identity, state.version)
        if error is not None:
            # Leaves a stale object behind; the new object is kept
            logger.warning(
                f"[CustomObject {old_identity}] Failed to remove old custom object "
                f"after moving to {new_identity}: {error}"
            )
        return new_state

    def _delete_replaced(
        self, identity: IdentityKey, version: Optional[int]
    ) -> Optional[CustomObjectError]:
        """Force-delete an object left behind by a rename, returning any error."""
        try:
            self._store.delete_by_identity(identity, version, force=True)
        except CustomObjectError as e:
            return e
        return None

    @staticmethod
    def _lock_key(state: CustomObjectState) -> str:
        return state.id or str(state.identity)

    @staticmethod
    def _state_for(desired: CustomObjectInput, stored: VersionedObject) -> CustomObjectState:
        return CustomObjectState(
            container=desired.container,
            key=desired.key,
            value=desired.value,
            id=stored.remote_id,
            version=stored.version,
        )
