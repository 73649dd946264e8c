"""
E2E tests for reconciling custom objects through the GraphQL store.

The reconciler talks to the real application over HTTP (via the ASGI test
client), so these tests cover the wire format and error mapping as well as
the reconciliation rules.
"""
import pytest

from app.core.errors import (
    CustomObjectNotFoundError,
    DuplicateCustomObjectError,
    VersionConflictError,
)
from app.core.mutex_kv import MutexKV
from app.domain.custom_object import CustomObjectInput, IdentityKey
from app.domain.custom_object_reconciler import CustomObjectReconciler


@pytest.fixture
def reconciler(graphql_store) -> CustomObjectReconciler:
    """Create a reconciler over the GraphQL store."""
    return CustomObjectReconciler(graphql_store, locks=MutexKV())


def test_lifecycle_scenario(reconciler, graphql_store):
    """Test create, read, update, rename and delete against the service."""
    # Step 1: Create
    created = reconciler.create(CustomObjectInput(container="test", key="k1", value='{"a":1}'))
    assert created.version == 1
    assert created.id

    # Step 2: Read returns identical value and version
    read = reconciler.read(created)
    assert read.value == '{"a":1}'
    assert read.version == 1

    # Step 3: Update value in place
    updated = reconciler.update(read, CustomObjectInput(container="test", key="k1", value='{"a":2}'))
    assert updated.version == 2
    assert updated.id == created.id

    # Step 4: Rename key, new object replaces the old one
    moved = reconciler.update(updated, CustomObjectInput(container="test", key="k2", value='{"a":2}'))
    assert moved.id != created.id
    assert moved.version == 1
    with pytest.raises(CustomObjectNotFoundError):
        graphql_store.fetch_by_identity(IdentityKey(container="test", key="k1"))

    # Step 5: Delete, then read is absent
    reconciler.delete(moved)
    assert reconciler.read(moved).is_absent


def test_create_conflict_over_the_wire(reconciler):
    """Test that a duplicate create surfaces as DuplicateCustomObjectError."""
    reconciler.create(CustomObjectInput(container="test", key="k1", value="1"))

    with pytest.raises(DuplicateCustomObjectError, match="container test and key k1"):
        reconciler.create(CustomObjectInput(container="test", key="k1", value="2"))


def test_stale_update_over_the_wire(reconciler):
    """Test that a stale update surfaces as VersionConflictError."""
    created = reconciler.create(CustomObjectInput(container="test", key="k1", value="1"))
    reconciler.update(created, CustomObjectInput(container="test", key="k1", value="2"))

    with pytest.raises(VersionConflictError):
        reconciler.update(created, CustomObjectInput(container="test", key="k1", value="3"))


def test_delete_missing_over_the_wire(reconciler):
    """Test that deleting a missing object is fatal."""
    created = reconciler.create(CustomObjectInput(container="test", key="k1", value="1"))
    reconciler.delete(created)

    with pytest.raises(CustomObjectNotFoundError, match="could not get custom object"):
        reconciler.delete(created)


def test_force_and_stale_delete(graphql_store):
    """Test the store's delete contract over the wire."""
    identity = IdentityKey(container="test", key="k1")
    created = graphql_store.create_or_update(identity, {"a": 1})
    graphql_store.create_or_update(identity, {"a": 2}, version=created.version)

    with pytest.raises(VersionConflictError):
        graphql_store.delete_by_identity(identity, created.version, force=False)

    deleted = graphql_store.delete_by_identity(identity, created.version, force=True)
    assert deleted.version == 2


def test_import_by_id(reconciler, graphql_store):
    """Test adopting an object by id and reading it."""
    stored = graphql_store.create_or_update(IdentityKey(container="test", key="k1"), [1, 2, 3])

    state = reconciler.read(CustomObjectReconciler.import_state(stored.remote_id))

    assert state.container == "test"
    assert state.key == "k1"
    assert state.value == "[1,2,3]"
    assert state.version == 1


def test_create_and_read_non_ascii_value(reconciler):
    """Test that non-ASCII text reads back exactly as declared."""
    created = reconciler.create(CustomObjectInput(container="test", key="k1", value='{"name":"café"}'))

    assert created.value == '{"name":"café"}'
    assert reconciler.read(created).value == '{"name":"café"}'


def test_create_and_read_null_value(reconciler):
    """Test that a JSON null value is stored and read back."""
    created = reconciler.create(CustomObjectInput(container="test", key="k1", value="null"))
    assert created.version == 1

    read = reconciler.read(created)
    assert not read.is_absent
    assert read.value == "null"

    updated = reconciler.update(read, CustomObjectInput(container="test", key="k1", value='{"a":1}'))
    assert updated.version == 2
