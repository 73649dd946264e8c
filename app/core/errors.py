"""
Error taxonomy for custom object operations.

Every error carries a machine readable ``code`` matching the error codes the
store service puts into GraphQL ``extensions.code``, so the same classes are
raised on both sides of the wire.
"""
from typing import Optional

from app.domain.custom_object import IdentityKey


class CustomObjectError(Exception):
    """Base exception for custom object failures."""

    code = "General"

    def __init__(
        self,
        message: str,
        identity: Optional[IdentityKey] = None,
        operation: Optional[str] = None,
    ):
        super().__init__(message)
        self.identity = identity
        self.operation = operation


class CustomObjectNotFoundError(CustomObjectError):
    """Raised when no live custom object exists for an identity or id."""

    code = "ResourceNotFound"


class ConflictError(CustomObjectError):
    """Base class for writes rejected because of concurrent state."""

    code = "ConcurrentModification"


class VersionConflictError(ConflictError):
    """
    Raised when a supplied version doesn't match the stored version.

    The caller's view of the object is stale. It is never retried or merged;
    the caller should read the object again before writing.
    """


class DuplicateCustomObjectError(ConflictError):
    """Raised when creating an object at an identity that is already taken."""

    code = "DuplicateValue"


class CustomObjectValidationError(CustomObjectError):
    """Raised when the store rejects a request as invalid."""

    code = "InvalidInput"


class CustomObjectTransportError(CustomObjectError):
    """
    Raised for network, HTTP and serialization failures talking to the store.

    ``transient`` marks failures (timeouts, 5xx, 429) where a retry by the
    transport layer could succeed. This package never retries itself.
    """

    code = "TransportError"

    def __init__(
        self,
        message: str,
        identity: Optional[IdentityKey] = None,
        operation: Optional[str] = None,
        transient: bool = False,
    ):
        super().__init__(message, identity=identity, operation=operation)
        self.transient = transient


ERRORS_BY_CODE: dict[str, type[CustomObjectError]] = {
    CustomObjectNotFoundError.code: CustomObjectNotFoundError,
    VersionConflictError.code: VersionConflictError,
    DuplicateCustomObjectError.code: DuplicateCustomObjectError,
    CustomObjectValidationError.code: CustomObjectValidationError,
}


def with_context(
    error: CustomObjectError,
    operation: str,
    identity: Optional[IdentityKey] = None,
    remote_id: Optional[str] = None,
) -> CustomObjectError:
    """
    Build a copy of an error that names the operation and object involved.

    The copy keeps the error class so callers can still catch by kind. Raise
    it ``from`` the original error to keep the chain.

    Args:
        error: The error raised by the store
        operation: The operation attempted (e.g. "delete")
        identity: The identity the operation targeted
        remote_id: The store id the operation targeted, when there is no identity

    Returns:
        A new error of the same class with a contextual message
    """
    if identity is not None:
        target = f"with container {identity.container} and key {identity.key}"
    else:
        target = f"with id {remote_id}"
    message = f"could not {operation} custom object {target}: {error}"
    if isinstance(error, CustomObjectTransportError):
        return CustomObjectTransportError(
            message, identity=identity, operation=operation, transient=error.transient
        )
    return type(error)(message, identity=identity, operation=operation)
