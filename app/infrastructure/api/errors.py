"""
Translation of domain errors into GraphQL errors.

Resolvers wrap their handler call in ``graphql_errors()`` so clients receive
the error code in ``extensions.code`` and can tell a missing object from a
version conflict without parsing messages.
"""
from contextlib import contextmanager
from typing import Generator

from graphql import GraphQLError
from pydantic import ValidationError

from app.core.errors import CustomObjectError, CustomObjectValidationError


@contextmanager
def graphql_errors() -> Generator[None, None, None]:
    """Re-raise domain and validation errors as coded GraphQL errors."""
    try:
        yield
    except CustomObjectError as e:
        raise GraphQLError(str(e), extensions={"code": e.code}) from e
    except ValidationError as e:
        raise GraphQLError(
            f"Invalid input: {e}",
            extensions={"code": CustomObjectValidationError.code},
        ) from e
