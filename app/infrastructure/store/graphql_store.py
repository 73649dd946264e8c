"""
Custom object store client over GraphQL.

Talks to the custom object store service (see app.main) through an httpx
client. Queries return null for a missing object; that is turned into
CustomObjectNotFoundError here so every store raises the same way.
"""
from typing import Any, Dict, Optional

import httpx

from app.core.errors import CustomObjectNotFoundError
from app.domain.custom_object import IdentityKey, VersionedObject
from app.infrastructure.graphql_client import create_http_client, execute_graphql

CUSTOM_OBJECT_FIELDS = """
    id
    container
    key
    value
    version
"""

CREATE_OR_UPDATE_MUTATION = f"""
    mutation CreateOrUpdateCustomObject($draft: CustomObjectDraftInput!) {{
        createOrUpdateCustomObject(draft: $draft) {{ {CUSTOM_OBJECT_FIELDS} }}
    }}
"""

DELETE_MUTATION = f"""
    mutation DeleteCustomObject($container: String!, $key: String!, $version: Int, $force: Boolean!) {{
        deleteCustomObject(container: $container, key: $key, version: $version, force: $force) {{
            {CUSTOM_OBJECT_FIELDS}
        }}
    }}
"""

GET_QUERY = f"""
    query GetCustomObject($container: String!, $key: String!) {{
        customObject(container: $container, key: $key) {{ {CUSTOM_OBJECT_FIELDS} }}
    }}
"""

GET_BY_ID_QUERY = f"""
    query GetCustomObjectById($id: String!) {{
        customObjectById(id: $id) {{ {CUSTOM_OBJECT_FIELDS} }}
    }}
"""


def _to_versioned(data: Dict[str, Any]) -> VersionedObject:
    return VersionedObject(
        remote_id=data["id"],
        identity=IdentityKey(container=data["container"], key=data["key"]),
        value=data["value"],
        version=data["version"],
    )


class GraphQLCustomObjectStore:
    """CustomObjectStore that calls the store service's GraphQL API."""

    def __init__(self, client: Optional[httpx.Client] = None, path: str = "/graphql"):
        """
        Initialize the store.

        Args:
            client: httpx client pointed at the store service. Defaults to one
                built from API_URL and GRAPHQL_TIMEOUT.
            path: Path of the GraphQL endpoint on the service
        """
        self._client = client or create_http_client()
        self._path = path

    def _execute(self, query: str, variables: Dict[str, Any], identity: Any) -> Dict[str, Any]:
        return execute_graphql(
            self._client,
            query,
            variables,
            path=self._path,
            log_prefix=f"[CustomObject {identity}]",
        )

    def create_or_update(
        self, identity: IdentityKey, value: Any, version: Optional[int] = None
    ) -> VersionedObject:
        draft = {
            "container": identity.container,
            "key": identity.key,
            "value": value,
            "version": version,
        }
        data = self._execute(CREATE_OR_UPDATE_MUTATION, {"draft": draft}, identity)
        return _to_versioned(data["createOrUpdateCustomObject"])

    def fetch_by_identity(self, identity: IdentityKey) -> VersionedObject:
        data = self._execute(
            GET_QUERY, {"container": identity.container, "key": identity.key}, identity
        )
        if data.get("customObject") is None:
            raise CustomObjectNotFoundError(
                f"Custom object with container '{identity.container}' and key "
                f"'{identity.key}' not found.",
                identity=identity,
            )
        return _to_versioned(data["customObject"])

    def fetch_by_id(self, remote_id: str) -> VersionedObject:
        data = self._execute(GET_BY_ID_QUERY, {"id": remote_id}, remote_id)
        if data.get("customObjectById") is None:
            raise CustomObjectNotFoundError(f"Custom object with id '{remote_id}' not found.")
        return _to_versioned(data["customObjectById"])

    def delete_by_identity(
        self, identity: IdentityKey, version: Optional[int], force: bool = False
    ) -> VersionedObject:
        variables = {
            "container": identity.container,
            "key": identity.key,
            "version": version,
            "force": force,
        }
        data = self._execute(DELETE_MUTATION, variables, identity)
        return _to_versioned(data["deleteCustomObject"])

    def close(self) -> None:
        """Close the underlying httpx client."""
        self._client.close()
