"""
Lightweight GraphQL client utility.

This module provides a simple GraphQL client built on httpx with error
classification. HTTP and network failures become CustomObjectTransportError,
marked transient or terminal; GraphQL errors are mapped to the custom object
error taxonomy by their ``extensions.code``. Nothing is retried here.
"""
import logging
import os
from typing import Any, Dict, Optional

import httpx

from app.core.errors import (
    ERRORS_BY_CODE,
    CustomObjectError,
    CustomObjectTransportError,
)

logger = logging.getLogger(__name__)


def get_api_url() -> str:
    """
    Get the API URL from environment configuration.

    Returns:
        The configured API URL
    """
    return os.getenv("API_URL", "http://localhost:8000")


def get_request_timeout() -> float:
    """Get the request timeout in seconds from environment configuration."""
    return float(os.getenv("GRAPHQL_TIMEOUT", "30.0"))


def create_http_client() -> httpx.Client:
    """Create an httpx client for the configured API URL and timeout."""
    return httpx.Client(base_url=get_api_url(), timeout=get_request_timeout())


def _error_from_graphql(errors: list[Dict[str, Any]]) -> CustomObjectError:
    """Pick the error class for the first GraphQL error in a response."""
    first = errors[0] if errors else {}
    message = first.get("message", f"GraphQL errors: {errors}")
    code = (first.get("extensions") or {}).get("code")
    error_class = ERRORS_BY_CODE.get(code, CustomObjectError)
    return error_class(message)


def execute_graphql(
    client: httpx.Client,
    query: str,
    variables: Dict[str, Any],
    path: str = "/graphql",
    log_prefix: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Execute a GraphQL query or mutation via HTTP POST.

    Args:
        client: httpx client whose base URL points at the API
        query: GraphQL document
        variables: Variables for the document
        path: Path of the GraphQL endpoint
        log_prefix: Optional prefix for log messages (e.g., "[CustomObject c/k]")

    Returns:
        The ``data`` member of the GraphQL response

    Raises:
        CustomObjectTransportError: For network errors, HTTP error statuses and
            responses that are not valid JSON. ``transient`` is set for network
            errors, 5xx, 408 and 429.
        CustomObjectError: The subclass matching ``extensions.code`` of the
            first GraphQL error in the response
    """
    prefix = log_prefix or "[GraphQL]"
    payload = {"query": query, "variables": variables}

    try:
        logger.debug(f"{prefix} GraphQL request to {path}")
        response = client.post(path, json=payload)
    except httpx.RequestError as e:
        # Network errors are transient
        error_msg = f"Network error: {str(e)}"
        logger.warning(f"{prefix} {error_msg}")
        raise CustomObjectTransportError(error_msg, transient=True) from e

    # Check for HTTP errors
    if response.status_code >= 400:
        error_msg = f"HTTP {response.status_code}: {response.text}"

        # 408 = Request Timeout, 429 = Too Many Requests, 5xx = Server errors
        transient = response.status_code in (408, 429) or response.status_code >= 500
        if transient:
            logger.warning(f"{prefix} Transient error: {error_msg}")
        else:
            logger.error(f"{prefix} Terminal error: {error_msg}")
        raise CustomObjectTransportError(error_msg, transient=transient)

    # Parse response
    try:
        data = response.json()
    except ValueError as e:
        error_msg = f"Invalid JSON response: {str(e)}"
        logger.error(f"{prefix} {error_msg}")
        raise CustomObjectTransportError(error_msg) from e

    # Check for GraphQL errors in response
    if data.get("errors"):
        error = _error_from_graphql(data["errors"])
        logger.debug(f"{prefix} GraphQL error {error.code}: {error}")
        raise error

    return data.get("data") or {}
