"""
GraphQL Client - Handles HTTP communication with the Northwind GraphQL server.

Every query the browser issues goes through GraphQLClient.execute(), which
POSTs {"query": ..., "variables": ...} to a single endpoint and returns the
"data" member of the response.

The endpoint is resolved once by the caller (see settings.resolve_endpoint)
and passed in at construction; the client never reads the environment.

Failure handling:
    Network errors, non-JSON bodies, HTTP error statuses and GraphQL "errors"
    arrays all become RequestFailure. When the server reports GraphQL errors
    (even alongside an HTTP error status) their messages are preserved; otherwise
    the underlying network/HTTP error text is used. Nothing is retried here.

Pipeline context:
    Shared by OrdersApi and the CustomerSource variants. The derived customer
    source calls execute() repeatedly on the same client, so the client keeps a
    single requests.Session for connection reuse.
"""

import logging
from typing import Any, Dict, Optional

import requests

from .errors import RequestFailure

logger = logging.getLogger(__name__)


class GraphQLClient:
    """Client for the Northwind GraphQL API.

    Attributes:
        endpoint: Absolute URL of the GraphQL endpoint.
        timeout: Per-request timeout in seconds.
    """

    def __init__(self, endpoint: str, timeout: float = 30, headers: Optional[Dict[str, str]] = None):
        """Initialize the client.

        Args:
            endpoint: Absolute endpoint URL (e.g., "http://localhost/graphql/").
            timeout: Request timeout in seconds.
            headers: Extra headers sent with every request.
        """
        self.endpoint = endpoint
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update({"Content-Type": "application/json"})
        if headers:
            self._session.headers.update(headers)

    def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Execute a GraphQL query.

        Args:
            query: The GraphQL document text.
            variables: Optional dict of GraphQL variables.

        Returns:
            The "data" portion of the GraphQL response (a dict).

        Raises:
            RequestFailure: If the request fails or the response contains errors.
        """
        payload: Dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        logger.debug("Executing GraphQL query (%d chars) variables=%s", len(query), variables)

        try:
            response = self._session.post(self.endpoint, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.debug("GraphQL transport error: %s", e)
            raise RequestFailure([str(e)]) from e

        try:
            result = response.json()
        except ValueError:
            result = None

        if isinstance(result, dict) and result.get("errors"):
            error_messages = [
                str(e.get("message") or e) if isinstance(e, dict) else str(e)
                for e in result["errors"]
            ]
            logger.debug("GraphQL errors: %s", error_messages)
            raise RequestFailure(error_messages, status_code=response.status_code)

        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            raise RequestFailure([str(e)], status_code=response.status_code) from e

        if not isinstance(result, dict):
            raise RequestFailure(
                ["GraphQL response was not a JSON object"], status_code=response.status_code
            )

        return result.get("data") or {}

    def close(self):
        """Release the underlying HTTP session."""
        self._session.close()
