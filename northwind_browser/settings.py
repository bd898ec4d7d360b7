"""
Settings - Default configuration values for the Northwind data browser.

This module provides the DEFAULT_SETTINGS dict that the browser uses as
fallback values when environment variables are not set. The actual configuration
is loaded from .env at runtime; these defaults let the browser talk to a local
GraphQL server out of the box.

Configuration precedence (highest to lowest):
  1. CLI flags (--endpoint, --source, --debug)
  2. Environment variables (from .env file)
  3. DEFAULT_SETTINGS (this file)

Settings reference:
  GRAPHQL_ENDPOINT   Absolute URL of the GraphQL endpoint, or a path joined onto
                     GRAPHQL_BASE_URL (default: /graphql/)
  GRAPHQL_BASE_URL   Base URL used for relative endpoints (default: http://localhost)
  GRAPHQL_TIMEOUT    Request timeout in seconds (default: 30)
  CUSTOMER_SOURCE    "derived" builds the customer list from the orders
                     connection, "direct" uses a customers connection
  PAGE_SIZE          Default number of rows per list page (default: 20)
  DEBUG              Whether to log debug output (default: False)
"""

import re
from urllib.parse import urljoin

DEFAULT_SETTINGS = {
    "GRAPHQL_ENDPOINT": "/graphql/",
    "GRAPHQL_BASE_URL": "http://localhost",
    "GRAPHQL_TIMEOUT": 30,
    "CUSTOMER_SOURCE": "derived",
    "PAGE_SIZE": 20,
    "DEBUG": False,
}

_ABSOLUTE_URL_RE = re.compile(r"^https?://", re.IGNORECASE)


def resolve_endpoint(endpoint: str, base_url: str = DEFAULT_SETTINGS["GRAPHQL_BASE_URL"]) -> str:
    """Turn a configured endpoint into an absolute URL.

    Absolute http(s) URLs are returned unchanged. Anything else is treated as a
    path on base_url. A blank endpoint falls back to the default path.

    Args:
        endpoint: The configured GRAPHQL_ENDPOINT value.
        base_url: The configured GRAPHQL_BASE_URL value.

    Returns:
        The absolute endpoint URL.
    """
    candidate = (endpoint or "").strip() or DEFAULT_SETTINGS["GRAPHQL_ENDPOINT"]
    if _ABSOLUTE_URL_RE.match(candidate):
        return candidate

    path = candidate if candidate.startswith("/") else f"/{candidate}"
    return urljoin(base_url.rstrip("/") + "/", path)
