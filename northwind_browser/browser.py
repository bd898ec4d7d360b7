"""
Data Browser - Wires the client, orders API and customer source from configuration.

DataBrowser is the single object a front end needs. It loads settings from a
.env file (via python-dotenv) and the process environment, resolves the
GraphQL endpoint once, and builds:

  client      GraphQLClient bound to the resolved endpoint
  orders      OrdersApi for order lists and details
  customers   The CustomerSource variant named by CUSTOMER_SOURCE

Configuration:
    See settings.py for the variables and their defaults. Values passed to the
    constructor override the environment.

Typical usage:
    browser = DataBrowser(env_file="./.env")
    if browser.validate_config():
        page = browser.orders.fetch_orders_page(browser.page_size)
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .customers import CUSTOMER_SOURCES, create_customer_source
from .graphql_client import GraphQLClient
from .orders import OrdersApi
from .settings import DEFAULT_SETTINGS, resolve_endpoint

logger = logging.getLogger(__name__)


class DataBrowser:
    """Configured entry point to the orders and customers data.

    Attributes:
        endpoint: The resolved absolute GraphQL endpoint.
        timeout: Request timeout in seconds.
        customer_source: "direct" or "derived".
        page_size: Default rows per list page.
        debug: Whether debug logging was requested.
    """

    def __init__(
        self,
        env_file: str = "./.env",
        endpoint: Optional[str] = None,
        customer_source: Optional[str] = None,
    ):
        """Load configuration and build the API objects.

        Args:
            env_file: Path to a .env file. Loaded if it exists; otherwise the
                      process environment and defaults are used.
            endpoint: Overrides GRAPHQL_ENDPOINT.
            customer_source: Overrides CUSTOMER_SOURCE.
        """
        env_path = Path(env_file)
        if env_path.exists():
            load_dotenv(env_path)
            logger.debug("Loaded configuration from: %s", env_file)
        else:
            logger.debug("%s not found, using defaults/environment", env_file)

        base_url = os.getenv("GRAPHQL_BASE_URL", DEFAULT_SETTINGS["GRAPHQL_BASE_URL"])
        self.endpoint = resolve_endpoint(
            endpoint or os.getenv("GRAPHQL_ENDPOINT", DEFAULT_SETTINGS["GRAPHQL_ENDPOINT"]),
            base_url,
        )
        self.timeout = float(os.getenv("GRAPHQL_TIMEOUT", str(DEFAULT_SETTINGS["GRAPHQL_TIMEOUT"])))
        self.customer_source = (
            customer_source or os.getenv("CUSTOMER_SOURCE", DEFAULT_SETTINGS["CUSTOMER_SOURCE"])
        ).strip().lower()
        self.page_size = int(os.getenv("PAGE_SIZE", str(DEFAULT_SETTINGS["PAGE_SIZE"])))
        self.debug = os.getenv("DEBUG", str(DEFAULT_SETTINGS["DEBUG"])).lower() == "true"

        self.client = GraphQLClient(self.endpoint, timeout=self.timeout)
        self.orders = OrdersApi(self.client)
        self.customers = (
            create_customer_source(self.customer_source, self.client)
            if self.customer_source in CUSTOMER_SOURCES
            else None
        )

    def validate_config(self) -> bool:
        """Check the configuration before any request is made.

        Checks:
            - CUSTOMER_SOURCE names a known variant
            - PAGE_SIZE is at least 1
            - GRAPHQL_TIMEOUT is positive

        Returns:
            True if the configuration is usable, False otherwise (problems are logged).
        """
        errors = []
        if self.customers is None:
            errors.append(
                f"CUSTOMER_SOURCE must be one of {sorted(CUSTOMER_SOURCES)}, got {self.customer_source!r}"
            )
        if self.page_size < 1:
            errors.append(f"PAGE_SIZE must be at least 1, got {self.page_size}")
        if self.timeout <= 0:
            errors.append(f"GRAPHQL_TIMEOUT must be positive, got {self.timeout}")

        for error in errors:
            logger.error("Configuration error: %s", error)
        return not errors

    def close(self):
        self.client.close()
