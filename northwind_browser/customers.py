"""
Customer Sources - The customers list and profile, for either backend shape.

Some deployments of the Northwind GraphQL server expose a `customers`
connection; others only expose `orders`, with each order carrying its
customer. CustomerSource hides the difference behind one contract:

  fetch_page(first, after, filters, sort) -> Page of CustomerListRow
  fetch_customer_by_id(customer_id)       -> CustomerProfile | None

Variants (selected by the CUSTOMER_SOURCE setting):

  DirectConnectionSource  ("direct")   One round trip on `customers`.

  DerivedFromOrdersSource ("derived")  Pages through `orders` sorted by the
      customer column (orderId as tie-break), keeping the first occurrence of
      each customerId, until one of:
        - `first` distinct customers have been collected,
        - the orders connection reports no further page,
        - an orders page comes back with zero edges.
      Every edge moves the cursor forward, including duplicates and orders
      with no customer. The page's end cursor is the last edge cursor seen,
      and has_next_page is True when the loop stopped on the size target or
      the last orders page reported more.

Customer profiles are looked up the same way for both variants, through the
global node(id) lookup with an id built by encode_node_id("Customer", key).

Pipeline context:
    DataBrowser builds one source at startup via create_customer_source().
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional

from .graphql_queries import (
    CUSTOMER_FROM_ORDER_SELECTION,
    CUSTOMER_PROFILE_QUERY,
    CUSTOMER_ROW_SELECTION,
    build_connection_query,
)
from .models import Cursor, CustomerListRow, CustomerProfile, Page, SortSpec
from .node_id import CUSTOMER_TYPE, encode_node_id, get_customer_id_from_node_id
from .orders import check_page_size, connection_page, resolve_after
from .query_builder import (
    build_customer_sort,
    build_customer_where,
    build_customers_from_orders_sort,
    build_customers_from_orders_where,
)

logger = logging.getLogger(__name__)

CUSTOMERS_DOMAIN = "customers"

DEFAULT_CUSTOMER_SORT = SortSpec("companyName", "ASC")


class CustomerSource(ABC):
    """Base class for the customer list backends.

    Attributes:
        kind: The CUSTOMER_SOURCE value that selects this variant.
        client: Anything with execute(query, variables) -> dict.
    """

    kind = ""

    def __init__(self, client):
        self.client = client

    @abstractmethod
    def fetch_page(
        self,
        first: int,
        after: Optional[Cursor] = None,
        filters: Optional[Mapping[str, Optional[str]]] = None,
        sort: SortSpec = DEFAULT_CUSTOMER_SORT,
    ) -> Page:
        """Fetch one page of CustomerListRow.

        Raises:
            RequestFailure: If any request fails.
        """

    def fetch_customer_by_id(self, customer_id: str) -> Optional[CustomerProfile]:
        """Fetch a customer profile by natural key (e.g., "ALFKI").

        Returns:
            The CustomerProfile, or None when the node is missing or is not a
            Customer.

        Raises:
            RequestFailure: If the request fails.
        """
        if not customer_id:
            return None

        data = self.client.execute(
            CUSTOMER_PROFILE_QUERY, {"id": encode_node_id(CUSTOMER_TYPE, customer_id)}
        )
        node = data.get("node")
        if not node or node.get("__typename") != CUSTOMER_TYPE:
            return None

        return CustomerProfile.from_node(node)


class DirectConnectionSource(CustomerSource):
    """Customers read from a `customers` connection."""

    kind = "direct"

    def fetch_page(self, first, after=None, filters=None, sort=DEFAULT_CUSTOMER_SORT) -> Page:
        check_page_size(first)
        query = build_connection_query(
            "CustomersList", "customers", CUSTOMER_ROW_SELECTION,
            build_customer_where(filters), build_customer_sort(sort),
        )
        data = self.client.execute(
            query, {"first": first, "after": resolve_after(after, CUSTOMERS_DOMAIN, sort)}
        )
        connection = data.get("customers") or {}

        rows = []
        for node in connection.get("nodes") or []:
            customer_id = get_customer_id_from_node_id(node.get("id"))
            if customer_id is None:
                customer_id = node.get("customerId") or ""
                logger.warning(
                    "Customer node id %r does not decode; using customerId %r",
                    node.get("id"), customer_id,
                )
            rows.append(CustomerListRow.from_node(customer_id, node))

        return connection_page(connection, rows, CUSTOMERS_DOMAIN, sort)


class DerivedFromOrdersSource(CustomerSource):
    """Customers synthesized from the `orders` connection."""

    kind = "derived"

    def fetch_page(self, first, after=None, filters=None, sort=DEFAULT_CUSTOMER_SORT) -> Page:
        check_page_size(first)
        query = build_connection_query(
            "CustomersFromOrders", "orders", CUSTOMER_FROM_ORDER_SELECTION,
            build_customers_from_orders_where(filters), build_customers_from_orders_sort(sort),
        )

        rows_by_id: Dict[str, CustomerListRow] = {}
        current_cursor = resolve_after(after, CUSTOMERS_DOMAIN, sort)
        last_seen_cursor = current_cursor
        has_next_page = False
        reached_page_size = False
        requests_made = 0

        while len(rows_by_id) < first:
            data = self.client.execute(query, {"first": first, "after": current_cursor})
            requests_made += 1
            connection = data.get("orders") or {}
            edges = connection.get("edges") or []

            if not edges:
                has_next_page = False
                break

            has_next_page = bool((connection.get("pageInfo") or {}).get("hasNextPage"))

            for edge in edges:
                last_seen_cursor = current_cursor = edge["cursor"]
                node = edge.get("node") or {}
                customer_id = node.get("customerId")
                customer = node.get("customer")

                if not customer_id or not customer:
                    continue

                if customer_id not in rows_by_id:
                    rows_by_id[customer_id] = CustomerListRow.from_node(customer_id, customer)

                if len(rows_by_id) == first:
                    reached_page_size = True
                    break

            logger.debug(
                "Customers from orders: request %d, %d edges, %d distinct customers",
                requests_made, len(edges), len(rows_by_id),
            )

            if reached_page_size or not has_next_page:
                break

        more = reached_page_size or has_next_page
        return Page(
            rows=tuple(rows_by_id.values()),
            has_next_page=more,
            end_cursor=Cursor(last_seen_cursor, CUSTOMERS_DOMAIN, sort) if more and last_seen_cursor else None,
        )


CUSTOMER_SOURCES = {
    DirectConnectionSource.kind: DirectConnectionSource,
    DerivedFromOrdersSource.kind: DerivedFromOrdersSource,
}


def create_customer_source(kind: str, client) -> CustomerSource:
    """Build the customer source named by the CUSTOMER_SOURCE setting.

    Raises:
        ValueError: If kind is not "direct" or "derived".
    """
    normalized = (kind or "").strip().lower()
    if normalized not in CUSTOMER_SOURCES:
        raise ValueError(
            f"Unknown customer source {kind!r}; expected one of {sorted(CUSTOMER_SOURCES)}"
        )
    return CUSTOMER_SOURCES[normalized](client)
