"""
Orders API - List, per-customer and detail fetches for orders.

Orders are exposed by the backend as a direct connection, so each list fetch
is a single round trip: the query is built from the filters and sort, run
with $first/$after, and the connection's nodes and pageInfo are returned as
a Page. Cursors in the result are tagged with the sort they belong to; a
cursor from a different sort (or another list) is dropped and the fetch
starts from the first page.

Pipeline context:
    Used by DataBrowser for the orders list and order detail views, and by
    the customer detail view through fetch_orders_for_customer().
"""

import logging
from typing import Any, Dict, Mapping, Optional

from .graphql_queries import ORDER_DETAIL_QUERY, ORDER_ROW_SELECTION, build_connection_query
from .models import Cursor, OrderDetail, OrderRow, Page, SortSpec
from .node_id import get_order_id_from_node_id
from .query_builder import build_eq_filter, build_order_sort, build_order_where

logger = logging.getLogger(__name__)

ORDERS_DOMAIN = "orders"
CUSTOMER_ORDERS_DOMAIN = "customer-orders"

DEFAULT_ORDER_SORT = SortSpec("orderId", "ASC")


def resolve_after(after: Optional[Cursor], domain: str, sort: SortSpec) -> Optional[str]:
    """Return the raw cursor to send, or None if it belongs to another list or sort."""
    if after is None:
        return None
    if not after.matches(domain, sort):
        logger.warning(
            "Discarding %s cursor issued for sort %s %s; restarting %s at the first page",
            after.domain, after.sort.column, after.sort.direction.value, domain,
        )
        return None
    return after.value


def check_page_size(first: int):
    if first < 1:
        raise ValueError(f"Page size must be at least 1, got {first}")


def connection_page(connection: Dict[str, Any], rows, domain: str, sort: SortSpec) -> Page:
    """Wrap a direct connection's rows and pageInfo as a Page."""
    page_info = connection.get("pageInfo") or {}

    def tag(value):
        return Cursor(value, domain, sort) if value else None

    return Page(
        rows=tuple(rows),
        has_next_page=bool(page_info.get("hasNextPage")),
        has_previous_page=bool(page_info.get("hasPreviousPage")),
        start_cursor=tag(page_info.get("startCursor")),
        end_cursor=tag(page_info.get("endCursor")),
    )


class OrdersApi:
    """Fetches order pages and order details through a GraphQL client."""

    def __init__(self, client):
        self.client = client

    def fetch_orders_page(
        self,
        first: int,
        after: Optional[Cursor] = None,
        filters: Optional[Mapping[str, Optional[str]]] = None,
        sort: SortSpec = DEFAULT_ORDER_SORT,
    ) -> Page:
        """Fetch one page of the orders list.

        Args:
            first: Page size.
            after: Cursor of the previous page's end, or None for the first page.
            filters: customerId / shipName / shipCountry / shipCity substrings.
            sort: Column and direction.

        Returns:
            A Page of OrderRow.

        Raises:
            RequestFailure: If the request fails.
        """
        check_page_size(first)
        query = build_connection_query(
            "OrdersList", "orders", ORDER_ROW_SELECTION,
            build_order_where(filters), build_order_sort(sort),
        )
        return self._fetch(query, first, resolve_after(after, ORDERS_DOMAIN, sort), ORDERS_DOMAIN, sort)

    def fetch_orders_for_customer(
        self,
        customer_id: str,
        first: int,
        after: Optional[Cursor] = None,
        sort: SortSpec = DEFAULT_ORDER_SORT,
    ) -> Page:
        """Fetch one page of a single customer's orders (exact customerId match)."""
        check_page_size(first)
        query = build_connection_query(
            "CustomerOrders", "orders", ORDER_ROW_SELECTION,
            f"{{ {build_eq_filter('customerId', customer_id)} }}", build_order_sort(sort),
        )
        # Cursors are only comparable within one customer's list
        domain = f"{CUSTOMER_ORDERS_DOMAIN}:{customer_id}"
        return self._fetch(query, first, resolve_after(after, domain, sort), domain, sort)

    def _fetch(self, query: str, first: int, after: Optional[str], domain: str, sort: SortSpec) -> Page:
        data = self.client.execute(query, {"first": first, "after": after})
        connection = data.get("orders") or {}
        rows = [OrderRow.from_node(node) for node in connection.get("nodes") or []]
        return connection_page(connection, rows, domain, sort)

    def fetch_order_detail(self, order_id: int) -> Optional[OrderDetail]:
        """Fetch one order with its line items.

        Args:
            order_id: The numeric order id (e.g., 10248).

        Returns:
            The OrderDetail, or None when no order matches or the id is not a
            positive integer.

        Raises:
            RequestFailure: If the request fails.
        """
        if isinstance(order_id, bool) or not isinstance(order_id, int) or order_id <= 0:
            return None

        data = self.client.execute(ORDER_DETAIL_QUERY, {"orderId": order_id})
        nodes = (data.get("orders") or {}).get("nodes") or []
        if not nodes:
            return None

        return OrderDetail.from_node(nodes[0])

    def fetch_order_detail_by_node_id(self, node_id: str) -> Optional[OrderDetail]:
        """Fetch an order by its global node ID; None if the ID is not an Order ID."""
        order_id = get_order_id_from_node_id(node_id)
        if order_id is None:
            return None
        return self.fetch_order_detail(order_id)
