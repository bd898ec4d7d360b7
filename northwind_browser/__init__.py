"""
northwind_browser - Read-only data access for the Northwind orders/customers browser.

This package provides the data-fetching layer behind the list and detail views:

  node_id.py         Encode/decode the backend's base64 global node IDs.
  query_builder.py   Render filter (`where`) and sort (`order`) clauses.
  graphql_queries.py Query documents and the connection query assembler.
  graphql_client.py  HTTP transport to the GraphQL endpoint (requests).
  orders.py          Orders list, per-customer orders and order detail.
  customers.py       Customer list sources (direct / derived from orders) and profiles.
  pagination.py      Cursor history and list navigation state.
  models.py          Immutable row, detail and page records.
  formatters.py      Money/date/text display helpers.
  browser.py         DataBrowser: wires everything from .env configuration.
  cli.py             The northwind-browser command.
"""

__version__ = "0.1.0"

from .errors import BrowserError, RequestFailure
from .models import (
    Cursor,
    CustomerListRow,
    CustomerProfile,
    CustomerSummary,
    OrderDetail,
    OrderLine,
    OrderLineProduct,
    OrderRow,
    Page,
    SortDirection,
    SortSpec,
)
from .node_id import (
    decode_node_id,
    encode_node_id,
    get_customer_id_from_node_id,
    get_order_id_from_node_id,
)
from .graphql_client import GraphQLClient
from .orders import OrdersApi
from .customers import (
    CustomerSource,
    DerivedFromOrdersSource,
    DirectConnectionSource,
    create_customer_source,
)
from .pagination import CursorHistory, PageNavigator
from .browser import DataBrowser
