"""
GraphQL Query Definitions - The documents sent to the Northwind GraphQL server.

List queries are assembled per request by build_connection_query(): the
`where` and `order` clauses produced by query_builder.py are embedded as
literal fragments, while page size and cursor stay bound variables
($first, $after) so the same document text can be reused across pages.

Detail queries are fixed documents:

  ORDER_DETAIL_QUERY       One order by numeric orderId (via an `eq` filter on the
                           orders connection), with its line items and products.
  CUSTOMER_PROFILE_QUERY   One customer through the global node(id) lookup. The
                           result is a union, so __typename is selected and checked.

Selections:

  ORDER_ROW_SELECTION           Fields of an order list row (nodes shape)
  CUSTOMER_ROW_SELECTION        Fields of a direct customer list row (nodes shape)
  CUSTOMER_FROM_ORDER_SELECTION Edge node fields used to synthesize customer rows

Pipeline context:
    OrdersApi and the CustomerSource variants call build_connection_query()
    once per fetch and pass the text to GraphQLClient.execute().
"""

from typing import Optional

CUSTOMER_SUMMARY_FIELDS = """
          id
          companyName
          contactName
          city
          country
"""

ORDER_ROW_SELECTION = f"""
      nodes {{
        id
        customerId
        orderDate
        shipName
        shipCountry
        shipCity
        freight
        customer {{{CUSTOMER_SUMMARY_FIELDS}        }}
      }}
      pageInfo {{
        hasNextPage
        hasPreviousPage
        startCursor
        endCursor
      }}
"""

CUSTOMER_ROW_SELECTION = """
      nodes {
        id
        customerId
        companyName
        contactName
        city
        country
      }
      pageInfo {
        hasNextPage
        hasPreviousPage
        startCursor
        endCursor
      }
"""

CUSTOMER_FROM_ORDER_SELECTION = f"""
      edges {{
        cursor
        node {{
          customerId
          customer {{{CUSTOMER_SUMMARY_FIELDS}          }}
        }}
      }}
      pageInfo {{
        hasNextPage
      }}
"""

ORDER_DETAIL_QUERY = """
query OrderDetail($orderId: Short!) {
  orders(first: 1, where: { orderId: { eq: $orderId } }) {
    nodes {
      id
      customerId
      orderDate
      requiredDate
      shippedDate
      shipName
      shipAddress
      shipCity
      shipRegion
      shipPostalCode
      shipCountry
      shipVia
      freight
      employeeId
      customer {
        id
        companyName
        contactName
        city
        country
      }
      orderDetails {
        orderId
        productId
        unitPrice
        quantity
        discount
        product {
          id
          productName
          unitPrice
          quantityPerUnit
        }
      }
    }
  }
}
"""

CUSTOMER_PROFILE_QUERY = """
query CustomerProfile($id: ID!) {
  node(id: $id) {
    __typename
    ... on Customer {
      id
      companyName
      contactName
      contactTitle
      address
      city
      region
      postalCode
      country
      phone
      fax
    }
  }
}
"""


def build_connection_query(
    operation: str,
    connection: str,
    selection: str,
    where_clause: Optional[str],
    order_clause: str,
) -> str:
    """Assemble a paginated connection query.

    Args:
        operation: GraphQL operation name (e.g., "OrdersList").
        connection: Root connection field (e.g., "orders").
        selection: The selection set inside the connection.
        where_clause: A rendered `where` object, or None for no filter.
        order_clause: A rendered `order` list.

    Returns:
        The query text, with $first and $after left as variables.
    """
    where_argument = f", where: {where_clause}" if where_clause else ""

    return (
        f"query {operation}($first: Int!, $after: String) {{\n"
        f"  {connection}(first: $first, after: $after{where_argument}, order: {order_clause}) {{"
        f"{selection}"
        f"  }}\n"
        f"}}\n"
    )
