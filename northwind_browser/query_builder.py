"""
Query Builder - Filter and sort clauses for the list queries.

The backend accepts a `where` argument made of nested predicates and an
`order` argument made of a list of {field: direction} objects. This module
renders both as GraphQL literal fragments that graphql_queries.py embeds in
the query text.

Filter values are free text typed by users, so they are always emitted as
JSON string literals (quotes, backslashes and control characters escaped).
Sort columns and directions never come from free text: they are checked
against closed sets before being written into a clause.

Example:
    build_order_where({"shipCountry": " Germany ", "shipCity": ""})
    -> '{ shipCountry: { contains: "Germany" } }'

    build_customers_from_orders_sort(SortSpec("city", "DESC"))
    -> '[{ customer: { city: DESC } }, { orderId: ASC }]'
"""

import json
from typing import Iterable, List, Mapping, Optional

from .models import SortDirection, SortSpec

ORDER_FILTER_FIELDS = ("customerId", "shipName", "shipCountry", "shipCity")
CUSTOMER_FILTER_FIELDS = ("customerId", "companyName", "contactName", "city", "country")

ORDER_SORT_COLUMNS = frozenset(
    {"orderId", "customerId", "orderDate", "shipName", "shipCountry", "freight"}
)
CUSTOMER_SORT_COLUMNS = frozenset(
    {"customerId", "companyName", "contactName", "city", "country"}
)

ORDER_TIE_BREAK = "orderId"
CUSTOMER_TIE_BREAK = "customerId"


def build_contains_filter(field: str, value: Optional[str]) -> Optional[str]:
    """Render a substring predicate, or None when the value is blank."""
    normalized = (value or "").strip()
    if not normalized:
        return None

    return f"{field}: {{ contains: {json.dumps(normalized, ensure_ascii=False)} }}"


def build_eq_filter(field: str, value: str) -> str:
    """Render an exact-match predicate."""
    return f"{field}: {{ eq: {json.dumps(value, ensure_ascii=False)} }}"


def _contains_entries(filters: Mapping[str, Optional[str]], fields: Iterable[str]) -> List[str]:
    entries = []
    for field in fields:
        entry = build_contains_filter(field, filters.get(field))
        if entry is not None:
            entries.append(entry)
    return entries


def _object(entries: List[str]) -> Optional[str]:
    if not entries:
        return None
    return f"{{ {', '.join(entries)} }}"


def build_order_where(filters: Optional[Mapping[str, Optional[str]]]) -> Optional[str]:
    """Build the `where` clause for the orders list.

    Args:
        filters: Field name -> value. Blank values and unknown fields are ignored.

    Returns:
        The clause, or None when no field contributes a predicate.
    """
    return _object(_contains_entries(filters or {}, ORDER_FILTER_FIELDS))


def build_customer_where(filters: Optional[Mapping[str, Optional[str]]]) -> Optional[str]:
    """Build the `where` clause for a direct customers connection."""
    return _object(_contains_entries(filters or {}, CUSTOMER_FILTER_FIELDS))


def build_customers_from_orders_where(filters: Optional[Mapping[str, Optional[str]]]) -> Optional[str]:
    """Build the `where` clause for customers read through the orders connection.

    customerId is a column of the order itself; the remaining customer fields
    are nested under the order's `customer` relation.
    """
    filters = filters or {}
    entries = _contains_entries(filters, ("customerId",))

    customer_entries = _contains_entries(filters, CUSTOMER_FILTER_FIELDS[1:])
    if customer_entries:
        entries.append(f"customer: {_object(customer_entries)}")

    return _object(entries)


def _checked(sort: SortSpec, columns: frozenset) -> str:
    if sort.column not in columns:
        raise ValueError(f"Unsupported sort column: {sort.column!r}")
    return SortDirection(sort.direction).value


def build_order_sort(sort: SortSpec) -> str:
    """Build the `order` clause for the orders list.

    orderId is unique, so any other column gets orderId ASC appended to keep
    rows with equal primary values in a stable order across pages.
    """
    direction = _checked(sort, ORDER_SORT_COLUMNS)
    keys = [f"{{ {sort.column}: {direction} }}"]
    if sort.column != ORDER_TIE_BREAK:
        keys.append(f"{{ {ORDER_TIE_BREAK}: ASC }}")
    return f"[{', '.join(keys)}]"


def build_customer_sort(sort: SortSpec) -> str:
    """Build the `order` clause for a direct customers connection."""
    direction = _checked(sort, CUSTOMER_SORT_COLUMNS)
    keys = [f"{{ {sort.column}: {direction} }}"]
    if sort.column != CUSTOMER_TIE_BREAK:
        keys.append(f"{{ {CUSTOMER_TIE_BREAK}: ASC }}")
    return f"[{', '.join(keys)}]"


def build_customers_from_orders_sort(sort: SortSpec) -> str:
    """Build the `order` clause for customers read through the orders connection.

    The result stream is orders, and a customer repeats across them, so
    orderId ASC is always appended as the tie-break.
    """
    direction = _checked(sort, CUSTOMER_SORT_COLUMNS)
    if sort.column == "customerId":
        primary = f"{{ customerId: {direction} }}"
    else:
        primary = f"{{ customer: {{ {sort.column}: {direction} }} }}"
    return f"[{primary}, {{ {ORDER_TIE_BREAK}: ASC }}]"
