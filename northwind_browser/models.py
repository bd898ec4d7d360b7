"""
Models - Immutable records returned by the data-fetching layer.

Every record is a frozen dataclass built from a GraphQL node with from_node().
Fields the queries select but the server returns as null become None; the
records never carry the raw response dicts.

Output records:
  OrderRow / OrderDetail       One row of the orders list / the order detail view
  OrderLine / OrderLineProduct Line items nested in an OrderDetail
  CustomerSummary              The customer embedded in an order row
  CustomerListRow              One row of the customers list
  CustomerProfile              The customer detail view

Paging records:
  SortSpec  (column, direction) the list is ordered by
  Cursor    A server cursor tagged with the domain and SortSpec it belongs to
  Page      Rows plus page metadata; shared by every list fetch
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .node_id import get_order_id_from_node_id


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


@dataclass(frozen=True)
class SortSpec:
    column: str
    direction: SortDirection = SortDirection.ASC

    def __post_init__(self):
        # Accept plain "ASC"/"DESC" strings; anything else fails here
        object.__setattr__(self, "direction", SortDirection(self.direction))


@dataclass(frozen=True)
class Cursor:
    """An opaque server cursor, valid only for the list and sort it came from.

    Attributes:
        value: The raw cursor string issued by the server.
        domain: The list the cursor belongs to ("orders", "customers", ...).
        sort: The sort specification the cursor's position depends on.
    """

    value: str
    domain: str
    sort: SortSpec

    def matches(self, domain: str, sort: SortSpec) -> bool:
        return self.domain == domain and self.sort == sort


@dataclass(frozen=True)
class Page:
    """One page of a list result.

    has_previous_page is only reported by direct connections; the derived
    customer list always reports False.
    """

    rows: Tuple[Any, ...] = ()
    has_next_page: bool = False
    has_previous_page: bool = False
    start_cursor: Optional[Cursor] = None
    end_cursor: Optional[Cursor] = None

    @property
    def next_cursor(self) -> Optional[Cursor]:
        """The cursor to request the following page with, if there is one."""
        return self.end_cursor if self.has_next_page else None


@dataclass(frozen=True)
class CustomerSummary:
    id: str
    company_name: str
    contact_name: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None

    @classmethod
    def from_node(cls, node: Optional[Dict[str, Any]]) -> Optional["CustomerSummary"]:
        if not node:
            return None
        return cls(
            id=node["id"],
            company_name=node.get("companyName") or "",
            contact_name=node.get("contactName"),
            city=node.get("city"),
            country=node.get("country"),
        )


@dataclass(frozen=True)
class OrderRow:
    """A row of the orders list.

    order_id is derived from the opaque node id, not from a transmitted field;
    it is None when the id does not decode to an Order.
    """

    id: str
    order_id: Optional[int]
    customer_id: Optional[str] = None
    order_date: Optional[str] = None
    ship_name: Optional[str] = None
    ship_country: Optional[str] = None
    ship_city: Optional[str] = None
    freight: Optional[float] = None
    customer: Optional[CustomerSummary] = None

    @staticmethod
    def _row_fields(node: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "id": node["id"],
            "order_id": get_order_id_from_node_id(node["id"]),
            "customer_id": node.get("customerId"),
            "order_date": node.get("orderDate"),
            "ship_name": node.get("shipName"),
            "ship_country": node.get("shipCountry"),
            "ship_city": node.get("shipCity"),
            "freight": node.get("freight"),
            "customer": CustomerSummary.from_node(node.get("customer")),
        }

    @classmethod
    def from_node(cls, node: Dict[str, Any]) -> "OrderRow":
        return cls(**cls._row_fields(node))


@dataclass(frozen=True)
class OrderLineProduct:
    id: str
    product_name: str
    unit_price: Optional[float] = None
    quantity_per_unit: Optional[str] = None

    @classmethod
    def from_node(cls, node: Optional[Dict[str, Any]]) -> Optional["OrderLineProduct"]:
        if not node:
            return None
        return cls(
            id=node["id"],
            product_name=node.get("productName") or "",
            unit_price=node.get("unitPrice"),
            quantity_per_unit=node.get("quantityPerUnit"),
        )


@dataclass(frozen=True)
class OrderLine:
    order_id: str
    product_id: str
    unit_price: float
    quantity: int
    discount: float
    product: Optional[OrderLineProduct] = None

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity * (1 - self.discount)

    @classmethod
    def from_node(cls, node: Dict[str, Any]) -> "OrderLine":
        return cls(
            order_id=str(node["orderId"]),
            product_id=str(node["productId"]),
            unit_price=node.get("unitPrice") or 0.0,
            quantity=node.get("quantity") or 0,
            discount=node.get("discount") or 0.0,
            product=OrderLineProduct.from_node(node.get("product")),
        )


@dataclass(frozen=True)
class OrderDetail(OrderRow):
    required_date: Optional[str] = None
    shipped_date: Optional[str] = None
    ship_address: Optional[str] = None
    ship_region: Optional[str] = None
    ship_postal_code: Optional[str] = None
    ship_via: Optional[int] = None
    employee_id: Optional[int] = None
    order_lines: Tuple[OrderLine, ...] = field(default_factory=tuple)

    @classmethod
    def from_node(cls, node: Dict[str, Any]) -> "OrderDetail":
        return cls(
            **cls._row_fields(node),
            required_date=node.get("requiredDate"),
            shipped_date=node.get("shippedDate"),
            ship_address=node.get("shipAddress"),
            ship_region=node.get("shipRegion"),
            ship_postal_code=node.get("shipPostalCode"),
            ship_via=node.get("shipVia"),
            employee_id=node.get("employeeId"),
            order_lines=tuple(OrderLine.from_node(line) for line in node.get("orderDetails") or []),
        )


@dataclass(frozen=True)
class CustomerListRow:
    customer_id: str
    node_id: str
    company_name: str
    contact_name: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None

    @classmethod
    def from_node(cls, customer_id: str, node: Dict[str, Any]) -> "CustomerListRow":
        return cls(
            customer_id=customer_id,
            node_id=node["id"],
            company_name=node.get("companyName") or "",
            contact_name=node.get("contactName"),
            city=node.get("city"),
            country=node.get("country"),
        )


@dataclass(frozen=True)
class CustomerProfile:
    id: str
    company_name: str
    contact_name: Optional[str] = None
    contact_title: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    phone: Optional[str] = None
    fax: Optional[str] = None

    @classmethod
    def from_node(cls, node: Dict[str, Any]) -> "CustomerProfile":
        return cls(
            id=node["id"],
            company_name=node.get("companyName") or "",
            contact_name=node.get("contactName"),
            contact_title=node.get("contactTitle"),
            address=node.get("address"),
            city=node.get("city"),
            region=node.get("region"),
            postal_code=node.get("postalCode"),
            country=node.get("country"),
            phone=node.get("phone"),
            fax=node.get("fax"),
        )
