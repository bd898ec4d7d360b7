"""
Node IDs - Encode and decode the backend's opaque global identifiers.

The GraphQL server identifies every entity with a global ID of the form
base64("<TypeName>:<natural key>"). Examples:

    "T3JkZXI6MTAyNDg="   <->  Order, "10248"
    "Q3VzdG9tZXI6QUxGS0k=" <-> Customer, "ALFKI"

IDs arrive from route parameters and other untrusted places, so decoding
never raises: anything that is not a well-formed envelope decodes to None.

Pipeline context:
    encode_node_id() builds the id for the customer profile node(id) lookup.
    get_order_id_from_node_id() derives the numeric order id for every order
    row; get_customer_id_from_node_id() does the same for direct customer rows.
"""

import base64
import re
from dataclasses import dataclass
from typing import Optional

ORDER_TYPE = "Order"
CUSTOMER_TYPE = "Customer"

_SEPARATOR = ":"
_ORDER_KEY_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class DecodedNodeId:
    type: str
    entity_id: str


def encode_node_id(entity_type: str, entity_id: str) -> str:
    """Encode a type tag and natural key into a global node ID.

    Args:
        entity_type: The GraphQL type name (e.g., "Customer").
        entity_id: The natural key (e.g., "ALFKI").

    Returns:
        The base64 envelope, e.g. "Q3VzdG9tZXI6QUxGS0k=".
    """
    raw = f"{entity_type}{_SEPARATOR}{entity_id}"
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def decode_node_id(node_id: Optional[str]) -> Optional[DecodedNodeId]:
    """Decode a global node ID into its type tag and natural key.

    Args:
        node_id: The base64-encoded ID string from GraphQL or a route.

    Returns:
        The decoded parts, or None if the input is not valid base64, has no
        separator after a non-empty type, or has an empty key.
    """
    if not isinstance(node_id, str) or not node_id:
        return None

    try:
        decoded = base64.b64decode(node_id, validate=True).decode("utf-8")
    except ValueError:
        # binascii.Error and UnicodeDecodeError are both ValueErrors
        return None

    separator_index = decoded.find(_SEPARATOR)
    if separator_index <= 0:
        return None

    entity_id = decoded[separator_index + 1:]
    if not entity_id:
        return None

    return DecodedNodeId(type=decoded[:separator_index], entity_id=entity_id)


def get_order_id_from_node_id(node_id: Optional[str]) -> Optional[int]:
    """Return the numeric order id for an Order node ID, else None."""
    decoded = decode_node_id(node_id)
    if decoded is None or decoded.type != ORDER_TYPE:
        return None

    if not _ORDER_KEY_RE.fullmatch(decoded.entity_id):
        return None

    order_id = int(decoded.entity_id)
    return order_id if order_id > 0 else None


def get_customer_id_from_node_id(node_id: Optional[str]) -> Optional[str]:
    """Return the customer key for a Customer node ID, else None."""
    decoded = decode_node_id(node_id)
    if decoded is None or decoded.type != CUSTOMER_TYPE:
        return None

    return decoded.entity_id
