"""Tests for northwind_browser.orders.OrdersApi."""

import pytest

from conftest import ScriptedClient, load_fixture
from northwind_browser.errors import RequestFailure
from northwind_browser.models import Cursor, OrderDetail, SortSpec
from northwind_browser.node_id import encode_node_id
from northwind_browser.orders import ORDERS_DOMAIN, OrdersApi


@pytest.fixture
def list_client():
    return ScriptedClient([load_fixture("orders_list_response.json")])


def test_fetch_orders_page_passes_paging_variables(list_client):
    api = OrdersApi(list_client)
    api.fetch_orders_page(3, filters={"shipCountry": "France"}, sort=SortSpec("freight", "DESC"))

    query, variables = list_client.calls[0]
    assert variables == {"first": 3, "after": None}
    assert 'where: { shipCountry: { contains: "France" } }' in query
    assert "order: [{ freight: DESC }, { orderId: ASC }]" in query


def test_fetch_orders_page_maps_rows(list_client):
    page = OrdersApi(list_client).fetch_orders_page(3)

    assert len(page.rows) == 3
    first = page.rows[0]
    assert first.order_id == 10248
    assert first.customer_id == "VINET"
    assert first.ship_city == "Reims"
    assert first.freight == 32.38
    assert first.customer.company_name == "Vins et alcools Chevalier"

    assert page.rows[1].customer is None
    assert page.rows[1].ship_city == "Münster"


def test_fetch_orders_page_order_id_comes_from_node_id(list_client):
    page = OrdersApi(list_client).fetch_orders_page(3)
    # Third node carries a Customer id, so no order id can be derived
    assert page.rows[2].order_id is None


def test_fetch_orders_page_returns_page_info(list_client):
    sort = SortSpec("orderDate", "ASC")
    page = OrdersApi(list_client).fetch_orders_page(3, sort=sort)

    assert page.has_next_page is True
    assert page.has_previous_page is False
    assert page.start_cursor == Cursor("MA==", ORDERS_DOMAIN, sort)
    assert page.end_cursor == Cursor("Mg==", ORDERS_DOMAIN, sort)
    assert page.next_cursor == page.end_cursor


def test_fetch_orders_page_uses_matching_cursor(list_client):
    sort = SortSpec("orderDate", "ASC")
    OrdersApi(list_client).fetch_orders_page(3, after=Cursor("Mg==", ORDERS_DOMAIN, sort), sort=sort)
    assert list_client.calls[0][1]["after"] == "Mg=="


def test_fetch_orders_page_drops_cursor_from_other_sort(list_client):
    stale = Cursor("Mg==", ORDERS_DOMAIN, SortSpec("orderDate", "ASC"))
    OrdersApi(list_client).fetch_orders_page(3, after=stale, sort=SortSpec("orderDate", "DESC"))
    assert list_client.calls[0][1]["after"] is None


def test_fetch_orders_page_drops_cursor_from_other_list(list_client):
    sort = SortSpec("customerId", "ASC")
    foreign = Cursor("Mg==", "customers", sort)
    OrdersApi(list_client).fetch_orders_page(3, after=foreign, sort=sort)
    assert list_client.calls[0][1]["after"] is None


def test_fetch_orders_page_rejects_empty_page_size(list_client):
    with pytest.raises(ValueError):
        OrdersApi(list_client).fetch_orders_page(0)
    assert list_client.calls == []


def test_fetch_orders_page_propagates_request_failure():
    client = ScriptedClient([RequestFailure(["Unknown field 'shipName'"])])
    with pytest.raises(RequestFailure, match="Unknown field"):
        OrdersApi(client).fetch_orders_page(10)


def test_fetch_orders_for_customer_uses_exact_match(list_client):
    page = OrdersApi(list_client).fetch_orders_for_customer("VINET", 5)

    query, variables = list_client.calls[0]
    assert 'where: { customerId: { eq: "VINET" } }' in query
    assert variables == {"first": 5, "after": None}
    assert page.end_cursor.domain == "customer-orders:VINET"


def test_fetch_orders_for_customer_ignores_other_customers_cursor(list_client):
    sort = SortSpec("orderId", "ASC")
    other = Cursor("Mg==", "customer-orders:ALFKI", sort)
    OrdersApi(list_client).fetch_orders_for_customer("VINET", 5, after=other, sort=sort)
    assert list_client.calls[0][1]["after"] is None


def test_fetch_order_detail_found():
    client = ScriptedClient([load_fixture("order_detail_response.json")])
    detail = OrdersApi(client).fetch_order_detail(10248)

    assert client.calls[0][1] == {"orderId": 10248}
    assert isinstance(detail, OrderDetail)
    assert detail.order_id == 10248
    assert detail.ship_region is None
    assert detail.ship_postal_code == "51100"
    assert detail.ship_via == 3
    assert detail.employee_id == 5
    assert detail.customer.contact_name == "Paul Henriot"

    assert len(detail.order_lines) == 3
    first_line = detail.order_lines[0]
    assert first_line.product_id == "11"
    assert first_line.quantity == 12
    assert first_line.product.product_name == "Queso Cabrales"
    assert first_line.line_total == pytest.approx(168.0)
    assert detail.order_lines[2].product is None


def test_fetch_order_detail_not_found():
    client = ScriptedClient([{"orders": {"nodes": []}}])
    assert OrdersApi(client).fetch_order_detail(99999) is None


@pytest.mark.parametrize("order_id", [0, -1, True, "10248"])
def test_fetch_order_detail_invalid_id_makes_no_request(order_id):
    client = ScriptedClient([])
    assert OrdersApi(client).fetch_order_detail(order_id) is None
    assert client.calls == []


def test_fetch_order_detail_by_node_id():
    client = ScriptedClient([load_fixture("order_detail_response.json")])
    detail = OrdersApi(client).fetch_order_detail_by_node_id("T3JkZXI6MTAyNDg=")
    assert detail.order_id == 10248


def test_fetch_order_detail_by_customer_node_id_is_none():
    client = ScriptedClient([])
    api = OrdersApi(client)
    assert api.fetch_order_detail_by_node_id(encode_node_id("Customer", "ALFKI")) is None
    assert api.fetch_order_detail_by_node_id("%%%") is None
    assert client.calls == []
