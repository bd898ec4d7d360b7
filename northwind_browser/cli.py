#!/usr/bin/env python3
"""
Northwind Data Browser - Command-line entry point.

Reads configuration from a .env file, builds a DataBrowser and prints list
pages or detail records from the Northwind GraphQL server.

Usage:
    northwind-browser orders                              # First page of orders
    northwind-browser orders --filter shipCountry=Germany --sort freight --desc
    northwind-browser orders --pages 3                    # Walk three pages
    northwind-browser order 10248                         # Order detail (id or node id)
    northwind-browser customers --source direct           # Use a customers connection
    northwind-browser customer ALFKI                      # Customer profile
    northwind-browser customer-orders ALFKI               # A customer's orders
    northwind-browser --json customers                    # Machine-readable output
    northwind-browser --version

Exit codes:
    0  Success (including "not found")
    1  Request failure or invalid configuration
    2  Invalid arguments
"""

import argparse
import dataclasses
import json
import logging
import sys
from typing import Dict, List

from . import __version__
from .browser import DataBrowser
from .customers import CUSTOMER_SOURCES, CUSTOMERS_DOMAIN, DEFAULT_CUSTOMER_SORT
from .errors import RequestFailure
from .formatters import format_currency, format_date, safe_text
from .models import Cursor, SortDirection, SortSpec
from .orders import CUSTOMER_ORDERS_DOMAIN, DEFAULT_ORDER_SORT, ORDERS_DOMAIN
from .pagination import PageNavigator
from .query_builder import CUSTOMER_SORT_COLUMNS, ORDER_SORT_COLUMNS


def parse_filters(values: List[str]) -> Dict[str, str]:
    """Turn ["shipCountry=Germany", ...] into a filter dict."""
    filters = {}
    for item in values or []:
        field, separator, value = item.partition("=")
        if not separator or not field.strip():
            raise argparse.ArgumentTypeError(f"Filter must look like field=value, got {item!r}")
        filters[field.strip()] = value
    return filters


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected a whole number, got {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"Must be at least 1, got {number}")
    return number


def _sort_from_args(args, default: SortSpec) -> SortSpec:
    if not args.sort:
        return default
    return SortSpec(args.sort, SortDirection.DESC if args.desc else SortDirection.ASC)


def _to_json(value) -> str:
    return json.dumps(dataclasses.asdict(value), indent=2, default=str)


def print_order_rows(rows):
    for row in rows:
        customer = row.customer.company_name if row.customer else safe_text(row.customer_id)
        print(
            f"  {row.order_id or 'N/A':>6}  {format_date(row.order_date):<12}  "
            f"{customer:<36.36}  {safe_text(row.ship_city):<16.16}  "
            f"{safe_text(row.ship_country):<12.12}  {format_currency(row.freight):>10}"
        )


def print_customer_rows(rows):
    for row in rows:
        print(
            f"  {row.customer_id:<6}  {row.company_name:<36.36}  "
            f"{safe_text(row.contact_name):<24.24}  {safe_text(row.city):<16.16}  "
            f"{safe_text(row.country)}"
        )


def print_order_detail(order):
    print(f"Order {order.order_id}")
    print(f"  Customer:  {order.customer.company_name if order.customer else safe_text(order.customer_id)}")
    print(f"  Ordered:   {format_date(order.order_date)}")
    print(f"  Required:  {format_date(order.required_date)}")
    print(f"  Shipped:   {format_date(order.shipped_date)}")
    print(f"  Ship to:   {safe_text(order.ship_name)}, {safe_text(order.ship_address)}, "
          f"{safe_text(order.ship_city)} {safe_text(order.ship_postal_code)}, {safe_text(order.ship_country)}")
    print(f"  Freight:   {format_currency(order.freight)}")
    print(f"  Lines ({len(order.order_lines)}):")
    for line in order.order_lines:
        name = line.product.product_name if line.product else line.product_id
        print(f"    {name:<32.32}  {line.quantity:>4} x {format_currency(line.unit_price):>9}  "
              f"-{line.discount:.0%}  = {format_currency(line.line_total):>10}")


def print_customer_profile(profile):
    print(f"{profile.company_name}")
    print(f"  Contact:   {safe_text(profile.contact_name)} ({safe_text(profile.contact_title)})")
    print(f"  Address:   {safe_text(profile.address)}, {safe_text(profile.city)} "
          f"{safe_text(profile.postal_code)}, {safe_text(profile.country)}")
    print(f"  Phone:     {safe_text(profile.phone)}")
    print(f"  Fax:       {safe_text(profile.fax)}")


def walk_pages(navigator: PageNavigator, pages: int, print_rows, as_json: bool):
    """Load up to `pages` pages, following next cursors."""
    for _ in range(pages):
        page = navigator.load()
        if as_json:
            print(_to_json(page))
        else:
            print(f"Page {navigator.history.page_number} ({len(page.rows)} rows)")
            print_rows(page.rows)
            if page.next_cursor:
                print(f"  next cursor: {page.next_cursor.value}")
        if not navigator.next_page(page):
            break


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="northwind-browser",
        description="Northwind Data Browser - Browse orders and customers over GraphQL",
    )
    parser.add_argument("--env", "-e", default="./.env", help="Path to .env file")
    parser.add_argument("--endpoint", help="GraphQL endpoint (overrides GRAPHQL_ENDPOINT)")
    parser.add_argument("--source", choices=sorted(CUSTOMER_SOURCES), help="Customer source variant")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of tables")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument("--version", "-v", action="version", version=f"northwind-browser {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_list_options(sub, columns, filterable=True):
        if filterable:
            sub.add_argument("--filter", "-f", action="append", default=[], help="field=value substring filter")
        sub.add_argument("--sort", "-s", choices=sorted(columns), help="Sort column")
        sub.add_argument("--desc", action="store_true", help="Sort descending")
        sub.add_argument("--first", "-n", type=positive_int, help="Rows per page (default: PAGE_SIZE)")
        sub.add_argument("--after", help="Cursor to start after")
        sub.add_argument("--pages", type=positive_int, default=1, help="Number of pages to walk")

    add_list_options(subparsers.add_parser("orders", help="List orders"), ORDER_SORT_COLUMNS)
    add_list_options(subparsers.add_parser("customers", help="List customers"), CUSTOMER_SORT_COLUMNS)

    customer_orders = subparsers.add_parser("customer-orders", help="List one customer's orders")
    customer_orders.add_argument("customer_id")
    add_list_options(customer_orders, ORDER_SORT_COLUMNS, filterable=False)

    order = subparsers.add_parser("order", help="Show one order")
    order.add_argument("order_id", help="Numeric order id or order node id")

    customer = subparsers.add_parser("customer", help="Show one customer")
    customer.add_argument("customer_id")

    return parser


def run_command(args, browser: DataBrowser) -> int:
    if args.command in ("orders", "customers", "customer-orders"):
        try:
            filters = parse_filters(getattr(args, "filter", None))
        except argparse.ArgumentTypeError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 2

        if args.command == "orders":
            sort = _sort_from_args(args, DEFAULT_ORDER_SORT)
            domain, fetch, print_rows = ORDERS_DOMAIN, browser.orders.fetch_orders_page, print_order_rows
        elif args.command == "customers":
            sort = _sort_from_args(args, DEFAULT_CUSTOMER_SORT)
            domain, fetch, print_rows = CUSTOMERS_DOMAIN, browser.customers.fetch_page, print_customer_rows
        else:
            sort = _sort_from_args(args, DEFAULT_ORDER_SORT)
            customer_id = args.customer_id
            domain = f"{CUSTOMER_ORDERS_DOMAIN}:{customer_id}"
            print_rows = print_order_rows

            def fetch(first, after, _filters, sort):
                return browser.orders.fetch_orders_for_customer(customer_id, first, after, sort)

        navigator = PageNavigator(fetch, sort, args.first or browser.page_size, filters)
        if args.after:
            # A cursor from the command line is taken to belong to this list and sort
            navigator.history.advance_to(Cursor(args.after, domain, sort))
        walk_pages(navigator, args.pages, print_rows, args.json)
        return 0

    if args.command == "order":
        order_id = args.order_id.strip()
        if order_id.isascii() and order_id.isdecimal():
            detail = browser.orders.fetch_order_detail(int(order_id))
        else:
            detail = browser.orders.fetch_order_detail_by_node_id(order_id)
        if detail is None:
            print(f"Order {args.order_id} not found")
        elif args.json:
            print(_to_json(detail))
        else:
            print_order_detail(detail)
        return 0

    profile = browser.customers.fetch_customer_by_id(args.customer_id)
    if profile is None:
        print(f"Customer {args.customer_id} not found")
    elif args.json:
        print(_to_json(profile))
    else:
        print_customer_profile(profile)
    return 0


def main(argv=None) -> int:
    """Parse CLI arguments and run one browser command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    browser = DataBrowser(env_file=args.env, endpoint=args.endpoint, customer_source=args.source)

    if args.debug or browser.debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(name)s - %(levelname)s - %(message)s'
        )

    if not browser.validate_config():
        return 1

    try:
        return run_command(args, browser)
    except RequestFailure as e:
        print(f"ERROR: Request failed: {e}", file=sys.stderr)
        return 1
    finally:
        browser.close()


if __name__ == "__main__":
    sys.exit(main())
