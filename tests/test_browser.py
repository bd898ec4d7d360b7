"""Tests for northwind_browser.browser.DataBrowser and settings.resolve_endpoint."""

import os
from unittest.mock import patch

import pytest

from northwind_browser.browser import DataBrowser
from northwind_browser.customers import DerivedFromOrdersSource, DirectConnectionSource
from northwind_browser.settings import resolve_endpoint

_BASE_ENV = {
    "GRAPHQL_ENDPOINT": "https://northwind.example.com/graphql/",
    "CUSTOMER_SOURCE": "derived",
    "PAGE_SIZE": "25",
    "GRAPHQL_TIMEOUT": "10",
    "DEBUG": "false",
}


def _make_browser(env_overrides=None, **kwargs):
    env = dict(_BASE_ENV)
    if env_overrides:
        env.update(env_overrides)

    with patch.dict(os.environ, env, clear=True):
        return DataBrowser(env_file="/nonexistent/.env", **kwargs)


def test_resolve_endpoint_absolute_unchanged():
    assert resolve_endpoint("https://api.example.com/graphql") == "https://api.example.com/graphql"
    assert resolve_endpoint("HTTP://API.example.com/gql") == "HTTP://API.example.com/gql"


def test_resolve_endpoint_relative_joined_to_base():
    assert resolve_endpoint("/graphql/", "http://localhost:5173") == "http://localhost:5173/graphql/"
    assert resolve_endpoint("graphql", "http://localhost/app/") == "http://localhost/graphql"


def test_resolve_endpoint_blank_uses_default_path():
    assert resolve_endpoint("  ", "http://localhost") == "http://localhost/graphql/"


def test_browser_reads_environment():
    browser = _make_browser()
    assert browser.endpoint == "https://northwind.example.com/graphql/"
    assert browser.client.endpoint == browser.endpoint
    assert browser.client.timeout == 10
    assert browser.page_size == 25
    assert browser.debug is False
    assert isinstance(browser.customers, DerivedFromOrdersSource)
    assert browser.orders.client is browser.client
    assert browser.validate_config() is True


def test_browser_defaults_without_environment():
    with patch.dict(os.environ, {}, clear=True):
        browser = DataBrowser(env_file="/nonexistent/.env")
    assert browser.endpoint == "http://localhost/graphql/"
    assert browser.page_size == 20
    assert isinstance(browser.customers, DerivedFromOrdersSource)


def test_browser_constructor_overrides_environment():
    browser = _make_browser(endpoint="/api/graphql", customer_source="direct")
    assert browser.endpoint == "http://localhost/api/graphql"
    assert isinstance(browser.customers, DirectConnectionSource)


def test_browser_relative_endpoint_uses_base_url():
    browser = _make_browser({"GRAPHQL_ENDPOINT": "/graphql/", "GRAPHQL_BASE_URL": "http://10.0.0.5:8080"})
    assert browser.endpoint == "http://10.0.0.5:8080/graphql/"


def test_browser_loads_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("CUSTOMER_SOURCE=direct\nPAGE_SIZE=7\n")
    with patch.dict(os.environ, {}, clear=True):
        browser = DataBrowser(env_file=str(env_file))
    assert isinstance(browser.customers, DirectConnectionSource)
    assert browser.page_size == 7


@pytest.mark.parametrize("overrides", [
    {"CUSTOMER_SOURCE": "graph"},
    {"PAGE_SIZE": "0"},
    {"GRAPHQL_TIMEOUT": "0"},
])
def test_validate_config_rejects_bad_values(overrides):
    browser = _make_browser(overrides)
    assert browser.validate_config() is False
