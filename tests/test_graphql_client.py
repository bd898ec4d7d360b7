"""Tests for northwind_browser.graphql_client.GraphQLClient."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from northwind_browser.errors import RequestFailure
from northwind_browser.graphql_client import GraphQLClient

ENDPOINT = "http://localhost/graphql/"


def make_response(status_code=200, body=None, json_error=False):
    response = MagicMock()
    response.status_code = status_code
    if json_error:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = body
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Server Error")
    return response


@pytest.fixture
def client():
    return GraphQLClient(ENDPOINT, timeout=5)


def test_execute_returns_data(client):
    response = make_response(body={"data": {"orders": {"nodes": []}}})
    with patch.object(client._session, "post", return_value=response) as post:
        data = client.execute("query { orders { nodes { id } } }", {"first": 2, "after": None})

    assert data == {"orders": {"nodes": []}}
    post.assert_called_once_with(
        ENDPOINT,
        json={"query": "query { orders { nodes { id } } }", "variables": {"first": 2, "after": None}},
        timeout=5,
    )


def test_execute_without_variables_omits_them(client):
    with patch.object(client._session, "post", return_value=make_response(body={"data": {}})) as post:
        client.execute("query { __typename }")
    assert post.call_args.kwargs["json"] == {"query": "query { __typename }"}


def test_execute_graphql_errors_are_concatenated(client):
    body = {"errors": [{"message": "Field 'x' not found"}, {"message": "Syntax error"}], "data": None}
    with patch.object(client._session, "post", return_value=make_response(body=body)):
        with pytest.raises(RequestFailure) as excinfo:
            client.execute("query { x }")

    assert excinfo.value.messages == ["Field 'x' not found", "Syntax error"]
    assert str(excinfo.value) == "Field 'x' not found; Syntax error"


def test_execute_graphql_errors_on_http_error_status(client):
    body = {"errors": [{"message": "The order field is not valid"}]}
    with patch.object(client._session, "post", return_value=make_response(400, body)):
        with pytest.raises(RequestFailure) as excinfo:
            client.execute("query { x }")

    assert excinfo.value.messages == ["The order field is not valid"]
    assert excinfo.value.status_code == 400


def test_execute_http_error_without_graphql_body(client):
    with patch.object(client._session, "post", return_value=make_response(502, json_error=True)):
        with pytest.raises(RequestFailure, match="502"):
            client.execute("query { x }")


def test_execute_network_error(client):
    error = requests.ConnectionError("Connection refused")
    with patch.object(client._session, "post", side_effect=error):
        with pytest.raises(RequestFailure, match="Connection refused") as excinfo:
            client.execute("query { x }")

    assert excinfo.value.status_code is None
    assert excinfo.value.__cause__ is error


def test_execute_non_object_body(client):
    with patch.object(client._session, "post", return_value=make_response(body=["unexpected"])):
        with pytest.raises(RequestFailure, match="not a JSON object"):
            client.execute("query { x }")


def test_execute_null_data_is_empty_dict(client):
    with patch.object(client._session, "post", return_value=make_response(body={"data": None})):
        assert client.execute("query { x }") == {}


def test_custom_headers_are_sent():
    client = GraphQLClient(ENDPOINT, headers={"X-Request-Source": "browser"})
    assert client._session.headers["X-Request-Source"] == "browser"
    assert client._session.headers["Content-Type"] == "application/json"


def test_execute_graphql_error_without_message_text(client):
    body = {"errors": [{"message": None, "path": ["orders"]}, {"message": "Syntax error"}]}
    with patch.object(client._session, "post", return_value=make_response(body=body)):
        with pytest.raises(RequestFailure) as excinfo:
            client.execute("query { x }")

    assert excinfo.value.messages[0] == str({"message": None, "path": ["orders"]})
    assert excinfo.value.messages[1] == "Syntax error"
