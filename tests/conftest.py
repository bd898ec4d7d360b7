"""Shared fixtures for northwind_browser tests."""

import json
import os


FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")


def load_fixture(name):
    with open(os.path.join(FIXTURES_DIR, name), encoding="utf-8") as f:
        return json.load(f)["data"]


class ScriptedClient:
    """Stands in for GraphQLClient: returns queued responses and records calls."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def execute(self, query, variables=None):
        self.calls.append((query, dict(variables or {})))
        if not self.responses:
            raise AssertionError("Unexpected extra GraphQL request")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


