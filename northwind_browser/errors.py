"""
Errors raised by the data-fetching layer.

Only request failures are raised. "Not found" results and undecodable
identifiers are returned as None so callers can tell an empty result apart
from a failed request.
"""

from typing import List, Optional


class BrowserError(Exception):
    """Base class for northwind_browser errors."""


class RequestFailure(BrowserError):
    """The transport failed or the server answered with GraphQL errors.

    Attributes:
        messages: The individual error messages, in the order reported.
        status_code: HTTP status of the response, if one was received.
    """

    def __init__(self, messages: List[str], status_code: Optional[int] = None):
        self.messages = [str(m) for m in messages] or ["GraphQL request failed"]
        self.status_code = status_code
        super().__init__("; ".join(self.messages))
