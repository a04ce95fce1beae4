"""HTTP methods understood by the generated Angular services.

The modern HttpClient takes lower-case method names; the legacy Http client
takes members of its ``RequestMethod`` enum.
"""

from __future__ import annotations

from enum import Enum

from .errors import UnsupportedHttpMethodError


class HttpMethod(Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    HEAD = "HEAD"
    PATCH = "PATCH"

    @classmethod
    def parse(cls, raw: str) -> HttpMethod:
        """Look up the upper-case method name ``raw``; anything else is fatal."""
        try:
            return cls(raw)
        except ValueError:
            raise UnsupportedHttpMethodError(str(raw)) from None

    @property
    def request_method(self) -> str:
        """Symbol of this method in Angular's ``RequestMethod`` enum."""
        return f"RequestMethod.{self.value.capitalize()}"


def to_client_method(raw: str, use_http_client: bool) -> str:
    """Method expression for the generated service call.

    With the HttpClient any method is passed through lower-cased.
    """
    if use_http_client:
        return raw.lower()
    return HttpMethod.parse(raw).request_method
