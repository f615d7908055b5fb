#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass, field
from typing import Self

from smithy_core import URI
from smithy_http import Fields, tuples_to_fields


@dataclass(kw_only=True)
class HTTPRequest:
    """The method, target, and headers of a request built from an operation input.

    The host is not part of the request target. It is resolved separately, so the
    destination's host is left empty.
    """

    method: str
    """The HTTP method, such as ``GET``."""

    destination: URI
    """The path and, if present, the query string of the request."""

    fields: Fields = field(default_factory=Fields)
    """The request headers."""


class HTTPRequestBuilder:
    """Incrementally collects the parts of an :py:class:`HTTPRequest`.

    Every setter returns the builder so that calls can be chained.
    """

    def __init__(self) -> None:
        self._method: str | None = None
        self._uri: str | None = None
        self._headers: list[tuple[str, str]] = []

    def method(self, method: str) -> Self:
        self._method = method
        return self

    def uri(self, uri: str) -> Self:
        """Sets the request target, a path optionally followed by ``?`` and a query."""
        self._uri = uri
        return self

    def header(self, name: str, value: str) -> Self:
        """Appends a header value. Existing values for the same name are kept."""
        self._headers.append((name, value))
        return self

    def build(self) -> HTTPRequest:
        """Builds the request.

        :raises ValueError: If the method or URI has not been set.
        """
        if self._method is None or self._uri is None:
            raise ValueError("Both a method and a URI are required to build a request.")
        path, _, query = self._uri.partition("?")
        return HTTPRequest(
            method=self._method,
            destination=URI(host="", path=path, query=query or None),
            fields=tuples_to_fields(self._headers),
        )
