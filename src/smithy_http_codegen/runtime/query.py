#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""Formatting and assembly of URI query strings."""

from datetime import datetime
from urllib.parse import quote as urlquote

from .primitive import serialize_timestamp


def fmt_string(value: str) -> str:
    """Percent-encodes a string for use as a query key or value."""
    return urlquote(value, safe="")


def fmt_timestamp(value: datetime, format: str, field: str) -> str:
    """Renders a timestamp and percent-encodes it for use as a query value."""
    return urlquote(serialize_timestamp(value, format, field), safe="")


class Writer:
    """Accumulates query parameters into a query string.

    Keys and values are written as given; callers are responsible for escaping
    them. The rendered string has no leading ``?``.
    """

    def __init__(self) -> None:
        self._params: list[str] = []

    def push_kv(self, key: str, value: str) -> None:
        """Appends a ``key=value`` pair."""
        self._params.append(f"{key}={value}")

    def push_v(self, key: str) -> None:
        """Appends a key with no value."""
        self._params.append(key)

    def finish(self) -> str:
        return "&".join(self._params)
