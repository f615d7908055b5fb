#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""Formatting for values bound to URI path labels."""

from datetime import datetime
from urllib.parse import quote as urlquote

from .primitive import serialize_timestamp


def fmt_string(value: str, greedy: bool = False) -> str:
    """Percent-encodes a string for use as a path label.

    :param value: The value to encode.
    :param greedy: Whether the label is greedy. Greedy labels keep path separators
        unescaped since they may span multiple path segments.
    """
    if greedy:
        return urlquote(value, safe="/")
    return urlquote(value, safe="")


def fmt_timestamp(value: datetime, format: str, field: str) -> str:
    """Renders a timestamp and percent-encodes it for use as a path label."""
    return urlquote(serialize_timestamp(value, format, field), safe="")
