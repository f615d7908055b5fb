#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from datetime import datetime
from decimal import Decimal

from smithy_core.types import TimestampFormat
from smithy_core.utils import serialize_float

from .exceptions import BuildError


def encode(value: bool | int | float | Decimal) -> str:
    """Encodes a boolean or number as canonical, locale independent text.

    Booleans are written as ``true`` or ``false``. Floats always have a fractional
    part and non-numeric floats are written as ``NaN``, ``Infinity``, or
    ``-Infinity``.
    """
    # bool is a subclass of int, so it has to be checked first.
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    return serialize_float(value)


def serialize_timestamp(value: datetime, format: str, field: str) -> str:
    """Renders a timestamp in the named Smithy timestamp format.

    :param value: The timestamp to render.
    :param format: The name of the format, such as ``date-time``.
    :param field: The member being rendered, used in errors.
    :raises BuildError: If the format is unsupported or the value can't be
        represented in it.
    """
    try:
        timestamp_format = TimestampFormat(format)
    except ValueError as e:
        raise BuildError.serialization_failure(
            field, f"unsupported timestamp format {format!r}"
        ) from e
    try:
        return str(timestamp_format.serialize(value))
    except (ValueError, OverflowError) as e:
        raise BuildError.serialization_failure(
            field, f"cannot be rendered as {format}: {e}"
        ) from e
