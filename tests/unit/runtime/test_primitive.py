#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from datetime import UTC, datetime
from decimal import Decimal

import pytest

from smithy_http_codegen.runtime.exceptions import BuildError, BuildErrorKind
from smithy_http_codegen.runtime.primitive import encode, serialize_timestamp


@pytest.mark.parametrize(
    "given, expected",
    [
        (True, "true"),
        (False, "false"),
        (0, "0"),
        (-12, "-12"),
        (1.5, "1.5"),
        (1.0, "1.0"),
        (float("nan"), "NaN"),
        (float("inf"), "Infinity"),
        (float("-inf"), "-Infinity"),
        (Decimal("1.25"), "1.25"),
    ],
)
def test_encode(given: bool | int | float | Decimal, expected: str) -> None:
    assert encode(given) == expected


@pytest.mark.parametrize(
    "format, expected",
    [
        ("date-time", "2024-01-02T03:04:05Z"),
        ("http-date", "Tue, 02 Jan 2024 03:04:05 GMT"),
        ("epoch-seconds", "1704164645"),
    ],
)
def test_serialize_timestamp(format: str, expected: str) -> None:
    value = datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)
    assert serialize_timestamp(value, format, "since") == expected


def test_serialize_timestamp_unsupported_format() -> None:
    with pytest.raises(BuildError) as e:
        serialize_timestamp(datetime(2024, 1, 2, tzinfo=UTC), "unix-millis", "since")
    assert e.value.kind is BuildErrorKind.SERIALIZATION_FAILURE
    assert e.value.field == "since"
    assert "unix-millis" in e.value.message
