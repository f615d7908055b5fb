#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import pytest
from smithy_http.bindings import Binding

from smithy_http_codegen.exceptions import ExpectationNotMetError
from smithy_http_codegen.formatting import FormatExpression, format_value
from smithy_http_codegen.shapes import ShapeKind

LABEL = Binding.LABEL
QUERY = Binding.QUERY


@pytest.mark.parametrize(
    "kind, location, greedy, timestamp_format, expected",
    [
        (
            ShapeKind.STRING,
            LABEL,
            False,
            None,
            FormatExpression("label", "_label.fmt_string(v)"),
        ),
        (
            ShapeKind.STRING,
            LABEL,
            True,
            None,
            FormatExpression("label", "_label.fmt_string(v, True)"),
        ),
        (
            ShapeKind.STRING,
            QUERY,
            False,
            None,
            FormatExpression("query", "_query.fmt_string(v)"),
        ),
        # Query parameters are never greedy.
        (
            ShapeKind.STRING,
            QUERY,
            True,
            None,
            FormatExpression("query", "_query.fmt_string(v)"),
        ),
        (
            ShapeKind.TIMESTAMP,
            LABEL,
            False,
            "date-time",
            FormatExpression(
                "label", '_label.fmt_timestamp(v, "date-time", "since")'
            ),
        ),
        (
            ShapeKind.TIMESTAMP,
            QUERY,
            False,
            "epoch-seconds",
            FormatExpression(
                "query", '_query.fmt_timestamp(v, "epoch-seconds", "since")'
            ),
        ),
        (
            ShapeKind.NUMERIC,
            LABEL,
            False,
            None,
            FormatExpression("primitive", "_primitive.encode(v)"),
        ),
        (
            ShapeKind.BOOLEAN,
            QUERY,
            False,
            None,
            FormatExpression("primitive", "_primitive.encode(v)"),
        ),
    ],
)
def test_format_value(
    kind: ShapeKind,
    location: Binding,
    greedy: bool,
    timestamp_format: str | None,
    expected: FormatExpression,
) -> None:
    actual = format_value(
        kind,
        location,
        "v",
        field="since",
        greedy=greedy,
        timestamp_format=timestamp_format,
    )
    assert actual == expected
    assert actual.alias == f"_{expected.helper_module}"
    assert str(actual) == expected.expression


@pytest.mark.parametrize("kind", [ShapeKind.LIST, ShapeKind.MAP, ShapeKind.OTHER])
def test_format_value_rejects_non_scalars(kind: ShapeKind) -> None:
    with pytest.raises(ExpectationNotMetError):
        format_value(kind, LABEL, "v", field="tags")


def test_format_value_requires_timestamp_format() -> None:
    with pytest.raises(ExpectationNotMetError):
        format_value(ShapeKind.TIMESTAMP, QUERY, "v", field="since")


@pytest.mark.parametrize(
    "location", [Binding.HEADER, Binding.BODY]
)
def test_format_value_rejects_other_locations(location: Binding) -> None:
    with pytest.raises(ExpectationNotMetError):
        format_value(ShapeKind.STRING, location, "v", field="etag")
