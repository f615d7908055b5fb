#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import pytest
from smithy_core.prelude import INTEGER, STRING, TIMESTAMP
from smithy_core.schemas import Schema
from smithy_core.shapes import ShapeID, ShapeType
from smithy_core.traits import (
    DynamicTrait,
    HTTPTrait,
    RequiredTrait,
    TimestampFormatTrait,
)

from smithy_http_codegen.exceptions import ExpectationNotMetError, ModelError
from smithy_http_codegen.shapes import (
    Operation,
    ShapeKind,
    element_of,
    is_optional,
    kind_of,
    python_name,
    shape_kind,
    timestamp_format,
)

STRING_LIST = Schema.collection(
    id=ShapeID("com.example#StringList"),
    shape_type=ShapeType.LIST,
    members={"member": {"index": 0, "target": STRING}},
)
INTEGER_MAP = Schema.collection(
    id=ShapeID("com.example#IntegerMap"),
    shape_type=ShapeType.MAP,
    members={
        "key": {"index": 0, "target": STRING},
        "value": {"index": 1, "target": INTEGER},
    },
)
INPUT = Schema.collection(
    id=ShapeID("com.example#GetObjectInput"),
    members={
        "Key": {"index": 1, "target": STRING},
        "Bucket": {"index": 0, "target": STRING, "traits": [RequiredTrait()]},
        "MaxKeys": {"index": 2, "target": INTEGER},
        "From": {"index": 3, "target": TIMESTAMP},
        "Tags": {"index": 4, "target": STRING_LIST},
        "Counts": {"index": 5, "target": INTEGER_MAP},
        "Since": {
            "index": 6,
            "target": TIMESTAMP,
            "traits": [TimestampFormatTrait("epoch-seconds")],
        },
        "Until": {
            "index": 7,
            "target": TIMESTAMP,
            "traits": [
                DynamicTrait(id=TimestampFormatTrait.id, document_value="unix-millis")
            ],
        },
    },
)


def get_object(*traits: HTTPTrait) -> Operation:
    return Operation(
        schema=Schema(
            id=ShapeID("com.example#GetObject"),
            shape_type=ShapeType.OPERATION,
            traits=list(traits),
        ),
        input_schema=INPUT,
    )


@pytest.mark.parametrize(
    "shape_type, expected",
    [
        (ShapeType.STRING, ShapeKind.STRING),
        (ShapeType.ENUM, ShapeKind.STRING),
        (ShapeType.TIMESTAMP, ShapeKind.TIMESTAMP),
        (ShapeType.BYTE, ShapeKind.NUMERIC),
        (ShapeType.INTEGER, ShapeKind.NUMERIC),
        (ShapeType.INT_ENUM, ShapeKind.NUMERIC),
        (ShapeType.LONG, ShapeKind.NUMERIC),
        (ShapeType.DOUBLE, ShapeKind.NUMERIC),
        (ShapeType.BIG_DECIMAL, ShapeKind.NUMERIC),
        (ShapeType.BOOLEAN, ShapeKind.BOOLEAN),
        (ShapeType.LIST, ShapeKind.LIST),
        (ShapeType.MAP, ShapeKind.MAP),
        (ShapeType.BLOB, ShapeKind.OTHER),
        (ShapeType.STRUCTURE, ShapeKind.OTHER),
        (ShapeType.DOCUMENT, ShapeKind.OTHER),
    ],
)
def test_shape_kind(shape_type: ShapeType, expected: ShapeKind) -> None:
    assert shape_kind(shape_type) is expected


def test_member_kind_follows_target() -> None:
    tags = INPUT.members["Tags"]
    assert kind_of(tags) is ShapeKind.LIST
    element = element_of(tags)
    assert element is not None
    assert kind_of(element) is ShapeKind.STRING


def test_map_element_is_value_member() -> None:
    element = element_of(INPUT.members["Counts"])
    assert element is not None
    assert element.expect_member_name() == "value"
    assert kind_of(element) is ShapeKind.NUMERIC


def test_scalar_has_no_element() -> None:
    assert element_of(INPUT.members["Key"]) is None


@pytest.mark.parametrize(
    "name, expected",
    [("Bucket", "bucket"), ("MaxKeys", "max_keys"), ("From", "from_")],
)
def test_member_python_name(name: str, expected: str) -> None:
    assert python_name(INPUT.members[name]) == expected


def test_is_optional() -> None:
    assert not is_optional(INPUT.members["Bucket"])
    assert is_optional(INPUT.members["Key"])


@pytest.mark.parametrize(
    "name, expected",
    [("From", None), ("Since", "epoch-seconds"), ("Until", "unix-millis")],
)
def test_timestamp_format(name: str, expected: str | None) -> None:
    assert timestamp_format(INPUT.members[name]) == expected


def test_operation_members_are_in_declared_order() -> None:
    operation = get_object(HTTPTrait({"method": "GET", "code": 200, "uri": "/"}))
    assert [m.expect_member_name() for m in operation.members][:3] == [
        "Bucket",
        "Key",
        "MaxKeys",
    ]


def test_operation_expect_member() -> None:
    operation = get_object(HTTPTrait({"method": "GET", "code": 200, "uri": "/"}))
    assert operation.name == "GetObject"
    assert operation.input_name == "GetObjectInput"
    assert operation.python_name == "get_object"
    assert operation.expect_member("Bucket") == INPUT.members["Bucket"]
    with pytest.raises(ExpectationNotMetError):
        operation.expect_member("Missing")


def test_operation_http_trait() -> None:
    operation = get_object(
        HTTPTrait({"method": "PUT", "code": 200, "uri": "/{Bucket}/{Key+}?x-id=Put"})
    )
    assert operation.http.method == "PUT"
    assert operation.http.path.pattern == "/{Bucket}/{Key+}"
    assert operation.http.path.greedy_labels == {"Key"}
    assert operation.http.query == "x-id=Put"


def test_operation_without_http_trait() -> None:
    with pytest.raises(ModelError):
        get_object().http
