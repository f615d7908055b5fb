#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""The parts of the semantic model that HTTP binding code generation consumes.

Operations and their input members are described with smithy-core schemas and
traits. This module adds the classification and naming that the binding
generators need on top of them.
"""

from dataclasses import dataclass
from enum import Enum
from functools import cached_property

from smithy_core.schemas import Schema
from smithy_core.shapes import ShapeType
from smithy_core.traits import HTTPTrait, RequiredTrait, TimestampFormatTrait

from .exceptions import ExpectationNotMetError, ModelError
from .utils import escape_reserved, to_snake_case


class ShapeKind(Enum):
    """The closed set of shape kinds that binding formatters distinguish."""

    STRING = 1
    TIMESTAMP = 2
    NUMERIC = 3
    BOOLEAN = 4
    LIST = 5
    MAP = 6
    OTHER = 7


_SHAPE_KINDS: dict[ShapeType, ShapeKind] = {
    ShapeType.STRING: ShapeKind.STRING,
    ShapeType.ENUM: ShapeKind.STRING,
    ShapeType.TIMESTAMP: ShapeKind.TIMESTAMP,
    ShapeType.BYTE: ShapeKind.NUMERIC,
    ShapeType.SHORT: ShapeKind.NUMERIC,
    ShapeType.INTEGER: ShapeKind.NUMERIC,
    ShapeType.INT_ENUM: ShapeKind.NUMERIC,
    ShapeType.LONG: ShapeKind.NUMERIC,
    ShapeType.FLOAT: ShapeKind.NUMERIC,
    ShapeType.DOUBLE: ShapeKind.NUMERIC,
    ShapeType.BIG_INTEGER: ShapeKind.NUMERIC,
    ShapeType.BIG_DECIMAL: ShapeKind.NUMERIC,
    ShapeType.BOOLEAN: ShapeKind.BOOLEAN,
    ShapeType.LIST: ShapeKind.LIST,
    ShapeType.MAP: ShapeKind.MAP,
}


def shape_kind(shape_type: ShapeType) -> ShapeKind:
    """Classifies a shape type for the purpose of HTTP binding formatting."""
    return _SHAPE_KINDS.get(shape_type, ShapeKind.OTHER)


def kind_of(schema: Schema) -> ShapeKind:
    """Classifies the shape a schema describes, or a member's target."""
    return shape_kind(schema.shape_type)


def python_name(member: Schema) -> str:
    """The name of a member's attribute on the generated structure class."""
    return escape_reserved(to_snake_case(member.expect_member_name()))


def is_optional(member: Schema) -> bool:
    """Whether the generated attribute for a member may be ``None``."""
    return RequiredTrait not in member


def element_of(schema: Schema) -> Schema | None:
    """The element member of a list, or the value member of a map."""
    match kind_of(schema):
        case ShapeKind.LIST:
            return schema.members.get("member")
        case ShapeKind.MAP:
            return schema.members.get("value")
        case _:
            return None


def timestamp_format(member: Schema) -> str | None:
    """The value of a member's ``@timestampFormat`` trait, if present.

    The value is returned as written in the model. It is not checked against the
    known formats here, since an unsupported format only fails when generated code
    renders a value with it.
    """
    trait = member.traits.get(TimestampFormatTrait.id)
    if trait is None:
        return None
    return str(trait.document_value)


@dataclass(frozen=True)
class Operation:
    """An operation schema paired with the schema of its input structure."""

    schema: Schema
    """The operation's schema, which carries its ``@http`` trait."""

    input_schema: Schema
    """The schema of the operation's input structure."""

    @property
    def name(self) -> str:
        return self.schema.id.name

    @property
    def input_name(self) -> str:
        return self.input_schema.id.name

    @cached_property
    def python_name(self) -> str:
        return to_snake_case(self.name)

    @cached_property
    def http(self) -> HTTPTrait:
        """The operation's ``@http`` trait.

        :raises ModelError: If the operation has no ``@http`` trait.
        """
        if (http := self.schema.get_trait(HTTPTrait)) is None:
            raise ModelError(f"Operation {self.name} has no http trait.")
        return http

    @cached_property
    def members(self) -> tuple[Schema, ...]:
        """The input members, in declared order."""
        return tuple(
            sorted(
                self.input_schema.members.values(),
                key=lambda m: m.expect_member_index(),
            )
        )

    def expect_member(self, name: str) -> Schema:
        """Gets an input member by its model name.

        :raises ExpectationNotMetError: If the input has no such member.
        """
        if (member := self.input_schema.members.get(name)) is None:
            raise ExpectationNotMetError(
                f"Expected {self.input_name} to have a member named {name!r}."
            )
        return member
