#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass
from typing import assert_never

from smithy_http.bindings import Binding

from .exceptions import ExpectationNotMetError
from .shapes import ShapeKind
from .utils import dq


@dataclass(frozen=True)
class FormatExpression:
    """A Python expression that formats a value for an HTTP binding location."""

    helper_module: str
    """The runtime helper module the expression calls, such as ``label``."""

    expression: str
    """The expression itself."""

    @property
    def alias(self) -> str:
        """The name the helper module is imported under."""
        return helper_alias(self.helper_module)

    def __str__(self) -> str:
        return self.expression


def helper_alias(helper_module: str) -> str:
    """The name generated code imports a runtime helper module under."""
    return f"_{helper_module}"


def format_value(
    kind: ShapeKind,
    location: Binding,
    value: str,
    *,
    field: str,
    greedy: bool = False,
    timestamp_format: str | None = None,
) -> FormatExpression:
    """Creates an expression that formats a scalar value for a binding location.

    Lists and maps must be unwrapped by the caller first, so that each element is
    formatted individually.

    :param kind: The kind of the value's shape.
    :param location: Where the value is bound. Only labels and query parameters
        are supported.
    :param value: An expression evaluating to the value to format.
    :param field: The name of the member, used in errors raised by generated code.
    :param greedy: Whether the value is bound to a greedy label.
    :param timestamp_format: The resolved timestamp format. Required for
        timestamps.
    :raises ExpectationNotMetError: If the kind isn't a formattable scalar, or the
        location isn't a label or query parameter.
    """
    match location:
        case Binding.LABEL:
            module = "label"
        case Binding.QUERY:
            module = "query"
            greedy = False
        case _:
            raise ExpectationNotMetError(
                f"Values bound to {location.name} are not formatted here."
            )
    alias = helper_alias(module)

    match kind:
        case ShapeKind.STRING:
            if greedy:
                return FormatExpression(module, f"{alias}.fmt_string({value}, True)")
            return FormatExpression(module, f"{alias}.fmt_string({value})")
        case ShapeKind.TIMESTAMP:
            if timestamp_format is None:
                raise ExpectationNotMetError(
                    f"A timestamp format must be resolved for {field!r}."
                )
            return FormatExpression(
                module,
                f"{alias}.fmt_timestamp({value}, {dq(timestamp_format)}, {dq(field)})",
            )
        case ShapeKind.NUMERIC | ShapeKind.BOOLEAN:
            return FormatExpression(
                "primitive", f"{helper_alias('primitive')}.encode({value})"
            )
        case ShapeKind.LIST | ShapeKind.MAP:
            raise ExpectationNotMetError(
                f"{kind.name} values must be unwrapped before formatting {field!r}."
            )
        case ShapeKind.OTHER:
            raise ExpectationNotMetError(
                f"{field!r} targets a shape that can't be bound to {location.name}."
            )
        case _:
            assert_never(kind)
