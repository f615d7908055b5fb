#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""Generation of the functions that bind an operation input to an HTTP request.

For an operation named ``GetObject`` with the URI ``/{Bucket}/{Key+}?x-id=GetObject``
the generated code looks like this:

.. code-block:: python

    def _get_object_uri_base(input: "GetObjectInput") -> str:
        input_1 = input.bucket
        if input_1 is None:
            raise _BuildError.missing_field("bucket", "cannot be empty or unset")
        bucket = _label.fmt_string(input_1)
        if not bucket:
            raise _BuildError.missing_field("bucket", "cannot be empty or unset")
        ...
        return f"/{bucket}/{key}"


    def _get_object_uri_query(input: "GetObjectInput") -> str:
        query = _query.Writer()
        query.push_kv("x-id", "GetObject")
        return query.finish()


    def _get_object_update_http_request(
        input: "GetObjectInput", builder: _HTTPRequestBuilder
    ) -> _HTTPRequestBuilder:
        uri = _get_object_uri_base(input)
        query = _get_object_uri_query(input)
        if query:
            uri += "?" + query
        return builder.method("GET").uri(uri)

Every failure raises a ``BuildError`` from the generated function, so no partially
built request is ever observable.
"""

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from typing import ClassVar

from smithy_core.schemas import Schema
from smithy_http.bindings import Binding

from .bindings import (
    LabelBinding,
    LabelSegment,
    LiteralSegment,
    OperationBinding,
    QueryParam,
    UriPattern,
    determine_timestamp_format,
)
from .build_error import OperationBuildError
from .exceptions import ExpectationNotMetError
from .formatting import FormatExpression, format_value
from .runtime.query import fmt_string as query_escape
from .sections import Customization, Section, write_customizations
from .settings import CodegenSettings
from .shapes import (
    Operation,
    ShapeKind,
    element_of,
    is_optional,
    kind_of,
    python_name,
    timestamp_format,
)
from .utils import dq, escape_reserved
from .writer import CodeWriter

__all__ = [
    "MutateBuilder",
    "MutateUri",
    "RequestBindingGenerator",
    "RequestBindingSection",
    "render_operation_binding",
    "uri_format_string",
]

_LOGGER = logging.getLogger(__name__)

_LABEL_ERROR = "cannot be empty or unset"


@dataclass(frozen=True, kw_only=True)
class RequestBindingSection(Section):
    """Extension points in the generated ``update_http_request`` function."""

    name: ClassVar[str] = "RequestBindingSection"


@dataclass(frozen=True, kw_only=True)
class MutateUri(RequestBindingSection):
    """Written after the path and query string are assembled.

    Code written here may reassign the URI variable.
    """

    name: ClassVar[str] = "MutateUri"

    input_name: str
    """The name of the operation input variable."""

    uri_name: str
    """The name of the variable holding the URI."""

    operation: Operation


@dataclass(frozen=True, kw_only=True)
class MutateBuilder(RequestBindingSection):
    """Written after headers are applied, before the method and URI are set.

    Code written here may reassign the builder variable.
    """

    name: ClassVar[str] = "MutateBuilder"

    input_name: str
    """The name of the operation input variable."""

    builder_name: str
    """The name of the variable holding the request builder."""

    operation: Operation


def uri_format_string(pattern: UriPattern, names: dict[str, str]) -> str:
    """Renders the path of a URI pattern as an f-string literal.

    A pattern without labels is rendered as a plain string literal.

    :param pattern: The pattern to render.
    :param names: The local variable holding the formatted value of each label,
        keyed by label name.
    """
    if not pattern.labels:
        literals = [s.text for s in pattern.segments if isinstance(s, LiteralSegment)]
        return dq("/" + "/".join(literals))
    parts: list[str] = []
    for segment in pattern.segments:
        match segment:
            case LabelSegment(member_name=label):
                parts.append("{" + names[label] + "}")
            case LiteralSegment(text=text):
                escaped = dq(text)[1:-1]
                parts.append(escaped.replace("{", "{{").replace("}", "}}"))
    return 'f"/' + "/".join(parts) + '"'


class RequestBindingGenerator:
    """Generates the functions that bind an operation's input to an HTTP request.

    Three functions are generated:

    * ``uri_base`` formats each label and returns the path.
    * ``uri_query`` returns the query string. It is only generated when the
      operation has at least one query binding.
    * ``update_http_request`` combines the above, applies headers, and sets the
      method and URI on a request builder.
    """

    def __init__(
        self,
        operation: Operation,
        *,
        settings: CodegenSettings | None = None,
        customizations: Sequence[Customization[RequestBindingSection]] = (),
        add_headers_fn: str | None = None,
    ) -> None:
        """Initialize a RequestBindingGenerator.

        :param operation: The operation to generate request binding code for.
        :param settings: Settings for the generation run.
        :param customizations: Customizations for the extension points in the
            generated ``update_http_request`` function, in the order they apply.
        :param add_headers_fn: The name of a generated function with the signature
            ``(input, builder) -> builder`` that applies header bindings. If not
            set, no headers are applied.
        """
        self._operation = operation
        self._settings = settings or CodegenSettings()
        self._customizations = customizations
        self._add_headers_fn = add_headers_fn
        self._build_error = OperationBuildError(self._settings)
        self.binding = OperationBinding.from_operation(operation)

        prefix = f"_{operation.python_name}"
        self.uri_base_name = f"{prefix}_uri_base"
        self.uri_query_name = f"{prefix}_uri_query"
        self.update_http_request_name = f"{prefix}_update_http_request"

        self._input = self._settings.input_name
        self._builder = self._settings.builder_name
        self._input_type = dq(operation.input_name)
        # Locals and import aliases used by the generated functions.
        self._reserved = {
            self._input,
            self._builder,
            "uri",
            "query",
            "protected_params",
            "_label",
            "_query",
            "_primitive",
            "_BuildError",
            "_HTTPRequestBuilder",
        }

    def render(self, writer: CodeWriter) -> None:
        """Writes the request binding functions for the operation."""
        _LOGGER.debug("Generating request bindings for %s", self._operation.name)
        self.render_uri_base(writer)
        has_query = self.render_uri_query(writer)
        self.render_update_http_request(writer, has_query)

    def render_update_http_request(self, writer: CodeWriter, has_query: bool) -> None:
        """Writes the function that applies the input to a request builder.

        :param writer: The writer to write to.
        :param has_query: Whether a ``uri_query`` function was generated. It is
            only called if it exists.
        """
        writer.add_import(
            f"{self._settings.runtime_module}.request",
            "HTTPRequestBuilder",
            "_HTTPRequestBuilder",
        )
        writer.write("")
        writer.write("")
        with writer.block(
            f"def {self.update_http_request_name}(\n"
            f"    {self._input}: {self._input_type}, "
            f"{self._builder}: _HTTPRequestBuilder\n"
            ") -> _HTTPRequestBuilder:"
        ):
            writer.write(f"uri = {self.uri_base_name}({self._input})")
            if has_query:
                writer.write(f"query = {self.uri_query_name}({self._input})")
                with writer.block("if query:"):
                    writer.write('uri += "?" + query')
            write_customizations(
                writer,
                self._customizations,
                MutateUri(
                    input_name=self._input, uri_name="uri", operation=self._operation
                ),
            )
            if self._add_headers_fn is not None:
                writer.write(
                    f"{self._builder} = {self._add_headers_fn}"
                    f"({self._input}, {self._builder})"
                )
            write_customizations(
                writer,
                self._customizations,
                MutateBuilder(
                    input_name=self._input,
                    builder_name=self._builder,
                    operation=self._operation,
                ),
            )
            writer.write(
                f"return {self._builder}.method({dq(self.binding.method)}).uri(uri)"
            )

    def render_uri_base(self, writer: CodeWriter) -> None:
        """Writes the function that formats each label and returns the path."""
        writer.write("")
        writer.write("")
        with writer.block(
            f"def {self.uri_base_name}({self._input}: {self._input_type}) -> str:"
        ):
            # Temporaries must not shadow any label's output variable.
            names = {
                label.segment.member_name: escape_reserved(
                    python_name(label.member), self._reserved
                )
                for label in self.binding.labels
            }
            taken = self._reserved | set(names.values())
            for label in self.binding.labels:
                self._serialize_label(
                    writer, label, names[label.segment.member_name], taken
                )
            writer.write(f"return {uri_format_string(self.binding.pattern, names)}")

    def _serialize_label(
        self, writer: CodeWriter, label: LabelBinding, output: str, taken: set[str]
    ) -> None:
        member = label.member
        field = python_name(member)
        error = self._build_error.missing_field(writer, field, _LABEL_ERROR)

        value = writer.safe_name("input", taken)
        writer.write(f"{value} = {self._input}.{field}")
        if is_optional(member):
            with writer.block(f"if {value} is None:"):
                writer.write(f"raise {error}")

        if (kind := kind_of(member)) in (ShapeKind.LIST, ShapeKind.MAP):
            raise ExpectationNotMetError(
                f"Label {label.segment.member_name!r} must be bound to a scalar, "
                f"but targets a {kind.name}."
            )
        formatted = self._format(
            writer, member, member, Binding.LABEL, value, greedy=label.is_greedy
        )
        writer.write(f"{output} = {formatted}")
        with writer.block(f"if not {output}:"):
            writer.write(f"raise {error}")

    def render_uri_query(self, writer: CodeWriter) -> bool:
        """Writes the function that returns the query string, if one is needed.

        Literal parameters are written first, then map-bound parameters, then
        individually bound parameters. Map entries whose keys collide with a
        literal or individually bound parameter are skipped.

        :returns: Whether the function was written. Callers must not call the
            function if it wasn't.
        """
        binding = self.binding
        if not binding.has_query:
            _LOGGER.debug(
                "Skipping query string generation for %s: no query bindings",
                self._operation.name,
            )
            return False

        writer.add_import(self._settings.runtime_module, "query", "_query")
        writer.write("")
        writer.write("")
        with writer.block(
            f"def {self.uri_query_name}({self._input}: {self._input_type}) -> str:"
        ):
            writer.write("query = _query.Writer()")
            for key, value in binding.literal_query_params:
                # An empty literal value means the key is written without one.
                if value:
                    writer.write(f"query.push_kv({dq(key)}, {dq(value)})")
                else:
                    writer.write(f"query.push_v({dq(key)})")

            if binding.map_query_params:
                protected = ", ".join(dq(key) for key in binding.protected_params)
                if len(binding.protected_params) == 1:
                    protected += ","
                writer.write(f"protected_params = ({protected})")
            for member in binding.map_query_params:
                self._serialize_query_map(writer, member)

            for param in binding.named_query_params:
                self._serialize_query_param(writer, param)
            writer.write("return query.finish()")
        return True

    def _serialize_query_map(self, writer: CodeWriter, member: Schema) -> None:
        value_schema = self._expect_element(member)
        with self._if_set(writer, member) as field:
            key = writer.safe_name("key", self._reserved)
            value = writer.safe_name("value", self._reserved)
            with writer.block(f"for {key}, {value} in {field}.items():"):
                with writer.block(f"if {key} in protected_params:"):
                    writer.write("continue")
                with self._for_each(writer, value_schema, value) as (
                    element,
                    element_schema,
                ):
                    formatted = self._format(
                        writer,
                        member,
                        element_schema,
                        Binding.QUERY,
                        element,
                    )
                    writer.write(
                        f"query.push_kv(_query.fmt_string({key}), {formatted})"
                    )

    def _serialize_query_param(self, writer: CodeWriter, param: QueryParam) -> None:
        member = param.member
        key = dq(query_escape(param.location_name))
        with self._if_set(writer, member) as field:
            with self._for_each(writer, member, field) as (element, element_schema):
                formatted = self._format(
                    writer, member, element_schema, Binding.QUERY, element
                )
                writer.write(f"query.push_kv({key}, {formatted})")

    @contextmanager
    def _if_set(self, writer: CodeWriter, member: Schema) -> Iterator[str]:
        value = writer.safe_name("inner", self._reserved)
        writer.write(f"{value} = {self._input}.{python_name(member)}")
        if not is_optional(member):
            yield value
            return
        with writer.block(f"if {value} is not None:"):
            yield value

    @contextmanager
    def _for_each(
        self, writer: CodeWriter, schema: Schema, value: str
    ) -> Iterator[tuple[str, Schema]]:
        # Lists get one more level of iteration, everything else is yielded as-is.
        if kind_of(schema) is not ShapeKind.LIST:
            yield value, schema
            return
        element_schema = self._expect_element(schema)
        element = writer.safe_name("inner", self._reserved)
        with writer.block(f"for {element} in {value}:"):
            yield element, element_schema

    def _expect_element(self, schema: Schema) -> Schema:
        if (element := element_of(schema)) is None:
            raise ExpectationNotMetError(
                f"Expected the {kind_of(schema).name} {schema.id} to have an "
                "element member."
            )
        return element

    def _format(
        self,
        writer: CodeWriter,
        member: Schema,
        schema: Schema,
        location: Binding,
        value: str,
        greedy: bool = False,
    ) -> FormatExpression:
        formatted = format_value(
            kind_of(schema),
            location,
            value,
            field=python_name(member),
            greedy=greedy,
            timestamp_format=self._timestamp_format(member, schema, location),
        )
        self._use(writer, formatted)
        return formatted

    def _timestamp_format(
        self, member: Schema, schema: Schema, location: Binding
    ) -> str | None:
        if kind_of(schema) is not ShapeKind.TIMESTAMP:
            return None
        # A format on a collection's element member takes precedence over one on
        # the bound member.
        source = schema if timestamp_format(schema) is not None else member
        return determine_timestamp_format(
            source, location, self._settings.default_timestamp_format
        )

    def _use(self, writer: CodeWriter, formatted: FormatExpression) -> None:
        writer.add_import(
            self._settings.runtime_module, formatted.helper_module, formatted.alias
        )


def render_operation_binding(
    operation: Operation,
    *,
    settings: CodegenSettings | None = None,
    customizations: Sequence[Customization[RequestBindingSection]] = (),
    add_headers_fn: str | None = None,
) -> str:
    """Generates a module containing the request binding functions of an operation.

    :param operation: The operation to generate request binding code for.
    :param settings: Settings for the generation run.
    :param customizations: Customizations for the extension points in the
        generated ``update_http_request`` function.
    :param add_headers_fn: The name of the generated header binding function, if
        there is one.
    :returns: The generated Python source.
    """
    writer = CodeWriter()
    RequestBindingGenerator(
        operation,
        settings=settings,
        customizations=customizations,
        add_headers_fn=add_headers_fn,
    ).render(writer)
    return writer.to_string()
