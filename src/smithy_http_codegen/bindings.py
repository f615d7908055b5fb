#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import logging
import re
from dataclasses import dataclass
from enum import Enum

from smithy_core.schemas import Schema
from smithy_core.traits import HTTPQueryTrait, HTTPTrait
from smithy_core.types import PathPattern, TimestampFormat
from smithy_http.bindings import Binding, RequestBindingMatcher

from .exceptions import ModelError
from .shapes import Operation, ShapeKind, kind_of, timestamp_format

__all__ = [
    "LabelBinding",
    "LabelSegment",
    "LiteralSegment",
    "Multiplicity",
    "OperationBinding",
    "QueryParam",
    "UriPattern",
    "determine_timestamp_format",
]

_LOGGER = logging.getLogger(__name__)

_LABEL_RE = re.compile(r"\{(\w+)\+?\}")


@dataclass(frozen=True)
class LiteralSegment:
    """A fixed piece of the URI path."""

    text: str


@dataclass(frozen=True)
class LabelSegment:
    """A path segment that is substituted with the value of an input member."""

    member_name: str
    """The name of the member the label is bound to."""

    is_greedy: bool = False
    """Whether the label may contain path separators."""


type UriSegment = LiteralSegment | LabelSegment


@dataclass(frozen=True)
class UriPattern:
    """The path segments and literal query parameters of an ``@http`` trait URI.

    The path is split on ``/`` into segments, each of which is either entirely
    literal or entirely a label. Normal labels forbid path separators, greedy labels
    (``{Key+}``) allow them. At most one greedy label may exist, and it must be the
    last label in the pattern.
    """

    segments: tuple[UriSegment, ...]
    """The path segments, not including the leading path separator."""

    query_literals: tuple[tuple[str, str], ...] = ()
    """Query parameters fixed by the pattern, in declared order.

    A key without a value, such as ``flag`` in ``/foo?flag``, has the value ``""``.
    """

    @classmethod
    def from_trait(cls, http: HTTPTrait) -> "UriPattern":
        """Decomposes the URI of an ``@http`` trait.

        :raises ModelError: If the URI breaks one of the pattern's constraints.
        """
        return cls.parse(http.path, http.query)

    @classmethod
    def parse(cls, path: PathPattern, query: str | None = None) -> "UriPattern":
        """Decomposes a path pattern and the literal query string that follows it.

        :param path: The path, for example ``/{Bucket}/{Key+}``.
        :param query: The literal query string without its leading ``?``, for
            example ``x-id=GetObject``.
        :raises ModelError: If the URI breaks one of the pattern's constraints.
        """
        uri = path.pattern if query is None else f"{path.pattern}?{query}"
        if not path.pattern.startswith("/"):
            raise ModelError(f"URI pattern must start with '/': {uri!r}")

        segments: list[UriSegment] = []
        seen: set[str] = set()
        for raw in path.pattern[1:].split("/"):
            if (match := _LABEL_RE.fullmatch(raw)) is not None:
                name = match.group(1)
                if name in seen:
                    raise ModelError(f"Duplicate label {name!r} in URI {uri!r}")
                seen.add(name)
                segments.append(
                    LabelSegment(name, is_greedy=name in path.greedy_labels)
                )
            elif "{" in raw or "}" in raw:
                raise ModelError(
                    f"Labels must span an entire path segment, found {raw!r} "
                    f"in URI {uri!r}"
                )
            else:
                segments.append(LiteralSegment(raw))

        labels = [s for s in segments if isinstance(s, LabelSegment)]
        greedy = [i for i, label in enumerate(labels) if label.is_greedy]
        if len(greedy) > 1:
            raise ModelError(f"At most one greedy label is allowed in URI {uri!r}")
        if greedy and greedy[0] != len(labels) - 1:
            raise ModelError(f"The greedy label must be the last label in {uri!r}")

        query_literals: list[tuple[str, str]] = []
        if query:
            if "{" in query or "}" in query:
                raise ModelError(f"Labels are not allowed in the query of {uri!r}")
            for part in query.split("&"):
                if not part:
                    continue
                key, _, value = part.partition("=")
                query_literals.append((key, value))

        return cls(segments=tuple(segments), query_literals=tuple(query_literals))

    @property
    def labels(self) -> tuple[LabelSegment, ...]:
        """The label segments, in pattern order."""
        return tuple(s for s in self.segments if isinstance(s, LabelSegment))

    @property
    def greedy_label(self) -> LabelSegment | None:
        """The greedy label, if the pattern has one."""
        for label in self.labels:
            if label.is_greedy:
                return label
        return None


class Multiplicity(Enum):
    """Whether a query parameter is written once or once per list element."""

    SCALAR = 0
    LIST = 1


@dataclass(frozen=True)
class QueryParam:
    """A member bound to a single, named query parameter."""

    location_name: str
    """The query key."""

    member: Schema
    """The member providing the value."""

    @property
    def multiplicity(self) -> Multiplicity:
        if kind_of(self.member) is ShapeKind.LIST:
            return Multiplicity.LIST
        return Multiplicity.SCALAR


@dataclass(frozen=True)
class LabelBinding:
    """A URI label paired with the member it is bound to."""

    segment: LabelSegment
    member: Schema

    @property
    def is_greedy(self) -> bool:
        return self.segment.is_greedy


@dataclass(frozen=True)
class OperationBinding:
    """The resolved HTTP request binding of one operation.

    This is derived once per operation from the immutable model and is never
    modified afterwards.
    """

    method: str
    """The HTTP method."""

    pattern: UriPattern
    """The decomposed URI pattern."""

    labels: tuple[LabelBinding, ...]
    """The URI labels in pattern order, with their members."""

    map_query_params: tuple[Schema, ...]
    """Members bound with ``@httpQueryParams``, in declared order."""

    named_query_params: tuple[QueryParam, ...]
    """Members bound with ``@httpQuery``, in declared order."""

    header_bindings: tuple[Schema, ...]
    """Members bound to headers. These are handled outside of this package."""

    @classmethod
    def from_operation(cls, operation: Operation) -> "OperationBinding":
        """Extracts the request bindings of an operation.

        Members are matched to binding locations by their HTTP binding traits.

        :param operation: The operation to examine.
        :raises ModelError: If the labels of the URI pattern don't line up with the
            label-bound members of the input.
        """
        http = operation.http
        pattern = UriPattern.from_trait(http)
        matcher = RequestBindingMatcher(operation.input_schema)

        labels: list[LabelBinding] = []
        for segment in pattern.labels:
            member = operation.input_schema.members.get(segment.member_name)
            if member is None or matcher.match(member) is not Binding.LABEL:
                raise ModelError(
                    f"Label {segment.member_name!r} of {operation.name} is not "
                    f"bound to an httpLabel member of {operation.input_name}."
                )
            labels.append(LabelBinding(segment, member))

        bound_labels = {label.segment.member_name for label in labels}
        map_params: list[Schema] = []
        named_params: list[QueryParam] = []
        headers: list[Schema] = []
        for member in operation.members:
            name = member.expect_member_name()
            match matcher.match(member):
                case Binding.LABEL:
                    if name not in bound_labels:
                        raise ModelError(
                            f"Member {name!r} of {operation.input_name} is bound to "
                            f"a label missing from {http.path.pattern!r}."
                        )
                case Binding.QUERY:
                    key = member.expect_trait(HTTPQueryTrait).document_value
                    named_params.append(QueryParam(str(key), member))
                case Binding.QUERY_PARAMS:
                    if kind_of(member) is not ShapeKind.MAP:
                        raise ModelError(
                            f"Member {name!r} of {operation.input_name} is bound "
                            f"to the query string but does not target a map."
                        )
                    map_params.append(member)
                case Binding.HEADER | Binding.PREFIX_HEADERS:
                    headers.append(member)
                case _:
                    pass

        binding = cls(
            method=http.method,
            pattern=pattern,
            labels=tuple(labels),
            map_query_params=tuple(map_params),
            named_query_params=tuple(named_params),
            header_bindings=tuple(headers),
        )
        _LOGGER.debug(
            "Extracted request bindings for %s: %s labels, %s literal query "
            "params, %s query param maps, %s named query params",
            operation.name,
            len(binding.labels),
            len(binding.literal_query_params),
            len(binding.map_query_params),
            len(binding.named_query_params),
        )
        return binding

    @property
    def literal_query_params(self) -> tuple[tuple[str, str], ...]:
        """Query parameters fixed by the URI pattern, in declared order."""
        return self.pattern.query_literals

    @property
    def protected_params(self) -> tuple[str, ...]:
        """Query keys that map-bound members are not allowed to write.

        This is the union of literal keys and named query parameter keys, so that
        data from a map can't override explicitly declared parameters.
        """
        keys = [key for key, _ in self.literal_query_params]
        keys.extend(param.location_name for param in self.named_query_params)
        return tuple(dict.fromkeys(keys))

    @property
    def has_query(self) -> bool:
        """Whether the operation contributes anything to the query string."""
        return bool(
            self.literal_query_params
            or self.map_query_params
            or self.named_query_params
        )


def determine_timestamp_format(
    member: Schema,
    location: Binding,
    default_format: TimestampFormat,
) -> str:
    """Determines the timestamp format to use for a member at a binding location.

    An explicit ``@timestampFormat`` on the member always wins. Labels and query
    parameters otherwise use ``date-time`` and headers use ``http-date``. Anywhere
    else the protocol's default is used.

    The returned format is not validated here. An unsupported format fails when the
    generated code tries to render a value with it.

    :param member: The timestamp member, or the element member of a collection.
    :param location: Where the member is bound.
    :param default_format: The protocol's default timestamp format.
    """
    if (explicit := timestamp_format(member)) is not None:
        return explicit
    match location:
        case Binding.LABEL | Binding.QUERY:
            return TimestampFormat.DATE_TIME.value
        case Binding.HEADER | Binding.PREFIX_HEADERS:
            return TimestampFormat.HTTP_DATE.value
        case _:
            return default_format.value
