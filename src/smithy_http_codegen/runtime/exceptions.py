#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass
from enum import Enum


class BuildErrorKind(Enum):
    """The reasons a request could not be built from an input."""

    MISSING_FIELD = "missing_field"
    """A required member was unset, or its value was empty where that isn't allowed."""

    SERIALIZATION_FAILURE = "serialization_failure"
    """A member's value could not be rendered in the format its binding requires."""


@dataclass(kw_only=True)
class BuildError(Exception):
    """Raised by generated code when an input cannot be bound to an HTTP request.

    The first failure encountered ends request construction, so no partially built
    request is ever returned.
    """

    kind: BuildErrorKind
    """The reason the request could not be built."""

    field: str
    """The name of the input member that caused the failure."""

    message: str = ""
    """A human-readable description of the cause."""

    def __post_init__(self):
        super().__init__(f"{self.field}: {self.message}")

    @classmethod
    def missing_field(cls, field: str, message: str) -> "BuildError":
        """Creates an error for an unset or empty member."""
        return cls(kind=BuildErrorKind.MISSING_FIELD, field=field, message=message)

    @classmethod
    def serialization_failure(cls, field: str, message: str) -> "BuildError":
        """Creates an error for a value that could not be rendered."""
        return cls(
            kind=BuildErrorKind.SERIALIZATION_FAILURE, field=field, message=message
        )
