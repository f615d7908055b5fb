#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from smithy_core.types import TimestampFormat

from .exceptions import SmithyCodegenError


@dataclass(kw_only=True, frozen=True)
class CodegenSettings:
    """Settings for a generation run."""

    runtime_module: str = "smithy_http_codegen.runtime"
    """The module generated code imports its runtime helpers from."""

    default_timestamp_format: TimestampFormat = TimestampFormat.EPOCH_SECONDS
    """The protocol's default timestamp format.

    Labels, query parameters, and headers have their own defaults, so this only
    applies to other binding locations.
    """

    input_name: str = "input"
    """The name of the operation input parameter in generated functions."""

    builder_name: str = "builder"
    """The name of the request builder parameter in generated functions."""

    @classmethod
    def from_dict(cls, settings: Mapping[str, Any]) -> "CodegenSettings":
        """Creates settings from a plugin settings mapping.

        Keys use the camelCase names found in ``smithy-build.json``. Unknown keys
        are ignored so the same mapping can be shared with other plugins.

        :param settings: The plugin settings.
        :raises SmithyCodegenError: If a value is invalid.
        """
        kwargs: dict[str, Any] = {}
        if (runtime_module := settings.get("runtimeModule")) is not None:
            kwargs["runtime_module"] = str(runtime_module)
        if (timestamp_format := settings.get("defaultTimestampFormat")) is not None:
            try:
                kwargs["default_timestamp_format"] = TimestampFormat(timestamp_format)
            except ValueError as e:
                raise SmithyCodegenError(
                    f"Unsupported default timestamp format: {timestamp_format!r}"
                ) from e
        if (input_name := settings.get("inputName")) is not None:
            kwargs["input_name"] = str(input_name)
        if (builder_name := settings.get("builderName")) is not None:
            kwargs["builder_name"] = str(builder_name)
        return cls(**kwargs)
