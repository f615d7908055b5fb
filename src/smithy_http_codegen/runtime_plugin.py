#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import ClassVar

from .sections import Customization, Section, compose_customizations
from .shapes import Operation
from .utils import dq
from .writer import CodeWriter

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class OperationRuntimePluginSection(Section):
    """Extension points in generated operation runtime plugins."""

    name: ClassVar[str] = "OperationRuntimePluginSection"


@dataclass(frozen=True, kw_only=True)
class AdditionalConfig(OperationRuntimePluginSection):
    """Hook for adding additional things to config inside operation runtime plugins."""

    name: ClassVar[str] = "AdditionalConfig"

    config_bag_name: str
    """The name of the config variable in scope."""

    operation: Operation


type OperationRuntimePluginCustomization = Customization[OperationRuntimePluginSection]


class OperationRuntimePluginGenerator:
    """Generates operation-level runtime plugins.

    A runtime plugin is a function that takes the config of a single operation
    invocation and sets the operation-specific values on it:

    .. code-block:: python

        def _get_object_runtime_plugin(config: TypedProperties) -> None:
            config["operation_name"] = "GetObject"
            config["request_serializer"] = _get_object_update_http_request
    """

    def render(
        self,
        writer: CodeWriter,
        operation: Operation,
        request_serializer: str,
        customizations: Sequence[OperationRuntimePluginCustomization] = (),
    ) -> None:
        """Writes the runtime plugin of an operation.

        :param writer: The writer to write to.
        :param operation: The operation to write a plugin for.
        :param request_serializer: The name of the generated function that applies
            the operation input to a request builder.
        :param customizations: Customizations that contribute additional config.
        """
        _LOGGER.debug("Generating runtime plugin for %s", operation.name)
        config = "config"
        additional_config = compose_customizations(
            customizations,
            AdditionalConfig(config_bag_name=config, operation=operation),
        )

        writer.add_import("smithy_core.types", "TypedProperties")
        writer.write("")
        writer.write("")
        with writer.block(
            f"def _{operation.python_name}_runtime_plugin"
            f"({config}: TypedProperties) -> None:"
        ):
            writer.write(f'{config}["operation_name"] = {dq(operation.name)}')
            writer.write(f'{config}["request_serializer"] = {request_serializer}')
            additional_config(writer)
