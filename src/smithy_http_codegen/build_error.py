#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from .settings import CodegenSettings
from .utils import dq
from .writer import CodeWriter


class OperationBuildError:
    """Renders the errors raised by generated request binding code.

    Every failure path in generated code constructs its error through this class,
    so they all raise the same runtime ``BuildError`` type.
    """

    def __init__(self, settings: CodegenSettings) -> None:
        self._module = f"{settings.runtime_module}.exceptions"

    def missing_field(self, writer: CodeWriter, field: str, message: str) -> str:
        """Renders an expression creating an error for an unset or empty member.

        :param writer: The writer the expression will be written to. The import
            the expression needs is added to it.
        :param field: The name of the member.
        :param message: A human-readable description of the cause.
        """
        writer.add_import(self._module, "BuildError", "_BuildError")
        return f"_BuildError.missing_field({dq(field)}, {dq(message)})"
