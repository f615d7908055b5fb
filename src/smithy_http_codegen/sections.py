#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""Named extension points in generated code.

A :py:class:`Section` marks a point in generated output and carries whatever
context a contributor needs there, such as the names of variables in scope. A
:py:class:`Customization` is given each section as it is reached and may
contribute a fragment of code for it. Generators declare sections, and the
configuration of the overall generation run decides which customizations are
active and in which order.

.. code-block:: python

    class SetRegion(Customization[OperationRuntimePluginSection]):
        def section(self, section):
            if not isinstance(section, AdditionalConfig):
                return None

            def write(writer: CodeWriter) -> None:
                writer.write(f'{section.config_bag_name}["region"] = "us-west-2"')

            return write
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import ClassVar

from .writer import CodeWriter, Writable

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class Section:
    """A named point in generated code where customizations may contribute."""

    name: ClassVar[str] = "Section"
    """The name of the section, used for logging."""


class Customization[S: Section](ABC):
    """A contributor of generated code at one or more sections.

    Customizations must not keep state between calls. Each call receives the
    section's context fresh and either returns a fragment or declines.
    """

    @property
    def name(self) -> str:
        """The name of the customization, used for logging."""
        return type(self).__name__

    @abstractmethod
    def section(self, section: S) -> Writable | None:
        """Produces the code to write at the given section.

        :param section: The section being written, including its context.
        :returns: A writable fragment, or None if the customization does not
            contribute to this section.
        """
        ...


def write_customizations[S: Section](
    writer: CodeWriter, customizations: Sequence[Customization[S]], section: S
) -> None:
    """Writes the contributions of each customization to a section, in order.

    Every customization is asked exactly once. Customizations that decline the
    section write nothing. Fragments are written in the order of the sequence and
    are never reordered or deduplicated.

    :param writer: The writer to write contributions into.
    :param customizations: The active customizations, in their configured order.
    :param section: The section being written.
    """
    for customization in customizations:
        writable = customization.section(section)
        if writable is None:
            continue
        _LOGGER.debug("Writing %s for section %s", customization.name, section.name)
        writable(writer)


def compose_customizations[S: Section](
    customizations: Sequence[Customization[S]], section: S
) -> Writable:
    """Creates a writable that writes the contributions to a section when invoked.

    This lets a generator hand an extension point to a template as a value. The
    customizations are consulted each time the writable is invoked, not when it is
    created.
    """

    def _write(writer: CodeWriter) -> None:
        write_customizations(writer, customizations, section)

    return _write
