#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import json
import keyword
import re
from collections.abc import Iterable

_ACRONYM_BOUNDARY_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY_RE = re.compile(r"([a-z0-9])([A-Z])")


def to_snake_case(name: str) -> str:
    """Converts a model identifier to snake_case.

    Runs of capitals are treated as a single word, so ``HTTPHeader`` becomes
    ``http_header`` and ``MaxKeys`` becomes ``max_keys``.

    :param name: The identifier to convert.
    :returns: The snake_case identifier.
    """
    name = _ACRONYM_BOUNDARY_RE.sub(r"\1_\2", name)
    name = _WORD_BOUNDARY_RE.sub(r"\1_\2", name)
    return name.replace("-", "_").lower()


def escape_reserved(name: str, reserved: Iterable[str] = ()) -> str:
    """Suffixes an identifier with ``_`` if it is a keyword or otherwise reserved.

    :param name: The identifier to check.
    :param reserved: Additional names that are unavailable in the current scope.
    """
    if keyword.iskeyword(name) or name in reserved:
        return name + "_"
    return name


def dq(value: str) -> str:
    """Renders a string as a double-quoted Python string literal."""
    return json.dumps(value)
