#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from collections.abc import Callable, Collection, Iterator
from contextlib import contextmanager
from textwrap import dedent


class CodeWriter:
    """An output buffer for generated Python source.

    The writer tracks indentation, the imports that generated code needs, and a
    counter used to produce unique local variable names. A writer is owned by a
    single generation pass and is passed explicitly to everything that writes to
    it. Identical sequences of calls always produce identical text.
    """

    def __init__(self, indent: str = "    ") -> None:
        self._lines: list[str] = []
        self._indent = indent
        self._level = 0
        self._imports: set[tuple[str, str, str | None]] = set()
        self._names: dict[str, int] = {}

    def write(self, code: str = "") -> None:
        """Writes one or more lines at the current indentation.

        Multi-line text is dedented first, so triple-quoted templates can be
        indented to match the surrounding Python code.
        """
        if "\n" not in code:
            self._write_line(code)
            return
        for line in dedent(code).strip("\n").split("\n"):
            self._write_line(line)

    def _write_line(self, line: str) -> None:
        if line.strip():
            self._lines.append(self._indent * self._level + line)
        else:
            self._lines.append("")

    @contextmanager
    def indent(self) -> Iterator[None]:
        """Increases the indentation level for the duration of the context."""
        self._level += 1
        try:
            yield
        finally:
            self._level -= 1

    @contextmanager
    def block(self, header: str) -> Iterator[None]:
        """Writes a block header, such as ``def`` or ``if``, and indents its body."""
        self.write(header)
        with self.indent():
            yield

    def add_import(self, module: str, name: str, alias: str | None = None) -> None:
        """Records an import needed by the generated code."""
        self._imports.add((module, name, alias))

    def safe_name(self, prefix: str, reserved: Collection[str] = ()) -> str:
        """Returns a local variable name that is unique within this writer.

        :param prefix: The start of the name. A counter is appended to it.
        :param reserved: Names that are already in use and must not be returned.
        """
        count = self._names.get(prefix, 0)
        while True:
            count += 1
            name = f"{prefix}_{count}"
            if name not in reserved:
                break
        self._names[prefix] = count
        return name

    def to_string(self) -> str:
        """Renders the imports followed by the body."""
        imports = [
            f"from {module} import {name}" + (f" as {alias}" if alias else "")
            for module, name, alias in sorted(
                self._imports, key=lambda i: (i[0], i[1], i[2] or "")
            )
        ]
        body = "\n".join(self._lines).strip("\n")
        if not imports:
            return body + "\n"
        return "\n".join(imports) + "\n\n\n" + body + "\n"

    def __str__(self) -> str:
        return self.to_string()


type Writable = Callable[[CodeWriter], None]
"""A fragment of generated code that is written when invoked with a writer."""
