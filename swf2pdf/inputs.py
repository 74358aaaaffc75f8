"""Enumerate input file paths from the command line and standard input."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from typing import IO

from swf2pdf.config import Config

_log = logging.getLogger("inputs")


def strip_line_terminator(line: str) -> str:
    """Remove exactly one trailing ``\\n``, ``\\r\\n`` or ``\\r`` from *line*."""
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith(("\n", "\r")):
        return line[:-1]
    return line


class InputEnumerator:
    """One-shot iterable over the paths to convert.

    Explicit paths from the command line come first, in argument order.
    When ``config.read_stdin`` is set, *stdin* is then read line by line
    until end of stream and each line (terminator stripped) is yielded
    as one path.  Empty lines are yielded unchanged; the renderer reports
    them as invalid.  A binary *stdin* is decoded per line with
    :func:`os.fsdecode`, so file names that are not valid in the locale
    encoding survive as surrogate escapes.

    :attr:`count` tracks how many paths have been yielded so far.
    """

    def __init__(self, config: Config, stdin: IO | None = None) -> None:
        self._config = config
        self._stdin = stdin
        self._consumed = False
        self.count = 0

    def __iter__(self) -> Iterator[str]:
        if self._consumed:
            raise RuntimeError("InputEnumerator can only be iterated once")
        self._consumed = True
        return self._generate()

    def _generate(self) -> Iterator[str]:
        for path in self._config.inputs:
            self.count += 1
            yield path

        if not self._config.read_stdin:
            return
        if self._stdin is None:
            raise ValueError("read_stdin is set but no stdin stream was given")

        _log.debug("Reading input paths from standard input")
        for line in self._stdin:
            if isinstance(line, bytes):
                line = os.fsdecode(line)
            self.count += 1
            yield strip_line_terminator(line)
