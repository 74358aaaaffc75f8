"""Run configuration built once by the CLI and passed to every stage."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


DEFAULT_OUTPUT = Path("output.pdf")
"""Output path used when ``-o`` is not given."""

DEFAULT_EXPORTER = "exporter"
"""Name of the Ruffle frame exporter binary looked up on ``PATH``."""

EXPORTER_ENV_VAR = "SWF2PDF_EXPORTER"
"""Environment variable overriding :data:`DEFAULT_EXPORTER`."""

DEFAULT_TIMEOUT = 60.0
"""Seconds allowed for one player invocation."""


class ErrorMode(Enum):
    """What to do when an input cannot be loaded or rendered."""

    FAIL = "fail"
    """Stop the whole run with a non-zero exit status."""

    SKIP = "skip"
    """Leave the input out of the output document."""

    BLANK = "blank"
    """Emit an empty page in place of the input."""

    @classmethod
    def from_string(cls, value: str) -> ErrorMode | None:
        """Pick a mode by the first letter of *value*, case-insensitively.

        Returns ``None`` when the first letter matches no mode (including
        the empty string).  Callers keep their previous mode in that case.
        """
        if not value:
            return None
        initial = value[0].lower()
        for mode in cls:
            if mode.value[0] == initial:
                return mode
        return None


@dataclass(frozen=True)
class Config:
    """Immutable settings for one conversion run."""

    output: Path = DEFAULT_OUTPUT
    error_mode: ErrorMode = ErrorMode.BLANK
    verbose: bool = False
    read_stdin: bool = False
    inputs: tuple[str, ...] = ()
    exporter: str = DEFAULT_EXPORTER
    timeout: float = DEFAULT_TIMEOUT

    @property
    def has_input_source(self) -> bool:
        """True when there is at least one place to read inputs from."""
        return bool(self.inputs) or self.read_stdin
