"""Exception types raised while converting SWF files.

Per-input failures (:class:`InvalidUrlError`, :class:`PlayerLoadError`)
are routed through the configured error policy.  :class:`ConversionAborted`
is raised by the ``fail`` policy and ends the whole run.
"""

from __future__ import annotations


class Swf2PdfError(Exception):
    """Base class for all swf2pdf errors."""


class InvalidUrlError(Swf2PdfError):
    """An input path cannot be turned into a ``file://`` URL."""


class PlayerLoadError(Swf2PdfError):
    """The SWF player failed to load or render a document."""


class ConversionAborted(Swf2PdfError):
    """Raised by the ``fail`` error policy to stop the run.

    Attributes:
        path: Input path that triggered the abort.
        reason: Short reason string (``"invalid URL"``, ``"failed to load"``).
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{reason}: {path}")
        self.path = path
        self.reason = reason
