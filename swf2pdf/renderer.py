"""Append one PDF page per SWF input, applying the error policy on failure.

:class:`PageRenderer` owns the output :class:`pymupdf.Document` for the
whole run.  Use it as a context manager: the document is saved when the
block exits normally and discarded when it exits with an exception
(including :class:`~swf2pdf.errors.ConversionAborted` from the ``fail``
policy).  Either way it is closed exactly once.

Each input goes through the same linear sequence:

1. :func:`path_to_url` builds a ``file://`` URL from the resolved path.
2. A fresh player loads the URL and renders its first frame.
3. A page sized to the stage (1 px = 1 pt) is appended and drawn on.
4. The player is released.

A failure in step 1 or 2 is handed to :meth:`PageRenderer.handle_error`.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import pymupdf

from swf2pdf.config import ErrorMode
from swf2pdf.errors import ConversionAborted, InvalidUrlError, PlayerLoadError
from swf2pdf.player import SwfPlayer

_log = logging.getLogger("renderer")

_FILE_SCHEME = "file://"

_FALLBACK_PATH_MAX = 4096
"""Path length limit used when the platform does not report one."""

_DEFAULT_PAGE_SIZE = (595.0, 842.0)
"""PyMuPDF's default page size (A4, points), used before any page exists."""

REASON_INVALID_URL = "invalid URL"
REASON_LOAD_FAILED = "failed to load"


def _path_max() -> int:
    try:
        limit = os.pathconf("/", "PC_PATH_MAX")
    except (AttributeError, OSError, ValueError):
        return _FALLBACK_PATH_MAX
    return limit if limit > 0 else _FALLBACK_PATH_MAX


def path_to_url(path: str, max_length: int | None = None) -> str:
    """Resolve *path* to a canonical absolute ``file://`` URL.

    Args:
        path: Input path as given by the user (relative or absolute).
        max_length: Upper bound on the URL length.  Defaults to the
            platform path limit plus the length of the ``file://`` prefix.

    Raises:
        InvalidUrlError: *path* is empty, contains a NUL byte, or the
            resulting URL is longer than *max_length*.
    """
    if not path:
        raise InvalidUrlError("empty path")
    if "\0" in path:
        raise InvalidUrlError(f"path contains a NUL byte: {path!r}")

    if max_length is None:
        max_length = _path_max() + len(_FILE_SCHEME)

    resolved = os.path.realpath(path)
    url = Path(resolved).as_uri()
    if len(url) > max_length:
        raise InvalidUrlError(
            f"path too long to form a URL ({len(url)} > {max_length} chars)"
        )
    return url


class PageOutcome(Enum):
    """How a single input ended up in the output document."""

    RENDERED = "rendered"
    BLANK = "blank"
    SKIPPED = "skipped"


@dataclass
class RenderStats:
    """Per-run counters reported in the final summary."""

    rendered: int = 0
    blank: int = 0
    skipped: int = 0

    @property
    def attempts(self) -> int:
        return self.rendered + self.blank + self.skipped

    def record(self, outcome: PageOutcome) -> None:
        if outcome is PageOutcome.RENDERED:
            self.rendered += 1
        elif outcome is PageOutcome.BLANK:
            self.blank += 1
        else:
            self.skipped += 1


class PageRenderer:
    """Build the output PDF one page per input.

    Args:
        output: Path the finished PDF is saved to.
        error_mode: Policy applied when an input cannot be rendered.
        player_factory: Zero-argument callable returning a fresh
            :class:`~swf2pdf.player.SwfPlayer` for each input.
    """

    def __init__(
        self,
        output: Path,
        error_mode: ErrorMode,
        player_factory: Callable[[], SwfPlayer],
    ) -> None:
        self._output = output
        self._error_mode = error_mode
        self._player_factory = player_factory
        self._doc: pymupdf.Document | None = None
        self._page_size = _DEFAULT_PAGE_SIZE
        self.stats = RenderStats()

    # -- Surface lifecycle -----------------------------------------------------

    def __enter__(self) -> PageRenderer:
        self._doc = pymupdf.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if exc_type is None:
                self._save()
            else:
                _log.debug("Discarding partial output (%s)", exc_type.__name__)
        finally:
            self._close()

    @property
    def page_count(self) -> int:
        return self._require_doc().page_count

    def _require_doc(self) -> pymupdf.Document:
        if self._doc is None:
            raise RuntimeError("PageRenderer must be used as a context manager")
        return self._doc

    def _save(self) -> None:
        doc = self._require_doc()
        if doc.page_count == 0:
            if self._output.exists():
                self._output.unlink()
                _log.warning(
                    "No pages produced, removed stale %s", self._output,
                )
            else:
                _log.warning("No pages produced, %s not written", self._output)
            return
        doc.save(str(self._output))
        _log.info("Wrote %d page(s) to %s", doc.page_count, self._output)

    def _close(self) -> None:
        if self._doc is not None:
            self._doc.close()
            self._doc = None

    def _new_page(self, width: float, height: float) -> pymupdf.Page:
        page = self._require_doc().new_page(width=width, height=height)
        self._page_size = (width, height)
        return page

    # -- Per-input rendering ---------------------------------------------------

    def render_all(self, paths: Iterable[str]) -> RenderStats:
        """Render every path in order and return the accumulated stats."""
        for path in paths:
            self.render_page(path)
        return self.stats

    def render_page(self, path: str) -> PageOutcome:
        """Render one input as one page (or apply the error policy).

        Raises:
            ConversionAborted: The input failed and the mode is ``fail``.
        """
        _log.info("Rendering %s...", path)

        try:
            url = path_to_url(path)
        except InvalidUrlError as e:
            _log.debug("  %s", e)
            return self.handle_error(path, REASON_INVALID_URL)

        player = self._player_factory()
        try:
            try:
                player.load(url)
            except PlayerLoadError as e:
                _log.debug("  %s", e)
                return self.handle_error(path, REASON_LOAD_FAILED)

            width, height = player.default_size
            page = self._new_page(width, height)
            player.render(page)
        finally:
            player.close()

        _log.info("  ✓ %s (%dx%d pt)", path, width, height)
        self.stats.record(PageOutcome.RENDERED)
        return PageOutcome.RENDERED

    def handle_error(self, path: str, reason: str) -> PageOutcome:
        """Apply the configured error policy to a failed input."""
        if self._error_mode is ErrorMode.FAIL:
            _log.warning("  ✗ %s: %s — aborting", path, reason)
            raise ConversionAborted(path, reason)

        if self._error_mode is ErrorMode.BLANK:
            _log.warning("  ✗ %s: %s — inserting blank page", path, reason)
            self._new_page(*self._page_size)
            outcome = PageOutcome.BLANK
        else:
            _log.warning("  ✗ %s: %s — skipping", path, reason)
            outcome = PageOutcome.SKIPPED

        self.stats.record(outcome)
        return outcome
