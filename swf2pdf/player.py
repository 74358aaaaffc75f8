"""SWF player collaborator: load a document and render its first frame.

The actual Flash runtime is external.  :class:`ExporterPlayer` drives the
Ruffle ``exporter`` command-line tool, which loads a SWF, advances it to
the first frame and writes that frame as a PNG at the movie's native
stage size.  The PNG is then placed onto a PyMuPDF page.

The player's own console output is captured, never inherited, so only
this program's log lines reach the user.  The last line of the player's
stderr is included in :class:`~swf2pdf.errors.PlayerLoadError` messages.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Protocol, runtime_checkable
from urllib.parse import unquote_to_bytes, urlparse

import pymupdf

from swf2pdf.config import DEFAULT_EXPORTER, DEFAULT_TIMEOUT
from swf2pdf.errors import PlayerLoadError

_log = logging.getLogger("player")

_FRAME_FILENAME = "frame.png"
"""Name of the rendered frame inside the player's temporary directory."""


@runtime_checkable
class SwfPlayer(Protocol):
    """Protocol for a single-use SWF player.

    One instance handles exactly one document: :meth:`load` it, read
    :attr:`default_size`, :meth:`render` onto a page, then :meth:`close`.
    """

    def load(self, url: str) -> None:
        """Load the document at *url* and prepare its first frame.

        Raises:
            PlayerLoadError: The document is missing, unreadable or malformed.
        """
        ...

    @property
    def default_size(self) -> tuple[int, int]:
        """Stage ``(width, height)`` in pixels (one pixel = one PDF point)."""
        ...

    def render(self, page: pymupdf.Page) -> None:
        """Draw the current frame onto *page*."""
        ...

    def close(self) -> None:
        """Release every resource held by this player."""
        ...


def url_to_path(url: str) -> str:
    """Convert a ``file://`` URL back to a local filesystem path."""
    parsed = urlparse(url)
    if parsed.scheme != "file":
        raise PlayerLoadError(f"Unsupported URL scheme: {url}")
    return os.fsdecode(unquote_to_bytes(parsed.path))


def _last_line(text: str) -> str:
    lines = [ln for ln in text.strip().splitlines() if ln.strip()]
    return lines[-1] if lines else ""


class ExporterPlayer:
    """Render a SWF's first frame with the Ruffle ``exporter`` binary.

    Args:
        exporter: Executable name or path of the exporter.
        timeout: Seconds allowed for the exporter to finish.
    """

    def __init__(
        self,
        exporter: str = DEFAULT_EXPORTER,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._exporter = exporter
        self._timeout = timeout
        self._workdir: Path | None = None
        self._pixmap: pymupdf.Pixmap | None = None

    def __enter__(self) -> ExporterPlayer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _command(self, swf_path: str, frame_path: Path) -> list[str]:
        return [
            self._exporter,
            "--silent",
            "--frames", "1",
            swf_path,
            str(frame_path),
        ]

    def load(self, url: str) -> None:
        if self._pixmap is not None:
            raise RuntimeError("ExporterPlayer instances are single-use")

        swf_path = url_to_path(url)
        if not Path(swf_path).is_file():
            raise PlayerLoadError(f"Not a readable file: {swf_path}")

        self._workdir = Path(tempfile.mkdtemp(prefix="swf2pdf-"))
        frame_path = self._workdir / _FRAME_FILENAME
        cmd = self._command(swf_path, frame_path)
        _log.debug("    Running: %s", " ".join(cmd))

        try:
            proc = subprocess.run(
                cmd,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self._timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise PlayerLoadError(
                f"SWF exporter not found: {self._exporter}"
            ) from e
        except subprocess.TimeoutExpired as e:
            raise PlayerLoadError(
                f"SWF exporter timed out after {self._timeout:g}s"
            ) from e

        if proc.returncode != 0:
            detail = _last_line(proc.stderr) or f"exit status {proc.returncode}"
            raise PlayerLoadError(f"SWF exporter failed: {detail}")

        if not frame_path.is_file():
            raise PlayerLoadError("SWF exporter produced no frame image")

        try:
            self._pixmap = pymupdf.Pixmap(str(frame_path))
        except Exception as e:
            raise PlayerLoadError(f"Unreadable frame image: {e}") from e

        _log.debug(
            "    Frame rendered: %dx%d px", self._pixmap.width, self._pixmap.height,
        )

    @property
    def default_size(self) -> tuple[int, int]:
        if self._pixmap is None:
            raise RuntimeError("load() must succeed before default_size")
        return self._pixmap.width, self._pixmap.height

    def render(self, page: pymupdf.Page) -> None:
        if self._pixmap is None:
            raise RuntimeError("load() must succeed before render()")
        page.insert_image(page.rect, pixmap=self._pixmap)

    def close(self) -> None:
        self._pixmap = None
        if self._workdir is not None:
            shutil.rmtree(self._workdir, ignore_errors=True)
            self._workdir = None
