"""Shared test fixtures and helpers for swf2pdf tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pymupdf
import pytest

from swf2pdf.errors import PlayerLoadError


def make_png(path: Path, width: int, height: int) -> Path:
    """Write a solid grey PNG of the given size and return its path."""
    pix = pymupdf.Pixmap(pymupdf.csRGB, pymupdf.IRect(0, 0, width, height), False)
    pix.clear_with(200)
    pix.save(str(path))
    return path


def page_sizes(pdf_path: Path) -> list[tuple[float, float]]:
    """Return ``(width, height)`` of every page in *pdf_path*."""
    doc = pymupdf.open(str(pdf_path))
    try:
        return [(page.rect.width, page.rect.height) for page in doc]
    finally:
        doc.close()


class FakePlayer:
    """In-memory stand-in for :class:`swf2pdf.player.ExporterPlayer`."""

    def __init__(self, factory: FakePlayerFactory) -> None:
        self._factory = factory
        self._size: tuple[int, int] | None = None

    def load(self, url: str) -> None:
        self._factory.loaded.append(url)
        name = url.rsplit("/", 1)[-1]
        if name in self._factory.fail_on:
            raise PlayerLoadError(f"cannot load {name}")
        self._size = self._factory.sizes.get(name, self._factory.default)

    @property
    def default_size(self) -> tuple[int, int]:
        assert self._size is not None
        return self._size

    def render(self, page: pymupdf.Page) -> None:
        page.draw_rect(page.rect, color=(0, 0, 0))
        self._factory.rendered += 1

    def close(self) -> None:
        self._factory.closed += 1


class FakePlayerFactory:
    """Callable producing :class:`FakePlayer` instances and recording calls.

    Args:
        fail_on: File names (URL basenames) whose load should fail.
        sizes: Per-file stage sizes; others get *default*.
        default: Stage size for files not listed in *sizes*.
    """

    def __init__(
        self,
        fail_on: set[str] | None = None,
        sizes: dict[str, tuple[int, int]] | None = None,
        default: tuple[int, int] = (320, 240),
    ) -> None:
        self.fail_on = fail_on or set()
        self.sizes = sizes or {}
        self.default = default
        self.created = 0
        self.closed = 0
        self.rendered = 0
        self.loaded: list[str] = []
        self.kwargs: list[dict] = []

    def __call__(self, **kwargs) -> FakePlayer:
        self.created += 1
        self.kwargs.append(kwargs)
        return FakePlayer(self)

    @property
    def loaded_names(self) -> list[str]:
        return [url.rsplit("/", 1)[-1] for url in self.loaded]


@pytest.fixture
def fake_players() -> FakePlayerFactory:
    return FakePlayerFactory()


@pytest.fixture(autouse=True)
def _reset_root_logger():
    """Drop handlers installed by ``main()`` so later tests start clean."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
