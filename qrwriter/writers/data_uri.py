"""Data URI writer wrapping another writer's output."""

from __future__ import annotations

import base64
from typing import Optional

from .base import Writer
from .png import PngWriter


class DataUriWriter(Writer):
    """
    Wrap the bytes of another writer in a base64 ``data:`` URI.

    Parameters
    ----------
    inner : Writer, optional
        Writer whose output is embedded. The default is a PngWriter.
    """

    key = "data_uri"
    extensions = ()
    content_type = "text/plain"

    def __init__(self, inner: Optional[Writer] = None) -> None:
        self.inner = inner if inner is not None else PngWriter()

    @property
    def features(self):
        return self.inner.features

    @property
    def visual(self):
        return self.inner.visual

    @property
    def raster_format(self):
        return self.inner.raster_format

    def wrap(self, payload: bytes) -> bytes:
        encoded = base64.b64encode(payload).decode("ascii")
        return f"data:{self.inner.content_type};base64,{encoded}".encode("ascii")

    def render(self, grid, plan, config) -> bytes:
        return self.wrap(self.inner.render(grid, plan, config))
