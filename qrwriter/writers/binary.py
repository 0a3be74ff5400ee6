"""Opaque binary payload writer."""

from __future__ import annotations

from .base import Writer


class BinaryWriter(Writer):
    """
    Emit the module matrix itself instead of a picture of it.

    This writer has no visual geometry: it ignores sizes, colors, logo
    and label, and declares so through empty ``features``. The payload
    is one line per module row, with '1' for dark and '0' for light
    modules.
    """

    key = "binary"
    extensions = ("bin", "txt")
    content_type = "application/octet-stream"
    features = frozenset()
    visual = False

    def render(self, grid, plan, config) -> bytes:
        rows = ("".join("1" if v else "0" for v in row) for row in grid.matrix)
        return "".join(row + "\n" for row in rows).encode("ascii")
