"""
Raster helpers shared by the writers.

``module_mask`` scales the module grid into pixel space with a
Kronecker product and places it on the canvas, and ``load_logo`` reads
and resizes the logo image the same way for every writer so that raster
and vector output embed identical logo pixels.
"""

from __future__ import annotations

from io import BytesIO

import numpy as np
from PIL import Image

from .config import Color
from .grid import ModuleGrid
from .layout import Box, RenderPlan, fit_box


def module_mask(grid: ModuleGrid, plan: RenderPlan) -> np.ndarray:
    """
    Construct the full-canvas boolean mask of dark module pixels.

    Returns
    -------
    numpy.ndarray
        Boolean array of shape (canvas_height, canvas_width) where True
        marks pixels covered by a dark module.
    """
    box = plan.module_size
    # Scale module grid with Kronecker product
    scaled = np.kron(grid.matrix, np.ones((box, box), dtype=bool))

    full = np.zeros((plan.canvas_height, plan.canvas_width), dtype=bool)
    x0, y0 = plan.origin
    full[y0:y0 + plan.content_size, x0:x0 + plan.content_size] = scaled
    return full


def render_modules(
    grid: ModuleGrid,
    plan: RenderPlan,
    fg: Color,
    bg: Color,
) -> np.ndarray:
    """Render the canvas background and the dark modules as RGB uint8."""
    img = np.full((plan.canvas_height, plan.canvas_width, 3), bg, dtype=np.uint8)
    img[module_mask(grid, plan)] = fg
    return img


def load_logo(path: str, box: Box) -> tuple[Image.Image, Box]:
    """
    Load a logo and resize it to fit `box`.

    Parameters
    ----------
    path : str
        Logo image path. Any mode Pillow can open is accepted; the
        image is converted to RGBA so its alpha channel, if any, can be
        used for compositing.
    box : Box
        Square box reserved for the logo by the layout engine.

    Returns
    -------
    tuple of (PIL.Image.Image, Box)
        The resized RGBA logo and the box it occupies, centered in
        `box` with the logo's aspect ratio preserved.
    """
    with Image.open(path) as src:
        logo = src.convert("RGBA")
    fitted = fit_box(box, *logo.size)
    resized = logo.resize((fitted.width, fitted.height), Image.LANCZOS)
    return resized, fitted


def flatten(image: Image.Image, bg: Color) -> Image.Image:
    """Composite an RGBA image over a solid background, returning RGB."""
    base = Image.new("RGBA", image.size, tuple(bg) + (255,))
    base.alpha_composite(image)
    return base.convert("RGB")


def png_bytes(image: Image.Image) -> bytes:
    buf = BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def row_runs(row: np.ndarray):
    """Yield (start, length) of consecutive dark modules in a row."""
    col = 0
    n = len(row)
    while col < n:
        if row[col]:
            start = col
            while col < n and row[col]:
                col += 1
            yield start, col - start
        else:
            col += 1
