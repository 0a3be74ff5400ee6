"""
Layout engine shared by every writer.

Given a configuration and a module grid, ``compute_layout`` works out
the complete pixel geometry of a rendering: the module pixel size, where
the grid starts, the canvas size, and where the optional logo and label
go. Writers only translate a ``RenderPlan`` into their output format,
which keeps raster and vector output geometrically identical.

Geometry
--------
The target size is the side of the square block made of the quiet zone
and the grid. The grid gets an integer number of pixels per module,
and whatever is left over from the integer division is split evenly on
both sides. A label adds a band below the block; a logo is centered
over the grid and drawn on top of it.

All coordinates are integer pixels with the origin at the top-left
corner of the canvas.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, NamedTuple, Optional

from .config import QRConfig
from .enums import ErrorCorrectionLevel, LabelAlignment
from .errors import InvalidArgument
from .fonts import TextMetrics, measure as measure_text
from .grid import ModuleGrid

logger = logging.getLogger(__name__)


# Logo side as a fraction of the content size when no size is configured.
DEFAULT_LOGO_FRACTION = 0.25

MeasureFunc = Callable[[str, Optional[str], int], TextMetrics]


class Box(NamedTuple):
    """Axis-aligned rectangle in canvas pixels."""

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height


class LabelPlacement(NamedTuple):
    """Where the label text goes; ``baseline`` is an absolute y."""

    text: str
    box: Box
    baseline: int


@dataclass(frozen=True)
class RenderPlan:
    """
    Geometry of one rendering.

    Attributes
    ----------
    grid_side : int
        Number of modules per side.
    module_size : int
        Side of one module in pixels (at least 1).
    content_size : int
        Side of the module grid in pixels.
    origin : tuple of int
        Canvas (x, y) of the top-left module.
    canvas_width, canvas_height : int
        Full canvas size, label band included.
    logo : Box or None
        Square box reserved for the logo, centered over the grid.
    label : LabelPlacement or None
        Label text position.
    """

    grid_side: int
    module_size: int
    content_size: int
    origin: tuple[int, int]
    canvas_width: int
    canvas_height: int
    logo: Optional[Box] = None
    label: Optional[LabelPlacement] = None

    @property
    def grid_box(self) -> Box:
        x, y = self.origin
        return Box(x, y, self.content_size, self.content_size)

    def module_box(self, row: int, col: int) -> Box:
        x, y = self.origin
        m = self.module_size
        return Box(x + col * m, y + row * m, m, m)


def max_logo_fraction(level: ErrorCorrectionLevel) -> float:
    """
    Largest logo side allowed, as a fraction of the content size.

    The bound equals the recoverable-data fraction of the level, so it
    grows from LOW (0.07) through MEDIUM and QUARTILE to HIGH (0.30).
    """
    return ErrorCorrectionLevel(level).fraction


def logo_side(config: QRConfig, content_size: int) -> int:
    """Logo side in pixels after applying the error-correction clamp."""
    if config.logo_size is not None:
        requested = config.logo_size
    else:
        requested = max(1, math.floor(content_size * DEFAULT_LOGO_FRACTION))

    level = config.error_correction_level
    limit = max(1, math.floor(content_size * max_logo_fraction(level)))
    if requested > limit:
        logger.info(
            "Logo size %d px clamped to %d px for error correction level %s",
            requested,
            limit,
            level.value,
        )
        return limit
    return requested


def fit_box(box: Box, width: int, height: int) -> Box:
    """
    Fit an image of the given size inside `box`, keeping its aspect.

    The fitted rectangle is centered in `box` and is at least one pixel
    wide and high.
    """
    if width <= 0 or height <= 0:
        raise InvalidArgument(f"invalid image size {width}x{height}")
    scale = min(box.width / width, box.height / height)
    new_w = min(box.width, max(1, int(round(width * scale))))
    new_h = min(box.height, max(1, int(round(height * scale))))
    return Box(
        box.x + (box.width - new_w) // 2,
        box.y + (box.height - new_h) // 2,
        new_w,
        new_h,
    )


def compute_layout(
    config: QRConfig,
    grid: ModuleGrid,
    measure: MeasureFunc = measure_text,
) -> RenderPlan:
    """
    Compute the render plan for a configuration and a module grid.

    Parameters
    ----------
    config : QRConfig
        Presentation parameters. It is read, never modified.
    grid : ModuleGrid
        Module grid to lay out.
    measure : callable, optional
        Font-metrics provider ``measure(text, font_path, font_size)``
        returning a TextMetrics. Defaults to the Pillow-backed
        ``qrwriter.fonts.measure``.

    Returns
    -------
    RenderPlan
        Fresh, immutable geometry for this rendering.

    Raises
    ------
    InvalidArgument
        If the target size is not positive or the grid is empty.

    Notes
    -----
    When the target size leaves less than one pixel per module, the
    module size is kept at 1 and the canvas grows instead, so modules
    are never lost.
    """
    n = grid.side
    size = config.size
    quiet_zone = config.quiet_zone
    if size <= 0:
        raise InvalidArgument(f"size must be > 0; got {size}")
    if n <= 0:
        raise InvalidArgument(f"grid side must be > 0; got {n}")

    available = size - 2 * quiet_zone
    if available < n:
        module_size = 1
        content_size = n
        leftover = 0
        block = content_size + 2 * quiet_zone
    else:
        module_size = available // n
        content_size = module_size * n
        leftover = available - content_size
        block = size
    offset = quiet_zone + leftover // 2

    canvas_width = block
    canvas_height = block
    label = None
    metrics = None
    if config.has_label:
        metrics = measure(config.label, config.label_font_path, config.label_font_size)
        margin = config.label_margin
        canvas_width = max(block, metrics.width + margin.left + margin.right)
        canvas_height = block + metrics.height + margin.top + margin.bottom

    # A label wider than the block widens the canvas; keep the block centered.
    shift = (canvas_width - block) // 2
    origin = (shift + offset, offset)

    if metrics is not None:
        margin = config.label_margin
        alignment = config.label_alignment
        if alignment is LabelAlignment.LEFT:
            x = margin.left
        elif alignment is LabelAlignment.RIGHT:
            x = canvas_width - metrics.width - margin.right
        else:
            x = (canvas_width - metrics.width) // 2
        top = block + margin.top
        label = LabelPlacement(
            text=config.label,
            box=Box(x, top, metrics.width, metrics.height),
            baseline=top + metrics.baseline,
        )

    logo = None
    if config.has_logo:
        side = logo_side(config, content_size)
        logo = Box(
            origin[0] + (content_size - side) // 2,
            origin[1] + (content_size - side) // 2,
            side,
            side,
        )

    plan = RenderPlan(
        grid_side=n,
        module_size=module_size,
        content_size=content_size,
        origin=origin,
        canvas_width=canvas_width,
        canvas_height=canvas_height,
        logo=logo,
        label=label,
    )
    logger.debug("Computed %s", plan)
    return plan
