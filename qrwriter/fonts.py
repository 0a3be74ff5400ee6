"""Label font loading and text metrics backed by Pillow."""

from __future__ import annotations

import math
from typing import NamedTuple, Optional

from PIL import ImageFont


class TextMetrics(NamedTuple):
    """
    Size of a rendered line of text, in pixels.

    ``baseline`` is measured from the top of the text box, so a line
    drawn with its top at ``y`` sits on ``y + baseline``.
    """

    width: int
    height: int
    baseline: int


def load_font(font_path: Optional[str], font_size: int):
    """
    Load a scalable font.

    Parameters
    ----------
    font_path : str or None
        Path of a TrueType/OpenType font. None selects Pillow's bundled
        default font.
    font_size : int
        Font size in pixels.
    """
    if font_path is None:
        return ImageFont.load_default(size=font_size)
    return ImageFont.truetype(font_path, font_size)


def measure(text: str, font_path: Optional[str], font_size: int) -> TextMetrics:
    """Measure a single line of text with the given font."""
    font = load_font(font_path, font_size)
    ascent, descent = font.getmetrics()
    width = int(math.ceil(font.getlength(text)))
    return TextMetrics(width=width, height=ascent + descent, baseline=ascent)


def font_family(font_path: Optional[str], font_size: int) -> str:
    """Family name to reference the font from vector formats."""
    font = load_font(font_path, font_size)
    getname = getattr(font, "getname", None)
    if getname is None:
        return "sans-serif"
    return getname()[0] or "sans-serif"
