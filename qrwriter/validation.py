"""
Result validation: decode a rendered raster and compare it with its source.

This is a circuit breaker against renderings, typically logo overlays,
that destroy modules the symbol cannot recover. It is not a general
purpose scanner.
"""

from __future__ import annotations

import logging
from typing import Callable

import numpy as np

from .errors import ValidationError
from .grid import ModuleGrid

logger = logging.getLogger(__name__)

DecodeFunc = Callable[[bytes, str], ModuleGrid]


def decode_with_cv2(image_bytes: bytes, fmt: str) -> ModuleGrid:
    """
    Decode the module grid of a raster image using OpenCV.

    Parameters
    ----------
    image_bytes : bytes
        Encoded image (any format OpenCV can read).
    fmt : str
        Format name of `image_bytes`, used in error messages.

    Returns
    -------
    ModuleGrid
        Rectified and binarized module grid found by OpenCV's
        QRCodeDetector, one cell per module.

    Raises
    ------
    RuntimeError
        If OpenCV (cv2) is not installed.
    ValidationError
        If the image cannot be read or contains no decodable symbol.
    """
    try:
        import cv2
    except ImportError as exc:
        raise RuntimeError(
            "decode_with_cv2 requires OpenCV (cv2) to be installed."
        ) from exc

    buf = np.frombuffer(image_bytes, dtype=np.uint8)
    bgr = cv2.imdecode(buf, cv2.IMREAD_COLOR)
    if bgr is None:
        raise ValidationError(f"cannot read rendered {fmt} image")

    detector = cv2.QRCodeDetector()
    data, points, straight = detector.detectAndDecode(bgr)
    if points is None or straight is None or not data:
        raise ValidationError(f"no QR symbol found in rendered {fmt} image")

    # Straight code: one uint8 cell per module. The top-left finder corner
    # is always dark, which fixes the polarity.
    cells = np.asarray(straight)
    if cells.ndim != 2 or cells.size == 0:
        raise ValidationError(f"no QR symbol found in rendered {fmt} image")
    dark = cells < 128 if cells[0, 0] < 128 else cells >= 128
    return ModuleGrid(dark)


class ResultValidator:
    """
    Compare a rendered raster with the grid it was rendered from.

    Parameters
    ----------
    decoder : callable, optional
        ``decoder(image_bytes, fmt) -> ModuleGrid``. The default uses
        OpenCV.
    """

    def __init__(self, decoder: DecodeFunc = decode_with_cv2) -> None:
        self.decoder = decoder

    def validate(self, image_bytes: bytes, fmt: str, grid: ModuleGrid) -> None:
        """
        Raise ValidationError unless the image decodes back to `grid`.

        The error carries the (row, col) of the first mismatched
        module, or None when the decoded grid has another size.
        """
        decoded = self.decoder(image_bytes, fmt)
        if decoded.side != grid.side:
            raise ValidationError(
                f"decoded grid side {decoded.side} does not match source "
                f"side {grid.side}"
            )
        mismatch = grid.first_mismatch(decoded)
        if mismatch is not None:
            raise ValidationError(
                f"rendered image differs from source at module {mismatch}",
                coordinate=mismatch,
            )
        logger.debug("Validated %s rendering of a %d-module grid", fmt, grid.side)
