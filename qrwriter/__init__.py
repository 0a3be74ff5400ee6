"""
QR code rendering with a shared layout engine.

qrwriter takes a QR module grid (encoded with the qrcode library) and
renders it as PNG, SVG, EPS, a data URI or a plain module payload. All
visual formats share one layout engine, so they agree on module size,
quiet zone, logo placement and label placement down to the pixel.
"""

from .config import Color, Margin, QRConfig
from .engine import QRCode
from .enums import ErrorCorrectionLevel, LabelAlignment
from .errors import (
    EncodingError,
    InvalidArgument,
    InvalidPath,
    MissingWriter,
    QRWriterError,
    ValidationError,
)
from .fonts import TextMetrics, measure
from .grid import ModuleGrid, encode
from .layout import Box, LabelPlacement, RenderPlan, compute_layout, max_logo_fraction
from .registry import WriterRegistry
from .validation import ResultValidator, decode_with_cv2
from .writers import (
    BinaryWriter,
    DataUriWriter,
    EpsWriter,
    PngWriter,
    SvgWriter,
    Writer,
)

__version__ = "0.1.0"

__all__ = [
    "BinaryWriter",
    "Box",
    "Color",
    "DataUriWriter",
    "EncodingError",
    "EpsWriter",
    "ErrorCorrectionLevel",
    "InvalidArgument",
    "InvalidPath",
    "LabelAlignment",
    "LabelPlacement",
    "Margin",
    "MissingWriter",
    "ModuleGrid",
    "PngWriter",
    "QRCode",
    "QRConfig",
    "QRWriterError",
    "RenderPlan",
    "ResultValidator",
    "SvgWriter",
    "TextMetrics",
    "ValidationError",
    "Writer",
    "WriterRegistry",
    "compute_layout",
    "decode_with_cv2",
    "encode",
    "max_logo_fraction",
    "measure",
]
