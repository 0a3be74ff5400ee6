"""Writers turning a render plan into bytes of a given format."""

from .base import LABEL, LOGO, Writer
from .binary import BinaryWriter
from .data_uri import DataUriWriter
from .eps import EpsWriter
from .png import PngWriter
from .svg import SvgWriter


def builtin_writers() -> list[Writer]:
    """Fresh instances of the built-in writers, in registration order."""
    return [BinaryWriter(), DataUriWriter(), EpsWriter(), PngWriter(), SvgWriter()]


__all__ = [
    "LABEL",
    "LOGO",
    "BinaryWriter",
    "DataUriWriter",
    "EpsWriter",
    "PngWriter",
    "SvgWriter",
    "Writer",
    "builtin_writers",
]
