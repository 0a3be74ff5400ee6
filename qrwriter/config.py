"""
Configuration model for rendering QR codes.

``QRConfig`` holds every content and presentation parameter. Unlike a
frozen specification object, it is mutable: each property setter
validates its value eagerly and either stores it or raises, so a failed
assignment leaves the previous value in place and render-time code can
rely on every stored value being valid (including font and logo paths,
which must name an existing, readable font or image file at the time
they are assigned).

Classes
-------
Color
    8-bit RGB triple.
Margin
    Non-negative label margins with partial merge.
QRConfig
    Mutable aggregate of all rendering parameters.
"""

from __future__ import annotations

import codecs
import copy
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from pathlib import Path
from typing import NamedTuple, Optional, Union

from PIL import Image, ImageFont

from .enums import ErrorCorrectionLevel, LabelAlignment
from .errors import InvalidArgument, InvalidPath


DEFAULT_SIZE = 300
DEFAULT_QUIET_ZONE = 0
DEFAULT_ENCODING = "UTF-8"
DEFAULT_LABEL_FONT_SIZE = 16


class Color(NamedTuple):
    """RGB color with channels in the range 0-255."""

    r: int
    g: int
    b: int

    @classmethod
    def parse(cls, value: ColorLike) -> "Color":
        """
        Build a Color from any of the accepted spellings.

        Parameters
        ----------
        value : Color, sequence, mapping or str
            An (r, g, b) sequence, a mapping with 'r', 'g' and 'b' keys,
            or a '#rrggbb' hex string.

        Returns
        -------
        Color
            Validated color.

        Raises
        ------
        InvalidArgument
            If the value has another shape or a channel is outside
            0-255.
        """
        if isinstance(value, str):
            text = value.strip().lstrip("#")
            if len(text) != 6:
                raise InvalidArgument(f"invalid hex color {value!r}")
            try:
                channels = [int(text[i:i + 2], 16) for i in (0, 2, 4)]
            except ValueError as exc:
                raise InvalidArgument(f"invalid hex color {value!r}") from exc
        elif isinstance(value, Mapping):
            try:
                channels = [value["r"], value["g"], value["b"]]
            except KeyError as exc:
                raise InvalidArgument(
                    f"color mapping is missing channel {exc.args[0]!r}"
                ) from exc
        elif isinstance(value, Sequence) and len(value) == 3:
            channels = list(value)
        else:
            raise InvalidArgument(f"invalid color {value!r}")

        for channel in channels:
            if isinstance(channel, bool) or not isinstance(channel, int):
                raise InvalidArgument(
                    f"color channels must be integers; got {channel!r}"
                )
            if not 0 <= channel <= 255:
                raise InvalidArgument(
                    f"color channels must be in 0-255; got {channel}"
                )
        return cls(*channels)

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


ColorLike = Union[Color, Sequence[int], Mapping[str, int], str]

BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)


_MARGIN_KEYS = {
    "top": "top",
    "right": "right",
    "bottom": "bottom",
    "left": "left",
    "t": "top",
    "r": "right",
    "b": "bottom",
    "l": "left",
}


@dataclass(frozen=True)
class Margin:
    """
    Label margins in pixels.

    Parameters
    ----------
    top, right, bottom, left : int, optional
        Non-negative margins. All default to 0.

    Raises
    ------
    InvalidArgument
        If any side is negative or not an integer.
    """

    top: int = 0
    right: int = 0
    bottom: int = 0
    left: int = 0

    def __post_init__(self) -> None:
        for side in ("top", "right", "bottom", "left"):
            value = getattr(self, side)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidArgument(f"margin {side} must be an integer")
            if value < 0:
                raise InvalidArgument(f"margin {side} must be >= 0; got {value}")

    def merged(self, values: Union["Margin", Mapping[str, int]]) -> "Margin":
        """
        Return a copy with only the given sides replaced.

        Parameters
        ----------
        values : Margin or mapping
            A full Margin replaces every side. A mapping replaces only
            the sides it names, using 'top', 'right', 'bottom', 'left'
            or the short forms 't', 'r', 'b', 'l'.
        """
        if isinstance(values, Margin):
            return values
        if not isinstance(values, Mapping):
            raise InvalidArgument(f"invalid margin {values!r}")

        changes = {}
        for key, value in values.items():
            side = _MARGIN_KEYS.get(str(key).lower())
            if side is None:
                raise InvalidArgument(f"unknown margin side {key!r}")
            changes[side] = value
        return replace(self, **changes)


def _resolve_file(path: Union[str, Path], what: str) -> str:
    try:
        resolved = Path(path).expanduser().resolve()
    except (OSError, RuntimeError, TypeError) as exc:
        raise InvalidPath(f"invalid {what} path: {path}", str(path)) from exc
    if not resolved.is_file():
        raise InvalidPath(f"invalid {what} path: {resolved}", str(resolved))
    return str(resolved)


def _check_logo(path: str) -> str:
    try:
        with Image.open(path) as img:
            img.verify()
    except (OSError, SyntaxError, ValueError) as exc:
        raise InvalidPath(f"invalid logo image: {path} ({exc})", path) from exc
    return path


def _check_font(path: str) -> str:
    try:
        ImageFont.truetype(path, DEFAULT_LABEL_FONT_SIZE)
    except (OSError, ValueError) as exc:
        raise InvalidPath(f"invalid label font: {path} ({exc})", path) from exc
    return path


def _positive_int(value, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{name} must be an integer; got {value!r}")
    if value <= 0:
        raise InvalidArgument(f"{name} must be > 0; got {value}")
    return value


class QRConfig:
    """
    Mutable content and presentation parameters of a QR code.

    Every keyword accepted by the constructor is assigned through the
    matching property setter, so construction validates exactly like
    later assignment.

    Parameters
    ----------
    text : str, optional
        Payload to encode. The default is the empty string.
    **options
        Any settable property: ``size``, ``quiet_zone``,
        ``foreground_color``, ``background_color``, ``encoding``,
        ``error_correction_level``, ``label``, ``label_font_size``,
        ``label_font_path``, ``label_alignment``, ``label_margin``,
        ``logo_path``, ``logo_size`` and ``validate_result``.

    Notes
    -----
    Defaults: size 300, quiet zone 0, black on white, UTF-8 text
    encoding, LOW error correction, CENTER label alignment, label font
    size 16, zero label margins, no label, no logo and no validation.
    A label font path of None selects Pillow's default font.
    """

    _OPTIONS = (
        "size",
        "quiet_zone",
        "foreground_color",
        "background_color",
        "encoding",
        "error_correction_level",
        "label",
        "label_font_size",
        "label_font_path",
        "label_alignment",
        "label_margin",
        "logo_path",
        "logo_size",
        "validate_result",
    )

    def __init__(self, text: str = "", **options) -> None:
        self._text = ""
        self._size = DEFAULT_SIZE
        self._quiet_zone = DEFAULT_QUIET_ZONE
        self._foreground_color = BLACK
        self._background_color = WHITE
        self._encoding = DEFAULT_ENCODING
        self._error_correction_level = ErrorCorrectionLevel.LOW
        self._label: Optional[str] = None
        self._label_font_size = DEFAULT_LABEL_FONT_SIZE
        self._label_font_path: Optional[str] = None
        self._label_alignment = LabelAlignment.CENTER
        self._label_margin = Margin()
        self._logo_path: Optional[str] = None
        self._logo_size: Optional[int] = None
        self._validate_result = False

        self.text = text
        for name, value in options.items():
            if name not in self._OPTIONS:
                raise TypeError(f"unexpected configuration option {name!r}")
            setattr(self, name, value)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(text={self._text!r}, size={self._size}, "
            f"quiet_zone={self._quiet_zone}, "
            f"error_correction_level={self._error_correction_level.value!r})"
        )

    def copy(self) -> "QRConfig":
        """Return an independent snapshot of this configuration."""
        return copy.copy(self)

    # ---------- Content ----------

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str) -> None:
        if not isinstance(value, str):
            raise InvalidArgument("text must be a string")
        self._text = value

    @property
    def encoding(self) -> str:
        """Name of the codec used to turn the text into bytes."""
        return self._encoding

    @encoding.setter
    def encoding(self, value: str) -> None:
        try:
            info = codecs.lookup(value)
        except (LookupError, TypeError) as exc:
            raise InvalidArgument(f"unknown text encoding {value!r}") from exc
        # Codecs such as rot13 or hex do not turn str into bytes.
        if not getattr(info, "_is_text_encoding", True):
            raise InvalidArgument(f"{value!r} is not a text encoding")
        self._encoding = value

    @property
    def error_correction_level(self) -> ErrorCorrectionLevel:
        return self._error_correction_level

    @error_correction_level.setter
    def error_correction_level(
        self, value: Union[ErrorCorrectionLevel, str]
    ) -> None:
        self._error_correction_level = ErrorCorrectionLevel(value)

    # ---------- Geometry and colors ----------

    @property
    def size(self) -> int:
        """Target canvas side in pixels, quiet zone included."""
        return self._size

    @size.setter
    def size(self, value: int) -> None:
        self._size = _positive_int(value, "size")

    @property
    def quiet_zone(self) -> int:
        """Blank margin, in pixels, kept around the module grid."""
        return self._quiet_zone

    @quiet_zone.setter
    def quiet_zone(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidArgument(f"quiet_zone must be an integer; got {value!r}")
        if value < 0:
            raise InvalidArgument(f"quiet_zone must be >= 0; got {value}")
        self._quiet_zone = value

    @property
    def foreground_color(self) -> Color:
        return self._foreground_color

    @foreground_color.setter
    def foreground_color(self, value: ColorLike) -> None:
        self._foreground_color = Color.parse(value)

    @property
    def background_color(self) -> Color:
        return self._background_color

    @background_color.setter
    def background_color(self, value: ColorLike) -> None:
        self._background_color = Color.parse(value)

    # ---------- Label ----------

    @property
    def label(self) -> Optional[str]:
        return self._label

    @label.setter
    def label(self, value: Optional[str]) -> None:
        if value is not None and not isinstance(value, str):
            raise InvalidArgument("label must be a string or None")
        self._label = value

    @property
    def has_label(self) -> bool:
        return bool(self._label)

    @property
    def label_font_size(self) -> int:
        return self._label_font_size

    @label_font_size.setter
    def label_font_size(self, value: int) -> None:
        self._label_font_size = _positive_int(value, "label_font_size")

    @property
    def label_font_path(self) -> Optional[str]:
        """Absolute path of the label font, or None for the default font."""
        return self._label_font_path

    @label_font_path.setter
    def label_font_path(self, value: Optional[Union[str, Path]]) -> None:
        self._label_font_path = (
            None if value is None else _check_font(_resolve_file(value, "label font"))
        )

    @property
    def label_alignment(self) -> LabelAlignment:
        return self._label_alignment

    @label_alignment.setter
    def label_alignment(self, value: Union[LabelAlignment, str]) -> None:
        self._label_alignment = LabelAlignment(value)

    @property
    def label_margin(self) -> Margin:
        return self._label_margin

    @label_margin.setter
    def label_margin(self, value: Union[Margin, Mapping[str, int]]) -> None:
        # Sides missing from a mapping keep their current values.
        self._label_margin = self._label_margin.merged(value)

    def set_label(
        self,
        text: Optional[str],
        font_size: Optional[int] = None,
        font_path: Optional[Union[str, Path]] = None,
        alignment: Optional[Union[LabelAlignment, str]] = None,
        margin: Optional[Union[Margin, Mapping[str, int]]] = None,
    ) -> "QRConfig":
        """
        Set the label text and, optionally, its presentation.

        Parameters left as None keep their current values rather than
        being reset to the defaults.

        Returns
        -------
        QRConfig
            This configuration, to allow chaining.
        """
        self.label = text
        if font_size is not None:
            self.label_font_size = font_size
        if font_path is not None:
            self.label_font_path = font_path
        if alignment is not None:
            self.label_alignment = alignment
        if margin is not None:
            self.label_margin = margin
        return self

    # ---------- Logo ----------

    @property
    def logo_path(self) -> Optional[str]:
        return self._logo_path

    @logo_path.setter
    def logo_path(self, value: Optional[Union[str, Path]]) -> None:
        self._logo_path = (
            None if value is None else _check_logo(_resolve_file(value, "logo"))
        )

    @property
    def logo_size(self) -> Optional[int]:
        """Requested logo side in pixels; None selects the default size."""
        return self._logo_size

    @logo_size.setter
    def logo_size(self, value: Optional[int]) -> None:
        self._logo_size = None if value is None else _positive_int(value, "logo_size")

    @property
    def has_logo(self) -> bool:
        return self._logo_path is not None

    # ---------- Validation ----------

    @property
    def validate_result(self) -> bool:
        return self._validate_result

    @validate_result.setter
    def validate_result(self, value: bool) -> None:
        self._validate_result = bool(value)
