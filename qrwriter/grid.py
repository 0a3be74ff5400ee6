"""
Module grid and the symbol encoder interface.

The rendering code never computes QR symbols itself: it consumes an
immutable square boolean matrix, ``ModuleGrid``, produced here by the
``qrcode`` library. The encoder is generated once per render with a box
size of one and no border, since scaling and the quiet zone are handled
by the layout engine.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional, Union

import numpy as np

import qrcode
from qrcode.exceptions import DataOverflowError

from .enums import ErrorCorrectionLevel
from .errors import EncodingError, InvalidArgument


class ModuleGrid:
    """
    Immutable square matrix of QR modules.

    Parameters
    ----------
    matrix : array_like
        2D array of truthy values with equal row and column counts.
        True (or nonzero) marks a dark module.

    Raises
    ------
    InvalidArgument
        If the matrix is empty, not 2D or not square.

    Notes
    -----
    The stored array is a read-only copy, so callers may keep mutating
    their own matrix without affecting the grid.
    """

    def __init__(self, matrix) -> None:
        arr = np.array(matrix, dtype=bool)
        if arr.ndim != 2:
            raise InvalidArgument(
                f"module matrix must be 2D; got shape {arr.shape}"
            )
        rows, cols = arr.shape
        if rows == 0 or rows != cols:
            raise InvalidArgument(
                f"module matrix must be square and non-empty; got {rows}x{cols}"
            )
        arr.setflags(write=False)
        self._matrix = arr

    @classmethod
    def from_rows(cls, rows: Iterable[Union[str, Iterable]]) -> "ModuleGrid":
        """
        Build a grid from nested rows.

        Each row is either an iterable of truthy values or a string of
        '0' and '1' characters.
        """
        parsed = []
        for row in rows:
            if isinstance(row, str):
                if set(row) - {"0", "1"}:
                    raise InvalidArgument(f"invalid module row {row!r}")
                parsed.append([ch == "1" for ch in row])
            else:
                parsed.append([bool(v) for v in row])
        return cls(parsed)

    @property
    def matrix(self) -> np.ndarray:
        """Read-only boolean array of shape (side, side)."""
        return self._matrix

    @property
    def side(self) -> int:
        return self._matrix.shape[0]

    def __getitem__(self, index):
        return self._matrix[index]

    def __len__(self) -> int:
        return self.side

    def __eq__(self, other) -> bool:
        if not isinstance(other, ModuleGrid):
            return NotImplemented
        return np.array_equal(self._matrix, other._matrix)

    def __hash__(self) -> int:
        return hash((self.side, self._matrix.tobytes()))

    def __repr__(self) -> str:
        return f"ModuleGrid(side={self.side}, dark={int(self._matrix.sum())})"

    def first_mismatch(self, other: "ModuleGrid") -> Optional[tuple[int, int]]:
        """
        Locate the first differing module in row-major order.

        Returns
        -------
        tuple of int or None
            ``(row, col)`` of the first module that differs, or None if
            both grids are identical.

        Raises
        ------
        InvalidArgument
            If the grids have different sides.
        """
        if other.side != self.side:
            raise InvalidArgument(
                f"cannot compare grids of side {self.side} and {other.side}"
            )
        diff = np.argwhere(self._matrix != other._matrix)
        if diff.size == 0:
            return None
        row, col = diff[0]
        return int(row), int(col)


def encode(
    text: str,
    level: Union[ErrorCorrectionLevel, str] = ErrorCorrectionLevel.LOW,
    encoding: str = "UTF-8",
) -> ModuleGrid:
    """
    Encode text into a QR module grid.

    Parameters
    ----------
    text : str
        Payload to encode.
    level : ErrorCorrectionLevel or str, optional
        Error-correction level. The default is LOW.
    encoding : str, optional
        Codec used to turn `text` into bytes. The default is 'UTF-8'.

    Returns
    -------
    ModuleGrid
        Module grid of the smallest symbol version that fits the data.

    Raises
    ------
    EncodingError
        If the text cannot be represented in `encoding` or does not fit
        in any QR symbol version.
    """
    level = ErrorCorrectionLevel(level)
    try:
        data = text.encode(encoding)
    except (LookupError, UnicodeError) as exc:
        raise EncodingError(
            f"cannot encode text with encoding {encoding!r}: {exc}"
        ) from exc

    qr = qrcode.QRCode(
        version=None,  # let the library pick
        error_correction=level.qrcode_constant,
        box_size=1,
        border=0,
    )
    qr.add_data(data)
    try:
        qr.make(fit=True)
    except (DataOverflowError, ValueError) as exc:
        raise EncodingError(f"text does not fit in a QR symbol: {exc}") from exc

    return ModuleGrid(qr.get_matrix())
