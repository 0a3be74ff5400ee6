"""
Enumerations used by the configuration model.

Both enumerations accept their value or name in any letter case, so
``ErrorCorrectionLevel("high")``, ``ErrorCorrectionLevel("HIGH")`` and
``ErrorCorrectionLevel("H")`` are the same member. Any other value raises
``InvalidArgument``.
"""

from __future__ import annotations

from enum import Enum

from qrcode.constants import (
    ERROR_CORRECT_L,
    ERROR_CORRECT_M,
    ERROR_CORRECT_Q,
    ERROR_CORRECT_H,
)

from .errors import InvalidArgument


class ErrorCorrectionLevel(Enum):
    """
    QR error-correction level.

    Each level carries the approximate fraction of codewords the symbol
    can restore, which the layout engine also uses to bound how much of
    the grid a logo may cover.
    """

    LOW = "low"
    MEDIUM = "medium"
    QUARTILE = "quartile"
    HIGH = "high"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if key in (member.value, member.value[0]):
                    return member
        raise InvalidArgument(
            f"invalid error correction level {value!r}; expected one of "
            f"{', '.join(m.value for m in cls)}"
        )

    @property
    def fraction(self) -> float:
        """Approximate recoverable-data fraction of this level."""
        return _ECC_FRACTIONS[self]

    @property
    def qrcode_constant(self) -> int:
        """Matching ``qrcode.constants.ERROR_CORRECT_*`` value."""
        return _ECC_MAP[self]


_ECC_MAP = {
    ErrorCorrectionLevel.LOW: ERROR_CORRECT_L,  # ~7% error correction
    ErrorCorrectionLevel.MEDIUM: ERROR_CORRECT_M,  # ~15%
    ErrorCorrectionLevel.QUARTILE: ERROR_CORRECT_Q,  # ~25%
    ErrorCorrectionLevel.HIGH: ERROR_CORRECT_H,  # ~30%
}

_ECC_FRACTIONS = {
    ErrorCorrectionLevel.LOW: 0.07,
    ErrorCorrectionLevel.MEDIUM: 0.15,
    ErrorCorrectionLevel.QUARTILE: 0.25,
    ErrorCorrectionLevel.HIGH: 0.30,
}


class LabelAlignment(Enum):
    """Horizontal placement of the label text within the canvas."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if key == member.value:
                    return member
        raise InvalidArgument(
            f"invalid label alignment {value!r}; expected one of "
            f"{', '.join(m.value for m in cls)}"
        )
