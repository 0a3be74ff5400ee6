import numpy as np
import pytest
from PIL import Image, ImageFont

from qrwriter import ModuleGrid, QRCode, TextMetrics


def _pattern(side: int) -> np.ndarray:
    rows, cols = np.indices((side, side))
    matrix = (rows * 3 + cols * 7) % 5 < 2
    # Finder-like dark corner so the grid starts with a dark module
    matrix[:7, :7] = True
    matrix[1:6, 1:6] = False
    matrix[2:5, 2:5] = True
    return matrix


def fake_measure(text, font_path, font_size):
    """Deterministic metrics: 10 px per character, 20 px high."""
    return TextMetrics(width=10 * len(text), height=20, baseline=16)


@pytest.fixture
def grid():
    """A 21x21 (version 1 sized) module grid."""
    return ModuleGrid(_pattern(21))


@pytest.fixture
def measure():
    return fake_measure


@pytest.fixture
def logo_path(tmp_path):
    """Opaque red 40x40 logo."""
    path = tmp_path / "logo.png"
    Image.new("RGBA", (40, 40), (255, 0, 0, 255)).save(path)
    return path


@pytest.fixture
def wide_logo_path(tmp_path):
    """Opaque blue 80x40 logo."""
    path = tmp_path / "wide_logo.png"
    Image.new("RGB", (80, 40), (0, 0, 255)).save(path)
    return path


@pytest.fixture
def font_file(tmp_path):
    """Pillow's bundled default font written out as a TrueType file."""
    path = tmp_path / "font.ttf"
    path.write_bytes(ImageFont.load_default(size=16).font_bytes)
    return path


@pytest.fixture
def garbage_file(tmp_path):
    """An existing file that is neither an image nor a font."""
    path = tmp_path / "garbage.png"
    path.write_bytes(b"garbage")
    return path


@pytest.fixture
def make_qr(grid, measure):
    """Build a QRCode whose encoder always returns the `grid` fixture."""

    def factory(**options):
        options.setdefault("size", 300)
        options.setdefault("quiet_zone", 10)
        measure_func = options.pop("measure", measure)
        validator = options.pop("validator", None)
        return QRCode(
            "hello",
            encoder=lambda text, level, encoding: grid,
            measure=measure_func,
            validator=validator,
            **options,
        )

    return factory
