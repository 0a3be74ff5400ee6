"""
Tests for the individual writers.

The raster and vector writers must agree on geometry: the SVG module
rectangles, rasterized back onto a canvas of the same size, have to
cover exactly the dark pixels of the PNG.
"""

import base64
import xml.etree.ElementTree as ET
from io import BytesIO

import numpy as np
import pytest
from PIL import Image

from qrwriter import DataUriWriter, PngWriter, SvgWriter
from qrwriter.fonts import measure as real_measure
from qrwriter.images import module_mask, row_runs

SVG_NS = "{http://www.w3.org/2000/svg}"
XLINK_NS = "{http://www.w3.org/1999/xlink}"
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def _open_png(data):
    return np.asarray(Image.open(BytesIO(data)).convert("RGB"))


def _svg_module_mask(svg_bytes, width, height):
    root = ET.fromstring(svg_bytes)
    mask = np.zeros((height, width), dtype=bool)
    group = root.find(f"{SVG_NS}g")
    for rect in group.findall(f"{SVG_NS}rect"):
        x, y, w, h = (int(rect.get(k)) for k in ("x", "y", "width", "height"))
        mask[y:y + h, x:x + w] = True
    return mask


class TestPngWriter:

    def test_render_when_plain_then_pixels_match_module_mask(self, make_qr, grid):
        qr = make_qr(foreground_color=(10, 20, 30), background_color=(250, 240, 230))
        data = qr.write_string("png")
        assert data.startswith(PNG_SIGNATURE)

        arr = _open_png(data)
        plan = qr.layout(grid)
        assert arr.shape == (plan.canvas_height, plan.canvas_width, 3)

        mask = module_mask(grid, plan)
        expected = np.where(mask[..., None], [10, 20, 30], [250, 240, 230])
        np.testing.assert_array_equal(arr, expected)

    def test_render_when_quiet_zone_then_border_is_background(self, make_qr):
        arr = _open_png(make_qr().write_string("png"))
        assert (arr[:13, :, :] == 255).all()
        assert (arr[:, :13, :] == 255).all()
        # First module of the grid is dark
        assert (arr[13, 13] == 0).all()

    def test_render_when_logo_then_drawn_over_modules(self, make_qr, logo_path):
        qr = make_qr(error_correction_level="high", logo_path=logo_path, logo_size=60)
        arr = _open_png(qr.write_string("png"))
        plan = qr.layout()
        box = plan.logo
        assert box.width == 60
        region = arr[box.y:box.bottom, box.x:box.right].astype(int)
        assert (region[..., 0] >= 250).all()
        assert (region[..., 1:] <= 5).all()

    def test_render_when_wide_logo_then_aspect_ratio_kept(self, make_qr, wide_logo_path):
        qr = make_qr(error_correction_level="high", logo_path=wide_logo_path, logo_size=60)
        arr = _open_png(qr.write_string("png"))
        box = qr.layout().logo
        # 80x40 fitted into 60x60 -> 60x30, vertically centered
        center_y = box.y + box.height // 2
        row = arr[center_y, box.x:box.right].astype(int)
        assert (row[:, 2] >= 250).all() and (row[:, :2] <= 5).all()
        # Above the fitted logo only modules and background remain
        top = arr[box.y + 2, box.x:box.right].astype(int)
        assert not ((top[:, 2] >= 250) & (top[:, 0] <= 5)).any()

    def test_render_when_label_then_canvas_includes_band_with_text(self, make_qr):
        qr = make_qr(measure=real_measure)
        qr.config.set_label("Scan me", font_size=20, margin={"t": 4, "b": 4})
        arr = _open_png(qr.write_string("png"))
        plan = qr.layout()
        assert arr.shape[0] == plan.canvas_height > 300
        band = arr[300:, :, :]
        assert (band < 128).all(axis=-1).any()

    def test_render_when_repeated_then_identical_bytes(self, make_qr, logo_path):
        qr = make_qr(error_correction_level="q", logo_path=logo_path)
        qr.config.set_label("same")
        assert qr.write_string("png") == qr.write_string("png")


class TestSvgWriter:

    def test_render_when_plain_then_document_has_canvas_size(self, make_qr):
        qr = make_qr()
        root = ET.fromstring(qr.write_string("svg"))
        assert root.tag == f"{SVG_NS}svg"
        assert root.get("width") == "300"
        assert root.get("height") == "300"
        assert root.get("viewBox") == "0 0 300 300"

    def test_render_when_compared_with_png_then_geometry_superimposes(
        self, make_qr, grid
    ):
        qr = make_qr(size=257, quiet_zone=7)
        plan = qr.layout(grid)
        svg_mask = _svg_module_mask(
            qr.write_string("svg"), plan.canvas_width, plan.canvas_height
        )
        png_dark = (_open_png(qr.write_string("png")) == 0).all(axis=-1)
        np.testing.assert_array_equal(svg_mask, png_dark)

    def test_render_when_rows_have_runs_then_one_rect_per_run(self, make_qr, grid):
        root = ET.fromstring(make_qr().write_string("svg"))
        rects = root.find(f"{SVG_NS}g").findall(f"{SVG_NS}rect")
        expected = sum(len(list(row_runs(row))) for row in grid.matrix)
        assert len(rects) == expected

    def test_render_when_logo_then_embedded_as_png_image(self, make_qr, logo_path):
        qr = make_qr(error_correction_level="high", logo_path=logo_path, logo_size=60)
        root = ET.fromstring(qr.write_string("svg"))
        image = root.find(f"{SVG_NS}image")
        box = qr.layout().logo
        assert int(image.get("x")) == box.x
        assert int(image.get("width")) == 60
        assert image.get("href") is None
        href = image.get(f"{XLINK_NS}href")
        assert href.startswith("data:image/png;base64,")
        logo = Image.open(BytesIO(base64.b64decode(href.split(",", 1)[1])))
        assert logo.size == (60, 60)

    def test_render_when_label_has_markup_then_escaped(self, make_qr):
        qr = make_qr()
        qr.config.set_label("a<b & c")
        data = qr.write_string("svg")
        assert b"a&lt;b &amp; c" in data
        text = ET.fromstring(data).find(f"{SVG_NS}text")
        plan = qr.layout()
        assert text.text == "a<b & c"
        assert int(text.get("y")) == plan.label.baseline
        assert text.get("font-size") == "16"

    def test_render_when_repeated_then_identical_bytes(self, make_qr, logo_path):
        qr = make_qr(error_correction_level="h", logo_path=logo_path)
        assert qr.write_string("svg") == qr.write_string("svg")


class TestEpsWriter:

    def test_render_when_plain_then_header_and_bounding_box(self, make_qr):
        lines = make_qr().write_string("eps").decode("ascii").splitlines()
        assert lines[0] == "%!PS-Adobe-3.0 EPSF-3.0"
        assert lines[1] == "%%BoundingBox: 0 0 300 300"
        assert lines[-1] == "%%EOF"

    def test_render_when_plain_then_one_rectfill_per_run_plus_background(
        self, make_qr, grid
    ):
        lines = make_qr().write_string("eps").decode("ascii").splitlines()
        fills = [line for line in lines if line.endswith(" F")]
        expected = sum(len(list(row_runs(row))) for row in grid.matrix)
        assert len(fills) == expected + 1
        assert fills[0] == "0 0 300 300 F"

    def test_render_when_first_module_dark_then_flipped_to_bottom_left_origin(
        self, make_qr
    ):
        lines = make_qr().write_string("eps").decode("ascii").splitlines()
        fills = [line for line in lines if line.endswith(" F")]
        # Top row at canvas y=13, 13 px high -> PostScript y = 300 - 26
        x, y, w, h = (int(v) for v in fills[1].split()[:4])
        assert (x, y, h) == (13, 300 - 26, 13)

    def test_render_when_logo_then_hex_image_embedded(self, make_qr, logo_path):
        qr = make_qr(error_correction_level="high", logo_path=logo_path, logo_size=30)
        text = qr.write_string("eps").decode("ascii")
        assert "false 3 colorimage" in text
        hex_data = text.split("colorimage\n", 1)[1].split("\n>\n", 1)[0]
        assert len(hex_data.replace("\n", "")) == 30 * 30 * 3 * 2
        r, g, b = bytes.fromhex(hex_data[:6])
        assert r >= 250 and g <= 5 and b <= 5

    def test_render_when_label_has_parentheses_then_escaped(self, make_qr):
        qr = make_qr()
        qr.config.set_label("a(b)\\")
        text = qr.write_string("eps").decode("ascii")
        assert "(a\\(b\\)\\\\) show" in text

    def test_render_when_label_then_stretched_to_measured_width(self, make_qr):
        qr = make_qr()
        qr.config.set_label("abc", alignment="right", margin={"r": 6})
        lines = qr.write_string("eps").decode("ascii").splitlines()
        plan = qr.layout()
        # Fake metrics: 10 px per character
        assert plan.label.box.width == 30
        start = lines.index("gsave", lines.index("%%EndComments"))
        y = plan.canvas_height - plan.label.baseline
        assert lines[start + 1] == f"{300 - 30 - 6} {y} translate"
        assert lines[start + 2] == "30 (abc) stringwidth pop"
        assert lines[start + 3] == "dup 0 gt { div 1 scale } { pop pop } ifelse"
        assert lines[start + 5] == "(abc) show"


class TestBinaryWriter:

    def test_render_when_grid_then_rows_of_bits(self, make_qr, grid):
        data = make_qr().write_string("binary").decode("ascii")
        rows = data.splitlines()
        assert len(rows) == grid.side
        for row, expected in zip(rows, grid.matrix):
            assert row == "".join("1" if v else "0" for v in expected)

    def test_render_when_presentation_changes_then_payload_unchanged(self, make_qr):
        assert (
            make_qr(size=100).write_string("binary")
            == make_qr(size=600, quiet_zone=40).write_string("binary")
        )


class TestDataUriWriter:

    def test_render_when_default_then_wraps_png(self, make_qr):
        qr = make_qr()
        uri = qr.write_string("data_uri").decode("ascii")
        prefix = "data:image/png;base64,"
        assert uri.startswith(prefix)
        assert base64.b64decode(uri[len(prefix):]) == qr.write_string("png")

    def test_render_when_wrapping_svg_then_svg_content_type(self, make_qr, grid):
        qr = make_qr()
        writer = DataUriWriter(SvgWriter())
        plan = qr.layout(grid)
        uri = writer.render(grid, plan, qr.config).decode("ascii")
        assert uri.startswith("data:image/svg+xml;base64,")
        assert writer.raster_format is None

    def test_attributes_when_wrapping_png_then_delegated(self):
        writer = DataUriWriter()
        assert isinstance(writer.inner, PngWriter)
        assert writer.content_type == "text/plain"
        assert writer.raster_format == "PNG"
        assert writer.extensions == ()

    @pytest.mark.parametrize("key", ["png", "svg", "eps", "binary", "data_uri"])
    def test_content_type_when_builtin_then_declared(self, make_qr, key):
        expected = {
            "png": "image/png",
            "svg": "image/svg+xml",
            "eps": "application/postscript",
            "binary": "application/octet-stream",
            "data_uri": "text/plain",
        }
        assert make_qr().get_content_type(key) == expected[key]
