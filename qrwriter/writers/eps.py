"""Encapsulated PostScript writer."""

from __future__ import annotations

import textwrap

import numpy as np

from ..images import flatten, load_logo, row_runs
from .base import Writer

# Label font; PostScript interpreters are only guaranteed the base 14 fonts.
EPS_FONT = "Helvetica"


def _ps_color(color) -> str:
    return " ".join(f"{channel / 255:.4f}" for channel in color)


def _ps_string(text: str) -> str:
    out = []
    for byte in text.encode("latin-1", errors="replace"):
        ch = chr(byte)
        if ch in "()\\":
            out.append("\\" + ch)
        elif 32 <= byte < 127:
            out.append(ch)
        else:
            out.append(f"\\{byte:03o}")
    return "(" + "".join(out) + ")"


class EpsWriter(Writer):
    """
    Render the QR code as an EPSF-3.0 document.

    The render plan uses a top-left origin while PostScript uses the
    bottom-left corner, so every y coordinate is flipped against the
    canvas height. The logo is embedded as an ASCIIHex RGB image
    flattened over the background color, since EPS images carry no
    alpha channel. The label is drawn in Helvetica and scaled
    horizontally to the width the layout measured with the configured
    label font, so its alignment matches the raster output.
    """

    key = "eps"
    extensions = ("eps",)
    content_type = "application/postscript"

    def render(self, grid, plan, config) -> bytes:
        w, h = plan.canvas_width, plan.canvas_height
        m = plan.module_size
        x0, y0 = plan.origin

        lines = [
            "%!PS-Adobe-3.0 EPSF-3.0",
            f"%%BoundingBox: 0 0 {w} {h}",
            "%%Creator: qrwriter",
            "%%EndComments",
            "/F { rectfill } def",
            f"{_ps_color(config.background_color)} setrgbcolor",
            f"0 0 {w} {h} F",
            f"{_ps_color(config.foreground_color)} setrgbcolor",
        ]
        for row_index, row in enumerate(grid.matrix):
            y = h - (y0 + (row_index + 1) * m)
            for start, length in row_runs(row):
                lines.append(f"{x0 + start * m} {y} {length * m} {m} F")

        if plan.logo is not None:
            logo, box = load_logo(config.logo_path, plan.logo)
            rgb = np.asarray(flatten(logo, config.background_color), dtype=np.uint8)
            lw, lh = box.width, box.height
            lines += [
                "gsave",
                f"{box.x} {h - box.bottom} translate",
                f"{lw} {lh} scale",
                f"{lw} {lh} 8 [{lw} 0 0 -{lh} 0 {lh}]",
                "currentfile /ASCIIHexDecode filter false 3 colorimage",
            ]
            lines += textwrap.wrap(rgb.tobytes().hex(), 78)
            lines += [">", "grestore"]

        if plan.label is not None:
            label = _ps_string(plan.label.text)
            lines += [
                f"/{EPS_FONT} findfont {config.label_font_size} scalefont setfont",
                "gsave",
                f"{plan.label.box.x} {h - plan.label.baseline} translate",
                # Stretch Helvetica to the width measured with the label font
                f"{plan.label.box.width} {label} stringwidth pop",
                "dup 0 gt { div 1 scale } { pop pop } ifelse",
                "0 0 moveto",
                f"{label} show",
                "grestore",
            ]

        lines += ["showpage", "%%EOF"]
        return ("\n".join(lines) + "\n").encode("ascii")
