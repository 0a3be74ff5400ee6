"""SVG vector writer."""

from __future__ import annotations

import base64
from xml.sax.saxutils import escape, quoteattr

from ..fonts import font_family
from ..images import load_logo, png_bytes, row_runs
from .base import Writer


class SvgWriter(Writer):
    """
    Render the QR code as an SVG document.

    Geometry comes from the same render plan as the PNG writer, so at
    equal canvas size both outputs superimpose exactly. Dark modules are
    merged into one rectangle per horizontal run, emitted row by row.
    """

    key = "svg"
    extensions = ("svg",)
    content_type = "image/svg+xml"

    def render(self, grid, plan, config) -> bytes:
        fg = config.foreground_color.hex
        bg = config.background_color.hex
        m = plan.module_size
        x0, y0 = plan.origin
        w, h = plan.canvas_width, plan.canvas_height

        lines = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            f'<svg xmlns="http://www.w3.org/2000/svg" version="1.1" '
            f'xmlns:xlink="http://www.w3.org/1999/xlink" '
            f'width="{w}" height="{h}" viewBox="0 0 {w} {h}" '
            f'shape-rendering="crispEdges">',
            f'<rect x="0" y="0" width="{w}" height="{h}" fill="{bg}"/>',
            f'<g fill="{fg}">',
        ]
        for row_index, row in enumerate(grid.matrix):
            y = y0 + row_index * m
            for start, length in row_runs(row):
                lines.append(
                    f'<rect x="{x0 + start * m}" y="{y}" '
                    f'width="{length * m}" height="{m}"/>'
                )
        lines.append("</g>")

        if plan.logo is not None:
            logo, box = load_logo(config.logo_path, plan.logo)
            payload = base64.b64encode(png_bytes(logo)).decode("ascii")
            lines.append(
                f'<image x="{box.x}" y="{box.y}" width="{box.width}" '
                f'height="{box.height}" '
                f'xlink:href="data:image/png;base64,{payload}"/>'
            )

        if plan.label is not None:
            family = font_family(config.label_font_path, config.label_font_size)
            lines.append(
                f'<text x="{plan.label.box.x}" y="{plan.label.baseline}" '
                f"font-family={quoteattr(family)} "
                f'font-size="{config.label_font_size}" fill="{fg}">'
                f"{escape(plan.label.text)}</text>"
            )

        lines.append("</svg>")
        return ("\n".join(lines) + "\n").encode("utf-8")
