"""PNG raster writer."""

from __future__ import annotations

from PIL import Image, ImageDraw

from ..fonts import load_font
from ..images import load_logo, png_bytes, render_modules
from .base import Writer


class PngWriter(Writer):
    """
    Render the QR code as an RGB PNG image.

    The canvas is filled with the background color, dark modules are
    painted from the upscaled module mask, the logo is alpha-composited
    over the modules and the label is drawn into its band.
    """

    key = "png"
    extensions = ("png",)
    content_type = "image/png"
    raster_format = "PNG"

    def render_image(self, grid, plan, config) -> Image.Image:
        fg = config.foreground_color
        bg = config.background_color

        arr = render_modules(grid, plan, fg, bg)
        image = Image.fromarray(arr)

        if plan.logo is not None:
            logo, box = load_logo(config.logo_path, plan.logo)
            # Paste with alpha
            image.paste(logo, (box.x, box.y), logo)

        if plan.label is not None:
            font = load_font(config.label_font_path, config.label_font_size)
            draw = ImageDraw.Draw(image)
            draw.text(
                (plan.label.box.x, plan.label.box.y),
                plan.label.text,
                font=font,
                fill=tuple(fg),
            )

        return image

    def render(self, grid, plan, config) -> bytes:
        return png_bytes(self.render_image(grid, plan, config))
