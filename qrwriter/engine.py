"""
Public entry point: a QR code with its configuration and writers.

``QRCode`` ties the pieces together. For every call it encodes the
configured text, computes a fresh render plan, asks the selected writer
for bytes and, when enabled, validates raster output before returning
or writing anything.

Examples
--------
>>> qr = QRCode("https://example.com", size=300, quiet_zone=10)
>>> qr.config.set_label("Scan me", alignment="left")
>>> png = qr.write_string("png")
>>> qr.write_file("code.svg")  # writer picked from the extension
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, Union

from .config import QRConfig
from .enums import ErrorCorrectionLevel
from .fonts import measure as measure_text
from .grid import ModuleGrid, encode as encode_text
from .layout import MeasureFunc, RenderPlan, compute_layout
from .registry import WriterRegistry
from .validation import ResultValidator
from .writers import DataUriWriter, Writer, builtin_writers

logger = logging.getLogger(__name__)

EncodeFunc = Callable[[str, ErrorCorrectionLevel, str], ModuleGrid]


class QRCode:
    """
    QR code renderer with a writer registry.

    Parameters
    ----------
    text : str, optional
        Payload to encode. Ignored when `config` is given.
    config : QRConfig, optional
        Configuration to use. By default a new QRConfig is built from
        `text` and `options`.
    encoder : callable, optional
        ``encoder(text, level, encoding) -> ModuleGrid``. Defaults to
        the qrcode-backed ``qrwriter.grid.encode``.
    measure : callable, optional
        Font-metrics provider passed to the layout engine.
    validator : ResultValidator, optional
        Validator used when ``config.validate_result`` is set.
    register_builtin_writers : bool, optional
        Register the binary, data URI, EPS, PNG and SVG writers. The
        default is True.
    **options
        Configuration options forwarded to QRConfig.
    """

    def __init__(
        self,
        text: str = "",
        config: Optional[QRConfig] = None,
        *,
        encoder: EncodeFunc = encode_text,
        measure: MeasureFunc = measure_text,
        validator: Optional[ResultValidator] = None,
        register_builtin_writers: bool = True,
        **options,
    ) -> None:
        self.config = config if config is not None else QRConfig(text, **options)
        self.encoder = encoder
        self.measure = measure
        self.validator = validator if validator is not None else ResultValidator()
        self.registry = WriterRegistry()
        if register_builtin_writers:
            for writer in builtin_writers():
                self.registry.register(writer)

    # ---------- Registry ----------

    def register_writer(self, writer: Writer) -> bool:
        """Register a writer; an already registered key is kept."""
        return self.registry.register(writer)

    @property
    def writers(self) -> list[str]:
        """Registered writer keys, in registration order."""
        return self.registry.keys()

    def get_writer_by_path(self, path: Union[str, Path]) -> Writer:
        return self.registry.get_by_path(path)

    def get_writer_by_extension(self, extension: str) -> Writer:
        return self.registry.get_by_extension(extension)

    def get_content_type(self, key: str) -> str:
        return self.registry.get(key).content_type

    # ---------- Rendering ----------

    def module_grid(self) -> ModuleGrid:
        """Encode the configured text into a module grid."""
        cfg = self.config
        return self.encoder(cfg.text, cfg.error_correction_level, cfg.encoding)

    def layout(self, grid: Optional[ModuleGrid] = None) -> RenderPlan:
        """Compute the render plan of the current configuration."""
        if grid is None:
            grid = self.module_grid()
        return compute_layout(self.config, grid, measure=self.measure)

    def _render(self, writer: Writer) -> bytes:
        config = self.config
        grid = self.module_grid()
        plan = self.layout(grid) if writer.visual else None

        dropped = writer.unsupported(config)
        if dropped:
            logger.warning(
                "Writer %r cannot represent %s; rendering without",
                writer.key,
                ", ".join(sorted(dropped)),
            )

        output = writer.render(grid, plan, config)

        if config.validate_result:
            if writer.raster_format is None:
                logger.debug("Skipping validation of non-raster %r output", writer.key)
            else:
                raster = output
                if isinstance(writer, DataUriWriter):
                    raster = writer.inner.render(grid, plan, config)
                self.validator.validate(raster, writer.raster_format, grid)

        return output

    def write_string(self, key: str) -> bytes:
        """Render with the writer registered under `key`."""
        return self._render(self.registry.get(key))

    def write_file(self, path: Union[str, Path], key: Optional[str] = None) -> bytes:
        """
        Render and write the result to `path`.

        Parameters
        ----------
        path : str or pathlib.Path
            Output file. Its extension selects the writer unless `key`
            is given.
        key : str, optional
            Writer key. When given it overrides extension inference.

        Returns
        -------
        bytes
            The bytes written to `path`.

        Raises
        ------
        MissingWriter
            If `key` is not registered, or no writer declares the
            extension of `path`.
        """
        path = Path(path)
        if key is not None:
            writer = self.registry.get(key)
        else:
            writer = self.registry.get_by_path(path)

        output = self._render(writer)
        path.write_bytes(output)
        logger.debug("Wrote %d bytes of %s to %s", len(output), writer.key, path)
        return output
