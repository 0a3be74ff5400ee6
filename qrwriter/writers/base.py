"""Common interface of all writers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar, Optional

from ..config import QRConfig
from ..grid import ModuleGrid
from ..layout import RenderPlan

LOGO = "logo"
LABEL = "label"


class Writer(ABC):
    """
    Turn a module grid and its render plan into bytes of one format.

    Attributes
    ----------
    key : str
        Stable identifier the writer is registered under.
    extensions : tuple of str
        Lower-case file extensions, without the dot, that select this
        writer when writing a file.
    content_type : str
        MIME type of the produced bytes.
    features : frozenset of str
        Optional configuration features the writer can represent
        (``"logo"``, ``"label"``).
    visual : bool
        Whether the writer draws the grid and therefore needs a render
        plan. A non-visual writer receives None as its plan.
    raster_format : str or None
        Pillow format name of the produced image if the output is a
        raster that can be checked by the result validator.
    """

    key: ClassVar[str]
    extensions: ClassVar[tuple[str, ...]] = ()
    content_type: ClassVar[str] = "application/octet-stream"
    features: ClassVar[frozenset[str]] = frozenset({LOGO, LABEL})
    visual: ClassVar[bool] = True
    raster_format: ClassVar[Optional[str]] = None

    @abstractmethod
    def render(
        self,
        grid: ModuleGrid,
        plan: Optional[RenderPlan],
        config: QRConfig,
    ) -> bytes:
        """Render the grid. Identical inputs give identical bytes."""

    def unsupported(self, config: QRConfig) -> set[str]:
        """Configured features this writer cannot represent."""
        requested = set()
        if config.has_logo:
            requested.add(LOGO)
        if config.has_label:
            requested.add(LABEL)
        return requested - self.features

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key={self.key!r})"
