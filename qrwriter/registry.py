"""
Registry mapping writer keys and file extensions to writers.

Keys are unique and the first registration of a key wins: registering
another writer under an existing key is ignored, so the registry is
safe to populate more than once. Extension lookups walk the writers in
registration order and return the first one declaring the extension.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Union

from .errors import MissingWriter
from .writers import Writer

logger = logging.getLogger(__name__)


def _normalize_extension(extension: str) -> str:
    return extension.lstrip(".").lower()


class WriterRegistry:
    """Ordered collection of writers keyed by ``Writer.key``."""

    def __init__(self) -> None:
        self._writers: dict[str, Writer] = {}

    def register(self, writer: Writer) -> bool:
        """
        Register a writer unless its key is already taken.

        Returns
        -------
        bool
            True if the writer was added, False if an earlier writer
            with the same key was kept.
        """
        if writer.key in self._writers:
            logger.debug(
                "Writer key %r already registered by %r; ignoring %r",
                writer.key,
                self._writers[writer.key],
                writer,
            )
            return False
        self._writers[writer.key] = writer
        logger.debug("Registered %r for extensions %s", writer, writer.extensions)
        return True

    def get(self, key: str) -> Writer:
        try:
            return self._writers[key]
        except KeyError:
            raise MissingWriter(f"no renderer for key {key}", key=key) from None

    def get_by_extension(self, extension: str) -> Writer:
        ext = _normalize_extension(extension)
        for writer in self._writers.values():
            if ext in writer.extensions:
                return writer
        raise MissingWriter(f"no renderer for extension {ext}", extension=ext)

    def get_by_path(self, path: Union[str, Path]) -> Writer:
        return self.get_by_extension(Path(path).suffix)

    def keys(self) -> list[str]:
        return list(self._writers)

    def __contains__(self, key: object) -> bool:
        return key in self._writers

    def __iter__(self) -> Iterator[Writer]:
        return iter(self._writers.values())

    def __len__(self) -> int:
        return len(self._writers)
