"""Common interface implemented by every format-specific loader."""

from __future__ import annotations

from abc import ABC, abstractmethod
import logging
from pathlib import Path
from typing import Callable, ClassVar, Optional, Tuple

from . import SplitOptions, SplitResult
from .pandoc import convert_to_text

LOGGER = logging.getLogger(__name__)

Converter = Callable[[str, Optional[str]], str]


class Loader(ABC):
    """Produce a :class:`SplitResult` for one input format."""

    format: ClassVar[str] = ""
    extensions: ClassVar[Tuple[str, ...]] = ()

    def __init__(self, *, converter: Optional[Converter] = None) -> None:
        self.converter = converter or convert_to_text

    def can_handle(self, path: str | Path) -> bool:
        return Path(path).suffix.lower() in self.extensions

    @abstractmethod
    def split(self, path: str | Path, options: SplitOptions) -> SplitResult:
        ...


def read_text(path: str | Path) -> str:
    """Read *path* as UTF-8, falling back to latin-1."""

    path = Path(path)
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        LOGGER.warning("Failed to decode %s as UTF-8; attempting latin-1", path)
        return path.read_text(encoding="latin-1")


__all__ = ["Converter", "Loader", "read_text"]
