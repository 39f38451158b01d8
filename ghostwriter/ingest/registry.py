"""Format detection and the format -> loader registry."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Optional

from ..errors import UnsupportedFormatError
from . import SUPPORTED_FORMATS
from .base import Loader
from .epub_loader import EpubLoader
from .mobi_loader import MobiLoader
from .pdf_loader import PdfLoader
from .text_loader import MarkdownLoader, TextLoader

_LOADERS: Dict[str, Callable[..., Loader]] = {
    "pdf": PdfLoader,
    "epub": EpubLoader,
    "txt": TextLoader,
    "md": MarkdownLoader,
    "mobi": MobiLoader,
}

_EXTENSIONS = {
    ext: fmt for fmt, ctor in _LOADERS.items() for ext in getattr(ctor, "extensions", ())
}


def detect_format(path: str | Path) -> str:
    """Return the format tag for *path* based solely on its extension."""

    suffix = Path(path).suffix.lower()
    try:
        return _EXTENSIONS[suffix]
    except KeyError:
        raise UnsupportedFormatError(
            f"Unsupported format for {path}. Expected {', '.join(SUPPORTED_FORMATS)}."
        ) from None


def create_loader(fmt: str, **kwargs: Any) -> Loader:
    try:
        ctor = _LOADERS[fmt]
    except KeyError:
        raise UnsupportedFormatError(f"No loader for format {fmt}") from None
    return ctor(**kwargs)


def loader_for(path: str | Path, fmt: Optional[str] = None, **kwargs: Any) -> Loader:
    """Pick the loader for *path*, honouring a forced *fmt* when given."""

    return create_loader(fmt or detect_format(path), **kwargs)


__all__ = ["create_loader", "detect_format", "loader_for"]
