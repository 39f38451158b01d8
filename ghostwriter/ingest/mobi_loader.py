"""MOBI ingestion through pandoc."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

from ..errors import ConverterNotFoundError
from . import SplitOptions, SplitResult
from .base import Converter, Loader
from .fallback import split_with_fallback
from .pandoc import has_pandoc

MOBI_WARNING = "Using pandoc to extract mobi text."


class MobiLoader(Loader):
    format = "mobi"
    extensions = (".mobi",)

    def __init__(
        self,
        *,
        converter: Optional[Converter] = None,
        pandoc_check: Optional[Callable[[Optional[str]], bool]] = None,
    ) -> None:
        super().__init__(converter=converter)
        self.pandoc_check = pandoc_check or has_pandoc

    def split(self, path: str | Path, options: SplitOptions) -> SplitResult:
        if not self.pandoc_check(options.pandoc_path):
            raise ConverterNotFoundError(
                "Pandoc is required to process .mobi files. "
                "Install pandoc or provide --pandoc-path."
            )
        text = self.converter(str(path), options.pandoc_path)
        result = split_with_fallback(text, options)
        return SplitResult(chapters=result.chapters, warnings=[MOBI_WARNING, *result.warnings])


__all__ = ["MOBI_WARNING", "MobiLoader"]
