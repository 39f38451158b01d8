"""PDF ingestion utilities."""

from __future__ import annotations

import collections
import logging
from pathlib import Path
from typing import Callable, List, Optional, Set

from pypdf import PdfReader

from . import SplitOptions, SplitResult
from .base import Converter, Loader
from .fallback import split_with_fallback

LOGGER = logging.getLogger(__name__)

PageExtractor = Callable[[str], List[str]]

TEXT_LAYER_WARNING = "Used pypdf text layer to extract text from PDF."
PANDOC_WARNING = "Used pandoc to extract text from PDF."


def extract_pages(path: str) -> List[str]:
    reader = PdfReader(path)
    return [page.extract_text() or "" for page in reader.pages]


class PdfLoader(Loader):
    """Read the PDF text layer and segment it heuristically."""

    format = "pdf"
    extensions = (".pdf",)

    def __init__(
        self,
        *,
        converter: Optional[Converter] = None,
        extractor: Optional[PageExtractor] = None,
        common_threshold: float = 0.4,
    ) -> None:
        super().__init__(converter=converter)
        self.extractor = extractor or extract_pages
        self.common_threshold = common_threshold

    def split(self, path: str | Path, options: SplitOptions) -> SplitResult:
        warnings: List[str] = []
        text = ""
        try:
            text = self.load_text(str(path))
        except Exception as exc:
            message = f"pypdf failed ({exc}); trying pandoc if available."
            LOGGER.warning(message)
            warnings.append(message)
        else:
            if not text.strip():
                message = "PDF text layer is empty; trying pandoc if available."
                LOGGER.warning(message)
                warnings.append(message)

        if text.strip():
            warnings.append(TEXT_LAYER_WARNING)
        else:
            text = self.converter(str(path), options.pandoc_path)
            warnings.append(PANDOC_WARNING)

        result = split_with_fallback(text, options)
        return SplitResult(chapters=result.chapters, warnings=[*warnings, *result.warnings])

    def load_text(self, path: str) -> str:
        """Extract the text layer of *path* with running headers removed."""

        pages = self.extractor(path)
        repeated = self._detect_repeated_lines(pages)
        if repeated:
            LOGGER.debug("Stripping %d running header/footer lines", len(repeated))
        return "\n\n".join(self._strip_lines(text, repeated) for text in pages)

    def _detect_repeated_lines(self, pages: List[str]) -> Set[str]:
        header_counts: collections.Counter = collections.Counter()
        footer_counts: collections.Counter = collections.Counter()
        for text in pages:
            lines = [line.strip() for line in (text or "").splitlines() if line.strip()]
            if not lines:
                continue
            header_counts[lines[0]] += 1
            footer_counts[lines[-1]] += 1
        threshold = max(2, int(len(pages) * self.common_threshold))
        return {
            line
            for counts in (header_counts, footer_counts)
            for line, count in counts.items()
            if count >= threshold
        }

    def _strip_lines(self, text: str, repeated: Set[str]) -> str:
        """Drop the first and last non-blank lines of a page when they repeat."""

        lines = text.splitlines()
        filled = [i for i, line in enumerate(lines) if line.strip()]
        if not repeated or not filled:
            return text
        edges = {i for i in (filled[0], filled[-1]) if lines[i].strip() in repeated}
        return "\n".join(line for i, line in enumerate(lines) if i not in edges)


__all__ = ["PANDOC_WARNING", "PdfLoader", "TEXT_LAYER_WARNING", "extract_pages"]
