"""EPUB ingestion utilities."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
import re
from typing import Dict, Iterable, List

import ebooklib
from ebooklib import epub

from . import Chapter, SplitOptions, SplitResult
from .base import Loader
from .fallback import split_with_fallback

LOGGER = logging.getLogger(__name__)

PANDOC_FALLBACK_WARNING = "Falling back to pandoc for epub text extraction."


@dataclass
class TocEntry:
    title: str
    href: str


class EpubLoader(Loader):
    """Extract chapters from the EPUB spine, falling back to pandoc."""

    format = "epub"
    extensions = (".epub",)

    def split(self, path: str | Path, options: SplitOptions) -> SplitResult:
        warnings: List[str] = []
        try:
            chapters = self.load(str(path))
        except Exception as exc:
            message = f"EPUB extraction failed: {exc}"
            LOGGER.warning(message)
            warnings.append(message)
        else:
            if chapters:
                return SplitResult(chapters=chapters)
            LOGGER.warning("No chapters found in EPUB %s", path)
            warnings.append("No chapters found in EPUB")

        LOGGER.warning(PANDOC_FALLBACK_WARNING)
        warnings.append(PANDOC_FALLBACK_WARNING)
        text = self.converter(str(path), options.pandoc_path)
        result = split_with_fallback(text, options)
        return SplitResult(chapters=result.chapters, warnings=[*warnings, *result.warnings])

    def load(self, path: str) -> List[Chapter]:
        """Load non-empty chapters from the EPUB at *path* in spine order."""

        book = epub.read_epub(path)
        titles = self._toc_titles(book)

        chapters: List[Chapter] = []
        for idref, *_ in book.spine:
            item = book.get_item_with_id(idref)
            if item is None or item.get_type() != ebooklib.ITEM_DOCUMENT:
                LOGGER.debug("Skipping spine entry without document: %s", idref)
                continue
            text = self._html_to_text(item.get_content().decode("utf-8", errors="ignore"))
            if not text:
                LOGGER.debug("Skipping empty spine item: %s", item.get_name())
                continue
            title = (
                titles.get(item.get_name())
                or self._safe_title(getattr(item, "title", ""))
                or f"Chapter {len(chapters) + 1}"
            )
            chapters.append(Chapter(index=len(chapters), title=title, content=text))
        return chapters

    def _toc_titles(self, book: epub.EpubBook) -> Dict[str, str]:
        titles: Dict[str, str] = {}
        for entry in self._flatten_toc(book.toc):
            href = entry.href.split("#", 1)[0]
            if entry.title and href not in titles:
                titles[href] = entry.title
        return titles

    def _flatten_toc(self, toc: Iterable) -> Iterable[TocEntry]:
        for node in toc:
            if isinstance(node, (list, tuple)) and node:
                first, *rest = node
                if hasattr(first, "title") and hasattr(first, "href"):
                    yield TocEntry(title=self._safe_title(first.title), href=first.href)
                for child in rest:
                    yield from self._flatten_toc(child if isinstance(child, (list, tuple)) else [child])
            elif hasattr(node, "title") and hasattr(node, "href"):
                yield TocEntry(title=self._safe_title(node.title), href=node.href)

    def _safe_title(self, value) -> str:
        if isinstance(value, bytes):
            value = value.decode("utf-8", errors="ignore")
        return re.sub(r"\s+", " ", value or "").strip()

    def _html_to_text(self, html: str) -> str:
        html = re.sub(r"<(script|style|head)\b[^>]*>.*?</\1>", "", html, flags=re.S | re.I)
        text = re.sub(r"<[^>]+>", " ", html)
        text = re.sub(r"\s+", " ", text)
        return text.strip()


__all__ = ["EpubLoader", "PANDOC_FALLBACK_WARNING"]
