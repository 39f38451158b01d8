"""Plain text and Markdown ingestion."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Optional

from . import DEFAULT_MD_HEADING_LEVEL, Chapter, SplitOptions, SplitResult
from .base import Loader, read_text
from .fallback import split_with_fallback

LOGGER = logging.getLogger(__name__)

_MD_HEADING_RE = re.compile(r"^(#{1,6})\s+")
MARKDOWN_FALLBACK_WARNING = "Markdown headings not detected; using generic fallback splitter."


class TextLoader(Loader):
    """Hand the raw file text straight to the fallback segmenter."""

    format = "txt"
    extensions = (".txt",)

    def split(self, path: str | Path, options: SplitOptions) -> SplitResult:
        return split_with_fallback(read_text(path), options)


def resolve_heading_level(level: Optional[int]) -> int:
    if level is None:
        return DEFAULT_MD_HEADING_LEVEL
    if not 1 <= level <= 6:
        LOGGER.debug(
            "Markdown heading level %s out of range; using %d", level, DEFAULT_MD_HEADING_LEVEL
        )
        return DEFAULT_MD_HEADING_LEVEL
    return level


def split_markdown(text: str, heading_level: int = DEFAULT_MD_HEADING_LEVEL) -> List[Chapter]:
    """Section Markdown on ATX headings of level <= *heading_level*."""

    chapters: List[Chapter] = []
    current_title = "Introduction"
    current_lines: List[str] = []

    def flush() -> None:
        nonlocal current_lines
        content = "\n".join(current_lines).strip()
        if content:
            chapters.append(Chapter(index=len(chapters), title=current_title, content=content))
        current_lines = []

    for line in text.replace("\r\n", "\n").split("\n"):
        stripped = line.strip()
        match = _MD_HEADING_RE.match(stripped)
        if match and len(match.group(1)) <= heading_level:
            flush()
            current_title = stripped[match.end():].strip() or "Untitled section"
            continue
        current_lines.append(line)
    flush()
    return chapters


class MarkdownLoader(Loader):
    """Split Markdown on headings, delegating to the fallback segmenter."""

    format = "md"
    extensions = (".md", ".markdown")

    def split(self, path: str | Path, options: SplitOptions) -> SplitResult:
        raw = read_text(path)
        level = resolve_heading_level(options.md_heading_level)
        chapters = split_markdown(raw, level)
        if len(chapters) >= options.min_structured_chapters and _has_heading(raw, level):
            return SplitResult(chapters=chapters)

        LOGGER.warning(MARKDOWN_FALLBACK_WARNING)
        fallback = split_with_fallback(raw, options)
        return SplitResult(
            chapters=fallback.chapters,
            warnings=[MARKDOWN_FALLBACK_WARNING, *fallback.warnings],
        )


def _has_heading(text: str, level: int) -> bool:
    for line in text.splitlines():
        match = _MD_HEADING_RE.match(line.strip())
        if match and len(match.group(1)) <= level:
            return True
    return False


__all__ = [
    "MARKDOWN_FALLBACK_WARNING",
    "MarkdownLoader",
    "TextLoader",
    "resolve_heading_level",
    "split_markdown",
]
