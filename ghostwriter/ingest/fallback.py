"""Heuristic chapter splitter used when no richer structure is available."""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from . import Chapter, SplitOptions, SplitResult

LOGGER = logging.getLogger(__name__)

HEADING_RE = re.compile(r"^(chapter|chap\.?|ch\.?|section)\s+[0-9ivx]+", re.I)
DEFAULT_MAX_CHARS_PER_CHAPTER = 10_000
MIN_CHARS_PER_CHAPTER = 1_000
NO_HEADINGS_WARNING = "Headings not detected; using size-based chunks."


def normalize_text(text: str) -> str:
    return text.replace("\r\n", "\n").strip()


def split_on_headings(lines: List[str]) -> Tuple[List[Chapter], int]:
    """Split *lines* on chapter/section heading lines.

    Returns the non-empty chapters and the number of heading lines seen.
    Content before the first heading is titled ``Introduction``.
    """

    chapters: List[Chapter] = []
    current_title = "Introduction"
    current_lines: List[str] = []
    headings = 0

    def flush() -> None:
        nonlocal current_lines
        content = "\n".join(current_lines).strip()
        if content:
            chapters.append(Chapter(index=len(chapters), title=current_title, content=content))
        current_lines = []

    for line in lines:
        stripped = line.strip()
        if HEADING_RE.match(stripped):
            flush()
            current_title = stripped
            headings += 1
            continue
        current_lines.append(line)
    flush()
    return chapters, headings


def split_by_size(text: str, max_chars: Optional[int] = None) -> List[Chapter]:
    """Cut *text* into ``Part n`` chapters of at most *max_chars* characters."""

    size = max(MIN_CHARS_PER_CHAPTER, max_chars or DEFAULT_MAX_CHARS_PER_CHAPTER)
    chapters: List[Chapter] = []
    for start in range(0, len(text), size):
        content = text[start : start + size].strip()
        if not content:
            continue
        index = len(chapters)
        chapters.append(Chapter(index=index, title=f"Part {index + 1}", content=content))
    return chapters


def split_with_fallback(text: str, options: Optional[SplitOptions] = None) -> SplitResult:
    """Split raw text on headings, or by size when headings are not trusted."""

    options = options or SplitOptions()
    normalized = normalize_text(text)
    if not normalized:
        return SplitResult()

    by_heading, headings = split_on_headings(normalized.split("\n"))
    if headings and len(by_heading) >= options.min_structured_chapters:
        LOGGER.debug("Detected %d headings, %d chapters", headings, len(by_heading))
        return SplitResult(chapters=by_heading)

    LOGGER.warning(NO_HEADINGS_WARNING)
    return SplitResult(
        chapters=split_by_size(normalized, options.max_chars_per_chapter),
        warnings=[NO_HEADINGS_WARNING],
    )


__all__ = [
    "DEFAULT_MAX_CHARS_PER_CHAPTER",
    "HEADING_RE",
    "NO_HEADINGS_WARNING",
    "normalize_text",
    "split_by_size",
    "split_on_headings",
    "split_with_fallback",
]
