"""Content ingestion helpers: turn an ebook into an ordered chapter list."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..errors import UnsupportedFormatError

SUPPORTED_FORMATS = ("pdf", "epub", "txt", "md", "mobi")
DEFAULT_MD_HEADING_LEVEL = 2


@dataclass
class Chapter:
    """Representation of a logical chapter extracted from a book."""

    index: int
    title: str
    content: str


@dataclass
class SplitResult:
    """Chapters in reading order plus the degraded paths taken to get them."""

    chapters: List[Chapter] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass
class SplitOptions:
    """Options that control how an ebook is split into chapters."""

    format: Optional[str] = None
    pandoc_path: Optional[str] = None
    max_chars_per_chapter: Optional[int] = None
    md_heading_level: Optional[int] = None
    # When True a single detected heading is trusted as real structure.
    trust_single_heading: bool = False

    def __post_init__(self) -> None:
        if self.format is not None:
            self.format = self.format.lower().lstrip(".")
            if self.format == "markdown":
                self.format = "md"
            if self.format not in SUPPORTED_FORMATS:
                raise UnsupportedFormatError(
                    f"Unsupported format: {self.format}. "
                    f"Expected one of: {', '.join(SUPPORTED_FORMATS)}."
                )
        if self.max_chars_per_chapter is not None and self.max_chars_per_chapter <= 0:
            raise ValueError("max_chars_per_chapter must be positive")

    @property
    def min_structured_chapters(self) -> int:
        return 1 if self.trust_single_heading else 2


__all__ = [
    "Chapter",
    "DEFAULT_MD_HEADING_LEVEL",
    "SUPPORTED_FORMATS",
    "SplitOptions",
    "SplitResult",
]
