"""Split ebooks into chapters and paraphrase them chapter by chapter."""

from __future__ import annotations

__version__ = "0.1.0"

from .chunking import chunk_text
from .ingest import Chapter, SplitOptions, SplitResult
from .ingest.fallback import split_with_fallback
from .llm import ParaphraseOptions, ParaphraseResult, create_client
from .pipeline import ParaphraseSummary, Paraphraser, ProgressEvent, paraphrase_directory, split_file
from .store import load_chapters, save_chapters, save_paraphrased

__all__ = [
    "Chapter",
    "ParaphraseOptions",
    "ParaphraseResult",
    "ParaphraseSummary",
    "Paraphraser",
    "ProgressEvent",
    "SplitOptions",
    "SplitResult",
    "chunk_text",
    "create_client",
    "load_chapters",
    "paraphrase_directory",
    "save_chapters",
    "save_paraphrased",
    "split_file",
    "split_with_fallback",
]
