"""Split and paraphrase stages shared by the CLI and library callers.

Splitting writes one numbered file per chapter; paraphrasing reloads that
directory and rewrites each chapter strictly in order, one LLM call at a time,
writing every ``.out.txt`` as soon as its chapter is done.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
import os
from pathlib import Path
import time
from typing import Callable, List, Optional

from .chunking import chunk_text
from .errors import InputValidationError
from .ingest import Chapter, SplitOptions, SplitResult
from .ingest.base import Loader
from .ingest.registry import loader_for
from .llm.base import LLMClient, ParaphraseOptions
from .store import chapter_file_name, load_chapters, save_chapters, save_paraphrased

logger = logging.getLogger(__name__)

MIN_CHAPTER_LENGTH_FOR_LLM = 80


@dataclass(frozen=True)
class ProgressEvent:
    """Progress notice emitted while paraphrasing a directory."""

    kind: str  # started|chapter_started|chapter_finished|finished
    position: int
    total: int
    title: str = ""
    path: Optional[Path] = None


ProgressCallback = Callable[[ProgressEvent], None]


@dataclass
class ParaphraseSummary:
    """Outcome returned after a paraphrase run."""

    output_dir: Path
    written: List[Path] = field(default_factory=list)
    llm_calls: int = 0
    skipped_chapters: int = 0
    elapsed_seconds: float = 0.0


def validate_input_file(path: str | Path) -> Path:
    path = Path(path)
    try:
        stats = path.stat()
    except FileNotFoundError:
        raise InputValidationError(f"File not found: {path}") from None
    except PermissionError:
        raise InputValidationError(f"Permission denied: {path}") from None
    if not path.is_file():
        raise InputValidationError(f"Path is not a file: {path}")
    if stats.st_size == 0:
        raise InputValidationError(f"File is empty: {path}")
    if not os.access(path, os.R_OK):
        raise InputValidationError(f"Permission denied: {path}")
    return path


def split_file(
    input_path: str | Path,
    output_dir: str | Path,
    options: Optional[SplitOptions] = None,
    *,
    loader: Optional[Loader] = None,
) -> SplitResult:
    """Split *input_path* into chapters and save them under *output_dir*."""

    options = options or SplitOptions()
    path = validate_input_file(input_path)
    loader = loader or loader_for(path, options.format)
    logger.debug("Splitting %s with %s", path, type(loader).__name__)

    result = loader.split(path, options)
    save_chapters(result.chapters, output_dir)
    logger.info(
        "Prepared %d chapters from %s (%d warnings)",
        len(result.chapters),
        path,
        len(result.warnings),
    )
    return result


class Paraphraser:
    """Drive one LLM client over chapters, chunking the long ones."""

    def __init__(
        self,
        client: LLMClient,
        options: ParaphraseOptions,
        *,
        on_progress: Optional[ProgressCallback] = None,
    ) -> None:
        self.client = client
        self.options = options
        self.on_progress = on_progress
        self.llm_calls = 0

    def paraphrase_chapter(self, chapter: Chapter) -> str:
        trimmed = chapter.content.strip()
        if not trimmed:
            return ""
        if len(trimmed) < MIN_CHAPTER_LENGTH_FOR_LLM:
            return trimmed

        if len(chapter.content) <= self.options.max_chars_per_call:
            return self._call(chapter)

        pieces = chunk_text(chapter.content, self.options.max_chars_per_call)
        logger.debug("Chapter '%s' split into %d pieces", chapter.title, len(pieces))
        outputs = [
            self._call(
                replace(
                    chapter,
                    title=f"{chapter.title} (part {number}/{len(pieces)})",
                    content=piece,
                )
            )
            for number, piece in enumerate(pieces, start=1)
        ]
        return "\n\n".join(outputs)

    def paraphrase_directory(
        self, chapters_dir: str | Path, output_dir: str | Path
    ) -> ParaphraseSummary:
        start_time = time.perf_counter()
        chapters = load_chapters(chapters_dir)
        total = len(chapters)
        summary = ParaphraseSummary(output_dir=Path(output_dir))
        calls_before = self.llm_calls
        logger.info(
            "Starting paraphrase of %d chapter(s) from %s into %s",
            total,
            chapters_dir,
            output_dir,
        )
        self._emit(ProgressEvent(kind="started", position=0, total=total))

        for position, chapter in enumerate(chapters, start=1):
            logger.info(
                'Paraphrasing chapter %d/%d: "%s" (index %d)',
                position,
                total,
                chapter.title,
                chapter.index,
            )
            self._emit(
                ProgressEvent(
                    kind="chapter_started", position=position, total=total, title=chapter.title
                )
            )
            chapter_calls = self.llm_calls
            output = self.paraphrase_chapter(chapter)
            if self.llm_calls == chapter_calls:
                summary.skipped_chapters += 1
            path = save_paraphrased(chapter.index, output, output_dir)
            summary.written.append(path)
            logger.info(
                "Finished chapter %d/%d: wrote %s",
                position,
                total,
                chapter_file_name(chapter.index, ".out.txt"),
            )
            self._emit(
                ProgressEvent(
                    kind="chapter_finished",
                    position=position,
                    total=total,
                    title=chapter.title,
                    path=path,
                )
            )

        summary.llm_calls = self.llm_calls - calls_before
        summary.elapsed_seconds = time.perf_counter() - start_time
        self._emit(ProgressEvent(kind="finished", position=total, total=total))
        logger.info("Finished paraphrasing in %.2fs", summary.elapsed_seconds)
        return summary

    def _call(self, chapter: Chapter) -> str:
        self.llm_calls += 1
        return self.client.paraphrase(chapter, self.options).output

    def _emit(self, event: ProgressEvent) -> None:
        if self.on_progress:
            self.on_progress(event)


def paraphrase_directory(
    chapters_dir: str | Path,
    output_dir: str | Path,
    client: LLMClient,
    options: ParaphraseOptions,
    *,
    on_progress: Optional[ProgressCallback] = None,
) -> ParaphraseSummary:
    return Paraphraser(client, options, on_progress=on_progress).paraphrase_directory(
        chapters_dir, output_dir
    )


__all__ = [
    "MIN_CHAPTER_LENGTH_FOR_LLM",
    "ParaphraseSummary",
    "Paraphraser",
    "ProgressCallback",
    "ProgressEvent",
    "paraphrase_directory",
    "split_file",
    "validate_input_file",
]
