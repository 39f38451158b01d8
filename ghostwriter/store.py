"""On-disk chapter protocol shared by the split and paraphrase stages.

Each chapter lives in ``chapter-NN.txt`` as ``"{title}\\n\\n{content}"``;
paraphrased output goes to ``chapter-NN.out.txt`` in the same naming scheme.
The ``.out.txt`` suffix is reserved so both can share a directory.
"""

from __future__ import annotations

import logging
from pathlib import Path
import re
from typing import Iterable, List

from .ingest import Chapter

LOGGER = logging.getLogger(__name__)

CHAPTER_SUFFIX = ".txt"
OUTPUT_SUFFIX = ".out.txt"


def chapter_file_name(index: int, suffix: str = CHAPTER_SUFFIX) -> str:
    return f"chapter-{index + 1:02d}{suffix}"


def _persisted_title(chapter: Chapter) -> str:
    title = re.sub(r"\s+", " ", chapter.title or "").strip()
    return title or f"Chapter {chapter.index + 1}"


def save_chapters(chapters: Iterable[Chapter], output_dir: str | Path) -> List[Path]:
    """Write one file per chapter and return the paths in chapter order."""

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    for chapter in chapters:
        path = output_dir / chapter_file_name(chapter.index)
        path.write_text(f"{_persisted_title(chapter)}\n\n{chapter.content}", encoding="utf-8")
        written.append(path)
    LOGGER.debug("Saved %d chapter files to %s", len(written), output_dir)
    return written


def chapter_files(input_dir: str | Path) -> List[Path]:
    files = [
        path
        for path in Path(input_dir).iterdir()
        if path.is_file()
        and path.name.endswith(CHAPTER_SUFFIX)
        and not path.name.endswith(OUTPUT_SUFFIX)
    ]
    return sorted(files, key=lambda path: path.name)


def load_chapters(input_dir: str | Path) -> List[Chapter]:
    """Load chapter files in name order, re-indexed from 0."""

    chapters: List[Chapter] = []
    for idx, path in enumerate(chapter_files(input_dir)):
        title_line, _, rest = path.read_text(encoding="utf-8").partition("\n")
        chapters.append(
            Chapter(
                index=idx,
                title=title_line.strip() or f"Chapter {idx + 1}",
                content=rest.strip(),
            )
        )
    return chapters


def save_paraphrased(index: int, output: str, output_dir: str | Path) -> Path:
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / chapter_file_name(index, OUTPUT_SUFFIX)
    path.write_text(output, encoding="utf-8")
    return path


__all__ = [
    "chapter_file_name",
    "chapter_files",
    "load_chapters",
    "save_chapters",
    "save_paraphrased",
]
