"""Split one chapter into overlapping pieces sized for a single LLM call."""

from __future__ import annotations

from typing import List

MIN_CHUNK_SIZE = 2000
DEFAULT_OVERLAP = 300


def chunk_text(content: str, max_chars: int, overlap: int = DEFAULT_OVERLAP) -> List[str]:
    """Slide a window of ``max(max_chars, 2000)`` characters over *content*.

    Consecutive windows share up to ``overlap`` characters (never more than
    half a window) so the model keeps some context across piece boundaries.
    Pieces are trimmed and empty ones dropped.
    """

    safe_max = max(max_chars, MIN_CHUNK_SIZE)
    safe_overlap = max(0, min(overlap, safe_max // 2))
    pieces: List[str] = []
    start = 0
    length = len(content)
    while start < length:
        end = min(start + safe_max, length)
        piece = content[start:end].strip()
        if piece:
            pieces.append(piece)
        if end >= length:
            break
        next_start = end - safe_overlap
        start = next_start if next_start > start else end
    return pieces


__all__ = ["DEFAULT_OVERLAP", "MIN_CHUNK_SIZE", "chunk_text"]
