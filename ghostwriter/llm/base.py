"""Provider-neutral contract for paraphrasing a chapter with an LLM."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from ..ingest import Chapter

DEFAULT_PROMPT_HEADER = (
    "You are writer assistant that helps the user to summarize and paraphrase the "
    "provided content. Do not invent details that are not supported by the chapter. "
    "If you answer to academic or analytical content, refer to specific parts, include "
    "simple inline references (for example: page or section numbers). Follow the "
    "content's style, tone and language."
)
DEFAULT_MAX_CHARS_PER_CALL = 8000


@dataclass
class ParaphraseOptions:
    """Sampling and sizing options passed to every provider call."""

    model: str
    temperature: float = 0.4
    top_p: Optional[float] = None
    max_tokens: Optional[int] = None
    max_chars_per_call: int = DEFAULT_MAX_CHARS_PER_CALL
    prompt_header: str = DEFAULT_PROMPT_HEADER

    def __post_init__(self) -> None:
        if not self.model:
            raise ValueError("model must be provided")
        if self.temperature < 0:
            raise ValueError("temperature must not be negative")
        if self.max_chars_per_call <= 0:
            raise ValueError("max_chars_per_call must be positive")
        if self.max_tokens is not None and self.max_tokens <= 0:
            raise ValueError("max_tokens must be positive")


@dataclass
class ParaphraseResult:
    output: str


class LLMClient(Protocol):
    name: str

    def paraphrase(self, chapter: Chapter, options: ParaphraseOptions) -> ParaphraseResult:
        ...


def build_prompt(header: str, chapter: Chapter) -> str:
    return f"{header}\n\nChapter title: {chapter.title}\n\nContent:\n{chapter.content}"


__all__ = [
    "DEFAULT_MAX_CHARS_PER_CALL",
    "DEFAULT_PROMPT_HEADER",
    "LLMClient",
    "ParaphraseOptions",
    "ParaphraseResult",
    "build_prompt",
]
