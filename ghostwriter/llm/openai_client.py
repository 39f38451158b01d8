"""OpenAI chat-completions backend."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from openai import OpenAI

from ..errors import MissingCredentialsError
from ..ingest import Chapter
from .base import ParaphraseOptions, ParaphraseResult, build_prompt

LOGGER = logging.getLogger(__name__)


class OpenAIClient:
    name = "openai"

    def __init__(self, api_key: str, *, client: Optional[Any] = None) -> None:
        if not api_key:
            raise MissingCredentialsError(
                "API key is required for OpenAI. Provide via --api-key or OPENAI_API_KEY."
            )
        self._client = client or OpenAI(api_key=api_key)

    def paraphrase(self, chapter: Chapter, options: ParaphraseOptions) -> ParaphraseResult:
        request: Dict[str, Any] = {
            "model": options.model,
            "messages": [{"role": "user", "content": build_prompt(options.prompt_header, chapter)}],
            "temperature": options.temperature,
        }
        if options.top_p is not None:
            request["top_p"] = options.top_p
        if options.max_tokens is not None:
            request["max_tokens"] = options.max_tokens
        LOGGER.debug("OpenAI request for '%s' (%d chars)", chapter.title, len(chapter.content))
        response = self._client.chat.completions.create(**request)
        content = response.choices[0].message.content if response.choices else None
        return ParaphraseResult(output=(content or "").strip())


__all__ = ["OpenAIClient"]
