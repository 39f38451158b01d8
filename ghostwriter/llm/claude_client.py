"""Anthropic Claude messages backend."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import anthropic

from ..errors import MissingCredentialsError
from ..ingest import Chapter
from .base import ParaphraseOptions, ParaphraseResult, build_prompt

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_TOKENS = 1200


class ClaudeClient:
    name = "claude"

    def __init__(self, api_key: str, *, client: Optional[Any] = None) -> None:
        if not api_key:
            raise MissingCredentialsError(
                "API key is required for Claude. Provide via --api-key or ANTHROPIC_API_KEY."
            )
        self._client = client or anthropic.Anthropic(api_key=api_key)

    def paraphrase(self, chapter: Chapter, options: ParaphraseOptions) -> ParaphraseResult:
        request: Dict[str, Any] = {
            "model": options.model,
            "max_tokens": options.max_tokens or DEFAULT_MAX_TOKENS,
            "temperature": options.temperature,
            "messages": [{"role": "user", "content": build_prompt(options.prompt_header, chapter)}],
        }
        if options.top_p is not None:
            request["top_p"] = options.top_p
        LOGGER.debug("Claude request for '%s' (%d chars)", chapter.title, len(chapter.content))
        response = self._client.messages.create(**request)
        text = "".join(getattr(block, "text", "") for block in response.content)
        return ParaphraseResult(output=text.strip())


__all__ = ["ClaudeClient", "DEFAULT_MAX_TOKENS"]
