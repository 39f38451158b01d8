"""LLM provider clients."""

from __future__ import annotations

from .base import (
    DEFAULT_MAX_CHARS_PER_CALL,
    DEFAULT_PROMPT_HEADER,
    LLMClient,
    ParaphraseOptions,
    ParaphraseResult,
    build_prompt,
)

PROVIDERS = ("openai", "claude")
DEFAULT_MODELS = {
    "openai": "gpt-4o-mini",
    "claude": "claude-3-haiku-20240307",
}
API_KEY_ENV = {
    "openai": "OPENAI_API_KEY",
    "claude": "ANTHROPIC_API_KEY",
}


def create_client(provider: str, api_key: str) -> LLMClient:
    """Build the client for *provider*; raises on an empty *api_key*."""

    if provider == "claude":
        from .claude_client import ClaudeClient

        return ClaudeClient(api_key)
    if provider == "openai":
        from .openai_client import OpenAIClient

        return OpenAIClient(api_key)
    raise ValueError(f"Unknown provider: {provider}. Expected one of: {', '.join(PROVIDERS)}")


__all__ = [
    "API_KEY_ENV",
    "DEFAULT_MAX_CHARS_PER_CALL",
    "DEFAULT_MODELS",
    "DEFAULT_PROMPT_HEADER",
    "LLMClient",
    "PROVIDERS",
    "ParaphraseOptions",
    "ParaphraseResult",
    "build_prompt",
    "create_client",
]
