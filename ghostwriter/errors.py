"""Exception hierarchy shared by the splitting and paraphrasing stages."""

from __future__ import annotations


class GhostwriterError(Exception):
    """Base class for every error raised deliberately by ghostwriter."""


class InputValidationError(GhostwriterError):
    """The input path cannot be split (missing, empty, unreadable...)."""


class UnsupportedFormatError(GhostwriterError, ValueError):
    """No loader is registered for the requested or detected format."""


class ConverterError(GhostwriterError):
    """The external converter utility (pandoc) could not produce text."""


class ConverterNotFoundError(ConverterError):
    pass


class ConverterTimeoutError(ConverterError):
    pass


class ConversionFailedError(ConverterError):
    pass


class MissingCredentialsError(GhostwriterError, ValueError):
    """An LLM client was constructed without an API key."""


__all__ = [
    "ConversionFailedError",
    "ConverterError",
    "ConverterNotFoundError",
    "ConverterTimeoutError",
    "GhostwriterError",
    "InputValidationError",
    "MissingCredentialsError",
    "UnsupportedFormatError",
]
