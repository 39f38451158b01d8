"""Thin wrapper around the ``pandoc`` binary used as a last-resort extractor."""

from __future__ import annotations

import logging
import subprocess
from typing import Optional

from ..errors import ConversionFailedError, ConverterNotFoundError, ConverterTimeoutError

LOGGER = logging.getLogger(__name__)

PANDOC_TIMEOUT_SECONDS = 60
PROBE_TIMEOUT_SECONDS = 5


def has_pandoc(pandoc_path: Optional[str] = None) -> bool:
    """Return True when the pandoc binary answers ``-v`` successfully."""

    try:
        subprocess.run(
            [pandoc_path or "pandoc", "-v"],
            capture_output=True,
            check=True,
            timeout=PROBE_TIMEOUT_SECONDS,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        LOGGER.debug("pandoc check failed: %s", exc)
        return False
    return True


def convert_to_text(input_path: str, pandoc_path: Optional[str] = None) -> str:
    """Convert *input_path* to plain text with pandoc."""

    binary = pandoc_path or "pandoc"
    LOGGER.debug("Running %s on %s", binary, input_path)
    try:
        completed = subprocess.run(
            [binary, "-t", "plain", str(input_path)],
            capture_output=True,
            check=True,
            timeout=PANDOC_TIMEOUT_SECONDS,
        )
    except FileNotFoundError as exc:
        raise ConverterNotFoundError(
            "Pandoc not found. Install pandoc or provide --pandoc-path."
        ) from exc
    except subprocess.TimeoutExpired as exc:
        raise ConverterTimeoutError(
            f"Pandoc conversion timed out after {PANDOC_TIMEOUT_SECONDS} seconds. "
            "The file may be too large or in an unsupported format."
        ) from exc
    except subprocess.CalledProcessError as exc:
        stderr = (exc.stderr or b"").decode("utf-8", errors="replace").strip()
        raise ConversionFailedError(
            f"Pandoc conversion failed: {stderr or f'exit status {exc.returncode}'}"
        ) from exc
    except OSError as exc:
        raise ConversionFailedError(f"Pandoc conversion failed: {exc}") from exc
    return completed.stdout.decode("utf-8", errors="replace")


__all__ = ["PANDOC_TIMEOUT_SECONDS", "convert_to_text", "has_pandoc"]
