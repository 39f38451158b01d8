"""Command line interface for ghostwriter."""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from . import __version__
from .ingest import SUPPORTED_FORMATS, SplitOptions
from .llm import API_KEY_ENV, DEFAULT_MODELS, PROVIDERS, ParaphraseOptions, create_client
from .llm.base import DEFAULT_MAX_CHARS_PER_CALL, DEFAULT_PROMPT_HEADER
from .pipeline import Paraphraser, split_file

LOGGER = logging.getLogger(__name__)


def _common_options() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--provider", choices=PROVIDERS, default="openai", help="LLM provider")
    common.add_argument(
        "--api-key",
        help="API key for the selected provider (defaults to OPENAI_API_KEY or ANTHROPIC_API_KEY)",
    )
    common.add_argument("--model-name", help="Underlying model name")
    common.add_argument("--temperature", type=float, default=0.4, help="Sampling temperature")
    common.add_argument("--top-p", type=float, help="Top-p nucleus sampling")
    common.add_argument("--max-tokens", type=int, help="Maximum tokens to generate per LLM call")
    common.add_argument(
        "--max-chars-per-call",
        type=int,
        default=DEFAULT_MAX_CHARS_PER_CALL,
        help="Max characters to send per LLM call",
    )
    common.add_argument(
        "--prompt-header",
        default=DEFAULT_PROMPT_HEADER,
        help="Instruction used to guide the paraphrased output",
    )
    common.add_argument("--pandoc-path", help="Path to the pandoc binary")
    common.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    common.add_argument("-q", "--quiet", action="store_true", help="Only print warnings and errors")
    return common


def _add_split_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("input_path", type=Path, help="Input ebook (pdf|epub|txt|md|mobi)")
    parser.add_argument("-f", "--format", choices=SUPPORTED_FORMATS, help="Force the input format")
    parser.add_argument(
        "--md-heading-level",
        type=int,
        default=2,
        help="Markdown heading level that starts a new chapter (1-6)",
    )
    parser.add_argument(
        "--max-chars-per-chapter",
        type=int,
        help="Chapter size used when no headings are detected",
    )


def build_parser() -> argparse.ArgumentParser:
    common = _common_options()
    parser = argparse.ArgumentParser(
        prog="ghostwriter",
        description="Split ebooks per chapter and paraphrase them with an LLM.",
    )
    parser.add_argument("--version", action="version", version=f"ghostwriter {__version__}")
    commands = parser.add_subparsers(dest="command", required=True)

    split = commands.add_parser("split", parents=[common], help="Write chapter files")
    _add_split_options(split)
    split.add_argument("-o", "--output", type=Path, required=True, help="Chapter directory")

    paraphrase = commands.add_parser(
        "paraphrase", parents=[common], help="Paraphrase a chapter directory"
    )
    paraphrase.add_argument("chapters_dir", type=Path, help="Directory of chapter txt files")
    paraphrase.add_argument("-o", "--output", type=Path, required=True, help="Output directory")

    run = commands.add_parser("run", parents=[common], help="Split then paraphrase")
    _add_split_options(run)
    run.add_argument("-o", "--output", type=Path, required=True, help="Output directory for both steps")
    return parser


def configure_logging(verbose: bool, quiet: bool) -> None:
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def create_split_options(namespace: argparse.Namespace) -> SplitOptions:
    return SplitOptions(
        format=namespace.format,
        pandoc_path=namespace.pandoc_path,
        max_chars_per_chapter=namespace.max_chars_per_chapter,
        md_heading_level=namespace.md_heading_level,
    )


def create_paraphrase_options(namespace: argparse.Namespace) -> ParaphraseOptions:
    return ParaphraseOptions(
        model=namespace.model_name or DEFAULT_MODELS[namespace.provider],
        temperature=namespace.temperature,
        top_p=namespace.top_p,
        max_tokens=namespace.max_tokens,
        max_chars_per_call=namespace.max_chars_per_call,
        prompt_header=namespace.prompt_header,
    )


def resolve_api_key(namespace: argparse.Namespace) -> str:
    return namespace.api_key or os.getenv(API_KEY_ENV[namespace.provider], "")


def handle_split(namespace: argparse.Namespace) -> None:
    result = split_file(namespace.input_path, namespace.output, create_split_options(namespace))
    print(f"Chapters written to {namespace.output}. Total: {len(result.chapters)}")


def handle_paraphrase(namespace: argparse.Namespace, chapters_dir: Path) -> None:
    client = create_client(namespace.provider, resolve_api_key(namespace))
    paraphraser = Paraphraser(client, create_paraphrase_options(namespace))
    summary = paraphraser.paraphrase_directory(chapters_dir, namespace.output)
    print(f"Paraphrased {len(summary.written)} chapters into {summary.output_dir}")
    print(f"LLM calls: {summary.llm_calls}, elapsed: {summary.elapsed_seconds:.2f}s")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.quiet)
    load_dotenv()
    try:
        if args.command == "split":
            handle_split(args)
        elif args.command == "paraphrase":
            handle_paraphrase(args, args.chapters_dir)
        else:
            handle_split(args)
            handle_paraphrase(args, args.output)
    except Exception as exc:  # pragma: no cover - CLI safety net
        LOGGER.error(str(exc))
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
